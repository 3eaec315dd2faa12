from enum import Enum


class SourceTier(str, Enum):
    API = "api"  # Structured JSON endpoint
    PAGE = "page"  # Primary HTML medals page
    WIKI = "wiki"  # Secondary wiki-style medal table


class FetchMode(str, Enum):
    JSON = "json"
    TEXT = "text"
