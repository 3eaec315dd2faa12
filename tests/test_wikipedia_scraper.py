from medal_table.scrapers.wikipedia_scraper import clean_team_name, parse_wikipedia_page


def test_parses_medal_table(wiki_html):
    teams = parse_wikipedia_page(wiki_html)
    assert [t.name for t in teams] == ["Norway", "Italy", "Germany"]
    norway = teams[0]
    assert (norway.code, norway.gold, norway.silver, norway.bronze, norway.total) == (
        "NOR", 12, 7, 7, 26,
    )
    assert teams[1].code == "ITA"


def test_totals_and_header_rows_are_ignored(wiki_html):
    assert len(parse_wikipedia_page(wiki_html)) == 3


def test_missing_table_returns_empty():
    assert parse_wikipedia_page('<table class="wikitable"><tr><td>1</td></tr></table>') == []


def test_clean_team_name():
    raw = '<span class="flagicon"><img/></span>&nbsp;<a href="/wiki/C">Côte d&#39;Ivoire</a>*<sup>[b]</sup>'
    assert clean_team_name(raw) == "Côte d'Ivoire"
