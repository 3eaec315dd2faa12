import pytest

API_URL = "https://api.example.test/medals"
PAGE_URL = "https://www.example.test/olympics/medals"
WIKI_URL = "https://wiki.example.test/wiki/Medal_table"


@pytest.fixture
def api_payload():
    return {
        "medalStandings": [
            {
                "rows": [
                    {"cells": [{"text": "Norway"}, "12", "7", "7", "26"]},
                    {"cells": ["Germany", 9, 9, 9, 27]},
                    {"cells": [{"text": "Italy"}, "10", "5", "3"]},
                ]
            }
        ]
    }


@pytest.fixture
def embedded_json_html():
    return (
        "<html><head><script>window.__espnfitt__={\"page\":{\"content\":{"
        "\"medalStandings\":[{\"rows\":["
        "{\"cells\":[{\"text\":\"Italy\"},\"10\",\"5\",\"3\",\"18\"]},"
        "{\"cells\":[{\"text\":\"Norway\"},\"12\",\"7\",\"7\",\"26\"]}"
        "]}],\"medalLeaders\":[]}}};</script></head><body></body></html>"
    )


@pytest.fixture
def inline_text_html():
    return (
        "<p>Image: Flag of Norway NOR Norway | 12 | 7 | 7 | 26</p>\n"
        "<p>Image: Flag of United States USA United States | 9 | 8 | 7 | 24</p>\n"
    )


@pytest.fixture
def table_rows_html():
    return (
        "<table><tbody>"
        '<tr class="Table__TR"><td class="flag" data-text="NOR"><img src="nor.png"/></td>'
        '<td class="name">Norway</td><td>12</td><td>7</td><td>7</td></tr>'
        '<tr class="Table__TR"><td class="flag" data-text="GER"><img src="ger.png"/></td>'
        '<td class="name">Germany</td><td>9</td><td>9</td><td>9</td></tr>'
        "</tbody></table>"
    )


@pytest.fixture
def wiki_html():
    return """
<html><body>
<table class="wikitable"><tr><td>Unrelated</td></tr></table>
<table class="wikitable sortable plainrowheaders jquery-tablesorter" style="text-align:center">
<tbody>
<tr><th scope="col">Rank</th><th scope="col">NOC</th><th scope="col">Gold</th><th scope="col">Silver</th><th scope="col">Bronze</th><th scope="col">Total</th></tr>
<tr><td>1</td><th scope="row" style="background-color:#f8f9fa;text-align:left"><span class="flagicon"><img src="nor.png"/></span>&nbsp;<a href="/wiki/Norway">Norway</a></th><td>12</td><td>7</td><td>7</td><td>26</td></tr>
<tr><td>2</td><th scope="row"><span class="flagicon"><img src="ita.png"/></span>&nbsp;<a href="/wiki/Italy">Italy</a>*<sup>[a]</sup></th><td>10</td><td>5</td><td>3</td><td>18</td></tr>
<tr><th scope="row"><a href="/wiki/Germany">Germany</a></th><td>10</td><td>5</td><td>3</td><td>18</td></tr>
<tr><th colspan="2">Totals (3 entries)</th><td>32</td><td>17</td><td>13</td><td>62</td></tr>
</tbody></table>
</body></html>
"""
