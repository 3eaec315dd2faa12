from medal_table.calculation.ranking import rank_teams
from medal_table.models.team import Team


def make(name, gold, silver, bronze, total=None):
    return Team(code=name[:3].upper(), name=name, gold=gold, silver=silver, bronze=bronze, total=total)


def test_score_outranks_gold_count():
    a = make("Alpha", 10, 5, 3)
    b = make("Bravo", 9, 9, 9)
    assert a.score == 37.5
    assert b.score == 49.5
    assert rank_teams([a, b]) == [b, a]


def test_tie_breakers_in_priority_order():
    # Same score (6.0) with different tier mixes
    two_gold = make("Gold", 2, 0, 0)
    four_silver = make("Silver", 0, 4, 0)
    mixed = make("Mixed", 1, 2, 0)
    ranked = rank_teams([four_silver, mixed, two_gold])
    assert [t.name for t in ranked] == ["Gold", "Mixed", "Silver"]


def test_total_breaks_remaining_tie():
    low = make("Low", 1, 1, 1, total=3)
    high = make("High", 1, 1, 1, total=5)
    assert rank_teams([low, high]) == [high, low]


def test_sort_is_stable_for_full_ties():
    first = make("First", 1, 1, 1)
    second = make("Second", 1, 1, 1)
    third = make("Third", 1, 1, 1)
    assert rank_teams([first, second, third]) == [first, second, third]
    assert rank_teams([third, first, second]) == [third, first, second]


def test_sorts_in_place_and_is_non_increasing():
    teams = [make(f"T{i}", i % 4, (i * 7) % 5, (i * 3) % 6) for i in range(20)]
    result = rank_teams(teams)
    assert result is teams
    keys = [(t.score, t.gold, t.silver, t.bronze, t.total) for t in result]
    assert keys == sorted(keys, reverse=True)
