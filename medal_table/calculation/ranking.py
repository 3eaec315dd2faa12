from typing import List

from medal_table.models.team import Team


def ranking_key(team: Team) -> tuple:
    """Sort key: score, then gold, silver, bronze and total, all descending."""
    return (
        -team.score,
        -team.gold,
        -team.silver,
        -team.bronze,
        -(team.total or 0),
    )


def rank_teams(teams: List[Team]) -> List[Team]:
    """Sorts teams in place into ranking order and returns the same list.

    list.sort is stable, so teams tied on every key keep their input order.
    """
    teams.sort(key=ranking_key)
    return teams
