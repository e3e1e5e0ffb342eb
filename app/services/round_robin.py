"""
Round-robin matchup generation (circle method).

One team stays fixed while the others rotate around it, so that across
M - 1 rounds every pair of the M rotation slots meets exactly once. With an
odd number of teams a BYE slot is added; whoever faces it sits out that round.
"""

from typing import List

from app.models import Team, Matchup, BYE, RotationSlot


def generate_rounds(teams: List[Team]) -> List[List[Matchup]]:
    """
    Generate round-robin matchups grouped by round.

    Args:
        teams: Teams in the order they should seed the rotation. Ids must be
            unique; passing duplicates is a caller error.

    Returns:
        One list of matchups per round. Fewer than two teams gives no rounds.
    """
    assert len({team.id for team in teams}) == len(teams), \
        "generate_rounds requires teams with unique ids"

    if len(teams) < 2:
        return []

    slots: List[RotationSlot] = list(teams)
    if len(slots) % 2 != 0:
        slots.append(BYE)

    num_slots = len(slots)
    num_rounds = num_slots - 1
    half = num_slots // 2

    order = list(range(num_slots))
    rounds = []

    for _ in range(num_rounds):
        round_matchups = []
        for i in range(half):
            first = slots[order[i]]
            second = slots[order[num_slots - 1 - i]]

            # Whoever faces the BYE sits this round out
            if first is BYE or second is BYE:
                continue

            # Alternate home side by board position to spread home games
            if i % 2 == 1:
                round_matchups.append(Matchup(home_team=second, away_team=first))
            else:
                round_matchups.append(Matchup(home_team=first, away_team=second))

        rounds.append(round_matchups)

        # Keep order[0] fixed, move the last slot in right behind it
        order.insert(1, order.pop())

    return rounds


def generate_round_robin_schedule(teams: List[Team]) -> List[Matchup]:
    """
    Generate a single round-robin: every team plays every other team once.

    Output is the rounds flattened in order, so for N teams it always holds
    N * (N - 1) / 2 matchups. Identical input order gives identical output.
    """
    return [matchup for round_matchups in generate_rounds(teams) for matchup in round_matchups]


def bye_teams_by_round(teams: List[Team]) -> List[List[Team]]:
    """List, for each round, the teams that do not play in it."""
    byes = []
    for round_matchups in generate_rounds(teams):
        playing = set()
        for matchup in round_matchups:
            playing.add(matchup.home_team.id)
            playing.add(matchup.away_team.id)
        byes.append([team for team in teams if team.id not in playing])
    return byes
