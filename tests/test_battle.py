#!/usr/bin/env python3
"""
Tests for battle validation and resolution.
Dice are replayed from scripted sources so every outcome is exact.
"""

import pytest

from war_game_engine.core.map import Faction, Map
from war_game_engine.core.dice import ScriptedRandomSource, SeededRandomSource, RandomSourceExhausted
from war_game_engine.core.battle import (
    AttackRejection, AttackValidationError, BattleResolver, BattleOutcome, ValidatedAttack,
    resolve_attack, validate_attack
)


def two_territory_map(origin_troops: int, destination_troops: int) -> Map:
    """Blue origin at number 1, Red destination at number 2."""
    return Map.from_entries([
        ("Brazil", Faction.BLUE, origin_troops),
        ("Argentina", Faction.RED, destination_troops),
    ])


def attack_on(game_map: Map) -> ValidatedAttack:
    return validate_attack(game_map, 1, 2, Faction.BLUE)


# ===== Validation =====

def test_validate_attack_returns_zero_based_indices():
    game_map = two_territory_map(3, 2)
    attack = validate_attack(game_map, 1, 2, Faction.BLUE)

    assert attack.origin_index == 0
    assert attack.destination_index == 1
    assert attack.attacker_faction == Faction.BLUE


@pytest.mark.parametrize("origin, destination", [(0, 2), (1, 3), (-1, 1), (1, 0)])
def test_validate_attack_rejects_out_of_range(origin, destination):
    game_map = two_territory_map(3, 2)
    with pytest.raises(AttackValidationError) as exc_info:
        validate_attack(game_map, origin, destination, Faction.BLUE)
    assert exc_info.value.reason == AttackRejection.OUT_OF_RANGE


def test_validate_attack_rejects_self_attack():
    game_map = two_territory_map(3, 2)
    with pytest.raises(AttackValidationError) as exc_info:
        validate_attack(game_map, 1, 1, Faction.BLUE)
    assert exc_info.value.reason == AttackRejection.SAME_TERRITORY


def test_validate_attack_rejects_origin_not_owned():
    game_map = two_territory_map(3, 2)
    with pytest.raises(AttackValidationError) as exc_info:
        validate_attack(game_map, 2, 1, Faction.BLUE)
    assert exc_info.value.reason == AttackRejection.NOT_OWNED


def test_validate_attack_rejects_own_destination():
    game_map = Map.from_entries([
        ("Brazil", Faction.BLUE, 3),
        ("Argentina", Faction.BLUE, 2),
    ])
    with pytest.raises(AttackValidationError) as exc_info:
        validate_attack(game_map, 1, 2, Faction.BLUE)
    assert exc_info.value.reason == AttackRejection.OWN_TERRITORY


def test_validate_attack_rejects_single_troop_origin():
    game_map = two_territory_map(1, 2)
    with pytest.raises(AttackValidationError) as exc_info:
        validate_attack(game_map, 1, 2, Faction.BLUE)
    assert exc_info.value.reason == AttackRejection.INSUFFICIENT_TROOPS
    assert "at least 2 troops" in str(exc_info.value)


def test_range_is_checked_before_ownership():
    """An out-of-range destination is reported even when the origin is also wrong."""
    game_map = two_territory_map(1, 2)
    with pytest.raises(AttackValidationError) as exc_info:
        validate_attack(game_map, 2, 9, Faction.BLUE)
    assert exc_info.value.reason == AttackRejection.OUT_OF_RANGE


# ===== Resolution scenarios =====

def test_conquest_with_troop_transfer():
    """5 troops against 2: two attacker wins take the territory and one troop moves in."""
    game_map = two_territory_map(5, 2)
    dice = ScriptedRandomSource.from_duels([(6, 1), (5, 2)])

    outcome = resolve_attack(game_map, attack_on(game_map), dice)

    print(f"Outcome: {outcome.to_dict()}")
    assert outcome.duel_count == 2
    assert outcome.attacker_wins == 2
    assert outcome.defender_wins == 0
    assert outcome.conquered
    assert outcome.troop_transferred

    origin, destination = game_map.get(0), game_map.get(1)
    assert destination.faction == Faction.BLUE
    assert origin.troops == 4
    assert destination.troops == 2
    assert outcome.origin_troops_after == 4
    assert outcome.destination_troops_after == 2
    assert dice.remaining == 0


def test_defended_territory_keeps_owner():
    game_map = two_territory_map(4, 3)
    dice = ScriptedRandomSource.from_duels([(2, 5), (6, 1), (3, 3)])

    outcome = resolve_attack(game_map, attack_on(game_map), dice)

    assert outcome.duel_count == 3
    assert outcome.attacker_wins == 1
    assert outcome.defender_wins == 2
    assert not outcome.conquered
    assert not outcome.troop_transferred
    assert outcome.verdict == "defender"
    assert game_map.get(1).faction == Faction.RED
    assert game_map.get(0).troops == 2
    assert game_map.get(1).troops == 2


@pytest.mark.parametrize("origin_troops, destination_troops, expected_duels", [
    (2, 1, 1),
    (2, 5, 1),
    (10, 3, 3),
    (4, 4, 3),
    (6, 5, 5),
])
def test_duel_count_is_min_of_dice(origin_troops, destination_troops, expected_duels):
    """Extra dice on either side are never rolled."""
    game_map = two_territory_map(origin_troops, destination_troops)
    # Every duel is a defender win so the map stays easy to reason about
    dice = ScriptedRandomSource([1] * (2 * expected_duels))

    outcome = resolve_attack(game_map, attack_on(game_map), dice)

    assert outcome.duel_count == expected_duels
    assert outcome.duel_count == min(origin_troops - 1, destination_troops)
    assert outcome.attacker_dice_count == origin_troops - 1
    assert outcome.defender_dice_count == destination_troops
    assert dice.remaining == 0


def test_duel_count_does_not_overdraw_dice():
    """A script with exactly the needed rolls is enough; asking for more would raise."""
    game_map = two_territory_map(3, 5)
    dice = ScriptedRandomSource.from_duels([(6, 1), (6, 1)])

    resolve_attack(game_map, attack_on(game_map), dice)

    with pytest.raises(RandomSourceExhausted):
        dice.randint(1, 6)


@pytest.mark.parametrize("roll", [1, 2, 3, 4, 5, 6])
def test_ties_favor_defender(roll):
    game_map = two_territory_map(2, 1)
    dice = ScriptedRandomSource.from_duels([(roll, roll)])

    outcome = resolve_attack(game_map, attack_on(game_map), dice)

    assert not outcome.duels[0].attacker_won
    assert outcome.defender_wins == 1
    assert outcome.attacker_wins == 0
    assert not outcome.conquered
    assert game_map.get(0).troops == 1
    assert game_map.get(1).troops == 1


def test_conquest_floor_sets_destination_to_one_before_transfer():
    """Overkill does not leave negative troops: the conquered side is reset to 1."""
    game_map = two_territory_map(6, 1)
    dice = ScriptedRandomSource.from_duels([(6, 1)])

    outcome = resolve_attack(game_map, attack_on(game_map), dice)

    assert outcome.conquered
    assert game_map.get(1).faction == Faction.BLUE
    # 1 from the floor plus 1 transferred
    assert game_map.get(1).troops == 2
    assert game_map.get(0).troops == 5


def test_conquest_without_transfer_when_origin_has_one_troop():
    """The transfer guard keeps the origin's last troop at home."""
    game_map = two_territory_map(3, 1)
    resolver = BattleResolver(game_map, attack_on(game_map), ScriptedRandomSource([]))
    outcome = BattleOutcome(
        origin_name="Brazil", destination_name="Argentina",
        attacker_faction=Faction.BLUE, defender_faction=Faction.RED,
        origin_troops_before=3, destination_troops_before=1,
        attacker_dice_count=2, defender_dice_count=1,
    )
    resolver.origin.troops = 1
    resolver.destination.troops = -2

    resolver._check_conquest(outcome)

    assert outcome.conquered
    assert not outcome.troop_transferred
    assert resolver.origin.troops == 1
    assert resolver.destination.troops == 1
    assert resolver.destination.faction == Faction.BLUE


def test_origin_troops_not_floored_regression():
    """
    The origin loses exactly one troop per defender win with no clamp applied.
    With every duel lost, 2 troops against 5 fall to 2 - 1 = 1, and 4 against 5 to 4 - 3 = 1.
    """
    for origin_troops in (2, 4):
        game_map = two_territory_map(origin_troops, 5)
        duels = min(origin_troops - 1, 5)
        dice = ScriptedRandomSource.from_duels([(1, 6)] * duels)

        outcome = resolve_attack(game_map, attack_on(game_map), dice)

        assert outcome.defender_wins == duels
        assert game_map.get(0).troops == origin_troops - outcome.defender_wins
        assert game_map.get(0).faction == Faction.BLUE
        assert not outcome.conquered


def test_draw_verdict():
    game_map = two_territory_map(3, 3)
    dice = ScriptedRandomSource.from_duels([(6, 1), (1, 6)])

    outcome = resolve_attack(game_map, attack_on(game_map), dice)

    assert outcome.verdict == "draw"
    assert game_map.get(0).troops == 2
    assert game_map.get(1).troops == 2


def test_resolution_is_deterministic_for_same_dice():
    rolls = [(4, 2), (1, 1), (6, 5), (3, 4)]
    results = []
    for _ in range(2):
        game_map = two_territory_map(5, 4)
        outcome = resolve_attack(game_map, attack_on(game_map), ScriptedRandomSource.from_duels(rolls))
        results.append((outcome.to_dict(), game_map.to_dict()))

    assert results[0] == results[1]


def test_outcome_to_dict_lists_every_duel():
    game_map = two_territory_map(3, 2)
    outcome = resolve_attack(game_map, attack_on(game_map), ScriptedRandomSource.from_duels([(5, 3), (2, 2)]))

    data = outcome.to_dict()
    assert data["origin"] == "Brazil"
    assert data["destination"] == "Argentina"
    assert data["attacker_faction"] == "Blue"
    assert data["defender_faction"] == "Red"
    assert [d["winner"] for d in data["duels"]] == ["attacker", "defender"]
    assert data["verdict"] == "draw"


def test_troops_never_drop_below_one_under_random_play():
    """Random battles between valid orders keep every territory at 1 troop or more."""
    rng = SeededRandomSource(seed=20240101)
    for _ in range(500):
        origin_troops = rng.randint(2, 12)
        destination_troops = rng.randint(1, 12)
        game_map = two_territory_map(origin_troops, destination_troops)

        outcome = resolve_attack(game_map, attack_on(game_map), rng)

        assert outcome.duel_count == min(origin_troops - 1, destination_troops)
        assert outcome.attacker_wins + outcome.defender_wins == outcome.duel_count
        for territory in game_map:
            assert territory.troops >= 1
        if outcome.conquered:
            assert game_map.get(1).faction == Faction.BLUE
