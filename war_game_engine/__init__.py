"""
War Game Engine
A single-player territory conquest game: dice battles and secret objectives.
"""

from war_game_engine.core.map import Faction, Territory, Map, create_standard_map
from war_game_engine.core.dice import (
    RandomSource, SeededRandomSource, ScriptedRandomSource, RandomSourceExhausted
)
from war_game_engine.core.battle import (
    AttackRejection, AttackValidationError, ValidatedAttack, DuelResult, BattleOutcome,
    BattleResolver, validate_attack, resolve_attack
)
from war_game_engine.core.objectives import (
    Objective, EliminateFaction, ControlAtLeast,
    draw_objective, objective_from_id, is_objective_met
)
from war_game_engine.core.game import Game, Player
from war_game_engine.config import GameConfig, ConfigError, load_config

__version__ = "1.0.0"
__all__ = [
    'Faction', 'Territory', 'Map', 'create_standard_map',
    'RandomSource', 'SeededRandomSource', 'ScriptedRandomSource', 'RandomSourceExhausted',
    'AttackRejection', 'AttackValidationError', 'ValidatedAttack', 'DuelResult', 'BattleOutcome',
    'BattleResolver', 'validate_attack', 'resolve_attack',
    'Objective', 'EliminateFaction', 'ControlAtLeast',
    'draw_objective', 'objective_from_id', 'is_objective_met',
    'Game', 'Player',
    'GameConfig', 'ConfigError', 'load_config',
]
