"""
Gamemaster module for running an interactive War session.
"""

from war_game_engine.gamemaster.session import GameSession, SessionResult, MenuOption
from war_game_engine.gamemaster.renderer import Renderer

__all__ = ['GameSession', 'SessionResult', 'MenuOption', 'Renderer']
