"""
Chess Game Module

Handles board state, movement rules, check detection and the click-driven
game controller.
"""

from .pieces import Color, PieceType, Piece, PIECE_ASSETS
from .board import Board, Position
from .rules import is_valid_move, path_clear, is_check, is_check_after_move, is_checkmate
from .game_manager import GameManager, GameState, MoveOutcome, ClickResult, Selection
from .collaborators import Renderer, Notifier, NotificationEvent, EventLog

__all__ = [
    'Color',
    'PieceType',
    'Piece',
    'PIECE_ASSETS',
    'Board',
    'Position',
    'is_valid_move',
    'path_clear',
    'is_check',
    'is_check_after_move',
    'is_checkmate',
    'GameManager',
    'GameState',
    'MoveOutcome',
    'ClickResult',
    'Selection',
    'Renderer',
    'Notifier',
    'NotificationEvent',
    'EventLog'
]
