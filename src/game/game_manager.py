import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from loguru import logger

from .board import Board, Position, BOARD_SIZE
from .collaborators import NotificationEvent, Notifier, NullRenderer, EventLog, Renderer
from .pieces import Color, Piece, king_of
from .rules import is_check, is_checkmate, is_valid_move


class MoveOutcome(Enum):
    """Result of handling one square click."""
    IGNORED = "ignored"
    SELECTED = "selected"
    REJECTED = "rejected"
    MOVED = "moved"
    CHECK = "check"
    CHECKMATE = "checkmate"


@dataclass(frozen=True)
class Selection:
    """A piece picked up by the player to move, with the cell it came from."""
    piece: Piece
    origin: Position


@dataclass
class GameState:
    """Board, side to move and current selection of one game."""
    board: Board = field(default_factory=Board.starting_position)
    turn: Color = Color.WHITE
    selection: Optional[Selection] = None

    def toggle_turn(self):
        self.turn = self.turn.opponent


@dataclass
class ClickResult:
    """What a click did, returned to the input layer."""
    outcome: MoveOutcome
    origin: Optional[Position] = None
    target: Optional[Position] = None
    notifications: List[str] = field(default_factory=list)
    winner: Optional[Color] = None

    @property
    def moved(self) -> bool:
        return self.outcome in (MoveOutcome.MOVED, MoveOutcome.CHECK, MoveOutcome.CHECKMATE)


def _check_message(color: Color) -> str:
    return f"{color.value.capitalize()} is in check!"


def _win_message(color: Color) -> str:
    return f"{color.value.capitalize()} wins!"


class GameManager:
    """
    Manages a two-player game driven by square clicks.
    """

    def __init__(self, renderer: Optional[Renderer] = None, notifier: Optional[Notifier] = None):
        """
        Initialize a new game and render the starting position.

        Args:
            renderer: Board renderer (defaults to a NullRenderer)
            notifier: Check / win notification channel (defaults to an EventLog)
        """
        self.renderer = renderer if renderer is not None else NullRenderer()
        self.notifier = notifier if notifier is not None else EventLog()
        self.state = GameState()
        self.move_count = 0
        self.wins: Dict[Color, int] = {Color.WHITE: 0, Color.BLACK: 0}
        self.last_outcome: Optional[MoveOutcome] = None
        self._lock = threading.Lock()
        self.renderer.render(self.state.board)

    @property
    def board(self) -> Board:
        return self.state.board

    @property
    def turn(self) -> Color:
        return self.state.turn

    @property
    def selection(self) -> Optional[Selection]:
        return self.state.selection

    def reset(self):
        """Restart the game: starting layout, white to move, nothing selected."""
        self.state = GameState()
        self.move_count = 0
        logger.info("Game reset")
        self.renderer.render(self.state.board)

    def handle_click(self, row: int, col: int) -> ClickResult:
        """
        Process a click on a board square.

        With nothing selected, a click on a piece of the side to move selects
        it. With a piece selected, the click is a move attempt; the selection
        is cleared whether or not the move is accepted.

        Args:
            row: Clicked row (0-7)
            col: Clicked column (0-7)

        Returns:
            ClickResult describing what happened
        """
        target = Position(row, col)
        with self._lock:
            if self.state.selection is None:
                result = self._select(target)
            else:
                selection = self.state.selection
                try:
                    result = self._move(selection, target)
                finally:
                    self.state.selection = None
            self.last_outcome = result.outcome
            return result

    def _select(self, pos: Position) -> ClickResult:
        piece = self.state.board.get(pos)
        if piece is None or piece.color is not self.state.turn:
            return ClickResult(MoveOutcome.IGNORED, target=pos)

        self.state.selection = Selection(piece, pos)
        logger.debug(f"Selected {piece} on {pos}")
        return ClickResult(MoveOutcome.SELECTED, origin=pos)

    def _move(self, selection: Selection, target: Position) -> ClickResult:
        state = self.state
        piece, origin = selection.piece, selection.origin

        # a click back on the origin puts the piece down
        if target == origin or not is_valid_move(piece, origin, target, state.board):
            logger.debug(f"Rejected {piece} {origin}-{target}")
            return ClickResult(MoveOutcome.REJECTED, origin=origin, target=target)

        state.board.set(target, piece)
        state.board.clear(origin)
        self.move_count += 1
        logger.info(f"{state.turn.value}: {piece} {origin}-{target}")
        self.renderer.render(state.board)

        mover = state.turn
        defender = mover.opponent
        result = ClickResult(MoveOutcome.MOVED, origin=origin, target=target)

        if is_checkmate(king_of(defender), state.board):
            message = _win_message(mover)
            result.outcome = MoveOutcome.CHECKMATE
            result.winner = mover
            result.notifications.append(message)
            self.wins[mover] += 1
            self.notifier.notify(NotificationEvent.WIN, message)
            self.reset()
        elif is_check(king_of(defender), state.board):
            message = _check_message(defender)
            result.outcome = MoveOutcome.CHECK
            result.notifications.append(message)
            self.notifier.notify(NotificationEvent.CHECK, message)

        # the toggle lands on the discarded state after a reset
        state.toggle_turn()
        return result

    def get_board_state(self) -> Dict:
        """
        Get complete board state as dictionary.

        Returns:
            Dictionary with board state information
        """
        board = self.state.board
        selection = self.state.selection
        cells = []
        for row in range(BOARD_SIZE):
            cells_row = []
            for col in range(BOARD_SIZE):
                piece = board.cells[row][col]
                cells_row.append({
                    'row': row,
                    'col': col,
                    'square': Position(row, col).name,
                    'shade': 'white' if (row + col) % 2 == 0 else 'black',
                    'piece': None if piece is None else {
                        'symbol': piece.symbol,
                        'type': piece.type.value,
                        'color': piece.color.value,
                        'asset': piece.asset
                    }
                })
            cells.append(cells_row)

        return {
            'board': cells,
            'fen': board.fen(),
            'turn': self.state.turn.value,
            'selection': None if selection is None else {
                'row': selection.origin.row,
                'col': selection.origin.col,
                'square': selection.origin.name,
                'piece': selection.piece.symbol
            },
            'is_check': is_check(king_of(self.state.turn), board),
            'move_count': self.move_count,
            'last_outcome': self.last_outcome.value if self.last_outcome else None,
            'wins': {color.value: count for color, count in self.wins.items()}
        }
