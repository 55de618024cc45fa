import chess
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from .pieces import Color, Piece, PieceType


BOARD_SIZE = 8

BACK_RANK = [
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK
]


@dataclass(frozen=True)
class Position:
    """A (row, col) board coordinate. Row 0 is black's back rank, col 0 the a-file."""
    row: int
    col: int

    def __post_init__(self):
        if not (0 <= self.row < BOARD_SIZE and 0 <= self.col < BOARD_SIZE):
            raise ValueError(f"Position out of range: ({self.row}, {self.col})")

    @property
    def square(self) -> chess.Square:
        return chess.square(self.col, BOARD_SIZE - 1 - self.row)

    @property
    def name(self) -> str:
        """Algebraic square name, e.g. (6, 0) -> 'a2'."""
        return chess.square_name(self.square)

    @classmethod
    def from_name(cls, name: str) -> 'Position':
        """
        Parse an algebraic square name.

        Raises:
            ValueError: If the name is not a square
        """
        square = chess.parse_square(name.strip().lower())
        return cls(BOARD_SIZE - 1 - chess.square_rank(square), chess.square_file(square))

    @staticmethod
    def in_bounds(row: int, col: int) -> bool:
        return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE

    def __str__(self) -> str:
        return self.name


class Board:
    """
    An 8x8 grid of cells, each empty (None) or holding a Piece.
    """

    def __init__(self, cells: Optional[List[List[Optional[Piece]]]] = None):
        """
        Initialize a board.

        Args:
            cells: Optional 8x8 grid to copy; an empty board if omitted
        """
        if cells is None:
            self.cells = [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        else:
            if len(cells) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in cells):
                raise ValueError("Board must be 8x8")
            self.cells = [list(row) for row in cells]

    @classmethod
    def starting_position(cls) -> 'Board':
        """Standard chess starting layout."""
        board = cls()
        for col, piece_type in enumerate(BACK_RANK):
            board.cells[0][col] = Piece(piece_type, Color.BLACK)
            board.cells[1][col] = Piece(PieceType.PAWN, Color.BLACK)
            board.cells[6][col] = Piece(PieceType.PAWN, Color.WHITE)
            board.cells[7][col] = Piece(piece_type, Color.WHITE)
        return board

    @classmethod
    def from_pieces(cls, pieces: Dict[Tuple[int, int], Piece]) -> 'Board':
        """
        Build a board from a {(row, col): piece} mapping.
        """
        board = cls()
        for (row, col), piece in pieces.items():
            board.set(Position(row, col), piece)
        return board

    def get(self, pos: Position) -> Optional[Piece]:
        return self.cells[pos.row][pos.col]

    def set(self, pos: Position, piece: Optional[Piece]):
        self.cells[pos.row][pos.col] = piece

    def clear(self, pos: Position):
        self.cells[pos.row][pos.col] = None

    def is_empty(self, row: int, col: int) -> bool:
        return self.cells[row][col] is None

    def occupied(self) -> Iterator[Tuple[Position, Piece]]:
        """Iterate over (position, piece) for every occupied cell, row by row."""
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                piece = self.cells[row][col]
                if piece is not None:
                    yield Position(row, col), piece

    def find(self, piece: Piece) -> Optional[Position]:
        """
        Locate the first cell holding the given piece.

        Args:
            piece: Piece to look for

        Returns:
            Its position, or None if absent
        """
        for pos, occupant in self.occupied():
            if occupant == piece:
                return pos
        return None

    def copy(self) -> 'Board':
        return Board(self.cells)

    def fen(self) -> str:
        """Piece-placement part of a FEN string."""
        board = chess.BaseBoard.empty()
        for pos, piece in self.occupied():
            board.set_piece_at(pos.square, piece.to_chess())
        return board.board_fen()

    def to_text(self) -> str:
        """Render the board with Unicode glyphs, row 0 first."""
        lines = []
        for row in range(BOARD_SIZE):
            glyphs = [piece.symbol if piece else '.' for piece in self.cells[row]]
            lines.append(f"{BOARD_SIZE - row} {' '.join(glyphs)}")
        lines.append("  " + " ".join(chess.FILE_NAMES))
        return "\n".join(lines)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.cells == other.cells

    def __repr__(self) -> str:
        return f"Board('{self.fen()}')"

    def __str__(self) -> str:
        return self.to_text()
