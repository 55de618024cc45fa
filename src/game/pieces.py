import chess
from dataclasses import dataclass
from enum import Enum
from typing import Dict


class Color(Enum):
    """Side of a piece or of the player to move."""
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> 'Color':
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def forward(self) -> int:
        """Row step of a pawn of this color (white moves toward row 0)."""
        return -1 if self is Color.WHITE else 1

    def to_chess(self) -> chess.Color:
        return chess.WHITE if self is Color.WHITE else chess.BLACK


class PieceType(Enum):
    """Enumeration of piece types."""
    PAWN = "pawn"
    ROOK = "rook"
    KNIGHT = "knight"
    BISHOP = "bishop"
    QUEEN = "queen"
    KING = "king"

    def to_chess(self) -> chess.PieceType:
        return _CHESS_PIECE_TYPES[self]


_CHESS_PIECE_TYPES = {
    PieceType.PAWN: chess.PAWN,
    PieceType.ROOK: chess.ROOK,
    PieceType.KNIGHT: chess.KNIGHT,
    PieceType.BISHOP: chess.BISHOP,
    PieceType.QUEEN: chess.QUEEN,
    PieceType.KING: chess.KING,
}


@dataclass(frozen=True)
class Piece:
    """
    A chess piece. Identity is the (type, color) pair only; pieces are not
    tracked across moves beyond the cell they sit on.
    """
    type: PieceType
    color: Color

    @property
    def symbol(self) -> str:
        """Unicode glyph of the piece, e.g. '♔' for the white king."""
        return chess.Piece(self.type.to_chess(), self.color.to_chess()).unicode_symbol()

    @property
    def asset(self) -> str:
        """Image path used by the renderer."""
        return PIECE_ASSETS[self]

    def to_chess(self) -> chess.Piece:
        return chess.Piece(self.type.to_chess(), self.color.to_chess())

    @classmethod
    def from_symbol(cls, symbol: str) -> 'Piece':
        """
        Build a piece from its Unicode glyph or FEN letter.

        Args:
            symbol: '♚', 'k', '♙', 'P', ...

        Returns:
            Matching Piece

        Raises:
            ValueError: If the symbol is not a chess piece
        """
        if symbol in chess.UNICODE_PIECE_SYMBOLS.values():
            letter = next(k for k, v in chess.UNICODE_PIECE_SYMBOLS.items() if v == symbol)
        else:
            letter = symbol
        try:
            piece = chess.Piece.from_symbol(letter)
        except (KeyError, ValueError):
            raise ValueError(f"Unknown piece symbol: {symbol!r}")

        piece_type = next(t for t, v in _CHESS_PIECE_TYPES.items() if v == piece.piece_type)
        color = Color.WHITE if piece.color == chess.WHITE else Color.BLACK
        return cls(piece_type, color)

    def __str__(self) -> str:
        return self.symbol


WHITE_KING = Piece(PieceType.KING, Color.WHITE)
BLACK_KING = Piece(PieceType.KING, Color.BLACK)


def king_of(color: Color) -> Piece:
    return WHITE_KING if color is Color.WHITE else BLACK_KING


# One image per piece identity
PIECE_ASSETS: Dict[Piece, str] = {
    Piece(piece_type, color): f"images/{piece_type.value}({color.value[0]}).png"
    for piece_type in PieceType
    for color in Color
}
