"""
Simplified movement rules and check / checkmate detection.

All functions are pure with respect to the board they receive, apart from
the temporary move made by is_check_after_move, which is always undone
before it returns.
"""

from typing import Optional

from .board import Board, Position
from .pieces import Piece, PieceType


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def path_clear(origin: Position, to_row: int, to_col: int, board: Board) -> bool:
    """
    Check that no cell strictly between origin and destination is occupied.

    Steps one cell at a time using the sign of each delta, so it is only
    meaningful for straight or diagonal segments.

    Args:
        origin: Starting cell
        to_row: Destination row
        to_col: Destination column
        board: Board to inspect

    Returns:
        False on the first occupied intermediate cell, True otherwise
    """
    row_step = _sign(to_row - origin.row)
    col_step = _sign(to_col - origin.col)

    row = origin.row + row_step
    col = origin.col + col_step

    while (row, col) != (to_row, to_col):
        if not board.is_empty(row, col):
            return False
        row += row_step
        col += col_step

    return True


def _is_straight(diff_row: int, diff_col: int) -> bool:
    return diff_row == 0 or diff_col == 0


def _is_diagonal(diff_row: int, diff_col: int) -> bool:
    return abs(diff_row) == abs(diff_col)


def is_valid_move(piece: Piece, origin: Position, target: Position, board: Board) -> bool:
    """
    Decide whether a move matches the piece's movement geometry.

    Turn order and king safety are not considered here, and a destination
    holding a piece of the same color is not rejected.

    Args:
        piece: Piece being moved
        origin: Cell it moves from
        target: Cell it moves to
        board: Current board

    Returns:
        True if the move is legal for this piece type
    """
    diff_row = target.row - origin.row
    diff_col = target.col - origin.col

    if piece.type is PieceType.PAWN:
        # no captures, no double step
        return (diff_row == piece.color.forward and diff_col == 0
                and board.is_empty(target.row, target.col))

    if piece.type is PieceType.ROOK:
        return _is_straight(diff_row, diff_col) and path_clear(origin, target.row, target.col, board)

    if piece.type is PieceType.BISHOP:
        return _is_diagonal(diff_row, diff_col) and path_clear(origin, target.row, target.col, board)

    if piece.type is PieceType.QUEEN:
        return ((_is_straight(diff_row, diff_col) or _is_diagonal(diff_row, diff_col))
                and path_clear(origin, target.row, target.col, board))

    if piece.type is PieceType.KNIGHT:
        return (abs(diff_row), abs(diff_col)) in ((2, 1), (1, 2))

    if piece.type is PieceType.KING:
        return abs(diff_row) <= 1 and abs(diff_col) <= 1

    return False


def is_check(king: Piece, board: Board) -> bool:
    """
    Check whether the given king is attacked.

    Args:
        king: King to test (its color picks the attacking side)
        board: Current board

    Returns:
        True if any opposing piece can move onto the king's cell
    """
    king_pos = board.find(king)
    if king_pos is None:
        return False

    for pos, piece in board.occupied():
        if piece.color is not king.color and is_valid_move(piece, pos, king_pos, board):
            return True
    return False


def is_check_after_move(piece: Piece, origin: Position, target: Position, board: Board) -> bool:
    """
    Simulate moving a piece and report whether its side's king is in check.

    The board is restored to its previous contents before returning.

    Args:
        piece: Piece to move, passed explicitly rather than read off the board
        origin: Cell the piece moves from
        target: Cell the piece moves to
        board: Board to simulate on

    Returns:
        True if the moving side's king is in check after the move
    """
    captured: Optional[Piece] = board.get(target)
    original: Optional[Piece] = board.get(origin)

    board.clear(origin)
    board.set(target, piece)
    try:
        king = piece if piece.type is PieceType.KING else Piece(PieceType.KING, piece.color)
        return is_check(king, board)
    finally:
        board.set(target, captured)
        board.set(origin, original)


def is_checkmate(king: Piece, board: Board) -> bool:
    """
    Check whether the given king has no safe square in its 3x3 neighborhood.

    Every neighboring cell, the king's own cell included, is tried by
    placing the king there. Captures of the attacker and interpositions by
    other pieces are not considered, and the king is not required to be in
    check now.

    Args:
        king: King to test
        board: Current board

    Returns:
        True if every neighborhood cell leaves the king in check
    """
    king_pos = board.find(king)
    if king_pos is None:
        return False

    for row in range(king_pos.row - 1, king_pos.row + 2):
        for col in range(king_pos.col - 1, king_pos.col + 2):
            if not Position.in_bounds(row, col):
                continue
            if not is_check_after_move(king, king_pos, Position(row, col), board):
                return False
    return True
