import argparse
import sys
from pathlib import Path
from typing import Optional, Tuple

from loguru import logger

sys.path.insert(0, str(Path(__file__).parent))

from src.config import load_config
from src.game.board import Board, Position
from src.game.collaborators import CallbackRenderer, LoggingNotifier, Notifier, NotificationEvent
from src.game.game_manager import GameManager, MoveOutcome
from src.game.pieces import Color


class ConsoleNotifier(Notifier):
    """Print check warnings and wins in the terminal."""

    def notify(self, event: NotificationEvent, message: str):
        banner = "="*40 if event is NotificationEvent.WIN else "-"*40
        print(f"\n{banner}\n{message}\n{banner}")


def display_board(board: Board):
    """Display the chess board in the terminal."""
    print("\n" + "="*40)
    print(board.to_text())
    print("="*40)
    print(f"FEN: {board.fen()}")
    print()


def parse_square(text: str) -> Optional[Tuple[int, int]]:
    """
    Parse a square given as 'row col' or algebraic ('a2').

    Returns:
        (row, col) or None if the input is not a square
    """
    parts = text.split()
    try:
        if len(parts) == 2:
            pos = Position(int(parts[0]), int(parts[1]))
        elif len(parts) == 1:
            pos = Position.from_name(parts[0])
        else:
            return None
    except ValueError:
        return None
    return pos.row, pos.col


def main():
    parser = argparse.ArgumentParser(description='Play two-player chess in the terminal')
    parser.add_argument('--config', type=str, default='config/config.yaml',
                        help='Path to configuration file')
    parser.add_argument('--log-level', type=str, default=None,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Log level (overrides config)')

    args = parser.parse_args()

    config = load_config(args.config)
    logger.remove()
    logger.add(sys.stderr, level=args.log_level or config['logging']['level'])

    print("\n" + "="*40)
    print("Click Chess - COMMAND LINE EDITION  ♟️")
    print("="*40)
    print("Click a square by typing 'row col' (e.g. '6 0') or its name (e.g. 'a2').")
    print("First click selects a piece, second click moves it.")
    print("Commands: 'quit' or 'q' to exit")
    print("="*40)

    game = GameManager(CallbackRenderer(display_board), LoggingNotifier(forward=ConsoleNotifier()))

    while True:
        prompt = f"{game.turn.value.capitalize()}"
        if game.selection is not None:
            prompt += f" [{game.selection.piece} {game.selection.origin}]"
        try:
            text = input(f"{prompt} > ").strip()
        except (KeyboardInterrupt, EOFError):
            print("\nExiting...")
            break

        if text.lower() in ['quit', 'exit', 'q']:
            break

        square = parse_square(text)
        if square is None:
            print("Not a square! Try again.")
            continue

        result = game.handle_click(*square)
        if result.moved:
            print(f"Played {result.origin}-{result.target}")
        elif result.outcome is MoveOutcome.IGNORED:
            print(f"Select a {game.turn.value} piece.")
        elif result.outcome is MoveOutcome.REJECTED:
            print("Invalid move.")

    print(f"Wins - White: {game.wins[Color.WHITE]}, Black: {game.wins[Color.BLACK]}")


if __name__ == '__main__':
    main()
