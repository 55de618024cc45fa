from fastapi import FastAPI, HTTPException
from fastapi.staticfiles import StaticFiles
from fastapi.responses import HTMLResponse, FileResponse
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import Dict, List, Optional
from pathlib import Path
from loguru import logger
import os
import sys
import uuid

from ..config import load_config
from ..game.collaborators import EventLog, LoggingNotifier, NullRenderer
from ..game.game_manager import GameManager

STATIC_DIR = Path(__file__).parent / "static"

app = FastAPI(
    title="Click Chess API",
    description="Two-player chess on a click-driven board",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

active_games: Dict[str, GameManager] = {}
event_logs: Dict[str, EventLog] = {}
config: Dict = load_config(os.environ.get("CLICK_CHESS_CONFIG"))


class ClickRequest(BaseModel):
    row: int = Field(ge=0, le=7)
    col: int = Field(ge=0, le=7)


class GameResponse(BaseModel):
    game_id: str
    state: Dict


class ClickResponse(BaseModel):
    outcome: str
    notifications: List[str]
    winner: Optional[str] = None
    state: Dict


def configure_logging(logging_config: Dict):
    """Set up the stderr and rotating file sinks."""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level=logging_config['level']
    )
    if logging_config.get('file'):
        logger.add(
            logging_config['file'],
            rotation=logging_config['rotation'],
            retention=logging_config['retention'],
            level="DEBUG"
        )


def mount_assets(assets_config: Dict) -> Optional[str]:
    """
    Serve piece images if the asset directory exists.

    Returns:
        URL prefix the images are served under, or None if not served
    """
    asset_dir = Path(assets_config['directory'])
    if not asset_dir.exists():
        logger.warning(f"Asset directory {asset_dir} not found, pieces will be drawn as glyphs")
        return None

    url_prefix = assets_config['url_prefix'].rstrip("/")
    app.mount(url_prefix, StaticFiles(directory=str(asset_dir)), name="images")
    logger.info(f"Serving piece images from {asset_dir} at {url_prefix}")
    return url_prefix


images_url = mount_assets(config['assets'])


def board_state(game: GameManager) -> Dict:
    """Game state with an image URL for every piece (None when images are not served)."""
    state = game.get_board_state()
    for row in state['board']:
        for cell in row:
            piece = cell['piece']
            if piece is not None:
                piece['url'] = f"{images_url}/{Path(piece['asset']).name}" if images_url else None
    return state


def get_game(game_id: str) -> GameManager:
    if game_id not in active_games:
        raise HTTPException(status_code=404, detail="Game not found")
    return active_games[game_id]


@app.on_event("startup")
async def startup_event():
    """Set up logging on startup."""
    configure_logging(config['logging'])
    logger.info("Click Chess server started")


@app.get("/", response_class=HTMLResponse)
async def root():
    """Serve the main HTML page."""
    html_file = STATIC_DIR / "index.html"
    if html_file.exists():
        return FileResponse(html_file)
    return HTMLResponse(content=get_default_html(), status_code=200)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "active_games": len(active_games)
    }


@app.post("/api/game/new", response_model=GameResponse)
async def new_game():
    """
    Create a new game.

    Returns:
        Game response with game ID and initial state
    """
    game_id = str(uuid.uuid4())
    events = EventLog()
    game = GameManager(NullRenderer(), LoggingNotifier(forward=events))

    active_games[game_id] = game
    event_logs[game_id] = events

    logger.info(f"New game created: {game_id}")

    return GameResponse(game_id=game_id, state=board_state(game))


@app.post("/api/game/{game_id}/click", response_model=ClickResponse)
async def click_square(game_id: str, request: ClickRequest):
    """
    Click a square: select a piece or attempt a move.

    Args:
        game_id: Game identifier
        request: Clicked square

    Returns:
        Click outcome, notifications to display and updated game state
    """
    game = get_game(game_id)
    result = game.handle_click(request.row, request.col)
    notifications = [message for _, message in event_logs[game_id].drain()]

    return ClickResponse(
        outcome=result.outcome.value,
        notifications=notifications,
        winner=result.winner.value if result.winner else None,
        state=board_state(game)
    )


@app.get("/api/game/{game_id}/state")
async def get_game_state(game_id: str):
    """
    Get current game state.

    Args:
        game_id: Game identifier

    Returns:
        Current game state
    """
    game = get_game(game_id)
    return {"state": board_state(game)}


@app.post("/api/game/{game_id}/reset")
async def reset_game(game_id: str):
    """
    Restart a game from the starting position.

    Args:
        game_id: Game identifier

    Returns:
        Fresh game state
    """
    game = get_game(game_id)
    game.reset()
    return {"state": board_state(game)}


@app.delete("/api/game/{game_id}")
async def delete_game(game_id: str):
    """
    Delete a game.

    Args:
        game_id: Game identifier

    Returns:
        Success message
    """
    if game_id in active_games:
        del active_games[game_id]
        event_logs.pop(game_id, None)
        logger.info(f"Game {game_id}: Deleted")
        return {"message": "Game deleted"}

    raise HTTPException(status_code=404, detail="Game not found")


@app.get("/api/games")
async def list_games():
    """
    List all active games.

    Returns:
        List of active game IDs
    """
    return {
        "games": [
            {
                "game_id": game_id,
                "turn": game.turn.value,
                "move_count": game.move_count
            }
            for game_id, game in active_games.items()
        ]
    }


def get_default_html() -> str:
    """Return default HTML if static file not found."""
    return """
    <!DOCTYPE html>
    <html>
    <head>
        <title>Click Chess</title>
    </head>
    <body>
        <h1>Click Chess Server</h1>
        <p>The server is running but the board page is missing.</p>
        <p>API Documentation: <a href="/docs">/docs</a></p>
    </body>
    </html>
    """
