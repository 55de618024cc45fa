import argparse
import uvicorn
from pathlib import Path
import os
import sys

sys.path.insert(0, str(Path(__file__).parent))

from src.config import load_config
from loguru import logger


def main():
    parser = argparse.ArgumentParser(description='Serve the Click Chess web board')
    parser.add_argument('--config', type=str, default='config/config.yaml',
                        help='Path to configuration file')
    parser.add_argument('--host', type=str, default=None,
                        help='Bind address (overrides config)')
    parser.add_argument('--port', type=int, default=None,
                        help='Port (overrides config)')

    args = parser.parse_args()

    config = load_config(args.config)
    host = args.host or config['server']['host']
    port = args.port or config['server']['port']

    os.environ["CLICK_CHESS_CONFIG"] = args.config
    logger.info(f"Open http://{host}:{port}/ to play")
    uvicorn.run("src.web.app:app", host=host, port=port)


if __name__ == '__main__':
    main()
