"""
Web Interface Module

Provides the FastAPI server and single-page board for the chess game.
"""

from .app import app

__all__ = ['app']
