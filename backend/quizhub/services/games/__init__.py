"""Game domain services: the engine, scoring and message assembly.

This package holds the in-memory game logic that HTTP routes and socket
handlers call into, keeping transport concerns separated from core game
mechanics.
"""
from .engine import GameEngine

__all__ = ['GameEngine']
