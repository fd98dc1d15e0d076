"""
Session Module - Manages in-memory game tables.

A table represents one game:
- Created from the room's roster
- Holds the single authoritative GameState
- Serializes intents and fans out per-player views
- Dropped when the game ends or the room closes

Tables are EPHEMERAL:
- No persistence to database
- Nothing survives a process restart
"""

from .manager import SessionManager, GameTable, TableState, TableUpdate

__all__ = [
    "SessionManager",
    "GameTable",
    "TableState",
    "TableUpdate",
]
