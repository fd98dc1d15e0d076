"""
API Module - Network interface to the engine.

Exposes Lolos tables via a REST API:
1. Open a table for a roster
2. Post player intents
3. Fetch per-seat views

All state is table-scoped and in memory.
"""

from .schemas import (
    # Requests
    CreateGameRequest,
    ActionRequest,
    # Responses
    GameCreatedResponse,
    PlayerViewResponse,
    ActionResponse,
    ErrorResponse,
    # Shared
    SeatSchema,
    CardSchema,
    OpponentSchema,
)
from .service import GameService
from .app import create_app

__all__ = [
    # Requests
    "CreateGameRequest",
    "ActionRequest",
    # Responses
    "GameCreatedResponse",
    "PlayerViewResponse",
    "ActionResponse",
    "ErrorResponse",
    # Shared
    "SeatSchema",
    "CardSchema",
    "OpponentSchema",
    # Service
    "GameService",
    "create_app",
]
