"""
Engine Core - The authoritative Lolos rule engine.

The engine is a pure function of (state, action):
1. setup builds the initial GameState from a roster
2. the Reducer validates and applies one Action at a time
3. view projects the state per player for broadcast

No I/O, no timers; transport and rooms are the caller's concern.
"""

from .state import (
    Card,
    CardType,
    CorruptStateError,
    DiceResult,
    Difficulty,
    EquationOption,
    Fraction,
    GamePhase,
    GameState,
    Operation,
    PlayerState,
    Seat,
)
from .action import Action, ActionType, ActionPayload, ActionResult, ErrorCode
from .reducer import Reducer, apply_action
from .setup import create_lobby, start_game
from .view import PlayerView, OpponentView, get_player_view
from .action_generator import ActionGenerator, legal_actions

__all__ = [
    "Card",
    "CardType",
    "CorruptStateError",
    "DiceResult",
    "Difficulty",
    "EquationOption",
    "Fraction",
    "GamePhase",
    "GameState",
    "Operation",
    "PlayerState",
    "Seat",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "ErrorCode",
    "Reducer",
    "apply_action",
    "create_lobby",
    "start_game",
    "PlayerView",
    "OpponentView",
    "get_player_view",
    "ActionGenerator",
    "legal_actions",
]
