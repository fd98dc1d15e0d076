"""
Action System - Actions, payloads, and results.

Every player intent is one Action. The reducer dispatches on
ActionType with one handler per member; illegal actions come back as
ActionResult failures, never as exceptions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Types of actions in the system."""
    START_GAME = "start_game"
    BEGIN_TURN = "begin_turn"
    ROLL_DICE = "roll_dice"
    CONFIRM_EQUATION = "confirm_equation"
    STAGE_CARD = "stage_card"
    UNSTAGE_CARD = "unstage_card"
    CONFIRM_STAGED = "confirm_staged"
    PLAY_IDENTICAL = "play_identical"
    PLAY_FRACTION = "play_fraction"
    DEFEND_FRACTION_SOLVE = "defend_fraction_solve"
    DEFEND_FRACTION_PENALTY = "defend_fraction_penalty"
    PLAY_OPERATION = "play_operation"
    PLAY_JOKER = "play_joker"
    DRAW_CARD = "draw_card"
    CALL_LULOS = "call_lulos"
    END_TURN = "end_turn"


# Actions any seated player may take outside their own turn
OFF_TURN_ACTIONS = {ActionType.CALL_LULOS, ActionType.START_GAME}


class ErrorCode(Enum):
    """Structured error codes for rejected actions."""
    GAME_OVER = "GAME_OVER"
    NOT_STARTED = "NOT_STARTED"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    PLAYER_NOT_FOUND = "PLAYER_NOT_FOUND"
    WRONG_PHASE = "WRONG_PHASE"
    CARD_NOT_FOUND = "CARD_NOT_FOUND"
    INVALID_CARD = "INVALID_CARD"
    INVALID_EQUATION = "INVALID_EQUATION"
    INVALID_COMBINATION = "INVALID_COMBINATION"
    ALREADY_PLAYED = "ALREADY_PLAYED"
    IDENTICAL_LIMIT = "IDENTICAL_LIMIT"
    OBLIGATION_PENDING = "OBLIGATION_PENDING"
    NO_ATTACK = "NO_ATTACK"
    TOO_MANY_CARDS = "TOO_MANY_CARDS"
    INVALID_SETUP = "INVALID_SETUP"


@dataclass
class ActionPayload:
    """
    Parameters of an action.

    Different action types use different fields; validation happens
    in the reducer.
    """
    player_id: str | None = None
    card_id: str | None = None

    # confirm_equation
    result: int | None = None
    display: str | None = None

    # play_joker
    operation: str | None = None

    # start_game
    difficulty: str | None = None


@dataclass
class Action:
    """A complete action to be applied to the game state."""
    action_type: ActionType
    payload: ActionPayload

    @property
    def player_id(self) -> str | None:
        return self.payload.player_id

    @classmethod
    def start_game(cls, player_id: str, difficulty: str = "full") -> Action:
        return cls(ActionType.START_GAME, ActionPayload(player_id=player_id, difficulty=difficulty))

    @classmethod
    def begin_turn(cls, player_id: str) -> Action:
        return cls(ActionType.BEGIN_TURN, ActionPayload(player_id=player_id))

    @classmethod
    def roll_dice(cls, player_id: str) -> Action:
        return cls(ActionType.ROLL_DICE, ActionPayload(player_id=player_id))

    @classmethod
    def confirm_equation(cls, player_id: str, result: int, display: str = "") -> Action:
        return cls(
            ActionType.CONFIRM_EQUATION,
            ActionPayload(player_id=player_id, result=result, display=display),
        )

    @classmethod
    def stage_card(cls, player_id: str, card_id: str) -> Action:
        return cls(ActionType.STAGE_CARD, ActionPayload(player_id=player_id, card_id=card_id))

    @classmethod
    def unstage_card(cls, player_id: str, card_id: str) -> Action:
        return cls(ActionType.UNSTAGE_CARD, ActionPayload(player_id=player_id, card_id=card_id))

    @classmethod
    def confirm_staged(cls, player_id: str) -> Action:
        return cls(ActionType.CONFIRM_STAGED, ActionPayload(player_id=player_id))

    @classmethod
    def play_identical(cls, player_id: str, card_id: str) -> Action:
        return cls(ActionType.PLAY_IDENTICAL, ActionPayload(player_id=player_id, card_id=card_id))

    @classmethod
    def play_fraction(cls, player_id: str, card_id: str) -> Action:
        return cls(ActionType.PLAY_FRACTION, ActionPayload(player_id=player_id, card_id=card_id))

    @classmethod
    def defend_fraction_solve(cls, player_id: str, card_id: str) -> Action:
        return cls(
            ActionType.DEFEND_FRACTION_SOLVE,
            ActionPayload(player_id=player_id, card_id=card_id),
        )

    @classmethod
    def defend_fraction_penalty(cls, player_id: str) -> Action:
        return cls(ActionType.DEFEND_FRACTION_PENALTY, ActionPayload(player_id=player_id))

    @classmethod
    def play_operation(cls, player_id: str, card_id: str) -> Action:
        return cls(ActionType.PLAY_OPERATION, ActionPayload(player_id=player_id, card_id=card_id))

    @classmethod
    def play_joker(cls, player_id: str, card_id: str, operation: str) -> Action:
        return cls(
            ActionType.PLAY_JOKER,
            ActionPayload(player_id=player_id, card_id=card_id, operation=operation),
        )

    @classmethod
    def draw_card(cls, player_id: str) -> Action:
        return cls(ActionType.DRAW_CARD, ActionPayload(player_id=player_id))

    @classmethod
    def call_lulos(cls, player_id: str) -> Action:
        return cls(ActionType.CALL_LULOS, ActionPayload(player_id=player_id))

    @classmethod
    def end_turn(cls, player_id: str) -> Action:
        return cls(ActionType.END_TURN, ActionPayload(player_id=player_id))


@dataclass
class ActionResult:
    """
    Result of applying an action.

    On failure the error goes back to the initiator only and the
    previous state stays authoritative.
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: ErrorCode | None = None

    # Human-readable changes, for logs and toasts
    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: ErrorCode | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(success=True, new_state=state, state_changes=changes or [])

    def to_dict(self) -> dict[str, Any]:
        """The structured {error: ...} shape sent back to an initiator."""
        if self.success:
            return {"success": True}
        return {
            "error": self.error,
            "error_code": self.error_code.value if self.error_code else None,
        }
