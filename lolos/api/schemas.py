"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a game client and the engine.
Hands other than the caller's own never appear in any response.

Error Codes:
- GAME_NOT_FOUND: Game does not exist or has been ended
- INVALID_ACTION: Unknown action type or malformed payload
- INVALID_SETUP: Roster or difficulty rejected at creation
- any engine rule code (NOT_YOUR_TURN, WRONG_PHASE, ...) for rejected moves
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class DifficultyLevel(str, Enum):
    EASY = "easy"
    FULL = "full"


class ErrorCode(str, Enum):
    """Structured error codes at the API boundary."""
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    INVALID_ACTION = "INVALID_ACTION"
    INVALID_SETUP = "INVALID_SETUP"
    RULE_VIOLATION = "RULE_VIOLATION"


# =============================================================================
# Shared Models
# =============================================================================

class SeatSchema(BaseModel):
    """A roster entry."""
    player_id: str
    name: str
    is_host: bool = False
    is_connected: bool = True

    model_config = {"from_attributes": True}


class CardSchema(BaseModel):
    """Card information for display."""
    card_id: str
    card_type: str = Field(description="number, fraction, operation or joker")
    value: Optional[int] = None
    fraction: Optional[str] = None
    operation: Optional[str] = None
    label: str


class OpponentSchema(BaseModel):
    """Public information about a seat; hands are reduced to counts."""
    player_id: str
    name: str
    card_count: int
    is_connected: bool = True
    is_host: bool = False
    called_lolos: bool = False

    model_config = {"from_attributes": True}


class DiceSchema(BaseModel):
    die1: int
    die2: int
    die3: int

    model_config = {"from_attributes": True}


class EquationOptionSchema(BaseModel):
    display: str
    result: int

    model_config = {"from_attributes": True}


class WinnerSchema(BaseModel):
    player_id: str
    name: str


# =============================================================================
# Requests
# =============================================================================

class CreateGameRequest(BaseModel):
    """Request to open a table for a roster."""
    players: list[SeatSchema] = Field(..., min_length=1, description="Seats in turn order")
    difficulty: DifficultyLevel = DifficultyLevel.FULL
    deal: bool = Field(True, description="Deal now; otherwise wait for start_game")


class ActionRequest(BaseModel):
    """One player intent."""
    player_id: str
    action_type: str = Field(..., description="e.g. roll_dice, stage_card, play_fraction")
    card_id: Optional[str] = None
    result: Optional[int] = Field(None, description="confirm_equation: chosen target")
    display: Optional[str] = Field(None, description="confirm_equation: equation shown")
    operation: Optional[str] = Field(None, description="play_joker: + - x ÷")
    difficulty: Optional[DifficultyLevel] = Field(None, description="start_game only")


# =============================================================================
# Responses
# =============================================================================

class PlayerViewResponse(BaseModel):
    """Everything one player is allowed to see."""
    game_id: str
    phase: str
    my_player_id: str
    is_my_turn: bool
    my_hand: list[CardSchema] = Field(default_factory=list)
    opponents: list[OpponentSchema] = Field(default_factory=list)
    players: list[OpponentSchema] = Field(default_factory=list)
    current_player_idx: int
    pile_top: Optional[CardSchema] = None
    deck_count: int
    dice: Optional[DiceSchema] = None
    valid_targets: list[EquationOptionSchema] = Field(default_factory=list)
    equation_result: Optional[int] = None
    staged_cards: list[CardSchema] = Field(default_factory=list)
    active_operation: Optional[str] = None
    pending_fraction_target: Optional[int] = None
    fraction_penalty: int = 0
    fraction_attack_resolved: bool = False
    has_played_cards: bool = False
    has_drawn_card: bool = False
    last_card_value: Optional[int] = None
    consecutive_identical_plays: int = 0
    last_move_message: Optional[str] = None
    difficulty: DifficultyLevel
    winner: Optional[WinnerSchema] = None
    message: str = ""


class GameCreatedResponse(BaseModel):
    game_id: str
    phase: str
    players: list[OpponentSchema]


class ActionResponse(BaseModel):
    """Result of an accepted action: the caller's fresh view."""
    success: bool = True
    changes: list[str] = Field(default_factory=list)
    view: PlayerViewResponse


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: str = Field(..., description="Machine-readable error code")
    api_version: str = Field("v1", description="API version")


class GameListResponse(BaseModel):
    """Response listing active games."""
    games: list[str]
    count: int


class EndGameResponse(BaseModel):
    success: bool
    game_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
