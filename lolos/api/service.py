"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine actions
2. Manages tables through the SessionManager
3. Converts engine views to response schemas
4. Hands per-player views to broadcast listeners

This layer is framework-agnostic (can be used with FastAPI, a socket
server, or directly from tests).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable
import logging

from .schemas import (
    ActionRequest,
    ActionResponse,
    CardSchema,
    CreateGameRequest,
    DiceSchema,
    EquationOptionSchema,
    ErrorCode,
    ErrorResponse,
    GameCreatedResponse,
    OpponentSchema,
    PlayerViewResponse,
    WinnerSchema,
)
from ..config import ServerConfig
from ..engine_core.action import Action, ActionPayload, ActionType
from ..engine_core.state import Card, Seat
from ..engine_core.view import PlayerView
from ..session import SessionManager

logger = logging.getLogger(__name__)

# Called with (game_id, {player_id: view}) after every accepted action
Listener = Callable[[str, dict[str, PlayerViewResponse]], None]


def card_to_schema(card: Card) -> CardSchema:
    return CardSchema(
        card_id=card.card_id,
        card_type=card.card_type.value,
        value=card.value,
        fraction=card.fraction.value if card.fraction else None,
        operation=card.operation.value if card.operation else None,
        label=card.label,
    )


def view_to_response(view: PlayerView) -> PlayerViewResponse:
    """Convert an engine PlayerView to its response schema."""
    return PlayerViewResponse(
        game_id=view.game_id,
        phase=view.phase.value,
        my_player_id=view.my_player_id,
        is_my_turn=view.is_my_turn,
        my_hand=[card_to_schema(c) for c in view.my_hand],
        opponents=[OpponentSchema.model_validate(o) for o in view.opponents],
        players=[OpponentSchema.model_validate(p) for p in view.players],
        current_player_idx=view.current_player_idx,
        pile_top=card_to_schema(view.pile_top) if view.pile_top else None,
        deck_count=view.deck_count,
        dice=DiceSchema.model_validate(view.dice) if view.dice else None,
        valid_targets=[EquationOptionSchema.model_validate(t) for t in view.valid_targets],
        equation_result=view.equation_result,
        staged_cards=[card_to_schema(c) for c in view.staged_cards],
        active_operation=view.active_operation.value if view.active_operation else None,
        pending_fraction_target=view.pending_fraction_target,
        fraction_penalty=view.fraction_penalty,
        fraction_attack_resolved=view.fraction_attack_resolved,
        has_played_cards=view.has_played_cards,
        has_drawn_card=view.has_drawn_card,
        last_card_value=view.last_card_value,
        consecutive_identical_plays=view.consecutive_identical_plays,
        last_move_message=view.last_move_message,
        difficulty=view.difficulty.value,
        winner=WinnerSchema(player_id=view.winner[0], name=view.winner[1]) if view.winner else None,
        message=view.message,
    )


def request_to_action(request: ActionRequest) -> Action:
    """
    Build an engine Action from a request.

    Raises:
        ValueError: unknown action type
    """
    action_type = ActionType(request.action_type)
    return Action(
        action_type,
        ActionPayload(
            player_id=request.player_id,
            card_id=request.card_id,
            result=request.result,
            display=request.display,
            operation=request.operation,
            difficulty=request.difficulty.value if request.difficulty else None,
        ),
    )


@dataclass
class GameService:
    """
    Main API service.

    Usage:
        service = GameService()

        # Open a table
        created = service.create_game(request)

        # Apply a move
        response = service.apply_action(created.game_id, action_request)

        # Fetch a seat's view
        view = service.get_view(created.game_id, player_id)
    """
    session_manager: SessionManager = field(default_factory=SessionManager)
    server_config: ServerConfig = field(default_factory=ServerConfig.from_env)
    listeners: list[Listener] = field(default_factory=list)

    def subscribe(self, listener: Listener):
        """Register a broadcast listener for accepted actions."""
        self.listeners.append(listener)

    def create_game(self, request: CreateGameRequest) -> GameCreatedResponse:
        """
        Open a table for the given roster.

        Finished tables idle past the configured limit are dropped first.

        Raises:
            ValueError: roster rejected (too few players, duplicate ids)
        """
        ids = [p.player_id for p in request.players]
        if len(ids) != len(set(ids)):
            raise ValueError("Player ids must be unique")
        self.cleanup()
        roster = [
            Seat(player_id=p.player_id, name=p.name, is_host=p.is_host, is_connected=p.is_connected)
            for p in request.players
        ]
        table = self.session_manager.create_table(
            roster, difficulty=request.difficulty.value, deal=request.deal,
        )
        state = table.state
        return GameCreatedResponse(
            game_id=state.game_id,
            phase=state.phase.value,
            players=[
                OpponentSchema(
                    player_id=p.player_id,
                    name=p.name,
                    card_count=p.card_count,
                    is_connected=p.is_connected,
                    is_host=p.is_host,
                    called_lolos=p.called_lolos,
                )
                for p in state.players
            ],
        )

    def list_games(self) -> list[str]:
        return self.session_manager.list_active_tables()

    def get_view(self, game_id: str, player_id: str) -> PlayerViewResponse | ErrorResponse:
        """Get one seat's view of a game."""
        table = self.session_manager.get_table(game_id)
        if table is None:
            return ErrorResponse(error="Game not found", error_code=ErrorCode.GAME_NOT_FOUND.value)
        if table.state.get_player(player_id) is None:
            return ErrorResponse(
                error=f"Player {player_id} not found",
                error_code="PLAYER_NOT_FOUND",
            )
        return view_to_response(table.view_for(player_id))

    def apply_action(self, game_id: str, request: ActionRequest) -> ActionResponse | ErrorResponse:
        """
        Apply one player intent.

        On success every listener receives the new per-seat views and the
        caller gets its own. On failure only the caller sees the error.
        """
        table = self.session_manager.get_table(game_id)
        if table is None:
            return ErrorResponse(error="Game not found", error_code=ErrorCode.GAME_NOT_FOUND.value)
        try:
            action = request_to_action(request)
        except ValueError:
            return ErrorResponse(
                error=f"Unknown action type: {request.action_type}",
                error_code=ErrorCode.INVALID_ACTION.value,
            )

        update = table.apply(action)
        if not update.success:
            code = update.result.error_code
            return ErrorResponse(
                error=update.result.error or "Action rejected",
                error_code=code.value if code else ErrorCode.RULE_VIOLATION.value,
            )

        views = {pid: view_to_response(v) for pid, v in update.views.items()}
        for listener in self.listeners:
            listener(game_id, views)
        return ActionResponse(changes=update.result.state_changes, view=views[request.player_id])

    def end_game(self, game_id: str, reason: str = "user_ended") -> bool:
        return self.session_manager.end_table(game_id, reason)

    def cleanup(self) -> list[str]:
        """Drop finished tables idle past the configured limit."""
        removed = self.session_manager.cleanup_stale_tables(self.server_config.stale_seconds)
        if removed:
            logger.info("Dropped %d stale tables", len(removed))
        return removed
