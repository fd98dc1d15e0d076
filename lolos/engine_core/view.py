"""
Player View - What a single player is allowed to see.

The projection keeps the requesting player's own hand and reduces every
other player to a card count. It is recomputed from the authoritative
state on every change and never cached.
"""

from __future__ import annotations
from dataclasses import dataclass

from .state import (
    Card, DiceResult, Difficulty, EquationOption, GamePhase, GameState,
    Operation, PlayerState,
)


@dataclass(frozen=True)
class OpponentView:
    """Public facts about a player; never the hand itself."""
    player_id: str
    name: str
    card_count: int
    is_connected: bool
    is_host: bool
    called_lolos: bool

    @classmethod
    def of(cls, player: PlayerState) -> OpponentView:
        return cls(
            player_id=player.player_id,
            name=player.name,
            card_count=player.card_count,
            is_connected=player.is_connected,
            is_host=player.is_host,
            called_lolos=player.called_lolos,
        )


@dataclass(frozen=True)
class PlayerView:
    game_id: str
    phase: GamePhase
    my_player_id: str
    my_hand: tuple[Card, ...]
    opponents: tuple[OpponentView, ...]
    players: tuple[OpponentView, ...]
    current_player_idx: int
    pile_top: Card | None
    deck_count: int
    dice: DiceResult | None
    valid_targets: tuple[EquationOption, ...]
    equation_result: int | None
    staged_cards: tuple[Card, ...]
    active_operation: Operation | None
    pending_fraction_target: int | None
    fraction_penalty: int
    fraction_attack_resolved: bool
    has_played_cards: bool
    has_drawn_card: bool
    last_card_value: int | None
    consecutive_identical_plays: int
    last_move_message: str | None
    difficulty: Difficulty
    winner: tuple[str, str] | None  # (player_id, name)
    message: str

    @property
    def is_my_turn(self) -> bool:
        if not self.players:
            return False
        return self.players[self.current_player_idx].player_id == self.my_player_id


def get_player_view(state: GameState, player_id: str) -> PlayerView:
    """
    Project the full state down to what player_id may see.

    An unknown player_id gets an empty hand and sees only public state.
    """
    me = state.get_player(player_id)
    winner = state.winner
    return PlayerView(
        game_id=state.game_id,
        phase=state.phase,
        my_player_id=player_id,
        my_hand=me.hand if me else (),
        opponents=tuple(OpponentView.of(p) for p in state.players if p.player_id != player_id),
        players=tuple(OpponentView.of(p) for p in state.players),
        current_player_idx=state.current_player_idx,
        pile_top=state.pile_top,
        deck_count=len(state.draw_pile),
        dice=state.dice,
        valid_targets=state.valid_targets,
        equation_result=state.equation_result,
        staged_cards=state.staged_cards,
        active_operation=state.active_operation,
        pending_fraction_target=state.pending_fraction_target,
        fraction_penalty=state.fraction_penalty,
        fraction_attack_resolved=state.fraction_attack_resolved,
        has_played_cards=state.has_played_cards,
        has_drawn_card=state.has_drawn_card,
        last_card_value=state.last_card_value,
        consecutive_identical_plays=state.consecutive_identical_plays,
        last_move_message=state.last_move_message,
        difficulty=state.difficulty,
        winner=(winner.player_id, winner.name) if winner else None,
        message=state.message,
    )
