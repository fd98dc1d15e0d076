"""
Session Manager - Creates and manages game tables.

LIFECYCLE:
1. A room hands over its roster -> a GameTable is created and dealt
2. During the game:
   - Intents arrive from any seat, in any order
   - The table applies them one at a time through the reducer
   - On success every seat receives its own redacted view
   - On failure only the initiator receives the error
3. Game over or the room closes -> the table is ended and dropped

PERSISTENCE RULES:
- NO database; tables are in-memory only
- A table's state is only ever replaced, never edited in place
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
import logging
import random
import threading
import time
import uuid

from ..config import GameConfig, DEFAULT_CONFIG
from ..engine_core.state import Difficulty, GamePhase, GameState, Seat
from ..engine_core.action import Action, ActionResult
from ..engine_core.reducer import Reducer
from ..engine_core.setup import create_lobby, start_game
from ..engine_core.view import PlayerView, get_player_view

logger = logging.getLogger(__name__)


class TableState(Enum):
    """State of a game table."""
    LOBBY = "lobby"  # Roster seated, not dealt yet
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # Someone won
    CLOSED = "closed"  # Ended by the room


@dataclass
class TableUpdate:
    """
    Outcome of one intent applied to a table.

    On success views holds one projection per seat, ready to broadcast.
    On failure only result.error goes back to the initiator.
    """
    result: ActionResult
    views: dict[str, PlayerView] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return self.result.success


class GameTable:
    """
    One authoritative game and the lock that serializes intents to it.

    Every intent for the table is applied under the lock, so two intents
    never interleave and each sees the state the previous one left.
    """

    def __init__(
        self,
        state: GameState,
        config: GameConfig = DEFAULT_CONFIG,
        rng: random.Random | None = None,
    ):
        self._state = state
        self._lock = threading.Lock()
        self.reducer = Reducer(config=config, rng=rng or random.Random())
        self.created_at = time.time()
        self.last_activity = self.created_at
        self.closed = False

    @property
    def table_id(self) -> str:
        return self._state.game_id

    @property
    def state(self) -> GameState:
        """The current authoritative snapshot."""
        return self._state

    @property
    def status(self) -> TableState:
        if self.closed:
            return TableState.CLOSED
        if self._state.phase == GamePhase.LOBBY:
            return TableState.LOBBY
        if self._state.phase == GamePhase.GAME_OVER:
            return TableState.GAME_OVER
        return TableState.ACTIVE

    def is_active(self) -> bool:
        return self.status in {TableState.LOBBY, TableState.ACTIVE}

    def apply(self, action: Action) -> TableUpdate:
        """Apply one intent; swap the state and fan out views on success."""
        with self._lock:
            if self.closed:
                return TableUpdate(result=ActionResult.failure("Table is closed"))
            result = self.reducer.apply(self._state, action)
            if not result.success:
                logger.info(
                    "Table %s rejected %s from %s: %s",
                    self.table_id, action.action_type.value, action.player_id, result.error,
                )
                return TableUpdate(result=result)

            self._state = result.new_state
            self.last_activity = time.time()
            if self._state.phase == GamePhase.GAME_OVER:
                logger.info("Table %s finished, winner %s", self.table_id, self._state.winner_id)
            return TableUpdate(result=result, views=self.views())

    def view_for(self, player_id: str) -> PlayerView:
        return get_player_view(self._state, player_id)

    def views(self) -> dict[str, PlayerView]:
        """One projection per seat, computed from the current state."""
        return {p.player_id: get_player_view(self._state, p.player_id) for p in self._state.players}

    def set_connected(self, player_id: str, connected: bool) -> bool:
        """
        Record a seat's connection flag.

        Connection status never changes turn order; it is only shown to
        the other players.
        """
        with self._lock:
            idx = self._state.player_index(player_id)
            if idx is None:
                return False
            player = self._state.players[idx]
            self._state = self._state.with_player_at(idx, replace(player, is_connected=connected))
            return True

    def close(self):
        with self._lock:
            self.closed = True


class SessionManager:
    """
    Manages game tables.

    Responsibilities:
    - Create tables from a room roster
    - Track active tables
    - Clean up finished and stale tables

    No persistence - tables are in-memory only.
    """

    def __init__(self, config: GameConfig = DEFAULT_CONFIG):
        self.config = config
        self._tables: dict[str, GameTable] = {}
        self._lock = threading.Lock()

    def create_table(
        self,
        roster: list[Seat],
        difficulty: Difficulty | str = Difficulty.FULL,
        deal: bool = True,
        rng: random.Random | None = None,
    ) -> GameTable:
        """
        Create a new game table.

        Args:
            roster: Seats in turn order
            difficulty: easy or full deck
            deal: Deal immediately; otherwise wait in the lobby for start_game
            rng: Randomness for this table (seed it for reproducible games)

        Returns:
            The new GameTable

        Raises:
            ValueError: fewer players than the configured minimum
        """
        rng = rng or random.Random()
        game_id = str(uuid.uuid4())
        if deal:
            state = start_game(roster, difficulty, rng, self.config, game_id=game_id)
        else:
            state = create_lobby(roster, game_id=game_id)

        table = GameTable(state, config=self.config, rng=rng)
        with self._lock:
            self._tables[table.table_id] = table
        logger.info("Created table %s with %d seats", table.table_id, len(roster))
        return table

    def get_table(self, table_id: str) -> GameTable | None:
        """Get a table by ID."""
        return self._tables.get(table_id)

    def end_table(self, table_id: str, reason: str = "completed") -> bool:
        """
        End a table and drop it from memory.

        Returns False when no such table exists.
        """
        with self._lock:
            table = self._tables.pop(table_id, None)
        if table is None:
            return False
        table.close()
        logger.info("Ended table %s (%s)", table_id, reason)
        return True

    def _snapshot(self) -> list[tuple[str, GameTable]]:
        with self._lock:
            return list(self._tables.items())

    def list_active_tables(self) -> list[str]:
        """List IDs of tables still in the lobby or in play."""
        return [tid for tid, table in self._snapshot() if table.is_active()]

    def set_connected(self, table_id: str, player_id: str, connected: bool) -> bool:
        table = self.get_table(table_id)
        if table is None:
            return False
        return table.set_connected(player_id, connected)

    def cleanup_stale_tables(self, max_idle_seconds: int = 1800) -> list[str]:
        """
        Drop finished tables idle for longer than max_idle_seconds.

        Runs before each new table is opened. Returns the dropped IDs.
        """
        current_time = time.time()
        to_remove = [
            tid for tid, table in self._snapshot()
            if not table.is_active() and current_time - table.last_activity > max_idle_seconds
        ]
        for table_id in to_remove:
            self.end_table(table_id, reason="stale")
        return to_remove
