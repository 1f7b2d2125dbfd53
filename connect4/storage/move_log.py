"""Append-only, per-game record of moves backing undo and replay."""

import logging
from collections.abc import Callable
from typing import TypeVar

from ..core.errors import StoreUnavailable
from ..core.types import MoveRecord
from .interface import KeyValueStore


logger = logging.getLogger(__name__)

T = TypeVar("T")


class MoveLog:
    """Ordered move records keyed by game id.

    Every record is kept in memory and mirrored into a `KeyValueStore`
    under ``"{game_id}.{turn_index}"`` = ``"{player}.{column}"``. If the
    store is missing, unsupported, or fails, the log keeps working in
    memory only for the rest of the session.
    """

    def __init__(self, store: KeyValueStore | None = None):
        self._store: KeyValueStore | None = None
        if store is not None:
            if store.is_supported:
                self._store = store
            else:
                logger.warning("Move store %s not supported, keeping moves in memory", type(store).__name__)
        self._games: dict[int, list[MoveRecord]] = {}

    @property
    def is_persistent(self) -> bool:
        """True while moves are still mirrored into the store."""
        return self._store is not None

    def _with_store(self, op: Callable[[KeyValueStore], T], default: T) -> T:
        if self._store is None:
            return default
        try:
            return op(self._store)
        except StoreUnavailable as e:
            logger.warning("Move store unavailable, keeping moves in memory: %s", e)
            self._store = None
            return default

    def _segment(self, game_id: int) -> list[MoveRecord]:
        """In-memory records of a game, loaded from the store on first use."""
        segment = self._games.get(game_id)
        if segment is None:
            segment = self._with_store(lambda s: self._load(s, game_id), [])
            if segment:
                self._games[game_id] = segment
        return segment

    def _load(self, store: KeyValueStore, game_id: int) -> list[MoveRecord]:
        records: list[MoveRecord] = []
        while True:
            turn_index = len(records)
            value = store.get(f"{game_id}.{turn_index}")
            if value is None:
                break
            try:
                records.append(MoveRecord.decode(game_id, turn_index, value))
            except ValueError as e:
                logger.warning("Stopping read of game %d at turn %d: %s", game_id, turn_index, e)
                break
        if records:
            logger.debug("Loaded %d stored moves for game %d", len(records), game_id)
        return records

    def append(self, record: MoveRecord) -> None:
        """Append the next move of a game.

        Raises:
            ValueError: If ``record.turn_index`` is not the next index
        """
        segment = self._segment(record.game_id)
        if record.turn_index != len(segment):
            raise ValueError(
                f"Out of order move for game {record.game_id}: "
                f"expected turn {len(segment)}, got {record.turn_index}"
            )
        self._games.setdefault(record.game_id, segment).append(record)
        self._with_store(lambda s: s.set(record.key, record.value), None)

    def remove_last(self, game_id: int) -> MoveRecord | None:
        """Remove and return the most recent move of a game."""
        segment = self._segment(game_id)
        if not segment:
            return None
        record = segment.pop()
        self._with_store(lambda s: s.remove(record.key), None)
        return record

    def read_all(self, game_id: int) -> list[MoveRecord]:
        """All moves of a game in turn order."""
        return list(self._segment(game_id))

    def game_ids(self) -> list[int]:
        """Ids of every game with at least one recorded move, ascending."""
        ids = {game_id for game_id, records in self._games.items() if records}
        for key in self._with_store(lambda s: list(s.keys()), []):
            game_raw, sep, turn_raw = key.partition(".")
            if sep and game_raw.isdigit() and turn_raw.isdigit():
                ids.add(int(game_raw))
        return sorted(ids)

    def last_game_id(self) -> int:
        """Highest recorded game id, 0 if none."""
        return max(self.game_ids(), default=0)

    def __len__(self) -> int:
        return sum(len(records) for records in self._games.values())
