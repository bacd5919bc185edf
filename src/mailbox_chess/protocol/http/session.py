from __future__ import annotations

import threading
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional

from ...engine.game import Game


@dataclass
class _Session:
    game: Game
    lock: threading.RLock = field(default_factory=threading.RLock)


class InMemorySessionStore:
    """Thread-safe in-memory game session store.

    Each session carries its own lock; :meth:`locked` holds it for the whole
    of a read-modify-write so one board never sees two mutations at once.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._sessions: Dict[str, _Session] = {}

    def create(self, game: Optional[Game] = None) -> str:
        """Create a new game session and return its `game_id`."""
        gid = str(uuid.uuid4())
        with self._lock:
            self._sessions[gid] = _Session(game if game is not None else Game.new())
        return gid

    def get(self, game_id: str) -> Optional[Game]:
        with self._lock:
            session = self._sessions.get(game_id)
        return session.game if session is not None else None

    @contextmanager
    def locked(self, game_id: str) -> Iterator[Optional[Game]]:
        """Yield the session's game with its lock held, or ``None`` if unknown."""
        with self._lock:
            session = self._sessions.get(game_id)
        if session is None:
            yield None
            return
        with session.lock:
            yield session.game

    def replace(self, game_id: str, game: Game) -> None:
        """Swap in a new game (e.g. a new position) for an existing session."""
        with self._lock:
            session = self._sessions.get(game_id)
        if session is None:
            raise KeyError(game_id)
        with session.lock:
            session.game = game

    def delete(self, game_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(game_id, None) is not None
