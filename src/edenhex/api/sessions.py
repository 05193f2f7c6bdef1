"""
In-memory session manager for generated maps.

Each session wraps a TerrainGenerator (the frozen map plus its queries)
and a GameSession played on it. Maps are regenerated from their config
and seed rather than persisted.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any

from edenhex.core.config import MapConfig
from edenhex.core.terrain_generator import TerrainGenerator
from edenhex.game.session import GameSession

logger = logging.getLogger(__name__)


@dataclass
class MapSession:
    """A generated map and the game running on it."""

    id: str
    name: str
    config: MapConfig
    generator: TerrainGenerator
    game: GameSession


class SessionManager:
    """Manages multiple map sessions in memory.

    Parameters
    ----------
    max_sessions : int | None
        Upper bound on live sessions. When exceeded the oldest session is
        evicted. ``None`` disables the bound.
    """

    def __init__(self, max_sessions: int | None = None):
        self.sessions: dict[str, MapSession] = {}
        self.max_sessions = max_sessions

    def create_session(
        self,
        config: MapConfig | None = None,
        name: str | None = None,
    ) -> MapSession:
        """Generate a map and open a game on it.

        Raises ConfigurationError (a ValueError) for invalid configs.
        """
        if config is None:
            config = MapConfig()
        config.validate()

        generator = TerrainGenerator(config)
        generator.generate()

        session = MapSession(
            id=uuid.uuid4().hex[:8],
            name=name or config.map_name,
            config=config,
            generator=generator,
            game=GameSession(generator),
        )
        self.sessions[session.id] = session
        logger.info("Created map session %s (%s)", session.id, session.name)
        self._evict_overflow()
        return session

    def _evict_overflow(self) -> None:
        if self.max_sessions is None:
            return
        while len(self.sessions) > self.max_sessions:
            oldest = next(iter(self.sessions))
            del self.sessions[oldest]
            logger.warning("Evicted map session %s (limit %d)", oldest, self.max_sessions)

    def get_session(self, session_id: str) -> MapSession:
        """Raises KeyError if not found."""
        if session_id not in self.sessions:
            raise KeyError(f"Session '{session_id}' not found")
        return self.sessions[session_id]

    def delete_session(self, session_id: str) -> bool:
        removed = self.sessions.pop(session_id, None) is not None
        if removed:
            logger.info("Deleted map session %s", session_id)
        return removed

    def list_sessions(self) -> list[dict[str, Any]]:
        return [
            {
                "id": s.id,
                "name": s.name,
                "width": s.config.width,
                "height": s.config.height,
                "orientation": s.config.orientation.value,
                "current_turn": s.game.current_turn,
            }
            for s in self.sessions.values()
        ]
