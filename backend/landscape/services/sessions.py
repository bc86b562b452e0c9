# landscape/services/sessions.py
import logging
import time
import uuid
from collections import OrderedDict
from typing import Callable, Optional

import httpx

from landscape.config import Config
from landscape.services.collaborators import BreakdownService, DesignService, build_top_view_service
from landscape.services.pipeline import PipelineCoordinator

logger = logging.getLogger(__name__)


class SessionStore:
    """
    One PipelineCoordinator per UI session, held in memory only.

    Sessions idle for longer than SESSION_TTL_SECONDS are dropped, and once
    MAX_SESSIONS are live the least recently used one makes room for a new one.
    """

    def __init__(self, config: Config, client: httpx.AsyncClient, clock: Callable[[], float] = time.monotonic):
        self.config = config
        self.client = client
        self.clock = clock
        # session id -> (coordinator, last access), least recently used first
        self._sessions: "OrderedDict[str, tuple]" = OrderedDict()

    def build_coordinator(self) -> PipelineCoordinator:
        return PipelineCoordinator(
            DesignService(self.client, self.config.endpoint(self.config.GENERATE_PATH)),
            BreakdownService(self.client, self.config.endpoint(self.config.BREAKDOWN_PATH)),
            build_top_view_service(self.config, self.client),
            self.config,
        )

    def prune(self) -> None:
        cutoff = self.clock() - self.config.SESSION_TTL_SECONDS
        expired = [sid for sid, (_, seen) in self._sessions.items() if seen < cutoff]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info("Dropped %d idle sessions", len(expired))

    def create(self) -> str:
        self.prune()
        while self._sessions and len(self._sessions) >= self.config.MAX_SESSIONS:
            evicted, _ = self._sessions.popitem(last=False)
            logger.info("Evicted session %s to stay under %d", evicted, self.config.MAX_SESSIONS)

        session_id = uuid.uuid4().hex
        self._sessions[session_id] = (self.build_coordinator(), self.clock())
        logger.info("Created session %s", session_id)
        return session_id

    def get(self, session_id: str) -> Optional[PipelineCoordinator]:
        self.prune()
        entry = self._sessions.get(session_id)
        if entry is None:
            return None
        self._sessions[session_id] = (entry[0], self.clock())
        self._sessions.move_to_end(session_id)
        return entry[0]

    def discard(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None
