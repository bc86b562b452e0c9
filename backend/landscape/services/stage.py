# landscape/services/stage.py
import asyncio
import logging
from typing import Awaitable, Callable, Generic, Tuple, TypeVar

from landscape.errors import CollaboratorError, EmptyResultError, StageBusyError
from landscape.models.responses import StageState

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Upstream signatures meaning the model behind the service is unreachable right now
UNAVAILABLE_SIGNATURES: Tuple[str, ...] = ("model not found", "invalid argument")


class StageController(Generic[T]):
    """
    Request lifecycle for one pipeline stage.

    idle/succeeded/failed --trigger--> pending --> succeeded(result) | failed(message)
    reset() forces idle from any state. A result that arrives after a reset
    (or after a newer trigger) belongs to a superseded run and is dropped.
    """

    def __init__(self, name: str, failure_prefix: str, unavailable_message: str):
        self.name = name
        self.failure_prefix = failure_prefix
        self.unavailable_message = unavailable_message
        self._state = StageState.idle()
        self._run = 0

    @property
    def state(self) -> StageState:
        return self._state

    @property
    def busy(self) -> bool:
        return self._state.is_pending

    def reset(self) -> None:
        if self._state.status != "idle":
            logger.info("Stage %s reset to idle (was %s)", self.name, self._state.status)
        self._run += 1
        self._state = StageState.idle()

    def failure_message(self, detail: str) -> str:
        lowered = detail.lower()
        if any(signature in lowered for signature in UNAVAILABLE_SIGNATURES):
            return self.unavailable_message
        return self.failure_prefix + (detail or "Unknown error")

    async def trigger(self, call: Callable[[], Awaitable[T]]) -> StageState:
        if self.busy:
            raise StageBusyError(self.name)
        self._run += 1
        run = self._run
        self._state = StageState.pending()
        logger.info("Stage %s pending (run %d)", self.name, run)

        try:
            result = await call()
        except EmptyResultError as e:
            outcome = StageState.failed(str(e))
        except CollaboratorError as e:
            outcome = StageState.failed(self.failure_message(str(e)))
        except asyncio.CancelledError:
            if run == self._run:
                self._state = StageState.idle()
            raise
        except Exception as e:
            logger.exception("Stage %s crashed", self.name)
            outcome = StageState.failed(self.failure_message(str(e)))
        else:
            outcome = StageState.succeeded(result)

        if run != self._run:
            logger.info("Stage %s dropped stale result of run %d", self.name, run)
            return self._state

        self._state = outcome
        if outcome.status == "failed":
            logger.warning("Stage %s failed: %s", self.name, outcome.message)
        else:
            logger.info("Stage %s succeeded", self.name)
        return outcome
