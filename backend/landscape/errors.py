# landscape/errors.py
from typing import Optional


class LandscapeError(Exception):
    """Base class for everything the pipeline raises on purpose."""


class ValidationError(LandscapeError):
    """Bad local input, reported before any network activity."""


class UnsupportedMediaType(ValidationError):
    pass


class PayloadTooLarge(ValidationError):
    pass


class PreconditionError(LandscapeError):
    """A stage was triggered before the design it depends on exists."""


class StageBusyError(LandscapeError):
    """A stage was triggered while its previous call is still in flight."""

    def __init__(self, stage: str):
        super().__init__(f"The {stage} stage is already running.")
        self.stage = stage


class CollaboratorError(LandscapeError):
    """Non-success response, malformed response, or transport failure."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class EmptyResultError(CollaboratorError):
    """The collaborator answered ok but without the expected content."""
