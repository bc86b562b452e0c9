from pydantic import BaseModel, ConfigDict
from typing import Any, Optional, Literal

StageStatus = Literal["idle", "pending", "succeeded", "failed"]


class DesignArtifact(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    promptUsed: str


class TopViewArtifact(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str


class StageState(BaseModel):
    """Exactly one of idle / pending / succeeded(result) / failed(message)."""
    model_config = ConfigDict(frozen=True)

    status: StageStatus = "idle"
    result: Optional[Any] = None
    message: Optional[str] = None

    @classmethod
    def idle(cls) -> "StageState":
        return cls()

    @classmethod
    def pending(cls) -> "StageState":
        return cls(status="pending")

    @classmethod
    def succeeded(cls, result: Any) -> "StageState":
        return cls(status="succeeded", result=result)

    @classmethod
    def failed(cls, message: str) -> "StageState":
        return cls(status="failed", message=message)

    @property
    def is_pending(self) -> bool:
        return self.status == "pending"

    @property
    def is_succeeded(self) -> bool:
        return self.status == "succeeded"


class PipelineState(BaseModel):
    design: StageState
    breakdown: StageState
    topView: StageState


class SessionResponse(BaseModel):
    sessionId: str
    hasReference: bool
    stages: PipelineState
    rebateUrl: Optional[str] = None
