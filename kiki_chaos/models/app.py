import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utc_timestamp() -> str:
    return datetime.datetime.now(datetime.timezone.utc).isoformat()


class FailureCause(str, Enum):
    NOT_CONFIGURED = "not-configured"
    UNREACHABLE = "unreachable"
    NOT_FOUND = "not-found"
    COMMAND_FAILED = "command-failed"
    UNKNOWN_SCENARIO = "unknown-scenario"
    NARRATION_FAILED = "narration-failed"


class AppContext(BaseModel):
    verbose: int = 0


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ClusterAvailability(BaseModel):
    available: bool
    cause: Optional[FailureCause] = None
    detail: str = ""


class ActionResult(BaseModel):
    success: bool
    message: str = Field(min_length=1)
    details: str = ""
    cause: Optional[FailureCause] = None

    @classmethod
    def failed(cls, cause: FailureCause, message: str, details: str = ""):
        return cls(success=False, message=message, details=details, cause=cause)

    @property
    def simulated(self) -> bool:
        return self.cause in (FailureCause.NOT_CONFIGURED, FailureCause.UNREACHABLE)


class ChaosRunResponse(CamelModel):
    analysis: str
    score_change: int
    success: bool
    execution_result: str
    execution_details: str
    real_chaos: bool
    timestamp: str = Field(default_factory=utc_timestamp)
