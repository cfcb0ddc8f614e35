from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

DEFAULT_SERVICE = "GenericService"
DEFAULT_PROCESS = "GenericProcess"
DEFAULT_ACTION = "unspecified"
DEFAULT_RESULT = "undefined"
DEFAULT_MESSAGE = "generic message"
DEFAULT_CATEGORY = "undefined"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 514
RECORD_VERSION = "1.0"


class SendOptions(BaseModel):
    """Fields for a single send. user and server_name fall back to the host environment."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    service: str = DEFAULT_SERVICE
    process: str = DEFAULT_PROCESS
    action: str = DEFAULT_ACTION
    result: str = DEFAULT_RESULT
    message: str = DEFAULT_MESSAGE
    category: str = DEFAULT_CATEGORY
    host: str = Field(DEFAULT_HOST, min_length=1)
    port: int = Field(DEFAULT_PORT, ge=1)
    user: Optional[str] = None
    server_name: Optional[str] = None
    # None keeps the OS default (blocking) connect behaviour
    timeout_seconds: Optional[float] = Field(None, gt=0)

    @field_validator(
        "service", "process", "action", "result", "message", "category", "host", "port",
        mode="before",
    )
    @classmethod
    def _none_means_default(cls, v: Any, info: ValidationInfo) -> Any:
        # None leaves a field unset, the same as omitting it
        if v is None:
            return cls.model_fields[info.field_name].default
        return v


class LogRecord(BaseModel):
    """The JSON object written to the receiver. Field order is the wire order."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    timestamp: str
    service: str
    process: str
    server: str
    action: str
    result: str
    message: str
    category: str
    user: str
    version: str = RECORD_VERSION


class ReceivedLine(BaseModel):
    ts: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    raw: str
    remote_addr: str
    connection_id: int
    terminated: bool = True

    def as_json_dict(self) -> Dict[str, Any]:
        return json.loads(self.raw)

    def as_record(self) -> LogRecord:
        return LogRecord.model_validate_json(self.raw)
