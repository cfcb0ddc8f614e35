from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SendResult:
    ok: bool
    error: Optional[str] = None
    bytes_sent: int = 0

    @classmethod
    def delivered(cls, bytes_sent: int) -> "SendResult":
        return cls(ok=True, bytes_sent=bytes_sent)

    @classmethod
    def failed(cls, exc: BaseException) -> "SendResult":
        return cls(ok=False, error=describe_error(exc))


def describe_error(exc: BaseException) -> str:
    text = str(exc).strip()
    if not text:
        return type(exc).__name__
    # diagnostics are one line
    return " ".join(text.split())
