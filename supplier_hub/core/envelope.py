"""
Uniform response envelope: {status, message, data, timestamp}.

Handlers return an ``Ok`` or a ``Fail``; ``render`` is the only place that
turns either into an HTTP response.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Literal, Optional, Union

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from supplier_hub.core.errors import ErrorKind, RelayError


def utc_now_iso() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2024-01-01T12:00:00.000Z"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def create_response(status: int, data: Any = None, message: Optional[str] = None) -> Dict[str, Any]:
    return {
        "status": status,
        "message": message or ("Error" if status >= 400 else "Success"),
        "data": data,
        "timestamp": utc_now_iso(),
    }


@dataclass
class Ok:
    data: Any = None
    message: str = "Success"
    status: int = 200
    success: Literal[True] = True


@dataclass
class Fail:
    kind: ErrorKind
    message: str
    data: Any = None
    success: Literal[False] = False

    @property
    def status(self) -> int:
        return self.kind.status_code

    @classmethod
    def from_error(cls, error: RelayError) -> "Fail":
        return cls(kind=error.kind, message=error.message, data=error.data)


Outcome = Union[Ok, Fail]


def render(outcome: Outcome, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    body = create_response(outcome.status, outcome.data, outcome.message)
    return JSONResponse(
        status_code=outcome.status,
        content=jsonable_encoder(body),
        headers=headers
    )
