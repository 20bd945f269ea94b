"""Tagged result values returned by validation and upstream steps."""

import json
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class ErrorResponse:
    """An error ready to be returned to the caller as ``{"error": {"message": ...}}``."""

    status_code: int
    message: str

    @property
    def body(self) -> str:
        return json.dumps({"error": {"message": self.message}})

    def to_envelope(self) -> dict[str, Any]:
        """Render as a function response envelope."""
        return {"statusCode": self.status_code, "body": self.body}


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful step carrying its value."""

    value: T


@dataclass(frozen=True)
class Fail:
    """Failed step carrying the error to return."""

    error: ErrorResponse


Result = Union[Ok[T], Fail]
