"""Resultado etiquetado éxito/falla que devuelven los servicios."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel

T = TypeVar("T")

ErrorCode = Literal[
    "not_found",
    "storage",
    "configuration",
    "validation",
    "unauthorized",
    "unexpected",
]


@dataclass(slots=True)
class Result(Generic[T]):
    ok: bool
    value: T | None = None
    error: str | None = None
    error_code: ErrorCode | None = None
    details: str | None = None

    @staticmethod
    def success(value: T) -> Result[T]:
        return Result(ok=True, value=value)

    @staticmethod
    def failure(
        error: str, code: ErrorCode = "unexpected", *, details: str | None = None
    ) -> Result[Any]:
        return Result(ok=False, error=error, error_code=code, details=details)

    def unwrap_or(self, default: T) -> T:
        return self.value if self.ok and self.value is not None else default

    def to_payload(self, *, exclude: Any = None) -> dict[str, Any]:
        """Forma ``{success, data}`` / ``{success, error, details?}`` para respuestas JSON."""
        if self.ok:
            data = self.value
            if isinstance(data, BaseModel):
                data = data.model_dump(mode="json", exclude=exclude)
            return {"success": True, "data": data}
        payload: dict[str, Any] = {"success": False, "error": self.error}
        if self.details:
            payload["details"] = self.details
        return payload
