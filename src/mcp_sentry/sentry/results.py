"""Outcome of a single Sentry tool invocation."""

import json
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class OperationResult:
    """Either shaped data under ``output_key`` or an error message."""

    output_key: str
    data: Any = None
    error: str | None = None
    status_code: int | None = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @classmethod
    def success(cls, output_key: str, data: Any) -> "OperationResult":
        return cls(output_key=output_key, data=data)

    @classmethod
    def failure(
        cls, output_key: str, message: str, status_code: int | None = None
    ) -> "OperationResult":
        return cls(output_key=output_key, error=message, status_code=status_code)

    def to_text(self) -> str:
        """Human-readable form: pretty-printed JSON, or the error message."""
        if self.error is not None:
            return self.error
        return json.dumps(self.data, indent=2, ensure_ascii=False)

    def to_structured(self) -> dict[str, Any] | None:
        """Structured content keyed by the output name; ``None`` on failure."""
        if self.error is not None:
            return None
        return {self.output_key: self.data}
