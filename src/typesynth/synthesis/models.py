"""Data models for value synthesis."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class SynthesisResult:
    """Result of a construction attempt (success or failure).

    A failure is distinct from a successful None: callers decide whether to
    degrade to None or raise.
    """

    ok: bool
    value: Any
    error: str | None
    attempts: list[str] = field(default_factory=list)  # Candidate names tried, in order

    @classmethod
    def success(cls, value: Any, attempts: list[str] | None = None) -> "SynthesisResult":
        """Create a successful result."""
        return cls(ok=True, value=value, error=None, attempts=attempts or [])

    @classmethod
    def failure(cls, error: str, attempts: list[str] | None = None) -> "SynthesisResult":
        """Create a failed result."""
        return cls(ok=False, value=None, error=error, attempts=attempts or [])

    def value_or(self, default: Any = None) -> Any:
        """The produced value, or default for a failure."""
        return self.value if self.ok else default
