"""Process-wide identifier and innovation number allocation."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import SupportsInt, cast


@dataclass(frozen=True, slots=True)
class IdentitySnapshot:
    """Serializable view of an allocator's counters.

    Attributes:
        next_id: The next gene identifier that will be issued.
        next_innovation: The next innovation number that will be issued.
    """

    next_id: int
    next_innovation: int


@dataclass(slots=True)
class IdentityAllocator:
    """Issues unique, strictly increasing gene ids and innovation numbers.

    Safe to share between threads: each counter is advanced under a lock so
    no value is ever issued twice.
    """

    next_id_value: int = 1
    next_innovation_value: int = 1
    _lock: threading.Lock = field(
        default_factory=threading.Lock,
        init=False,
        repr=False,
        compare=False,
    )

    def __post_init__(self) -> None:
        self._ensure_non_negative(self.next_id_value, label="next_id")
        self._ensure_non_negative(self.next_innovation_value, label="next_innovation")

    def next_id(self) -> int:
        """Return a fresh gene identifier."""
        with self._lock:
            value = self.next_id_value
            self.next_id_value += 1
        return value

    def next_innovation(self) -> int:
        """Return a fresh innovation number."""
        with self._lock:
            value = self.next_innovation_value
            self.next_innovation_value += 1
        return value

    def reset(self, next_id: int = 1, next_innovation: int = 1) -> None:
        """Rewind both counters, typically between deterministic test runs."""
        self._ensure_non_negative(next_id, label="next_id")
        self._ensure_non_negative(next_innovation, label="next_innovation")
        with self._lock:
            self.next_id_value = next_id
            self.next_innovation_value = next_innovation

    def snapshot(self) -> IdentitySnapshot:
        """Capture the current counter values."""
        with self._lock:
            return IdentitySnapshot(
                next_id=self.next_id_value,
                next_innovation=self.next_innovation_value,
            )

    @classmethod
    def from_snapshot(
        cls,
        snapshot: IdentitySnapshot | Mapping[str, object],
    ) -> IdentityAllocator:
        """Build an allocator resuming from a snapshot or snapshot-like mapping."""
        if isinstance(snapshot, IdentitySnapshot):
            return cls(
                next_id_value=snapshot.next_id,
                next_innovation_value=snapshot.next_innovation,
            )
        try:
            raw_id = snapshot["next_id"]
            raw_innovation = snapshot["next_innovation"]
        except KeyError as error:
            msg = f"Snapshot is missing required key: {error.args[0]}"
            raise ValueError(msg) from error
        return cls(
            next_id_value=cls._coerce_int(raw_id, label="next_id"),
            next_innovation_value=cls._coerce_int(
                raw_innovation, label="next_innovation"
            ),
        )

    @staticmethod
    def _ensure_non_negative(value: int, *, label: str) -> None:
        if value < 0:
            msg = f"{label} must be non-negative."
            raise ValueError(msg)

    @staticmethod
    def _coerce_int(value: object, *, label: str) -> int:
        if isinstance(value, bool):
            msg = f"{label} must be convertible to int."
            raise ValueError(msg)
        if isinstance(value, int):
            return value
        if isinstance(value, (str, bytes, bytearray)):
            try:
                return int(value)
            except ValueError as error:
                msg = f"{label} must be convertible to int."
                raise ValueError(msg) from error
        if hasattr(value, "__int__"):
            try:
                return int(cast(SupportsInt, value))
            except (TypeError, ValueError) as error:
                msg = f"{label} must be convertible to int."
                raise ValueError(msg) from error
        msg = f"{label} must be convertible to int."
        raise ValueError(msg)


DEFAULT_ALLOCATOR = IdentityAllocator()


__all__ = ["DEFAULT_ALLOCATOR", "IdentityAllocator", "IdentitySnapshot"]
