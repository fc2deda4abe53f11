"""A thread-safe key/value table for strategy measurements."""

from __future__ import annotations

import threading
from typing import Any, Dict, Optional


class Measurements:
    """Measurement values keyed by string, updated atomically."""

    def __init__(self) -> None:
        self._table: Dict[str, Any] = {}
        self._lock = threading.Lock()

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._table

    def get(self, key: str) -> Optional[Any]:
        """Return the value at a key, or None if it does not exist."""
        with self._lock:
            return self._table.get(key)

    def set(self, key: str, expected: Any, value: Any) -> bool:
        """Set a key only if it exists and equals the expected value; return success."""
        with self._lock:
            if key not in self._table or self._table[key] != expected:
                return False
            self._table[key] = value
            return True

    def add_to_int(self, key: str, value: int) -> None:
        """Add to the integer at a key, starting from the value if unset."""
        with self._lock:
            current = self._table.get(key)
            self._table[key] = value if current is None else current + value

    def add_sample_to_ewma(self, key: str, measurement: float, alpha: float) -> None:
        """Fold a sample into the exponentially weighted moving average at a key."""
        with self._lock:
            current = self._table.get(key)
            if current is None:
                self._table[key] = measurement
            else:
                self._table[key] = measurement + alpha * (measurement - current)