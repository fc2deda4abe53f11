"""The Dead Nonce List of a forwarding thread."""

from __future__ import annotations

import hashlib
import queue
import threading
from collections import deque
from typing import Deque, Set

from ndnfwd.name import Name
from ndnfwd.tlv import TooShortError

_MASK64 = (1 << 64) - 1


def _entry_hash(name: Name, nonce: bytes) -> int:
    if len(nonce) < 4:
        raise TooShortError()
    digest = hashlib.blake2b(name.encode().wire(), digest_size=8).digest()
    return (int.from_bytes(digest, "big") + int.from_bytes(bytes(nonce[:4]), "big")) & _MASK64


class DeadNonceList:
    """Recently seen name and nonce pairs, each expiring after a fixed lifetime.

    When an entry's lifetime passes, ``True`` is put on ``expiration_timer``;
    the owning thread then calls :meth:`remove_expired_entry`.
    """

    def __init__(self, lifetime: float = 6.0, queue_size: int = 1024) -> None:
        self.lifetime = lifetime
        self.expiration_timer: "queue.Queue[bool]" = queue.Queue(maxsize=queue_size)
        self._entries: Set[int] = set()
        self._expiring: Deque[int] = deque()

    def __len__(self) -> int:
        return len(self._entries)

    def find(self, name: Name, nonce: bytes) -> bool:
        """Return whether the name and nonce pair is present."""
        return _entry_hash(name, nonce) in self._entries

    def insert(self, name: Name, nonce: bytes) -> bool:
        """Add a name and nonce pair; return whether it was already present."""
        entry = _entry_hash(name, nonce)
        if entry in self._entries:
            return True
        self._entries.add(entry)
        self._expiring.append(entry)
        timer = threading.Timer(self.lifetime, self.expiration_timer.put, args=(True,))
        timer.daemon = True
        timer.start()
        return False

    def remove_expired_entry(self) -> None:
        """Remove the oldest entry, if any."""
        if self._expiring:
            self._entries.discard(self._expiring.popleft())