"""A network-layer packet waiting on a link, with its link-layer metadata."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Optional

from ndnfwd.tlv import Block


@dataclass
class PendingPacket:
    """A packet to be sent or recently received, plus associated metadata."""

    wire: Optional[Block] = None
    net_packet: Any = None
    pit_token: Optional[bytes] = None
    congestion_mark: Optional[int] = None
    incoming_face_id: Optional[int] = None
    next_hop_face_id: Optional[int] = None
    cache_policy: Optional[int] = None

    def deep_copy(self) -> "PendingPacket":
        """Return a new pending packet sharing the wire and network packet.

        The wire and packet are not duplicated: copies are only taken of
        Data packets, which no thread modifies afterwards.
        """
        return dataclasses.replace(self)