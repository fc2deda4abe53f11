"""The table of producer region names of this forwarder."""

from __future__ import annotations

from typing import Iterator, List

from ndnfwd.name import Name


class NetworkRegionTable:
    """Names of the regions whose content this forwarder produces."""

    def __init__(self) -> None:
        self._regions: List[Name] = []

    def __len__(self) -> int:
        return len(self._regions)

    def __iter__(self) -> Iterator[Name]:
        return iter(list(self._regions))

    def add(self, name: Name) -> None:
        """Add a region name, unless an equal one is already present."""
        if name not in self._regions:
            self._regions.append(name)

    def is_producer(self, name: Name) -> bool:
        """Return whether some region name is a prefix of the given name."""
        return any(region.is_prefix_of(name) for region in self._regions)