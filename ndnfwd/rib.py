"""The Routing Information Base, kept as a name tree that feeds the FIB."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from datetime import timedelta
from typing import Dict, Iterator, List, Optional, Tuple

from ndnfwd.components import NameComponent
from ndnfwd.fib_strategy import FibStrategyEntry
from ndnfwd.name import Name

ROUTE_FLAG_CHILD_INHERIT = 0x01
ROUTE_FLAG_CAPTURE = 0x02

ROUTE_ORIGIN_APP = 0
ROUTE_ORIGIN_STATIC = 255
ROUTE_ORIGIN_NLSR = 128
ROUTE_ORIGIN_PREFIX_ANN = 129
ROUTE_ORIGIN_CLIENT = 65
ROUTE_ORIGIN_AUTOREG = 64
ROUTE_ORIGIN_AUTOCONF = 66


@dataclass
class Route:
    """A route to a prefix through a face."""

    face_id: int
    origin: int
    cost: int
    flags: int = 0
    expiration_period: Optional[timedelta] = None


class RibEntry:
    """A node of the RIB tree; the root node stands for the whole RIB."""

    def __init__(self, fib: FibStrategyEntry) -> None:
        self._fib = fib
        self.component: Optional[NameComponent] = None
        self.name: Name = Name()
        self.depth = 0
        self.parent: Optional[RibEntry] = None
        self._children: List[RibEntry] = []
        self._routes: List[Route] = []
        self._prefixes: Dict[str, RibEntry] = {}

    def __repr__(self) -> str:
        return f"RibEntry({str(self.name)!r})"

    @property
    def children(self) -> Tuple["RibEntry", ...]:
        return tuple(self._children)

    @property
    def routes(self) -> List[Route]:
        """The routes held at this node."""
        return list(self._routes)

    @property
    def rib_prefixes(self) -> Dict[str, "RibEntry"]:
        """Entries that hold routes, keyed by prefix string."""
        return dict(self._prefixes)

    # -- tree helpers -------------------------------------------------------

    def _new_child(self, component: NameComponent, name: Name) -> "RibEntry":
        child = RibEntry(self._fib)
        child.component = component
        child.name = name
        child.depth = self.depth + 1
        child.parent = self
        child._prefixes = self._prefixes
        self._children.append(child)
        return child

    def _matching_child(self, name: Name) -> Optional["RibEntry"]:
        component = name.at(self.depth)
        return next((child for child in self._children if child.component == component), None)

    def _find_exact(self, name: Name) -> Optional["RibEntry"]:
        node = self
        while len(name) > node.depth:
            child = node._matching_child(name)
            if child is None:
                return None
            node = child
        return node if len(name) == node.depth else None

    def _find_longest(self, name: Name) -> "RibEntry":
        node = self
        while len(name) > node.depth:
            child = node._matching_child(name)
            if child is None:
                break
            node = child
        return node

    def _fill_to(self, name: Name) -> "RibEntry":
        node = self._find_longest(name)
        for depth in range(node.depth + 1, len(name) + 1):
            node = node._new_child(name.at(depth - 1).deep_copy(), name.prefix(depth))
        return node

    def _prune(self) -> None:
        node = self
        while node.parent is not None and not node._children and not node._routes:
            node.parent._children.remove(node)
            node = node.parent

    def _walk(self) -> Iterator["RibEntry"]:
        pending = deque([self])
        while pending:
            node = pending.popleft()
            pending.extendleft(node._children)
            yield node

    def _update_nexthops(self, node: "RibEntry") -> None:
        self._fib.clear_nexthops(node.name)
        min_costs: Dict[int, int] = {}
        for route in node._routes:
            if route.face_id not in min_costs or route.cost < min_costs[route.face_id]:
                min_costs[route.face_id] = route.cost
        for face_id, cost in min_costs.items():
            self._fib.add_nexthop(node.name, face_id, cost)

    # -- public operations --------------------------------------------------

    def add_route(
        self,
        name: Name,
        face_id: int,
        origin: int,
        cost: int,
        flags: int = 0,
        expiration_period: Optional[timedelta] = None,
    ) -> None:
        """Add a route to a prefix, or update the one with the same face and origin."""
        node = self._fill_to(name)
        existing = next(
            (r for r in node._routes if r.face_id == face_id and r.origin == origin), None
        )
        if existing is not None:
            existing.cost = cost
            existing.flags = flags
            existing.expiration_period = expiration_period
        else:
            node._routes.append(Route(face_id, origin, cost, flags, expiration_period))
            self._prefixes[str(name)] = node
        self._update_nexthops(node)

    def get_all_entries(self) -> List["RibEntry"]:
        """Return every entry that holds at least one route."""
        return [node for node in self._walk() if node._routes]

    def remove_route(self, name: Name, face_id: int, origin: int) -> None:
        """Remove the route with a face and origin from a prefix."""
        entry = self._find_exact(name)
        if entry is None:
            return
        for index, route in enumerate(entry._routes):
            if route.face_id == face_id and route.origin == origin:
                del entry._routes[index]
                break
        if not entry._routes:
            self._prefixes.pop(str(name), None)
        self._update_nexthops(entry)
        entry._prune()