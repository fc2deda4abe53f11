"""The combined FIB and Strategy Choice table, stored as a name tree."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from ndnfwd.components import NameComponent
from ndnfwd.name import Name, name_from_string

DEFAULT_STRATEGY = "/localhost/nfd/strategy/best-route/v=1"


@dataclass
class FibNextHopEntry:
    """A nexthop of a FIB entry: a face and the cost of reaching it."""

    nexthop: int
    cost: int


@dataclass
class _TableState:
    lock: threading.RLock = field(default_factory=threading.RLock)
    prefixes: Dict[str, "FibStrategyEntry"] = field(default_factory=dict)


class FibStrategyEntry:
    """A node of the FIB-Strategy tree; the root node stands for the whole table."""

    def __init__(self, strategy: Optional[Name] = None) -> None:
        self.component: Optional[NameComponent] = None
        self.name: Name = Name()
        self.depth = 0
        self.parent: Optional[FibStrategyEntry] = None
        self._children: List[FibStrategyEntry] = []
        self._nexthops: List[FibNextHopEntry] = []
        self._strategy: Optional[Name] = strategy
        self._state = _TableState()

    def __repr__(self) -> str:
        return f"FibStrategyEntry({str(self.name)!r})"

    @property
    def children(self) -> Tuple["FibStrategyEntry", ...]:
        return tuple(self._children)

    @property
    def nexthops(self) -> List[FibNextHopEntry]:
        """The nexthops held at this node."""
        return list(self._nexthops)

    @property
    def strategy(self) -> Optional[Name]:
        """The strategy set at this node, or None."""
        return self._strategy

    @property
    def fib_prefixes(self) -> Dict[str, "FibStrategyEntry"]:
        """Entries that hold nexthops, keyed by prefix string."""
        with self._state.lock:
            return dict(self._state.prefixes)

    # -- tree helpers -------------------------------------------------------

    def _new_child(self, component: NameComponent, name: Name) -> "FibStrategyEntry":
        child = FibStrategyEntry()
        child.component = component
        child.name = name
        child.depth = self.depth + 1
        child.parent = self
        child._state = self._state
        self._children.append(child)
        return child

    def _matching_child(self, name: Name) -> Optional["FibStrategyEntry"]:
        component = name.at(self.depth)
        return next((child for child in self._children if child.component == component), None)

    def _find_exact(self, name: Name) -> Optional["FibStrategyEntry"]:
        node = self
        while len(name) > node.depth:
            child = node._matching_child(name)
            if child is None:
                return None
            node = child
        return node if len(name) == node.depth else None

    def _find_longest(self, name: Name) -> "FibStrategyEntry":
        node = self
        while len(name) > node.depth:
            child = node._matching_child(name)
            if child is None:
                break
            node = child
        return node

    def _fill_to(self, name: Name) -> "FibStrategyEntry":
        node = self._find_longest(name)
        for depth in range(node.depth + 1, len(name) + 1):
            node = node._new_child(name.at(depth - 1).deep_copy(), name.prefix(depth))
        return node

    def _is_empty(self) -> bool:
        return not self._children and not self._nexthops and self._strategy is None

    def _prune(self) -> None:
        node = self
        while node.parent is not None and node._is_empty():
            node.parent._children.remove(node)
            node = node.parent

    def _walk(self) -> Iterator["FibStrategyEntry"]:
        pending = deque([self])
        while pending:
            node = pending.popleft()
            pending.extendleft(node._children)
            yield node

    def _ancestry(self) -> Iterator["FibStrategyEntry"]:
        node: Optional[FibStrategyEntry] = self
        while node is not None:
            yield node
            node = node.parent

    # -- FIB ----------------------------------------------------------------

    def longest_prefix_nexthops(self, name: Name) -> List[FibNextHopEntry]:
        """Return the nexthops of the longest prefix of a name that has any."""
        with self._state.lock:
            for node in self._find_longest(name)._ancestry():
                if node._nexthops:
                    return list(node._nexthops)
            return []

    def add_nexthop(self, name: Name, nexthop: int, cost: int) -> None:
        """Add a nexthop to a prefix, or update its cost if already present."""
        with self._state.lock:
            entry = self._fill_to(name)
            for existing in entry._nexthops:
                if existing.nexthop == nexthop:
                    existing.cost = cost
                    return
            entry._nexthops.append(FibNextHopEntry(nexthop, cost))
            self._state.prefixes[str(name)] = entry

    def clear_nexthops(self, name: Name) -> None:
        """Remove every nexthop of a prefix."""
        with self._state.lock:
            entry = self._find_exact(name)
            if entry is not None:
                entry._nexthops = []

    def remove_nexthop(self, name: Name, nexthop: int) -> None:
        """Remove one nexthop from a prefix, pruning the tree if it becomes empty."""
        with self._state.lock:
            entry = self._find_exact(name)
            if entry is None:
                return
            for index, existing in enumerate(entry._nexthops):
                if existing.nexthop == nexthop:
                    del entry._nexthops[index]
                    break
            if not entry._nexthops:
                self._state.prefixes.pop(str(name), None)
            entry._prune()

    def get_all_fib_entries(self) -> List["FibStrategyEntry"]:
        """Return every entry that holds at least one nexthop."""
        with self._state.lock:
            return [node for node in self._walk() if node._nexthops]

    # -- Strategy choice ----------------------------------------------------

    def longest_prefix_strategy(self, name: Name) -> Optional[Name]:
        """Return the strategy of the longest prefix of a name that has one."""
        with self._state.lock:
            for node in self._find_longest(name)._ancestry():
                if node._strategy is not None:
                    return node._strategy
            return None

    def set_strategy(self, name: Name, strategy: Name) -> None:
        """Set the strategy for a prefix."""
        with self._state.lock:
            self._fill_to(name)._strategy = strategy

    def unset_strategy(self, name: Name) -> None:
        """Remove the strategy of a prefix, pruning the tree if it becomes empty."""
        with self._state.lock:
            entry = self._find_exact(name)
            if entry is not None:
                entry._strategy = None
                entry._prune()

    def get_all_strategy_choices(self) -> List["FibStrategyEntry"]:
        """Return every entry that has a strategy set."""
        with self._state.lock:
            return [node for node in self._walk() if node._strategy is not None]


def new_fib_strategy_table() -> FibStrategyEntry:
    """Create an empty table whose root uses the best-route strategy."""
    return FibStrategyEntry(name_from_string(DEFAULT_STRATEGY))