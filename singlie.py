#!/usr/bin/env python3
"""
Singlie - Singly linked lists in two topologies: linear and circular.

Architecture: One Container, Pluggable Links
- Data: mutable Node cells (value + forward link), an explicit Topology tag
- Policies: stateless link rules, one per topology, consulted only where
  the two topologies diverge
- Container: a single list implementation owning head/last/length
- Diagnostics: pure invariant checks (no mutation, no printing)

Execution model: single-threaded and non-reentrant. A callback passed to
for_each/map/filter/reduce must not mutate the list it is iterating; doing so
is undefined behavior.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Generic, Iterable, Iterator, Protocol, Self, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")

DEFAULT_SEPARATOR = ","
NOT_FOUND = -1


# =============================================================================
# DOMAIN TYPES (Data)
# =============================================================================


class Topology(Enum):
    """Linking discipline of a list."""

    LINEAR = auto()  # last.next is None
    CIRCULAR = auto()  # last.next is head


class IndexOutOfRange(IndexError):
    """An index fell outside the valid window of a list."""

    def __init__(self, index: int, length: int) -> None:
        super().__init__(f"List index out of bounds: {index} (length {length})")
        self.index = index
        self.length = length


@dataclass(eq=False)
class Node(Generic[T]):
    """A single storage cell: a value and a link to the next cell."""

    value: T
    next: Node[T] | None = field(default=None, repr=False)  # repr would recurse on a ring


# =============================================================================
# LINK POLICIES (Topology hooks)
# =============================================================================


class LinkPolicy(Protocol):
    """
    Hooks the container calls at the moments linear and circular lists diverge.

    Every hook receives the list being mutated and only rewires node links;
    head, last and length bookkeeping stays in the container.
    """

    topology: Topology

    def link_first_node(self, lst: SinglyLinkedList[Any], node: Node[Any]) -> None:
        """Called once head and last both point at the first node."""
        ...

    def link_new_head(self, lst: SinglyLinkedList[Any], node: Node[Any]) -> None:
        """Called after a prepend to a non-empty list made `node` the head."""
        ...

    def link_new_last(self, lst: SinglyLinkedList[Any], node: Node[Any]) -> None:
        """Called after an append to a non-empty list made `node` the last."""
        ...

    def update_head_links(self, lst: SinglyLinkedList[Any]) -> None:
        """Called after the head was removed and its successor promoted."""
        ...

    def update_last_links(self, lst: SinglyLinkedList[Any], new_last: Node[Any]) -> None:
        """Called after the last node was removed and `new_last` promoted."""
        ...

    def should_clear_on_head_removal(
        self, lst: SinglyLinkedList[Any], following: Node[Any] | None
    ) -> bool:
        """Whether removing the head, whose successor is `following`, empties the list."""
        ...


class LinearLinks:
    """Keeps the chain null-terminated."""

    topology = Topology.LINEAR

    def link_first_node(self, lst: SinglyLinkedList[Any], node: Node[Any]) -> None:
        return

    def link_new_head(self, lst: SinglyLinkedList[Any], node: Node[Any]) -> None:
        return

    def link_new_last(self, lst: SinglyLinkedList[Any], node: Node[Any]) -> None:
        return

    def update_head_links(self, lst: SinglyLinkedList[Any]) -> None:
        return

    def update_last_links(self, lst: SinglyLinkedList[Any], new_last: Node[Any]) -> None:
        new_last.next = None

    def should_clear_on_head_removal(
        self, lst: SinglyLinkedList[Any], following: Node[Any] | None
    ) -> bool:
        return following is None


class CircularLinks:
    """Keeps the chain ring-shaped: last.next always points back to head."""

    topology = Topology.CIRCULAR

    def link_first_node(self, lst: SinglyLinkedList[Any], node: Node[Any]) -> None:
        node.next = node

    def link_new_head(self, lst: SinglyLinkedList[Any], node: Node[Any]) -> None:
        lst.last.next = node

    def link_new_last(self, lst: SinglyLinkedList[Any], node: Node[Any]) -> None:
        node.next = lst.head

    def update_head_links(self, lst: SinglyLinkedList[Any]) -> None:
        lst.last.next = lst.head

    def update_last_links(self, lst: SinglyLinkedList[Any], new_last: Node[Any]) -> None:
        new_last.next = lst.head

    def should_clear_on_head_removal(
        self, lst: SinglyLinkedList[Any], following: Node[Any] | None
    ) -> bool:
        # A one-node ring links the head to itself.
        return following is lst.head


LINK_POLICIES: dict[Topology, LinkPolicy] = {
    Topology.LINEAR: LinearLinks(),
    Topology.CIRCULAR: CircularLinks(),
}


# =============================================================================
# CONTAINER
# =============================================================================


class SinglyLinkedList(Generic[T]):
    """
    A singly linked list whose topology is fixed at construction.

    All traversal, insertion and removal logic lives here; the composed
    LinkPolicy only patches the links that differ between topologies.
    Mutating operations return the list itself so calls can be chained.
    """

    def __init__(self, values: Iterable[T] = (), topology: Topology = Topology.LINEAR) -> None:
        self._links: LinkPolicy = LINK_POLICIES[topology]
        self._head: Node[T] | None = None
        self._last: Node[T] | None = None
        self._length = 0
        self.append(*values)

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def head(self) -> Node[T] | None:
        return self._head

    @property
    def last(self) -> Node[T] | None:
        return self._last

    @property
    def length(self) -> int:
        return self._length

    @property
    def topology(self) -> Topology:
        return self._links.topology

    def is_linear(self) -> bool:
        return self.topology is Topology.LINEAR

    def is_circular(self) -> bool:
        return self.topology is Topology.CIRCULAR

    def is_empty(self) -> bool:
        return self._length == 0

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _check_index(self, index: int, upper: int) -> None:
        """Raise IndexOutOfRange unless 0 <= index < upper."""
        if not 0 <= index < upper:
            raise IndexOutOfRange(index, self._length)

    def _walk(self) -> Iterator[Node[T]]:
        """
        Yield nodes in traversal order.

        Stops at a None link or on coming back to the node the walk started
        from, so a ring terminates without trusting the length counter.
        """
        start = self._head
        node = start
        while node is not None:
            yield node
            node = node.next
            if node is start:
                break

    def _spawn(self) -> SinglyLinkedList[Any]:
        """An empty list of the same topology."""
        return new_list(self.topology)

    def _initialize(self, value: T) -> None:
        node = Node(value)
        self._head = node
        self._last = node
        self._links.link_first_node(self, node)
        self._length += 1

    def _add_head(self, value: T) -> None:
        node = Node(value, self._head)
        self._head = node
        self._links.link_new_head(self, node)
        self._length += 1

    def _add_last(self, value: T) -> None:
        node = Node(value)
        assert self._last is not None
        self._last.next = node
        self._last = node
        self._links.link_new_last(self, node)
        self._length += 1

    def _add_after(self, index: int, value: T) -> None:
        prev = self.node(index - 1)
        prev.next = Node(value, prev.next)
        self._length += 1

    def _remove_head(self) -> None:
        removed = self._head
        assert removed is not None
        following = removed.next

        if self._links.should_clear_on_head_removal(self, following):
            self.clear()
        else:
            self._head = following
            self._links.update_head_links(self)
            self._length -= 1

        removed.next = None

    def _remove_last(self) -> None:
        removed = self._last
        assert removed is not None
        new_last = self.node(self._length - 2)
        self._last = new_last
        self._links.update_last_links(self, new_last)
        self._length -= 1
        removed.next = None

    def _remove_after(self, index: int) -> None:
        prev = self.node(index - 1)
        removed = prev.next
        assert removed is not None
        prev.next = removed.next
        self._length -= 1
        removed.next = None

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def append(self, *values: T) -> Self:
        """Append each value in argument order."""
        for value in values:
            if self.is_empty():
                self._initialize(value)
            else:
                self._add_last(value)
        return self

    def prepend(self, *values: T) -> Self:
        """
        Prepend each value in argument order.

        Each value becomes the new head in turn, so prepend("b", "a") on an
        empty list yields a, b.
        """
        for value in values:
            if self.is_empty():
                self._initialize(value)
            else:
                self._add_head(value)
        return self

    def insert(self, *, value: T | Sequence[T], index: int) -> Self:
        """
        Insert `value` at `index`.

        A list or tuple `value` is inserted item by item, each at the same
        fixed index, so items landing in the interior end up in reverse
        order: inserting [a, b, c] at 2 leaves c, b, a at positions 2..4.
        Index 0 prepends, index == length appends.
        """
        self._check_index(index, self._length + 1)
        items = value if isinstance(value, (list, tuple)) else [value]
        logger.debug(f"Inserting {len(items)} value(s) at index {index}")

        for item in items:
            if index == 0:
                self.prepend(item)
            elif index == self._length:
                self.append(item)
            else:
                self._add_after(index, item)

        return self

    def remove(self, index: int) -> Self:
        """Remove the node at `index`. Removing the only node empties the list."""
        self._check_index(index, self._length)
        logger.debug(f"Removing index {index} of {self._length}")

        if index == 0:
            self._remove_head()
        elif index == self._length - 1:
            self._remove_last()
        else:
            self._remove_after(index)

        return self

    def set(self, *, value: T, index: int) -> Self:
        self.node(index).value = value
        return self

    def clear(self) -> Self:
        logger.debug(f"Clearing {self.topology.name.lower()} list of {self._length}")
        self._head = None
        self._last = None
        self._length = 0
        return self

    # -------------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------------

    def node(self, index: int) -> Node[T]:
        """
        Return the live node at `index`.

        The handle aliases the list's own chain: writing `value` updates the
        list in place, rewiring `next` bypasses every invariant the list keeps.
        """
        self._check_index(index, self._length)
        for position, node in enumerate(self._walk()):
            if position == index:
                return node
        # Only reachable when the chain was rewired through a node handle.
        raise IndexOutOfRange(index, self._length)

    def get(self, index: int) -> T:
        return self.node(index).value

    # -------------------------------------------------------------------------
    # Traversal & transformation
    # -------------------------------------------------------------------------

    def for_each(self, consumer: Callable[[T], Any]) -> Self:
        """Call `consumer` on every value in traversal order."""
        for node in self._walk():
            consumer(node.value)
        return self

    def map(self, mapper: Callable[[T], U]) -> SinglyLinkedList[U]:
        """A new list of the same topology holding mapper(value) for each value."""
        result = self._spawn()
        for node in self._walk():
            result.append(mapper(node.value))
        return result

    def filter(self, predicate: Callable[[T], bool]) -> SinglyLinkedList[T]:
        """A new list of the same topology holding the values that satisfy `predicate`."""
        result = self._spawn()
        for node in self._walk():
            if predicate(node.value):
                result.append(node.value)
        return result

    def reduce(self, reducer: Callable[[U, T], U], initial: U) -> U:
        """Left fold in traversal order."""
        result = initial
        for node in self._walk():
            result = reducer(result, node.value)
        return result

    def reverse(self) -> SinglyLinkedList[T]:
        """A new list of the same topology, in reverse order, on fresh nodes."""
        result = self._spawn()
        for node in self._walk():
            result.prepend(node.value)
        return result

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    def includes(self, value: Any) -> bool:
        return any(node.value == value for node in self._walk())

    def index_of(self, value: Any) -> int:
        """Position of the first value equal to `value`, or NOT_FOUND."""
        for position, node in enumerate(self._walk()):
            if node.value == value:
                return position
        return NOT_FOUND

    # -------------------------------------------------------------------------
    # Serialization & conversion
    # -------------------------------------------------------------------------

    def to_array(self) -> list[T]:
        return [node.value for node in self._walk()]

    def join(self, separator: str = DEFAULT_SEPARATOR) -> str:
        return separator.join(str(node.value) for node in self._walk())

    def to_string(self) -> str:
        return self.join()

    def convert(self, topology: Topology) -> SinglyLinkedList[T]:
        """
        Copy the values into a new list of `topology`.

        The copy is built through the target's own append, so its links obey
        the target topology and no node is shared with this list.
        """
        logger.debug(
            f"Converting {self.topology.name.lower()} list of {self._length} "
            f"to {topology.name.lower()}"
        )
        return new_list(topology, self.to_array())

    # -------------------------------------------------------------------------
    # Python protocol
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return self._length

    def __iter__(self) -> Iterator[T]:
        for node in self._walk():
            yield node.value

    def __contains__(self, value: object) -> bool:
        return self.includes(value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SinglyLinkedList):
            return NotImplemented
        return self.topology is other.topology and self.to_array() == other.to_array()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_array()!r})"


class Linear(SinglyLinkedList[T]):
    """A null-terminated singly linked list."""

    def __init__(self, values: Iterable[T] = ()) -> None:
        super().__init__(values, Topology.LINEAR)

    def to_circular(self) -> Circular[T]:
        logger.debug(f"Converting linear list of {self.length} to circular")
        return Circular(self.to_array())


class Circular(SinglyLinkedList[T]):
    """A singly linked list whose last node links back to its head."""

    def __init__(self, values: Iterable[T] = ()) -> None:
        super().__init__(values, Topology.CIRCULAR)

    def to_linear(self) -> Linear[T]:
        logger.debug(f"Converting circular list of {self.length} to linear")
        return Linear(self.to_array())


LIST_TYPES: dict[Topology, type[SinglyLinkedList[Any]]] = {
    Topology.LINEAR: Linear,
    Topology.CIRCULAR: Circular,
}


def new_list(topology: Topology, values: Iterable[T] = ()) -> SinglyLinkedList[T]:
    """Build a Linear or Circular list holding `values`."""
    return LIST_TYPES[topology](values)


# =============================================================================
# DIAGNOSTICS (Pure: list -> findings)
# =============================================================================


def check_invariants(lst: SinglyLinkedList[Any]) -> tuple[str, ...]:
    """
    Report every structural invariant the list currently breaks.

    Walks at most `length` nodes, so a chain corrupted through a node handle
    (a premature ring, a cut link) is reported instead of looping forever.

    Pure: SinglyLinkedList -> tuple[str, ...] (empty when healthy)
    """
    head, last, length = lst.head, lst.last, lst.length

    if length == 0 or head is None or last is None:
        if length == 0 and head is None and last is None:
            return ()
        return (f"empty state mismatch: length={length}, head={head!r}, last={last!r}",)

    problems: list[str] = []
    seen = {id(head)}
    node = head

    for step in range(1, length):
        following = node.next
        if following is None:
            problems.append(f"chain ends after {step} node(s), length is {length}")
            return tuple(problems)
        if id(following) in seen:
            problems.append(f"node {step} loops back into the chain, length is {length}")
            return tuple(problems)
        seen.add(id(following))
        node = following

    if node is not last:
        problems.append(f"node {length - 1} is not the last node")

    expected = head if lst.is_circular() else None
    if last.next is not expected:
        wanted = "head" if lst.is_circular() else "None"
        problems.append(f"last.next should be {wanted}")

    return tuple(problems)
