"""Graph structure for the min-cut/max-flow solver.

Nodes are numbered from 0 in the order they are added. Every call to
``add_edge`` creates a pair of arcs, the forward one first, each holding its
residual capacity and a link to its reverse ("sister") arc. Terminal links
are folded into one signed residual capacity per node: a positive value is
the residual capacity of SOURCE->node, a negative one the negated residual
capacity of node->SINK.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator


class _Marker:
    """A named sentinel used as a node's parent link."""

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return self.name


TERMINAL = _Marker("TERMINAL")
"""Parent of a node attached directly to its terminal."""

ORPHAN = _Marker("ORPHAN")
"""Parent of a node that has lost its path to a terminal."""


class _Node:
    __slots__ = (
        "index",
        "first",
        "parent",
        "next",
        "ts",
        "dist",
        "is_sink",
        "is_marked",
        "is_in_changed_list",
        "tr_cap",
    )

    def __init__(self, index: int) -> None:
        self.index = index
        self.first: _Arc | None = None
        self.parent: _Arc | _Marker | None = None
        self.next: _Node | None = None
        self.ts = 0
        self.dist = 0
        self.is_sink = False
        self.is_marked = False
        self.is_in_changed_list = False
        self.tr_cap = 0

    def __repr__(self) -> str:
        return f"_Node({self.index}, tr_cap={self.tr_cap})"


class _Arc:
    __slots__ = ("position", "head", "next", "sister", "r_cap")

    def __init__(self, position: int, head: _Node, r_cap) -> None:
        self.position = position
        self.head = head
        self.next: _Arc | None = None
        self.sister: _Arc = self
        self.r_cap = r_cap

    def __repr__(self) -> str:
        return f"_Arc({self.sister.head.index}->{self.head.index}, r_cap={self.r_cap})"


class Graph:
    """A directed graph with paired arcs and terminal capacities."""

    def __init__(self, error_function: Callable[[str], None] | None = None) -> None:
        self.error_function = error_function
        self._nodes: list[_Node] = []
        self._arcs: list[_Arc] = []
        self.flow = 0
        self.maxflow_iteration = 0

    def _node(self, i: int) -> _Node:
        if not 0 <= i < len(self._nodes):
            raise IndexError(f"node {i} is not in a graph of {len(self._nodes)} nodes")
        return self._nodes[i]

    def _own_arc(self, arc: _Arc) -> _Arc:
        position = getattr(arc, "position", None)
        if (
            position is None
            or not 0 <= position < len(self._arcs)
            or self._arcs[position] is not arc
        ):
            raise ValueError(f"{arc!r} is not an arc of this graph")
        return arc

    def add_node(self, num: int = 1) -> int:
        """Add ``num`` nodes and return the id of the first one."""
        if num <= 0:
            raise ValueError(f"number of nodes to add must be positive, got {num}")
        first = len(self._nodes)
        self._nodes.extend(_Node(first + k) for k in range(num))
        return first

    def add_edge(self, i: int, j: int, cap, rev_cap) -> None:
        """Add arcs ``i->j`` with capacity ``cap`` and ``j->i`` with ``rev_cap``."""
        node_i = self._node(i)
        node_j = self._node(j)
        if i == j:
            raise ValueError(f"an edge needs two distinct nodes, got {i} twice")
        if cap < 0 or rev_cap < 0:
            raise ValueError(f"edge capacities must not be negative, got {cap} and {rev_cap}")

        arc = _Arc(len(self._arcs), node_j, cap)
        reverse = _Arc(len(self._arcs) + 1, node_i, rev_cap)
        arc.sister = reverse
        reverse.sister = arc
        arc.next = node_i.first
        node_i.first = arc
        reverse.next = node_j.first
        node_j.first = reverse
        self._arcs.append(arc)
        self._arcs.append(reverse)

    def add_tweights(self, i: int, cap_source, cap_sink) -> None:
        """Add capacities ``SOURCE->i`` and ``i->SINK``; they may be negative.

        The smaller of the two combined capacities is flow that must pass
        through the node anyway, so it is counted at once and only the
        difference is kept.
        """
        node = self._node(i)
        delta = node.tr_cap
        if delta > 0:
            cap_source += delta
        else:
            cap_sink -= delta
        self.flow += min(cap_source, cap_sink)
        node.tr_cap = cap_source - cap_sink

    def reset(self) -> None:
        """Remove all nodes and arcs and forget any computed flow."""
        self._nodes.clear()
        self._arcs.clear()
        self.flow = 0
        self.maxflow_iteration = 0

    def arcs(self) -> Iterator[_Arc]:
        """Yield the arcs in the order they were added, forward arc first."""
        yield from self._arcs

    def arc_ends(self, arc: _Arc) -> tuple[int, int]:
        """Return ``(i, j)`` such that ``arc`` goes from ``i`` to ``j``."""
        own = self._own_arc(arc)
        return own.sister.head.index, own.head.index

    def node_count(self) -> int:
        """Return the number of nodes."""
        return len(self._nodes)

    def arc_count(self) -> int:
        """Return the number of arcs, two per edge."""
        return len(self._arcs)

    def trcap(self, i: int):
        """Return residual ``SOURCE->i`` minus residual ``i->SINK`` capacity."""
        return self._node(i).tr_cap

    def set_trcap(self, i: int, trcap) -> None:
        """Set the signed terminal residual capacity of node ``i``."""
        self._node(i).tr_cap = trcap

    def rcap(self, arc: _Arc):
        """Return the residual capacity of ``arc``."""
        return self._own_arc(arc).r_cap

    def set_rcap(self, arc: _Arc, rcap) -> None:
        """Set the residual capacity of ``arc``."""
        self._own_arc(arc).r_cap = rcap