"""
Cycle accumulator and triplet/quadruplet enumeration.

A Cycle is grown edge by edge from an initial edge: each added edge must
leave the current tip towards a vertex not yet visited, and `close` must
bring the tip back to the loop vertex. Growth failures return False so
enumeration can simply move on to the next candidate.
"""
import enum
import logging

from .network import Network

logger = logging.getLogger(__name__)


class CycleState(enum.Enum):
    GROWING = "growing"
    CLOSED = "closed"


class Cycle:
    """
    Simple cycle under construction.

    Args:
        initial_edge: first edge; its source becomes the loop vertex and
            its target the tip.
        directed: whether edges must be followed from source to target.
        loop_vertex: for undirected cycles, which endpoint of the initial
            edge to anchor on.
    """

    def __init__(self, initial_edge, directed=False, loop_vertex=None):
        self.directed = directed
        self._network = Network(directed=directed)
        self._network.add_edge(initial_edge.source, initial_edge.target, weight=initial_edge.weight)

        self._loop_vertex = initial_edge.source
        self._tip_vertex = initial_edge.target
        if not directed and loop_vertex is not None and initial_edge.has_vertex(loop_vertex):
            self._loop_vertex = loop_vertex
            self._tip_vertex = initial_edge.pair_vertex(loop_vertex)

        self._path = [self._loop_vertex, self._tip_vertex]
        self.state = CycleState.GROWING

    @property
    def loop_vertex(self):
        return self._loop_vertex

    @property
    def tip_vertex(self):
        return self._tip_vertex

    @property
    def is_closed(self):
        return self.state is CycleState.CLOSED

    @property
    def path(self):
        """Visited vertices, loop vertex first, in the order they were reached."""
        return list(self._path)

    @property
    def vertex_list(self):
        return self._network.vertex_list

    @property
    def edge_list(self):
        return self._network.edge_list

    @property
    def weight(self):
        return self._network.weight

    @property
    def key(self):
        """Hashable edge set; equal keys mean `is_same_as` holds."""
        if self.directed:
            return frozenset(self._network.simple_edge_list)
        return frozenset(frozenset(pair) for pair in self._network.simple_edge_list)

    def has_vertex(self, vertex_id):
        return self._network.has_vertex(vertex_id)

    def add_edge(self, edge):
        """
        Extend the path from the tip through `edge`.
        Returns False, leaving the cycle untouched, when the edge is missing,
        does not start at the tip, revisits a vertex, or the cycle is closed.
        """
        if edge is None or not self._can_add(edge):
            return False

        self._network.add_edge(edge.source, edge.target, weight=edge.weight)
        if not self.directed and self._tip_vertex == edge.target:
            self._tip_vertex = edge.source
        else:
            self._tip_vertex = edge.target
        self._path.append(self._tip_vertex)
        return True

    def close(self, edge):
        """Close the cycle with an edge from the tip back to the loop vertex."""
        if edge is None or not self._can_close_with(edge):
            return False

        self._network.add_edge(edge.source, edge.target, weight=edge.weight)
        self.state = CycleState.CLOSED
        self._tip_vertex = self._loop_vertex
        return True

    def is_same_as(self, other):
        """Same directedness and the same edge set, whatever the start or orientation."""
        if self.directed != other.directed or len(self) != len(other):
            return False
        return all(
            other._network.has_edge(source, target)
            for source, target in self._network.simple_edge_list
        )

    def _can_add(self, edge):
        if self.is_closed:
            return False
        if edge.source == self._tip_vertex and not self._network.has_vertex(edge.target):
            return True
        return (
            not self.directed
            and edge.target == self._tip_vertex
            and not self._network.has_vertex(edge.source)
        )

    def _can_close_with(self, edge):
        if self.is_closed:
            return False
        # an undirected edge already on the path cannot close it a second time
        if self._network.has_edge(edge.source, edge.target):
            return False
        if edge.source == self._tip_vertex and edge.target == self._loop_vertex:
            return True
        return (
            not self.directed
            and edge.target == self._tip_vertex
            and edge.source == self._loop_vertex
        )

    def __len__(self):
        return self._network.number_of_edges()

    def __repr__(self):
        return f"Cycle({self._path!r}, {self.state.value})"


def triplets(net):
    """
    All cycles of length 3, as (vertex, source, target) tuples.

    Runs on the 2-core, since a vertex on a cycle needs two cycle edges.
    For every edge (source, target) each neighbor of `source` that also
    links to `target` closes a triangle; directed networks need the
    neighbor to point at `source` and `target` to point back at it.
    Each cycle is reported once.
    """
    k2 = net.core(2)
    triplet_list = []
    seen = set()

    for edge in k2.edge_list:
        if edge.is_self_loop:
            continue
        source, target = edge.vertices
        candidates = k2.in_neighbors(source) if k2.directed else k2.neighbors(source)

        for vertex_id in candidates:
            if edge.has_vertex(vertex_id):
                continue
            if k2.directed:
                if not k2.has_edge(target, vertex_id):
                    continue
                key = frozenset([(vertex_id, source), (source, target), (target, vertex_id)])
            else:
                if not k2.has_edge(vertex_id, target):
                    continue
                key = frozenset([vertex_id, source, target])
            if key in seen:
                continue
            seen.add(key)
            triplet_list.append((vertex_id, source, target))

    logger.debug("Found %d triplets among %d edges", len(triplet_list), k2.number_of_edges())
    return triplet_list


def quadruplets(net):
    """
    All cycles of length 4, as closed Cycle objects.

    Runs on the 2-core. Every edge seeds cycles anchored at its loop
    vertex; the path continues to a neighbor of the pair vertex, takes any
    edge leaving that neighbor and must then close back on the loop
    vertex. Undirected networks anchor on the endpoint with more neighbors
    so that the expansion iterates over the smaller neighbor set.
    Cycles with the same edge set are kept once.
    """
    k2 = net.core(2)
    c4 = []
    seen = set()

    for edge in k2.edge_list:
        if edge.is_self_loop:
            continue
        loop_vertex, pair_vertex = edge.vertices
        pair_vertex_neighbors = k2.neighbors(pair_vertex)

        if not k2.directed:
            loop_vertex_neighbors = k2.neighbors(loop_vertex)
            if len(pair_vertex_neighbors) > len(loop_vertex_neighbors):
                loop_vertex, pair_vertex = pair_vertex, loop_vertex
                pair_vertex_neighbors = loop_vertex_neighbors

        for vertex_id in pair_vertex_neighbors:
            step_edge = k2.edge_between(pair_vertex, vertex_id)
            if step_edge is None:
                continue
            parallel_edges = k2.edges_from(vertex_id) if k2.directed else k2.edges_with(vertex_id)

            for p_edge in parallel_edges:
                cycle = Cycle(edge, directed=k2.directed, loop_vertex=loop_vertex)
                if not (cycle.add_edge(step_edge) and cycle.add_edge(p_edge)):
                    continue
                if not cycle.close(k2.edge_between(cycle.tip_vertex, loop_vertex)):
                    continue
                if cycle.key in seen:
                    continue
                seen.add(cycle.key)
                c4.append(cycle)

    logger.debug("Found %d quadruplets among %d edges", len(c4), k2.number_of_edges())
    return c4
