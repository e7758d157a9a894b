import logging
from collections.abc import Mapping
from types import MappingProxyType

import numpy as np
import pandas as pd
import scipy.sparse as sp

from . import algorithms
from .entities import Edge, Vertex
from .errors import (
    EdgeLimitExceeded,
    ExistingEdge,
    ExistingVertex,
    InexistentVertex,
    NotMultigraph,
    SelfLoop,
    VertexLimitExceeded,
)

logger = logging.getLogger(__name__)

DEFAULT_VERTEX_LIMIT = 1500
DEFAULT_EDGE_LIMIT = 2500
DEFAULT_ID_RETRIES = 100


def _check_vertex_id(vertex_id):
    if not isinstance(vertex_id, (int, str)):
        raise TypeError(f"vertex id must be int or str, got {type(vertex_id).__name__}")


def _check_weight(weight):
    if not isinstance(weight, (int, float)):
        raise TypeError(f"weight must be numeric, got {type(weight).__name__}")


class Network:
    """
    Simple graph backed by a sparse incidence matrix.
    Rows = vertices (insertion order)
    Columns = edges (insertion order)

    Matrix[i,j] = +1 if vertex i is the source of edge j
    Matrix[i,j] = -1 if vertex i is the target of directed edge j
    Matrix[i,j] = +1 for both endpoints of an undirected edge

    The matrix is an index over `vertices`/`edges`: every mutation keeps
    both in step, and degree/neighbor queries read a single matrix row
    instead of scanning all edges.

    Invariants:
    - every edge references vertices of this network
    - at most `vertex_limit` vertices and `edge_limit` edges
    - at most one edge per vertex pair (ordered pair when directed)
    - no self-loops unless `allow_self_loops`
    """

    def __init__(
        self,
        directed=False,
        vertex_limit=DEFAULT_VERTEX_LIMIT,
        edge_limit=DEFAULT_EDGE_LIMIT,
        allow_self_loops=False,
        strict=False,
        id_retries=DEFAULT_ID_RETRIES,
    ):
        self.directed = bool(directed)
        self.vertex_limit = vertex_limit
        self.edge_limit = edge_limit
        self.allow_self_loops = allow_self_loops
        self.strict = strict
        self.id_retries = id_retries

        self._vertices = {}  # vertex_id -> Vertex
        self._edges = {}     # edge_id -> Edge

        # Row/column mappings
        self.vertex_to_idx = {}  # vertex_id -> row index
        self.idx_to_vertex = {}  # row index -> vertex_id
        self.edge_to_idx = {}    # edge_id -> column index
        self.idx_to_edge = {}    # column index -> edge_id

        # Sparse incidence matrix
        self._matrix = sp.lil_matrix((0, 0), dtype=np.int8)
        self._num_vertices = 0
        self._num_edges = 0

        # Id counters for generated ids
        self._next_vertex_id = 0
        self._next_edge_id = 0
        self._rng = np.random.default_rng()

    @property
    def is_directed(self):
        return self.directed

    @property
    def is_multigraph(self):
        """Parallel edges are not supported."""
        return False

    @property
    def args(self) -> dict:
        """Constructor arguments reproducing this network's configuration."""
        return {
            "directed": self.directed,
            "vertex_limit": self.vertex_limit,
            "edge_limit": self.edge_limit,
            "allow_self_loops": self.allow_self_loops,
            "strict": self.strict,
            "id_retries": self.id_retries,
        }

    def empty_copy(self, **overrides):
        """New network without vertices or edges, same configuration unless overridden."""
        args = self.args
        args.update(overrides)
        return Network(**args)

    # ---- Id generation ----

    def _get_next_vertex_id(self):
        vertex_id = self._next_vertex_id
        self._next_vertex_id += 1
        if vertex_id not in self._vertices:
            return vertex_id
        return self._random_free_id(self._vertices, self.vertex_limit, VertexLimitExceeded)

    def _get_next_edge_id(self):
        edge_id = self._next_edge_id
        self._next_edge_id += 1
        if edge_id not in self._edges:
            return edge_id
        return self._random_free_id(self._edges, self.edge_limit, EdgeLimitExceeded)

    def _random_free_id(self, taken, limit, error):
        logger.warning("Generated id collides with an existing one, falling back to random ids")
        for _ in range(self.id_retries):
            candidate = int(self._rng.integers(max(limit, 1)))
            if candidate not in taken:
                return candidate
        raise error(limit)

    # ---- Vertices ----

    def add_vertex(self, vertex_id=None, weight=1):
        """Add a vertex and return its id. An id is generated when none is given."""
        if self._num_vertices >= self.vertex_limit:
            raise VertexLimitExceeded(self.vertex_limit)
        _check_weight(weight)
        if vertex_id is None:
            vertex_id = self._get_next_vertex_id()
        else:
            _check_vertex_id(vertex_id)
            if vertex_id in self._vertices:
                raise ExistingVertex(vertex_id)

        idx = self._num_vertices
        self.vertex_to_idx[vertex_id] = idx
        self.idx_to_vertex[idx] = vertex_id
        self._vertices[vertex_id] = Vertex(vertex_id, weight)
        self._num_vertices += 1

        # Resize incidence matrix
        self._matrix.resize((self._num_vertices, self._num_edges))
        return vertex_id

    def add_vertex_list(self, vertices):
        """
        Add several vertices. Items are ids, (id, weight) tuples, Vertex objects
        or mappings of `add_vertex` keyword arguments.
        Returns the list of ids added.
        """
        added = []
        for item in vertices:
            if isinstance(item, Vertex):
                added.append(self.add_vertex(item.id, weight=item.weight))
            elif isinstance(item, Mapping):
                added.append(self.add_vertex(**item))
            elif isinstance(item, tuple):
                added.append(self.add_vertex(*item))
            else:
                added.append(self.add_vertex(item))
        return added

    def remove_vertex(self, vertex_id):
        """Remove a vertex and all incident edges."""
        if vertex_id not in self._vertices:
            raise InexistentVertex(vertex_id)

        incident = [edge.id for edge in self._incident_edges(vertex_id)]
        if incident:
            self._drop_edges(incident)

        vertex_idx = self.vertex_to_idx[vertex_id]

        # Remove vertex row from matrix
        mask = np.ones(self._num_vertices, dtype=bool)
        mask[vertex_idx] = False
        self._matrix = self._matrix.tocsr()[np.flatnonzero(mask), :].tolil()

        del self._vertices[vertex_id]
        del self.vertex_to_idx[vertex_id]

        # Reindex remaining vertices
        new_vertex_to_idx = {}
        new_idx_to_vertex = {}

        new_idx = 0
        for old_idx in range(self._num_vertices):
            if old_idx != vertex_idx:
                remaining_id = self.idx_to_vertex[old_idx]
                new_vertex_to_idx[remaining_id] = new_idx
                new_idx_to_vertex[new_idx] = remaining_id
                new_idx += 1

        self.vertex_to_idx = new_vertex_to_idx
        self.idx_to_vertex = new_idx_to_vertex
        self._num_vertices -= 1

        logger.debug("Removed vertex %r and %d incident edges", vertex_id, len(incident))

    def has_vertex(self, vertex_id):
        return vertex_id in self._vertices

    def has_vertices(self, vertex_ids):
        return all(vertex_id in self._vertices for vertex_id in vertex_ids)

    # ---- Edges ----

    def add_edge(self, source, target, edge_id=None, weight=1, do_force=True):
        """
        Add an edge between `source` and `target` and return its id.

        With `do_force` missing endpoints are created first, otherwise
        InexistentVertex is raised and nothing changes. Adding an edge that
        already exists between the two vertices does nothing and returns
        None, or raises NotMultigraph on a strict network.
        """
        _check_weight(weight)
        if edge_id is not None and edge_id in self._edges:
            raise ExistingEdge(edge_id)
        if source == target and not self.allow_self_loops:
            raise SelfLoop(source)
        if self._num_edges >= self.edge_limit:
            raise EdgeLimitExceeded(self.edge_limit)

        missing = [v for v in dict.fromkeys((source, target)) if v not in self._vertices]
        if missing:
            if not do_force:
                raise InexistentVertex(missing[0])
            for vertex_id in missing:
                _check_vertex_id(vertex_id)
            if self._num_vertices + len(missing) > self.vertex_limit:
                raise VertexLimitExceeded(self.vertex_limit)

        if not self.is_multigraph and self.has_edge(source, target):
            if self.strict:
                raise NotMultigraph(source, target)
            return None

        # allocate the id before creating forced endpoints
        if edge_id is None:
            edge_id = self._get_next_edge_id()
        for vertex_id in missing:
            self.add_vertex(vertex_id)

        col_idx = self._num_edges
        self.edge_to_idx[edge_id] = col_idx
        self.idx_to_edge[col_idx] = edge_id
        self._edges[edge_id] = Edge(source, target, edge_id=edge_id, weight=weight)
        self._num_edges += 1

        # Grow matrix to fit
        self._matrix.resize((self._num_vertices, self._num_edges))
        self._matrix[self.vertex_to_idx[source], col_idx] = 1
        if source != target:
            self._matrix[self.vertex_to_idx[target], col_idx] = -1 if self.directed else 1

        return edge_id

    def add_edge_list(self, edges, do_force=True):
        """
        Add several edges. Items are (source, target) or (source, target, weight)
        tuples, Edge objects (whose ids are kept) or mappings of `add_edge`
        keyword arguments. Returns the ids in order, with None for edges that
        already existed.
        """
        added = []
        for item in edges:
            if isinstance(item, Edge):
                added.append(
                    self.add_edge(item.source, item.target, edge_id=item.id,
                                  weight=item.weight, do_force=do_force)
                )
            elif isinstance(item, Mapping):
                added.append(self.add_edge(**{"do_force": do_force, **item}))
            elif len(item) == 3:
                source, target, weight = item
                added.append(self.add_edge(source, target, weight=weight, do_force=do_force))
            else:
                source, target = item
                added.append(self.add_edge(source, target, do_force=do_force))
        return added

    def remove_edge(self, source, target, edge_id=None):
        """
        Remove the first edge between `source` and `target` (either orientation
        when undirected). With `edge_id` only that edge is considered.
        Returns the removed id, or None when nothing matched.
        """
        for edge in self._incident_edges(source):
            if not edge.same_endpoints(source, target, self.directed):
                continue
            if edge_id is not None and edge.id != edge_id:
                continue
            self._drop_edges([edge.id])
            return edge.id
        return None

    def _drop_edges(self, edge_ids):
        cols = {self.edge_to_idx[edge_id] for edge_id in edge_ids}

        # Convert to CSC for efficient column removal
        mask = np.ones(self._num_edges, dtype=bool)
        mask[list(cols)] = False
        self._matrix = self._matrix.tocsc()[:, np.flatnonzero(mask)].tolil()

        for edge_id in edge_ids:
            del self._edges[edge_id]
            del self.edge_to_idx[edge_id]

        # Reindex remaining edges
        new_edge_to_idx = {}
        new_idx_to_edge = {}

        new_idx = 0
        for old_idx in range(self._num_edges):
            if old_idx not in cols:
                remaining_id = self.idx_to_edge[old_idx]
                new_edge_to_idx[remaining_id] = new_idx
                new_idx_to_edge[new_idx] = remaining_id
                new_idx += 1

        self.edge_to_idx = new_edge_to_idx
        self.idx_to_edge = new_idx_to_edge
        self._num_edges -= len(cols)

    def _incident_edges(self, vertex_id):
        """Edges touching `vertex_id`, in insertion order."""
        if vertex_id not in self.vertex_to_idx:
            return []
        row = self._matrix.rows[self.vertex_to_idx[vertex_id]]
        return [self._edges[self.idx_to_edge[col_idx]] for col_idx in row]

    def has_edge(self, source, target, directed=None):
        """
        Check whether an edge joins `source` and `target`. `directed` overrides
        the network's own interpretation of edge orientation.
        """
        if directed is None:
            directed = self.directed
        return any(
            edge.same_endpoints(source, target, directed)
            for edge in self._incident_edges(source)
        )

    def edge_between(self, source, target, directed=None):
        """Copy of the first edge between `source` and `target`, or None."""
        if source is None or target is None:
            return None
        if directed is None:
            directed = self.directed
        for edge in self._incident_edges(source):
            if edge.same_endpoints(source, target, directed):
                return edge.copy()
        return None

    def get_edges_between(self, source, target, directed=None):
        """Ids of all edges between `source` and `target`."""
        if directed is None:
            directed = self.directed
        return [
            edge.id for edge in self._incident_edges(source)
            if edge.same_endpoints(source, target, directed)
        ]

    def edges_from(self, vertex_id, exclude=()):
        """Edges whose source is `vertex_id`, skipping targets listed in `exclude`."""
        return [
            edge.copy() for edge in self._incident_edges(vertex_id)
            if edge.source == vertex_id and edge.target not in exclude
        ]

    def edges_with(self, vertex_id):
        """Edges touching `vertex_id` in either position."""
        return [edge.copy() for edge in self._incident_edges(vertex_id)]

    # ---- Neighborhood and degree ----

    def neighbors(self, vertex_id):
        """Vertices sharing an edge with `vertex_id`, in either direction."""
        neighbors = [edge.pair_vertex(vertex_id) for edge in self._incident_edges(vertex_id)]
        return list(dict.fromkeys(neighbors))

    def in_neighbors(self, vertex_id):
        """Vertices with an edge pointing TO `vertex_id`. Empty for undirected networks."""
        if not self.directed:
            return []
        neighbors = [
            edge.source for edge in self._incident_edges(vertex_id)
            if edge.target == vertex_id
        ]
        return list(dict.fromkeys(neighbors))

    def out_neighbors(self, vertex_id):
        """Vertices `vertex_id` points TO. Empty for undirected networks."""
        if not self.directed:
            return []
        neighbors = [
            edge.target for edge in self._incident_edges(vertex_id)
            if edge.source == vertex_id
        ]
        return list(dict.fromkeys(neighbors))

    def degree(self, vertex_id):
        """Number of edges touching `vertex_id`."""
        if vertex_id not in self.vertex_to_idx:
            return 0
        return len(self._matrix.rows[self.vertex_to_idx[vertex_id]])

    def in_degree(self, vertex_id):
        if not self.directed:
            return 0
        return sum(1 for edge in self._incident_edges(vertex_id) if edge.target == vertex_id)

    def out_degree(self, vertex_id):
        if not self.directed:
            return 0
        return sum(1 for edge in self._incident_edges(vertex_id) if edge.source == vertex_id)

    def degrees(self) -> dict:
        """Degree of every vertex, read from the matrix row sizes."""
        counts = np.diff(self._matrix.tocsr().indptr)
        return {self.idx_to_vertex[idx]: int(count) for idx, count in enumerate(counts)}

    def edge_neighbors(self, edge):
        """Neighborhoods of both endpoints of `edge`."""
        return {
            "source": {"id": edge.source, "neighbors": self.neighbors(edge.source)},
            "target": {"id": edge.target, "neighbors": self.neighbors(edge.target)},
        }

    @property
    def ranked_neighborhood(self):
        """(vertex_id, number of neighbors) pairs, most connected first."""
        ranking = [(vertex_id, len(self.neighbors(vertex_id))) for vertex_id in self._vertices]
        return sorted(ranking, key=lambda pair: pair[1], reverse=True)

    # ---- Views ----

    @property
    def vertices(self):
        """Read-only mapping vertex_id -> Vertex."""
        return MappingProxyType(self._vertices)

    @property
    def edges(self):
        """Read-only mapping edge_id -> Edge."""
        return MappingProxyType(self._edges)

    @property
    def vertex_list(self):
        """Snapshot of the vertices."""
        return [vertex.copy() for vertex in self._vertices.values()]

    @property
    def edge_list(self):
        """Snapshot of the edges."""
        return [edge.copy() for edge in self._edges.values()]

    @property
    def simple_edge_list(self):
        """(source, target) pairs of every edge."""
        return [edge.vertices for edge in self._edges.values()]

    def vertex_ids(self):
        return list(self._vertices.keys())

    def edge_ids(self):
        return list(self._edges.keys())

    def number_of_vertices(self):
        return self._num_vertices

    def number_of_edges(self):
        return self._num_edges

    @property
    def positive_vertices(self):
        return [vertex.copy() for vertex in self._vertices.values() if vertex.weight > 0]

    @property
    def negative_vertices(self):
        return [vertex.copy() for vertex in self._vertices.values() if vertex.weight < 0]

    @property
    def zero_vertices(self):
        return [vertex.copy() for vertex in self._vertices.values() if vertex.weight == 0]

    @property
    def positive_edges(self):
        return [edge.copy() for edge in self._edges.values() if edge.weight > 0]

    @property
    def negative_edges(self):
        return [edge.copy() for edge in self._edges.values() if edge.weight < 0]

    def vertices_view(self):
        """
        Read-only table: vertex_id + weight + degree.
        """
        if not self._vertices:
            return pd.DataFrame(columns=["weight", "degree"], index=pd.Index([], name="vertex_id"))
        degrees = self.degrees()
        rows = [
            {"vertex_id": vertex.id, "weight": vertex.weight, "degree": degrees[vertex.id]}
            for vertex in self._vertices.values()
        ]
        return pd.DataFrame(rows).set_index("vertex_id")

    def edges_view(self):
        """
        Read-only table: edge_id + source + target + weight.
        """
        if not self._edges:
            return pd.DataFrame(columns=["source", "target", "weight"], index=pd.Index([], name="edge_id"))
        rows = [
            {"edge_id": edge.id, "source": edge.source, "target": edge.target, "weight": edge.weight}
            for edge in self._edges.values()
        ]
        return pd.DataFrame(rows).set_index("edge_id")

    def incidence_matrix(self):
        """CSR copy of the incidence matrix; rows follow `vertex_ids()`, columns `edge_ids()`."""
        return self._matrix.tocsr(copy=True)

    def adjacency_matrix(self, weighted=False):
        """
        CSR adjacency matrix with rows/columns in `vertex_ids()` order.
        Undirected edges fill both triangles.
        """
        n = self._num_vertices
        rows, cols, data = [], [], []
        for edge in self._edges.values():
            value = edge.weight if weighted else 1
            i, j = self.vertex_to_idx[edge.source], self.vertex_to_idx[edge.target]
            rows.append(i)
            cols.append(j)
            data.append(value)
            if not self.directed and i != j:
                rows.append(j)
                cols.append(i)
                data.append(value)
        dtype = float if weighted else np.int64
        return sp.csr_matrix((np.asarray(data, dtype=dtype), (rows, cols)), shape=(n, n))

    # ---- Derived metrics ----

    @property
    def weight(self):
        """Sum of all edge weights."""
        return sum(edge.weight for edge in self._edges.values())

    @property
    def vertex_weight(self):
        """Sum of all vertex weights."""
        return sum(vertex.weight for vertex in self._vertices.values())

    @property
    def genus(self):
        return self._num_edges - self._num_vertices + 1

    @property
    def max_edges(self):
        """Edge count of a complete undirected simple graph on these vertices."""
        return self._num_vertices * (self._num_vertices - 1) // 2

    @property
    def density(self):
        max_edges = self.max_edges
        if max_edges == 0:
            return 0.0
        return self._num_edges / max_edges

    def copy(self):
        """Create a value copy of the network."""
        new_network = self.empty_copy()
        for vertex in self._vertices.values():
            new_network.add_vertex(vertex.id, weight=vertex.weight)
        for edge in self._edges.values():
            new_network.add_edge(edge.source, edge.target, edge_id=edge.id,
                                 weight=edge.weight, do_force=False)
        new_network._next_vertex_id = self._next_vertex_id
        new_network._next_edge_id = self._next_edge_id
        return new_network

    # ---- Algorithms ----

    def ego(self, vertex_id):
        return algorithms.ego(self, vertex_id)

    def complement(self):
        return algorithms.complement(self)

    def core(self, k):
        return algorithms.core(self, k)

    def clustering(self, vertex_id):
        return algorithms.clustering(self, vertex_id)

    def average_clustering(self):
        return algorithms.average_clustering(self)

    def assortativity(self):
        return algorithms.assortativity(self)

    def average_neighbor_degree(self, vertex_id):
        return algorithms.average_neighbor_degree(self, vertex_id)

    def label_path_weights(self, source):
        return algorithms.label_path_weights(self, source)

    def triplets(self):
        from .cycle import triplets
        return triplets(self)

    def quadruplets(self):
        from .cycle import quadruplets
        return quadruplets(self)

    def __contains__(self, vertex_id):
        return vertex_id in self._vertices

    def __repr__(self):
        kind = "directed" if self.directed else "undirected"
        return f"<Network {kind}, {self._num_vertices} vertices, {self._num_edges} edges>"
