"""
Error taxonomy for network mutation.

Each error subclasses the builtin raised for the same kind of failure
(KeyError for missing entities, ValueError for duplicates), so callers
can catch either the specific class or the builtin.
"""

EDGE_LIMIT = "Can't add new edge. Limit of edges exceeded"
VERTEX_LIMIT = "Can't add new vertex. Limit of vertices exceeded"
EXISTING_EDGE = "Trying to add an edge with already existing ID"
EXISTING_VERTEX = "Trying to add a vertex with already existing ID"
INEXISTENT_VERTEX = "Vertex doesn't exist"
SELF_LOOP = "Self-loops are not allowed in this network"
NOT_MULTIGRAPH = "Trying to add multiple edges between two vertices. Network is not a multigraph!"


class NetworkError(Exception):
    """Base class for all network errors."""


class VertexLimitExceeded(NetworkError):
    def __init__(self, limit):
        super().__init__(f"{VERTEX_LIMIT} ({limit})")
        self.limit = limit


class EdgeLimitExceeded(NetworkError):
    def __init__(self, limit):
        super().__init__(f"{EDGE_LIMIT} ({limit})")
        self.limit = limit


class ExistingVertex(NetworkError, ValueError):
    def __init__(self, vertex):
        super().__init__(f"{EXISTING_VERTEX}: {vertex!r}")
        self.vertex = vertex


class ExistingEdge(NetworkError, ValueError):
    def __init__(self, edge_id):
        super().__init__(f"{EXISTING_EDGE}: {edge_id!r}")
        self.edge_id = edge_id


class InexistentVertex(NetworkError, KeyError):
    def __init__(self, vertex):
        super().__init__(f"{INEXISTENT_VERTEX}: {vertex!r}")
        self.vertex = vertex

    def __str__(self):
        # KeyError quotes its argument; keep the plain message
        return self.args[0]


class SelfLoop(NetworkError, ValueError):
    def __init__(self, vertex):
        super().__init__(f"{SELF_LOOP}: {vertex!r}")
        self.vertex = vertex


class NotMultigraph(NetworkError, ValueError):
    """Raised by strict networks when an equivalent edge already exists."""

    def __init__(self, source, target):
        super().__init__(f"{NOT_MULTIGRAPH} ({source!r}, {target!r})")
        self.source = source
        self.target = target
