class Vertex:
    """Network vertex. The id is fixed; the weight defaults to 1."""

    def __init__(self, vertex_id, weight=1):
        self._id = vertex_id
        self.weight = weight

    @property
    def id(self):
        return self._id

    def copy(self):
        return Vertex(self._id, self.weight)

    def to_dict(self) -> dict:
        return {"id": self._id, "weight": self.weight}

    def __eq__(self, other):
        if not isinstance(other, Vertex):
            return NotImplemented
        return self._id == other._id and self.weight == other.weight

    def __repr__(self):
        return f"Vertex({self._id!r}, weight={self.weight!r})"


class Edge:
    """
    Edge between `source` and `target`.

    Direction is not stored here: the owning network decides whether
    (a, b) and (b, a) are the same edge.
    """

    def __init__(self, source, target, edge_id=None, weight=1):
        self.source = source
        self.target = target
        self.id = edge_id
        self.weight = weight

    @property
    def vertices(self):
        """(source, target) pair."""
        return self.source, self.target

    @property
    def is_self_loop(self):
        return self.source == self.target

    def has_vertex(self, vertex_id):
        return self.source == vertex_id or self.target == vertex_id

    def pair_vertex(self, vertex_id):
        """Endpoint opposite to `vertex_id`, or None if it is not an endpoint."""
        if self.source == vertex_id:
            return self.target
        if self.target == vertex_id:
            return self.source
        return None

    def same_endpoints(self, source, target, directed):
        if self.source == source and self.target == target:
            return True
        return not directed and self.source == target and self.target == source

    def copy(self):
        return Edge(self.source, self.target, edge_id=self.id, weight=self.weight)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "weight": self.weight,
        }

    def __eq__(self, other):
        if not isinstance(other, Edge):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"Edge({self.source!r}, {self.target!r}, edge_id={self.id!r}, weight={self.weight!r})"
