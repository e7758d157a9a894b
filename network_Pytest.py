import logging

import pytest
from nets import (
    Edge,
    EdgeLimitExceeded,
    ExistingEdge,
    ExistingVertex,
    InexistentVertex,
    Network,
    NotMultigraph,
    SelfLoop,
    VertexLimitExceeded,
)


class TestNetworkBasics:

    def test_initialization(self):
        net = Network()
        assert net.directed is False
        assert net.is_multigraph is False
        assert net.vertex_limit == 1500
        assert net.edge_limit == 2500
        assert net.number_of_vertices() == 0
        assert net.number_of_edges() == 0

    def test_args_round_trip(self):
        net = Network(directed=True, vertex_limit=10, edge_limit=20, strict=True)
        assert Network(**net.args).args == net.args

    def test_add_vertex(self):
        net = Network()
        assert net.add_vertex("A") == "A"
        assert net.has_vertex("A")
        assert "A" in net
        assert net.vertices["A"].weight == 1

    def test_add_vertex_with_weight(self):
        net = Network()
        net.add_vertex(7, weight=2.5)
        assert net.vertices[7].weight == 2.5

    def test_generated_vertex_ids(self):
        net = Network()
        assert net.add_vertex() == 0
        assert net.add_vertex() == 1

    def test_generated_id_avoids_taken_ids(self, caplog):
        net = Network()
        net.add_vertex(0)
        with caplog.at_level(logging.WARNING, logger="nets.network"):
            vertex_id = net.add_vertex()
        assert vertex_id != 0
        assert net.number_of_vertices() == 2
        assert "random ids" in caplog.text

    def test_id_retries_exhausted(self):
        net = Network(id_retries=0)
        net.add_vertex(0)
        with pytest.raises(VertexLimitExceeded):
            net.add_vertex()

    def test_add_edge_creates_vertices(self):
        net = Network()
        edge_id = net.add_edge("A", "B")
        assert edge_id == 0
        assert net.has_vertex("A")
        assert net.has_vertex("B")
        assert net.has_edge("A", "B")

    def test_add_edge_with_weight(self):
        net = Network()
        edge_id = net.add_edge("A", "B", weight=2.5)
        assert net.edges[edge_id].weight == 2.5

    def test_bulk_insertion(self):
        net = Network()
        assert net.add_vertex_list(["A", ("B", 3)]) == ["A", "B"]
        assert net.vertices["B"].weight == 3
        ids = net.add_edge_list([("A", "B"), ("B", "C", 4), Edge("C", "D", edge_id="cd")])
        assert ids[2] == "cd"
        assert net.number_of_edges() == 3
        assert net.edges[ids[1]].weight == 4

    def test_bulk_insertion_from_mappings(self):
        net = Network()
        assert net.add_vertex_list([{"vertex_id": "A", "weight": 3}]) == ["A"]
        assert net.vertices["A"].weight == 3

        ids = net.add_edge_list([
            {"source": 1, "target": 2},
            {"source": "A", "target": 1, "edge_id": "a1", "weight": 2},
        ])
        assert ids[1] == "a1"
        assert net.has_edge(1, 2)
        assert net.edges["a1"].weight == 2
        assert not net.has_vertex("source")

    def test_bulk_mapping_respects_do_force(self):
        net = Network()
        net.add_vertex(1)
        with pytest.raises(InexistentVertex):
            net.add_edge_list([{"source": 1, "target": 2}], do_force=False)
        assert net.add_edge_list([{"source": 1, "target": 2, "do_force": True}], do_force=False) == [0]

    def test_views_are_read_only(self):
        net = Network()
        net.add_edge(1, 2)
        with pytest.raises(TypeError):
            net.vertices[3] = None
        snapshot = net.vertex_list
        snapshot[0].weight = 99
        assert net.vertices[1].weight == 1


class TestInsertionRules:

    def test_existing_vertex(self):
        net = Network()
        net.add_vertex("A")
        with pytest.raises(ExistingVertex):
            net.add_vertex("A")
        with pytest.raises(ValueError):
            net.add_vertex("A")

    def test_existing_edge_id(self):
        net = Network()
        net.add_edge(1, 2, edge_id="e")
        with pytest.raises(ExistingEdge):
            net.add_edge(2, 3, edge_id="e")

    def test_self_loop_rejected(self):
        net = Network()
        with pytest.raises(SelfLoop):
            net.add_edge(1, 1)
        assert net.number_of_vertices() == 0

    def test_self_loop_allowed(self):
        net = Network(allow_self_loops=True)
        net.add_edge(1, 1)
        assert net.degree(1) == 1
        assert net.neighbors(1) == [1]

    def test_duplicate_undirected_edge_is_noop(self):
        net = Network()
        net.add_edge(1, 2)
        assert net.add_edge(2, 1) is None
        assert net.number_of_edges() == 1

    def test_directed_orientations_are_distinct(self):
        net = Network(directed=True)
        net.add_edge(1, 2)
        assert net.add_edge(2, 1) is not None
        assert net.add_edge(1, 2) is None
        assert net.number_of_edges() == 2

    def test_strict_duplicate_raises(self):
        net = Network(strict=True)
        net.add_edge(1, 2)
        with pytest.raises(NotMultigraph):
            net.add_edge(2, 1)
        assert net.number_of_edges() == 1

    def test_unforced_missing_endpoint(self):
        net = Network()
        net.add_vertex(1)
        with pytest.raises(InexistentVertex) as excinfo:
            net.add_edge(1, 2, do_force=False)
        assert excinfo.value.vertex == 2
        assert net.number_of_vertices() == 1
        assert net.number_of_edges() == 0

    def test_unforced_missing_source(self):
        net = Network()
        net.add_vertex(2)
        with pytest.raises(InexistentVertex) as excinfo:
            net.add_edge(1, 2, do_force=False)
        assert excinfo.value.vertex == 1

    def test_edge_limit(self):
        net = Network(edge_limit=3)
        net.add_edge_list([(1, 2), (2, 3), (3, 4)])
        with pytest.raises(EdgeLimitExceeded):
            net.add_edge(4, 5)
        assert net.number_of_edges() == 3

    def test_vertex_limit(self):
        net = Network(vertex_limit=2)
        net.add_vertex_list([1, 2])
        with pytest.raises(VertexLimitExceeded):
            net.add_vertex(3)

    def test_forced_creation_respects_vertex_limit(self):
        net = Network(vertex_limit=3)
        net.add_edge(1, 2)
        with pytest.raises(VertexLimitExceeded):
            net.add_edge(3, 4)
        assert net.vertex_ids() == [1, 2]

    def test_failed_edge_id_leaves_no_forced_vertices(self):
        net = Network(id_retries=0)
        net.add_edge(1, 2, edge_id=0)
        with pytest.raises(EdgeLimitExceeded):
            net.add_edge(3, 4)
        assert net.vertex_ids() == [1, 2]
        assert net.number_of_edges() == 1

    def test_input_validation(self):
        net = Network()
        with pytest.raises(TypeError):
            net.add_edge("A", "B", weight="heavy")
        with pytest.raises(TypeError):
            net.add_vertex(1.5)


class TestRemoval:

    def test_remove_vertex_cascades(self):
        net = Network()
        net.add_edge_list([(1, 2), (1, 3), (2, 3)])
        net.remove_vertex(1)
        assert net.vertex_ids() == [2, 3]
        assert net.number_of_edges() == 1
        assert net.has_edge(2, 3)
        assert net.degree(2) == 1
        assert net.incidence_matrix().shape == (2, 1)

    def test_remove_missing_vertex(self):
        net = Network()
        with pytest.raises(InexistentVertex):
            net.remove_vertex("nonexistent")
        with pytest.raises(KeyError):
            net.remove_vertex("nonexistent")

    def test_remove_edge_ignores_orientation_when_undirected(self):
        net = Network()
        edge_id = net.add_edge(1, 2)
        assert net.remove_edge(2, 1) == edge_id
        assert not net.has_edge(1, 2)
        assert net.number_of_vertices() == 2

    def test_remove_edge_respects_orientation_when_directed(self):
        net = Network(directed=True)
        net.add_edge(1, 2)
        assert net.remove_edge(2, 1) is None
        assert net.number_of_edges() == 1

    def test_remove_edge_by_id(self):
        net = Network()
        net.add_edge(1, 2, edge_id="a")
        assert net.remove_edge(1, 2, edge_id="b") is None
        assert net.remove_edge(1, 2, edge_id="a") == "a"

    def test_remove_edge_no_match(self):
        net = Network()
        net.add_edge(1, 2)
        assert net.remove_edge(3, 4) is None
        assert net.number_of_edges() == 1

    def test_index_consistent_after_removal(self):
        net = Network()
        net.add_edge_list([(1, 2), (2, 3)])
        net.remove_edge(1, 2)
        net.add_edge(1, 3)
        assert net.degree(1) == 1
        assert net.degree(3) == 2
        assert net.neighbors(3) == [2, 1]


class TestQueries:

    def test_neighbors(self):
        net = Network()
        net.add_edge("A", "B")
        net.add_edge("C", "A")
        assert net.neighbors("A") == ["B", "C"]
        assert net.neighbors("missing") == []

    def test_directed_neighbors(self):
        net = Network(directed=True)
        net.add_edge("A", "B")
        net.add_edge("C", "A")
        assert net.out_neighbors("A") == ["B"]
        assert net.in_neighbors("A") == ["C"]
        assert net.out_degree("A") == 1
        assert net.in_degree("A") == 1
        assert net.degree("A") == 2

    def test_undirected_has_no_in_out(self):
        net = Network()
        net.add_edge("A", "B")
        assert net.in_neighbors("A") == []
        assert net.out_neighbors("A") == []
        assert net.in_degree("A") == 0
        assert net.out_degree("A") == 0

    def test_degrees(self):
        net = Network()
        net.add_edge_list([("A", "B"), ("A", "C")])
        assert net.degrees() == {"A": 2, "B": 1, "C": 1}

    def test_has_edge_direction_override(self):
        net = Network(directed=True)
        net.add_edge(1, 2)
        assert net.has_edge(1, 2)
        assert not net.has_edge(2, 1)
        assert net.has_edge(2, 1, directed=False)

    def test_edge_between_returns_copy(self):
        net = Network()
        edge_id = net.add_edge(1, 2)
        edge = net.edge_between(2, 1)
        assert edge.vertices == (1, 2)
        edge.weight = 10
        assert net.edges[edge_id].weight == 1
        assert net.edge_between(1, 3) is None
        assert net.edge_between(None, 1) is None

    def test_get_edges_between(self):
        net = Network()
        edge_id = net.add_edge(1, 2)
        assert net.get_edges_between(2, 1) == [edge_id]
        assert net.get_edges_between(1, 3) == []

    def test_edges_from_and_with(self):
        net = Network(directed=True)
        net.add_edge_list([(1, 2), (1, 3), (4, 1)])
        assert [e.target for e in net.edges_from(1)] == [2, 3]
        assert [e.target for e in net.edges_from(1, exclude=[2])] == [3]
        assert len(net.edges_with(1)) == 3

    def test_edge_neighbors(self):
        net = Network()
        net.add_edge_list([(1, 2), (2, 3)])
        hood = net.edge_neighbors(net.edge_between(1, 2))
        assert hood["source"] == {"id": 1, "neighbors": [2]}
        assert hood["target"] == {"id": 2, "neighbors": [1, 3]}

    def test_ranked_neighborhood(self):
        net = Network()
        net.add_edge_list([(1, 2), (1, 3), (1, 4), (2, 3)])
        assert net.ranked_neighborhood[0] == (1, 3)


class TestDerivedMetrics:

    def test_weight_and_genus(self):
        net = Network()
        net.add_edge_list([(1, 2, 2), (2, 3, 3), (3, 1, -1)])
        assert net.weight == 4
        assert net.vertex_weight == 3
        assert net.genus == 1
        assert [e.weight for e in net.negative_edges] == [-1]
        assert len(net.positive_edges) == 2

    def test_vertex_weight_filters(self):
        net = Network()
        net.add_vertex_list([("a", 1), ("b", -2), ("c", 0)])
        assert [v.id for v in net.positive_vertices] == ["a"]
        assert [v.id for v in net.negative_vertices] == ["b"]
        assert [v.id for v in net.zero_vertices] == ["c"]

    def test_density(self):
        net = Network()
        net.add_edge_list([(1, 2), (2, 3)])
        assert net.max_edges == 3
        assert net.density == pytest.approx(2 / 3)
        net.add_edge(3, 1)
        assert net.density == 1.0

    def test_density_of_tiny_networks(self):
        net = Network()
        assert net.density == 0.0
        net.add_vertex(1)
        assert net.density == 0.0

    def test_empty_sums(self):
        net = Network()
        assert net.weight == 0
        assert net.vertex_weight == 0


class TestCopyAndViews:

    def test_copy(self):
        net = Network(directed=True, edge_limit=10)
        net.add_vertex("A", weight=3)
        net.add_edge("A", "B", weight=2.0, edge_id="ab")

        net_copy = net.copy()

        assert net_copy.args == net.args
        assert net_copy.vertex_ids() == net.vertex_ids()
        assert net_copy.edge_ids() == ["ab"]
        assert net_copy.vertices["A"].weight == 3
        assert net_copy.edges["ab"].weight == 2.0

        # Should be independent copies
        net_copy.add_vertex("C")
        net_copy.remove_vertex("A")
        assert "C" not in net
        assert net.has_edge("A", "B")

    def test_views(self):
        net = Network()
        net.add_vertex("A", weight=4)
        net.add_edge("A", "B", weight=1.5)

        vertices_df = net.vertices_view()
        edges_df = net.edges_view()

        assert vertices_df.loc["A", "weight"] == 4
        assert vertices_df.loc["B", "degree"] == 1
        assert edges_df.iloc[0]["source"] == "A"
        assert edges_df.iloc[0]["weight"] == 1.5

    def test_empty_views(self):
        net = Network()
        assert net.vertices_view().empty
        assert net.edges_view().empty
        assert "weight" in net.edges_view().columns

    def test_adjacency_matrix(self):
        net = Network()
        net.add_edge_list([(1, 2), (2, 3), (3, 1)])
        adjacency = net.adjacency_matrix().toarray()
        assert adjacency.sum() == 6
        assert (adjacency == adjacency.T).all()

    def test_directed_matrices(self):
        net = Network(directed=True)
        net.add_edge(1, 2, weight=3.0)
        adjacency = net.adjacency_matrix(weighted=True).toarray()
        assert adjacency[0, 1] == 3.0
        assert adjacency[1, 0] == 0
        incidence = net.incidence_matrix().toarray()
        assert incidence[:, 0].tolist() == [1, -1]
