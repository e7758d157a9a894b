import math

import pytest
from nets import InexistentVertex, Network, complete_network, random_network


def edge_set(net):
    if net.directed:
        return set(net.simple_edge_list)
    return {frozenset(pair) for pair in net.simple_edge_list}


class TestEgo:

    def test_ego_closes_triangles_among_neighbors(self):
        net = Network()
        net.add_edge_list([(1, 2), (1, 3), (2, 3), (3, 4), (4, 5)])

        ego = net.ego(1)
        assert set(ego.vertex_ids()) == {1, 2, 3}
        assert ego.number_of_edges() == 3

        ego = net.ego(3)
        assert set(ego.vertex_ids()) == {1, 2, 3, 4}
        assert ego.number_of_edges() == 4
        assert not ego.has_vertex(5)

    def test_ego_keeps_ids_and_weights(self):
        net = Network()
        net.add_vertex(1, weight=7)
        edge_id = net.add_edge(1, 2, weight=5)
        ego = net.ego(1)
        assert ego.edges[edge_id].weight == 5
        assert ego.vertices[1].weight == 7

    def test_ego_of_isolated_vertex_is_empty(self):
        net = Network()
        net.add_vertex(1)
        assert net.ego(1).number_of_vertices() == 0

    def test_ego_is_independent(self):
        net = Network()
        net.add_edge_list([(1, 2), (1, 3)])
        ego = net.ego(1)
        ego.remove_vertex(2)
        assert net.has_edge(1, 2)


class TestComplement:

    def test_complement_of_path(self):
        net = Network()
        net.add_edge_list([(1, 2), (2, 3)])
        complement = net.complement()
        assert set(complement.vertex_ids()) == {1, 2, 3}
        assert edge_set(complement) == {frozenset({1, 3})}

    def test_complement_keeps_isolated_vertices(self):
        complement = complete_network(4).complement()
        assert complement.number_of_vertices() == 4
        assert complement.number_of_edges() == 0

    def test_directed_complement_checks_each_orientation(self):
        net = Network(directed=True)
        net.add_vertex(3)
        net.add_edge(1, 2)
        complement = net.complement()
        assert complement.number_of_edges() == 5
        assert complement.has_edge(2, 1)
        assert not complement.has_edge(1, 2)

    def test_double_complement_restores_edges(self):
        net = random_network(12, 20, seed=7)
        assert edge_set(net.complement().complement()) == edge_set(net)

    def test_directed_double_complement_restores_edges(self):
        net = random_network(8, 14, directed=True, seed=3)
        assert edge_set(net.complement().complement()) == edge_set(net)

    def test_complement_grows_edge_limit(self):
        net = Network(vertex_limit=80, edge_limit=10)
        net.add_vertex_list(range(80))
        complement = net.complement()
        assert complement.number_of_edges() == 80 * 79 // 2

    def test_complement_beyond_default_edge_limit(self):
        net = Network(vertex_limit=80)
        net.add_vertex_list(range(72))
        complement = net.complement()
        assert complement.edge_limit == 72 * 71 // 2
        assert complement.number_of_edges() == 72 * 71 // 2

    def test_full_directed_complement(self):
        net = Network(directed=True, edge_limit=1)
        net.add_vertex_list(range(5))
        assert net.complement().number_of_edges() == 20


class TestClustering:

    def test_triangle(self):
        net = Network()
        net.add_edge_list([(1, 2), (2, 3), (3, 1)])
        assert net.clustering(1) == 1.0
        assert net.average_clustering() == 1.0

    def test_triangle_with_pendant(self):
        net = Network()
        net.add_edge_list([(1, 2), (1, 3), (2, 3), (1, 4)])
        assert net.clustering(1) == pytest.approx(1 / 3)
        assert net.clustering(4) == 0

    def test_low_degree_vertices(self):
        net = Network()
        net.add_vertex(0)
        net.add_edge_list([(1, 2), (1, 3), (1, 4)])
        assert net.clustering(0) == 0
        assert net.clustering(2) == 0
        assert net.clustering(1) == 0

    def test_directed_constant(self):
        net = Network(directed=True)
        net.add_edge_list([(1, 2), (2, 3), (3, 1)])
        assert net.clustering(1) == 2.0

    def test_bounds(self):
        net = random_network(15, 40, seed=11)
        for vertex_id in net.vertex_ids():
            assert 0 <= net.clustering(vertex_id) <= 1

    def test_average_of_tiny_network(self):
        net = Network()
        assert net.average_clustering() == 0
        net.add_vertex(1)
        assert net.average_clustering() == 0


class TestAssortativity:

    def test_star_is_disassortative(self):
        net = Network()
        net.add_edge_list([(0, 1), (0, 2), (0, 3)])
        assert net.assortativity() == pytest.approx(-1.0)

    def test_path(self):
        net = Network()
        net.add_edge_list([(1, 2), (2, 3), (3, 4)])
        assert net.assortativity() == pytest.approx(-0.5)

    def test_undefined_cases(self):
        assert math.isnan(Network().assortativity())
        triangle = Network()
        triangle.add_edge_list([(1, 2), (2, 3), (3, 1)])
        assert math.isnan(triangle.assortativity())


class TestCore:

    def test_core_zero_is_identity(self):
        net = random_network(10, 15, seed=5)
        core = net.core(0)
        assert core.vertex_ids() == net.vertex_ids()
        assert core.edge_ids() == net.edge_ids()
        assert core is not net

    def test_negative_k_is_noop(self):
        net = Network()
        net.add_edge(1, 2)
        assert net.core(-3).vertex_ids() == [1, 2]

    def test_peeling_cascades(self):
        net = Network()
        net.add_edge_list([(1, 2), (2, 3), (3, 4)])
        assert net.core(2).number_of_vertices() == 0

    def test_restart_after_removal(self):
        net = Network()
        net.add_vertex_list([1, 2, 3, 4, 5])
        net.add_edge_list([(1, 2), (2, 3), (3, 4), (4, 5), (5, 3)])
        core = net.core(2)
        assert set(core.vertex_ids()) == {3, 4, 5}
        assert core.number_of_edges() == 3

    def test_complete_network(self):
        net = complete_network(4)
        assert net.core(3).number_of_vertices() == 4
        assert net.core(4).number_of_vertices() == 0

    def test_vertex_count_non_increasing(self):
        net = random_network(20, 45, seed=2)
        counts = [net.core(k).number_of_vertices() for k in range(6)]
        assert counts == sorted(counts, reverse=True)

    def test_input_untouched(self):
        net = Network()
        net.add_edge_list([(1, 2), (2, 3)])
        net.core(2)
        assert net.number_of_vertices() == 3


class TestNeighborDegreeAndPaths:

    def test_average_neighbor_degree(self):
        net = Network()
        net.add_vertex(9)
        net.add_edge_list([(0, 1), (0, 2), (0, 3), (0, 4)])
        assert net.average_neighbor_degree(0) == 1.0
        assert net.average_neighbor_degree(1) == 4.0
        assert net.average_neighbor_degree(9) == 0.0

    def test_label_path_weights(self):
        net = Network()
        net.add_edge_list([("a", "b", 1), ("b", "c", 2), ("a", "c", 5), ("d", "e", 1)])
        labeled = net.label_path_weights("a")
        assert labeled.vertex_ids() == ["a", "b", "c"]
        assert [v.weight for v in labeled.vertex_list] == [0, 1, 3]
        assert labeled.number_of_edges() == 3
        assert net.vertices["c"].weight == 1

    def test_label_path_weights_follows_direction(self):
        net = Network(directed=True)
        net.add_edge_list([("a", "b"), ("c", "a")])
        assert net.label_path_weights("a").vertex_ids() == ["a", "b"]

    def test_label_path_weights_on_long_chain(self):
        net = Network(vertex_limit=5000, edge_limit=5000)
        net.add_edge_list([(i, i + 1) for i in range(3000)])
        labeled = net.label_path_weights(0)
        assert labeled.vertices[3000].weight == 3000

    def test_label_path_weights_rejects_bad_input(self):
        net = Network()
        net.add_edge("a", "b", weight=-1)
        with pytest.raises(ValueError):
            net.label_path_weights("a")
        with pytest.raises(InexistentVertex):
            net.label_path_weights("z")
