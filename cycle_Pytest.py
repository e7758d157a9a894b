import itertools

import pytest
from nets import Cycle, CycleState, Edge, Network, complete_network, quadruplets, triplets


class TestCycleGrowth:

    def test_initial_state(self):
        cycle = Cycle(Edge(1, 2))
        assert cycle.loop_vertex == 1
        assert cycle.tip_vertex == 2
        assert cycle.state is CycleState.GROWING
        assert not cycle.is_closed
        assert len(cycle) == 1

    def test_loop_vertex_override(self):
        cycle = Cycle(Edge(1, 2), loop_vertex=2)
        assert cycle.loop_vertex == 2
        assert cycle.tip_vertex == 1

        directed = Cycle(Edge(1, 2), directed=True, loop_vertex=2)
        assert directed.loop_vertex == 1

    def test_add_edge_moves_tip(self):
        cycle = Cycle(Edge(1, 2))
        assert cycle.add_edge(Edge(2, 3))
        assert cycle.tip_vertex == 3
        # undirected cycles accept either orientation
        assert cycle.add_edge(Edge(4, 3))
        assert cycle.tip_vertex == 4
        assert cycle.path == [1, 2, 3, 4]

    def test_directed_orientation_enforced(self):
        cycle = Cycle(Edge(1, 2), directed=True)
        assert not cycle.add_edge(Edge(3, 2))
        assert cycle.tip_vertex == 2
        assert len(cycle) == 1

    def test_rejected_edges(self):
        cycle = Cycle(Edge(1, 2))
        assert not cycle.add_edge(None)
        assert not cycle.add_edge(Edge(2, 1))
        assert not cycle.add_edge(Edge(3, 4))
        assert len(cycle) == 1

    def test_close(self):
        cycle = Cycle(Edge(1, 2))
        cycle.add_edge(Edge(2, 3))
        assert not cycle.close(Edge(3, 4))
        assert cycle.close(Edge(3, 1))
        assert cycle.is_closed
        assert cycle.state is CycleState.CLOSED
        assert cycle.tip_vertex == 1
        assert len(cycle) == 3

    def test_closed_cycle_is_frozen(self):
        cycle = Cycle(Edge(1, 2))
        cycle.add_edge(Edge(2, 3))
        cycle.close(Edge(1, 3))
        assert not cycle.add_edge(Edge(1, 4))
        assert not cycle.close(Edge(1, 3))
        assert len(cycle) == 3

    def test_close_with_initial_edge_rejected(self):
        cycle = Cycle(Edge(1, 2))
        assert not cycle.close(Edge(2, 1))
        assert not cycle.close(None)

    def test_vertices_and_weight(self):
        cycle = Cycle(Edge(1, 2, weight=2))
        cycle.add_edge(Edge(2, 3, weight=3))
        cycle.close(Edge(3, 1, weight=4))
        assert [vertex.id for vertex in cycle.vertex_list] == [1, 2, 3]
        assert cycle.has_vertex(3)
        assert not cycle.has_vertex(4)
        assert cycle.weight == 9

    def test_directed_two_cycle(self):
        cycle = Cycle(Edge(1, 2), directed=True)
        assert cycle.close(Edge(2, 1))
        assert len(cycle) == 2


class TestCycleIdentity:

    def build(self, vertices, directed=False):
        pairs = list(zip(vertices, vertices[1:]))
        cycle = Cycle(Edge(*pairs[0]), directed=directed)
        for pair in pairs[1:]:
            cycle.add_edge(Edge(*pair))
        cycle.close(Edge(vertices[-1], vertices[0]))
        return cycle

    def test_rotation_and_reflection(self):
        cycle = self.build([1, 2, 3, 4])
        assert cycle.is_same_as(self.build([2, 3, 4, 1]))
        assert cycle.is_same_as(self.build([4, 3, 2, 1]))
        assert cycle.key == self.build([3, 2, 1, 4]).key

    def test_different_edge_sets(self):
        assert not self.build([1, 2, 3, 4]).is_same_as(self.build([1, 3, 2, 4]))

    def test_directedness_must_match(self):
        assert not self.build([1, 2, 3]).is_same_as(self.build([1, 2, 3], directed=True))

    def test_directed_orientation_matters(self):
        forward = self.build([1, 2, 3], directed=True)
        assert forward.is_same_as(self.build([2, 3, 1], directed=True))
        assert not forward.is_same_as(self.build([3, 2, 1], directed=True))

    def test_open_and_closed_differ(self):
        open_cycle = Cycle(Edge(1, 2))
        open_cycle.add_edge(Edge(2, 3))
        assert not self.build([1, 2, 3]).is_same_as(open_cycle)


class TestTriplets:

    def test_single_triangle(self):
        net = Network()
        net.add_edge_list([(1, 2), (2, 3), (3, 1)])
        result = net.triplets()
        assert len(result) == 1
        assert set(result[0]) == {1, 2, 3}

    def test_pendant_vertices_ignored(self):
        net = Network()
        net.add_edge_list([(1, 2), (2, 3), (3, 1), (3, 4), (4, 5)])
        assert [set(t) for t in triplets(net)] == [{1, 2, 3}]

    def test_complete_network(self):
        result = complete_network(5).triplets()
        assert len(result) == 10
        assert len({frozenset(t) for t in result}) == 10

    def test_square_has_no_triplets(self):
        net = Network()
        net.add_edge_list([(1, 2), (2, 3), (3, 4), (4, 1)])
        assert net.triplets() == []

    def test_directed_cycle(self):
        net = Network(directed=True)
        net.add_edge_list([(1, 2), (2, 3), (3, 1)])
        result = net.triplets()
        assert len(result) == 1
        vertex_id, source, target = result[0]
        assert net.has_edge(vertex_id, source)
        assert net.has_edge(source, target)
        assert net.has_edge(target, vertex_id)

    def test_directed_transitive_triangle_is_not_a_cycle(self):
        net = Network(directed=True)
        net.add_edge_list([(1, 2), (2, 3), (1, 3)])
        assert net.triplets() == []

    def test_directed_both_orientations(self):
        net = Network(directed=True)
        net.add_edge_list([(1, 2), (2, 3), (3, 1), (2, 1), (3, 2), (1, 3)])
        assert len(net.triplets()) == 2


class TestQuadruplets:

    def test_k4(self):
        result = complete_network(4).quadruplets()
        assert len(result) == 3
        assert all(cycle.is_closed and len(cycle) == 4 for cycle in result)
        for first, second in itertools.combinations(result, 2):
            assert not first.is_same_as(second)

    @pytest.mark.parametrize("size", [4, 5, 6, 7])
    def test_complete_network_count(self, size):
        result = quadruplets(complete_network(size))
        assert len(result) == size * (size - 1) * (size - 2) * (size - 3) // 8
        assert len({cycle.key for cycle in result}) == len(result)

    def test_square_with_tail(self):
        net = Network()
        net.add_edge_list([(1, 2), (2, 3), (3, 4), (4, 1), (4, 5), (5, 6)])
        result = net.quadruplets()
        assert len(result) == 1
        assert set(result[0].path) == {1, 2, 3, 4}

    def test_triangle_has_no_quadruplets(self):
        net = Network()
        net.add_edge_list([(1, 2), (2, 3), (3, 1)])
        assert net.quadruplets() == []

    def test_directed_square(self):
        net = Network(directed=True)
        net.add_edge_list([(1, 2), (2, 3), (3, 4), (4, 1)])
        result = net.quadruplets()
        assert len(result) == 1
        assert result[0].path == [1, 2, 3, 4]

    def test_directed_square_broken_orientation(self):
        net = Network(directed=True)
        net.add_edge_list([(1, 2), (2, 3), (4, 3), (4, 1)])
        assert net.quadruplets() == []

    def test_complete_directed_network(self):
        result = complete_network(4, directed=True).quadruplets()
        assert len(result) == 6
