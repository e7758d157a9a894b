from nets import Network, complete_network, load_adjacency_matrix, random_network, write_adjacency_matrix


def edge_set(net):
    if net.directed:
        return set(net.simple_edge_list)
    return {frozenset(pair) for pair in net.simple_edge_list}


class TestCompleteNetwork:

    def test_undirected(self):
        net = complete_network(5)
        assert net.number_of_vertices() == 5
        assert net.number_of_edges() == 10
        assert net.density == 1.0

    def test_directed(self):
        net = complete_network(4, directed=True)
        assert net.number_of_edges() == 12
        assert net.has_edge(0, 3) and net.has_edge(3, 0)

    def test_limits_fit_exactly(self):
        net = complete_network(6)
        assert net.vertex_limit == 6
        assert net.edge_limit == 15

    def test_empty(self):
        net = complete_network(0)
        assert net.number_of_vertices() == 0
        assert net.number_of_edges() == 0


class TestRandomNetwork:

    def test_requested_counts(self):
        net = random_network(10, 15, seed=1)
        assert net.number_of_vertices() == 10
        assert net.number_of_edges() == 15

    def test_seed_is_deterministic(self):
        first = random_network(20, 30, seed=42)
        second = random_network(20, 30, seed=42)
        assert first.simple_edge_list == second.simple_edge_list

    def test_directed(self):
        net = random_network(10, 20, directed=True, seed=4)
        assert net.directed
        assert net.number_of_edges() == 20

    def test_too_few_vertices(self):
        assert random_network(1, 5).number_of_edges() == 0
        assert random_network(0, 5).number_of_vertices() == 0

    def test_saturated_request_stops(self):
        net = random_network(4, 10, seed=0)
        assert net.number_of_edges() <= 6


class TestAdjacencyMatrixFiles:

    def test_round_trip(self, tmp_path):
        net = Network()
        net.add_edge_list([("A", "B"), ("B", "C")])
        path = tmp_path / "net.csv"
        write_adjacency_matrix(net, path)

        loaded = load_adjacency_matrix(path)
        assert loaded.vertex_ids() == ["A", "B", "C"]
        assert edge_set(loaded) == edge_set(net)

    def test_weighted_round_trip(self, tmp_path):
        net = Network()
        net.add_edge("A", "B", weight=2.5)
        net.add_vertex("C")
        path = tmp_path / "net.csv"
        write_adjacency_matrix(net, path, weighted=True)

        loaded = load_adjacency_matrix(path)
        assert loaded.edge_between("A", "B").weight == 2.5
        assert loaded.number_of_edges() == 1
        assert loaded.has_vertex("C")

    def test_directed_round_trip(self, tmp_path):
        net = Network(directed=True)
        net.add_edge_list([("A", "B"), ("C", "B")])
        path = tmp_path / "net.csv"
        write_adjacency_matrix(net, path)

        loaded = load_adjacency_matrix(path, directed=True)
        assert edge_set(loaded) == {("A", "B"), ("C", "B")}

    def test_ids_are_read_as_strings(self, tmp_path):
        path = tmp_path / "net.csv"
        write_adjacency_matrix(complete_network(3), path)
        loaded = load_adjacency_matrix(path)
        assert loaded.vertex_ids() == ["0", "1", "2"]
        assert loaded.number_of_edges() == 3

    def test_complete_network_fills_edge_limit(self, tmp_path):
        path = tmp_path / "net.csv"
        write_adjacency_matrix(complete_network(6), path)
        loaded = load_adjacency_matrix(path)
        assert loaded.number_of_edges() == loaded.edge_limit == 15

    def test_complete_directed_network(self, tmp_path):
        path = tmp_path / "net.csv"
        write_adjacency_matrix(complete_network(4, directed=True), path)
        assert load_adjacency_matrix(path, directed=True).number_of_edges() == 12

    def test_hand_written_file(self, tmp_path):
        path = tmp_path / "net.csv"
        path.write_text(",x,y,z\nx,0,1,0\ny,1,5,2\nz,0,2,0\n")

        loaded = load_adjacency_matrix(path)
        assert loaded.number_of_edges() == 2
        assert not loaded.has_edge("y", "y")
        assert loaded.edge_between("y", "z").weight == 2.0
