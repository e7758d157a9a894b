"""
Structural algorithms over a Network.

Every function reads its input through the public Network surface and
returns either a scalar or a new Network; the input is never mutated.
"""
import heapq
import itertools
import logging
import math

import numpy as np

from .errors import InexistentVertex

logger = logging.getLogger(__name__)


def _copy_edge_into(net, target_network, edge):
    for vertex_id in edge.vertices:
        if not target_network.has_vertex(vertex_id):
            target_network.add_vertex(vertex_id, weight=net.vertices[vertex_id].weight)
    target_network.add_edge(edge.source, edge.target, edge_id=edge.id,
                            weight=edge.weight, do_force=False)


def ego(net, vertex_id):
    """
    Ego network of `vertex_id`: the vertex, its neighbors, and every edge
    among them.

    Edges touching the vertex go in first so that the second pass sees
    the full neighbor set when it picks up edges between neighbors.
    """
    ego_network = net.empty_copy()

    for edge in net.edges_with(vertex_id):
        _copy_edge_into(net, ego_network, edge)

    for edge in net.edge_list:
        if edge.id in ego_network.edges:
            continue
        if ego_network.has_vertex(edge.source) and ego_network.has_vertex(edge.target):
            _copy_edge_into(net, ego_network, edge)

    return ego_network


def complement(net):
    """
    Complement network: same vertices, an edge for every missing pair.
    Directed networks check each orientation on its own.
    """
    n = net.number_of_vertices()
    pairs = n * (n - 1) if net.directed else n * (n - 1) // 2
    complement_network = net.empty_copy(edge_limit=max(net.edge_limit, pairs))

    vertex_ids = net.vertex_ids()
    for vertex_id in vertex_ids:
        complement_network.add_vertex(vertex_id, weight=net.vertices[vertex_id].weight)

    # one insertion per pair; a full complement fills edge_limit exactly
    pairs_of = itertools.permutations if net.directed else itertools.combinations
    for vertex_a, vertex_b in pairs_of(vertex_ids, 2):
        if not net.has_edge(vertex_a, vertex_b):
            complement_network.add_edge(vertex_a, vertex_b, do_force=False)

    return complement_network


def core(net, k):
    """
    k-core decomposition by iterative peeling.

    Any vertex with degree < k is removed and the scan restarts from the
    first vertex, since a removal lowers the degree of its neighbors.
    k is then decremented until it reaches 0 or the network is empty.
    k <= 0 returns a plain copy.
    """
    k_decomposition = net.copy()
    start_vertices = k_decomposition.number_of_vertices()

    while k > 0 and k_decomposition.number_of_vertices() > 0:
        peeled = True
        while peeled:
            peeled = False
            for vertex_id in k_decomposition.vertex_ids():
                if k_decomposition.degree(vertex_id) < k:
                    k_decomposition.remove_vertex(vertex_id)
                    peeled = True
                    break
        k -= 1

    logger.debug(
        "Core peeling kept %d of %d vertices",
        k_decomposition.number_of_vertices(), start_vertices,
    )
    return k_decomposition


def clustering(net, vertex_id):
    """
    Local clustering coefficient of `vertex_id`.

    Existing edges among the neighbors divided by the edge count of a
    complete graph on them. Directed networks double the ratio because
    a single orientation is enough to count a link.
    """
    ego_network = ego(net, vertex_id)

    if ego_network.number_of_vertices() <= 1:
        return 0.0

    # Max edges in the ego network without the given vertex
    ego_network.remove_vertex(vertex_id)
    max_edges = ego_network.max_edges
    if max_edges == 0:
        return 0.0

    directed_const = 2 if net.directed else 1
    return directed_const * (ego_network.number_of_edges() / max_edges)


def average_clustering(net):
    if net.number_of_vertices() <= 1:
        return 0.0
    return float(np.mean([clustering(net, vertex_id) for vertex_id in net.vertex_ids()]))


def assortativity(net):
    """
    Degree assortativity: Pearson correlation of the degrees at both ends
    of every edge. NaN when there are no edges or all degrees are equal.
    """
    if net.number_of_edges() == 0:
        return math.nan

    degrees = net.degrees()
    pairs = np.array(
        [(degrees[source], degrees[target]) for source, target in net.simple_edge_list],
        dtype=float,
    )
    degree_i, degree_j = pairs[:, 0], pairs[:, 1]

    edge_multi = np.mean(degree_i * degree_j)
    edge_sum = np.mean(degree_i + degree_j)
    edge_sqr_sum = np.mean(degree_i ** 2 + degree_j ** 2)

    denominator = 2 * edge_sqr_sum - edge_sum ** 2
    if denominator == 0:
        return math.nan
    return float((4 * edge_multi - edge_sum ** 2) / denominator)


def average_neighbor_degree(net, vertex_id):
    """Sum of the neighbors' degrees over the vertex's own degree."""
    degree = net.degree(vertex_id)
    if degree == 0:
        return 0.0
    return sum(net.degree(neighbor) for neighbor in net.neighbors(vertex_id)) / degree


def label_path_weights(net, source):
    """
    Network reachable from `source` whose vertex weights are the least total
    edge weight of a path from `source`. Directed networks follow edge
    orientation. Negative edge weights are rejected.
    """
    if not net.has_vertex(source):
        raise InexistentVertex(source)

    distances = {source: 0}
    settled = set()
    tie_breaker = itertools.count()
    work_list = [(0, next(tie_breaker), source)]

    while work_list:
        distance, _, vertex_id = heapq.heappop(work_list)
        if vertex_id in settled:
            continue
        settled.add(vertex_id)

        for edge in net.edges_with(vertex_id):
            if net.directed and edge.source != vertex_id:
                continue
            if edge.weight < 0:
                raise ValueError(f"negative edge weight on edge {edge.id!r}")
            neighbor = edge.pair_vertex(vertex_id)
            candidate = distance + edge.weight
            if neighbor not in distances or candidate < distances[neighbor]:
                distances[neighbor] = candidate
                heapq.heappush(work_list, (candidate, next(tie_breaker), neighbor))

    labeled = net.empty_copy()
    for vertex_id in net.vertex_ids():
        if vertex_id in distances:
            labeled.add_vertex(vertex_id, weight=distances[vertex_id])
    for edge in net.edge_list:
        if edge.source in distances and edge.target in distances:
            labeled.add_edge(edge.source, edge.target, edge_id=edge.id,
                             weight=edge.weight, do_force=False)
    return labeled
