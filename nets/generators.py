import logging

import numpy as np

from .network import DEFAULT_EDGE_LIMIT, DEFAULT_VERTEX_LIMIT, Network

logger = logging.getLogger(__name__)


def complete_network(size, directed=False, **kwargs):
    """
    Complete network on vertices 0..size-1, with limits sized to fit it exactly.
    Directed networks get both orientations of every pair.
    """
    pairs = size * (size - 1) if directed else size * (size - 1) // 2
    net = Network(directed=directed, vertex_limit=size, edge_limit=pairs, **kwargs)

    for vertex in range(size):
        net.add_vertex(vertex)
        for other in range(vertex):
            net.add_edge(other, vertex, do_force=False)
            if directed:
                net.add_edge(vertex, other, do_force=False)

    return net


def random_network(number_vertices, number_edges, directed=False, edge_tries=30, seed=None):
    """
    Try to build a network with the given vertex and edge counts by drawing
    random vertex pairs. Gives up after `edge_tries` consecutive draws that
    add nothing, so the result may hold fewer edges than asked for.
    """
    rng = np.random.default_rng(seed)
    net = Network(
        directed=directed,
        vertex_limit=max(DEFAULT_VERTEX_LIMIT, number_vertices),
        edge_limit=max(DEFAULT_EDGE_LIMIT, number_edges),
    )
    net.add_vertex_list(range(number_vertices))
    if number_vertices < 2:
        return net

    tries = edge_tries
    while net.number_of_edges() < number_edges and tries > 0:
        source, target = (int(v) for v in rng.integers(number_vertices, size=2))
        if source != target and net.add_edge(source, target, do_force=False) is not None:
            tries = edge_tries
        else:
            tries -= 1

    if net.number_of_edges() < number_edges:
        logger.debug(
            "Random network stopped at %d of %d requested edges",
            net.number_of_edges(), number_edges,
        )
    return net
