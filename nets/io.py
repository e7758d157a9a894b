"""
Adjacency-matrix CSV exchange.

Layout: the first row holds an empty corner cell followed by the vertex
ids; every other row starts with a vertex id followed by the weights of
its edges towards each column vertex (0 = no edge). Vertex ids are read
back as strings.
"""
import logging

import numpy as np
import pandas as pd

from .network import Network

logger = logging.getLogger(__name__)


def load_adjacency_matrix(path, directed=False):
    """
    Read an adjacency-matrix CSV into a new Network sized to fit it.
    Diagonal entries are ignored; in undirected networks the first of
    two symmetric entries decides the edge weight.
    """
    frame = pd.read_csv(path, index_col=0, dtype=str)
    column_ids = [str(column).strip() for column in frame.columns]
    row_ids = [str(row).strip() for row in frame.index]
    weights = frame.apply(pd.to_numeric, errors="coerce").fillna(0).to_numpy(dtype=float)

    n = len(column_ids)
    net = Network(
        directed=directed,
        vertex_limit=n,
        edge_limit=n * (n - 1) if directed else n * (n - 1) // 2,
    )
    net.add_vertex_list(column_ids)

    rows, cols = np.nonzero(weights)
    for row, col in zip(rows, cols):
        source, target = row_ids[row], column_ids[col]
        if source == target or net.has_edge(source, target):
            continue
        net.add_edge(source, target, weight=float(weights[row, col]), do_force=False)

    logger.debug(
        "Loaded %s: %d vertices, %d edges",
        path, net.number_of_vertices(), net.number_of_edges(),
    )
    return net


def write_adjacency_matrix(net, path, weighted=False):
    """Write `net` as an adjacency-matrix CSV (1/0 entries unless `weighted`)."""
    vertex_ids = net.vertex_ids()
    matrix = net.adjacency_matrix(weighted=weighted).toarray()
    frame = pd.DataFrame(matrix, index=vertex_ids, columns=vertex_ids)
    frame.to_csv(path)
