"""
Network container, structural algorithms and cycle enumeration.
"""
import logging

from .cycle import Cycle, CycleState, quadruplets, triplets
from .entities import Edge, Vertex
from .errors import (
    EdgeLimitExceeded,
    ExistingEdge,
    ExistingVertex,
    InexistentVertex,
    NetworkError,
    NotMultigraph,
    SelfLoop,
    VertexLimitExceeded,
)
from .generators import complete_network, random_network
from .io import load_adjacency_matrix, write_adjacency_matrix
from .network import Network

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Network",
    "Vertex",
    "Edge",
    "Cycle",
    "CycleState",
    "triplets",
    "quadruplets",
    "complete_network",
    "random_network",
    "load_adjacency_matrix",
    "write_adjacency_matrix",
    "NetworkError",
    "VertexLimitExceeded",
    "EdgeLimitExceeded",
    "ExistingVertex",
    "ExistingEdge",
    "InexistentVertex",
    "SelfLoop",
    "NotMultigraph",
]
