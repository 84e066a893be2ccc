from .adjacency import GraphCapability, AdjacencyGraph

__all__ = [
    "GraphCapability",
    "AdjacencyGraph",
]
