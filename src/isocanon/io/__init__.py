from .graph6 import strip_graph6_header, g6_to_nx, g6_to_graph, graph_to_g6

__all__ = [
    "strip_graph6_header",
    "g6_to_nx",
    "g6_to_graph",
    "graph_to_g6",
]
