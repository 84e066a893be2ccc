from __future__ import annotations

import networkx as nx

from isocanon.graph.adjacency import AdjacencyGraph


def strip_graph6_header(g6: str) -> str:
    """
    Remove optional '>>graph6<<' header and whitespace.
    """
    s = g6.strip()
    if s.startswith(">>graph6<<"):
        s = s[len(">>graph6<<") :].strip()
    return s


def g6_to_nx(g6: str) -> nx.Graph:
    """
    Parse a graph6 string into a simple undirected NetworkX Graph.
    """
    s = strip_graph6_header(g6)
    G = nx.from_graph6_bytes(s.encode("ascii"))
    if isinstance(G, (nx.MultiGraph, nx.MultiDiGraph)):
        G = nx.Graph(G)
    return G


def g6_to_graph(g6: str) -> AdjacencyGraph:
    """
    Parse a graph6 string into an AdjacencyGraph on 0..n-1.
    """
    return AdjacencyGraph.from_networkx(g6_to_nx(g6))


def graph_to_g6(graph: AdjacencyGraph) -> str:
    """
    Encode a simple AdjacencyGraph as graph6 (no header).

    graph6 cannot hold loops or parallel edges; ValueError if present.
    """
    G = graph.to_networkx()
    if G.is_multigraph() or nx.number_of_selfloops(G) > 0:
        raise ValueError("graph6 only encodes simple graphs")
    return nx.to_graph6_bytes(G, header=False).decode("ascii").strip()
