from __future__ import annotations

from collections import Counter
from typing import Iterable, List, Optional, Protocol, Sequence, Set, Tuple, runtime_checkable

import networkx as nx


@runtime_checkable
class GraphCapability(Protocol):
    """
    What the canonical form search needs to know about a graph.

    Vertices are 0..vertex_count()-1. connectivity() is the edge
    multiplicity (0 when there is no edge), so multigraphs are supported.
    """

    def vertex_count(self) -> int: ...

    def neighbours_in_block(self, block: Set[int], vertex: int) -> int: ...

    def connectivity(self, i: int, j: int) -> int: ...


class AdjacencyGraph:
    """
    Undirected multigraph on {0, ..., n-1}, stored as one Counter of
    neighbour multiplicities per vertex.

    A self-loop adds 2 to the vertex's own multiplicity, so degree() counts
    it twice.
    """

    def __init__(self, n: int) -> None:
        if n < 0:
            raise ValueError("vertex count must be non-negative")
        self._adj: List[Counter[int]] = [Counter() for _ in range(n)]

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[Tuple[int, int]],
        n: Optional[int] = None,
    ) -> "AdjacencyGraph":
        """Build a graph from an edge list. n defaults to max vertex + 1."""
        edges = list(edges)
        if n is None:
            n = max((max(u, v) for u, v in edges), default=-1) + 1
        g = cls(n)
        for u, v in edges:
            g.add_edge(u, v)
        return g

    @classmethod
    def from_networkx(cls, G: nx.Graph) -> "AdjacencyGraph":
        """
        Convert an undirected networkx (multi)graph.

        Nodes are numbered in sorted order when they are mutually comparable,
        otherwise in G's node order. Parallel edges of a MultiGraph keep
        their multiplicity.
        """
        if G.is_directed():
            raise ValueError("directed graphs are not supported")
        nodes = list(G.nodes())
        try:
            nodes = sorted(nodes)
        except TypeError:
            pass
        index = {v: i for i, v in enumerate(nodes)}
        g = cls(len(nodes))
        for u, v in G.edges():
            g.add_edge(index[u], index[v])
        return g

    def to_networkx(self) -> nx.Graph:
        """A networkx Graph, or MultiGraph when some edge has multiplicity > 1."""
        edges = self.edges()
        multi = any(c > 1 for c in Counter(edges).values())
        G = nx.MultiGraph() if multi else nx.Graph()
        G.add_nodes_from(range(self.vertex_count()))
        G.add_edges_from(edges)
        return G

    def vertex_count(self) -> int:
        return len(self._adj)

    def add_edge(self, u: int, v: int) -> None:
        n = len(self._adj)
        if not (0 <= u < n and 0 <= v < n):
            raise ValueError(f"edge ({u}, {v}) out of range for n={n}")
        self._adj[u][v] += 1
        self._adj[v][u] += 1

    def connectivity(self, i: int, j: int) -> int:
        return self._adj[i][j]

    def neighbours_in_block(self, block: Set[int], vertex: int) -> int:
        """Total edge multiplicity from *vertex* into *block*."""
        nbrs = self._adj[vertex]
        if len(block) < len(nbrs):
            return sum(nbrs[w] for w in block if w in nbrs)
        return sum(c for w, c in nbrs.items() if w in block)

    def degree(self, v: int) -> int:
        return sum(self._adj[v].values())

    def degree_sequence(self) -> List[int]:
        """Degrees in non-increasing order."""
        return sorted((self.degree(v) for v in range(len(self._adj))), reverse=True)

    def edges(self) -> List[Tuple[int, int]]:
        """
        Edges as (u, v) with u <= v, one entry per unit of multiplicity,
        in sorted order.
        """
        eds: List[Tuple[int, int]] = []
        for u, nbrs in enumerate(self._adj):
            for v in sorted(nbrs):
                if v > u:
                    eds.extend([(u, v)] * nbrs[v])
                elif v == u:
                    eds.extend([(u, u)] * (nbrs[v] // 2))
        return eds

    def relabel(self, perm: Sequence[int]) -> "AdjacencyGraph":
        """Copy of the graph in which vertex v is renamed perm[v]."""
        g = AdjacencyGraph(len(self._adj))
        for u, v in self.edges():
            g.add_edge(perm[u], perm[v])
        return g

    def __repr__(self) -> str:
        return f"AdjacencyGraph(n={self.vertex_count()}, edges={self.edges()!r})"
