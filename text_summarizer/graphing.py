from __future__ import annotations
from typing import List, Sequence
from .datatypes import Edge, Graph, Sentence

def build_graph(sentences: List[Sentence], simM: Sequence[Sequence[float]], threshold: float = 0.1) -> Graph:
    """Undirected graph with an edge wherever max(sim[i][j], sim[j][i]) >= threshold."""
    edges: List[Edge] = []
    n = len(sentences)
    for i in range(n):
        for j in range(i+1, n):
            w = max(float(simM[i][j]), float(simM[j][i]))
            if w >= threshold:
                edges.append(Edge(i=i, j=j, weight=w))
    return Graph(nodes=sentences, edges=edges)

def degree(graph: Graph) -> List[int]:
    deg = [0]*len(graph.nodes)
    for e in graph.edges:
        deg[e.i] += 1
        deg[e.j] += 1
    return deg
