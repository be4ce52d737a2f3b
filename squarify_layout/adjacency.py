"""
Adjacency graph construction for treemap tiles.

Builds a NetworkX graph where nodes are tile indices and edges connect
tiles that share a boundary segment.
"""

from collections.abc import Mapping
from typing import Any, Optional, Sequence

import networkx as nx
from shapely.ops import snap

from . import config
from .rect_model import Rect


def build_adjacency_graph(rects: Sequence[Any],
                          tolerance: Optional[float] = None,
                          snap_tolerance: Optional[float] = None) -> nx.Graph:
    """
    Build an adjacency graph from laid-out tiles.

    Two tiles are adjacent if they share a boundary of length > tolerance.
    Edges closer than *snap_tolerance* are treated as coincident, so
    floating-point seams between neighbouring tiles do not break
    adjacency.  Zero-area tiles become isolated nodes.

    Parameters
    ----------
    rects : sequence
        Tiles with geometry (anything :meth:`Rect.coerce` accepts).
    tolerance : float, optional
        Minimum shared boundary length to count as adjacent.
        Defaults to ``config.ADJACENCY_TOLERANCE``.
    snap_tolerance : float, optional
        Defaults to ``config.TOLERANCE``.

    Returns
    -------
    nx.Graph
        Undirected graph with the tile index as node (attributes
        ``area`` and, when present, ``weight``) and shared-boundary
        length as edge attribute ``shared_length``.
    """
    tol = config.ADJACENCY_TOLERANCE if tolerance is None else tolerance
    snap_tol = config.TOLERANCE if snap_tolerance is None else snap_tolerance
    G = nx.Graph()
    polys = []
    for i, r in enumerate(rects):
        rect = Rect.coerce(r)
        attrs = {"area": rect.area}
        weight = r.get("weight") if isinstance(r, Mapping) else getattr(r, "weight", None)
        if weight is not None:
            attrs["weight"] = weight
        G.add_node(i, **attrs)
        polys.append(rect.to_polygon() if rect.area > 0 else None)

    for i in range(len(polys)):
        if polys[i] is None:
            continue
        for j in range(i + 1, len(polys)):
            if polys[j] is None:
                continue
            shared = snap(polys[i], polys[j], snap_tol).intersection(polys[j])
            length = shared.length if not shared.is_empty else 0.0
            if length > tol:
                G.add_edge(i, j, shared_length=round(length, 4))
    return G


def is_connected(graph: nx.Graph) -> bool:
    """Return True if every tile is reachable from every other tile."""
    if graph.number_of_nodes() == 0:
        return True
    return nx.is_connected(graph)
