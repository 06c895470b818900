"""Dependency graph over discovered artifacts.

Nodes are artifact paths. Each node carries the artifact's identity (its
package name in underscore form), and dependency pairs are matched on that
identity rather than on the path, so an artifact found in any directory,
optimized or not, picks up the same edges.
"""

from pathlib import Path
from typing import Dict, Iterable, List, Optional

import networkx as nx

from config import settings
from errors import DependencyCycleError
from models import DependencyTable, normalize_identity


def artifact_identity(path: Path, optimized_marker: Optional[str] = None) -> str:
    """Derive the stable identity of an artifact from its file name.

    `soroban_token_contract.wasm` and `soroban_token_contract.optimized.wasm`
    both map to `soroban_token_contract`.
    """
    marker = f".{optimized_marker or settings.optimized_marker}"
    stem = Path(path).stem
    if stem.endswith(marker):
        stem = stem[: -len(marker)]
    return normalize_identity(stem)


def build_dependency_graph(
    paths: Iterable[Path],
    table: DependencyTable,
    optimized_marker: Optional[str] = None,
) -> nx.DiGraph:
    """Build a directed graph with an edge before -> after for every applicable pair.

    Args:
        paths: Discovered artifact paths
        table: Known dependency pairs
        optimized_marker: Marker stripped when deriving identities

    Returns:
        DiGraph whose nodes are the artifact paths
    """
    graph = nx.DiGraph()
    by_identity: Dict[str, List[Path]] = {}

    for path in paths:
        path = Path(path)
        identity = artifact_identity(path, optimized_marker)
        graph.add_node(path, identity=identity)
        by_identity.setdefault(identity, []).append(path)

    for pair in table.pairs:
        before = by_identity.get(pair.before)
        after = by_identity.get(pair.after)
        if not before or not after:
            continue
        for src in before:
            for dst in after:
                graph.add_edge(src, dst, reason=pair.reason)

    return graph


def sort_artifacts(
    paths: Iterable[Path],
    table: DependencyTable,
    optimized_marker: Optional[str] = None,
) -> List[Path]:
    """Order artifacts so that every dependency precedes its dependents.

    Unconstrained artifacts are ordered by path to keep runs repeatable.

    Raises:
        DependencyCycleError: If the applicable pairs form a cycle
    """
    graph = build_dependency_graph(paths, table, optimized_marker)
    try:
        return list(nx.lexicographical_topological_sort(graph, key=str))
    except nx.NetworkXUnfeasible as e:
        raise DependencyCycleError(_describe_cycle(graph)) from e


def _describe_cycle(graph: nx.DiGraph) -> List[str]:
    try:
        edges = nx.find_cycle(graph)
    except nx.NetworkXNoCycle:
        return []
    chain = [graph.nodes[src]["identity"] for src, _ in edges]
    chain.append(graph.nodes[edges[0][0]]["identity"])
    return chain
