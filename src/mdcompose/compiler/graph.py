"""Reference graph: insertable documents as nodes, insert directives as edges."""

from __future__ import annotations

import networkx as nx

from mdcompose.paths import key_of, resolve_key
from mdcompose.parser.directives import find_valid_directives
from mdcompose.parser.sources import SourceIndex


class ReferenceGraph:
    """Directed graph of which source inserts which, keyed by lookup key.

    Only references that resolve to a known source become edges; dangling
    references are the validator's concern, not the graph's.
    """

    def __init__(self, sources: SourceIndex) -> None:
        self._graph: nx.DiGraph[str] = nx.DiGraph()
        self._build(sources)

    def _build(self, sources: SourceIndex) -> None:
        for key in sources:
            self._graph.add_node(key_of(key), name=key)

        for key in sources:
            owner = sources.path_of(key) or key
            for directive in find_valid_directives(sources[key]):
                target = resolve_key(directive.file_path, owner)
                if target in sources:
                    self._graph.add_edge(key_of(key), key_of(target))

    def find_cycles(self, root: str, first_hop: str) -> list[list[str]]:
        """Cycles reachable from *root* through its reference to *first_hop*.

        Depth-first from *first_hop* with the current path threaded through
        each call, so sibling branches never see each other's nodes.  Each
        cycle is returned as names from the revisited node back to itself,
        at most once per revisited node.
        """
        root_node = key_of(root)
        names = {root_node: root}
        cycles: list[list[str]] = []
        reported: set[str] = set()
        finished: set[str] = set()

        def _name(node: str) -> str:
            return names.get(node) or self._graph.nodes[node]["name"]

        def _report(path: tuple[str, ...], node: str) -> None:
            if node in reported:
                return
            reported.add(node)
            loop = path[path.index(node) :] + (node,)
            cycles.append([_name(n) for n in loop])

        def _dfs(node: str, path: tuple[str, ...]) -> None:
            if node not in self._graph:
                return
            for neighbor in self._graph.successors(node):
                if neighbor in path:
                    _report(path, neighbor)
                elif neighbor not in finished:
                    _dfs(neighbor, path + (neighbor,))
            finished.add(node)

        hop = key_of(first_hop)
        if hop == root_node:
            _report((root_node,), root_node)
        else:
            _dfs(hop, (root_node, hop))
        return cycles
