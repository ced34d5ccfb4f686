"""
Search Tree Module - Append-only trace of an instrumented backtracking search.

Nodes live in a flat list and refer to each other by index. Node 0 is the
synthetic root. A node is added for every digit tried and is only ever
flagged as retracted, never removed, so dead ends stay visible.
"""

import threading
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

ROOT_ID = 0


@dataclass
class SearchNode:
    """
    One attempted placement in the search.

    Attributes:
        node_id: Index in the tree arena
        parent_id: Index of the parent node (None for the root)
        row: Row of the placement (None for the root)
        col: Column of the placement (None for the root)
        value: Digit tried (None for the root)
        path: Label of the recursion frame, e.g. "root-0-2"
        children: Child node ids in the order they were tried
        retracted: True once the placement was undone
    """
    node_id: int
    parent_id: Optional[int]
    row: Optional[int]
    col: Optional[int]
    value: Optional[int]
    path: str
    children: List[int] = field(default_factory=list)
    retracted: bool = False

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    @property
    def is_leaf(self) -> bool:
        return not self.children


class SearchTree:
    """
    Arena of SearchNodes.

    Mutations and snapshots share one lock so a snapshot taken from a
    timer thread never sees a half-appended child.
    """

    def __init__(self, root_path: str = "root"):
        self._nodes: List[SearchNode] = [
            SearchNode(ROOT_ID, None, None, None, None, root_path)
        ]
        self._lock = threading.RLock()

    @property
    def root(self) -> SearchNode:
        return self._nodes[ROOT_ID]

    @property
    def node_count(self) -> int:
        """Number of nodes including the root."""
        with self._lock:
            return len(self._nodes)

    def node(self, node_id: int) -> SearchNode:
        return self._nodes[node_id]

    def add_child(self, parent_id: int, row: int, col: int, value: int,
                  path: Optional[str] = None) -> SearchNode:
        """
        Append a new placement node under parent_id.

        Args:
            parent_id: Node the placement extends
            row: Row of the placement
            col: Column of the placement
            value: Digit placed
            path: Frame label; defaults to "<parent path>-<child index>"

        Returns:
            The new node
        """
        with self._lock:
            parent = self._nodes[parent_id]
            if path is None:
                path = f"{parent.path}-{len(parent.children)}"
            node = SearchNode(len(self._nodes), parent_id, row, col, value, path)
            self._nodes.append(node)
            parent.children.append(node.node_id)
            return node

    def mark_retracted(self, node_id: int) -> None:
        with self._lock:
            self._nodes[node_id].retracted = True

    def children_of(self, node_id: int) -> List[SearchNode]:
        with self._lock:
            return [self._nodes[i] for i in self._nodes[node_id].children]

    def iter_nodes(self) -> Iterator[SearchNode]:
        """All nodes in creation order, root first."""
        with self._lock:
            nodes = list(self._nodes)
        return iter(nodes)

    def leaves(self) -> List[SearchNode]:
        """Non-root nodes without children."""
        return [n for n in self.iter_nodes() if not n.is_root and n.is_leaf]

    def path_to(self, node_id: int) -> List[SearchNode]:
        """Nodes from the first placement down to node_id (root excluded)."""
        with self._lock:
            path = []
            node = self._nodes[node_id]
            while not node.is_root:
                path.append(node)
                node = self._nodes[node.parent_id]
            return list(reversed(path))

    def active_path(self) -> List[SearchNode]:
        """
        Current unretracted branch: from the root, repeatedly follow the
        last child while it is not retracted.
        """
        with self._lock:
            path = []
            node = self.root
            while node.children:
                child = self._nodes[node.children[-1]]
                if child.retracted:
                    break
                path.append(child)
                node = child
            return path

    def snapshot(self) -> Dict[str, Any]:
        """
        Nested-dict deep copy of the whole tree.

        Each node is {"row", "col", "value", "path", "retracted", "children"};
        the root has None for row/col/value.
        """
        with self._lock:
            return self._to_dict(ROOT_ID)

    def _to_dict(self, node_id: int) -> Dict[str, Any]:
        # Iterative to stay clear of the recursion limit on deep searches
        result: Dict[str, Any] = {}
        stack = [(node_id, result)]
        while stack:
            current_id, out = stack.pop()
            node = self._nodes[current_id]
            out.update(
                row=node.row,
                col=node.col,
                value=node.value,
                path=node.path,
                retracted=node.retracted,
                children=[],
            )
            for child_id in node.children:
                child_out: Dict[str, Any] = {}
                out["children"].append(child_out)
                stack.append((child_id, child_out))
        return result

    def stats(self) -> Dict[str, int]:
        """Counts of nodes, retracted nodes and maximum depth."""
        with self._lock:
            retracted = sum(1 for n in self._nodes if n.retracted)
            depth = 0
            depths = {ROOT_ID: 0}
            for node in self._nodes[1:]:
                depths[node.node_id] = depths[node.parent_id] + 1
                depth = max(depth, depths[node.node_id])
            return {
                "nodes": len(self._nodes) - 1,
                "retracted": retracted,
                "max_depth": depth,
            }
