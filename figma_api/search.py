from __future__ import annotations

from typing import Callable, List, Optional, Sequence

from common.types import FRAME_TYPE, DocumentNode


def find_first(root: DocumentNode, predicate: Callable[[DocumentNode], bool]) -> Optional[DocumentNode]:
    """
    Depth-first, pre-order, left-to-right search. Returns the first node
    satisfying `predicate`, or None.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        if predicate(node):
            return node
        if node.children:
            # reversed so the leftmost child is visited first
            stack.extend(reversed(node.children))
    return None


def find_node_by_id(root: DocumentNode, node_id: str) -> Optional[DocumentNode]:
    return find_first(root, lambda n: n.id == node_id)


def find_frame_id_by_name(root: DocumentNode, name: str, frame_type: str = FRAME_TYPE) -> Optional[str]:
    """
    Id of the first node named `name` whose type is `frame_type`.
    Same-named nodes of another type are skipped; their subtrees are still searched.
    """
    node = find_first(root, lambda n: n.name == name and n.type == frame_type)
    return node.id if node else None


# Batch forms: one independent search from the root per input, results aligned
# with the input and None for misses.

def find_nodes_by_id(root: DocumentNode, node_ids: Sequence[str]) -> List[Optional[DocumentNode]]:
    return [find_node_by_id(root, i) for i in node_ids]


def find_frame_ids_for_names(
    root: DocumentNode, names: Sequence[str], frame_type: str = FRAME_TYPE
) -> List[Optional[str]]:
    return [find_frame_id_by_name(root, n, frame_type) for n in names]
