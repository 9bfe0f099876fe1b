# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Depth-first pre-order traversal shared by the saga graph and its validators.

The walk threads two sets through the search:

- *ancestors* — ids on the active path from the root to the current node,
  excluding the node itself.  Each node is yielded with an immutable
  snapshot of this set so a consumer can detect links back into its own
  ancestor chain without being able to disturb the walk.
- *visited* — every id seen so far.  A node already visited is skipped and
  its children are not descended again, so each reachable node is yielded
  exactly once.

Both sets are created fresh on every call.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

from pysaga.saga.node import SagaNode

Neighbours = Callable[[SagaNode], tuple[SagaNode, ...]]
Visitor = Callable[[frozenset[str], SagaNode], None]


def depth_first_pre_order(root: SagaNode, neighbours: Neighbours) -> Iterator[tuple[frozenset[str], SagaNode]]:
    """Yield ``(ancestors, node)`` pairs in depth-first pre-order from *root*.

    Args:
        root: Node to start from.
        neighbours: Returns the child nodes to descend into for a node
            (outgoing nodes for a forward walk, incoming for a backward one).
    """
    visited: set[str] = {root.id}
    path: list[str] = []
    on_path: set[str] = set()

    yield frozenset(on_path), root
    path.append(root.id)
    on_path.add(root.id)
    stack: list[Iterator[SagaNode]] = [iter(neighbours(root))]

    while stack:
        child = next(stack[-1], None)
        if child is None:
            stack.pop()
            on_path.discard(path.pop())
            continue
        if child.id in visited:
            continue
        visited.add(child.id)
        yield frozenset(on_path), child
        path.append(child.id)
        on_path.add(child.id)
        stack.append(iter(neighbours(child)))


def visit_depth_first(root: SagaNode, neighbours: Neighbours, visitor: Visitor) -> None:
    """Call *visitor* for every pair produced by :func:`depth_first_pre_order`."""
    for ancestors, node in depth_first_pre_order(root, neighbours):
        visitor(ancestors, node)
