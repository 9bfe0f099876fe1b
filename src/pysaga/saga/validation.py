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
"""Structural validators run on a freshly assembled saga graph."""

from __future__ import annotations

from pysaga.saga.errors import CycleDetectedError, UnreachableNodesError
from pysaga.saga.graph import Saga


def validate_acyclic(saga: Saga) -> None:
    """Check that no node links to itself or to one of its ancestors.

    Raises:
        CycleDetectedError: On the first self-loop or back link found by a
            forward depth-first walk.
    """
    for ancestors, node in saga.walk_forward():
        for target in node.outgoing_ids:
            if target == node.id:
                raise CycleDetectedError(
                    f"Saga must be a directed acyclic graph (DAG). Nodes can't link to themselves: node({node.id}).",
                    {"saga": saga.name, "node_id": node.id, "link": target},
                )
            if target in ancestors:
                raise CycleDetectedError(
                    "Saga must be a directed acyclic graph (DAG). "
                    f"Detected cycle where node({node.id}) links to ancestor node({target}).",
                    {"saga": saga.name, "node_id": node.id, "link": target},
                )


def validate_reachability(saga: Saga) -> None:
    """Check that every node can be reached from the start node.

    Raises:
        UnreachableNodesError: Listing the unreached ids in registration order.
    """
    unreached = dict.fromkeys(node.id for node in saga.nodes())
    for _ancestors, node in saga.walk_forward():
        unreached.pop(node.id, None)
    if unreached:
        raise UnreachableNodesError(list(unreached), saga.name)
