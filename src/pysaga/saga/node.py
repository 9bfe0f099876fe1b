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
"""Saga node — immutable vertex of a finalized saga graph."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SagaNode:
    """One step of a saga, bound to an adapter identifier.

    Neighbours are recorded by id; the owning :class:`~pysaga.saga.graph.Saga`
    resolves them to nodes.  Two nodes are equal when their ids are equal.

    Attributes:
        id: Unique node id within the saga.
        adapter: Opaque identifier of the external handler for this step.
        outgoing_ids: Ids of the nodes this node links to, in declaration order.
        incoming_ids: Ids of the nodes linking to this node, in resolution order.
    """

    id: str
    adapter: str = field(compare=False)
    outgoing_ids: tuple[str, ...] = field(default=(), compare=False)
    incoming_ids: tuple[str, ...] = field(default=(), compare=False)
