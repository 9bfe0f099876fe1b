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
"""Saga graph — finalized, immutable view over a validated saga topology.

Example::

    saga = (
        Saga.start("order-saga").link_to("reserve", "charge")
        .id("reserve").adapter("InventoryAdapter").link_to("ship")
        .id("charge").adapter("PaymentAdapter").link_to("ship")
        .id("ship").adapter("ShippingAdapter").link_to_end()
        .end()
    )
    saga.execution_layers()  # [["S"], ["charge", "reserve"], ["ship"], ["E"]]
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from pysaga.saga.errors import DanglingLinkError, InvalidIdError
from pysaga.saga.node import SagaNode
from pysaga.saga.topology import SagaTopology
from pysaga.saga.traversal import Visitor, depth_first_pre_order, visit_depth_first

if TYPE_CHECKING:
    from pysaga.saga.builder import OutgoingStage
    from pysaga.saga.properties import SagaProperties

ID_START = "S"
ID_END = "E"

ADAPTER_START = "SagaStart"
ADAPTER_END = "SagaEnd"


class Saga:
    """A validated saga: a DAG of :class:`SagaNode` with one start and one end.

    Instances are produced by :meth:`SagaBuilder.end` and never change
    afterwards, so all read operations are safe for concurrent use.  The
    saga owns every node; nodes refer to their neighbours by id and
    :meth:`outgoing` / :meth:`incoming` resolve them here.
    """

    __slots__ = ("_name", "_node_by_id")

    def __init__(self, name: str, node_by_id: Mapping[str, SagaNode]) -> None:
        """Wrap already-assembled nodes; use :meth:`start` to declare a saga.

        Only the builder is expected to call this.  It checks the structure
        every read operation relies on (start and end present, every
        neighbour id resolvable) but not acyclicity or reachability, which
        :mod:`pysaga.saga.validation` checks afterwards.

        Raises:
            InvalidIdError: If the start or end node is missing.
            DanglingLinkError: If a node refers to an id not in *node_by_id*.
        """
        for reserved in (ID_START, ID_END):
            if reserved not in node_by_id:
                raise InvalidIdError(
                    f"Saga '{name}' has no node({reserved}).",
                    context={"saga": name, "node_id": reserved},
                )
        for node in node_by_id.values():
            for neighbour_id in (*node.outgoing_ids, *node.incoming_ids):
                if neighbour_id not in node_by_id:
                    raise DanglingLinkError(
                        f"Missing node({neighbour_id}), referenced by node({node.id}).",
                        context={"saga": name, "node_id": node.id, "link": neighbour_id},
                    )
        self._name = name
        self._node_by_id: Mapping[str, SagaNode] = MappingProxyType(dict(node_by_id))

    @staticmethod
    def start(saga_name: str, properties: SagaProperties | None = None) -> OutgoingStage:
        """Start declaring a new saga named *saga_name*.

        Creates the start node and returns its link stage, so the caller
        declares the start node's targets first.

        Raises:
            InvalidNameError: If the name contains ``{`` or a newline.
        """
        from pysaga.saga.builder import SagaBuilder

        return SagaBuilder(saga_name, properties).id(ID_START).adapter(ADAPTER_START)

    # ── Lookup ────────────────────────────────────────────────

    @property
    def name(self) -> str:
        return self._name

    @property
    def start_node(self) -> SagaNode:
        return self._node_by_id[ID_START]

    @property
    def end_node(self) -> SagaNode:
        return self._node_by_id[ID_END]

    def nodes(self) -> list[SagaNode]:
        """Snapshot of all nodes in registration order."""
        return list(self._node_by_id.values())

    def node(self, node_id: str) -> SagaNode:
        """Return the node with *node_id*; raises ``KeyError`` if unknown."""
        return self._node_by_id[node_id]

    def outgoing(self, node: SagaNode) -> tuple[SagaNode, ...]:
        """Nodes that *node* links to."""
        return tuple(self._node_by_id[node_id] for node_id in node.outgoing_ids)

    def incoming(self, node: SagaNode) -> tuple[SagaNode, ...]:
        """Nodes that link to *node*."""
        return tuple(self._node_by_id[node_id] for node_id in node.incoming_ids)

    def edges(self) -> list[tuple[str, str]]:
        """All ``(source_id, target_id)`` links in registration order."""
        return [(node.id, target) for node in self._node_by_id.values() for target in node.outgoing_ids]

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._node_by_id

    def __len__(self) -> int:
        return len(self._node_by_id)

    def __iter__(self) -> Iterator[SagaNode]:
        return iter(self.nodes())

    def __repr__(self) -> str:
        return f"Saga(name={self._name!r}, nodes={list(self._node_by_id)!r})"

    # ── Traversal ─────────────────────────────────────────────

    def walk_forward(self) -> Iterator[tuple[frozenset[str], SagaNode]]:
        """Depth-first pre-order over outgoing links, starting at the start node."""
        return depth_first_pre_order(self.start_node, self.outgoing)

    def walk_backward(self) -> Iterator[tuple[frozenset[str], SagaNode]]:
        """Depth-first pre-order over incoming links, starting at the end node."""
        return depth_first_pre_order(self.end_node, self.incoming)

    def traverse_forward(self, visitor: Visitor) -> None:
        """Call ``visitor(ancestors, node)`` for each node of :meth:`walk_forward`."""
        visit_depth_first(self.start_node, self.outgoing, visitor)

    def traverse_backward(self, visitor: Visitor) -> None:
        """Call ``visitor(ancestors, node)`` for each node of :meth:`walk_backward`."""
        visit_depth_first(self.end_node, self.incoming, visitor)

    # ── Topology ──────────────────────────────────────────────

    def execution_layers(self) -> list[list[str]]:
        """Group node ids into layers whose predecessors all sit in earlier layers.

        Nodes in the same layer have no links between them, so an engine
        may run them concurrently.
        """
        deps = {node_id: list(node.incoming_ids) for node_id, node in self._node_by_id.items()}
        return SagaTopology.compute_layers(deps)
