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
"""Saga builder — staged fluent DSL that declares and validates a saga graph.

Each stage handle only exposes the calls that are legal next::

    Saga.start(name)        -> OutgoingStage   (start node created)
    OutgoingStage.link_to() -> SagaBuilder
    SagaBuilder.id()        -> AdapterStage
    AdapterStage.adapter()  -> OutgoingStage
    SagaBuilder.end()       -> Saga

Example::

    saga = (
        Saga.start("order-saga").link_to("validate")
        .id("validate").adapter("ValidateAdapter").link_to("reserve", "charge")
        .id("reserve").adapter("InventoryAdapter").link_to_end()
        .id("charge").adapter("PaymentAdapter").link_to_end()
        .end()
    )

A builder is single-use: once :meth:`SagaBuilder.end` has been called, every
further call on it or on any of its stage handles raises
:class:`BuilderClosedError`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pysaga.saga.errors import (
    BuilderClosedError,
    DanglingLinkError,
    DuplicateIdError,
    InvalidAdapterError,
    InvalidIdError,
    InvalidLinkError,
    InvalidNameError,
)
from pysaga.saga.graph import ADAPTER_END, ID_END, Saga
from pysaga.saga.node import SagaNode
from pysaga.saga.properties import DuplicateLinkPolicy, SagaProperties
from pysaga.saga.validation import validate_acyclic, validate_reachability

logger = logging.getLogger(__name__)

_ILLEGAL_NAME_CHARS = ("{", "\n")


def _is_visible(value: str) -> bool:
    """True if *value* holds only printable, non-whitespace characters."""
    return value.isprintable() and not any(ch.isspace() for ch in value)


@dataclass
class NodeState:
    """Mutable accumulator for one node while the saga is being declared.

    ``incoming`` is filled in by :meth:`SagaBuilder.end` during link
    resolution and is never set by the caller.
    """

    id: str
    adapter: str | None = None
    outgoing: list[str] = field(default_factory=list)
    incoming: list[str] = field(default_factory=list)


class AdapterStage:
    """Stage expecting the adapter of the node just registered."""

    __slots__ = ("_builder", "_state")

    def __init__(self, builder: SagaBuilder, state: NodeState) -> None:
        self._builder = builder
        self._state = state

    def adapter(self, adapter: str) -> OutgoingStage:
        """Declare the adapter that executes and compensates this node.

        Raises:
            InvalidAdapterError: If *adapter* contains whitespace or
                control characters.
        """
        self._builder._ensure_open()  # noqa: SLF001
        if not isinstance(adapter, str) or not _is_visible(adapter):
            msg = (
                "adapter must only contain visible characters. "
                f"Whitespace- or control-characters are not allowed. adapter: {adapter!r}"
            )
            raise InvalidAdapterError(msg, {"node_id": self._state.id, "adapter": adapter})
        self._state.adapter = adapter
        return OutgoingStage(self._builder, self._state)


class OutgoingStage:
    """Stage expecting the outgoing links of the current node."""

    __slots__ = ("_builder", "_state")

    def __init__(self, builder: SagaBuilder, state: NodeState) -> None:
        self._builder = builder
        self._state = state

    def link_to(self, *ids: str) -> SagaBuilder:
        """Link this node to every node in *ids*.

        The linked nodes run only after this node's action has run; several
        ids fan out and may be executed concurrently.  Targets are checked
        for existence when the saga ends.

        Raises:
            InvalidLinkError: If no id is given, or any id is ``None``, not
                a string, or empty after trimming.
        """
        self._builder._ensure_open()  # noqa: SLF001
        context = {"node_id": self._state.id, "links": list(ids)}
        if not ids:
            raise InvalidLinkError("link_to requires at least one id", context)
        for link in ids:
            if link is None:
                raise InvalidLinkError("link_to argument cannot be None", context)
            if not isinstance(link, str):
                raise InvalidLinkError(f"link_to argument must be a string, got {type(link).__name__}", context)
            if not link.strip():
                raise InvalidLinkError("link_to argument cannot be empty", context)
        self._state.outgoing.extend(ids)
        return self._builder

    def link_to_end(self) -> SagaBuilder:
        """Link this node to the end node."""
        return self.link_to(ID_END)


class SagaBuilder:
    """Single-use assembler of a :class:`Saga`.

    Usually obtained through :meth:`Saga.start`, which also registers the
    start node.  Nodes are kept in registration order; that order is
    preserved by :meth:`Saga.nodes`.
    """

    def __init__(self, saga_name: str, properties: SagaProperties | None = None) -> None:
        if not isinstance(saga_name, str) or any(ch in saga_name for ch in _ILLEGAL_NAME_CHARS):
            msg = "saga_name must not contain the '{' (left-curly-bracket) or '\\n' (newline) character"
            raise InvalidNameError(msg, {"saga": saga_name})
        self._name = saga_name
        self._policy = (properties or SagaProperties()).policy
        self._state_by_id: dict[str, NodeState] = {}
        self._closed = False
        logger.debug("Saga '%s' declaration started", saga_name)

    @property
    def name(self) -> str:
        return self._name

    # ── Declaration ───────────────────────────────────────────

    def id(self, node_id: str) -> AdapterStage:
        """Register a new node with the given id.

        Raises:
            InvalidIdError: If the id is empty or contains whitespace or
                control characters.
            DuplicateIdError: If the id is already used in this saga,
                including the reserved end id.
        """
        self._ensure_open()
        return AdapterStage(self, self._register(node_id))

    def end(self) -> Saga:
        """Finish the saga: add the end node, then assemble and validate the graph.

        Raises:
            DuplicateIdError: If the end id was declared by the caller.
            InvalidAdapterError: If a node was registered without an adapter.
            DanglingLinkError: If a link targets an id never registered.
            CycleDetectedError: If a node links to itself or an ancestor.
            UnreachableNodesError: If a node can't be reached from start.
        """
        self._ensure_open()
        self._closed = True

        self._register(ID_END).adapter = ADAPTER_END
        self._check_adapters()
        self._resolve_incoming_links()
        saga = Saga(self._name, self._assemble_nodes())

        validate_acyclic(saga)
        validate_reachability(saga)

        logger.debug(
            "Saga '%s' validated [nodes=%d, links=%d]",
            self._name,
            len(saga),
            len(saga.edges()),
        )
        return saga

    # ── Internal helpers ──────────────────────────────────────

    def _ensure_open(self) -> None:
        if self._closed:
            msg = f"Saga '{self._name}' has already ended; builders are single-use"
            raise BuilderClosedError(msg, {"saga": self._name})

    def _register(self, node_id: str) -> NodeState:
        if not isinstance(node_id, str) or not node_id or not _is_visible(node_id):
            msg = (
                "id must only contain visible characters. "
                f"Whitespace- or control-characters are not allowed. id: {node_id!r}"
            )
            raise InvalidIdError(msg, {"saga": self._name, "node_id": node_id})
        if node_id in self._state_by_id:
            raise DuplicateIdError(f"Duplicate id: {node_id}", {"saga": self._name, "node_id": node_id})
        state = NodeState(node_id)
        self._state_by_id[node_id] = state
        return state

    def _check_adapters(self) -> None:
        for state in self._state_by_id.values():
            if state.adapter is None:
                msg = f"node({state.id}) was registered without an adapter"
                raise InvalidAdapterError(msg, {"saga": self._name, "node_id": state.id})

    def _resolve_incoming_links(self) -> None:
        """Apply the duplicate-link policy and fill every target's incoming list."""
        for state in self._state_by_id.values():
            if self._policy is DuplicateLinkPolicy.COLLAPSE:
                unique = list(dict.fromkeys(state.outgoing))
                if len(unique) != len(state.outgoing):
                    logger.warning(
                        "Saga '%s': node(%s) declares duplicate links, collapsed %s -> %s",
                        self._name,
                        state.id,
                        state.outgoing,
                        unique,
                    )
                    state.outgoing = unique

            for target_id in state.outgoing:
                target = self._state_by_id.get(target_id)
                if target is None:
                    msg = f"Missing node({target_id}), linked-to by node({state.id})."
                    raise DanglingLinkError(msg, {"saga": self._name, "node_id": state.id, "link": target_id})
                target.incoming.append(state.id)

    def _assemble_nodes(self) -> dict[str, SagaNode]:
        # Every link is resolved, so each node is created complete in one pass.
        return {
            state.id: SagaNode(
                id=state.id,
                adapter=state.adapter or "",
                outgoing_ids=tuple(state.outgoing),
                incoming_ids=tuple(state.incoming),
            )
            for state in self._state_by_id.values()
        }
