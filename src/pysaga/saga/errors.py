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
"""Saga definition errors — one exception family with distinguishable kinds.

Every violation found while declaring or validating a saga raises a
:class:`SagaException` subclass at the point of violation.  Callers can
catch the family as a whole, a specific subclass, or branch on
:attr:`SagaException.kind`.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import StrEnum
from typing import Any

from pysaga.kernel.exceptions import ValidationException


class ErrorKind(StrEnum):
    """Machine-readable category of a saga definition error."""

    INVALID_NAME = "INVALID_NAME"
    INVALID_ID = "INVALID_ID"
    INVALID_ADAPTER = "INVALID_ADAPTER"
    DUPLICATE_ID = "DUPLICATE_ID"
    INVALID_LINK = "INVALID_LINK"
    DANGLING_LINK = "DANGLING_LINK"
    CYCLE_DETECTED = "CYCLE_DETECTED"
    UNREACHABLE_NODES = "UNREACHABLE_NODES"
    BUILDER_CLOSED = "BUILDER_CLOSED"


class SagaException(ValidationException):
    """Base class for all saga definition errors.

    Args:
        message: Human-readable error description.
        kind: The :class:`ErrorKind` of the violation; also used as ``code``.
        context: Offending values for diagnostics.
    """

    kind: ErrorKind

    def __init__(
        self,
        message: str,
        kind: ErrorKind,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code=kind.value, context=context)
        self.kind = kind


class InvalidNameError(SagaException):
    """Saga name contains a newline or a ``{``."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message, ErrorKind.INVALID_NAME, context)


class InvalidIdError(SagaException):
    """Node id is empty or contains whitespace or control characters."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message, ErrorKind.INVALID_ID, context)


class InvalidAdapterError(SagaException):
    """Adapter contains whitespace or control characters."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message, ErrorKind.INVALID_ADAPTER, context)


class DuplicateIdError(SagaException):
    """Node id registered more than once, including the reserved end id."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message, ErrorKind.DUPLICATE_ID, context)


class InvalidLinkError(SagaException):
    """``link_to`` received no ids, ``None``, or an empty or blank id."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message, ErrorKind.INVALID_LINK, context)


class DanglingLinkError(SagaException):
    """An outgoing link references an id that was never registered."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message, ErrorKind.DANGLING_LINK, context)


class CycleDetectedError(SagaException):
    """A self-loop or a link back to an ancestor node."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message, ErrorKind.CYCLE_DETECTED, context)


class UnreachableNodesError(SagaException):
    """One or more nodes cannot be reached from the start node.

    Attributes:
        unreachable_ids: Ids of the unreachable nodes, in registration order.
    """

    def __init__(self, unreachable_ids: Sequence[str], saga_name: str | None = None) -> None:
        self.unreachable_ids: tuple[str, ...] = tuple(unreachable_ids)
        super().__init__(
            f"Unreachable nodes: {', '.join(self.unreachable_ids)}",
            ErrorKind.UNREACHABLE_NODES,
            {"saga": saga_name, "unreachable_ids": list(self.unreachable_ids)},
        )


class BuilderClosedError(SagaException):
    """The builder was used after :meth:`SagaBuilder.end` was called."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message, ErrorKind.BUILDER_CLOSED, context)
