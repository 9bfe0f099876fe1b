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
"""pysaga Saga — declaration and validation of saga topologies."""

from __future__ import annotations

from pysaga.saga.builder import AdapterStage, NodeState, OutgoingStage, SagaBuilder
from pysaga.saga.errors import (
    BuilderClosedError,
    CycleDetectedError,
    DanglingLinkError,
    DuplicateIdError,
    ErrorKind,
    InvalidAdapterError,
    InvalidIdError,
    InvalidLinkError,
    InvalidNameError,
    SagaException,
    UnreachableNodesError,
)
from pysaga.saga.graph import ADAPTER_END, ADAPTER_START, ID_END, ID_START, Saga
from pysaga.saga.node import SagaNode
from pysaga.saga.properties import DuplicateLinkPolicy, SagaProperties
from pysaga.saga.topology import SagaTopology

__all__ = [
    "ADAPTER_END",
    "ADAPTER_START",
    "AdapterStage",
    "BuilderClosedError",
    "CycleDetectedError",
    "DanglingLinkError",
    "DuplicateIdError",
    "DuplicateLinkPolicy",
    "ErrorKind",
    "ID_END",
    "ID_START",
    "InvalidAdapterError",
    "InvalidIdError",
    "InvalidLinkError",
    "InvalidNameError",
    "NodeState",
    "OutgoingStage",
    "Saga",
    "SagaBuilder",
    "SagaException",
    "SagaNode",
    "SagaProperties",
    "SagaTopology",
    "UnreachableNodesError",
]
