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
"""pysaga — declare saga topologies and prove them well-formed."""

from __future__ import annotations

from pysaga.core.bootstrap import Runtime, bootstrap
from pysaga.core.config import Config
from pysaga.saga import (
    ADAPTER_END,
    ADAPTER_START,
    ID_END,
    ID_START,
    ErrorKind,
    Saga,
    SagaException,
    SagaNode,
    SagaProperties,
)

__version__ = "0.1.0"

__all__ = [
    "ADAPTER_END",
    "ADAPTER_START",
    "Config",
    "ErrorKind",
    "ID_END",
    "ID_START",
    "Runtime",
    "Saga",
    "SagaException",
    "SagaNode",
    "SagaProperties",
    "__version__",
    "bootstrap",
]
