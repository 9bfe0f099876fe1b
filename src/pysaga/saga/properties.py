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
"""Saga builder configuration properties.

YAML structure::

    pysaga:
      saga:
        duplicate_links: collapse   # or: preserve
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from pysaga.core.config import config_properties


class DuplicateLinkPolicy(StrEnum):
    """How repeated targets in one node's outgoing links are recorded."""

    COLLAPSE = "collapse"
    PRESERVE = "preserve"


@config_properties(prefix="pysaga.saga")
@dataclass
class SagaProperties:
    """Configuration for saga construction."""

    duplicate_links: str = DuplicateLinkPolicy.COLLAPSE.value

    def __post_init__(self) -> None:
        self.duplicate_links = self.policy.value

    @property
    def policy(self) -> DuplicateLinkPolicy:
        """The parsed duplicate-link policy.

        Raises:
            ValueError: If ``duplicate_links`` is not a known policy.
        """
        try:
            return DuplicateLinkPolicy(str(self.duplicate_links).lower())
        except ValueError:
            allowed = ", ".join(p.value for p in DuplicateLinkPolicy)
            msg = f"Unknown duplicate_links policy '{self.duplicate_links}' (expected one of: {allowed})"
            raise ValueError(msg) from None
