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
"""Saga topology — Kahn layering of a saga DAG into execution layers."""

from __future__ import annotations

from collections import defaultdict

from pysaga.saga.errors import CycleDetectedError


class SagaTopology:
    """Computes execution layers from a dependency map using Kahn's algorithm.

    Each layer holds node ids whose predecessors all sit in earlier layers.
    Within a layer, ids are sorted lexicographically for deterministic output.
    """

    @staticmethod
    def compute_layers(deps: dict[str, list[str]]) -> list[list[str]]:
        """Compute execution layers from a dependency map.

        Parameters
        ----------
        deps:
            Mapping of ``node_id -> [predecessor_ids]``.  Every node must
            appear as a key, with an empty list if it has no predecessors.
            A predecessor listed twice counts twice on both sides.

        Returns
        -------
        list[list[str]]
            Ordered list of layers.

        Raises
        ------
        CycleDetectedError
            If the dependency map contains a cycle.
        """
        if not deps:
            return []

        in_degree: dict[str, int] = {node: 0 for node in deps}
        successors: dict[str, list[str]] = defaultdict(list)

        for node, predecessors in deps.items():
            for pred in predecessors:
                successors[pred].append(node)
                in_degree[node] += 1

        layer = sorted(node for node, degree in in_degree.items() if degree == 0)
        layers: list[list[str]] = []
        processed = 0

        while layer:
            layers.append(layer)
            processed += len(layer)

            ready: list[str] = []
            for node in layer:
                for successor in successors[node]:
                    in_degree[successor] -= 1
                    if in_degree[successor] == 0:
                        ready.append(successor)
            layer = sorted(ready)

        if processed != len(deps):
            blocked = sorted(node for node, degree in in_degree.items() if degree > 0)
            raise CycleDetectedError(
                f"Dependency graph contains a cycle: processed {processed} of {len(deps)} nodes",
                {"blocked_ids": blocked},
            )

        return layers
