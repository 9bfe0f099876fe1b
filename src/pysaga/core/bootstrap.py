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
"""Bootstrap — load configuration, configure logging, bind saga properties."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from pysaga.core.config import Config
from pysaga.logging.port import LoggingPort
from pysaga.logging.structlog_adapter import StructlogAdapter
from pysaga.saga.properties import SagaProperties

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Runtime:
    """Configured pysaga environment returned by :func:`bootstrap`.

    Attributes:
        config: The merged configuration.
        properties: Saga properties bound from ``pysaga.saga``; pass them
            to :meth:`Saga.start`.
        logging_port: The logging adapter that was configured.
    """

    config: Config
    properties: SagaProperties
    logging_port: LoggingPort


def bootstrap(
    base_dir: str | Path | None = None,
    active_profiles: list[str] | None = None,
    logging_port: LoggingPort | None = None,
) -> Runtime:
    """Load configuration and configure logging.

    The default :class:`StructlogAdapter` only installs its handler on the
    ``pysaga`` logger; the root logger and its handlers are not modified.

    Args:
        base_dir: Directory searched for ``pysaga.yaml`` / ``pysaga.toml``
            (and a ``config/`` subdirectory).  ``None`` uses only the
            packaged defaults.
        active_profiles: Profile overlays to merge, in order.
        logging_port: Logging adapter to configure; defaults to
            :class:`StructlogAdapter`.

    Raises:
        ValueError: If the saga properties can't be bound.
    """
    if base_dir is None:
        config = Config.defaults()
    else:
        config = Config.from_sources(base_dir, active_profiles=active_profiles)

    port = logging_port or StructlogAdapter()
    port.configure(config)

    properties = config.bind(SagaProperties)
    logger.debug(
        "pysaga configured [sources=%s, duplicate_links=%s]",
        config.loaded_sources,
        properties.duplicate_links,
    )
    return Runtime(config=config, properties=properties, logging_port=port)
