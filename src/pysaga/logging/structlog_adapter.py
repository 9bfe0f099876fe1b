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
"""StructlogAdapter — default LoggingPort implementation using structlog."""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from pysaga.core.config import Config

LIBRARY_LOGGER = "pysaga"

_HANDLER_NAME = "pysaga-structlog"


class StructlogAdapter:
    """Default logging adapter backed by structlog.

    Library modules log through ``logging.getLogger(__name__)``; the
    adapter routes those records through structlog's ``ProcessorFormatter``
    so they render the same way as structlog-native loggers.  Only the
    ``pysaga`` logger tree is touched: ``pysaga.logging.level.root`` sets
    its level and the other ``pysaga.logging.level`` keys set per-module
    levels below it.
    """

    def __init__(self) -> None:
        self._root_level: str = "INFO"
        self._format: str = "console"
        self._module_levels: dict[str, str] = {}

    def configure(self, config: Config) -> None:
        """Configure structlog from the ``pysaga.logging`` section of config."""
        level_section = dict(config.get_section("pysaga.logging.level"))
        self._root_level = str(level_section.pop("root", "INFO")).upper()
        self._module_levels = {k: str(v).upper() for k, v in level_section.items()}
        self._format = str(config.get("pysaga.logging.format", "console")).lower()

        self._setup_structlog()
        self._apply_levels()

    def get_logger(self, name: str) -> Any:
        """Get a structlog BoundLogger by name."""
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        """Set the log level for a specific stdlib logger."""
        log_level = getattr(logging, level.upper(), logging.INFO)
        logging.getLogger(name).setLevel(log_level)

    def _renderer(self) -> structlog.types.Processor:
        if self._format == "json":
            return structlog.processors.JSONRenderer()
        return structlog.dev.ConsoleRenderer()

    def _setup_structlog(self) -> None:
        """Configure structlog processors and the ``pysaga`` stdlib logger.

        The handler goes on the ``pysaga`` logger, which stops propagating,
        so handlers the host application put on the root logger are left
        alone and pysaga records are not printed twice.
        """
        log_level = getattr(logging, self._root_level.upper(), logging.INFO)

        shared_processors: list[structlog.types.Processor] = [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
        ]

        structlog.configure(
            processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                foreign_pre_chain=shared_processors,
                processors=[
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    self._renderer(),
                ],
            )
        )

        library_logger = logging.getLogger(LIBRARY_LOGGER)
        for previous in [h for h in library_logger.handlers if h.get_name() == _HANDLER_NAME]:
            library_logger.removeHandler(previous)
            previous.close()
        library_logger.addHandler(handler)
        library_logger.setLevel(log_level)
        library_logger.propagate = False

    def _apply_levels(self) -> None:
        """Apply per-module log levels."""
        for module, level in self._module_levels.items():
            self.set_level(module, level)
