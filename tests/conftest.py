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
"""Shared fixtures."""

import logging

import pytest


@pytest.fixture(autouse=True)
def _restore_pysaga_loggers():
    """Undo logging changes made by StructlogAdapter so caplog keeps working."""
    library = logging.getLogger("pysaga")
    handlers = list(library.handlers)
    propagate = library.propagate
    names = ["pysaga", "pysaga.saga", "pysaga.saga.builder"]
    levels = {name: logging.getLogger(name).level for name in names}
    yield
    library.handlers = handlers
    library.propagate = propagate
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)
