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
"""pysaga settings: packaged defaults, project files, profiles and env vars.

A project tunes pysaga with a ``pysaga.yaml`` (or ``pysaga.toml``) file::

    pysaga:
      saga:
        duplicate_links: preserve
      logging:
        format: json

and any single key can be overridden from the environment, e.g.
``PYSAGA_SAGA_DUPLICATE_LINKS=collapse``.
"""

from __future__ import annotations

import dataclasses
import importlib.resources
import os
import tomllib
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any, TypeVar, cast, get_type_hints

import yaml  # type: ignore[import-untyped]

T = TypeVar("T")

_PREFIX_ATTR = "__pysaga_config_prefix__"

_DEFAULTS_SOURCE = "pysaga-defaults.yaml (library defaults)"

_MISSING = object()


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Mark a dataclass as bindable to the settings under *prefix*."""

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _PREFIX_ATTR, prefix)
        return cls

    return decorator


def _read_file(path: Path) -> dict[str, Any]:
    if path.suffix == ".toml":
        with open(path, "rb") as f:
            return tomllib.load(f)
    with open(path) as f:
        return yaml.safe_load(f) or {}


def _read_packaged_defaults() -> dict[str, Any]:
    resource = importlib.resources.files("pysaga.resources").joinpath("pysaga-defaults.yaml")
    return yaml.safe_load(resource.read_text(encoding="utf-8")) or {}


def _overlay(base: dict[str, Any], top: dict[str, Any]) -> dict[str, Any]:
    """Merge *top* onto *base*; nested sections merge, scalars from *top* win."""
    merged = dict(base)
    for key, value in top.items():
        below = merged.get(key)
        merged[key] = _overlay(below, value) if isinstance(below, dict) and isinstance(value, dict) else value
    return merged


def _project_files(base_dir: Path, profiles: list[str]) -> Iterator[tuple[Path, str]]:
    """Yield existing project files in merge order, each with a source label."""
    stems: list[tuple[str, str | None]] = [("pysaga", None)]
    stems += [(f"pysaga-{profile}", profile) for profile in profiles]
    for stem, profile in stems:
        for directory in (base_dir / "config", base_dir):
            for suffix in (".yaml", ".toml"):
                path = directory / f"{stem}{suffix}"
                if path.is_file():
                    yield path, str(path) if profile is None else f"{path} (profile: {profile})"


class Config:
    """Merged pysaga settings with dot-notation lookup.

    A value is looked up in this order, first hit wins:

    1. ``PYSAGA_*`` environment variable (``pysaga.saga.duplicate_links``
       reads ``PYSAGA_SAGA_DUPLICATE_LINKS``)
    2. merged file data (profiles over project files over packaged defaults)
    3. the caller's default
    """

    def __init__(self, data: dict[str, Any] | None = None, sources: list[str] | None = None) -> None:
        self._data: dict[str, Any] = data or {}
        self._sources: list[str] = list(sources or [])

    @property
    def loaded_sources(self) -> list[str]:
        """Files merged into this config, lowest priority first."""
        return list(self._sources)

    @classmethod
    def defaults(cls) -> Config:
        return cls(_read_packaged_defaults(), [_DEFAULTS_SOURCE])

    @classmethod
    def from_sources(
        cls,
        base_dir: str | Path,
        active_profiles: list[str] | None = None,
        load_defaults: bool = True,
    ) -> Config:
        """Merge the settings found under *base_dir*.

        ``config/pysaga.*`` is read before ``pysaga.*`` in *base_dir*, and
        every ``pysaga-{profile}.*`` overlay is read after both, in the
        order of *active_profiles*.
        """
        config = cls.defaults() if load_defaults else cls()
        for path, label in _project_files(Path(base_dir), list(active_profiles or [])):
            config._data = _overlay(config._data, _read_file(path))
            config._sources.append(label)
        return config

    @staticmethod
    def env_key(key: str) -> str:
        """Environment variable that overrides *key*."""
        return "PYSAGA_" + key.removeprefix("pysaga.").upper().replace(".", "_").replace("-", "_")

    def _lookup(self, key: str) -> Any:
        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return _MISSING
            current = current[part]
        return current

    def get(self, key: str, default: Any = None) -> Any:
        """Value at dot-notation *key*, or *default* when unset."""
        env_val = os.environ.get(self.env_key(key))
        if env_val is not None:
            return env_val
        value = self._lookup(key)
        return default if value is _MISSING or value is None else value

    def get_section(self, prefix: str) -> dict[str, Any]:
        """The nested dict under *prefix*; empty when it isn't a section."""
        section = self._lookup(prefix)
        return section if isinstance(section, dict) else {}

    def bind(self, config_cls: type[T]) -> T:
        """Build a ``@config_properties`` dataclass from the settings under its prefix.

        Unset fields keep their dataclass default.  Strings (as read from the
        environment) are converted for ``int``, ``float`` and ``bool`` fields.
        """
        prefix = getattr(config_cls, _PREFIX_ATTR, None)
        if prefix is None:
            raise ValueError(f"{config_cls.__name__} is not decorated with @config_properties")
        if not dataclasses.is_dataclass(config_cls):
            raise ValueError(f"{config_cls.__name__} must be a dataclass to be bound")

        hints = get_type_hints(config_cls)
        kwargs: dict[str, Any] = {}
        for field in dataclasses.fields(config_cls):
            value = self.get(f"{prefix}.{field.name}")
            if value is None:
                continue
            if isinstance(value, str):
                value = _convert(value, hints.get(field.name))
            kwargs[field.name] = value
        return cast(T, config_cls(**kwargs))


def _convert(raw: str, expected: Any) -> Any:
    if expected is bool:
        return raw.lower() in ("true", "1", "yes")
    if expected in (int, float):
        return expected(raw)
    return raw
