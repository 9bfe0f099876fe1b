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
"""Tests for the configuration layer."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pytest

from pysaga.core.config import Config, config_properties


class TestConfig:
    def test_load_from_dict(self) -> None:
        config = Config({"app": {"name": "order-sagas", "port": 8080}})
        assert config.get("app.name") == "order-sagas"
        assert config.get("app.port") == 8080

    def test_get_with_default(self) -> None:
        assert Config({}).get("missing.key", "default") == "default"

    def test_get_nested_value(self) -> None:
        config = Config({"database": {"pool": {"size": 10}}})
        assert config.get("database.pool.size") == 10

    def test_get_false_value(self) -> None:
        config = Config({"feature": {"enabled": False}})
        assert config.get("feature.enabled", True) is False

    def test_get_section(self) -> None:
        config = Config({"pysaga": {"logging": {"level": {"root": "DEBUG"}}}})
        assert config.get_section("pysaga.logging.level") == {"root": "DEBUG"}
        assert config.get_section("pysaga.missing") == {}

    def test_env_var_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PYSAGA_APP_NAME", "env-service")
        config = Config({"app": {"name": "file-service"}})
        assert config.get("app.name") == "env-service"

    def test_env_var_drops_library_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PYSAGA_LOGGING_FORMAT", "json")
        config = Config({"pysaga": {"logging": {"format": "console"}}})
        assert config.get("pysaga.logging.format") == "json"

    def test_none_value_falls_back_to_default(self) -> None:
        config = Config({"saga": {"name": None}})
        assert config.get("saga.name", "fallback") == "fallback"

    def test_section_lookup_through_scalar_is_empty(self) -> None:
        config = Config({"pysaga": {"saga": "flat"}})
        assert config.get_section("pysaga.saga.duplicate_links") == {}
        assert config.get("pysaga.saga.duplicate_links", "collapse") == "collapse"

    @pytest.mark.parametrize(
        ("key", "env"),
        [
            ("pysaga.saga.duplicate_links", "PYSAGA_SAGA_DUPLICATE_LINKS"),
            ("pysaga.logging.level.root", "PYSAGA_LOGGING_LEVEL_ROOT"),
            ("app.saga-name", "PYSAGA_APP_SAGA_NAME"),
        ],
    )
    def test_env_key(self, key: str, env: str) -> None:
        assert Config.env_key(key) == env


class TestConfigProperties:
    def test_bind_to_dataclass(self) -> None:
        @config_properties(prefix="database")
        @dataclass
        class DatabaseConfig:
            url: str = "sqlite:///test.db"
            pool_size: int = 5

        config = Config({"database": {"url": "postgresql://localhost/mydb", "pool_size": 20}})
        db_config = config.bind(DatabaseConfig)
        assert db_config.url == "postgresql://localhost/mydb"
        assert db_config.pool_size == 20

    def test_bind_uses_defaults(self) -> None:
        @config_properties(prefix="database")
        @dataclass
        class DatabaseConfig:
            url: str = "sqlite:///default.db"
            pool_size: int = 5

        db_config = Config({}).bind(DatabaseConfig)
        assert db_config.url == "sqlite:///default.db"
        assert db_config.pool_size == 5

    def test_bind_coerces_env_strings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        @config_properties(prefix="database")
        @dataclass
        class DatabaseConfig:
            pool_size: int = 5
            ratio: float = 0.5
            echo: bool = False

        monkeypatch.setenv("PYSAGA_DATABASE_POOL_SIZE", "20")
        monkeypatch.setenv("PYSAGA_DATABASE_RATIO", "0.75")
        monkeypatch.setenv("PYSAGA_DATABASE_ECHO", "yes")
        db_config = Config({}).bind(DatabaseConfig)
        assert db_config.pool_size == 20
        assert db_config.ratio == 0.75
        assert db_config.echo is True

    def test_bind_requires_decorator(self) -> None:
        @dataclass
        class Plain:
            value: int = 1

        with pytest.raises(ValueError, match="not decorated"):
            Config({}).bind(Plain)


class TestConfigSources:
    def test_defaults_are_packaged(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PYSAGA_SAGA_DUPLICATE_LINKS", raising=False)
        config = Config.defaults()
        assert config.get("pysaga.saga.duplicate_links") == "collapse"
        assert config.get("pysaga.logging.format") == "console"
        assert len(config.loaded_sources) == 1

    def test_from_sources_merges_root_and_config_dir(self, tmp_path: Path) -> None:
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "pysaga.yaml").write_text("app:\n  name: from-config-dir\n  port: 1\n")
        (tmp_path / "pysaga.yaml").write_text("app:\n  name: from-root\n")

        config = Config.from_sources(tmp_path, load_defaults=False)
        assert config.get("app.name") == "from-root"
        assert config.get("app.port") == 1
        assert len(config.loaded_sources) == 2

    def test_from_sources_reads_toml(self, tmp_path: Path) -> None:
        (tmp_path / "pysaga.toml").write_text('[pysaga.saga]\nduplicate_links = "preserve"\n')

        config = Config.from_sources(tmp_path)
        assert config.get_section("pysaga.saga") == {"duplicate_links": "preserve"}

    def test_missing_files_keep_defaults(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PYSAGA_SAGA_DUPLICATE_LINKS", raising=False)
        config = Config.from_sources(tmp_path / "absent")
        assert config.get_section("pysaga.saga") == {"duplicate_links": "collapse"}
        assert config.loaded_sources == ["pysaga-defaults.yaml (library defaults)"]

    def test_unrelated_file_names_are_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "sagas.yaml").write_text("app:\n  name: ignored\n")

        config = Config.from_sources(tmp_path, load_defaults=False)
        assert config.get("app.name") is None
        assert config.loaded_sources == []


class TestProfileConfigMerging:
    def test_merge_profile_config(self, tmp_path: Path) -> None:
        (tmp_path / "pysaga.yaml").write_text("server:\n  port: 8080\n  host: localhost\n")
        (tmp_path / "pysaga-dev.yaml").write_text("server:\n  port: 9090\n  debug: true\n")

        config = Config.from_sources(tmp_path, active_profiles=["dev"])
        assert config.get("server.port") == 9090
        assert config.get("server.host") == "localhost"
        assert config.get("server.debug") is True

    def test_later_profile_wins(self, tmp_path: Path) -> None:
        (tmp_path / "pysaga.yaml").write_text("db:\n  url: base\n")
        (tmp_path / "pysaga-dev.yaml").write_text("db:\n  url: dev-url\n")
        (tmp_path / "pysaga-local.yaml").write_text("db:\n  url: local-url\n")

        config = Config.from_sources(tmp_path, active_profiles=["dev", "local"])
        assert config.get("db.url") == "local-url"

    def test_profile_overlays_come_after_project_files(self, tmp_path: Path) -> None:
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "pysaga-dev.yaml").write_text("db:\n  url: profile\n")
        (tmp_path / "pysaga.yaml").write_text("db:\n  url: root\n")

        config = Config.from_sources(tmp_path, active_profiles=["dev"], load_defaults=False)
        assert config.get("db.url") == "profile"
        assert config.loaded_sources == [
            str(tmp_path / "pysaga.yaml"),
            f"{tmp_path / 'config' / 'pysaga-dev.yaml'} (profile: dev)",
        ]

    def test_missing_profile_file_is_skipped(self, tmp_path: Path) -> None:
        (tmp_path / "pysaga.yaml").write_text("app:\n  name: test\n")

        config = Config.from_sources(tmp_path, active_profiles=["nonexistent"])
        assert config.get("app.name") == "test"

    def test_env_vars_still_win(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "pysaga.yaml").write_text("app:\n  name: base\n")
        (tmp_path / "pysaga-dev.yaml").write_text("app:\n  name: dev\n")

        monkeypatch.setenv("PYSAGA_APP_NAME", "env-wins")
        config = Config.from_sources(tmp_path, active_profiles=["dev"])
        assert config.get("app.name") == "env-wins"
