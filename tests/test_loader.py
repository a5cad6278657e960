"""Tests for config file loading, settings and file discovery."""

import json

import pytest

from architect_linter.discovery import collect_files, is_candidate
from architect_linter.errors import ConfigError, ConfigErrorKind
from architect_linter.loader import find_config_file, load_config_file, migrate_legacy_rules
from architect_linter.models.config import ArchitecturePattern
from architect_linter.settings import LinterSettings


class TestLoadConfigFile:
    """Tests for reading architect.json."""

    def test_load_from_project_directory(self, tmp_path, write_file):
        write_file("architect.json", json.dumps({
            "max_lines_per_function": 40,
            "architecture_pattern": "Ninguno",
            "forbidden_imports": [{"from": "/Domain/", "to": "/Infra/"}],
        }))

        config = load_config_file(tmp_path)

        assert config.max_lines_per_function == 40
        assert config.architecture_pattern == ArchitecturePattern.NONE
        assert config.forbidden_imports[0].from_ == "/domain/"

    def test_load_explicit_file(self, write_file):
        path = write_file("configs/strict.json", '{"max_lines_per_function": 15}')

        assert load_config_file(path).max_lines_per_function == 15

    def test_byte_order_mark(self, write_file):
        path = write_file("architect.json", '\ufeff{"max_lines_per_function": 15}')

        assert load_config_file(path).max_lines_per_function == 15

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            load_config_file(tmp_path)

        assert exc_info.value.kind == ConfigErrorKind.MISSING_FIELD
        assert "not found" in exc_info.value.message

    def test_invalid_json(self, write_file):
        path = write_file("architect.json", '{"max_lines_per_function": 40,')

        with pytest.raises(ConfigError) as exc_info:
            load_config_file(path)

        assert exc_info.value.kind == ConfigErrorKind.INVALID_TYPE
        assert "not valid JSON" in exc_info.value.message

    def test_validation_errors_propagate(self, write_file):
        path = write_file(
            "architect.json",
            json.dumps({"max_lines_per_function": 40, "forbidden_imports": [{"from": "", "to": "x"}]}),
        )

        with pytest.raises(ConfigError) as exc_info:
            load_config_file(path)

        assert exc_info.value.kind == ConfigErrorKind.EMPTY_PATTERN
        assert exc_info.value.field == "forbidden_imports.0.from"

    def test_custom_filename(self, tmp_path, write_file):
        write_file("lint.json", '{"max_lines_per_function": 25}')

        assert load_config_file(tmp_path, "lint.json").max_lines_per_function == 25

    def test_find_config_file(self, tmp_path, write_file):
        explicit = write_file("other.json", "{}")

        assert find_config_file(tmp_path) == tmp_path / "architect.json"
        assert find_config_file(explicit) == explicit


class TestLegacyMigration:
    """Tests for the file_pattern/prohibited schema."""

    def test_legacy_rule_is_migrated(self, write_file):
        path = write_file("architect.json", json.dumps({
            "max_lines_per_function": 40,
            "forbidden_imports": [{"file_pattern": "/services/", "prohibited": "/controllers/"}],
        }))

        rule = load_config_file(path).forbidden_imports[0]

        assert (rule.from_, rule.to) == ("/services/", "/controllers/")

    def test_current_keys_take_precedence(self):
        document = {
            "forbidden_imports": [
                {"from": "/a/", "file_pattern": "/legacy/", "prohibited": "/b/"},
            ],
        }

        migrated = migrate_legacy_rules(document)

        assert migrated["forbidden_imports"] == [{"from": "/a/", "to": "/b/"}]
        assert "file_pattern" in document["forbidden_imports"][0]

    def test_document_without_rules_is_unchanged(self):
        document = {"max_lines_per_function": 10}

        assert migrate_legacy_rules(document) is document


class TestSettings:
    """Tests for environment settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("ARCHITECT_WORKERS", raising=False)
        monkeypatch.delenv("ARCHITECT_LOG_LEVEL", raising=False)

        settings = LinterSettings()

        assert settings.workers is None
        assert settings.log_level == "WARNING"
        assert settings.config_filename == "architect.json"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("ARCHITECT_WORKERS", "3")
        monkeypatch.setenv("ARCHITECT_LOG_JSON", "true")

        settings = LinterSettings()

        assert settings.workers == 3
        assert settings.log_json is True


class TestDiscovery:
    """Tests for collect_files."""

    def test_collects_typescript_sources(self, tmp_path, write_file):
        write_file("src/b.ts", "")
        write_file("src/a.tsx", "")
        write_file("src/nested/c.mts", "")
        write_file("src/readme.md", "")
        write_file("src/script.js", "")

        files = collect_files(tmp_path)

        assert [f.relative_to(tmp_path).as_posix() for f in files] == [
            "src/a.tsx", "src/b.ts", "src/nested/c.mts",
        ]

    def test_excluded_directories(self, tmp_path, write_file):
        write_file("src/app.ts", "")
        write_file("node_modules/lib/index.ts", "")
        write_file("src/node_modules/inner.ts", "")
        write_file("dist/app.ts", "")
        write_file(".git/hooks/x.ts", "")

        files = collect_files(tmp_path)

        assert [f.relative_to(tmp_path).as_posix() for f in files] == ["src/app.ts"]

    def test_declaration_files_are_skipped(self, tmp_path, write_file):
        write_file("types/global.d.ts", "")
        write_file("types/real.ts", "")

        files = collect_files(tmp_path)

        assert [f.name for f in files] == ["real.ts"]

    def test_single_file(self, write_file):
        path = write_file("one.ts", "")

        assert collect_files(path) == [path]

    def test_is_candidate(self, tmp_path):
        assert is_candidate(tmp_path / "App.TS")
        assert not is_candidate(tmp_path / "lib.D.ts")
        assert not is_candidate(tmp_path / "main.js")
