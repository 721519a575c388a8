"""Tests for preserve_context.config module."""

from __future__ import annotations

import pytest

from preserve_context.config import CONFIG_FILENAME, InvokerConfig, find_config_file
from preserve_context.errors import ConfigError
from preserve_context.types import CallContext, ResizePolicy


# ---------------------------------------------------------------------------
# find_config_file
# ---------------------------------------------------------------------------


class TestFindConfigFile:
    def test_found_in_start_dir(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text("")
        assert find_config_file(tmp_path) == (tmp_path / CONFIG_FILENAME).resolve()

    def test_found_in_ancestor(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text("")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_file(nested) == (tmp_path / CONFIG_FILENAME).resolve()

    def test_directory_with_same_name_ignored(self, tmp_path):
        (tmp_path / "inner").mkdir()
        (tmp_path / "inner" / CONFIG_FILENAME).mkdir()
        (tmp_path / CONFIG_FILENAME).write_text("")
        assert find_config_file(tmp_path / "inner") == (
            tmp_path / CONFIG_FILENAME
        ).resolve()


# ---------------------------------------------------------------------------
# InvokerConfig
# ---------------------------------------------------------------------------


class TestInvokerConfigFromDict:
    def test_defaults(self):
        config = InvokerConfig.from_dict({})
        assert config.resize_policy is ResizePolicy.STRICT
        assert config.default_context is CallContext.SCALAR

    def test_parses_strings(self):
        config = InvokerConfig.from_dict(
            {"resize_policy": "FIT", "default_context": "list"}
        )
        assert config.resize_policy is ResizePolicy.FIT
        assert config.default_context is CallContext.LIST

    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="Unknown invoker setting"):
            InvokerConfig.from_dict({"retries": 3})

    def test_invalid_policy(self):
        with pytest.raises(ConfigError, match="Invalid resize_policy"):
            InvokerConfig.from_dict({"resize_policy": "grow"})

    def test_invalid_context(self):
        with pytest.raises(ConfigError, match="Invalid calling context"):
            InvokerConfig.from_dict({"default_context": "hash"})


class TestInvokerConfigLoad:
    def test_no_file_gives_defaults(self, tmp_path, monkeypatch):
        monkeypatch.setattr(
            "preserve_context.config.find_config_file", lambda start_dir=None: None
        )
        assert InvokerConfig.load(tmp_path) == InvokerConfig()

    def test_reads_invoker_table(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text(
            '[invoker]\nresize_policy = "allow"\ndefault_context = "void"\n'
        )
        config = InvokerConfig.load(tmp_path)
        assert config.resize_policy is ResizePolicy.ALLOW
        assert config.default_context is CallContext.VOID

    def test_missing_table_gives_defaults(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text('[other]\nkey = "value"\n')
        assert InvokerConfig.load(tmp_path) == InvokerConfig()

    def test_invalid_toml(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text("[invoker\n")
        with pytest.raises(ConfigError, match="Failed to parse"):
            InvokerConfig.load(tmp_path)

    def test_table_must_be_table(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text('invoker = "fit"\n')
        with pytest.raises(ConfigError, match="must be a table"):
            InvokerConfig.load(tmp_path)


class TestInvokerConfigOverrides:
    def test_with_overrides_copies(self):
        base = InvokerConfig()
        changed = base.with_overrides(resize_policy=ResizePolicy.FIT)
        assert changed.resize_policy is ResizePolicy.FIT
        assert base.resize_policy is ResizePolicy.STRICT

    def test_frozen(self):
        config = InvokerConfig()
        with pytest.raises(AttributeError):
            config.resize_policy = ResizePolicy.ALLOW  # type: ignore[misc]


class TestInvokerConfigCoercion:
    def test_constructor_accepts_strings(self):
        config = InvokerConfig(resize_policy="Allow", default_context="list")
        assert config.resize_policy is ResizePolicy.ALLOW
        assert config.default_context is CallContext.LIST

    def test_with_overrides_accepts_strings(self):
        config = InvokerConfig().with_overrides(resize_policy="fit")
        assert config.resize_policy is ResizePolicy.FIT

    def test_constructor_rejects_bad_policy(self):
        with pytest.raises(ConfigError, match="Invalid resize_policy"):
            InvokerConfig(resize_policy="grow")

    def test_with_overrides_rejects_bad_context(self):
        with pytest.raises(ConfigError, match="Invalid calling context"):
            InvokerConfig().with_overrides(default_context="hash")

    def test_from_dict_accepts_members(self):
        config = InvokerConfig.from_dict(
            {"resize_policy": ResizePolicy.FIT, "default_context": CallContext.VOID}
        )
        assert config.resize_policy is ResizePolicy.FIT
        assert config.default_context is CallContext.VOID
