from __future__ import annotations

import allure
import pytest

from task_hooks.config import CodecSettings, Settings

pytestmark = [
    allure.epic("Taskwarrior Codec"),
    allure.feature("Configuration"),
]


def test_defaults(monkeypatch) -> None:
    for name in ("TASK_HOOKS_LOG_LEVEL", "TASK_HOOKS_ENSURE_ASCII", "TASK_HOOKS_DEPENDS_FORMAT"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()
    settings.validate()

    assert settings.log_level == "WARNING"
    assert settings.codec.ensure_ascii is False
    assert settings.codec.depends_format == "array"


def test_from_env_reads_overrides(monkeypatch) -> None:
    monkeypatch.setenv("TASK_HOOKS_LOG_LEVEL", "debug")
    monkeypatch.setenv("TASK_HOOKS_ENSURE_ASCII", "yes")
    monkeypatch.setenv("TASK_HOOKS_DEPENDS_FORMAT", "String")

    settings = Settings.from_env()
    settings.validate()

    assert settings.log_level == "DEBUG"
    options = settings.codec.encode_options()
    assert options.ensure_ascii is True
    assert options.depends_as_string is True


def test_invalid_boolean_is_rejected(monkeypatch) -> None:
    monkeypatch.setenv("TASK_HOOKS_ENSURE_ASCII", "maybe")

    with pytest.raises(ValueError, match="TASK_HOOKS_ENSURE_ASCII"):
        Settings.from_env()


def test_validate_rejects_unknown_depends_format() -> None:
    settings = Settings(codec=CodecSettings(depends_format="csv"))

    with pytest.raises(ValueError, match="TASK_HOOKS_DEPENDS_FORMAT"):
        settings.validate()


def test_validate_rejects_unknown_log_level() -> None:
    with pytest.raises(ValueError, match="TASK_HOOKS_LOG_LEVEL"):
        Settings(log_level="CHATTY").validate()
