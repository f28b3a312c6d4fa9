"""Runtime configuration for the task-hooks CLI."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from task_hooks.codec import EncodeOptions

DEPENDS_FORMATS: tuple[str, ...] = ("array", "string")


@dataclass(slots=True)
class CodecSettings:
    """How the CLI writes JSON back to Taskwarrior."""

    ensure_ascii: bool = False
    depends_format: str = "array"

    def encode_options(self) -> EncodeOptions:
        return EncodeOptions(
            ensure_ascii=self.ensure_ascii,
            depends_as_string=self.depends_format == "string",
        )


@dataclass(slots=True)
class Settings:
    """Application settings grouped by concern."""

    log_level: str = "WARNING"
    codec: CodecSettings = field(default_factory=CodecSettings)

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from ``TASK_HOOKS_*`` environment variables."""

        return cls(
            log_level=os.getenv("TASK_HOOKS_LOG_LEVEL", "WARNING").strip().upper(),
            codec=CodecSettings(
                ensure_ascii=_env_bool("TASK_HOOKS_ENSURE_ASCII", default=False),
                depends_format=os.getenv("TASK_HOOKS_DEPENDS_FORMAT", "array").strip().lower(),
            ),
        )

    def validate(self) -> None:
        """Raise configuration error on unknown log level or depends format."""

        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Invalid TASK_HOOKS_LOG_LEVEL: {self.log_level!r}")
        if self.codec.depends_format not in DEPENDS_FORMATS:
            raise ValueError(
                "Invalid TASK_HOOKS_DEPENDS_FORMAT: "
                f"{self.codec.depends_format!r}. Expected one of {', '.join(DEPENDS_FORMATS)}.",
            )


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"Invalid boolean value for {name}: {value!r}")
