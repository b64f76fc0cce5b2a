from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError

# Named cadences -> interval in seconds.
BACKUP_INTERVALS: dict[str, int] = {
    "debug": 5,
    "every-half-minute": 30,
    "every-minute": 60,
    "hourly": 60 * 60,
    "daily": 24 * 60 * 60,
    "weekly": 7 * 24 * 60 * 60,
    "monthly": 30 * 24 * 60 * 60,
}


class StoreOptions(BaseModel):
    """
    Options for a Database handle.

    Accepts both snake_case and the camelCase keys older callers pass:
      {"formatting": "expanded", "backups": "daily", "backupDirectory": "./backups"}
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    formatting: Literal["compact", "expanded"] = "compact"
    backups: str | None = None
    backup_directory: Path | None = Field(default=None, alias="backupDirectory")
    strict_values: bool = Field(default=False, alias="strictValues")

    @field_validator("formatting", mode="before")
    @classmethod
    def _default_formatting(cls, value: Any) -> Any:
        # Unset/empty formatting means compact.
        return "compact" if value is None or value == "" else value

    @field_validator("backups")
    @classmethod
    def _known_cadence(cls, value: str | None) -> str | None:
        if not value:
            return None
        if value not in BACKUP_INTERVALS:
            allowed = ", ".join(BACKUP_INTERVALS)
            raise ValueError(f"unknown backup cadence {value!r} (expected one of: {allowed})")
        return value

    @property
    def backup_interval(self) -> int | None:
        return BACKUP_INTERVALS[self.backups] if self.backups else None

    @classmethod
    def from_settings(cls, settings: Any) -> "StoreOptions":
        return coerce_options(
            {
                "formatting": settings.formatting,
                "backups": settings.backups,
                "backup_directory": settings.backup_directory,
                "strict_values": settings.strict_values,
            }
        )


def coerce_options(options: StoreOptions | Mapping[str, Any] | None = None, **overrides: Any) -> StoreOptions:
    """Build StoreOptions from a model, a mapping and/or keywords; ConfigError on bad input."""
    if isinstance(options, StoreOptions) and not overrides:
        return options
    if options is None:
        raw: dict[str, Any] = {}
    elif isinstance(options, StoreOptions):
        raw = options.model_dump()
    elif isinstance(options, Mapping):
        raw = dict(options)
    else:
        raise ConfigError(f"options must be a mapping or StoreOptions, got {type(options).__name__}")
    raw.update(overrides)
    try:
        return StoreOptions.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"invalid store options: {e}") from e
