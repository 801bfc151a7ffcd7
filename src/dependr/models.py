from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

ROOT_DIRECTORY = "/"
DEFAULT_INTERVAL = "weekly"
INTERVALS = ("daily", "weekly", "monthly", "quarterly", "semiannually", "yearly")


def normalize_directory(directory: str) -> str:
    """Canonical form of an update directory, used for identity comparison.

    The repository root is always ``/``; other directories get a leading slash
    and lose any trailing one, so ``.``, ``./`` and ``/`` are the same entry and
    so are ``services/api`` and ``/services/api/``.
    """
    value = directory.strip().replace("\\", "/")
    while value.startswith("./"):
        value = value[2:]
    if value in {"", "."}:
        return ROOT_DIRECTORY
    value = value.rstrip("/")
    if not value:
        return ROOT_DIRECTORY
    if not value.startswith("/"):
        value = f"/{value}"
    return value


class Schedule(BaseModel):
    interval: str = DEFAULT_INTERVAL


class Update(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    ecosystem: str = Field(alias="package-ecosystem", min_length=1)
    directory: str = ROOT_DIRECTORY
    schedule: Schedule = Field(default_factory=Schedule)

    @property
    def key(self) -> tuple[str, str]:
        return (self.ecosystem, normalize_directory(self.directory))

    def to_yaml(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


def new_default_update(ecosystem: str, directory: str, interval: str = DEFAULT_INTERVAL) -> Update:
    return Update(ecosystem=ecosystem, directory=directory, schedule=Schedule(interval=interval))


class Settings(BaseModel):
    schedule_interval: str = DEFAULT_INTERVAL
    exclude_dirs: list[str] = Field(default_factory=list)

    @field_validator("schedule_interval")
    @classmethod
    def _known_interval(cls, value: str) -> str:
        if value not in INTERVALS:
            raise ValueError(f"schedule_interval must be one of: {', '.join(INTERVALS)}")
        return value
