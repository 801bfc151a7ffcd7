from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import cast

from dependr.document import ConfigDocument
from dependr.errors import ConfigIOError, ParseError
from dependr.merge import merge
from dependr.models import Settings, Update
from dependr.repo import RepositoryLocation, locate
from dependr.scanner import scan
from dependr.settings import load_builtin_settings

CONFIG_FILE_MODE = 0o600


@dataclass
class RunResult:
    location: RepositoryLocation
    detected: list[Update]
    added: list[Update] = field(default_factory=list)
    created: bool = False
    written: bool = False
    content: str | None = None
    settings: Settings = field(default_factory=Settings)


def load_document(location: RepositoryLocation) -> ConfigDocument | None:
    if not location.config_exists:
        return None
    path = location.config_path
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigIOError(f"Error loading file: {path} ({exc})") from exc
    except UnicodeDecodeError as exc:
        raise ParseError(f"Unable to decode {path}: {exc}") from exc
    return ConfigDocument.load(text, source=location.config_relative_path)


def write_document(path: Path, content: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigIOError(f"Error creating folder: {path.parent} ({exc})") from exc
    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, CONFIG_FILE_MODE)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(content)
        os.chmod(path, CONFIG_FILE_MODE)
    except OSError as exc:
        raise ConfigIOError(f"Error writing dependabot file: {path} ({exc})") from exc


def run(
    target: Path | str,
    *,
    create_if_missing: bool = False,
    settings: Settings | None = None,
    dry_run: bool = False,
) -> RunResult:
    """Locate, scan, merge and (unless ``dry_run``) write the configuration.

    The merged document is built completely in memory before anything touches
    disk, and nothing is written when the merge adds no entries.
    """
    settings = settings or load_builtin_settings()
    location = locate(target, create_if_missing=create_if_missing)
    candidates = scan(location.root, settings)
    document = load_document(location)

    merged = merge(document, candidates)
    result = RunResult(
        location=location,
        detected=candidates.to_list(),
        added=merged.added,
        created=merged.created,
        settings=settings,
    )
    if merged.document is None or not merged.changed:
        return result

    result.content = cast(ConfigDocument, merged.document).dump()
    if not dry_run:
        write_document(location.config_path, result.content)
        result.written = True
    return result
