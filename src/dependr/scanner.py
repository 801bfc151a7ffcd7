from __future__ import annotations

import os
from pathlib import Path

from dependr.ecosystems import DEPENDENCY_CACHE_DIRS, GITHUB_ACTIONS, WORKFLOWS_DIR, classify
from dependr.errors import ScanError
from dependr.models import ROOT_DIRECTORY, Settings, new_default_update, normalize_directory
from dependr.settings import load_builtin_settings
from dependr.updates import UpdateSet

ALWAYS_EXCLUDED = frozenset({".git"}) | DEPENDENCY_CACHE_DIRS


def _raise_walk_error(exc: OSError) -> None:
    raise ScanError(f"Error iterating {exc.filename or 'repository tree'}: {exc.strerror or exc}") from exc


def _relative_directory(root: Path, dirpath: str) -> str:
    rel = Path(dirpath).relative_to(root).as_posix()
    return normalize_directory(rel)


def scan(root: Path, settings: Settings | None = None) -> UpdateSet:
    """Walk ``root`` and collect one update per (ecosystem, directory) found.

    Directories named ``.git``, dependency caches and anything listed in
    ``settings.exclude_dirs`` are pruned before descending, so nothing beneath
    them is ever classified.
    """
    settings = settings or load_builtin_settings()
    excluded = ALWAYS_EXCLUDED | set(settings.exclude_dirs)
    root = Path(root)
    updates = UpdateSet()

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
        dirnames[:] = [d for d in dirnames if d not in excluded]
        directory: str | None = None
        for name in filenames:
            ecosystem = classify(name)
            if ecosystem is None:
                continue
            if not os.path.isfile(os.path.join(dirpath, name)):
                continue
            if directory is None:
                directory = _relative_directory(root, dirpath)
            updates.add(new_default_update(ecosystem, directory, settings.schedule_interval))

    if (root / WORKFLOWS_DIR).is_dir():
        updates.add(new_default_update(GITHUB_ACTIONS, ROOT_DIRECTORY, settings.schedule_interval))

    return updates
