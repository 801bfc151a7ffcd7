from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from dependr.errors import ConfigNotFoundError, NotARepoError, NotFoundError

CONFIG_LOCATIONS = (
    "dependabot.yml",
    "dependabot.yaml",
    ".github/dependabot.yml",
    ".github/dependabot.yaml",
)
DEFAULT_CONFIG_LOCATION = ".github/dependabot.yml"
CONFIG_FILENAMES = frozenset(Path(p).name for p in CONFIG_LOCATIONS)


@dataclass(frozen=True)
class RepositoryLocation:
    root: Path
    config_relative_path: str
    config_exists: bool

    @property
    def config_path(self) -> Path:
        return self.root / self.config_relative_path


def resolve_repo_root(start: Path) -> Path:
    """Ask git for the top level of the working tree containing ``start``."""
    try:
        proc = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            cwd=start,
            capture_output=True,
            text=True,
            check=True,
        )
    except subprocess.CalledProcessError as exc:
        detail = (exc.stderr or exc.stdout or "").strip()
        raise NotARepoError(f"Not inside a git repository: {start} ({detail})") from exc
    except OSError as exc:
        raise NotARepoError(f"Unable to run git in {start} ({exc})") from exc

    root = proc.stdout.strip()
    if not root:
        raise NotARepoError(f"git returned no repository root for {start}")
    return Path(root).resolve()


def locate(user_path: Path | str, create_if_missing: bool = False) -> RepositoryLocation:
    path = Path(user_path)
    if not path.is_absolute():
        path = Path.cwd() / path
    path = path.resolve()

    if not path.exists():
        raise NotFoundError(f"Path does not exist: {path}")
    if path.is_file():
        return _locate_file(path)
    if path.is_dir():
        return _locate_dir(path, create_if_missing)
    raise NotFoundError(f"Unsupported path type (expected file or directory): {path}")


def _locate_file(path: Path) -> RepositoryLocation:
    root = resolve_repo_root(path.parent)
    if path.name not in CONFIG_FILENAMES:
        raise ConfigNotFoundError(
            f"Not a dependabot configuration file: {path} (expected one of {', '.join(sorted(CONFIG_FILENAMES))})"
        )
    try:
        relative = path.relative_to(root).as_posix()
    except ValueError as exc:
        raise ConfigNotFoundError(f"Configuration file {path} is outside repository {root}") from exc
    return RepositoryLocation(root=root, config_relative_path=relative, config_exists=True)


def _locate_dir(path: Path, create_if_missing: bool) -> RepositoryLocation:
    root = resolve_repo_root(path)
    for candidate in CONFIG_LOCATIONS:
        if (root / candidate).is_file():
            return RepositoryLocation(root=root, config_relative_path=candidate, config_exists=True)
    if create_if_missing:
        return RepositoryLocation(root=root, config_relative_path=DEFAULT_CONFIG_LOCATION, config_exists=False)
    raise ConfigNotFoundError(
        f"No dependabot configuration found in {root} (looked for {', '.join(CONFIG_LOCATIONS)})"
    )
