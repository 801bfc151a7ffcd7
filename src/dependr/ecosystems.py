from __future__ import annotations

from types import MappingProxyType

GITHUB_ACTIONS = "github-actions"
WORKFLOWS_DIR = ".github/workflows"

# Directories holding fetched dependencies rather than project manifests.
DEPENDENCY_CACHE_DIRS = frozenset({"node_modules", "bower_components", "vendor", ".venv", "__pycache__"})

# https://docs.github.com/en/code-security/dependabot/dependabot-version-updates/configuration-options-for-the-dependabot.yml-file#package-ecosystem
WELL_KNOWN_FILES = MappingProxyType(
    {
        "Gemfile": "bundler",
        "Gemfile.lock": "bundler",
        "Cargo.toml": "cargo",
        "Cargo.lock": "cargo",
        "composer.json": "composer",
        "composer.lock": "composer",
        "Dockerfile": "docker",
        "mix.exs": "hex",
        "mix.lock": "hex",
        "elm.json": "elm",
        "elm-package.json": "elm",
        ".gitmodules": "gitsubmodule",
        "go.mod": "gomod",
        "go.sum": "gomod",
        "build.gradle": "gradle",
        "build.gradle.kts": "gradle",
        "settings.gradle": "gradle",
        "settings.gradle.kts": "gradle",
        "pom.xml": "maven",
        "package.json": "npm",
        "package-lock.json": "npm",
        "npm-shrinkwrap.json": "npm",
        "yarn.lock": "npm",
        "pnpm-lock.yaml": "npm",
        "packages.config": "nuget",
        "requirements.txt": "pip",
        "Pipfile": "pip",
        "Pipfile.lock": "pip",
        "setup.py": "pip",
        "pyproject.toml": "pip",
        "pubspec.yaml": "pub",
        "pubspec.lock": "pub",
        "Package.swift": "swift",
        "Package.resolved": "swift",
        ".terraform.lock.hcl": "terraform",
    }
)

# Project files whose stem varies per project.
WELL_KNOWN_SUFFIXES = MappingProxyType(
    {
        ".csproj": "nuget",
        ".vbproj": "nuget",
        ".vcxproj": "nuget",
        ".fsproj": "nuget",
        ".nuspec": "nuget",
        ".gemspec": "bundler",
    }
)


def classify(filename: str) -> str | None:
    ecosystem = WELL_KNOWN_FILES.get(filename)
    if ecosystem is not None:
        return ecosystem
    for suffix, ecosystem in WELL_KNOWN_SUFFIXES.items():
        if filename.endswith(suffix) and len(filename) > len(suffix):
            return ecosystem
    return None


def supported_ecosystems() -> list[str]:
    names = set(WELL_KNOWN_FILES.values()) | set(WELL_KNOWN_SUFFIXES.values())
    names.add(GITHUB_ACTIONS)
    return sorted(names)
