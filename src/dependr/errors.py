from __future__ import annotations


class DependrError(Exception):
    pass


class NotFoundError(DependrError):
    pass


class NotARepoError(DependrError):
    pass


class ConfigNotFoundError(DependrError):
    pass


class ScanError(DependrError):
    pass


class ConfigIOError(DependrError):
    pass


class ParseError(DependrError):
    pass


class SettingsError(DependrError):
    pass
