from __future__ import annotations

from collections.abc import Iterable

from dependr.merge import merge
from dependr.models import Update, new_default_update
from dependr.updates import UpdateSet


class FakeDocument:
    def __init__(self, declared: list[Update] | None = None) -> None:
        self.entries = list(declared or [])
        self.appended: list[list[Update]] = []

    def declared_updates(self) -> list[Update]:
        return list(self.entries)

    def append_updates(self, updates: Iterable[Update]) -> None:
        batch = list(updates)
        self.appended.append(batch)
        self.entries.extend(batch)


def test_merge_without_document_and_no_candidates() -> None:
    result = merge(None, UpdateSet())
    assert result.document is None
    assert result.added == []
    assert not result.changed


def test_merge_creates_document_when_needed() -> None:
    fake = FakeDocument()
    candidates = UpdateSet([new_default_update("npm", "/")])
    result = merge(None, candidates, new_document=lambda: fake)
    assert result.document is fake
    assert result.created
    assert [u.key for u in fake.entries] == [("npm", "/")]


def test_merge_skips_declared_entries_regardless_of_order() -> None:
    fake = FakeDocument(
        [
            Update(ecosystem="pip", directory="services/api"),
            Update(ecosystem="gomod", directory="."),
        ]
    )
    candidates = UpdateSet(
        [
            new_default_update("gomod", "/"),
            new_default_update("npm", "/web"),
            new_default_update("pip", "/services/api"),
        ]
    )
    result = merge(fake, candidates)
    assert [u.key for u in result.added] == [("npm", "/web")]
    assert not result.created
    assert len(candidates) == 3


def test_merge_is_idempotent() -> None:
    fake = FakeDocument([new_default_update("cargo", "/")])
    candidates = UpdateSet([new_default_update("cargo", "/"), new_default_update("docker", "/")])
    first = merge(fake, candidates)
    second = merge(fake, candidates)
    assert [u.key for u in first.added] == [("docker", "/")]
    assert second.added == []
    keys = [u.key for u in fake.entries]
    assert len(keys) == len(set(keys))


def test_merge_appends_in_key_order() -> None:
    fake = FakeDocument()
    candidates = UpdateSet(
        [new_default_update("pip", "/"), new_default_update("cargo", "/"), new_default_update("npm", "/")]
    )
    merge(fake, candidates)
    assert [u.ecosystem for u in fake.appended[0]] == ["cargo", "npm", "pip"]
