from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Protocol

from dependr.document import ConfigDocument
from dependr.models import Update
from dependr.updates import UpdateSet


class UpdatesDocument(Protocol):
    def declared_updates(self) -> list[Update]: ...

    def append_updates(self, updates: Iterable[Update]) -> None: ...


@dataclass
class MergeResult:
    document: UpdatesDocument | None
    added: list[Update] = field(default_factory=list)
    created: bool = False

    @property
    def changed(self) -> bool:
        return bool(self.added)


def merge(
    document: UpdatesDocument | None,
    candidates: UpdateSet,
    new_document: Callable[[], UpdatesDocument] | None = None,
) -> MergeResult:
    """Append every candidate the document does not already declare.

    Declared entries are matched on ``(ecosystem, directory)`` only, so running
    the same merge twice adds nothing the second time. ``candidates`` is left
    untouched.
    """
    pending = candidates.copy()
    created = False
    if document is None:
        if pending.is_empty():
            return MergeResult(document=None)
        document = (new_document or ConfigDocument.template)()
        created = True

    for declared in document.declared_updates():
        pending.remove_if_present(declared)

    added = pending.to_list()
    document.append_updates(added)
    return MergeResult(document=document, added=added, created=created)
