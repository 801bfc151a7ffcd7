from __future__ import annotations

from collections.abc import Iterable, Iterator

from dependr.models import Update


class UpdateSet:
    """Candidate updates keyed by ``(ecosystem, directory)``."""

    def __init__(self, updates: Iterable[Update] = ()) -> None:
        self._items: dict[tuple[str, str], Update] = {}
        for update in updates:
            self.add(update)

    def add(self, update: Update) -> None:
        self._items[update.key] = update

    def remove_if_present(self, update: Update) -> bool:
        return self._items.pop(update.key, None) is not None

    def to_list(self) -> list[Update]:
        return [self._items[key] for key in sorted(self._items)]

    def is_empty(self) -> bool:
        return not self._items

    def copy(self) -> UpdateSet:
        return UpdateSet(self._items.values())

    def __iter__(self) -> Iterator[Update]:
        return iter(self.to_list())

    def __len__(self) -> int:
        return len(self._items)
