from __future__ import annotations

import io
from collections.abc import Iterable
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap, CommentedSeq
from ruamel.yaml.error import YAMLError
from ruamel.yaml.tokens import CommentToken

from dependr.errors import ParseError
from dependr.models import Update

UPDATES_KEY = "updates"

TEMPLATE = """\
# To get started with Dependabot version updates, you'll need to specify which
# package ecosystems to update and where the package manifests are located.
# Please see the documentation for all configuration options:
# https://docs.github.com/en/code-security/dependabot/dependabot-version-updates/configuration-options-for-the-dependabot.yml-file

version: 2
updates:
"""


def _yaml() -> YAML:
    yaml = YAML()
    yaml.preserve_quotes = True
    yaml.indent(mapping=2, sequence=4, offset=2)
    yaml.width = 4096
    return yaml


def _parse(text: str, source: str) -> Any:
    try:
        return _yaml().load(text)
    except YAMLError as exc:
        raise ParseError(f"Unable to parse {source}: {exc}") from exc


def _commented(value: Any) -> Any:
    if isinstance(value, dict):
        node = CommentedMap()
        for key, item in value.items():
            node[key] = _commented(item)
        return node
    return value


def _last_comment_slots(node: Any) -> list[tuple[Any, Any, int]]:
    """Comment slots after the last value, from the outermost node inwards.

    Block sequences keep an item's trailing comment at position 0 of
    ``ca.items[index]``, block mappings at position 2 of ``ca.items[key]``.
    """
    slots: list[tuple[Any, Any, int]] = []
    while node and not node.fa.flow_style():
        if isinstance(node, CommentedSeq):
            key: Any = len(node) - 1
            slots.append((node, key, 0))
        elif isinstance(node, CommentedMap):
            key = next(reversed(node))
            slots.append((node, key, 2))
        else:
            break
        node = node[key]
        if not isinstance(node, (CommentedSeq, CommentedMap)):
            break
    return slots


def _move_trailing_comment(node: CommentedSeq, fragment: CommentedSeq) -> None:
    """Keep full-line comments that close ``node`` after the appended entries."""
    for holder, key, pos in reversed(_last_comment_slots(node)):
        comments = holder.ca.items.get(key)
        if not comments or len(comments) <= pos or comments[pos] is None:
            continue
        token = comments[pos]
        head, sep, tail = token.value.partition("\n")
        if not tail:
            return
        if head.strip():
            # An end-of-line comment stays on its own line.
            moved = CommentToken("\n" + tail, token.start_mark, token.end_mark)
            comments[pos] = CommentToken(head + sep, token.start_mark, token.end_mark)
        else:
            moved = token
            comments[pos] = None

        targets = _last_comment_slots(fragment)
        target, target_key, target_pos = targets[-1]
        slot = target.ca.items.setdefault(target_key, [None, None, None, None])
        slot[target_pos] = moved
        return


class ConfigDocument:
    """A dependabot.yml tree that round-trips comments and key order.

    Only the ``updates`` sequence is ever edited; every other node is carried
    through ``dump`` as it was loaded.
    """

    def __init__(self, tree: CommentedMap, source: str = "<memory>") -> None:
        self.tree = tree
        self.source = source
        self._check_updates_node()

    @classmethod
    def load(cls, text: str, source: str = "<memory>") -> ConfigDocument:
        tree = _parse(text, source)
        if tree is None:
            # An empty file gets the same skeleton as a new one.
            return cls.template(source)
        if not isinstance(tree, CommentedMap):
            raise ParseError(f"Top level of {source} must be a mapping")
        return cls(tree, source)

    @classmethod
    def template(cls, source: str = "<template>") -> ConfigDocument:
        return cls(_parse(TEMPLATE, "template"), source)

    def _check_updates_node(self) -> None:
        node = self.tree.get(UPDATES_KEY)
        if node is not None and not isinstance(node, CommentedSeq):
            raise ParseError(f"'{UPDATES_KEY}' in {self.source} must be a sequence")

    def declared_updates(self) -> list[Update]:
        declared: list[Update] = []
        for entry in self.tree.get(UPDATES_KEY) or []:
            if not isinstance(entry, dict):
                continue
            ecosystem = entry.get("package-ecosystem")
            if not isinstance(ecosystem, str) or not ecosystem:
                continue
            directories = entry.get("directories")
            if not isinstance(directories, list):
                directories = [entry.get("directory", "/")]
            for directory in directories:
                if directory is None:
                    continue
                declared.append(Update(ecosystem=ecosystem, directory=str(directory)))
        return declared

    def append_updates(self, updates: Iterable[Update]) -> None:
        fragment = CommentedSeq(_commented(update.to_yaml()) for update in updates)
        if not fragment:
            return

        node = self.tree.get(UPDATES_KEY)
        if not node:
            self.tree[UPDATES_KEY] = fragment
        else:
            _move_trailing_comment(node, fragment)
            node.extend(fragment)

    def dump(self) -> str:
        stream = io.StringIO()
        _yaml().dump(self.tree, stream)
        return stream.getvalue()
