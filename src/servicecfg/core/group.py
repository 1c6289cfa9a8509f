# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""PropertyGroup — a bag of properties related by a common path prefix.

Keys are stored relative to the group's path. Given the properties::

    oracle.connection.evildb.url=...
    oracle.connection.evildb.pass=...
    oracle.connection.gooddb.url=...

collecting ``oracle.connection`` yields a group with path
``oracle.connection`` and keys ``evildb.url``, ``evildb.pass`` and
``gooddb.url``. Breaking that group down by its next path segment yields
two groups, ``oracle.connection.evildb`` (``url``, ``pass``) and
``oracle.connection.gooddb`` (``url``).

Break-out and break-down always build fresh groups; they never share
storage with the group they were derived from.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import structlog

from servicecfg.core.accessor import TypedAccessor

logger = structlog.get_logger("servicecfg.core.group")

PASSWORD_SLUGS: tuple[str, ...] = ("pwd", "password", "passwd")
MASK = "**********"


def join_path(*parts: str) -> str:
    """Join path segments with dots, skipping an empty root path."""
    return ".".join(part for part in parts if part)


def _as_prefix(path: str) -> str:
    return path if path.endswith(".") else path + "."


class PropertyGroup(TypedAccessor):
    """Properties sharing a path prefix, keyed relative to that prefix."""

    def __init__(self, path: str, entries: Mapping[str, str | None] | None = None) -> None:
        self._path = path
        self._entries: dict[str, str | None] = dict(entries) if entries else {}

    @property
    def path(self) -> str:
        return self._path

    # ------------------------------------------------------------------
    # TypedAccessor primitives
    # ------------------------------------------------------------------

    def get_property_value(self, name: str) -> str | None:
        return self._entries.get(name)

    def contains(self, name: str) -> bool:
        return name in self._entries

    def contains_value(self, name: str) -> bool:
        return self._entries.get(name) is not None

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add(self, name: str, value: str | None) -> None:
        self._entries[name] = value

    def add_all(self, entries: Mapping[str, str | None]) -> None:
        self._entries.update(entries)

    def set_all(self, entries: Mapping[str, str | None]) -> dict[str, str | None]:
        """Replace the contents of this group, returning the previous contents."""
        previous = self._entries
        self._entries = dict(entries)
        return previous

    # ------------------------------------------------------------------
    # Views (always copies)
    # ------------------------------------------------------------------

    def key_set(self) -> set[str]:
        return set(self._entries)

    def values(self) -> list[str | None]:
        return list(self._entries.values())

    def to_map(self) -> dict[str, str | None]:
        return dict(self._entries)

    def size(self) -> int:
        return len(self._entries)

    def is_empty(self) -> bool:
        return not self._entries

    # ------------------------------------------------------------------
    # Grouping
    # ------------------------------------------------------------------

    def break_out(self, path: str) -> PropertyGroup | None:
        """Break out the properties under *path* into a new group.

        Given a group at ``my.property.tree`` holding ``pool.db.leaf7`` and
        ``pool.cb.leaf8``, ``break_out("pool.db")`` returns a group at
        ``my.property.tree.pool.db`` holding ``leaf7``.

        Returns None when no key falls under *path*.
        """
        prefix = _as_prefix(path)
        group: PropertyGroup | None = None
        for key, value in self._entries.items():
            if not key.startswith(prefix):
                continue
            if group is None:
                group = PropertyGroup(join_path(self._path, prefix[:-1]))
            group.add(key[len(prefix) :], value)
        return group

    def break_down(self, prefix: str | None = None) -> dict[str, PropertyGroup]:
        """Partition the properties by their next path segment.

        Each key ``segment.rest`` lands in the group keyed ``segment`` (path
        ``<self.path>.segment``) as ``rest``. With a *prefix*, only keys under
        ``prefix.`` take part and the prefix is stripped before partitioning;
        the resulting paths are ``<self.path>.<prefix>.segment``.

        Keys without a further segment cannot be grouped and are skipped.
        """
        if prefix is None:
            base, candidates = self._path, self._entries.items()
        else:
            trunk = _as_prefix(prefix)
            base = join_path(self._path, trunk[:-1])
            candidates = ((key[len(trunk) :], value) for key, value in self._entries.items() if key.startswith(trunk))
        return self._partition(base, candidates)

    def break_down_groups(self, prefix: str | None = None) -> list[PropertyGroup]:
        """Like :meth:`break_down`, returning only the groups, ordered by path."""
        return sorted(self.break_down(prefix).values(), key=lambda group: group.path)

    @staticmethod
    def _partition(base: str, entries: Iterable[tuple[str, str | None]]) -> dict[str, PropertyGroup]:
        groups: dict[str, PropertyGroup] = {}
        skipped = 0
        for key, value in entries:
            segment, dot, rest = key.partition(".")
            if not dot:
                skipped += 1
                continue
            group = groups.get(segment)
            if group is None:
                group = groups[segment] = PropertyGroup(join_path(base, segment))
            group.add(rest, value)
        if skipped:
            logger.debug("break_down_skipped_leaf_keys", path=base, count=skipped)
        return groups

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def to_string(self, separator: str = "  ") -> str:
        """Render ``path.key=value`` lines, masking password-like keys."""
        lines = []
        for key in sorted(self._entries):
            value = MASK if _is_secret(key) else self._entries[key]
            if value is None:
                value = "null"
            lines.append(f"{join_path(self._path, key)}={value}")
        return separator.join(lines)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"PropertyGroup(path={self._path!r}, size={len(self._entries)})"

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, PropertyGroup):
            return NotImplemented
        return self._path == other._path and self._entries == other._entries

    __hash__ = None  # type: ignore[assignment]


def _is_secret(key: str) -> bool:
    return any(slug in key for slug in PASSWORD_SLUGS)
