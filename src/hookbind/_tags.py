from __future__ import annotations

from typing import Any


class TagRegistry:
    """Groups service ids under tags, keeping the order in which ids were tagged."""

    def __init__(self) -> None:
        self._tags: dict[str, list[Any]] = {}

    def tag(self, service_id: Any, tags: tuple[str, ...] | list[str]) -> None:
        for tag in tags:
            ids = self._tags.setdefault(tag, [])
            if service_id not in ids:
                ids.append(service_id)

    def ids_for(self, tag: str) -> list[Any]:
        return list(self._tags.get(tag, ()))

    def all(self) -> dict[str, list[Any]]:
        return {tag: list(ids) for tag, ids in self._tags.items()}
