"""Membership over a service's declared feature tags.

INVARIANT: Membership is an exact, case-sensitive string match.
Unknown tags are simply absent.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from apienvelope.domain.types import Feature


class FeatureSet:
    """Immutable, ordered collection of declared feature tags."""

    __slots__ = ("_lookup", "_tags")

    def __init__(self, tags: Iterable[str] = ()) -> None:
        self._tags: tuple[str, ...] = tuple(tags)
        self._lookup = frozenset(self._tags)

    def has(self, tag: Feature | str) -> bool:
        # StrEnum members are str, so str() yields the canonical value
        return str(tag) in self._lookup

    @property
    def tags(self) -> tuple[str, ...]:
        return self._tags

    @property
    def legacy_data_response(self) -> bool:
        return self.has(Feature.LEGACY_DATA_RESPONSE)

    def __contains__(self, tag: object) -> bool:
        return isinstance(tag, str) and self.has(tag)

    def __iter__(self) -> Iterator[str]:
        return iter(self._tags)

    def __len__(self) -> int:
        return len(self._tags)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FeatureSet):
            return self._tags == other._tags
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._tags)

    def __repr__(self) -> str:
        return f"FeatureSet({list(self._tags)!r})"
