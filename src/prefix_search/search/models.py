"""Search data models."""

from dataclasses import dataclass, field
from typing import Literal


MatchMode = Literal["all", "any"]
MATCH_MODES: tuple[str, ...] = ("all", "any")


@dataclass
class WordStats:
    """Occurrence stats for one normalized word within a single text."""

    weight: int
    count: int = 1


@dataclass
class WordEntry:
    """A normalized word held by the collection.

    ``weight`` is the word length recorded on first insertion and is never
    recomputed. ``count`` is the number of add operations that contributed
    the word; the entry is dropped when it reaches zero.
    """

    weight: int
    count: int = 1
    keys: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Expansion:
    """A collection word reached from a query token.

    ``orig`` is the query token the word was expanded from. An entry whose
    word equals its ``orig`` is the exact-match seed for that token.
    """

    orig: str
    weight: int
    count: int = 1


def resolve_match_mode(mode: str | None, default: MatchMode = "all") -> MatchMode:
    """Return a validated match mode, falling back to ``default`` when unset."""

    if mode is None:
        return default
    normalized = mode.lower()
    if normalized not in MATCH_MODES:
        msg = f"Unknown match mode '{mode}'. Available: {list(MATCH_MODES)}"
        raise ValueError(msg)
    return normalized  # type: ignore[return-value]
