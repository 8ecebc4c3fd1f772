"""Padding strategies for rendering revision counters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import InvalidStrategy

DEFAULT_WIDTH = 3


class StrategyKind(str, Enum):
    """Supported revision numbering schemes."""

    NUMERICAL = "numerical"
    ALPHABETICAL = "alphabetical"


@dataclass(frozen=True)
class PaddingStrategy:
    """
    A numbering policy for the revision counter.

    `numerical` renders the counter as-is, `alphabetical` zero-pads it to
    `width` digits so that revision tags also sort lexically.
    """

    kind: StrategyKind = StrategyKind.NUMERICAL
    width: int = 0

    @classmethod
    def numerical(cls) -> PaddingStrategy:
        return cls(StrategyKind.NUMERICAL, 0)

    @classmethod
    def alphabetical(cls, width: int = DEFAULT_WIDTH) -> PaddingStrategy:
        return cls(StrategyKind.ALPHABETICAL, width)

    def render(self, revision: int) -> str:
        return str(revision).rjust(self.width, "0")

    def __str__(self) -> str:
        if self.kind == StrategyKind.ALPHABETICAL:
            return f"{self.kind.value}:{self.width}"
        return self.kind.value


def parse_strategy(descriptor: str) -> PaddingStrategy:
    """
    Parses a strategy descriptor.

    Grammar: "" | "numerical" | "alphabetical" | "alphabetical:<width>".
    An empty descriptor means numerical.
    """
    token, sep, width = (descriptor or "").strip().partition(":")
    token = token.strip().lower()

    if token in ("", StrategyKind.NUMERICAL.value):
        if sep:
            raise InvalidStrategy(f"Numerical strategy takes no width: {descriptor!r}")
        return PaddingStrategy.numerical()

    if token == StrategyKind.ALPHABETICAL.value:
        width = width.strip()
        if not width:
            return PaddingStrategy.alphabetical()
        if not (width.isascii() and width.isdigit()):
            raise InvalidStrategy(f"Invalid alphabetical width: {width!r}")
        return PaddingStrategy.alphabetical(int(width))

    raise InvalidStrategy(f"Unknown revision strategy: {descriptor!r}")
