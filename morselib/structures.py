"""Core data structures for the Morse transcoder."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Tuple

from .errors import InvalidAudioSetting


class Symbol(Enum):
    """The three-valued Morse alphabet."""

    DOT = "."
    LINE = "-"
    WORD_GAP = "/"

    def __str__(self) -> str:
        return self.value


PATTERN_MARKS = {
    ".": Symbol.DOT,
    "-": Symbol.LINE,
    "/": Symbol.WORD_GAP,
    " ": Symbol.WORD_GAP,
}


def parse_pattern(pattern: str) -> Tuple[Symbol, ...]:
    """Turn a `.`/`-` pattern such as ``".-"`` into symbols."""

    try:
        return tuple(PATTERN_MARKS[mark] for mark in pattern)
    except KeyError as exc:
        raise ValueError(f"Unknown Morse pattern mark {exc.args[0]!r}.") from None


@dataclass(frozen=True)
class DisplayAliases:
    """Strings substituted for each symbol when rendering."""

    dot: str = "."
    line: str = "⚊"
    gap: str = " "

    def alias_for(self, symbol: Symbol) -> str:
        if symbol is Symbol.DOT:
            return self.dot
        if symbol is Symbol.LINE:
            return self.line
        return self.gap

    def with_alias(self, kind: Symbol | str, value: str) -> "DisplayAliases":
        """Return a copy with the alias for ``kind`` replaced."""

        field_name = ALIAS_FIELDS.get(kind if isinstance(kind, Symbol) else kind.strip().lower())
        if field_name is None:
            raise ValueError(
                f"Unknown display alias kind {kind!r}. Use dot, line or gap."
            )
        return replace(self, **{field_name: value})


ALIAS_FIELDS = {
    Symbol.DOT: "dot",
    Symbol.LINE: "line",
    Symbol.WORD_GAP: "gap",
    "dot": "dot",
    "line": "line",
    "dash": "line",
    "gap": "gap",
    "whitespace": "gap",
    "space": "gap",
}


@dataclass(frozen=True)
class AudioSettings:
    """Tone frequency in Hz and playback speed factor."""

    frequency: float = 450.0
    speed: float = 1.0

    def __post_init__(self) -> None:
        for name in ("frequency", "speed"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or isinstance(value, bool) or value <= 0:
                raise InvalidAudioSetting(
                    f"Audio {name} must be a positive number, got {value!r}."
                )

    def seconds(self, duration_units: int) -> float:
        """Realised duration of ``duration_units`` timing units."""

        return duration_units / self.speed
