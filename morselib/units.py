"""Character units: one character paired with its Morse symbols."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .audio import AudioCommand, unit_schedule
from .bitstream import decode_symbols, encode_symbols
from .errors import UnrecognizedSequence, UnsupportedCharacter
from .languages import CharacterCodec
from .structures import AudioSettings, DisplayAliases, Symbol

DEFAULT_ALIASES = DisplayAliases()
DEFAULT_AUDIO = AudioSettings()


@dataclass(frozen=True)
class CharacterUnit:
    """A transcoded character together with its symbol sequence."""

    character: str
    symbols: Tuple[Symbol, ...]
    language: str

    @classmethod
    def from_char(
        cls,
        character: str,
        codec: CharacterCodec,
        *,
        position: Optional[int] = None,
        language: Optional[str] = None,
    ) -> "CharacterUnit":
        language = language or codec.language
        try:
            symbols = tuple(codec.encode(character))
        except UnsupportedCharacter as exc:
            if exc.language == language and (position is None or exc.position is not None):
                raise
            raise UnsupportedCharacter(
                character,
                language=language,
                position=position if exc.position is None else exc.position,
            ) from exc
        if not symbols:
            raise UnsupportedCharacter(character, language=language, position=position)
        # Stored in the codec's canonical form, so "S" is kept as "s".
        return cls(
            character=_decode(codec, symbols, language),
            symbols=symbols,
            language=language,
        )

    @classmethod
    def from_symbols(
        cls,
        symbols: Sequence[Symbol],
        codec: CharacterCodec,
        *,
        language: Optional[str] = None,
    ) -> "CharacterUnit":
        language = language or codec.language
        symbols = tuple(symbols)
        return cls(
            character=_decode(codec, symbols, language),
            symbols=symbols,
            language=language,
        )

    @classmethod
    def from_bits(
        cls,
        token: str,
        codec: CharacterCodec,
        *,
        offset: int = 0,
        language: Optional[str] = None,
    ) -> "CharacterUnit":
        return cls.from_symbols(decode_symbols(token, offset=offset), codec, language=language)

    @property
    def is_word_gap(self) -> bool:
        return self.symbols == (Symbol.WORD_GAP,)

    def to_bits(self) -> str:
        return encode_symbols(self.symbols)

    def render(self, aliases: DisplayAliases = DEFAULT_ALIASES) -> str:
        # Symbols are joined by one plain space whatever the alias length.
        return " ".join(aliases.alias_for(symbol) for symbol in self.symbols)

    def timeline(self, settings: AudioSettings = DEFAULT_AUDIO) -> List[AudioCommand]:
        return unit_schedule(self.symbols, settings)

    def __str__(self) -> str:
        return self.render()


def _decode(codec: CharacterCodec, symbols: Tuple[Symbol, ...], language: str) -> str:
    try:
        return codec.decode(symbols)
    except UnrecognizedSequence as exc:
        if exc.language == language:
            raise
        raise UnrecognizedSequence(symbols, language=language) from exc
