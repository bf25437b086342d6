"""Character codec abstractions and the built-in language tables."""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Callable, Dict, Iterable, List, Mapping, Sequence, Tuple

from .errors import (
    InvalidCodecTable,
    MorseError,
    UnknownLanguage,
    UnrecognizedSequence,
    UnsupportedCharacter,
)
from .structures import Symbol, parse_pattern

DEFAULT_LANGUAGE = "International"

INTERNATIONAL_PATTERNS: Mapping[str, str] = MappingProxyType(
    {
        "a": ".-",
        "b": "-...",
        "c": "-.-.",
        "d": "-..",
        "e": ".",
        "f": "..-.",
        "g": "--.",
        "h": "....",
        "i": "..",
        "j": ".---",
        "k": "-.-",
        "l": ".-..",
        "m": "--",
        "n": "-.",
        "o": "---",
        "p": ".--.",
        "q": "--.-",
        "r": ".-.",
        "s": "...",
        "t": "-",
        "u": "..-",
        "v": "...-",
        "w": ".--",
        "x": "-..-",
        "y": "-.--",
        "z": "--..",
        "1": ".----",
        "2": "..---",
        "3": "...--",
        "4": "....-",
        "5": ".....",
        "6": "-....",
        "7": "--...",
        "8": "---..",
        "9": "----.",
        "0": "-----",
        " ": "/",
    }
)


class CharacterCodec(ABC):
    """Maps single characters to symbol sequences and back for one language."""

    language: str = "Custom"

    @abstractmethod
    def encode(self, character: str) -> Tuple[Symbol, ...]:
        """Return the non-empty symbol sequence for ``character``."""

    @abstractmethod
    def decode(self, symbols: Sequence[Symbol]) -> str:
        """Return the character represented by ``symbols``."""


class TableCodec(CharacterCodec):
    """Codec backed by a closed, one-to-one character table."""

    def __init__(
        self,
        table: Mapping[str, str | Sequence[Symbol]],
        *,
        language: str,
        case_sensitive: bool = False,
    ) -> None:
        self.language = language
        self.case_sensitive = case_sensitive
        encode_map: Dict[str, Tuple[Symbol, ...]] = {}
        decode_map: Dict[Tuple[Symbol, ...], str] = {}

        for character, pattern in table.items():
            if len(character) != 1:
                raise InvalidCodecTable(
                    f"{language} table keys must be single characters, got {character!r}."
                )
            key = self._normalise(character)
            try:
                symbols = (
                    parse_pattern(pattern) if isinstance(pattern, str) else tuple(pattern)
                )
            except ValueError as exc:
                raise InvalidCodecTable(f"{language} entry {character!r}: {exc}") from exc
            if not symbols:
                raise InvalidCodecTable(
                    f"{language} entry {character!r} has an empty symbol sequence."
                )
            if Symbol.WORD_GAP in symbols and len(symbols) > 1:
                raise InvalidCodecTable(
                    f"{language} entry {character!r} mixes a word gap with other symbols."
                )
            owner = decode_map.get(symbols)
            if owner is not None and owner != key:
                raise InvalidCodecTable(
                    f"{language} entries {owner!r} and {key!r} share the same sequence."
                )
            previous = encode_map.get(key)
            if previous is not None and previous != symbols:
                raise InvalidCodecTable(
                    f"{language} entry {key!r} is defined twice with different sequences."
                )
            encode_map[key] = symbols
            decode_map[symbols] = key

        self._encode_map: Mapping[str, Tuple[Symbol, ...]] = MappingProxyType(encode_map)
        self._decode_map: Mapping[Tuple[Symbol, ...], str] = MappingProxyType(decode_map)

    def _normalise(self, character: str) -> str:
        if self.case_sensitive:
            return character
        # Fold only simple case pairs; U+212A (Kelvin sign) must not become "k".
        lowered = character.lower()
        if len(lowered) == 1 and lowered.upper() == character:
            return lowered
        return character

    @property
    def alphabet(self) -> List[str]:
        return list(self._encode_map)

    def encode(self, character: str) -> Tuple[Symbol, ...]:
        symbols = self._encode_map.get(self._normalise(character))
        if symbols is None:
            raise UnsupportedCharacter(character, language=self.language)
        return symbols

    def decode(self, symbols: Sequence[Symbol]) -> str:
        key = tuple(symbols)
        character = self._decode_map.get(key)
        if character is None:
            raise UnrecognizedSequence(key, language=self.language)
        return character


class FunctionCodec(CharacterCodec):
    """Codec built from a pair of plain encode/decode callables.

    Lookup failures raised by the callables (``KeyError``, ``ValueError``) are
    reported as :class:`UnsupportedCharacter` or :class:`UnrecognizedSequence`
    so a custom language fails the same way the built-in tables do.
    """

    def __init__(
        self,
        encode: Callable[[str], Iterable[Symbol]],
        decode: Callable[[Sequence[Symbol]], str],
        *,
        language: str = "Custom",
    ) -> None:
        self.language = language
        self._encode = encode
        self._decode = decode

    def encode(self, character: str) -> Tuple[Symbol, ...]:
        try:
            symbols = tuple(self._encode(character))
        except MorseError:
            raise
        except (KeyError, ValueError) as exc:
            raise UnsupportedCharacter(character, language=self.language) from exc
        if not symbols:
            raise UnsupportedCharacter(character, language=self.language)
        return symbols

    def decode(self, symbols: Sequence[Symbol]) -> str:
        key = tuple(symbols)
        try:
            character = self._decode(key)
        except MorseError:
            raise
        except (KeyError, ValueError) as exc:
            raise UnrecognizedSequence(key, language=self.language) from exc
        if not isinstance(character, str) or len(character) != 1:
            raise UnrecognizedSequence(key, language=self.language)
        return character


INTERNATIONAL = TableCodec(INTERNATIONAL_PATTERNS, language=DEFAULT_LANGUAGE)

_LANGUAGES: Dict[str, Callable[[], CharacterCodec]] = {}
_ALIASES: Dict[str, str] = {}


def _key(name: str) -> str:
    return " ".join(name.strip().lower().replace("_", " ").replace("-", " ").split())


def register_language(
    name: str,
    factory: Callable[[], CharacterCodec],
    *,
    aliases: Iterable[str] = (),
) -> None:
    """Make a codec available under ``name`` (and any ``aliases``)."""

    canonical = _key(name)
    if not canonical:
        raise UnknownLanguage("Language names must not be empty.")
    _LANGUAGES[canonical] = factory
    for alias in (name, *aliases):
        _ALIASES[_key(alias)] = canonical


def available_languages() -> List[str]:
    return sorted(_LANGUAGES)


def build_codec(name: str | None) -> CharacterCodec:
    """Factory to resolve codecs by language name."""

    normalized = _key(name or DEFAULT_LANGUAGE)
    canonical = _ALIASES.get(normalized, normalized)
    factory = _LANGUAGES.get(canonical)
    if factory is None:
        known = ", ".join(available_languages())
        raise UnknownLanguage(f"Unknown Morse language '{name}'. Known languages: {known}.")
    return factory()


register_language(
    DEFAULT_LANGUAGE,
    lambda: INTERNATIONAL,
    aliases=("itu", "default", "int"),
)
