"""High-level orchestration of text, bitstream and rendered Morse Code."""

from __future__ import annotations

import pprint
import sys
from dataclasses import dataclass
from typing import Any, Iterator, List, Sequence, Tuple

from .audio import (
    AudioCommand,
    AudioSink,
    SoundDeviceSink,
    document_schedule,
    play_schedule,
    total_units,
)
from .bitstream import encode_document, split_document
from .languages import CharacterCodec, build_codec
from .structures import AudioSettings, DisplayAliases, Symbol
from .units import CharacterUnit

UNIT_SEPARATOR = "   "


@dataclass
class TranscodeSummary:
    """Report describing a transcoded document."""

    language: str
    total_units: int
    total_words: int
    total_symbols: int
    duration_units: int
    duration_seconds: float
    frequency: float
    speed: float


class Transcoder:
    """Ordered sequence of character units bound to one language codec.

    The codec and language label are fixed at construction. Display aliases
    and audio settings may be changed at any time and only affect
    :meth:`render` and :meth:`play`.
    """

    def __init__(
        self,
        language: str | None = None,
        *,
        codec: CharacterCodec | None = None,
        aliases: DisplayAliases | None = None,
        audio: AudioSettings | None = None,
        debug: bool = False,
    ) -> None:
        if codec is None:
            codec = build_codec(language)
            language = codec.language
        self._codec = codec
        self._language = language or codec.language
        self._units: List[CharacterUnit] = []
        self.aliases = aliases or DisplayAliases()
        self.audio = audio or AudioSettings()
        self.debug = debug

    @classmethod
    def new(cls, language: str, codec: CharacterCodec, **options: Any) -> "Transcoder":
        """Create an empty transcoder for a custom language."""

        return cls(language, codec=codec, **options)

    @classmethod
    def from_text(cls, text: str, language: str | None = None, **options: Any) -> "Transcoder":
        transcoder = cls(language, **options)
        transcoder.parse_text(text)
        return transcoder

    @classmethod
    def from_bits(cls, bits: str, language: str | None = None, **options: Any) -> "Transcoder":
        transcoder = cls(language, **options)
        transcoder.parse_bits(bits)
        return transcoder

    @property
    def language(self) -> str:
        return self._language

    @property
    def codec(self) -> CharacterCodec:
        return self._codec

    @property
    def units(self) -> Tuple[CharacterUnit, ...]:
        return tuple(self._units)

    def __len__(self) -> int:
        return len(self._units)

    def __iter__(self) -> Iterator[CharacterUnit]:
        return iter(tuple(self._units))

    def __str__(self) -> str:
        return self.render()

    def parse_text(self, text: str) -> None:
        """Append the characters of ``text``; nothing is appended on failure."""

        units = [
            CharacterUnit.from_char(
                character, self._codec, position=position, language=self._language
            )
            for position, character in enumerate(text)
        ]
        self._units.extend(units)
        self._log_debug("parse.text", {"characters": len(text), "units": len(self._units)})

    def parse_bits(self, bits: str) -> None:
        """Append the characters encoded in ``bits``; nothing is appended on failure."""

        tokens = split_document(bits)
        units = [
            CharacterUnit.from_bits(
                token, self._codec, offset=offset, language=self._language
            )
            for offset, token in tokens
        ]
        self._units.extend(units)
        self._log_debug("parse.bits", {"tokens": [token for _, token in tokens]})

    def to_text(self) -> str:
        return "".join(unit.character for unit in self._units)

    def to_bits(self) -> str:
        return encode_document(unit.symbols for unit in self._units)

    def render(self, aliases: DisplayAliases | None = None) -> str:
        aliases = aliases or self.aliases
        return UNIT_SEPARATOR.join(unit.render(aliases) for unit in self._units)

    def set_display_alias(self, kind: Symbol | str, value: str) -> None:
        self.aliases = self.aliases.with_alias(kind, value)

    def dot_as(self, value: str) -> None:
        self.set_display_alias(Symbol.DOT, value)

    def line_as(self, value: str) -> None:
        self.set_display_alias(Symbol.LINE, value)

    def gap_as(self, value: str) -> None:
        self.set_display_alias(Symbol.WORD_GAP, value)

    def set_audio_frequency(self, frequency_hz: float) -> None:
        self.audio = AudioSettings(frequency=frequency_hz, speed=self.audio.speed)

    def set_audio_speed(self, speed: float) -> None:
        self.audio = AudioSettings(frequency=self.audio.frequency, speed=speed)

    def schedule(self, audio: AudioSettings | None = None) -> List[AudioCommand]:
        return document_schedule((unit.symbols for unit in self._units), audio or self.audio)

    def play(self, sink: AudioSink | None = None, audio: AudioSettings | None = None) -> None:
        """Play the document, blocking until the last tone has finished."""

        audio = audio or self.audio
        sink = sink or SoundDeviceSink(debug=self.debug)
        commands = self.schedule(audio)
        self._log_debug(
            "play.start",
            {"commands": len(commands), "seconds": audio.seconds(total_units(commands))},
        )
        play_schedule(commands, sink, audio)

    def summary(self) -> TranscodeSummary:
        units = total_units(self.schedule())
        return TranscodeSummary(
            language=self._language,
            total_units=len(self._units),
            total_words=count_words(self._units),
            total_symbols=sum(len(unit.symbols) for unit in self._units),
            duration_units=units,
            duration_seconds=self.audio.seconds(units),
            frequency=self.audio.frequency,
            speed=self.audio.speed,
        )

    def _log_debug(self, label: str, payload: Any) -> None:
        """Emit structured debug information when enabled."""

        if not self.debug:
            return
        print(f"[morselib][debug] {label}: {pprint.pformat(payload)}", file=sys.stderr)


def count_words(units: Sequence[CharacterUnit]) -> int:
    words = 0
    in_word = False
    for unit in units:
        if unit.is_word_gap:
            in_word = False
        elif not in_word:
            in_word = True
            words += 1
    return words
