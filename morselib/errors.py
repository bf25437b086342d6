"""Error definitions for the Morse transcoder."""

from __future__ import annotations

from enum import Enum, auto
from typing import Optional, Sequence


class ErrorCategory(Enum):
    """Categorises runtime errors so callers can map them to exit codes."""

    ARGUMENT = auto()
    CONFIGURATION = auto()
    ENCODE = auto()
    DECODE = auto()
    BITSTREAM = auto()
    AUDIO = auto()


class MorseError(Exception):
    """Base exception for all custom errors."""

    category: ErrorCategory = ErrorCategory.ARGUMENT


class UnsupportedCharacter(MorseError):
    """Raised when a character is outside the active language's alphabet."""

    category = ErrorCategory.ENCODE

    def __init__(
        self,
        character: str,
        *,
        language: str,
        position: Optional[int] = None,
    ) -> None:
        self.character = character
        self.language = language
        self.position = position
        where = f" at position {position}" if position is not None else ""
        super().__init__(
            f"Character {character!r}{where} cannot be encoded in {language} Morse Code."
        )


class UnrecognizedSequence(MorseError):
    """Raised when a symbol sequence matches no entry of the language table."""

    category = ErrorCategory.DECODE

    def __init__(self, symbols: Sequence[object], *, language: str) -> None:
        self.symbols = tuple(symbols)
        self.language = language
        rendered = "".join(str(symbol) for symbol in self.symbols) or "<empty>"
        super().__init__(
            f"Symbol sequence {rendered} is not defined in {language} Morse Code."
        )


class MalformedBitstream(MorseError):
    """Raised when a bitstream token is neither a dot, a line nor a valid gap."""

    category = ErrorCategory.BITSTREAM

    def __init__(self, token: str, *, offset: int, reason: str | None = None) -> None:
        self.token = token
        self.offset = offset
        message = f"Malformed bitstream token {token!r} at offset {offset}."
        if reason:
            message = f"{message} {reason}"
        super().__init__(message)


class UnknownLanguage(MorseError):
    """Raised when no codec is registered under the requested language name."""

    category = ErrorCategory.ARGUMENT


class InvalidCodecTable(MorseError):
    """Raised when a mapping table is not a one-to-one character mapping."""

    category = ErrorCategory.ARGUMENT


class AudioDeviceError(MorseError):
    """Raised when the audio output device cannot be acquired or driven."""

    category = ErrorCategory.AUDIO


class ConfigurationError(MorseError):
    """Raised when configuration sources cannot be read or validated."""

    category = ErrorCategory.CONFIGURATION


class InvalidAudioSetting(MorseError):
    """Raised when an audio frequency or speed is not a positive number."""

    category = ErrorCategory.ARGUMENT
