"""Audio playback of symbol sequences."""

from __future__ import annotations

import pprint
import sys
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Sequence

from .errors import AudioDeviceError
from .structures import AudioSettings, Symbol

DOT_UNITS = 1
LINE_UNITS = 3
WORD_GAP_UNITS = 1
SYMBOL_GAP_UNITS = 1
CHARACTER_GAP_UNITS = 3

TONE = "tone"
SILENCE = "silence"


@dataclass(frozen=True)
class AudioCommand:
    """A single tone or silence, measured in timing units."""

    kind: str
    duration_units: int
    frequency: Optional[float] = None


class AudioSink(ABC):
    """Output device accepting timed tone and silence commands."""

    @abstractmethod
    def emit_tone(self, frequency_hz: float, duration_units: int, speed: float) -> None:
        """Play a tone for ``duration_units / speed`` seconds, blocking until done."""

    @abstractmethod
    def emit_silence(self, duration_units: int, speed: float = 1.0) -> None:
        """Stay silent for ``duration_units / speed`` seconds."""


class RecordingSink(AudioSink):
    """A sink that records commands instead of producing sound (useful for testing)."""

    def __init__(self) -> None:
        self.commands: List[AudioCommand] = []
        self.seconds: float = 0.0

    def emit_tone(self, frequency_hz: float, duration_units: int, speed: float) -> None:
        self.commands.append(AudioCommand(TONE, duration_units, frequency_hz))
        self.seconds += duration_units / speed

    def emit_silence(self, duration_units: int, speed: float = 1.0) -> None:
        self.commands.append(AudioCommand(SILENCE, duration_units))
        self.seconds += duration_units / speed


class SoundDeviceSink(AudioSink):
    """Sink that plays sine tones on the default output device via sounddevice."""

    SAMPLE_RATE = 44100
    AMPLITUDE = 0.2

    def __init__(
        self,
        *,
        sample_rate: int | None = None,
        amplitude: float | None = None,
        sleep: Callable[[float], None] = time.sleep,
        debug: bool = False,
    ) -> None:
        self.sample_rate = sample_rate or self.SAMPLE_RATE
        self.amplitude = self.AMPLITUDE if amplitude is None else amplitude
        self.debug = debug
        self._sleep = sleep
        self._device: Any = None

    def _load_device(self) -> Any:
        if self._device is not None:
            return self._device
        try:
            import sounddevice  # type: ignore
        except (ImportError, OSError) as exc:
            raise AudioDeviceError(
                "Audio output unavailable. Install sounddevice and the PortAudio "
                f"library to play Morse Code ({exc})."
            ) from exc
        self._device = sounddevice
        return sounddevice

    def tone_samples(self, frequency_hz: float, seconds: float) -> Any:
        import numpy as np

        t = np.linspace(0, seconds, int(self.sample_rate * seconds), endpoint=False)
        return (self.amplitude * np.sin(2 * np.pi * frequency_hz * t)).astype(np.float32)

    def emit_tone(self, frequency_hz: float, duration_units: int, speed: float) -> None:
        sd = self._load_device()
        seconds = duration_units / speed
        samples = self.tone_samples(frequency_hz, seconds)
        self._log_debug(
            "audio.tone",
            {"frequency": frequency_hz, "units": duration_units, "seconds": seconds},
        )
        try:
            sd.play(samples, samplerate=self.sample_rate, blocking=True)
        except Exception as exc:
            raise AudioDeviceError(f"Could not play tone on the output device: {exc}") from exc

    def emit_silence(self, duration_units: int, speed: float = 1.0) -> None:
        seconds = duration_units / speed
        self._log_debug("audio.silence", {"units": duration_units, "seconds": seconds})
        self._sleep(seconds)

    def _log_debug(self, label: str, payload: Any) -> None:
        if not self.debug:
            return
        print(f"[morselib][debug] {label}: {pprint.pformat(payload)}", file=sys.stderr)


def unit_schedule(symbols: Sequence[Symbol], settings: AudioSettings) -> List[AudioCommand]:
    """Tone and silence commands for one character, gaps between symbols included."""

    commands: List[AudioCommand] = []
    for index, symbol in enumerate(symbols):
        if index:
            commands.append(AudioCommand(SILENCE, SYMBOL_GAP_UNITS))
        if symbol is Symbol.DOT:
            commands.append(AudioCommand(TONE, DOT_UNITS, settings.frequency))
        elif symbol is Symbol.LINE:
            commands.append(AudioCommand(TONE, LINE_UNITS, settings.frequency))
        else:
            commands.append(AudioCommand(SILENCE, WORD_GAP_UNITS))
    return commands


def document_schedule(
    groups: Iterable[Sequence[Symbol]],
    settings: AudioSettings,
) -> List[AudioCommand]:
    commands: List[AudioCommand] = []
    for index, symbols in enumerate(groups):
        if index:
            commands.append(AudioCommand(SILENCE, CHARACTER_GAP_UNITS))
        commands.extend(unit_schedule(symbols, settings))
    return commands


def total_units(commands: Iterable[AudioCommand]) -> int:
    return sum(command.duration_units for command in commands)


def play_schedule(
    commands: Iterable[AudioCommand],
    sink: AudioSink,
    settings: AudioSettings,
) -> None:
    """Send each command to ``sink`` in order; blocks until the last one ends."""

    for command in commands:
        if command.kind == TONE:
            sink.emit_tone(
                command.frequency or settings.frequency,
                command.duration_units,
                settings.speed,
            )
        else:
            sink.emit_silence(command.duration_units, settings.speed)
