"""Command line interface for the Morse transcoder."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from typing import Iterable, Optional, TextIO

from .audio import AudioSink
from .configuration import audio_settings, display_aliases, get_settings
from .errors import (
    AudioDeviceError,
    ConfigurationError,
    ErrorCategory,
    MorseError,
)
from .structures import AudioSettings, DisplayAliases
from .transcoder import TranscodeSummary, Transcoder

EXIT_CODES = {
    ErrorCategory.AUDIO: 3,
}
OUTPUT_FORMATS = ("bits", "render", "text")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="morselib",
        description="Convert text to Morse Code bitstreams, renderings and sound, and back.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="Text to encode, or a bitstream with --decode. Reads stdin when omitted or '-'.",
    )
    parser.add_argument(
        "-d",
        "--decode",
        action="store_true",
        help="Treat the input as a bitstream of 0 and 1 digits.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=OUTPUT_FORMATS,
        help="Output form (default: bits when encoding, text when decoding).",
    )
    parser.add_argument(
        "-l",
        "--language",
        help="Morse language name (default: International).",
    )
    parser.add_argument("--dot", help="Rendered form of a dot.")
    parser.add_argument("--line", help="Rendered form of a line.")
    parser.add_argument("--gap", help="Rendered form of a word gap.")
    parser.add_argument(
        "--frequency",
        type=float,
        help="Tone frequency in Hz used with --play (default: 450).",
    )
    parser.add_argument(
        "--speed",
        type=float,
        help="Playback speed factor; 2 plays twice as fast (default: 1).",
    )
    parser.add_argument(
        "-p",
        "--play",
        action="store_true",
        help="Play the Morse Code on the default audio device after printing it.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show a summary of the transcoded document.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print debug traces to stderr.",
    )
    return parser


def read_input(value: str, stream: TextIO) -> str:
    if value == "-":
        return stream.read().rstrip("\r\n")
    return value


def execute_transcoding(
    *,
    source: str,
    decode: bool,
    output_format: str | None,
    language: str | None,
    aliases: DisplayAliases,
    audio: AudioSettings,
    play: bool,
    debug: bool,
    sink: AudioSink | None = None,
) -> tuple[int, str | None, TranscodeSummary | None, str | None]:
    """Transcode ``source`` and return the exit code, output, summary, and message."""

    try:
        if decode:
            transcoder = Transcoder.from_bits(
                source.strip(), language, aliases=aliases, audio=audio, debug=debug
            )
        else:
            transcoder = Transcoder.from_text(
                source, language, aliases=aliases, audio=audio, debug=debug
            )
    except MorseError as exc:
        return EXIT_CODES.get(exc.category, 1), None, None, str(exc)

    output_format = output_format or ("text" if decode else "bits")
    if output_format == "bits":
        output = transcoder.to_bits()
    elif output_format == "render":
        output = transcoder.render()
    else:
        output = transcoder.to_text()

    summary = transcoder.summary()
    if not play:
        return 0, output, summary, None

    try:
        transcoder.play(sink)
    except AudioDeviceError as exc:
        return EXIT_CODES[ErrorCategory.AUDIO], output, summary, str(exc)
    except KeyboardInterrupt:
        return 2, output, summary, "Playback interrupted by user."
    return 0, output, summary, None


def print_summary(summary: TranscodeSummary) -> None:
    """Output a short report on the transcoded document."""

    print("\nMorse Code summary.", file=sys.stderr)
    print(f"  Language:        {summary.language}", file=sys.stderr)
    print(
        f"  Characters:      {summary.total_units} "
        f"({summary.total_words} words, {summary.total_symbols} symbols)",
        file=sys.stderr,
    )
    print(
        f"  Duration:        {summary.duration_units} units "
        f"({summary.duration_seconds:.2f} seconds at speed {summary.speed:g})",
        file=sys.stderr,
    )
    print(f"  Tone frequency:  {summary.frequency:g} Hz", file=sys.stderr)


def main(argv: Optional[Iterable[str]] = None, *, sink: AudioSink | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        settings = get_settings()
    except ConfigurationError as exc:
        print(exc, file=sys.stderr)
        return 1

    aliases = display_aliases(settings)
    for kind in ("dot", "line", "gap"):
        value = getattr(args, kind)
        if value is not None:
            aliases = aliases.with_alias(kind, value)

    try:
        audio = audio_settings(settings)
        if args.frequency is not None:
            audio = replace(audio, frequency=args.frequency)
        if args.speed is not None:
            audio = replace(audio, speed=args.speed)
    except MorseError as exc:
        parser.error(str(exc))

    try:
        source = read_input(args.input, sys.stdin)
    except KeyboardInterrupt:
        return 2

    exit_code, output, summary, message = execute_transcoding(
        source=source,
        decode=args.decode,
        output_format=args.format,
        language=args.language or settings.MORSE_LANGUAGE,
        aliases=aliases,
        audio=audio,
        play=args.play,
        debug=bool(args.debug or settings.MORSE_DEBUG),
        sink=sink,
    )

    if output is not None:
        print(output)
    if message:
        print(message, file=sys.stderr)
    if summary and args.verbose:
        print_summary(summary)
    return exit_code


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
