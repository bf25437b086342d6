"""Binary bitstream encoding and decoding of symbol sequences."""

from __future__ import annotations

import re
from typing import Iterable, List, Sequence, Tuple

from .errors import MalformedBitstream
from .structures import Symbol

DOT_BITS = "1"
LINE_BITS = "111"
WORD_GAP_BITS = "0"
SYMBOL_GAP = "0"
CHARACTER_GAP = "000"

# A space unit plus the character gap that follows it.
SPACE_STRIDE = len(WORD_GAP_BITS) + len(CHARACTER_GAP)

_SYMBOL_BITS = {
    Symbol.DOT: DOT_BITS,
    Symbol.LINE: LINE_BITS,
    Symbol.WORD_GAP: WORD_GAP_BITS,
}
_BITS_SYMBOL = {
    DOT_BITS: Symbol.DOT,
    LINE_BITS: Symbol.LINE,
}

RUN_PATTERN = re.compile(r"0+|1+")
INVALID_DIGIT = re.compile(r"[^01]")


def encode_symbols(symbols: Iterable[Symbol]) -> str:
    """Encode one character's symbols, separated by a one-unit gap."""

    return SYMBOL_GAP.join(_SYMBOL_BITS[symbol] for symbol in symbols)


def encode_document(groups: Iterable[Sequence[Symbol]]) -> str:
    """Encode consecutive characters separated by three-unit gaps."""

    return CHARACTER_GAP.join(encode_symbols(group) for group in groups)


def decode_symbols(token: str, *, offset: int = 0) -> Tuple[Symbol, ...]:
    """Decode one character token such as ``"10111"`` into symbols.

    The empty token decodes to the empty sequence; a lone ``"0"`` is the
    encoding of a word gap.
    """

    if not token:
        return ()
    if token == WORD_GAP_BITS:
        return (Symbol.WORD_GAP,)

    symbols: List[Symbol] = []
    position = offset
    for piece in token.split(SYMBOL_GAP):
        symbol = _BITS_SYMBOL.get(piece)
        if symbol is None:
            raise MalformedBitstream(
                piece,
                offset=position,
                reason="Expected '1' (dot) or '111' (line) between single gaps.",
            )
        symbols.append(symbol)
        position += len(piece) + len(SYMBOL_GAP)
    return tuple(symbols)


def split_document(bits: str) -> List[Tuple[int, str]]:
    """Split a document bitstream into ``(offset, token)`` pairs, one per character.

    Gaps are read as whole runs of zeros: one zero separates symbols, three
    separate characters, and every further four zeros between two characters
    (``0000000`` for one space) carry a word gap of their own. At the edges of
    the document a run of ``4k`` or ``4k + 3`` zeros carries ``k`` word gaps,
    the surplus separator being ignored.
    """

    invalid = INVALID_DIGIT.search(bits)
    if invalid is not None:
        raise MalformedBitstream(
            invalid.group(),
            offset=invalid.start(),
            reason="Bitstreams may only contain the digits 0 and 1.",
        )
    if not bits:
        return []

    runs = [(match.start(), match.group()) for match in RUN_PATTERN.finditer(bits)]
    if len(runs) == 1 and runs[0][1].startswith("0"):
        offset, run = runs[0]
        return [(offset, WORD_GAP_BITS)] * _silent_document_spaces(run, offset)

    tokens: List[Tuple[int, str]] = []
    start: int | None = None
    last = len(runs) - 1
    for index, (offset, run) in enumerate(runs):
        if run.startswith("1"):
            if start is None:
                start = offset
            continue

        at_edge = index in (0, last)
        if not at_edge and len(run) == len(SYMBOL_GAP):
            continue

        if start is not None:
            tokens.append((start, bits[start:offset]))
            start = None

        spaces = _edge_spaces(run, offset) if at_edge else _interior_spaces(run, offset)
        tokens.extend([(offset, WORD_GAP_BITS)] * spaces)

    if start is not None:
        tokens.append((start, bits[start:]))
    return tokens


def _interior_spaces(run: str, offset: int) -> int:
    surplus = len(run) - len(CHARACTER_GAP)
    if surplus < 0 or surplus % SPACE_STRIDE:
        raise MalformedBitstream(
            run,
            offset=offset,
            reason="Gaps between characters must be 1, 3, 7, 11, ... zeros long.",
        )
    return surplus // SPACE_STRIDE


def _edge_spaces(run: str, offset: int) -> int:
    if len(run) % SPACE_STRIDE not in (0, len(CHARACTER_GAP)):
        raise MalformedBitstream(
            run,
            offset=offset,
            reason="Leading and trailing gaps must be whole word gaps.",
        )
    return len(run) // SPACE_STRIDE


def _silent_document_spaces(run: str, offset: int) -> int:
    if len(run) % SPACE_STRIDE == len(WORD_GAP_BITS):
        return (len(run) + len(CHARACTER_GAP)) // SPACE_STRIDE
    return _edge_spaces(run, offset)
