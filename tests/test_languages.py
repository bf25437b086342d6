import pytest

from morselib import languages
from morselib.errors import (
    InvalidCodecTable,
    UnknownLanguage,
    UnrecognizedSequence,
    UnsupportedCharacter,
)
from morselib.languages import (
    INTERNATIONAL,
    INTERNATIONAL_PATTERNS,
    FunctionCodec,
    TableCodec,
    build_codec,
    register_language,
)
from morselib.structures import Symbol, parse_pattern

D, L, W = Symbol.DOT, Symbol.LINE, Symbol.WORD_GAP


def test_international_covers_letters_digits_and_space():
    expected = set("abcdefghijklmnopqrstuvwxyz0123456789 ")
    assert set(INTERNATIONAL.alphabet) == expected


@pytest.mark.parametrize("character", sorted(INTERNATIONAL_PATTERNS))
def test_every_entry_decodes_back(character):
    symbols = INTERNATIONAL.encode(character)
    assert INTERNATIONAL.decode(symbols) == character


def test_patterns_are_unique_and_short():
    patterns = list(INTERNATIONAL_PATTERNS.values())
    assert len(set(patterns)) == len(patterns)
    for character, pattern in INTERNATIONAL_PATTERNS.items():
        if character == " ":
            assert pattern == "/"
        else:
            assert 1 <= len(pattern) <= 5
            assert set(pattern) <= {".", "-"}


@pytest.mark.parametrize(
    "character, symbols",
    [
        ("a", (D, L)),
        ("S", (D, D, D)),
        ("o", (L, L, L)),
        ("q", (L, L, D, L)),
        ("1", (D, L, L, L, L)),
        ("0", (L, L, L, L, L)),
        (" ", (W,)),
    ],
)
def test_known_encodings(character, symbols):
    assert INTERNATIONAL.encode(character) == symbols


def test_decode_is_lowercase():
    assert INTERNATIONAL.decode(INTERNATIONAL.encode("Z")) == "z"


@pytest.mark.parametrize("character", ["#", "é", ".", "\n", "ä", "\u212a", "\u0130"])
def test_unsupported_characters(character):
    with pytest.raises(UnsupportedCharacter) as excinfo:
        INTERNATIONAL.encode(character)
    assert excinfo.value.character == character
    assert excinfo.value.language == "International"


@pytest.mark.parametrize(
    "symbols",
    [(), (D, D, L, L), (D,) * 6, (L, L, L, L), (W, W), (D, W)],
)
def test_unrecognized_sequences(symbols):
    with pytest.raises(UnrecognizedSequence) as excinfo:
        INTERNATIONAL.decode(symbols)
    assert excinfo.value.symbols == symbols


def test_pattern_helpers():
    assert parse_pattern(".-/") == (D, L, W)
    with pytest.raises(ValueError):
        parse_pattern(".x")


def test_table_codec_for_another_alphabet():
    codec = TableCodec({"а": ".-", "б": "-...", "в": ".--", " ": "/"}, language="Ukrainian")
    assert codec.encode("Б") == (L, D, D, D)
    assert codec.decode((D, L, L)) == "в"
    with pytest.raises(UnsupportedCharacter):
        codec.encode("a")


def test_case_sensitive_table():
    codec = TableCodec({"A": ".", "a": "-"}, language="Cased", case_sensitive=True)
    assert codec.encode("A") == (D,)
    assert codec.decode((L,)) == "a"


@pytest.mark.parametrize(
    "table",
    [
        {"a": ".", "b": "."},
        {"a": ""},
        {"ab": "."},
        {"a": ".x"},
        {"a": "./"},
        {"A": ".", "a": "-"},
    ],
)
def test_invalid_tables(table):
    with pytest.raises(InvalidCodecTable):
        TableCodec(table, language="Broken")


def test_function_codec_wraps_lookup_errors():
    forward = {"x": (D,), "y": (L,)}
    backward = {value: key for key, value in forward.items()}
    codec = FunctionCodec(forward.__getitem__, backward.__getitem__, language="XY")

    assert codec.encode("y") == (L,)
    assert codec.decode([D]) == "x"
    with pytest.raises(UnsupportedCharacter):
        codec.encode("z")
    with pytest.raises(UnrecognizedSequence):
        codec.decode((D, D))


def test_function_codec_rejects_empty_encoding():
    codec = FunctionCodec(lambda character: [], lambda symbols: "x")
    with pytest.raises(UnsupportedCharacter):
        codec.encode("x")


def test_build_codec_resolves_names():
    assert build_codec(None) is INTERNATIONAL
    assert build_codec(" ITU ") is INTERNATIONAL
    assert build_codec("international") is INTERNATIONAL
    with pytest.raises(UnknownLanguage):
        build_codec("klingon")


def test_register_language(monkeypatch):
    monkeypatch.setattr(languages, "_LANGUAGES", dict(languages._LANGUAGES))
    monkeypatch.setattr(languages, "_ALIASES", dict(languages._ALIASES))
    codec = TableCodec({"x": "."}, language="Tiny Tongue")

    register_language("Tiny Tongue", lambda: codec, aliases=("tt",))

    assert build_codec("tiny-tongue") is codec
    assert build_codec("TT") is codec
    assert "tiny tongue" in languages.available_languages()
