"""Prepper-backed configuration loader for morselib."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterator, Mapping, Sequence

from dotenv import dotenv_values
from prepper import (
    Field,
    IoError,
    SchemaError,
    SchemaModel,
    ValidationError,
    model_validator,
)
from prepper.config import ConfigInstance
from prepper.loaders import _parse_file, _path_to_source, discover_file_paths
from prepper.merge import merge_layer
from prepper.provenance import ProvenanceRecorder

from .errors import ConfigurationError, InvalidAudioSetting, MorseError
from .languages import DEFAULT_LANGUAGE, build_codec
from .structures import AudioSettings, DisplayAliases

APP_NAME = "Morselib"


class MorselibConfig(SchemaModel):
    """Schema describing all supported configuration options."""

    MORSE_LANGUAGE: str = Field(
        default=DEFAULT_LANGUAGE,
        description="Name of the Morse language used to encode and decode.",
    )
    MORSE_DOT_ALIAS: str = Field(default=".", description="Rendered form of a dot.")
    MORSE_LINE_ALIAS: str = Field(default="⚊", description="Rendered form of a line.")
    MORSE_GAP_ALIAS: str = Field(default=" ", description="Rendered form of a word gap.")
    MORSE_FREQUENCY: float = Field(default=450.0, description="Tone frequency in Hz.")
    MORSE_SPEED: float = Field(default=1.0, description="Playback speed factor.")
    MORSE_DEBUG: bool = Field(default=False)

    @model_validator(mode="before")
    def _normalise_language(data: Any) -> Any:
        if isinstance(data, dict):
            raw_value = data.get("MORSE_LANGUAGE")
            if isinstance(raw_value, str):
                collapsed = " ".join(raw_value.split())
                data["MORSE_LANGUAGE"] = collapsed or DEFAULT_LANGUAGE
        return data


@lru_cache(maxsize=1)
def _load_config_instance(app_dir: Path | None = None) -> ConfigInstance:
    """Merge YAML files, then .env, then the process environment; later layers win."""

    base_dir = app_dir or Path.cwd()
    provenance = ProvenanceRecorder()
    combined: dict[str, Any] = {}
    try:
        for source, layer, values in _config_layers(base_dir):
            merge_layer(combined, values, provenance=provenance, source=source, layer=layer)
        model = MorselibConfig.validate(combined, provenance=provenance)
    except IoError as exc:
        raise ConfigurationError(f"Configuration files could not be read: {exc}") from exc
    except SchemaError as exc:
        raise ConfigurationError(f"Configuration schema error: {exc}") from exc
    except ValidationError as exc:
        raise ConfigurationError(_issue_report(exc.to_dict())) from exc

    _validate_settings(model)
    return ConfigInstance(
        model=model,
        provenance=provenance,
        env_prefix=None,
        schema_cls=MorselibConfig,
    )


def _config_layers(base_dir: Path) -> Iterator[tuple[str, str, Mapping[str, Any]]]:
    """Yield ``(source, layer, values)`` for every configuration source in merge order."""

    discovered = discover_file_paths(APP_NAME, "yaml", app_dir=base_dir, extra_paths=None)
    for path, label in discovered:
        parsed = _parse_file(path, "yaml")
        if not isinstance(parsed, Mapping):
            raise IoError(
                f"Invalid configuration file {path}: expected a mapping at the root."
            )
        yield _path_to_source(label, "yaml", path), "file", parsed

    dotenv_path = base_dir / ".env"
    env_sources = (
        (".env", dotenv_values(dotenv_path) if dotenv_path.exists() else {}),
        ("process", os.environ),
    )
    known = set(MorselibConfig.__field_infos__)
    for origin, values in env_sources:
        for key in sorted(known.intersection(values)):
            value = values[key]
            if isinstance(value, str):
                yield f"env:{origin}:{key}", "env", {key: value}


def _validate_settings(settings: MorselibConfig) -> None:
    problems: list[str] = []

    try:
        build_codec(settings.MORSE_LANGUAGE)
    except MorseError as exc:
        problems.append(f"MORSE_LANGUAGE: {exc}")
    try:
        AudioSettings(frequency=settings.MORSE_FREQUENCY, speed=settings.MORSE_SPEED)
    except InvalidAudioSetting as exc:
        problems.append(f"MORSE_FREQUENCY/MORSE_SPEED: {exc}")

    if problems:
        raise ConfigurationError(_bullet_report(problems))


def _issue_report(entries: Sequence[dict[str, Any]]) -> str:
    problems: list[str] = []
    for entry in entries:
        path = entry.get("path") or ()
        if isinstance(path, (list, tuple)):
            path = ".".join(str(part) for part in path if part not in (None, ""))
        message = entry.get("message") or entry.get("msg") or "Invalid value"
        problem = f"{path}: {message}" if path else str(message)
        if entry.get("source"):
            problem += f" (source: {entry['source']})"
        problems.append(problem)
    return _bullet_report(problems)


def _bullet_report(problems: Sequence[str]) -> str:
    return "Configuration validation errors detected:\n" + "\n".join(
        f"- {problem}" for problem in problems
    )


def get_config(app_dir: Path | None = None) -> ConfigInstance:
    return _load_config_instance(app_dir=app_dir)


def get_settings(app_dir: Path | None = None) -> MorselibConfig:
    """Return the validated settings for typed access."""

    return get_config(app_dir=app_dir).model()


def clear_cache() -> None:
    """Forget the cached configuration so the next lookup reloads every layer."""

    _load_config_instance.cache_clear()


def display_aliases(settings: MorselibConfig) -> DisplayAliases:
    return DisplayAliases(
        dot=settings.MORSE_DOT_ALIAS,
        line=settings.MORSE_LINE_ALIAS,
        gap=settings.MORSE_GAP_ALIAS,
    )


def audio_settings(settings: MorselibConfig) -> AudioSettings:
    return AudioSettings(frequency=settings.MORSE_FREQUENCY, speed=settings.MORSE_SPEED)
