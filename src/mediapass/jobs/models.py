"""Pydantic models for YAML job files.

A job describes one encode::

    input: talk.mp4
    inputs: [music.mp3]
    output: talk-720p.mp4
    filters:
      - pad: {width: 1280, height: 720}
      - mix: {}
    commands:
      - ["-map_metadata", "-1"]
    format:
      preset: x264
      bitrate: 2500
      passes: 2

or one concat run::

    output: playlist.mp3
    loop:
      segments: [intro.mp3, body.mp3]
      times: 3
    format:
      preset: mp3
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from mediapass.formats.presets import PRESETS

# Shell metacharacters are never needed in ffmpeg tokens
FORBIDDEN_TOKEN_PATTERNS = (";", "|", "&", "$(", "`", "${", "\n")

MAX_TOKENS_PER_COMMAND = 50
MAX_TOKEN_LENGTH = 1024


def _validate_tokens(tokens: list[str], field_name: str) -> list[str]:
    if len(tokens) > MAX_TOKENS_PER_COMMAND:
        raise ValueError(
            f"{field_name} has {len(tokens)} tokens, "
            f"maximum is {MAX_TOKENS_PER_COMMAND}"
        )
    for idx, token in enumerate(tokens):
        if len(token) > MAX_TOKEN_LENGTH:
            raise ValueError(
                f"{field_name}[{idx}] exceeds {MAX_TOKEN_LENGTH} characters"
            )
        for pattern in FORBIDDEN_TOKEN_PATTERNS:
            if pattern in token:
                raise ValueError(
                    f"{field_name}[{idx}] contains forbidden sequence {pattern!r}"
                )
    return tokens


class PadFilterModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    width: int = Field(ge=1)
    height: int = Field(ge=1)
    x: int = Field(default=0, ge=0)
    y: int = Field(default=0, ge=0)
    priority: int = 0


class MixFilterModel(BaseModel):
    """Audio mix; count defaults to primary plus auxiliary inputs."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    count: int | None = Field(default=None, ge=1)
    priority: int = 0


class CustomFilterModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    params: list[str] = Field(min_length=1)
    priority: int = 0

    @field_validator("params")
    @classmethod
    def validate_params(cls, v: list[str]) -> list[str]:
        return _validate_tokens(v, "params")


class FilterEntryModel(BaseModel):
    """One entry of the ``filters`` list; exactly one key must be set."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    pad: PadFilterModel | None = None
    mix: MixFilterModel | None = None
    custom: CustomFilterModel | None = None

    @model_validator(mode="after")
    def validate_single_kind(self) -> FilterEntryModel:
        kinds = [k for k in ("pad", "mix", "custom") if getattr(self, k) is not None]
        if len(kinds) != 1:
            raise ValueError(
                "Each filter entry needs exactly one of 'pad', 'mix', 'custom'"
            )
        return self


class FormatModel(BaseModel):
    """Output format: a preset, explicit fields, or a preset with overrides."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    preset: str | None = None
    video_codec: str | None = None
    audio_codec: str | None = None
    bitrate: int | None = Field(default=None, ge=1)
    audio_bitrate: int | None = Field(default=None, ge=1)
    channels: int | None = Field(default=None, ge=1)
    extra_params: list[str] | None = None
    additional_parameters: list[str] | None = None
    passes: int | None = None
    audio_only: bool = False

    @field_validator("preset")
    @classmethod
    def validate_preset(cls, v: str | None) -> str | None:
        if v is not None and v.lower() not in PRESETS:
            raise ValueError(
                f"Unknown preset '{v}'. Must be one of: {', '.join(sorted(PRESETS))}"
            )
        return v

    @field_validator("extra_params", "additional_parameters")
    @classmethod
    def validate_params(cls, v: list[str] | None) -> list[str] | None:
        if v is not None:
            _validate_tokens(v, "params")
        return v


class LoopModel(BaseModel):
    """Concat run: an existing descriptor, or segments to write one from."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    descriptor: Path | None = None
    segments: list[Path] | None = None
    times: int = Field(default=1, ge=1)

    @model_validator(mode="after")
    def validate_source(self) -> LoopModel:
        if (self.descriptor is None) == (self.segments is None):
            raise ValueError("loop needs exactly one of 'descriptor' or 'segments'")
        if self.segments is not None and not self.segments:
            raise ValueError("loop.segments cannot be empty")
        return self


class JobModel(BaseModel):
    """Top-level job file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    input: Path | None = None
    images: bool = False
    framerate: float = Field(default=25, gt=0)
    inputs: list[Path] = Field(default_factory=list)
    output: Path
    commands: list[list[str]] = Field(default_factory=list)
    filters: list[FilterEntryModel] = Field(default_factory=list)
    format: FormatModel = Field(default_factory=FormatModel)
    loop: LoopModel | None = None

    @field_validator("commands")
    @classmethod
    def validate_commands(cls, v: list[list[str]]) -> list[list[str]]:
        for idx, command in enumerate(v):
            if not command:
                raise ValueError(f"commands[{idx}] is empty")
            _validate_tokens(command, f"commands[{idx}]")
        return v

    @model_validator(mode="after")
    def validate_mode(self) -> JobModel:
        if self.loop is None and self.input is None:
            raise ValueError("'input' is required unless 'loop' is set")
        if self.loop is not None and (self.inputs or self.filters or self.commands):
            raise ValueError(
                "'loop' jobs cannot declare 'inputs', 'filters' or 'commands'"
            )
        return self
