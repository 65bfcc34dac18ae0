"""Validated construction of FFmpeg command lines for HLS output."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import PurePath

from hlskit.errors import (
    BuildError,
    ConfigurationError,
    FfmpegCommandBuilderError,
    FfmpegSettingError,
)

VALID_PRESETS = frozenset(
    {
        "ultrafast",
        "superfast",
        "fast",
        "medium",
        "slow",
        "slower",
        "veryslow",
        "none",
    }
)


@dataclass
class HlsOutputEncryptionConfig:
    """Key info file and optional IV used to encrypt HLS segments."""

    encryption_key_path: str
    iv: str | None = None


@dataclass
class _HlsOutputConfig:
    segment_filename_pattern: str
    playlist_type: str | None
    encryption_config: HlsOutputEncryptionConfig | None
    base_url: str | None
    hls_time: int


@dataclass
class FfmpegCommand:
    """The settings of one FFmpeg invocation."""

    input_path: str = ""
    output_path: str = ""
    width: int = 0
    height: int = 0
    crf: int = 0
    preset: str = ""
    hls_config: _HlsOutputConfig | None = None

    def to_args(self) -> list[str]:
        """Return the argument vector, program name first."""
        args = [
            "ffmpeg",
            "-i",
            self.input_path,
            "-vf",
            f"scale={self.width}:{self.height}",
            "-c:v",
            "libx264",
            "-crf",
            str(self.crf),
            "-preset",
            self.preset,
        ]

        hls = self.hls_config
        if hls is not None:
            args += [
                "-hls_time",
                str(hls.hls_time),
                "-hls_playlist_type",
                hls.playlist_type if hls.playlist_type is not None else "vod",
                "-hls_segment_filename",
                hls.segment_filename_pattern,
            ]
            if hls.base_url is not None:
                args += ["-hls_base_url", hls.base_url]
            encryption = hls.encryption_config
            if encryption is not None:
                args += ["-hls_key_info_file", encryption.encryption_key_path]
                if encryption.iv is not None:
                    args += ["-hls_iv", encryption.iv]

        args.append(self.output_path)
        return args


@dataclass
class FfmpegCommandBuilder:
    """Fluent builder that validates settings and yields FFmpeg arguments.

    Setting errors are collected as the builder is configured and reported
    together by :meth:`build`.
    """

    command: FfmpegCommand = field(default_factory=FfmpegCommand)
    build_errors: list[FfmpegCommandBuilderError] = field(default_factory=list)
    _has_input: bool = False
    _has_output: bool = False
    _has_dimensions: bool = False
    _has_crf: bool = False
    _has_preset: bool = False

    def input(self, path: str | os.PathLike[str]) -> FfmpegCommandBuilder:
        self.command.input_path = os.fspath(path)
        self._has_input = True
        return self

    def output(self, path: str | os.PathLike[str]) -> FfmpegCommandBuilder:
        self.command.output_path = os.fspath(path)
        self._has_output = True
        return self

    def dimensions(self, width: int, height: int) -> FfmpegCommandBuilder:
        if width <= 0 or height <= 0:
            self.build_errors.append(
                FfmpegSettingError("Width and height must be positive values.")
            )
        self.command.width = width
        self.command.height = height
        self._has_dimensions = True
        return self

    def crf(self, value: int) -> FfmpegCommandBuilder:
        if not 0 <= value <= 51:
            self.build_errors.append(
                FfmpegSettingError(
                    f"CRF value {value} is outside the standard range [0-51]."
                )
            )
        self.command.crf = value
        self._has_crf = True
        return self

    def preset(self, name: str) -> FfmpegCommandBuilder:
        name = str(name)
        if name not in VALID_PRESETS:
            self.build_errors.append(
                FfmpegSettingError(
                    f"Preset '{name}' is not a recognized FFmpeg preset."
                )
            )
        self.command.preset = name
        self._has_preset = True
        return self

    def enable_hls(
        self,
        segment_filename_pattern: str,
        playlist_type: str | None = None,
        base_url: str | None = None,
        encryption_settings: HlsOutputEncryptionConfig | None = None,
        hls_segment_duration_seconds: int = 10,
    ) -> FfmpegCommandBuilder:
        if not segment_filename_pattern or "%" not in segment_filename_pattern:
            self.build_errors.append(
                FfmpegSettingError(
                    "HLS segment filename pattern must not be empty and should "
                    "contain a format specifier (e.g., %03d)."
                )
            )
        if hls_segment_duration_seconds <= 0:
            self.build_errors.append(
                FfmpegSettingError("HLS segment duration must be positive.")
            )
        self.command.hls_config = _HlsOutputConfig(
            segment_filename_pattern=segment_filename_pattern,
            playlist_type=playlist_type,
            encryption_config=encryption_settings,
            base_url=base_url,
            hls_time=hls_segment_duration_seconds,
        )
        return self

    def build(self) -> list[str]:
        """Validate the configuration and return the argument vector.

        Raises :class:`BuildError` if any setting was invalid, or
        :class:`ConfigurationError` if a required setting is missing.
        """
        if self.build_errors:
            messages = "; ".join(str(error) for error in self.build_errors)
            raise BuildError(f"Command configuration failed: [{messages}]")

        if not self._has_input or not self.command.input_path:
            raise ConfigurationError("Input path must be set using `.input()`.")
        if not self._has_output or not self.command.output_path:
            raise ConfigurationError("Output path must be set using `.output()`.")
        if not self._has_dimensions:
            raise ConfigurationError(
                "Output dimensions (width and height) must be set using "
                "`.dimensions()`."
            )
        if not self._has_crf:
            raise ConfigurationError("CRF (quality) must be set using `.crf()`.")
        if not self._has_preset:
            raise ConfigurationError("Preset must be set using `.preset()`.")

        if self.command.hls_config is not None and PurePath(
            self.command.output_path
        ).suffix:
            self.build_errors.append(
                FfmpegSettingError(
                    "When enabling HLS, the output path should typically be a "
                    "directory, not a specific file extension."
                )
            )

        return self.command.to_args()