"""Exceptions raised by hlskit."""

from __future__ import annotations

import json


def _quoted(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


class HlsKitError(Exception):
    """Base class for all hlskit errors."""


class FfmpegError(HlsKitError):
    """FFmpeg could not be started or exited with a failure."""

    def __init__(self, error: str) -> None:
        self.error = error
        super().__init__(f"[HlsKit] Failed to spawn Ffmpeg: {_quoted(error)}")


class PlaylistDirectoryNotFoundError(HlsKitError):
    """A required file or directory does not exist."""

    def __init__(self, file_path: str) -> None:
        self.file_path = str(file_path)
        super().__init__(f"File {_quoted(self.file_path)} not found")


class FfmpegCommandBuilderError(HlsKitError):
    """Base class for errors while building an FFmpeg command line."""

    _prefix = "FFmpeg command builder error"

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"{self._prefix}: {detail}")


class ConfigurationError(FfmpegCommandBuilderError):
    """A required builder setting is missing."""

    _prefix = "Configuration Validation Error"


class BuildError(FfmpegCommandBuilderError):
    """The builder collected one or more setting errors."""

    _prefix = "Command Build Error"


class FfmpegSettingError(FfmpegCommandBuilderError):
    """A single FFmpeg setting has an invalid value."""

    _prefix = "FFmpeg specific setting error"