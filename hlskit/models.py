"""Data types describing HLS processing settings and produced HLS output."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class FfmpegVideoProcessingPreset(str, Enum):
    """Encoder speed/quality presets understood by FFmpeg."""

    VERY_SLOW = "veryslow"
    SLOWER = "slower"
    SLOW = "slow"
    MEDIUM = "medium"
    FAST = "fast"
    FASTER = "faster"
    VERY_FAST = "veryfast"
    SUPER_FAST = "superfast"
    ULTRA_FAST = "ultrafast"

    def __str__(self) -> str:
        return self.value


class HlsVideoAudioCodec(str, Enum):
    """Audio codecs available for HLS output."""

    AAC = "aac"
    MP3 = "mp3"
    VORBIS = "vorbis"

    def __str__(self) -> str:
        return self.value


class HlsVideoAudioBitrate(str, Enum):
    """Audio bitrates available for HLS output."""

    LOW = "128k"
    MEDIUM = "256k"
    HIGH = "320k"

    def __str__(self) -> str:
        return self.value


@dataclass
class HlsVideoProcessingSettings:
    """Settings for one output rendition.

    ``audio_codec`` and ``audio_bitrate`` may be ``None``, in which case they
    default to AAC and the medium bitrate. Enum members or their string values
    are accepted for the codec, bitrate and preset.
    """

    resolution: tuple[int, int]
    constant_rate_factor: int
    audio_codec: HlsVideoAudioCodec | None
    audio_bitrate: HlsVideoAudioBitrate | None
    preset: FfmpegVideoProcessingPreset

    def __post_init__(self) -> None:
        width, height = self.resolution
        self.resolution = (int(width), int(height))
        self.constant_rate_factor = int(self.constant_rate_factor)
        self.audio_codec = (
            HlsVideoAudioCodec.AAC
            if self.audio_codec is None
            else HlsVideoAudioCodec(self.audio_codec)
        )
        self.audio_bitrate = (
            HlsVideoAudioBitrate.MEDIUM
            if self.audio_bitrate is None
            else HlsVideoAudioBitrate(self.audio_bitrate)
        )
        self.preset = FfmpegVideoProcessingPreset(self.preset)


@dataclass
class HlsVideoSegment:
    """A single media segment of an HLS stream."""

    segment_name: str = ""
    segment_data: bytes = b""


@dataclass
class HlsVideoResolution:
    """One rendition: its resolution, playlist and segments."""

    resolution: tuple[int, int] = (0, 0)
    playlist_name: str = ""
    playlist_data: bytes = b""
    segments: list[HlsVideoSegment] = field(default_factory=list)


@dataclass
class HlsVideo:
    """A complete HLS video: master playlist plus all renditions."""

    master_m3u8_data: bytes = b""
    resolutions: list[HlsVideoResolution] = field(default_factory=list)