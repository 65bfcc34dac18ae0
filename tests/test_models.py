import pytest

from hlskit.models import (
    FfmpegVideoProcessingPreset,
    HlsVideo,
    HlsVideoAudioBitrate,
    HlsVideoAudioCodec,
    HlsVideoProcessingSettings,
    HlsVideoResolution,
    HlsVideoSegment,
)


@pytest.mark.parametrize(
    "preset, value",
    [
        (FfmpegVideoProcessingPreset.VERY_SLOW, "veryslow"),
        (FfmpegVideoProcessingPreset.SLOWER, "slower"),
        (FfmpegVideoProcessingPreset.SLOW, "slow"),
        (FfmpegVideoProcessingPreset.MEDIUM, "medium"),
        (FfmpegVideoProcessingPreset.FAST, "fast"),
        (FfmpegVideoProcessingPreset.FASTER, "faster"),
        (FfmpegVideoProcessingPreset.VERY_FAST, "veryfast"),
        (FfmpegVideoProcessingPreset.SUPER_FAST, "superfast"),
        (FfmpegVideoProcessingPreset.ULTRA_FAST, "ultrafast"),
    ],
)
def test_preset_values(preset, value):
    assert preset.value == value
    assert str(preset) == value


@pytest.mark.parametrize(
    "codec, value",
    [
        (HlsVideoAudioCodec.AAC, "aac"),
        (HlsVideoAudioCodec.MP3, "mp3"),
        (HlsVideoAudioCodec.VORBIS, "vorbis"),
    ],
)
def test_codec_values(codec, value):
    assert codec.value == value


@pytest.mark.parametrize(
    "bitrate, value",
    [
        (HlsVideoAudioBitrate.LOW, "128k"),
        (HlsVideoAudioBitrate.MEDIUM, "256k"),
        (HlsVideoAudioBitrate.HIGH, "320k"),
    ],
)
def test_bitrate_values(bitrate, value):
    assert bitrate.value == value


def test_settings_defaults_for_missing_audio():
    settings = HlsVideoProcessingSettings(
        (1920, 1080), 28, None, None, FfmpegVideoProcessingPreset.FAST
    )
    assert settings.audio_codec is HlsVideoAudioCodec.AAC
    assert settings.audio_bitrate is HlsVideoAudioBitrate.MEDIUM
    assert settings.resolution == (1920, 1080)
    assert settings.constant_rate_factor == 28
    assert settings.preset is FfmpegVideoProcessingPreset.FAST


def test_settings_keep_explicit_audio():
    settings = HlsVideoProcessingSettings(
        (854, 480),
        23,
        HlsVideoAudioCodec.MP3,
        HlsVideoAudioBitrate.HIGH,
        FfmpegVideoProcessingPreset.SLOW,
    )
    assert settings.audio_codec is HlsVideoAudioCodec.MP3
    assert settings.audio_bitrate is HlsVideoAudioBitrate.HIGH


def test_settings_accept_string_values():
    settings = HlsVideoProcessingSettings([1280, 720], 28, "vorbis", "128k", "medium")
    assert settings.audio_codec is HlsVideoAudioCodec.VORBIS
    assert settings.audio_bitrate is HlsVideoAudioBitrate.LOW
    assert settings.preset is FfmpegVideoProcessingPreset.MEDIUM
    assert settings.resolution == (1280, 720)


def test_settings_reject_unknown_preset():
    with pytest.raises(ValueError):
        HlsVideoProcessingSettings((1280, 720), 28, None, None, "lightning")


def test_settings_equality():
    a = HlsVideoProcessingSettings((1280, 720), 28, None, None, "fast")
    b = HlsVideoProcessingSettings(
        (1280, 720),
        28,
        HlsVideoAudioCodec.AAC,
        HlsVideoAudioBitrate.MEDIUM,
        FfmpegVideoProcessingPreset.FAST,
    )
    assert a == b


def test_default_structures_are_empty():
    video = HlsVideo()
    resolution = HlsVideoResolution()
    segment = HlsVideoSegment()
    assert video.master_m3u8_data == b""
    assert video.resolutions == []
    assert resolution.resolution == (0, 0)
    assert resolution.playlist_name == ""
    assert resolution.segments == []
    assert segment.segment_name == ""
    assert segment.segment_data == b""


def test_default_lists_are_not_shared():
    first = HlsVideoResolution()
    second = HlsVideoResolution()
    first.segments.append(HlsVideoSegment("data_0_000.ts", b"x"))
    assert second.segments == []


def test_video_holds_resolutions():
    segment = HlsVideoSegment("data_0_000.ts", b"\x47\x00")
    resolution = HlsVideoResolution((1920, 1080), "playlist_0.m3u8", b"#EXTM3U\n", [segment])
    video = HlsVideo(b"#EXTM3U\n", [resolution])
    assert video.resolutions[0].segments[0].segment_data == b"\x47\x00"
    assert video == HlsVideo(b"#EXTM3U\n", [resolution])