import os
import sys

import pytest

from hlskit.api import process_video, process_video_with_encrypted_segments
from hlskit.errors import BuildError, FfmpegError
from hlskit.models import FfmpegVideoProcessingPreset, HlsVideoProcessingSettings

FAKE_FFMPEG = """\
import os, sys
args = sys.argv[1:]
if os.environ.get("FAKE_FFMPEG_FAIL"):
    sys.stderr.write("boom")
    sys.exit(1)
source = args[args.index("-i") + 1]
pattern = args[args.index("-hls_segment_filename") + 1]
playlist = args[-1]
with open(source, "rb") as handle:
    data = handle.read()
for index in range(2):
    with open(pattern.replace("%03d", f"{index:03d}"), "wb") as handle:
        handle.write(data)
with open(playlist, "w") as handle:
    handle.write("#EXTM3U\\n")
"""


@pytest.fixture
def fake_ffmpeg(tmp_path, monkeypatch):
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    script = bin_dir / "ffmpeg"
    script.write_text(f"#!{sys.executable}\n{FAKE_FFMPEG}")
    script.chmod(0o755)
    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")
    monkeypatch.delenv("FAKE_FFMPEG_FAIL", raising=False)
    return monkeypatch


def _profile(resolution, preset=FfmpegVideoProcessingPreset.FAST, crf=28):
    return HlsVideoProcessingSettings(resolution, crf, None, None, preset)


def _processing_dir(captured):
    for line in captured.splitlines():
        if line.startswith("processing video at: "):
            return line[len("processing video at: "):]
    raise AssertionError("processing directory was not reported")


@pytest.mark.asyncio
async def test_process_video_without_profiles(capsys):
    video = await process_video(b"data", [])
    assert video.master_m3u8_data == b"#EXTM3U\n"
    assert video.resolutions == []
    assert not os.path.exists(_processing_dir(capsys.readouterr().out))


@pytest.mark.asyncio
async def test_process_video_builds_all_renditions(fake_ffmpeg, capsys):
    profiles = [_profile((1920, 1080)), _profile((1280, 720)), _profile((854, 480))]

    video = await process_video(b"movie", profiles)

    assert [r.resolution for r in video.resolutions] == [
        (1920, 1080),
        (1280, 720),
        (854, 480),
    ]
    assert [r.playlist_name for r in video.resolutions] == [
        "playlist_0.m3u8",
        "playlist_1.m3u8",
        "playlist_2.m3u8",
    ]
    master_lines = video.master_m3u8_data.decode().splitlines()
    assert master_lines[0] == "#EXTM3U"
    assert master_lines[2::2] == [r.playlist_name for r in video.resolutions]
    assert all(
        segment.segment_data == b"movie"
        for rendition in video.resolutions
        for segment in rendition.segments
    )
    assert not os.path.exists(_processing_dir(capsys.readouterr().out))


@pytest.mark.asyncio
async def test_process_video_ffmpeg_failure(fake_ffmpeg, capsys):
    fake_ffmpeg.setenv("FAKE_FFMPEG_FAIL", "1")
    with pytest.raises(FfmpegError):
        await process_video(b"movie", [_profile((1280, 720))])
    assert not os.path.exists(_processing_dir(capsys.readouterr().out))


@pytest.mark.asyncio
async def test_process_video_rejects_preset_unknown_to_builder():
    with pytest.raises(BuildError) as excinfo:
        await process_video(
            b"movie", [_profile((1280, 720), FfmpegVideoProcessingPreset.VERY_FAST)]
        )
    assert "veryfast" in str(excinfo.value)


@pytest.mark.asyncio
async def test_process_video_rejects_invalid_crf():
    with pytest.raises(BuildError):
        await process_video(b"movie", [_profile((1280, 720), crf=-1)])


@pytest.mark.asyncio
async def test_encrypted_without_profiles():
    video = await process_video_with_encrypted_segments(
        b"data", [], "https://keys.example.com/", "/keys/key.info", None
    )
    assert video.master_m3u8_data == b"#EXTM3U\n"
    assert video.resolutions == []


@pytest.mark.asyncio
async def test_encrypted_rejects_invalid_dimensions():
    with pytest.raises(BuildError):
        await process_video_with_encrypted_segments(
            b"data",
            [_profile((-1, 720))],
            "https://keys.example.com/",
            "/keys/key.info",
            "placeholder",
        )