"""Encoding of a single HLS rendition with FFmpeg."""

from __future__ import annotations

import asyncio
import contextlib
import os
import tempfile
from collections.abc import Iterator, Sequence
from itertools import count
from pathlib import Path

from hlskit.command_builder import FfmpegCommandBuilder, HlsOutputEncryptionConfig
from hlskit.errors import FfmpegError
from hlskit.models import HlsVideoResolution, HlsVideoSegment

HLS_SEGMENT_DURATION_SECONDS = 10
_SEGMENT_NUMBER = "%03d"
_REQUIRED_ARGUMENTS = 18
_HARDWARE_ENCODER = "h264_nvenc"
_HARDWARE_RATE_CONTROL = (
    "-rc:v", "vbr",
    "-cq:v", "19",
    "-b:v", "8M",
    "-maxrate:v", "10M",
    "-bufsize:v", "15M",
    "-c:a", "aac",
    "-b:a", "192k",
)


def build_ffmpeg_command(
    input_path: str,
    width: int,
    height: int,
    crf: int,
    preset: str,
    segment_filename: str,
    playlist_filename: str,
    encryption_key_url: str | None = None,
    encryption_key_path: str | None = None,
    iv: str | None = None,
) -> list[str]:
    """Build the software-encoder FFmpeg command for one HLS rendition."""
    encryption = (
        HlsOutputEncryptionConfig(encryption_key_path=encryption_key_path, iv=iv)
        if encryption_key_path is not None
        else None
    )
    return (
        FfmpegCommandBuilder()
        .input(input_path)
        .dimensions(width, height)
        .crf(crf)
        .preset(preset)
        .enable_hls(
            segment_filename,
            None,
            encryption_key_url,
            encryption,
            HLS_SEGMENT_DURATION_SECONDS,
        )
        .output(playlist_filename)
        .build()
    )


def hardware_encoder_arguments(command: Sequence[str]) -> list[str]:
    """Rewrite a built command to use the NVENC encoder with fixed rate control.

    The video codec becomes ``h264_nvenc``, the CRF pair is dropped, fixed
    bitrate and AAC audio settings are inserted, and only the seven arguments
    following the preset are kept.
    """
    if len(command) < _REQUIRED_ARGUMENTS:
        raise ValueError(
            f"FFmpeg command needs at least {_REQUIRED_ARGUMENTS} arguments, "
            f"got {len(command)}"
        )
    return [
        *command[0:6],
        _HARDWARE_ENCODER,
        *command[9:11],
        *_HARDWARE_RATE_CONTROL,
        *command[11:_REQUIRED_ARGUMENTS],
    ]


async def run_ffmpeg_command(command: Sequence[str]) -> None:
    """Run the command with the hardware encoder, raising FfmpegError on failure."""
    arguments = hardware_encoder_arguments(command)
    print(arguments)
    try:
        process = await asyncio.create_subprocess_exec(
            *arguments,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as error:
        raise FfmpegError(str(error)) from error

    try:
        _, stderr = await process.communicate()
    except OSError as error:
        raise FfmpegError(f"Failed to write to ffmpeg output: {error}") from error

    if process.returncode != 0:
        message = stderr.decode("utf-8", errors="replace")
        raise FfmpegError(f"FFmpeg error: {message}")


def _segment_name(pattern: str, index: int) -> str:
    return pattern.replace(_SEGMENT_NUMBER, f"{index:03d}")


def read_playlist_and_segments(
    playlist_filename: str | os.PathLike[str],
    segment_filename: str,
    resolution: tuple[int, int],
    stream_index: int,
) -> HlsVideoResolution:
    """Load a rendition's playlist and its consecutively numbered segments."""
    rendition = HlsVideoResolution(
        resolution=resolution,
        playlist_name=f"playlist_{stream_index}.m3u8",
        playlist_data=Path(playlist_filename).read_bytes(),
    )
    name_pattern = f"data_{stream_index}_{_SEGMENT_NUMBER}.ts"
    for index in count():
        segment_path = Path(_segment_name(segment_filename, index))
        if not segment_path.exists():
            break
        rendition.segments.append(
            HlsVideoSegment(
                segment_name=_segment_name(name_pattern, index),
                segment_data=segment_path.read_bytes(),
            )
        )
    return rendition


@contextlib.contextmanager
def _input_file(data: bytes) -> Iterator[str]:
    handle = tempfile.NamedTemporaryFile(delete=False)
    try:
        with handle:
            handle.write(data)
            handle.flush()
        yield handle.name
    finally:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(handle.name)


async def _process(
    input_bytes: bytes,
    resolution: tuple[int, int],
    crf: int,
    preset: str,
    output_dir: str | os.PathLike[str],
    stream_index: int,
    encryption_key_url: str | None = None,
    encryption_key_path: str | None = None,
    iv: str | None = None,
) -> HlsVideoResolution:
    width, height = resolution
    directory = os.fspath(output_dir)
    segment_filename = f"{directory}/data_{stream_index}_{_SEGMENT_NUMBER}.ts"
    playlist_filename = f"{directory}/playlist_{stream_index}.m3u8"

    with _input_file(bytes(input_bytes)) as input_path:
        command = build_ffmpeg_command(
            input_path,
            width,
            height,
            crf,
            str(preset),
            segment_filename,
            playlist_filename,
            encryption_key_url,
            encryption_key_path,
            iv,
        )
        await run_ffmpeg_command(command)

    return read_playlist_and_segments(
        playlist_filename, segment_filename, resolution, stream_index
    )


async def process_video_profile(
    input_bytes: bytes,
    resolution: tuple[int, int],
    crf: int,
    preset: str,
    output_dir: str | os.PathLike[str],
    stream_index: int,
) -> HlsVideoResolution:
    """Encode ``input_bytes`` into one HLS rendition inside ``output_dir``."""
    return await _process(input_bytes, resolution, crf, preset, output_dir, stream_index)


async def process_video_profile_with_encryption(
    input_bytes: bytes,
    resolution: tuple[int, int],
    crf: int,
    preset: str,
    output_dir: str | os.PathLike[str],
    stream_index: int,
    encryption_key_url: str,
    encryption_key_path: str,
    iv: str | None = None,
) -> HlsVideoResolution:
    """Encode one HLS rendition with encrypted segments."""
    return await _process(
        input_bytes,
        resolution,
        crf,
        preset,
        output_dir,
        stream_index,
        encryption_key_url,
        encryption_key_path,
        iv,
    )