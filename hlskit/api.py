"""High-level entry points turning a video into a multi-rendition HLS package."""

from __future__ import annotations

import asyncio
import shutil
import tempfile
from collections.abc import Awaitable, Callable, Sequence

from hlskit.m3u8 import generate_master_playlist
from hlskit.models import HlsVideo, HlsVideoProcessingSettings, HlsVideoResolution
from hlskit.processing import (
    process_video_profile,
    process_video_profile_with_encryption,
)

_RenditionTask = Callable[
    [int, HlsVideoProcessingSettings, str], Awaitable[HlsVideoResolution]
]


async def _gather_all(awaitables: list[Awaitable[HlsVideoResolution]]) -> list[HlsVideoResolution]:
    tasks = [asyncio.ensure_future(item) for item in awaitables]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


async def _process_all(
    output_profiles: Sequence[HlsVideoProcessingSettings],
    make_task: _RenditionTask,
) -> HlsVideo:
    output_dir = tempfile.mkdtemp()
    print(f"processing video at: {output_dir}")
    try:
        resolutions = await _gather_all(
            [
                make_task(index, profile, output_dir)
                for index, profile in enumerate(output_profiles)
            ]
        )
        master = await generate_master_playlist(
            output_dir,
            [result.resolution for result in resolutions],
            [result.playlist_name for result in resolutions],
        )
        return HlsVideo(master_m3u8_data=master, resolutions=resolutions)
    finally:
        shutil.rmtree(output_dir, ignore_errors=True)


async def process_video(
    input_bytes: bytes,
    output_profiles: Sequence[HlsVideoProcessingSettings],
) -> HlsVideo:
    """Encode ``input_bytes`` into one HLS rendition per profile, concurrently."""
    data = bytes(input_bytes)

    def make_task(index, profile, output_dir):
        return process_video_profile(
            data,
            profile.resolution,
            profile.constant_rate_factor,
            str(profile.preset),
            output_dir,
            index,
        )

    return await _process_all(output_profiles, make_task)


async def process_video_with_encrypted_segments(
    input_bytes: bytes,
    output_profiles: Sequence[HlsVideoProcessingSettings],
    encryption_key_url: str,
    encryption_key_path: str,
    iv: str | None = None,
) -> HlsVideo:
    """Like :func:`process_video`, with encrypted segments."""
    data = bytes(input_bytes)

    def make_task(index, profile, output_dir):
        return process_video_profile_with_encryption(
            data,
            profile.resolution,
            profile.constant_rate_factor,
            str(profile.preset),
            output_dir,
            index,
            encryption_key_url,
            encryption_key_path,
            iv,
        )

    return await _process_all(output_profiles, make_task)