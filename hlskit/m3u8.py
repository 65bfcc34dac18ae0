"""Master playlist generation."""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path

from hlskit.errors import PlaylistDirectoryNotFoundError

MASTER_PLAYLIST_NAME = "master.m3u8"
_BANDWIDTH_STEP = 1_500_000


async def generate_master_playlist(
    output_dir: str | os.PathLike[str],
    resolutions: Sequence[tuple[int, int]],
    playlist_filenames: Sequence[str],
) -> bytes:
    """Write ``master.m3u8`` into ``output_dir`` and return its contents.

    Each resolution is paired with the playlist file name at the same
    position; bandwidth rises by 1.5 Mbit/s per rendition.
    """
    directory = Path(output_dir)
    if not directory.exists():
        raise PlaylistDirectoryNotFoundError(os.fspath(output_dir))
    if len(playlist_filenames) < len(resolutions):
        raise ValueError(
            f"{len(resolutions)} resolutions given but only "
            f"{len(playlist_filenames)} playlist file names"
        )

    lines = ["#EXTM3U"]
    for index, ((width, height), playlist) in enumerate(
        zip(resolutions, playlist_filenames), start=1
    ):
        lines.append(
            f"#EXT-X-STREAM-INF:BANDWIDTH={index * _BANDWIDTH_STEP},"
            f"RESOLUTION={width}x{height}"
        )
        lines.append(playlist)
        print(f"[HlsKit] Master playlist created for {width}x{height}")

    master_path = directory / MASTER_PLAYLIST_NAME
    master_path.write_bytes("".join(f"{line}\n" for line in lines).encode())
    return master_path.read_bytes()