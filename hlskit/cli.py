"""Command line tool that converts a video file into HLS renditions."""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Sequence
from pathlib import Path

from hlskit.api import process_video
from hlskit.errors import HlsKitError
from hlskit.models import FfmpegVideoProcessingPreset, HlsVideoProcessingSettings

DEFAULT_INPUT = "src/sample.mp4"
DEFAULT_RESOLUTIONS = ((1920, 1080), (1280, 720), (854, 480))
DEFAULT_CRF = 28


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hlskit",
        description="Convert a video into HLS renditions at 1080p, 720p and 480p.",
    )
    parser.add_argument("input", nargs="?", default=DEFAULT_INPUT, help="video file")
    parser.add_argument("--crf", type=int, default=DEFAULT_CRF, help="quality (0-51)")
    parser.add_argument(
        "--preset",
        default=FfmpegVideoProcessingPreset.FAST.value,
        choices=[preset.value for preset in FfmpegVideoProcessingPreset],
        help="encoder preset",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = _parser().parse_args(argv)

    print("Starting video processing")
    print(f"Current directory: {Path.cwd()}")

    profiles = [
        HlsVideoProcessingSettings(resolution, args.crf, None, None, args.preset)
        for resolution in DEFAULT_RESOLUTIONS
    ]
    try:
        data = Path(args.input).read_bytes()
        result = asyncio.run(process_video(data, profiles))
    except (OSError, HlsKitError) as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1

    print("Video processing completed successfully")
    print("Video master m3u8 file data:")
    print(result.master_m3u8_data.decode("utf-8", errors="replace"), end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())