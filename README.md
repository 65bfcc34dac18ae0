# hlskit

hlskit turns a video into an HLS stream with several resolutions. It runs
`ffmpeg` once for each output profile, all at the same time, gathers each
rendition's playlist and its `.ts` segments into memory, and writes a master
playlist that points at all of them. The working directory is temporary and
is removed afterwards.

## Requirements

`ffmpeg` must be on `PATH`, built with the `h264_nvenc` encoder (an NVIDIA
GPU is needed to run it). Each rendition is encoded with `h264_nvenc`,
variable bitrate (`-cq:v 19`, `-b:v 8M`, `-maxrate:v 10M`, `-bufsize:v 15M`)
and AAC audio at 192k, in 10-second segments with a `vod` playlist type.

## Installation

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Library use

```python
import asyncio
from pathlib import Path

from hlskit.api import process_video
from hlskit.models import FfmpegVideoProcessingPreset, HlsVideoProcessingSettings

profiles = [
    HlsVideoProcessingSettings((1920, 1080), 28, None, None, FfmpegVideoProcessingPreset.FAST),
    HlsVideoProcessingSettings((1280, 720), 28, None, None, FfmpegVideoProcessingPreset.FAST),
    HlsVideoProcessingSettings((854, 480), 28, None, None, FfmpegVideoProcessingPreset.FAST),
]

video = asyncio.run(process_video(Path("sample.mp4").read_bytes(), profiles))
print(video.master_m3u8_data.decode())
for rendition in video.resolutions:
    print(rendition.playlist_name, len(rendition.segments))
```

`HlsVideoProcessingSettings` accepts enum members or their string values for
the audio codec, audio bitrate and preset; `None` for the codec or bitrate
means `HlsVideoAudioCodec.AAC` and `HlsVideoAudioBitrate.MEDIUM`. The
constant rate factor must lie in 0–51 and the width and height must be
positive, or the command builder raises. The presets `FASTER` and
`VERY_FAST` are rejected by the command builder.

The result is an `HlsVideo` with `master_m3u8_data` (the master playlist
bytes) and `resolutions`, one `HlsVideoResolution` per profile in profile
order. Each carries `resolution`, `playlist_name` (`playlist_<n>.m3u8`),
`playlist_data` and a list of `HlsVideoSegment` named `data_<n>_<nnn>.ts`.
In the master playlist the advertised bandwidth is 1,500,000 for the first
rendition, 3,000,000 for the second, and so on.

### Lower-level pieces

- `hlskit.command_builder.FfmpegCommandBuilder` builds and validates an
  ffmpeg argument list (`input`, `output`, `dimensions`, `crf`, `preset`,
  `enable_hls`, then `build`).
- `hlskit.m3u8.generate_master_playlist(output_dir, resolutions,
  playlist_filenames)` writes `master.m3u8` into an existing directory and
  returns its bytes.
- `hlskit.processing.process_video_profile` encodes one rendition into a
  given directory; `read_playlist_and_segments` loads a rendition from disk.

## Errors

Failures raise subclasses of `hlskit.errors.HlsKitError`:

- `FfmpegError` — ffmpeg could not be started or exited with a failure; the
  message includes ffmpeg's standard error.
- `FfmpegCommandBuilderError`, with `BuildError` (one or more invalid
  settings) and `ConfigurationError` (a required setting was never given).
- `PlaylistDirectoryNotFoundError` — the master playlist directory is missing.

## Command line

```
hlskit [INPUT] [--crf N] [--preset NAME]
```

`INPUT` defaults to `src/sample.mp4`, relative to the current directory;
`--crf` defaults to 28 and `--preset` to `fast`. The video is converted into
1080p, 720p and 480p renditions and the master playlist is printed. On
failure the error is printed to standard error and the exit status is 1.
Nothing is written to disk: the playlists and segments live only in the
returned `HlsVideo`.

## Limitations

- The constant rate factor and the audio codec and bitrate of a profile are
  validated but do not reach ffmpeg: the hardware encoder settings above are
  always used.
- `process_video_with_encrypted_segments` (and
  `process_video_profile_with_encryption`) build the encryption options, but
  the command that is run keeps only its first 18 arguments, so the key info
  file, the IV and the output path are cut off and encrypted output is not
  produced.
- There is no software-encoder fallback when `h264_nvenc` is unavailable.