"""Convert videos into multi-resolution HLS streams with ffmpeg."""

__version__ = "0.2.0"
__all__ = ["api", "cli", "command_builder", "errors", "m3u8", "models", "processing"]