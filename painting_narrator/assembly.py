"""Concatenate ordered speech chunks into one MP3 with ffmpeg."""

import logging
import os
import shutil
import subprocess
import sys

from pydub import AudioSegment

from painting_narrator.constants import ASSEMBLY_TIMEOUT
from painting_narrator.errors import AssemblyError
from painting_narrator.models import AssembledAudio

logger = logging.getLogger(__name__)


def ffmpeg_binary() -> str:
    """The ffmpeg executable pydub is configured to use."""
    return AudioSegment.converter


def check_ffmpeg():
    """Verify ffmpeg is installed."""
    if not shutil.which(ffmpeg_binary()):
        print("Error: ffmpeg is required but not found.", file=sys.stderr)
        print("Install with: brew install ffmpeg", file=sys.stderr)
        raise SystemExit(1)


def remove_files(paths: list[str]) -> None:
    """Delete files, ignoring ones that are already gone."""
    for path in paths:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not remove temp file %s: %s", path, e)


def build_concat_command(ordered_paths: list[str], output_path: str, ffmpeg: str | None = None) -> list[str]:
    """ffmpeg argv joining inputs with the concat protocol, copying the audio stream."""
    return [
        ffmpeg or ffmpeg_binary(),
        "-y",
        "-loglevel", "error",
        "-i", "concat:" + "|".join(ordered_paths),
        "-acodec", "copy",
        output_path,
    ]


def assemble(
    ordered_paths: list[str],
    output_path: str,
    painting_id: int = 0,
    ffmpeg: str | None = None,
    timeout: float = ASSEMBLY_TIMEOUT,
) -> AssembledAudio:
    """Join chunk files in the given order into output_path.

    The input files are always deleted before returning, whether or not
    ffmpeg succeeded.
    """
    try:
        if not ordered_paths:
            raise AssemblyError("No audio chunks to assemble")

        out_dir = os.path.dirname(output_path)
        if out_dir:
            os.makedirs(out_dir, exist_ok=True)

        cmd = build_concat_command(ordered_paths, output_path, ffmpeg)
        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
        except FileNotFoundError as e:
            raise AssemblyError(f"ffmpeg not found: {cmd[0]}") from e
        except subprocess.TimeoutExpired as e:
            raise AssemblyError(f"ffmpeg timed out after {timeout}s") from e

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise AssemblyError(
                f"ffmpeg exited with status {result.returncode}: {stderr}",
                returncode=result.returncode,
                stderr=stderr,
            )
    finally:
        remove_files(ordered_paths)

    return AssembledAudio(path=output_path, painting_id=painting_id)
