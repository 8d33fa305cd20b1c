"""
Probe and repackage uploaded videos with FFprobe/FFmpeg.
Both calls block the request until the external process exits (or the timeout hits).
"""
import json
import logging
import subprocess
from pathlib import Path

from app.config import get_settings

logger = logging.getLogger(__name__)

ASPECT_LANDSCAPE = "landscape"
ASPECT_PORTRAIT = "portrait"
ASPECT_OTHER = "other"

ASPECT_TOLERANCE = 0.01
FAST_START_SUFFIX = ".processed"


class MediaToolError(Exception):
    """ffmpeg/ffprobe failed, timed out, or produced unusable output."""


def classify_aspect_ratio(width: int, height: int) -> str:
    """Bucket stream dimensions into landscape (16:9), portrait (9:16) or other."""
    if not height:
        return ASPECT_OTHER
    ratio = width / height
    if abs(ratio - 16 / 9) < ASPECT_TOLERANCE:
        return ASPECT_LANDSCAPE
    if abs(ratio - 9 / 16) < ASPECT_TOLERANCE:
        return ASPECT_PORTRAIT
    return ASPECT_OTHER


def _run(cmd: list[str], timeout: int | None) -> subprocess.CompletedProcess:
    tool = Path(cmd[0]).name
    if timeout is None:
        timeout = get_settings().media_tool_timeout_seconds
    try:
        proc = subprocess.run(cmd, capture_output=True, timeout=timeout)
    except subprocess.TimeoutExpired:
        raise MediaToolError(f"{tool} timed out after {timeout}s")
    except FileNotFoundError:
        raise MediaToolError(f"{tool} not found; install FFmpeg")
    if proc.returncode != 0:
        raise MediaToolError(f"{tool} error: {proc.stderr.decode(errors='replace').strip()}")
    return proc


def probe_aspect_ratio(file_path: Path, timeout: int | None = None) -> str:
    """Read width/height of the first video stream and classify it."""
    cmd = [
        get_settings().ffprobe_path,
        "-v", "error",
        "-select_streams", "v:0",
        "-show_entries", "stream=width,height",
        "-of", "json",
        str(file_path),
    ]
    proc = _run(cmd, timeout)

    try:
        output = json.loads(proc.stdout or b"{}")
    except json.JSONDecodeError as e:
        raise MediaToolError(f"ffprobe returned invalid JSON: {e}")

    streams = output.get("streams") or []
    if not streams:
        raise MediaToolError("No video streams found")

    width = streams[0].get("width") or 0
    height = streams[0].get("height") or 0
    aspect = classify_aspect_ratio(width, height)
    logger.info("Probed %s: %sx%s -> %s", file_path, width, height, aspect)
    return aspect


def fast_start_output_path(input_path: Path) -> Path:
    return Path(f"{input_path}{FAST_START_SUFFIX}")


def process_video_for_fast_start(input_path: Path, timeout: int | None = None) -> Path:
    """
    Copy streams (no re-encode) into a new MP4 with the moov atom up front.
    Returns the output path: input path + ".processed".
    """
    output_path = fast_start_output_path(input_path)
    cmd = [
        get_settings().ffmpeg_path,
        "-i", str(input_path),
        "-movflags", "faststart",
        "-map_metadata", "0",
        "-codec", "copy",
        "-f", "mp4",
        str(output_path),
    ]
    _run(cmd, timeout)
    logger.info("Fast-start rewrite completed for %s", input_path)
    return output_path
