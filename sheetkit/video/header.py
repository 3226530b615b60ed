"""
Header text shown above the thumbnail grid.
"""
from pathlib import Path
from typing import Optional

SIZE_UNITS = ["KB", "MB", "GB", "TB"]


def format_duration(seconds: float) -> str:
    """Format seconds as HH:MM:SS.hh, rounded to the nearest centisecond."""
    total_us = int(round(seconds * 1_000_000)) + 5000
    secs, us = divmod(total_us, 1_000_000)
    mins, secs = divmod(secs, 60)
    hours, mins = divmod(mins, 60)
    return f"{hours:02d}:{mins:02d}:{secs:02d}.{us * 100 // 1_000_000:02d}"


def format_size(kilobytes: float) -> str:
    """Scale a size in KB to the largest fitting unit, up to TB."""
    size = float(kilobytes)
    for unit in SIZE_UNITS[:-1]:
        if size <= 1024:
            return f"{size:.2f}{unit}"
        size /= 1024
    return f"{size:.2f}{SIZE_UNITS[-1]}"


def format_file_size(num_bytes: int) -> str:
    """Human readable file size; whole kilobytes are the smallest unit."""
    return format_size(num_bytes // 1024)


def build_header_text(
    file_name: str,
    width: int,
    height: int,
    file_size: int,
    duration: Optional[float] = None
) -> str:
    """
    Summary lines for a video.

    Args:
        file_name: Name shown on the first line
        width: Native frame width
        height: Native frame height
        file_size: Size of the file in bytes
        duration: Duration in seconds, None to omit the line

    Returns:
        Newline-terminated header text
    """
    lines = [f"File Name: {Path(file_name).name}"]
    if duration is not None:
        lines.append(f"Duration: {format_duration(duration)}")
    lines.append(f"Resolution: {width}x{height}")
    lines.append(f"File Size: {format_file_size(file_size)}")
    return "".join(f"{line}\n" for line in lines)
