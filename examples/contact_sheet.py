"""
Example: Contact Sheets with SheetKit

This example demonstrates how to:
- Inspect a video through MediaSource
- Generate a contact sheet with a derived thumbnail height
- Process several videos, reporting failures per file
"""
import sys
from pathlib import Path
from sheetkit import (
    MediaSource,
    MissingFramePolicy,
    SheetConfig,
    SheetGenerator,
    generate_sheets,
)


def show_video_info(video_path: Path):
    """Display what the sheet header will summarize."""
    with MediaSource(video_path) as source:
        print(f"Video: {video_path.name}")
        print(f"  Resolution: {source.dimensions}")
        print(f"  Duration: {source.duration_seconds}s")
        print(f"  Pixel format: {source.pix_fmt}")


def generate_sheet(video_path: Path, output_dir: Path):
    """Generate a 4x6 sheet with 240px wide thumbnails."""
    config = SheetConfig(
        frame_width=240,
        frame_height=0,
        row_count=4,
        col_count=6,
        output_dir=output_dir,
    )
    sheet = SheetGenerator(config).generate(video_path)

    print(f"Sheet: {sheet.output_path}")
    print(f"  Cell: {sheet.layout.frame_width}x{sheet.layout.frame_height}")
    print(f"  Sampled at: {sheet.timestamps}")
    return sheet


def generate_many(video_paths):
    """Generate sheets for several files, skipping cells past the last frame."""
    config = SheetConfig(missing_frame_policy=MissingFramePolicy.SKIP)

    for outcome in generate_sheets(video_paths, config):
        if outcome.succeeded:
            print(f"OK    {outcome.source_path} -> {outcome.sheet.output_path}")
        else:
            print(f"FAIL  {outcome.source_path}: {outcome.error}")


def main():
    if len(sys.argv) < 2:
        print("Usage: python contact_sheet.py <video_file> [more files...]")
        return

    videos = [Path(arg) for arg in sys.argv[1:]]

    show_video_info(videos[0])
    generate_sheet(videos[0], Path("."))

    if len(videos) > 1:
        generate_many(videos)


if __name__ == "__main__":
    main()
