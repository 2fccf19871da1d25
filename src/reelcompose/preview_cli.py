"""CLI for timing previews — render a composition's schedule as slates.

Usage:
    reelcompose preview --manifest composition.yaml --output preview.mp4
    reelcompose preview --manifest composition.yaml --output preview.mp4 \
        --width 1280 --height 720 --gpu
"""

import argparse

from .composition_manifest import load_composition_manifest
from .preview import write_preview
from .timeline import composite


def main(args=None):
    parser = argparse.ArgumentParser(
        description="Preview CLI — render the computed timeline as colored slates.",
    )
    parser.add_argument(
        "--manifest", required=True,
        help="Path to YAML composition manifest",
    )
    parser.add_argument(
        "--output", required=True,
        help="Output mp4 path",
    )
    parser.add_argument("--width", type=int, default=640)
    parser.add_argument("--height", type=int, default=360)
    parser.add_argument(
        "--gpu", action="store_true",
        help="Use GPU encoding (h264_nvenc). Default is CPU (libx264).",
    )
    args = parser.parse_args(args)

    if args.width <= 0 or args.height <= 0:
        parser.error("--width and --height must be positive")

    config = load_composition_manifest(args.manifest)
    timeline = composite(config["sections"], config["config"])

    print(
        f"Previewing {len(timeline.section_schedule)} sections, "
        f"{timeline.total_duration_frames} frames ({timeline.duration_seconds:.1f}s)"
    )
    print(f"Resolution: {args.width}x{args.height}, {timeline.fps}fps")
    print(f"Writing to: {args.output}")
    write_preview(
        timeline, args.output,
        resolution=(args.width, args.height),
        codec="h264_nvenc" if args.gpu else "libx264",
    )
    print(f"\nDone: {args.output}")


if __name__ == "__main__":
    main()
