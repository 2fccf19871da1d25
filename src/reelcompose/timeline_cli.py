"""CLI for timeline computation — print the frame schedule of a composition.

Usage:
    # Human-readable schedule
    reelcompose timeline --manifest composition.yaml

    # Machine-readable schedule for a rendering surface
    reelcompose timeline --manifest composition.yaml --json

    # Validate only (durations + author overrides)
    reelcompose timeline --manifest composition.yaml --validate
"""

import argparse
import json
import sys

from .composition_manifest import find_short_overrides, load_composition_manifest
from .sections import SECTION_DISPLAY_NAMES
from .timeline import Timeline, composite


def print_schedule(timeline: Timeline) -> None:
    """Print the timeline as a table, one row per item."""
    fps = timeline.fps
    print(f"{'start':>7} {'frames':>7} {'pad(s)':>7}  item")
    print(f"{0:>7} {timeline.intro_frames:>7} {'-':>7}  Intro")
    for slot in timeline.section_schedule:
        name = SECTION_DISPLAY_NAMES.get(slot.key, slot.key)
        print(
            f"{slot.start_frame:>7} {slot.duration_frames:>7} "
            f"{slot.start_padding_seconds:>7.2f}  {name}"
        )
        if slot.layer_schedule is not None:
            for layer in slot.layer_schedule.layer_frames:
                print(
                    f"{'':>7} {layer.duration_frames:>7} {'':>7}    "
                    f"layer {layer.id}: {layer.start_frame}-{layer.end_frame}"
                )
    print(f"{timeline.outro_start_frame:>7} {timeline.outro_frames:>7} {'-':>7}  Outro")
    print(
        f"\nTotal: {timeline.total_duration_frames} frames "
        f"({timeline.total_duration_frames / fps:.2f}s at {fps}fps, "
        f"{timeline.transition_frames}-frame transitions)"
    )


def main(args=None):
    parser = argparse.ArgumentParser(
        description="Timeline CLI — compute the frame schedule of a composition.",
    )
    parser.add_argument(
        "--manifest", required=True,
        help="Path to YAML composition manifest",
    )
    parser.add_argument(
        "--json", action="store_true",
        help="Print the schedule as JSON",
    )
    parser.add_argument(
        "--validate", action="store_true",
        help="Validate manifest only — report overrides below their minimum",
    )
    args = parser.parse_args(args)

    config = load_composition_manifest(args.manifest)

    if args.validate:
        warnings = find_short_overrides(config)
        print(f"Composition manifest valid: {len(config['sections'])} sections")
        for i, section in enumerate(config["sections"]):
            resolved = section.resolve(config["config"])
            print(f"  {i}: {section.key} -> {resolved.actual_seconds:.2f}s")
        if warnings:
            print(f"\n{len(warnings)} duration override(s) below minimum:")
            for w in warnings:
                print(f"  - {w}")
            sys.exit(1)
        print("All durations valid.")
        return

    timeline = composite(config["sections"], config["config"])
    if args.json:
        print(json.dumps(timeline.to_dict(), indent=2))
    else:
        print_schedule(timeline)


if __name__ == "__main__":
    main()
