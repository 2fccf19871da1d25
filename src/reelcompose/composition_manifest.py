"""Composition manifest loader — the validation layer in front of the engine.

Parses YAML manifests describing one composition snapshot: timing
settings, the section order, and per-section narration lengths (plus
the annotation layers of the annotated still-image section). Malformed
durations are rejected here so the compositor only ever sees finite,
non-negative numbers.

Composition manifest schema:
  video:
    fps: 30
    intro: 5                      # seconds, optional
    outro: 5                      # seconds, optional
    transition_frames: 10         # optional
    padding: 1.0                  # narration padding, optional
    layer_padding: 1.0            # optional
    layer_fade: 0.5               # optional
    annotation_trailing_pad: 1.0  # optional
  section_order: [sat_drone, location, cad_file, ...]
  sections:
    sat_drone:
      narration: 9.0              # narration audio length in seconds
      duration: 12.0              # optional author override
      transcript: "..."
    cad_file:
      layers:
        - id: layer-1
          narration: 2.0
          name: "Layer 1"
"""

import math

import yaml

from .config import TimelineConfig
from .durations import validate_user_duration
from .layers import AnnotationLayer
from .sections import (
    ANNOTATION_SECTION_KEYS,
    SECTION_KEYS,
    AnnotationSection,
    NarratedSection,
    empty_section,
    normalize_section_order,
)


# Optional video.* settings → TimelineConfig field.
VIDEO_SECONDS_FIELDS = {
    "intro": "intro_seconds",
    "outro": "outro_seconds",
    "padding": "narration_padding",
    "layer_padding": "layer_padding",
    "layer_fade": "layer_fade_seconds",
    "annotation_trailing_pad": "annotation_trailing_seconds",
}


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_seconds(value, where: str) -> float:
    """Validate a duration: a finite number >= 0."""
    if not _is_number(value) or not math.isfinite(value) or value < 0:
        raise ValueError(f"{where} must be a finite number >= 0, got {value!r}")
    return float(value)


def _load_video(raw: dict) -> tuple[dict, TimelineConfig]:
    if "video" not in raw or not isinstance(raw["video"], dict):
        raise ValueError("Composition manifest: missing required 'video' section")

    video = raw["video"]
    if "fps" not in video:
        raise ValueError("Composition manifest: video.fps is required")
    fps = video["fps"]
    if not isinstance(fps, int) or isinstance(fps, bool) or fps <= 0:
        raise ValueError(
            f"Composition manifest: video.fps must be a positive integer, got {fps!r}"
        )

    kwargs = {"fps": fps}
    for field, attr in VIDEO_SECONDS_FIELDS.items():
        if field in video:
            kwargs[attr] = _check_seconds(
                video[field], f"Composition manifest: video.{field}",
            )

    if "transition_frames" in video:
        t = video["transition_frames"]
        if not isinstance(t, int) or isinstance(t, bool) or t < 0:
            raise ValueError(
                "Composition manifest: video.transition_frames must be an "
                f"integer >= 0, got {t!r}"
            )
        kwargs["transition_frames"] = t

    return video, TimelineConfig(**kwargs)


def _load_layers(key: str, raw_layers) -> tuple[AnnotationLayer, ...]:
    if not isinstance(raw_layers, list):
        raise ValueError(f"Section '{key}': 'layers' must be a list")

    layers = []
    seen_ids = set()
    for i, raw in enumerate(raw_layers):
        if not isinstance(raw, dict) or "id" not in raw:
            raise ValueError(f"Section '{key}': layer {i} missing required field 'id'")
        lid = str(raw["id"])
        if lid in seen_ids:
            raise ValueError(f"Section '{key}': duplicate layer id '{lid}'")
        seen_ids.add(lid)

        narration = _check_seconds(
            raw.get("narration", 0), f"Section '{key}': layer {i} ({lid}) narration",
        )
        layers.append(AnnotationLayer(
            id=lid,
            narration_seconds=narration,
            name=str(raw.get("name", f"Layer {i + 1}")),
            transcript=str(raw.get("transcript", "")),
            order=i,
        ))
    return tuple(layers)


def _load_section(key: str, raw):
    if raw is None:
        return empty_section(key)
    if not isinstance(raw, dict):
        raise ValueError(f"Section '{key}': expected a mapping, got {type(raw).__name__}")

    if key in ANNOTATION_SECTION_KEYS:
        for field in ("narration", "duration"):
            if field in raw:
                raise ValueError(
                    f"Section '{key}': '{field}' is not allowed on an annotation "
                    "section (its duration comes from its layers)"
                )
        return AnnotationSection(key=key, layers=_load_layers(key, raw.get("layers", [])))

    if "layers" in raw:
        raise ValueError(f"Section '{key}': 'layers' is only allowed on annotation sections")

    narration = _check_seconds(raw.get("narration", 0), f"Section '{key}': narration")
    user_set = None
    if raw.get("duration") is not None:
        user_set = _check_seconds(raw["duration"], f"Section '{key}': duration")
    return NarratedSection(
        key=key,
        narration_seconds=narration,
        user_set_seconds=user_set,
        transcript=str(raw.get("transcript", "")),
    )


def load_composition_manifest(manifest_path) -> dict:
    """Load, validate, and normalize a composition manifest.

    Processing pipeline:
      1. Parse YAML.
      2. Validate video settings and build the TimelineConfig.
      3. Normalize the section order (unknown/duplicate keys dropped,
         missing known keys appended).
      4. Validate each section's durations (and layers), in order.
         Sections without an entry are empty and drop out of the timeline.

    Args:
        manifest_path: Path to the YAML composition manifest.

    Returns:
        Dict with 'video', 'config' (TimelineConfig), 'section_order',
        and 'sections' (section objects in display order).

    Raises:
        ValueError: Missing/invalid fields.
    """
    with open(manifest_path) as f:
        raw = yaml.safe_load(f)

    if not isinstance(raw, dict):
        raise ValueError("Composition manifest: expected a mapping at the top level")

    video, timeline_config = _load_video(raw)

    raw_sections = raw.get("sections") or {}
    if not isinstance(raw_sections, dict):
        raise ValueError("Composition manifest: 'sections' must be a mapping of key -> section")
    for key in raw_sections:
        if key not in SECTION_KEYS:
            raise ValueError(
                f"Composition manifest: unknown section '{key}'. "
                f"Valid: {sorted(SECTION_KEYS)}"
            )

    raw_order = raw.get("section_order")
    if raw_order is not None and not isinstance(raw_order, list):
        raise ValueError("Composition manifest: 'section_order' must be a list of section keys")
    order = normalize_section_order(raw_order)
    sections = [_load_section(key, raw_sections.get(key)) for key in order]

    return {
        "video": video,
        "config": timeline_config,
        "section_order": order,
        "sections": sections,
    }


def find_short_overrides(config: dict) -> list[str]:
    """Collect warnings for author overrides below their section's minimum.

    The compositor clamps these silently; editors should show the
    messages before accepting the manifest.
    """
    padding = config["config"].narration_padding
    warnings = []
    for section in config["sections"]:
        if not isinstance(section, NarratedSection):
            continue
        msg = validate_user_duration(
            section.narration_seconds, section.user_set_seconds, padding,
        )
        if msg:
            warnings.append(f"{section.key}: {msg}")
    return warnings
