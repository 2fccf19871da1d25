"""Section kinds of the warehouse video.

A section is one top-level narrated segment of the output video. There
are two kinds:
  - NarratedSection: duration driven by its narration audio, optionally
    extended by an author override (satellite view, location, internal
    and external footage, compliance).
  - AnnotationSection: an annotated still image whose duration is the
    aggregate of its layer sub-timeline.

Both implement the DurationSource protocol, so the compositor asks any
section for its resolved duration without knowing which kind it is.
"""

from dataclasses import dataclass
from typing import Protocol

from .config import TimelineConfig
from .durations import SectionDuration, resolve_section_duration
from .layers import AnnotationLayer, LayerSchedule, build_layer_schedule


# ── Known sections ───────────────────────────────────────────────
# Default display order. Bookends (intro/outro) are not sections: they
# are fixed and never reordered.

SECTION_KEYS = (
    "sat_drone",
    "location",
    "approach_road",
    "internal_wide_shot",
    "internal_dock",
    "internal_utilities",
    "docking",
    "compliance",
    "cad_file",
)

SECTION_DISPLAY_NAMES = {
    "sat_drone": "Satellite & Drone",
    "location": "Location Highlights",
    "approach_road": "Approach Road",
    "internal_wide_shot": "Internal Wide Shot",
    "internal_dock": "Internal Dock",
    "internal_utilities": "Internal Utilities",
    "docking": "External Docking",
    "compliance": "Compliances",
    "cad_file": "CAD File / Architecture Diagram",
}

ANNOTATION_SECTION_KEYS = frozenset({"cad_file"})


# ── Section kinds ────────────────────────────────────────────────


class DurationSource(Protocol):
    key: str

    def duration_seconds(self, config: TimelineConfig) -> float: ...

    def resolve(self, config: TimelineConfig) -> SectionDuration: ...

    def resolve_with_layers(
        self, config: TimelineConfig,
    ) -> tuple[SectionDuration, LayerSchedule | None]: ...


@dataclass(frozen=True)
class NarratedSection:
    key: str
    narration_seconds: float = 0.0
    user_set_seconds: float | None = None
    transcript: str = ""

    def duration_seconds(self, config: TimelineConfig) -> float:
        return self.narration_seconds

    def resolve(self, config: TimelineConfig) -> SectionDuration:
        return resolve_section_duration(
            self.narration_seconds,
            self.user_set_seconds,
            padding_seconds=config.narration_padding,
        )

    def resolve_with_layers(self, config: TimelineConfig):
        return self.resolve(config), None


@dataclass(frozen=True)
class AnnotationSection:
    key: str
    layers: tuple[AnnotationLayer, ...] = ()

    def layer_schedule(self, config: TimelineConfig) -> LayerSchedule:
        return build_layer_schedule(self.layers, config.fps, config)

    def duration_seconds(self, config: TimelineConfig) -> float:
        return self.layer_schedule(config).aggregate_duration_seconds

    def resolve(self, config: TimelineConfig) -> SectionDuration:
        return self.resolve_with_layers(config)[0]

    def resolve_with_layers(self, config: TimelineConfig):
        schedule = self.layer_schedule(config)
        aggregate = schedule.aggregate_duration_seconds
        # Layer padding already covers lead-in/out: no section padding.
        resolved = SectionDuration(
            narration_seconds=aggregate,
            minimum_seconds=aggregate,
            actual_seconds=aggregate,
            start_padding=0.0,
            end_padding=0.0,
        )
        return resolved, schedule


Section = NarratedSection | AnnotationSection


def empty_section(key: str) -> Section:
    """A zero-duration section of the right kind for `key`."""
    if key in ANNOTATION_SECTION_KEYS:
        return AnnotationSection(key=key)
    return NarratedSection(key=key)


# ── Ordering ─────────────────────────────────────────────────────


def normalize_section_order(
    order: list[str] | tuple[str, ...] | None,
    known: tuple[str, ...] = SECTION_KEYS,
) -> list[str]:
    """Clean a persisted section order.

    Unknown and duplicate keys are dropped; known keys missing from the
    order are appended in default order. An empty or missing order
    falls back to the default.
    """
    if not order:
        return list(known)

    result = []
    for key in order:
        if key in known and key not in result:
            result.append(key)
    for key in known:
        if key not in result:
            result.append(key)
    return result
