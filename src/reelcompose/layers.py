"""Annotation sub-timeline — overlapping layers inside one section.

The annotated still-image section shows a base image with a sequence of
drawn annotation layers, each with its own narration. Layers are placed
on a section-local timeline:

    layer 0  [==fade==|----narration----|==fade==]
    layer 1                             [==fade==|----narration----|==fade==]
                                        ^ overlap = fade_frames

Each layer lasts narration + layer_padding seconds (padding split into
fade-in and fade-out, never author-overridden). Consecutive layers
overlap by the fade length. The first layer's fade-in overlaps the
outer section transition, which the compositor handles, so there is no
leading overlap here.

The section's duration on the outer timeline is the aggregate of the
padded layer durations, minus the per-junction overlap, minus the
trailing pad (the outer transition covers it).
"""

from dataclasses import dataclass, replace

from .common import seconds_to_frames
from .config import TimelineConfig
from .envelope import envelope


@dataclass(frozen=True)
class AnnotationLayer:
    id: str
    narration_seconds: float
    name: str = ""
    transcript: str = ""
    order: int = 0


@dataclass(frozen=True)
class LayerSlot:
    """A scheduled layer, frames relative to the section's local origin."""

    id: str
    start_frame: int
    end_frame: int

    @property
    def duration_frames(self) -> int:
        return self.end_frame - self.start_frame

    def opacity(self, local_frame: float, fade_frames: int) -> float:
        """Blend factor of this layer at a section-local frame."""
        return envelope(local_frame - self.start_frame, self.duration_frames, fade_frames)


@dataclass(frozen=True)
class LayerSchedule:
    layer_frames: tuple[LayerSlot, ...]
    aggregate_duration_seconds: float
    fade_frames: int

    def slot(self, layer_id: str) -> LayerSlot | None:
        for s in self.layer_frames:
            if s.id == layer_id:
                return s
        return None

    def layer_opacity(self, layer_id: str, local_frame: float) -> float:
        """Blend factor of a layer by id (0 for unscheduled layers)."""
        s = self.slot(layer_id)
        if s is None:
            return 0.0
        return s.opacity(local_frame, self.fade_frames)

    def to_dict(self) -> dict:
        return {
            "aggregate_duration_seconds": self.aggregate_duration_seconds,
            "fade_frames": self.fade_frames,
            "layers": [
                {"id": s.id, "start_frame": s.start_frame, "end_frame": s.end_frame}
                for s in self.layer_frames
            ],
        }


def build_layer_schedule(
    layers: list[AnnotationLayer] | tuple[AnnotationLayer, ...],
    fps: int,
    config: TimelineConfig | None = None,
) -> LayerSchedule:
    """Schedule annotation layers on the section-local timeline.

    Args:
        layers: Layers in display order.
        fps: Frame rate for seconds-to-frames conversion.
        config: Padding/fade constants. Defaults to TimelineConfig().
            Its fps is replaced by `fps`.

    Returns:
        LayerSchedule with one slot per layer of non-zero duration and
        the aggregate duration to report to the outer compositor.

    The aggregate sums and counts only the scheduled layers: a layer
    skipped for zero duration adds no padding and removes no fade
    junction. With a positive layer_padding every layer is scheduled, so
    this only matters when layer_padding is 0 and a layer has no
    narration.
    """
    config = (config or TimelineConfig()).with_fps(fps)
    fade_frames = config.layer_fade_frames

    slots = []
    padded_total = 0.0
    cursor = 0
    for layer in layers:
        padded = layer.narration_seconds + config.layer_padding
        duration_frames = seconds_to_frames(padded, fps)
        if duration_frames <= 0:
            continue
        start = cursor
        end = start + duration_frames
        slots.append(LayerSlot(id=layer.id, start_frame=start, end_frame=end))
        padded_total += padded
        # Next layer's fade-in overlaps this layer's fade-out.
        cursor = end - fade_frames

    if slots:
        junctions = len(slots) - 1
        aggregate = max(
            padded_total
            - config.layer_fade_seconds * junctions
            - config.annotation_trailing_seconds,
            0.0,
        )
    else:
        aggregate = 0.0

    return LayerSchedule(
        layer_frames=tuple(slots),
        aggregate_duration_seconds=aggregate,
        fade_frames=fade_frames,
    )


def renumber_layers(layers: list[AnnotationLayer]) -> list[AnnotationLayer]:
    """Rewrite each layer's `order` to its list index after a reorder/delete."""
    return [replace(layer, order=i) for i, layer in enumerate(layers)]
