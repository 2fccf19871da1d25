"""Timeline compositor — place sections between the intro and outro.

Every two temporally adjacent items (intro -> first section, section ->
section, last section -> outro) overlap by a fixed number of frames and
crossfade across it:

    intro   [==========]
    sec A            [=================]
    sec B                            [===========]
    outro                                      [==========]
                     ^T              ^T        ^T

The algorithm walks sections left-to-right with a running cursor that
starts T frames before the end of the intro. Each placed section
advances the cursor by its duration minus T. Sections that resolve to
zero frames are omitted entirely: they consume no timeline space and no
transition, so with nothing placed the outro still overlaps the intro
by exactly one transition.

Input is assumed validated (finite, non-negative); see
composition_manifest for the validation layer.
"""

from dataclasses import dataclass

from .common import seconds_to_frames
from .config import TimelineConfig
from .envelope import envelope
from .layers import LayerSchedule
from .sections import Section


@dataclass(frozen=True)
class SectionSlot:
    key: str
    start_frame: int
    duration_frames: int
    start_padding_seconds: float
    layer_schedule: LayerSchedule | None = None

    @property
    def end_frame(self) -> int:
        return self.start_frame + self.duration_frames


@dataclass(frozen=True)
class Timeline:
    section_schedule: tuple[SectionSlot, ...]
    total_duration_frames: int
    fps: int
    intro_frames: int
    outro_frames: int
    outro_start_frame: int
    transition_frames: int

    @property
    def duration_seconds(self) -> float:
        return self.total_duration_frames / self.fps

    def slot(self, key: str) -> SectionSlot | None:
        for s in self.section_schedule:
            if s.key == key:
                return s
        return None

    def to_dict(self) -> dict:
        sections = []
        for s in self.section_schedule:
            entry = {
                "key": s.key,
                "start_frame": s.start_frame,
                "duration_frames": s.duration_frames,
                "start_padding_seconds": s.start_padding_seconds,
            }
            if s.layer_schedule is not None:
                entry["layer_schedule"] = s.layer_schedule.to_dict()
            sections.append(entry)
        return {
            "fps": self.fps,
            "intro": {"start_frame": 0, "duration_frames": self.intro_frames},
            "sections": sections,
            "outro": {
                "start_frame": self.outro_start_frame,
                "duration_frames": self.outro_frames,
            },
            "transition_frames": self.transition_frames,
            "total_duration_frames": self.total_duration_frames,
        }


def composite(
    ordered_sections: list[Section],
    config: TimelineConfig | None = None,
) -> Timeline:
    """Compute the frame schedule for sections in the given order.

    Args:
        ordered_sections: Sections in display order.
        config: Timing constants. Defaults to TimelineConfig().

    Returns:
        Timeline with one SectionSlot per section of non-zero duration
        and the total length in frames.
    """
    config = config or TimelineConfig()
    fps = config.fps
    transition = config.transition_frames
    intro_frames = config.intro_frames
    outro_frames = config.outro_frames

    slots = []
    cursor = intro_frames - transition

    for section in ordered_sections:
        resolved, layer_schedule = section.resolve_with_layers(config)

        duration_frames = seconds_to_frames(resolved.actual_seconds, fps)
        if duration_frames <= 0:
            continue

        slots.append(SectionSlot(
            key=section.key,
            start_frame=cursor,
            duration_frames=duration_frames,
            start_padding_seconds=resolved.start_padding,
            layer_schedule=layer_schedule,
        ))
        cursor += duration_frames - transition

    outro_start = cursor
    return Timeline(
        section_schedule=tuple(slots),
        total_duration_frames=outro_start + outro_frames,
        fps=fps,
        intro_frames=intro_frames,
        outro_frames=outro_frames,
        outro_start_frame=outro_start,
        transition_frames=transition,
    )


def section_opacity(
    slot: SectionSlot, timeline_frame: float, transition_frames: int,
) -> float:
    """Blend factor of a placed section at an absolute timeline frame."""
    return envelope(
        timeline_frame - slot.start_frame, slot.duration_frames, transition_frames,
    )
