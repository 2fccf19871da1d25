"""Section duration resolver.

A narrated section must stay on screen for its narration plus a fixed
padding (0.5s of silence before and after by default). An author may
set a longer duration; a shorter one is ignored. The extra time over
the narration is split evenly into start and end padding, which the
audio track uses as leading/trailing silence.

Sections with no narration take the author's duration as-is (or zero,
which excludes them from the timeline).
"""

from dataclasses import dataclass

from .common import NARRATION_PADDING_SECONDS


@dataclass(frozen=True)
class SectionDuration:
    """Resolved timing of one section, all values in seconds."""

    narration_seconds: float
    minimum_seconds: float
    actual_seconds: float
    start_padding: float
    end_padding: float


def minimum_section_duration(
    narration_seconds: float,
    padding_seconds: float = NARRATION_PADDING_SECONDS,
) -> float:
    """Shortest allowed on-screen duration for a section (0 if unnarrated)."""
    if narration_seconds <= 0:
        return 0.0
    return narration_seconds + padding_seconds


def resolve_section_duration(
    narration_seconds: float,
    user_set_seconds: float | None = None,
    padding_seconds: float = NARRATION_PADDING_SECONDS,
) -> SectionDuration:
    """Resolve a section's effective duration and symmetric padding.

    Args:
        narration_seconds: Length of the narration audio (>= 0).
        user_set_seconds: Optional author override. Can only extend the
            section past its minimum, never shrink it.
        padding_seconds: Total silence added around the narration.

    Returns:
        SectionDuration with start_padding == end_padding.
    """
    if narration_seconds <= 0:
        actual = user_set_seconds if user_set_seconds is not None else 0.0
        return SectionDuration(
            narration_seconds=narration_seconds,
            minimum_seconds=0.0,
            actual_seconds=actual,
            start_padding=0.0,
            end_padding=0.0,
        )

    minimum = minimum_section_duration(narration_seconds, padding_seconds)
    requested = user_set_seconds if user_set_seconds is not None else minimum
    actual = max(requested, minimum)
    half_extra = (actual - narration_seconds) / 2
    return SectionDuration(
        narration_seconds=narration_seconds,
        minimum_seconds=minimum,
        actual_seconds=actual,
        start_padding=half_extra,
        end_padding=half_extra,
    )


def validate_user_duration(
    narration_seconds: float,
    user_set_seconds: float | None,
    padding_seconds: float = NARRATION_PADDING_SECONDS,
) -> str | None:
    """Return an error message if an override is below the minimum, else None.

    This is the rule an editor applies before submission. The resolver
    clamps silently, so callers that accept user input should surface
    this message instead of relying on the clamp.
    """
    if user_set_seconds is None or narration_seconds <= 0:
        return None
    minimum = minimum_section_duration(narration_seconds, padding_seconds)
    if user_set_seconds < minimum:
        return (
            f"Section duration must be at least {minimum:.1f} seconds "
            f"(audio length + {padding_seconds:g}s buffer)"
        )
    return None
