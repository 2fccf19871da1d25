"""Timeline configuration.

Every timing constant the engine uses lives here and is passed into
the pure functions explicitly. Defaults reproduce the warehouse video:
30fps, 5s intro/outro, 10-frame transitions, 1s narration padding,
layers with 1s padding and 0.5s crossfades.
"""

from dataclasses import dataclass, replace

from .common import (
    ANNOTATION_TRAILING_SECONDS,
    DEFAULT_FPS,
    INTRO_SECONDS,
    LAYER_FADE_SECONDS,
    LAYER_PADDING_SECONDS,
    NARRATION_PADDING_SECONDS,
    OUTRO_SECONDS,
    TRANSITION_FRAMES,
    seconds_to_frames,
)


@dataclass(frozen=True)
class TimelineConfig:
    fps: int = DEFAULT_FPS
    intro_seconds: float = INTRO_SECONDS
    outro_seconds: float = OUTRO_SECONDS
    # Expressed in frames, not seconds: unaffected by fps.
    transition_frames: int = TRANSITION_FRAMES
    narration_padding: float = NARRATION_PADDING_SECONDS
    layer_padding: float = LAYER_PADDING_SECONDS
    layer_fade_seconds: float = LAYER_FADE_SECONDS
    annotation_trailing_seconds: float = ANNOTATION_TRAILING_SECONDS

    @property
    def intro_frames(self) -> int:
        return seconds_to_frames(self.intro_seconds, self.fps)

    @property
    def outro_frames(self) -> int:
        return seconds_to_frames(self.outro_seconds, self.fps)

    @property
    def layer_fade_frames(self) -> int:
        return seconds_to_frames(self.layer_fade_seconds, self.fps)

    def with_fps(self, fps: int) -> "TimelineConfig":
        """Copy of this config at a different frame rate."""
        return replace(self, fps=fps)
