r"""Crossfade envelope — blend factor across a bounded interval.

The same envelope drives both levels of the timeline:
  - section transitions: fade = the global transition overlap (frames).
  - annotation layers: fade = the layer crossfade length (frames).

Shape for a clip of `total` frames with a `fade`-frame ramp:

    total > 2 * fade (trapezoid)        total <= 2 * fade (triangle)

    1 ┤    ┌──────────┐                 1 ┤      /\
      │   /            \                  │     /  \
    0 ┼──┘              └──             0 ┼────┘    └────
      0  fade    total-fade  total        0   total/2   total

Outside [0, total] the value clamps to 0 at both ends.
"""

import numpy as np


def _knots(total_frames: float, fade_frames: float) -> tuple[list[float], list[float]]:
    """Breakpoints (x, y) of the piecewise-linear envelope."""
    if total_frames > 2 * fade_frames:
        return (
            [0.0, fade_frames, total_frames - fade_frames, total_frames],
            [0.0, 1.0, 1.0, 0.0],
        )
    # Too short for a plateau: peak at the midpoint instead of clipping.
    return [0.0, total_frames / 2, total_frames], [0.0, 1.0, 0.0]


def envelope(elapsed_frames: float, total_frames: float, fade_frames: float) -> float:
    """Blend factor in [0, 1] at `elapsed_frames` into a clip.

    A non-positive `fade_frames` gives hard edges: 1 strictly inside
    (0, total), 0 at and beyond the boundaries. A non-positive
    `total_frames` is always 0.
    """
    if total_frames <= 0:
        return 0.0
    if fade_frames <= 0:
        return 1.0 if 0 < elapsed_frames < total_frames else 0.0
    xp, fp = _knots(total_frames, fade_frames)
    # np.interp clamps to the end values (both 0) outside [0, total].
    return float(np.interp(elapsed_frames, xp, fp))


def envelope_curve(total_frames: int, fade_frames: float) -> np.ndarray:
    """Envelope sampled at every integer frame 0..total_frames inclusive."""
    frames = np.arange(max(total_frames, 0) + 1, dtype=float)
    if total_frames <= 0:
        return np.zeros_like(frames)
    if fade_frames <= 0:
        curve = np.ones_like(frames)
        curve[0] = 0.0
        curve[-1] = 0.0
        return curve
    xp, fp = _knots(total_frames, fade_frames)
    return np.interp(frames, xp, fp)
