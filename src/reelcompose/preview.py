"""Timing preview — render a computed timeline as colored slates.

Each timeline item (intro, placed sections, outro) becomes a solid
slate with its name and frame range. Items are alpha-blended over
black using the same crossfade envelope the real renderer uses, so
overlaps and fades show up exactly where the schedule puts them.
Annotation layers appear as captions along the bottom of their
section's slate, each fading with its own layer envelope.

No media is decoded: this checks *when* and *for how long*, not
*what* plays.
"""

from dataclasses import dataclass, field
from pathlib import Path

import numpy as np
from PIL import Image
from moviepy import VideoClip

from .common import load_font, parse_hex_color, render_text_on_image
from .envelope import envelope
from .layers import LayerSlot
from .sections import SECTION_DISPLAY_NAMES
from .timeline import Timeline


# ── Constants ────────────────────────────────────────────────────

BOOKEND_COLOR = "#1A1A1A"
SLATE_COLORS = [
    "#B1134D", "#1F6F8B", "#3E8E41", "#C97C1A",
    "#6A3FA0", "#2A9D8F", "#A23B72", "#4D6A9A",
]
TEXT_COLOR = (235, 235, 235)
CAPTION_BG = (20, 20, 20)

_REF_H = 360
_REF_TITLE_FONT = 28
_REF_SUBTITLE_FONT = 16
_REF_MARGIN = 20
_CAPTION_FRAC = 0.14     # caption band height as a fraction of frame height


def _scale(ref: int, h: int) -> int:
    return max(8, round(ref * h / _REF_H))


# ── Slate rendering ──────────────────────────────────────────────


def render_slate_frame(
    title: str,
    subtitle: str,
    resolution: tuple[int, int],
    color: tuple[int, int, int],
) -> np.ndarray:
    """Render a solid slate with a title and a smaller subtitle line.

    Returns:
        numpy array of shape (height, width, 3), dtype uint8.
    """
    w, h = resolution
    img = Image.new("RGB", (w, h), color)
    margin = _scale(_REF_MARGIN, h)
    title_h = render_text_on_image(
        img, title, (margin, margin), load_font(_scale(_REF_TITLE_FONT, h)),
        TEXT_COLOR, max_width=w - 2 * margin,
    )
    render_text_on_image(
        img, subtitle, (margin, margin + title_h + margin // 2),
        load_font(_scale(_REF_SUBTITLE_FONT, h)), TEXT_COLOR,
        max_width=w - 2 * margin,
    )
    return np.array(img)


def render_caption_patch(text: str, width: int, height: int) -> np.ndarray:
    """Render a dark caption band used for annotation layers."""
    img = Image.new("RGB", (width, height), CAPTION_BG)
    font = load_font(max(8, height // 3))
    render_text_on_image(
        img, text, (height // 3, height // 4), font, TEXT_COLOR,
        max_width=width - height,
    )
    return np.array(img)


@dataclass
class _PreviewItem:
    start_frame: int
    duration_frames: int
    slate: np.ndarray
    captions: list[tuple[LayerSlot, np.ndarray]] = field(default_factory=list)
    caption_fade_frames: int = 0

    def frame_at(self, local_frame: float) -> np.ndarray:
        """Slate at a local frame, with fading layer captions blended in."""
        frame = self.slate.astype(float)
        for layer_slot, patch in self.captions:
            alpha = layer_slot.opacity(local_frame, self.caption_fade_frames)
            if alpha <= 0:
                continue
            ph = patch.shape[0]
            band = frame[-ph:]
            frame[-ph:] = band * (1 - alpha) + patch * alpha
        return frame


def _preview_items(timeline: Timeline, resolution: tuple[int, int]) -> list[_PreviewItem]:
    w, h = resolution
    fps = timeline.fps
    bookend = parse_hex_color(BOOKEND_COLOR)

    items = [_PreviewItem(
        start_frame=0,
        duration_frames=timeline.intro_frames,
        slate=render_slate_frame(
            "Intro", f"frames 0-{timeline.intro_frames}", resolution, bookend,
        ),
    )]

    caption_h = max(8, round(h * _CAPTION_FRAC))
    for i, slot in enumerate(timeline.section_schedule):
        color = parse_hex_color(SLATE_COLORS[i % len(SLATE_COLORS)])
        title = SECTION_DISPLAY_NAMES.get(slot.key, slot.key)
        subtitle = (
            f"frames {slot.start_frame}-{slot.end_frame} "
            f"({slot.duration_frames / fps:.2f}s, pad {slot.start_padding_seconds:.2f}s)"
        )
        item = _PreviewItem(
            start_frame=slot.start_frame,
            duration_frames=slot.duration_frames,
            slate=render_slate_frame(title, subtitle, resolution, color),
        )
        if slot.layer_schedule is not None:
            item.caption_fade_frames = slot.layer_schedule.fade_frames
            for layer_slot in slot.layer_schedule.layer_frames:
                text = f"{layer_slot.id}  {layer_slot.start_frame}-{layer_slot.end_frame}"
                item.captions.append(
                    (layer_slot, render_caption_patch(text, w, caption_h))
                )
        items.append(item)

    items.append(_PreviewItem(
        start_frame=timeline.outro_start_frame,
        duration_frames=timeline.outro_frames,
        slate=render_slate_frame(
            "Outro",
            f"frames {timeline.outro_start_frame}-{timeline.total_duration_frames}",
            resolution, bookend,
        ),
    ))
    return items


def build_preview_clip(
    timeline: Timeline,
    resolution: tuple[int, int] = (640, 360),
) -> VideoClip:
    """Build a moviepy clip that plays the timeline as blended slates.

    Later items are composited over earlier ones, each weighted by its
    envelope with the timeline's transition length as fade.

    Returns:
        VideoClip of duration total_duration_frames / fps.
    """
    w, h = resolution
    fps = timeline.fps
    transition = timeline.transition_frames
    items = _preview_items(timeline, resolution)

    def make_frame(t):
        f = t * fps
        out = np.zeros((h, w, 3), dtype=float)
        for item in items:
            local = f - item.start_frame
            alpha = envelope(local, item.duration_frames, transition)
            if alpha <= 0:
                continue
            out = out * (1 - alpha) + item.frame_at(local) * alpha
        return np.clip(out, 0, 255).astype(np.uint8)

    duration = timeline.total_duration_frames / fps
    return VideoClip(make_frame, duration=duration).with_fps(fps)


def write_preview(
    timeline: Timeline,
    output_path: str | Path,
    resolution: tuple[int, int] = (640, 360),
    codec: str = "libx264",
    quiet: bool = False,
) -> None:
    """Render the preview clip to an mp4 file."""
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    clip = build_preview_clip(timeline, resolution)
    if codec == "h264_nvenc":
        ffmpeg_params = ["-cq", "20", "-pix_fmt", "yuv420p"]
    else:
        ffmpeg_params = ["-crf", "20", "-pix_fmt", "yuv420p"]
    clip.write_videofile(
        str(output_path),
        fps=timeline.fps,
        codec=codec,
        audio=False,
        ffmpeg_params=ffmpeg_params,
        logger=None if quiet else "bar",
    )
    clip.close()
