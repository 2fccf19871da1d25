"""Tests for the slate timing preview."""

import numpy as np
import pytest

from reelcompose.common import parse_hex_color
from reelcompose.config import TimelineConfig
from reelcompose.layers import AnnotationLayer
from reelcompose.preview import (
    CAPTION_BG,
    SLATE_COLORS,
    build_preview_clip,
    render_caption_patch,
    render_slate_frame,
    write_preview,
)
from reelcompose.sections import AnnotationSection, NarratedSection
from reelcompose.timeline import composite


RES = (160, 90)


def _frame_at(clip, frame_index, fps=30):
    return clip.get_frame(frame_index / fps)


class TestRenderSlateFrame:
    def test_shape_and_background(self):
        frame = render_slate_frame("Intro", "frames 0-150", RES, (10, 20, 30))
        assert frame.shape == (90, 160, 3)
        assert frame.dtype == np.uint8
        # Bottom-right corner is clear of text.
        assert tuple(frame[-1, -1]) == (10, 20, 30)

    def test_title_is_drawn(self):
        frame = render_slate_frame("Intro", "", RES, (0, 0, 0))
        assert frame.max() > 0


class TestRenderCaptionPatch:
    def test_shape(self):
        patch = render_caption_patch("layer-1  0-90", 160, 20)
        assert patch.shape == (20, 160, 3)
        assert tuple(patch[-1, -1]) == CAPTION_BG


class TestBuildPreviewClip:
    def test_duration_matches_timeline(self):
        timeline = composite([NarratedSection(key="sat_drone", narration_seconds=9.0)])
        clip = build_preview_clip(timeline, RES)
        assert clip.duration == pytest.approx(580 / 30)
        assert clip.fps == 30

    def test_starts_black(self):
        timeline = composite([])
        clip = build_preview_clip(timeline, RES)
        assert _frame_at(clip, 0).max() == 0

    def test_section_fully_visible_mid_slot(self):
        timeline = composite([NarratedSection(key="sat_drone", narration_seconds=9.0)])
        clip = build_preview_clip(timeline, RES)
        frame = _frame_at(clip, 290)
        assert tuple(frame[-1, -1]) == parse_hex_color(SLATE_COLORS[0])

    def test_layer_caption_visible_mid_layer(self):
        layers = (
            AnnotationLayer(id="layer-1", narration_seconds=2.0),
            AnnotationLayer(id="layer-2", narration_seconds=2.0),
        )
        timeline = composite([AnnotationSection(key="cad_file", layers=layers)])
        clip = build_preview_clip(timeline, RES)
        # Section starts at 140; layer-1 spans local 0-90, fully on at 45.
        frame = _frame_at(clip, 185)
        assert tuple(frame[-1, -1]) == CAPTION_BG
        # Top of the slate is the section color, not the caption.
        assert tuple(frame[0, -1]) == parse_hex_color(SLATE_COLORS[0])


class TestWritePreview:
    def test_writes_mp4(self, tmp_path):
        config = TimelineConfig(fps=10, intro_seconds=1.0, outro_seconds=1.0, transition_frames=2)
        timeline = composite(
            [NarratedSection(key="docking", narration_seconds=0.5)], config,
        )
        out = tmp_path / "preview" / "timeline.mp4"
        write_preview(timeline, out, resolution=(64, 48), quiet=True)
        assert out.exists()
        assert out.stat().st_size > 0
