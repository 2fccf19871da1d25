"""Tests for the crossfade envelope.

Covers the trapezoid (long clip) and triangle (short clip) shapes,
clamping outside the clip, degenerate totals/fades, and agreement
between the scalar function and the sampled curve.
"""

import warnings
from pathlib import Path

import numpy as np
import pytest

import reelcompose.envelope as envelope_module
from reelcompose.envelope import envelope, envelope_curve


class TestTrapezoid:
    def test_zero_at_both_ends(self):
        assert envelope(0, 100, 10) == 0.0
        assert envelope(100, 100, 10) == 0.0

    def test_full_hold_at_midpoint(self):
        assert envelope(50, 100, 10) == 1.0

    def test_plateau_edges(self):
        assert envelope(10, 100, 10) == 1.0
        assert envelope(90, 100, 10) == 1.0

    def test_linear_ramps(self):
        assert envelope(5, 100, 10) == pytest.approx(0.5)
        assert envelope(95, 100, 10) == pytest.approx(0.5)
        assert envelope(2.5, 100, 10) == pytest.approx(0.25)


class TestTriangle:
    def test_peak_at_midpoint_when_shorter_than_two_fades(self):
        # 10 frames with 10-frame fades: no plateau possible.
        assert envelope(5, 10, 10) == 1.0
        assert envelope(2.5, 10, 10) == pytest.approx(0.5)
        assert envelope(7.5, 10, 10) == pytest.approx(0.5)

    def test_exactly_two_fades_peaks_once(self):
        assert envelope(10, 20, 10) == 1.0
        assert envelope(5, 20, 10) == pytest.approx(0.5)

    def test_maximum_over_clip_is_at_midpoint(self):
        curve = envelope_curve(12, 15)
        assert int(np.argmax(curve)) == 6
        assert curve.max() == 1.0

    def test_ends_still_zero(self):
        assert envelope(0, 10, 10) == 0.0
        assert envelope(10, 10, 10) == 0.0


class TestClamping:
    def test_before_start_is_zero(self):
        assert envelope(-5, 100, 10) == 0.0

    def test_after_end_is_zero(self):
        assert envelope(150, 100, 10) == 0.0

    def test_never_outside_unit_interval(self):
        for t in range(-20, 130, 3):
            v = envelope(t, 100, 10)
            assert 0.0 <= v <= 1.0


class TestDegenerate:
    def test_zero_total_is_always_zero(self):
        assert envelope(0, 0, 10) == 0.0
        assert envelope(5, 0, 10) == 0.0

    def test_zero_fade_is_hard_edged(self):
        assert envelope(0, 30, 0) == 0.0
        assert envelope(1, 30, 0) == 1.0
        assert envelope(29, 30, 0) == 1.0
        assert envelope(30, 30, 0) == 0.0


class TestEnvelopeCurve:
    def test_length_covers_both_ends(self):
        assert len(envelope_curve(30, 10)) == 31

    def test_matches_scalar_envelope(self):
        for total, fade in [(100, 10), (12, 15), (20, 10), (30, 0)]:
            curve = envelope_curve(total, fade)
            expected = [envelope(f, total, fade) for f in range(total + 1)]
            assert np.allclose(curve, expected)

    def test_zero_total(self):
        curve = envelope_curve(0, 10)
        assert curve.tolist() == [0.0]


class TestModuleSource:
    def test_compiles_without_warnings(self):
        path = Path(envelope_module.__file__)
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            compile(path.read_text(encoding="utf-8"), str(path), "exec")
