"""Tests for section kinds and section-order normalization."""

import pytest

from reelcompose.config import TimelineConfig
from reelcompose.layers import AnnotationLayer
from reelcompose.sections import (
    ANNOTATION_SECTION_KEYS,
    SECTION_DISPLAY_NAMES,
    SECTION_KEYS,
    AnnotationSection,
    NarratedSection,
    empty_section,
    normalize_section_order,
)


CONFIG = TimelineConfig()


class TestNarratedSection:
    def test_resolves_with_padding(self):
        d = NarratedSection(key="location", narration_seconds=9.0).resolve(CONFIG)
        assert d.actual_seconds == 10.0
        assert d.start_padding == 0.5

    def test_override(self):
        section = NarratedSection(key="location", narration_seconds=9.0, user_set_seconds=14.0)
        assert section.resolve(CONFIG).actual_seconds == 14.0

    def test_duration_source_is_narration(self):
        section = NarratedSection(key="docking", narration_seconds=7.5)
        assert section.duration_seconds(CONFIG) == 7.5

    def test_padding_from_config(self):
        config = TimelineConfig(narration_padding=2.0)
        d = NarratedSection(key="docking", narration_seconds=3.0).resolve(config)
        assert d.actual_seconds == 5.0

    def test_resolve_with_layers_has_no_schedule(self):
        section = NarratedSection(key="location", narration_seconds=9.0)
        resolved, schedule = section.resolve_with_layers(CONFIG)
        assert resolved == section.resolve(CONFIG)
        assert schedule is None


class TestAnnotationSection:
    def _section(self):
        layers = (
            AnnotationLayer(id="a", narration_seconds=2.0),
            AnnotationLayer(id="b", narration_seconds=2.0),
        )
        return AnnotationSection(key="cad_file", layers=layers)

    def test_duration_source_is_layer_aggregate(self):
        assert self._section().duration_seconds(CONFIG) == pytest.approx(4.5)

    def test_resolve_adds_no_padding(self):
        d = self._section().resolve(CONFIG)
        assert d.actual_seconds == pytest.approx(4.5)
        assert d.start_padding == 0.0
        assert d.end_padding == 0.0

    def test_resolve_with_layers_returns_schedule(self):
        resolved, schedule = self._section().resolve_with_layers(CONFIG)
        assert [s.id for s in schedule.layer_frames] == ["a", "b"]
        assert resolved.actual_seconds == schedule.aggregate_duration_seconds

    def test_no_layers_is_zero(self):
        assert AnnotationSection(key="cad_file").resolve(CONFIG).actual_seconds == 0.0


class TestEmptySection:
    def test_annotation_key(self):
        assert isinstance(empty_section("cad_file"), AnnotationSection)

    def test_narrated_key(self):
        section = empty_section("compliance")
        assert isinstance(section, NarratedSection)
        assert section.narration_seconds == 0.0


class TestSectionKeys:
    def test_every_key_has_display_name(self):
        assert set(SECTION_DISPLAY_NAMES) == set(SECTION_KEYS)

    def test_annotation_keys_are_known(self):
        assert ANNOTATION_SECTION_KEYS <= set(SECTION_KEYS)


class TestNormalizeSectionOrder:
    def test_none_falls_back_to_default(self):
        assert normalize_section_order(None) == list(SECTION_KEYS)

    def test_empty_falls_back_to_default(self):
        assert normalize_section_order([]) == list(SECTION_KEYS)

    def test_keeps_custom_order_and_appends_missing(self):
        order = normalize_section_order(["compliance", "sat_drone"])
        assert order[:2] == ["compliance", "sat_drone"]
        assert sorted(order) == sorted(SECTION_KEYS)
        assert order[2] == "location"

    def test_drops_unknown_and_duplicates(self):
        order = normalize_section_order(["docking", "bogus", "docking", "location"])
        assert order[:2] == ["docking", "location"]
        assert "bogus" not in order
        assert len(order) == len(SECTION_KEYS)

    def test_custom_known_set(self):
        assert normalize_section_order(["b"], known=("a", "b")) == ["b", "a"]
