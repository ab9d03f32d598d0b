"""
Tests for attribute blending.

Covers:
- Optional-field defaults (alpha coupling)
- GONE collapse of anchors and alpha
- Visibility rule
- Custom colors / floats
- Attribute keyframes and cycles
"""

import pytest

from models.enums import Visibility, WaveShape
from models.color import RGBA
from models.frame_snapshot import FrameSnapshot
from models.keyframes import AttributeKeyframe, CycleKeyframe, TimeCycleKeyframe
from engine.attribute_blender import (
    FIELD_DEFAULTS,
    apply_cycles,
    blend_color,
    blend_custom_attributes,
    blend_optional,
    blend_transform,
    blend_visibility,
    collapse_for_visibility,
)


class TestBlendOptional:

    def test_both_unset(self):
        assert blend_optional(None, None, 1.0, 0.5) is None

    def test_alpha_default_coupling(self):
        assert blend_optional(None, 0.2, FIELD_DEFAULTS["alpha"], 0.0) == 1.0
        assert blend_optional(None, 0.2, FIELD_DEFAULTS["alpha"], 1.0) == pytest.approx(0.2)

    def test_end_unset_uses_default(self):
        assert blend_optional(2.0, None, 1.0, 0.5) == pytest.approx(1.5)

    def test_extrapolates(self):
        assert blend_optional(0.0, 10.0, 0.0, 1.5) == pytest.approx(15.0)

    def test_defaults_table(self):
        assert FIELD_DEFAULTS["scale_x"] == 1.0
        assert FIELD_DEFAULTS["pivot_y"] == 0.5
        assert FIELD_DEFAULTS["rotation_z"] == 0.0


class TestVisibilityCollapse:

    def test_no_gone_keeps_anchors(self, snapshot):
        c = collapse_for_visibility(snapshot(0, 0, 30, 40), snapshot(400, 400, 430, 440))
        a = c.anchors
        assert (a.start_x, a.start_y, a.end_x, a.end_y) == (0, 0, 400, 400)
        assert (a.start_width, a.end_height) == (30, 40)
        assert c.start_alpha is None
        assert c.end_alpha is None

    def test_start_gone_centres_on_start_anchor(self, snapshot):
        start = snapshot(50, 60, 50, 60, visibility=Visibility.GONE)
        end = snapshot(100, 100, 200, 200)
        c = collapse_for_visibility(start, end)
        a = c.anchors

        assert (a.start_width, a.start_height) == (100, 100)
        assert a.start_x + a.start_width / 2 == 50
        assert a.start_y + a.start_height / 2 == 60
        assert c.start_alpha == 0.0

    def test_gone_keeps_explicit_alpha(self, snapshot):
        start = snapshot(0, 0, 0, 0, visibility=Visibility.GONE, alpha=0.7)
        c = collapse_for_visibility(start, snapshot(0, 0, 10, 10))
        assert c.start_alpha == 0.7

    def test_end_gone(self, snapshot):
        start = snapshot(0, 0, 40, 20)
        end = snapshot(300, 300, 300, 300, visibility=Visibility.GONE)
        c = collapse_for_visibility(start, end)
        a = c.anchors

        assert (a.end_x, a.end_y) == (280, 290)
        assert (a.end_width, a.end_height) == (40, 20)
        assert c.end_alpha == 0.0


class TestBlendVisibility:

    @pytest.mark.parametrize("progress, expected", [
        (-0.1, Visibility.GONE),
        (0.0, Visibility.GONE),
        (0.5, Visibility.VISIBLE),
        (1.0, Visibility.INVISIBLE),
        (1.2, Visibility.INVISIBLE),
    ])
    def test_endpoints_and_middle(self, progress, expected):
        assert blend_visibility(Visibility.GONE, Visibility.INVISIBLE, progress) is expected

    def test_shared_visibility_kept(self):
        assert blend_visibility(Visibility.INVISIBLE, Visibility.INVISIBLE, 0.5) is Visibility.INVISIBLE


class TestBlendColor:

    def test_midpoint(self):
        result = RGBA()
        blend_color(result, RGBA(0, 0, 0, 0), RGBA(1, 0.5, 0, 1), 0.5)
        assert result.as_tuple() == pytest.approx((0.5, 0.25, 0.0, 0.5))

    def test_clamped_outside_unit_range(self):
        start, end = RGBA(0.2, 0.2, 0.2, 1), RGBA(0.8, 0.8, 0.8, 1)
        result = RGBA()

        blend_color(result, start, end, -0.5)
        assert result == start
        blend_color(result, start, end, 1.5)
        assert result == end
        assert result is not end


class TestBlendCustomAttributes:

    def test_only_shared_names(self, snapshot):
        start, end = snapshot(0, 0, 1, 1), snapshot(0, 0, 1, 1)
        start.add_custom_color("tint", 0, 0, 0)
        start.add_custom_color("glow", 1, 1, 1)
        end.add_custom_color("tint", 1, 1, 1)
        start.add_custom_float("blur", 0.0)
        end.add_custom_float("blur", 4.0)
        end.add_custom_float("only_end", 1.0)

        out = FrameSnapshot()
        blend_custom_attributes(out, start, end, 0.25)

        assert set(out.custom_colors) == {"tint"}
        assert out.get_custom_color("tint").r == pytest.approx(0.25)
        assert out.custom_floats == {"blur": pytest.approx(1.0)}

    def test_reuses_output_colors(self, snapshot):
        start, end = snapshot(0, 0, 1, 1), snapshot(0, 0, 1, 1)
        start.add_custom_color("tint", 0, 0, 0)
        end.add_custom_color("tint", 1, 1, 1)
        out = FrameSnapshot()

        blend_custom_attributes(out, start, end, 0.1)
        held = out.custom_colors["tint"]
        blend_custom_attributes(out, start, end, 0.9)

        assert out.custom_colors["tint"] is held
        assert held.g == pytest.approx(0.9)

    def test_empty_maps_become_none(self, snapshot):
        out = FrameSnapshot()
        out.add_custom_float("stale", 1.0)
        blend_custom_attributes(out, snapshot(0, 0, 1, 1), snapshot(0, 0, 1, 1), 0.5)
        assert out.custom_colors is None
        assert out.custom_floats is None

    def test_float_keyframe_window(self, snapshot):
        start, end = snapshot(0, 0, 1, 1), snapshot(0, 0, 1, 1)
        start.add_custom_float("blur", 0.0)
        end.add_custom_float("blur", 0.0)
        keys = [AttributeKeyframe(50, custom_floats={"blur": 10.0})]

        out = FrameSnapshot()
        blend_custom_attributes(out, start, end, 0.25, keys)
        assert out.get_custom_float("blur") == pytest.approx(5.0)


class TestBlendTransform:

    def test_unset_fields_stay_unset(self, snapshot):
        out = FrameSnapshot(rotation_z=12.0)
        blend_transform(out, snapshot(0, 0, 1, 1), snapshot(0, 0, 1, 1), 0.5, None, None)
        assert out.rotation_z is None
        assert out.alpha is None

    def test_alpha_comes_from_collapsed_values(self, snapshot):
        out = FrameSnapshot()
        blend_transform(out, snapshot(0, 0, 1, 1), snapshot(0, 0, 1, 1), 0.5, 0.0, None)
        assert out.alpha == pytest.approx(0.5)

    def test_scale_default(self, snapshot):
        out = FrameSnapshot()
        blend_transform(out, snapshot(0, 0, 1, 1, scale_x=3.0), snapshot(0, 0, 1, 1), 0.5, None, None)
        assert out.scale_x == pytest.approx(2.0)

    def test_attribute_keyframe_reanchors(self, snapshot):
        keys = [AttributeKeyframe(50, values={"rotation_z": 90.0})]
        start = snapshot(0, 0, 1, 1, rotation_z=0.0)
        end = snapshot(0, 0, 1, 1, rotation_z=0.0)
        out = FrameSnapshot()

        blend_transform(out, start, end, 0.25, None, None, keys)
        assert out.rotation_z == pytest.approx(45.0)

        blend_transform(out, start, end, 0.75, None, None, keys)
        assert out.rotation_z == pytest.approx(45.0)

        blend_transform(out, start, end, 0.5, None, None, keys)
        assert out.rotation_z == pytest.approx(90.0)

    def test_keyframe_without_field_does_not_touch_it(self, snapshot):
        keys = [AttributeKeyframe(50, values={"rotation_z": 90.0})]
        out = FrameSnapshot()
        blend_transform(out, snapshot(0, 0, 1, 1, scale_y=1.0), snapshot(0, 0, 1, 1, scale_y=3.0), 0.5, None, None, keys)
        assert out.scale_y == pytest.approx(2.0)


class TestApplyCycles:

    def test_progress_cycle_adds_wave(self):
        out = FrameSnapshot(scale_x=1.0)
        cycle = CycleKeyframe(0, attribute="scale_x", wave_shape=WaveShape.SIN, period=1.0, amplitude=0.5)
        apply_cycles(out, [cycle], 0.25)
        assert out.scale_x == pytest.approx(1.5)

    def test_unset_attribute_starts_from_default(self):
        out = FrameSnapshot()
        cycle = CycleKeyframe(0, attribute="alpha", wave_shape=WaveShape.SQUARE, amplitude=0.25, offset=-0.5)
        apply_cycles(out, [cycle], 0.1)
        assert out.alpha == pytest.approx(0.75)

    def test_amplitude_interpolates_between_cycles(self):
        cycles = [
            CycleKeyframe(0, attribute="rotation_z", wave_shape=WaveShape.SQUARE, amplitude=0.0),
            CycleKeyframe(100, attribute="rotation_z", wave_shape=WaveShape.SQUARE, amplitude=10.0),
        ]
        out = FrameSnapshot(rotation_z=0.0)
        apply_cycles(out, cycles, 0.2)
        assert out.rotation_z == pytest.approx(2.0)

    def test_time_cycle_uses_elapsed_seconds(self):
        out = FrameSnapshot(translation_x=0.0)
        cycle = TimeCycleKeyframe(0, attribute="translation_x", wave_shape=WaveShape.SIN, period=1.0, amplitude=4.0)
        apply_cycles(out, [cycle], 0.0, elapsed_seconds=0.25)
        assert out.translation_x == pytest.approx(4.0)

    def test_no_cycles_no_change(self):
        out = FrameSnapshot(alpha=0.4)
        apply_cycles(out, [], 0.5)
        assert out.alpha == 0.4
