"""
Tests for FrameSnapshot.

Covers:
- Derived geometry
- capture_from() / copy_from() semantics
- Default-transform query and state keys
- Custom attribute helpers
"""

import pytest

from models.enums import Visibility
from models.color import RGBA
from models.frame_snapshot import FrameSnapshot, TRANSFORM_FIELDS


class TestFrameSnapshotGeometry:
    """Bounds and derived values."""

    def test_width_height_center(self):
        s = FrameSnapshot(left=10, top=20, right=40, bottom=60)

        assert s.width == 30
        assert s.height == 40
        assert s.center_x == 25.0
        assert s.center_y == 40.0

    def test_set_bounds_chains(self):
        s = FrameSnapshot().set_bounds(1, 2, 3, 4)
        assert (s.left, s.top, s.right, s.bottom) == (1, 2, 3, 4)

    def test_str_is_bounds(self):
        assert str(FrameSnapshot(left=400, top=288, right=460, bottom=328)) == "400, 288, 460, 328"

    def test_defaults_are_unset(self):
        s = FrameSnapshot()
        assert all(getattr(s, name) is None for name in TRANSFORM_FIELDS)
        assert s.visibility is Visibility.VISIBLE
        assert s.custom_colors is None
        assert s.custom_floats is None
        assert s.widget_id is None


class TestCaptureFrom:
    """Copying live widget state."""

    def test_none_widget_is_noop(self):
        s = FrameSnapshot(left=5, top=6, right=7, bottom=8, alpha=0.3)
        s.capture_from(None)

        assert str(s) == "5, 6, 7, 8"
        assert s.alpha == 0.3

    def test_captures_bounds_and_transform(self, fake_widget):
        w = fake_widget("icon", 10, 20, 50, 80, alpha=0.5, rotation_z=45, visibility=Visibility.INVISIBLE)
        s = FrameSnapshot().capture_from(w)

        assert str(s) == "10, 20, 50, 80"
        assert s.alpha == 0.5
        assert s.rotation_z == 45.0
        assert s.scale_x is None
        assert s.visibility is Visibility.INVISIBLE
        assert s.widget is w
        assert s.widget_id == "icon"

    def test_captured_colors_are_copies(self, fake_widget):
        color = RGBA(1.0, 0.0, 0.0)
        w = fake_widget("icon", custom_colors={"tint": color}, custom_floats={"blur": 2})
        s = FrameSnapshot().capture_from(w)

        color.g = 1.0
        assert s.get_custom_color("tint").g == 0.0
        assert s.get_custom_float("blur") == 2.0

    def test_missing_transform_clears_previous_values(self, fake_widget):
        s = FrameSnapshot(alpha=0.1)
        s.capture_from(fake_widget("plain", 0, 0, 10, 10))
        assert s.alpha is None


class TestCopyFrom:
    """Deep copies between snapshots."""

    def test_copy_is_deep(self):
        src = FrameSnapshot(left=1, top=2, right=3, bottom=4, scale_x=2.0)
        src.add_custom_color("tint", 0.1, 0.2, 0.3)
        src.add_custom_float("blur", 1.5)

        dst = FrameSnapshot().copy_from(src)
        src.custom_colors["tint"].r = 0.9
        src.custom_floats["blur"] = 9.0

        assert str(dst) == "1, 2, 3, 4"
        assert dst.scale_x == 2.0
        assert dst.get_custom_color("tint").r == pytest.approx(0.1)
        assert dst.get_custom_float("blur") == 1.5

    def test_empty_maps_become_none(self):
        dst = FrameSnapshot()
        dst.add_custom_float("stale", 1.0)
        dst.add_custom_color("stale", 1, 1, 1)

        dst.copy_from(FrameSnapshot())

        assert dst.custom_floats is None
        assert dst.custom_colors is None

    def test_copy_returns_new_instance(self):
        src = FrameSnapshot(left=3, alpha=0.4)
        dup = src.copy()

        assert dup is not src
        assert dup.state_key() == src.state_key()


class TestQueries:
    """is_default_transform() and state_key()."""

    def test_default_transform_ignores_pivot(self):
        s = FrameSnapshot(pivot_x=0.2, pivot_y=0.8)
        assert s.is_default_transform()

    def test_any_transform_breaks_default(self):
        assert not FrameSnapshot(translation_y=3.0).is_default_transform()
        assert not FrameSnapshot(alpha=1.0).is_default_transform()

    def test_state_key_tracks_visual_changes(self):
        a = FrameSnapshot(left=1, alpha=0.5)
        b = FrameSnapshot(left=1, alpha=0.5)
        assert a.state_key() == b.state_key()

        b.add_custom_color("tint", 1, 0, 0)
        assert a.state_key() != b.state_key()

    def test_state_key_is_hashable(self):
        s = FrameSnapshot()
        s.add_custom_float("blur", 1.0)
        assert hash(s.state_key()) == hash(s.copy().state_key())

    def test_get_custom_float_default(self):
        assert FrameSnapshot().get_custom_float("missing", 7.0) == 7.0
