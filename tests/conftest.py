import pytest

from models.enums import LogLevel, PathMode, Visibility
from models.frame_snapshot import FrameSnapshot
from engine.curve_cache import CurveCache
from engine.motion_engine import MotionEngine
from utils.logger import configure_logger


class FakeWidget:
    """
    Minimal widget handle: bounds + id, everything else optional.
    """

    def __init__(self, widget_id, left=0, top=0, right=0, bottom=0, **attrs):
        self.id = widget_id
        self.left = left
        self.top = top
        self.right = right
        self.bottom = bottom
        for name, value in attrs.items():
            setattr(self, name, value)


def make_snapshot(left, top, right, bottom, widget=None, visibility=Visibility.VISIBLE, **transform):
    """Build a snapshot with the given bounds and transform fields"""
    snapshot = FrameSnapshot(left=left, top=top, right=right, bottom=bottom, visibility=visibility, widget=widget)
    for name, value in transform.items():
        setattr(snapshot, name, value)
    return snapshot


@pytest.fixture(autouse=True)
def quiet_logger():
    """Keep test output readable; restore defaults afterwards."""
    configure_logger(LogLevel.WARN, use_colors=False)
    yield
    configure_logger(LogLevel.INFO, use_colors=True)


@pytest.fixture
def widget():
    return FakeWidget("button", 0, 0, 30, 40)


@pytest.fixture
def start(widget):
    return make_snapshot(0, 0, 30, 40, widget=widget)


@pytest.fixture
def end(widget):
    return make_snapshot(400, 400, 430, 440, widget=widget)


@pytest.fixture
def engine(start, end):
    return MotionEngine().configure(start, end, path_mode=PathMode.LINEAR, parent_width=1000, parent_height=1000)


@pytest.fixture
def cache():
    return CurveCache()


@pytest.fixture
def out():
    return FrameSnapshot()


@pytest.fixture
def snapshot():
    """Factory fixture: snapshot(left, top, right, bottom, **fields)"""
    return make_snapshot


@pytest.fixture
def fake_widget():
    """Factory fixture: fake_widget(id, left, top, right, bottom, **attrs)"""
    return FakeWidget
