"""
FrameSnapshot - point-in-time geometry + transform of one widget.

Start/end snapshots are captured once per motion session and treated as
immutable; the output snapshot is owned by the caller and reused frame after
frame, so every write path here mutates in place.

Transform fields are Optional[float]: None means "unset" and is resolved to
a field-specific default only when blended against a set value.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol, Tuple

from models.enums import Visibility
from models.color import RGBA


# Transform fields in declaration order (pivot first, alpha last)
PIVOT_FIELDS: Tuple[str, ...] = ("pivot_x", "pivot_y")
TRANSFORM_FIELDS: Tuple[str, ...] = PIVOT_FIELDS + (
    "rotation_x",
    "rotation_y",
    "rotation_z",
    "translation_x",
    "translation_y",
    "translation_z",
    "scale_x",
    "scale_y",
    "alpha",
)


class WidgetHandle(Protocol):
    """
    Live widget as seen by capture_from().

    Only bounds and id are required; transform attributes, visibility and
    custom maps are read with getattr() and treated as unset when missing.
    """

    id: Any
    left: int
    top: int
    right: int
    bottom: int


@dataclass(eq=False)
class FrameSnapshot:
    """
    Geometry, transform and custom attributes of a widget at one instant.

    Attributes:
        left, top, right, bottom: Integer pixel bounds
        pivot_x ... alpha: Optional transform values (None = unset)
        visibility: VISIBLE / INVISIBLE / GONE
        custom_colors: Named RGBA values (None until the first entry)
        custom_floats: Named float values (None until the first entry)
        widget: Back-reference to the originating widget (identity only)
    """

    left: int = 0
    top: int = 0
    right: int = 0
    bottom: int = 0

    pivot_x: Optional[float] = None
    pivot_y: Optional[float] = None

    rotation_x: Optional[float] = None
    rotation_y: Optional[float] = None
    rotation_z: Optional[float] = None

    translation_x: Optional[float] = None
    translation_y: Optional[float] = None
    translation_z: Optional[float] = None

    scale_x: Optional[float] = None
    scale_y: Optional[float] = None

    alpha: Optional[float] = None

    visibility: Visibility = Visibility.VISIBLE

    custom_colors: Optional[Dict[str, RGBA]] = None
    custom_floats: Optional[Dict[str, float]] = None

    widget: Optional[WidgetHandle] = field(default=None, repr=False)

    # ------------------------------------------------------------
    # Derived geometry
    # ------------------------------------------------------------

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    @property
    def center_x(self) -> float:
        return self.left + (self.right - self.left) / 2.0

    @property
    def center_y(self) -> float:
        return self.top + (self.bottom - self.top) / 2.0

    @property
    def widget_id(self) -> Any:
        """Identity of the originating widget, or None"""
        if self.widget is None:
            return None
        return getattr(self.widget, "id", None)

    def set_bounds(self, left: int, top: int, right: int, bottom: int) -> 'FrameSnapshot':
        self.left = left
        self.top = top
        self.right = right
        self.bottom = bottom
        return self

    # ------------------------------------------------------------
    # Copying
    # ------------------------------------------------------------

    def capture_from(self, widget: Optional[WidgetHandle]) -> 'FrameSnapshot':
        """
        Copy live bounds, transform and attributes from a widget handle.

        A None widget leaves the snapshot unchanged.

        Returns:
            self, for chaining
        """
        if widget is None:
            return self

        self.widget = widget
        self.left = int(widget.left)
        self.top = int(widget.top)
        self.right = int(widget.right)
        self.bottom = int(widget.bottom)

        for name in TRANSFORM_FIELDS:
            value = getattr(widget, name, None)
            setattr(self, name, None if value is None else float(value))

        self.visibility = getattr(widget, "visibility", Visibility.VISIBLE) or Visibility.VISIBLE

        colors = getattr(widget, "custom_colors", None)
        self.custom_colors = {k: c.copy() for k, c in colors.items()} if colors else None
        floats = getattr(widget, "custom_floats", None)
        self.custom_floats = {k: float(v) for k, v in floats.items()} if floats else None
        return self

    def copy_from(self, other: 'FrameSnapshot') -> 'FrameSnapshot':
        """
        Deep-copy another snapshot into this one.

        Custom maps are freshly allocated only when the source has entries,
        otherwise they are reset to None.

        Returns:
            self, for chaining
        """
        self.widget = other.widget
        self.left = other.left
        self.top = other.top
        self.right = other.right
        self.bottom = other.bottom

        for name in TRANSFORM_FIELDS:
            setattr(self, name, getattr(other, name))

        self.visibility = other.visibility

        if other.custom_colors:
            self.custom_colors = {k: c.copy() for k, c in other.custom_colors.items()}
        else:
            self.custom_colors = None

        if other.custom_floats:
            self.custom_floats = dict(other.custom_floats)
        else:
            self.custom_floats = None
        return self

    def copy(self) -> 'FrameSnapshot':
        return FrameSnapshot().copy_from(self)

    # ------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------

    def is_default_transform(self) -> bool:
        """True if every transform field except pivot is unset"""
        return all(getattr(self, name) is None for name in TRANSFORM_FIELDS if name not in PIVOT_FIELDS)

    def state_key(self) -> tuple:
        """
        Hashable view of everything that affects what gets drawn.

        Used for change detection between consecutive interpolate() calls.
        """
        colors = tuple(sorted((k, c.as_tuple()) for k, c in self.custom_colors.items())) if self.custom_colors else ()
        floats = tuple(sorted(self.custom_floats.items())) if self.custom_floats else ()
        return (
            self.left, self.top, self.right, self.bottom,
            tuple(getattr(self, name) for name in TRANSFORM_FIELDS),
            self.visibility,
            colors,
            floats,
        )

    # ------------------------------------------------------------
    # Custom attributes
    # ------------------------------------------------------------

    def add_custom_color(self, name: str, r: float, g: float, b: float, a: float = 1.0) -> None:
        if self.custom_colors is None:
            self.custom_colors = {}
        self.custom_colors[name] = RGBA(r, g, b, a)

    def get_custom_color(self, name: str) -> Optional[RGBA]:
        if self.custom_colors is None:
            return None
        return self.custom_colors.get(name)

    def add_custom_float(self, name: str, value: float) -> None:
        if self.custom_floats is None:
            self.custom_floats = {}
        self.custom_floats[name] = float(value)

    def get_custom_float(self, name: str, default: float = 0.0) -> float:
        if self.custom_floats is None:
            return default
        return self.custom_floats.get(name, default)

    def __str__(self) -> str:
        return f"{self.left}, {self.top}, {self.right}, {self.bottom}"
