"""
Viewport: screen <-> world coordinate mapping.

    world = (screen - center) / scale - translation

`center` is the middle of the widget, so a zero translation puts the
world origin in the middle of the view.
"""

from dataclasses import dataclass, field
from typing import Optional

from models import Point, Rectangle, Size, Vector


@dataclass
class Viewport:
    """Pan and zoom state of the canvas."""
    translation: Vector = field(default_factory=Vector)
    scale: float = 1.0
    size: Size = field(default_factory=Size)
    min_scale: float = 0.1
    max_scale: float = 5.0
    scroll_sensitivity: float = 30.0

    def center(self) -> Point:
        return Point(self.size.width / 2.0, self.size.height / 2.0)

    def resize(self, width: float, height: float) -> None:
        self.size = Size(width, height)

    def to_world(self, screen: Point) -> Point:
        offset = (screen - self.center()) / self.scale - self.translation
        return Point(offset.x, offset.y)

    def to_screen(self, world: Point) -> Point:
        return self.center() + (world.to_vector() + self.translation) * self.scale

    def visible_rect(self) -> Rectangle:
        """World-space rectangle covered by the widget."""
        width = self.size.width / self.scale
        height = self.size.height / self.scale
        return Rectangle(
            -self.translation.x - width / 2.0,
            -self.translation.y - height / 2.0,
            width,
            height,
        )

    def zoom_step(self, delta_y: float,
                  cursor: Optional[Point]) -> Optional[tuple[float, Optional[Vector]]]:
        """
        Scale and translation after one scroll step, or None when already
        at the limit in the scroll direction.

        The translation keeps the world point under `cursor` fixed on
        screen; without a cursor only the scale changes.
        """
        zooming_in = delta_y > 0.0 and self.scale < self.max_scale
        zooming_out = delta_y < 0.0 and self.scale > self.min_scale
        if not (zooming_in or zooming_out):
            return None

        old = self.scale
        new = self.scale * (1.0 + delta_y / self.scroll_sensitivity)
        new = min(max(new, self.min_scale), self.max_scale)

        if cursor is None:
            return new, None

        cursor_to_center = cursor - self.center()
        translation = self.translation - cursor_to_center * ((new - old) / (old * new))
        return new, translation

    def apply_zoom(self, scale: float, translation: Optional[Vector] = None) -> None:
        self.scale = scale
        if translation is not None:
            self.translation = translation
