"""
Scene Visualizer Module
=======================

Pure visualization layer for rooms and sight-lines.

Design:
- Stateless rendering (pure functions over frames)
- No engine logic
- Explicit meters -> pixels conversion through Viewport
- Uses supervision drawing utilities, OpenCV for filled discs

Dependencies:
- supervision (draw utilities, Color, Point)
- opencv (circles)
- numpy (arrays)
"""

from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

import cv2
import numpy as np
import supervision as sv

from lookglass_engine.animation.playback import AnimationFrame
from lookglass_engine.geometry.shapes import Point
from lookglass_engine.geometry.units import Length
from lookglass_engine.room.model import ItemKind, Room
from lookglass_engine.tracing.sight_ray import SightRay


@dataclass(frozen=True)
class Viewport:
    """
    Maps scene meters to frame pixels (y axis flipped).

    Attributes:
        pixels_per_meter: Scale
        min_x: Scene x drawn at the left margin
        max_y: Scene y drawn at the top margin
        margin: Pixel margin around the scene
    """

    pixels_per_meter: float
    min_x: float
    max_y: float
    margin: int = 40

    def __post_init__(self):
        if self.pixels_per_meter <= 0:
            raise ValueError(f"pixels_per_meter must be > 0, got {self.pixels_per_meter}")

    @classmethod
    def fit(
        cls,
        rooms: Sequence[Room],
        resolution_wh: Tuple[int, int],
        margin: int = 40,
    ) -> "Viewport":
        """Largest scale that shows every room inside the frame."""
        if not rooms:
            raise ValueError("At least one room is required to fit a viewport")
        vertices = np.vstack([room.boundary.as_array() for room in rooms])
        min_x, min_y = vertices.min(axis=0)
        max_x, max_y = vertices.max(axis=0)

        width, height = resolution_wh
        usable_w = max(width - 2 * margin, 1)
        usable_h = max(height - 2 * margin, 1)
        span_x = max(float(max_x - min_x), 1e-9)
        span_y = max(float(max_y - min_y), 1e-9)

        return cls(
            pixels_per_meter=min(usable_w / span_x, usable_h / span_y),
            min_x=float(min_x),
            max_y=float(max_y),
            margin=margin,
        )

    def to_pixel(self, point: Point) -> Tuple[int, int]:
        x = self.margin + (point.x - self.min_x) * self.pixels_per_meter
        y = self.margin + (self.max_y - point.y) * self.pixels_per_meter
        return int(round(x)), int(round(y))

    def to_pixels(self, points: np.ndarray) -> np.ndarray:
        """Nx2 scene array to Nx2 int32 pixel array."""
        pixels = np.empty_like(points, dtype=np.float64)
        pixels[:, 0] = self.margin + (points[:, 0] - self.min_x) * self.pixels_per_meter
        pixels[:, 1] = self.margin + (self.max_y - points[:, 1]) * self.pixels_per_meter
        return np.round(pixels).astype(np.int32)

    def length_to_pixels(self, length: Length) -> int:
        return max(1, int(round(length.to_pixels(self.pixels_per_meter))))


class SceneVisualizer:
    """
    Stateless visualizer for rooms, items and sight-lines.

    Usage:
        visualizer = SceneVisualizer(thickness=3)
        viewport = Viewport.fit(unfolding.hallway, (1280, 720))

        frame = visualizer.blank_frame((1280, 720))
        frame = visualizer.draw_room(frame, room, viewport)
        frame = visualizer.draw_ray(frame, ray, viewport)
    """

    def __init__(
        self,
        mirror_color: sv.Color = sv.Color(r=120, g=200, b=255),
        wall_color: sv.Color = sv.Color(r=160, g=160, b=160),
        floor_color: sv.Color = sv.Color(r=60, g=60, b=80),
        ray_color: sv.Color = sv.Color(r=255, g=220, b=0),
        item_colors: Dict[ItemKind, sv.Color] | None = None,
        text_color: sv.Color = sv.Color(r=255, g=255, b=255),
        text_background_color: sv.Color = sv.Color(r=0, g=0, b=0),
        background_color: sv.Color = sv.Color(r=20, g=20, b=30),
        thickness: int = 2,
        text_scale: float = 0.6,
        text_thickness: int = 1,
        text_padding: int = 8,
        opacity: float = 0.4,
    ):
        """
        Initialize visualizer with style configuration.

        Args:
            mirror_color: Color for mirror edges
            wall_color: Color for solid edges
            floor_color: Fill color for rooms
            ray_color: Color for the sight-line
            item_colors: Disc color per item kind
            text_color: Caption color
            text_background_color: Caption background
            background_color: Empty frame color
            thickness: Line thickness
            text_scale: Caption scale
            text_thickness: Caption thickness
            text_padding: Caption padding
            opacity: Floor fill opacity for reflected rooms (0-1)
        """
        self.mirror_color = mirror_color
        self.wall_color = wall_color
        self.floor_color = floor_color
        self.ray_color = ray_color
        self.item_colors = item_colors or {
            ItemKind.PLAYER: sv.Color(r=80, g=220, b=120),
            ItemKind.TARGET: sv.Color(r=255, g=80, b=80),
            ItemKind.DECOY: sv.Color(r=200, g=120, b=255),
        }
        self.text_color = text_color
        self.text_background_color = text_background_color
        self.background_color = background_color
        self.thickness = thickness
        self.text_scale = text_scale
        self.text_thickness = text_thickness
        self.text_padding = text_padding
        self.opacity = opacity

    def blank_frame(self, resolution_wh: Tuple[int, int]) -> np.ndarray:
        width, height = resolution_wh
        frame = np.zeros((height, width, 3), dtype=np.uint8)
        frame[:] = self.background_color.as_bgr()
        return frame

    def draw_room(
        self,
        frame: np.ndarray,
        room: Room,
        viewport: Viewport,
        opacity: float | None = None,
    ) -> np.ndarray:
        """
        Draw a room: floor, tagged edges, items.

        Args:
            frame: Frame to draw on
            room: Room in scene meters
            viewport: Scene -> pixel mapping
            opacity: Floor opacity (defaults to the visualizer's)

        Returns:
            Frame with the room drawn
        """
        polygon = viewport.to_pixels(room.boundary.as_array())

        frame = sv.draw_filled_polygon(
            scene=frame,
            polygon=polygon,
            color=self.floor_color,
            opacity=self.opacity if opacity is None else opacity,
        )

        n = len(polygon)
        for i, is_mirror in enumerate(room.boundary.mirrors):
            start, end = polygon[i], polygon[(i + 1) % n]
            frame = sv.draw_line(
                scene=frame,
                start=sv.Point(x=int(start[0]), y=int(start[1])),
                end=sv.Point(x=int(end[0]), y=int(end[1])),
                color=self.mirror_color if is_mirror else self.wall_color,
                thickness=self.thickness * 2 if is_mirror else self.thickness,
            )

        for item in room.items:
            color = self.item_colors.get(item.kind, self.text_color)
            cv2.circle(
                frame,
                viewport.to_pixel(item.position),
                viewport.length_to_pixels(item.radius),
                color.as_bgr(),
                -1,
            )

        return frame

    def draw_ray(self, frame: np.ndarray, ray: SightRay, viewport: Viewport) -> np.ndarray:
        """Draw the sight-line as a polyline over its full path."""
        pixels = [viewport.to_pixel(point) for point in ray.path]
        for start, end in zip(pixels, pixels[1:]):
            frame = sv.draw_line(
                scene=frame,
                start=sv.Point(x=start[0], y=start[1]),
                end=sv.Point(x=end[0], y=end[1]),
                color=self.ray_color,
                thickness=self.thickness,
            )
        return frame

    def draw_caption(self, frame: np.ndarray, text: str) -> np.ndarray:
        return sv.draw_text(
            scene=frame,
            text=text,
            text_anchor=sv.Point(x=frame.shape[1] // 2, y=24),
            text_color=self.text_color,
            text_scale=self.text_scale,
            text_thickness=self.text_thickness,
            text_padding=self.text_padding,
            background_color=self.text_background_color,
        )

    def render_frame(
        self,
        animation_frame: AnimationFrame,
        viewport: Viewport,
        resolution_wh: Tuple[int, int],
        caption: str | None = None,
    ) -> np.ndarray:
        """
        Draw one animation frame on a fresh canvas.

        The real room is drawn opaque; reflected copies use the
        visualizer's opacity.
        """
        frame = self.blank_frame(resolution_wh)
        for index, room in enumerate(animation_frame.all_rooms):
            frame = self.draw_room(
                frame, room, viewport, opacity=1.0 if index == 0 else None
            )
        frame = self.draw_ray(frame, animation_frame.ray, viewport)
        if caption:
            frame = self.draw_caption(frame, caption)
        return frame
