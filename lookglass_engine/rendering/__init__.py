"""
Rendering Layer
===============

Bounded Context: Drawing rooms and sight-lines on frames.

Responsibilities:
- Meters -> pixels (Viewport)
- Room, item, ray and caption drawing (SceneVisualizer)
- NO engine logic
"""

from lookglass_engine.rendering.visualizer import SceneVisualizer, Viewport

__all__ = [
    "SceneVisualizer",
    "Viewport",
]
