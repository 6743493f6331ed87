"""
Unfolding Video Pipeline Module
===============================

Bounded Context: Rendering an unfolding animation to video.

Design:
- Orchestrator: Combines playback + rendering + video sink
- Builder pattern: Fluent configuration
- Fail Fast: Validation at build time, not runtime

Dependencies:
- supervision (VideoSink, VideoInfo)
- lookglass_engine.animation (playback)
- lookglass_engine.rendering (visualizer)
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

import numpy as np
import supervision as sv

from lookglass_engine.animation.playback import AnimationPlayback
from lookglass_engine.logging import LogEvent, create_logger
from lookglass_engine.rendering.visualizer import SceneVisualizer, Viewport
from lookglass_engine.tracing.hallway import Unfolding
from lookglass_engine.utils import get_target_run_folder

logger = logging.getLogger(__name__)
render_logger = create_logger("render")


@dataclass
class PipelineConfig:
    """
    Pipeline configuration.

    Design:
    - All dependencies injected
    - Validated at construction
    """

    unfolding: Unfolding
    name: str
    output_folder: str
    visualizer: SceneVisualizer
    resolution_wh: tuple[int, int] = (1280, 720)
    fps: int = 30
    step_seconds: float = 0.8
    hold_seconds: float = 1.0
    caption: str | None = None


class UnfoldingPipeline:
    """
    Renders the unfolding of one traced sight-line to an mp4.

    Usage:
        pipeline = (
            PipelineBuilder()
            .with_unfolding(unfold(room, ray))
            .with_name("first_reflection")
            .with_fps(30)
            .build()
        )

        output_path = pipeline.process()
    """

    def __init__(self, config: PipelineConfig):
        """
        Initialize pipeline with configuration.

        Args:
            config: Pipeline configuration (validated)
        """
        self.config = config
        self._validate_config()
        self.viewport = Viewport.fit(config.unfolding.hallway, config.resolution_wh)

    def _validate_config(self) -> None:
        """Validate configuration (fail fast)."""
        width, height = self.config.resolution_wh
        if width <= 0 or height <= 0:
            raise ValueError(f"Resolution must be positive, got {self.config.resolution_wh}")
        if self.config.fps <= 0:
            raise ValueError(f"fps must be > 0, got {self.config.fps}")
        if self.config.step_seconds <= 0:
            raise ValueError(f"step_seconds must be > 0, got {self.config.step_seconds}")
        if self.config.hold_seconds < 0:
            raise ValueError(f"hold_seconds must be >= 0, got {self.config.hold_seconds}")

    def frames(self) -> Iterator[np.ndarray]:
        """
        Yield rendered frames: every step in order, then a still hold.
        """
        playback = AnimationPlayback(
            self.config.unfolding, step_seconds=self.config.step_seconds
        )
        frame_seconds = 1.0 / self.config.fps

        while True:
            yield self._render(playback)
            if playback.finished:
                break
            playback = playback.advance(frame_seconds)

        for _ in range(int(round(self.config.hold_seconds * self.config.fps))):
            yield self._render(playback)

    def _render(self, playback: AnimationPlayback) -> np.ndarray:
        return self.config.visualizer.render_frame(
            playback.frame(),
            self.viewport,
            self.config.resolution_wh,
            caption=self.config.caption,
        )

    def process(self) -> str:
        """
        Render the animation and return the output path.

        Returns:
            Path to output video
        """
        width, height = self.config.resolution_wh
        video_info = sv.VideoInfo(width=width, height=height, fps=self.config.fps)

        output_path = f"{self.config.output_folder}/{self.config.name}_unfolding.mp4"
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)

        render_logger.info(
            event=LogEvent.RENDER_STARTED,
            message="Rendering unfolding",
            metadata={'name': self.config.name, 'depth': self.config.unfolding.depth}
        )

        frame_count = 0
        with sv.VideoSink(output_path, video_info) as sink:
            for frame in self.frames():
                sink.write_frame(frame)
                frame_count += 1

        render_logger.info(
            event=LogEvent.RENDER_COMPLETED,
            message="Unfolding rendered",
            metadata={'output': output_path, 'frames': frame_count}
        )
        logger.debug("Wrote %d frames to %s", frame_count, output_path)
        print(f"✓ Unfolding rendered. Output: {output_path}")
        return output_path


class PipelineBuilder:
    """
    Builder for UnfoldingPipeline.

    Design:
    - Fluent API for construction
    - Fail-fast validation
    - Sensible defaults
    """

    def __init__(self):
        self._unfolding: Unfolding | None = None
        self._name: str = "lookglass"
        self._output_folder: str | None = None
        self._visualizer: SceneVisualizer | None = None
        self._resolution_wh: tuple[int, int] = (1280, 720)
        self._fps: int = 30
        self._step_seconds: float = 0.8
        self._hold_seconds: float = 1.0
        self._caption: str | None = None

    def with_unfolding(self, unfolding: Unfolding) -> "PipelineBuilder":
        """Set the unfolding to animate."""
        self._unfolding = unfolding
        return self

    def with_name(self, name: str) -> "PipelineBuilder":
        """Set output file stem."""
        self._name = name
        return self

    def with_output_folder(self, folder: str) -> "PipelineBuilder":
        """Set output folder."""
        self._output_folder = folder
        return self

    def with_visualizer(self, visualizer: SceneVisualizer) -> "PipelineBuilder":
        """Set visualizer."""
        self._visualizer = visualizer
        return self

    def with_resolution(self, width: int, height: int) -> "PipelineBuilder":
        """Set output resolution."""
        self._resolution_wh = (width, height)
        return self

    def with_fps(self, fps: int) -> "PipelineBuilder":
        """Set output video FPS."""
        self._fps = fps
        return self

    def with_step_seconds(self, seconds: float) -> "PipelineBuilder":
        """Set duration of one uncurl step."""
        self._step_seconds = seconds
        return self

    def with_hold_seconds(self, seconds: float) -> "PipelineBuilder":
        """Set how long the final frame is held."""
        self._hold_seconds = seconds
        return self

    def with_caption(self, caption: str) -> "PipelineBuilder":
        """Set caption drawn on every frame."""
        self._caption = caption
        return self

    def build(self) -> UnfoldingPipeline:
        """
        Build the pipeline.

        Returns:
            Configured pipeline

        Raises:
            ValueError: If required configuration is missing
        """
        if self._unfolding is None:
            raise ValueError("Unfolding is required (use .with_unfolding())")

        # Defaults
        if self._output_folder is None:
            self._output_folder = get_target_run_folder(application_name="unfolding")
        if self._visualizer is None:
            self._visualizer = SceneVisualizer()

        config = PipelineConfig(
            unfolding=self._unfolding,
            name=self._name,
            output_folder=self._output_folder,
            visualizer=self._visualizer,
            resolution_wh=self._resolution_wh,
            fps=self._fps,
            step_seconds=self._step_seconds,
            hold_seconds=self._hold_seconds,
            caption=self._caption,
        )

        return UnfoldingPipeline(config)
