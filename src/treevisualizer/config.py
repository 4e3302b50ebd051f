"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and viewer constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents hardcoded paths and magic numbers (node radius,
   pan duration, zoom rate...) scattered throughout the code.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find assets (example trees) when the app is frozen into an .exe.

Exports:
    ASSETS_PATH (str): Absolute path to the assets directory.
    EXAMPLE_TREE_PATH (str): Absolute path to the bundled example .tree file.
    ViewerConfig: Layout and camera constants passed to the engine/animator.
    DEFAULT_CONFIG (ViewerConfig): The reference 800x600 configuration.
"""
from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # Development mode: resolve relative to this file
    # config.py is in src/treevisualizer/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


@dataclass(frozen=True)
class ViewerConfig:
    """
    Every tunable constant of the radial layout and the camera.

    Radii and distances are in screen pixels at zoom 1.0.
    """
    viewport_width: int = 800
    viewport_height: int = 600

    # layout
    base_radius: float = 50.0
    node_distance: float = 200.0
    min_draw_radius: int = 2
    min_label_radius: int = 10
    packing_factor: float = 0.32
    label_reference_size: float = 20.0
    palette_period: int = 7
    max_depth: int = 256

    # camera
    zoom_rate: float = 0.1
    pan_duration: float = 1.0
    tick_interval_ms: int = 1000 // 30
    back_ease_overshoot: float = 1.70158

    def __post_init__(self) -> None:
        if self.min_draw_radius >= self.min_label_radius:
            raise ValueError(
                f"min_draw_radius ({self.min_draw_radius}) must be smaller than "
                f"min_label_radius ({self.min_label_radius})."
            )
        if self.base_radius <= 0 or self.node_distance <= 0:
            raise ValueError("base_radius and node_distance must be positive.")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}.")
        if self.pan_duration < 0:
            raise ValueError(f"pan_duration must be non-negative, got {self.pan_duration}.")


# Global Constants
ASSETS_PATH: str = get_resource_path("assets")
EXAMPLE_TREE_PATH: str = os.path.join(ASSETS_PATH, "example.tree")
DEFAULT_CONFIG = ViewerConfig()

if not os.path.exists(ASSETS_PATH):
    logger.warning(f"Assets path not found at {ASSETS_PATH}")
