"""
Main Application Window
=======================
The primary GUI container that holds the toolbar and the tree canvas.

Why is this file needed?
------------------------
1. Layout: It places the zoom controls above the drawing surface.
2. Routing: It connects global actions (Load, Reset, Quit) and the
   spring-back zoom slider to the canvas.
"""
import logging
from typing import Any

from PySide6.QtCore import Qt, QTimer, Slot
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QFileDialog, QLabel, QMainWindow, QMessageBox, QSlider, QToolBar
)

from treevisualizer.config import ASSETS_PATH, DEFAULT_CONFIG, ViewerConfig
from treevisualizer.model.io import TreeFormatError, TreeLoader
from treevisualizer.model.tree import Tree
from treevisualizer.view.tree_canvas import TreeCanvas

logger = logging.getLogger(__name__)

VISIBLE_APP_NAME = "Tree Visualizer"
SLIDER_REST = 50


class MainWindow(QMainWindow):
    def __init__(self, tree: Tree[Any], config: ViewerConfig = DEFAULT_CONFIG) -> None:
        super().__init__()
        self.setWindowTitle(VISIBLE_APP_NAME)

        self.canvas = TreeCanvas(tree, config, self)
        self.setCentralWidget(self.canvas)

        # --- TOOLBAR ---
        toolbar = QToolBar("Main")
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        act_load = QAction("Load Tree", self)
        act_load.triggered.connect(self.load_tree)
        toolbar.addAction(act_load)

        act_quit = QAction("Quit", self)
        act_quit.triggered.connect(self.close)
        toolbar.addAction(act_quit)

        toolbar.addWidget(QLabel("Zoom:"))

        # Spring-back slider: deflection from the middle zooms continuously
        self.zoom_slider = QSlider(Qt.Horizontal)
        self.zoom_slider.setRange(0, 100)
        self.zoom_slider.setValue(SLIDER_REST)
        self.zoom_slider.setTickPosition(QSlider.TicksBelow)
        self.zoom_slider.setTickInterval(25)
        self.zoom_slider.setPageStep(0)
        self.zoom_slider.setMaximumWidth(200)
        self.zoom_slider.setToolTip("Drag to zoom")
        toolbar.addWidget(self.zoom_slider)

        self.zoom_label = QLabel()
        toolbar.addWidget(self.zoom_label)

        act_reset = QAction("Reset", self)
        act_reset.triggered.connect(self.canvas.reset_view)
        toolbar.addAction(act_reset)

        self._slider_timer = QTimer(self)
        self._slider_timer.setInterval(config.tick_interval_ms)
        self._slider_timer.timeout.connect(self._on_slider_tick)

        # --- SIGNAL CONNECTIONS ---
        self.zoom_slider.sliderPressed.connect(self._slider_timer.start)
        self.zoom_slider.sliderReleased.connect(self._on_slider_released)
        self.zoom_slider.valueChanged.connect(self._on_slider_value_changed)
        self.canvas.zoom_changed.connect(self.update_zoom_label)

        self.update_zoom_label(self.canvas.animator.zoom)

    @Slot()
    def load_tree(self) -> None:
        filepath, _ = QFileDialog.getOpenFileName(
            self, "Open tree file", ASSETS_PATH, "Tree files (*.tree)"
        )
        if not filepath:
            return

        try:
            tree = TreeLoader.load_tree_file(filepath)
        except (OSError, TreeFormatError) as e:
            logger.error(f"Could not load tree file '{filepath}': {e}")
            QMessageBox.warning(self, "Load Failed", f"Could not load tree file:\n{e}")
            return

        self.canvas.set_tree(tree)

    @Slot(float)
    def update_zoom_label(self, zoom: float) -> None:
        self.zoom_label.setText(f"{zoom:.2f}x")

    def _on_slider_tick(self) -> None:
        self.canvas.zoom_view((self.zoom_slider.value() - SLIDER_REST) / SLIDER_REST)

    def _on_slider_released(self) -> None:
        self._slider_timer.stop()
        self.zoom_slider.setValue(SLIDER_REST)

    def _on_slider_value_changed(self, value: int) -> None:
        # Keyboard or wheel steps arrive without a press: zoom once, spring back
        if self.zoom_slider.isSliderDown() or value == SLIDER_REST:
            return
        self._on_slider_tick()
        self.zoom_slider.setValue(SLIDER_REST)
