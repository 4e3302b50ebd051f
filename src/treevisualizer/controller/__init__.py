"""
Layout & Camera Engine
======================
The core of the visualizer.

Why is this file needed?
------------------------
1. Layout: It converts a Tree and a camera into circles, edges and labels.
2. Picking: It answers "which node is under this point" for the last frame.
3. Animation: It eases the camera between views.

Note: This package should be pure Python/NumPy and should NOT import PySide6.
"""
