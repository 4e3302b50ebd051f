"""
Interactive radial tree visualizer (PySide6).
"""
