"""
The VIEW layer: Qt widgets that paint layout results and forward user input
to the camera.
"""
