import os

import pytest


@pytest.fixture(scope="session")
def qapp():
    """One offscreen QApplication shared by the widget tests."""
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    widgets = pytest.importorskip("PySide6.QtWidgets")
    return widgets.QApplication.instance() or widgets.QApplication([])
