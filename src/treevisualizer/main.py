"""
Application Initialization
==========================
This module wires the model, the engine and the window together and starts
the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Configures logging.
2. Loads the initial tree (a .tree file from the command line, or the
   built-in example with its fractal loops).
3. Instantiates the Main Window, passing the tree and the viewer config.
"""
import logging
import sys

from PySide6.QtWidgets import QApplication

from treevisualizer.config import DEFAULT_CONFIG
from treevisualizer.logging_config import setup_logging
from treevisualizer.model.io import TreeFormatError, TreeLoader
from treevisualizer.model.samples import example_tree
from treevisualizer.view.main_window import MainWindow, VISIBLE_APP_NAME

logger = logging.getLogger(__name__)


def main() -> None:
    # 1. Setup Logging (TREEVISUALIZER_LOG_LEVEL=DEBUG to see everything)
    setup_logging()

    # 2. Create the Qt Application
    app = QApplication(sys.argv)
    app.setApplicationName(VISIBLE_APP_NAME)

    # 3. Initialize the Data Model
    tree = example_tree()
    if len(sys.argv) > 1:
        try:
            tree = TreeLoader.load_tree_file(sys.argv[1])
        except (OSError, TreeFormatError) as e:
            logger.error(f"Falling back to the example tree: {e}")

    # 4. Initialize the Main Window
    window = MainWindow(tree, DEFAULT_CONFIG)
    window.show()

    # 5. Start Event Loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
