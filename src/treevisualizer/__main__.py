"""Allows `python -m treevisualizer`."""
from treevisualizer.main import main

if __name__ == "__main__":
    main()
