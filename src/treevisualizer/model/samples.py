"""
Built-in demo trees shown when no .tree file has been loaded.
"""
from __future__ import annotations

from treevisualizer.model.tree import Tree


def example_tree() -> Tree[str]:
    """
    The start-up tree: three ordinary branches plus two fractal loops.

    "Fractal" -> "Whoa" leads back to the root, and the "F-R-A-C-T-A-L-S-..."
    chain below C6A closes onto its own first node.
    """
    tree: Tree[str] = Tree("Example")
    root = tree.root

    node_a = tree.add_child(root, "A")
    node_b = tree.add_child(root, "B")
    node_c = tree.add_child(root, "C")
    node_d = tree.add_child(root, "Fractal")

    for name in ("A1", "A2", "A3", "A4"):
        tree.add_child(node_a, name)
    for name in ("B1", "B2", "B3"):
        tree.add_child(node_b, name)
    for name in ("C1", "C2", "C3", "C4"):
        tree.add_child(node_c, name)

    whoa = tree.add_child(node_d, "Whoa")
    tree.attach_child(whoa, root)

    node_c5 = tree.add_child(node_c, "C5")
    node_c6 = tree.add_child(node_c, "C6")
    tree.add_child(node_c5, "C5A")
    tree.add_child(node_c5, "C5B")
    tree.add_child(node_c6, "C6A")
    tree.add_child(node_c6, "C6B")
    node_c6a = tree.add_child(node_c6, "C6A")
    for name in ("C6B", "C6C", "C6D", "C6E", "C6F"):
        tree.add_child(node_c6, name)
    for i in range(1, 9):
        tree.add_child(node_c6a, f"C6A{i}")

    fractal = tree.add_child(node_c6a, "F")
    current = fractal
    for letter in "RACTALSAREFUN!":
        current = tree.add_child(current, letter)
    tree.attach_child(current, fractal)

    return tree
