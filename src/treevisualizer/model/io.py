"""
Input/Output Manager (.tree files)
Builds a Tree[str] from the nested tag grammar:

    <1 Root>
        <2 Child>
            <3 Grandchild></3>
        </2>
    </1>

Every opening tag adds a child to the current node and descends into it;
every closing tag ascends. Closing the root ends parsing.
"""
import logging
import re
from typing import List, Optional, Tuple

from treevisualizer.model.tree import NodeId, Tree

logger = logging.getLogger(__name__)

_TAG = re.compile(r"<([^<>]*)>")


class TreeFormatError(ValueError):
    """Raised when .tree text does not follow the tag grammar."""

    def __init__(self, message: str, position: Optional[int] = None) -> None:
        if position is not None:
            message = f"{message} (at character {position})"
        super().__init__(message)
        self.position = position


class TreeLoader:

    @staticmethod
    def load_tree_file(filepath: str) -> Tree[str]:
        logger.info(f"Loading tree from: {filepath}")
        try:
            with open(filepath, "r", encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            logger.error(f"Could not read tree file '{filepath}': {e}")
            raise
        tree = TreeLoader.parse(text)
        logger.info(f"Loaded tree with {len(tree)} nodes.")
        return tree

    @staticmethod
    def parse(text: str) -> Tree[str]:
        tags = TreeLoader._tokenize(text)
        if not tags:
            raise TreeFormatError("No tags found in tree text.")

        position, is_closing, tag_id, name = tags[0]
        if is_closing:
            raise TreeFormatError(f"Tree must start with an opening tag, got '</{tag_id}>'.", position)

        tree: Tree[str] = Tree(name)
        current: NodeId = tree.root
        open_ids: List[str] = [tag_id]

        for position, is_closing, tag_id, name in tags[1:]:
            if is_closing:
                expected = open_ids.pop()
                if expected != tag_id:
                    logger.warning(f"Closing tag '</{tag_id}>' does not match '<{expected}>' at character {position}.")
                if current == tree.root:
                    return tree
                current = tree.parent(current)
                continue

            current = tree.add_child(current, name)
            open_ids.append(tag_id)

        logger.warning(f"Tree text ended with {len(open_ids)} unclosed tag(s).")
        return tree

    @staticmethod
    def _tokenize(text: str) -> List[Tuple[int, bool, str, str]]:
        """Split text into (position, is_closing, id, name) tuples."""
        tags: List[Tuple[int, bool, str, str]] = []
        last_end = 0
        for match in _TAG.finditer(text):
            TreeLoader._check_gap(text, last_end, match.start())
            last_end = match.end()

            body = match.group(1).strip()
            if not body:
                raise TreeFormatError("Empty tag.", match.start())

            if body.startswith("/"):
                tags.append((match.start(), True, body[1:].strip(), ""))
                continue

            parts = body.split(maxsplit=1)
            if len(parts) < 2:
                raise TreeFormatError(f"Tag '<{body}>' has an id but no name.", match.start())
            tags.append((match.start(), False, parts[0], parts[1].strip()))

        TreeLoader._check_gap(text, last_end, len(text))
        return tags

    @staticmethod
    def _check_gap(text: str, start: int, end: int) -> None:
        stray = text[start:end]
        if stray.strip():
            offset = start + (len(stray) - len(stray.lstrip()))
            raise TreeFormatError(f"Unexpected text '{stray.strip()[:20]}' outside of a tag.", offset)
