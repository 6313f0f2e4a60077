"""Build tree objects from the flat path table held by the index."""

import logging
from collections import defaultdict
from typing import Dict, List, Mapping, Optional, Tuple, Union
from .errors import InvalidPathLayout, ObjectNotFound
from .objects import Tree, TreeEntry, MODE_FILE, MODE_TREE
from .object_store import ObjectStore

logger = logging.getLogger(__name__)

# (remaining path segments, mode, blob id)
_Row = Tuple[Tuple[str, ...], str, str]


def split_path(path: str) -> Tuple[str, ...]:
    """
    Split a repository-relative path into its segments.

    Raises:
        InvalidPathLayout: For absolute paths, empty segments, '.' or '..'
    """
    if not path or path.startswith('/'):
        raise InvalidPathLayout(path, "path must be relative to the repository root")

    parts = tuple(path.split('/'))
    for part in parts:
        if part in ('', '.', '..'):
            raise InvalidPathLayout(path, f"invalid path segment '{part}'")
        if '\0' in part:
            raise InvalidPathLayout(path, "path contains a NUL byte")
    return parts


class TreeBuilder:
    """
    Turns a set of staged (path -> blob) entries into nested tree objects.

    Paths are grouped by their first segment: single-segment paths become
    blob entries, the rest are grouped into subdirectories and built
    depth-first, so every subtree is stored before the tree that names it.
    """

    def __init__(self, store: ObjectStore):
        self.store = store

    def build(self, entries: Mapping[str, Union[str, object]]) -> str:
        """
        Build and store the tree for the given entries.

        Args:
            entries: Map of path to either a blob id or an IndexEntry

        Returns:
            str: id of the root tree (the empty tree for no entries)

        Raises:
            InvalidPathLayout: If a path is both a file and a directory
            ObjectNotFound: If an entry names a blob missing from the store
        """
        rows: List[_Row] = []
        for path, value in entries.items():
            if isinstance(value, str):
                mode, blob_id = MODE_FILE, value
            else:
                mode, blob_id = value.tree_mode, value.object_id

            if not self.store.contains(blob_id):
                raise ObjectNotFound(blob_id)

            rows.append((split_path(path), mode, blob_id))

        root_id = self._build_level(rows, '')
        logger.debug("Built tree %s from %d entries", root_id[:8], len(rows))
        return root_id

    def _build_level(self, rows: List[_Row], prefix: str) -> str:
        files: Dict[str, Tuple[str, str]] = {}
        subdirs: Dict[str, List[_Row]] = defaultdict(list)

        for parts, mode, blob_id in rows:
            name = parts[0]
            if len(parts) == 1:
                files[name] = (mode, blob_id)
            else:
                subdirs[name].append((parts[1:], mode, blob_id))

        tree = Tree()
        for name, (mode, blob_id) in files.items():
            if name in subdirs:
                raise InvalidPathLayout(
                    prefix + name, "staged both as a file and as a directory"
                )
            tree.add_entry(mode, 'blob', blob_id, name)

        for name, children in subdirs.items():
            subtree_id = self._build_level(children, f"{prefix}{name}/")
            tree.add_entry(MODE_TREE, 'tree', subtree_id, name)

        return self.store.put(tree)


def flatten_tree(store: ObjectStore, tree_id: str, prefix: str = '') -> Dict[str, Tuple[str, str]]:
    """
    Recursively list the files of a stored tree.

    Args:
        store: Object store holding the tree
        tree_id: id of the tree to read
        prefix: Path prefix for the returned names

    Returns:
        Map of path to (mode, blob id)
    """
    files: Dict[str, Tuple[str, str]] = {}
    tree = store.get_typed(tree_id, Tree)

    for entry in tree.entries:
        path = f"{prefix}{entry.name}"
        if entry.type == 'tree':
            files.update(flatten_tree(store, entry.hash, f"{path}/"))
        else:
            files[path] = (entry.mode, entry.hash)

    return files


def lookup_path(store: ObjectStore, tree_id: str, path: str) -> Optional[TreeEntry]:
    """
    Find the entry a path names inside a stored tree.

    Returns:
        The entry for the last path segment, or None if some segment is
        missing or a file sits where a directory is expected
    """
    entry = None
    current = tree_id

    for name in split_path(path):
        if current is None:
            return None
        entry = store.get_typed(current, Tree).get_entry(name)
        if entry is None:
            return None
        current = entry.hash if entry.type == 'tree' else None

    return entry
