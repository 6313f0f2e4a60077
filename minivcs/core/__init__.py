"""Core functionality for minivcs.

This module contains the core data structures:
- Objects (Blob, Tree, Commit)
- Object store
- Tree builder
- Index/staging area
- HEAD reference
- Commit engine
- Repository management
- Hashing utilities

For working-tree status, see minivcs.operations
"""

from minivcs.core.errors import (
    VcsError, ObjectNotFound, CorruptObject, CorruptIndex, InvalidPathLayout,
    PathOutsideRepository, PathNotTracked, NothingToCommit, EmptyCommitMessage,
    AlreadyInitialized, NotARepository,
)
from minivcs.core.hash import hash_object, hash_typed, NULL_ID
from minivcs.core.objects import VcsObject, Blob, Tree, TreeEntry, Commit
from minivcs.core.object_store import ObjectStore
from minivcs.core.tree_builder import TreeBuilder, flatten_tree
from minivcs.core.index import Index, IndexEntry
from minivcs.core.refs import RefManager
from minivcs.core.repository import Repository, find_repository_root
from minivcs.core.staging import StagingArea
from minivcs.core.commit_engine import CommitEngine
from minivcs.core.config import Config

__all__ = [
    'VcsError',
    'ObjectNotFound',
    'CorruptObject',
    'CorruptIndex',
    'InvalidPathLayout',
    'PathOutsideRepository',
    'PathNotTracked',
    'NothingToCommit',
    'EmptyCommitMessage',
    'AlreadyInitialized',
    'NotARepository',
    'VcsObject',
    'Blob',
    'Tree',
    'TreeEntry',
    'Commit',
    'ObjectStore',
    'TreeBuilder',
    'flatten_tree',
    'Index',
    'IndexEntry',
    'RefManager',
    'Repository',
    'find_repository_root',
    'StagingArea',
    'CommitEngine',
    'Config',
    'hash_object',
    'hash_typed',
    'NULL_ID',
]
