"""Operations module for high-level minivcs operations.

This module contains the business logic built on top of the core:
- Status computation
- Restoring files from a commit
"""

from minivcs.operations.status import StatusReport, compute_status, working_files
from minivcs.operations.checkout import checkout_file, resolve_commit

__all__ = [
    'StatusReport', 'compute_status', 'working_files',
    'checkout_file', 'resolve_commit',
]
