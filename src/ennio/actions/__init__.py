"""
Actions layer - Units of work executed by workflows.

Every action implements the Action interface (name + run(ctx) -> Output).
Concrete kinds:
- CallableAction: wraps a Python function
- BashAction: runs a shell script
"""

from .base import ACTION_NAME_RE, Action, CallableAction, check_action_name, is_valid_action_name
from .bash import BashAction

__all__ = [
    "ACTION_NAME_RE",
    "Action",
    "CallableAction",
    "BashAction",
    "check_action_name",
    "is_valid_action_name",
]
