"""
Workflow layer - Named, ordered plans of actions.

A Workflow is the run plan: its actions and their order. Execution is
delegated to a runner (see ennio.runners).
"""

from .workflow import Workflow

__all__ = ["Workflow"]
