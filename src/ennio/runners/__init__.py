"""
Runners layer - Execution engines for workflows.

Runners drive a workflow's actions through a run context, handling
progress reporting and logging.
"""

from .base import RunnerCallbacks, RunnerProtocol, RunnerResult
from .sequential import SequentialRunner

__all__ = [
    "RunnerCallbacks",
    "RunnerProtocol",
    "RunnerResult",
    "SequentialRunner",
]
