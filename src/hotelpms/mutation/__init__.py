"""Public optimistic-mutation exports for hotelpms."""

from __future__ import annotations

from .coordinator import NOT_AUTHENTICATED_MESSAGE, OptimisticMutationCoordinator
from .feedback import FeedbackState
from .intent import MutationAction, MutationIntent
from .settings import CoordinatorSettings
from .undo import UndoAffordance

__all__ = [
    "OptimisticMutationCoordinator",
    "NOT_AUTHENTICATED_MESSAGE",
    "FeedbackState",
    "MutationAction",
    "MutationIntent",
    "CoordinatorSettings",
    "UndoAffordance",
]
