"""OptimisticMutationCoordinator: local-first mutations with revert on remote failure."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

from hotelpms.errors import AuthenticationMissingError, HotelPmsError, LocalValidationError
from hotelpms.history.base import HistoryLogger
from hotelpms.local import LocalCollection
from hotelpms.local.collection import Identifiable
from hotelpms.models import AuditEventType, MutationResult
from hotelpms.util.ids import new_intent_id

from .feedback import FeedbackState
from .intent import Compensation, MutationAction, MutationIntent, RemoteCall
from .settings import CoordinatorSettings
from .undo import UndoAffordance

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Identifiable)

NOT_AUTHENTICATED_MESSAGE = "User not authenticated"


@dataclass(slots=True, eq=False)
class _AppliedUpdate:
    """An update shown locally; snapshot is the value it was applied over."""

    transform: Callable[[Any], Any]
    snapshot: Any
    updated: Any
    settled: bool = False


@dataclass(slots=True)
class _Tracked:
    """Where an inserted/deleted entity currently lives, shared with its undo."""

    entity: Any
    current_id: str
    index: Optional[int] = None
    server_entity: Any = None
    undone: bool = False


class OptimisticMutationCoordinator(Generic[E]):
    """
    Apply mutations to a LocalCollection first, then confirm them remotely.

    Every apply_* call performs its local step before returning and hands back
    an asyncio.Task that resolves to a MutationResult once the remote call
    settled. Remote failures never propagate: the local change is reverted
    and the failure is reported through FeedbackState.

    Must be used from inside a running event loop, which owns the collection.
    """

    def __init__(
        self,
        collection: LocalCollection[E],
        *,
        feedback: Optional[FeedbackState] = None,
        history: Optional[HistoryLogger] = None,
        settings: Optional[CoordinatorSettings] = None,
    ) -> None:
        self._settings = settings or CoordinatorSettings()
        self._collection = collection
        self._feedback = feedback or FeedbackState(
            toast_duration_sec=self._settings.toast_duration_sec
        )
        self._history = history
        self._undo: Optional[UndoAffordance] = None
        self._pending: set[asyncio.Task] = set()
        # Per entity, updates applied while an earlier one is still unsettled.
        self._updates: dict[str, list[_AppliedUpdate]] = {}

    @property
    def collection(self) -> LocalCollection[E]:
        return self._collection

    @property
    def feedback(self) -> FeedbackState:
        return self._feedback

    @property
    def current_undo(self) -> Optional[UndoAffordance]:
        """The undo affordance still available to the user, if any."""
        if self._undo is not None and self._undo.is_active:
            return self._undo
        return None

    @property
    def pending(self) -> list[asyncio.Task]:
        return list(self._pending)

    # ----------------------------
    # Mutation APIs
    # ----------------------------
    def apply_update(
        self,
        entity_id: str,
        transform: Callable[[E], E],
        remote_call: RemoteCall,
        *,
        label: str = "Update failed",
    ) -> "asyncio.Task[MutationResult]":
        """
        Replace the entity with transform(current), then run remote_call.

        An id that is not in the collection is skipped silently and no remote
        call is made.
        """
        intent = self._new_intent(
            MutationAction.UPDATE,
            entity_id,
            remote_call,
            label,
            transform=transform,
        )

        current = self._collection.get(entity_id)
        if current is None:
            logger.debug("Update skipped: %s is not in the local collection", entity_id)
            return self._spawn(self._skipped(intent))

        updated = transform(current)
        if updated.id != entity_id:
            raise LocalValidationError(
                "transform must keep the entity id",
                details={"entity_id": entity_id, "new_id": updated.id},
            )
        self._supersede_undo()
        applied = _AppliedUpdate(transform=transform, snapshot=current, updated=updated)
        self._updates.setdefault(entity_id, []).append(applied)
        self._collection.replace(entity_id, updated)
        return self._spawn(self._settle_update(intent, applied))

    def apply_insert(
        self,
        placeholder: E,
        remote_call: Callable[[], Awaitable[E]],
        *,
        actor_id: Optional[str],
        label: str = "Create failed",
        toast_message: Optional[str] = None,
        undo_message: Optional[str] = None,
        undo_remote_call: Optional[Compensation] = None,
    ) -> "asyncio.Task[MutationResult]":
        """
        Append placeholder, then replace it with the entity remote_call returns.

        Registers an undo that removes the placeholder or its server-side
        replacement. Without an acting user nothing is changed and an error
        is reported.
        """
        intent = self._new_intent(
            MutationAction.INSERT,
            placeholder.id,
            remote_call,
            label,
            entity=placeholder,
            undo_remote_call=undo_remote_call,
        )

        if not actor_id:
            return self._spawn(self._unauthenticated(intent))

        self._collection.append(placeholder)
        tracked = _Tracked(entity=placeholder, current_id=placeholder.id)
        task = self._spawn(self._settle_insert(intent, tracked, actor_id))

        if toast_message:
            self._feedback.show_toast(toast_message)
        self._register_undo(
            undo_message or "Added",
            lambda: self._undo_insert(intent, tracked, task, actor_id),
        )
        return task

    def apply_delete(
        self,
        entity_id: str,
        remote_call: RemoteCall,
        *,
        actor_id: Optional[str],
        label: str = "Delete failed",
        toast_message: Optional[str] = None,
        undo_message: Optional[str] = None,
        undo_remote_call: Optional[Compensation] = None,
    ) -> "asyncio.Task[MutationResult]":
        """
        Remove the entity, then run remote_call; put it back if that fails.

        Registers an undo that re-inserts the entity at its former index.
        An id that is not in the collection is skipped silently.
        """
        intent = self._new_intent(
            MutationAction.DELETE,
            entity_id,
            remote_call,
            label,
            undo_remote_call=undo_remote_call,
        )

        if not actor_id:
            return self._spawn(self._unauthenticated(intent))

        removed = self._collection.remove(entity_id)
        if removed is None:
            logger.debug("Delete skipped: %s is not in the local collection", entity_id)
            return self._spawn(self._skipped(intent))

        index, entity = removed
        intent.entity = entity
        tracked = _Tracked(entity=entity, current_id=entity_id, index=index)
        task = self._spawn(self._settle_delete(intent, tracked, actor_id))

        if toast_message:
            self._feedback.show_toast(toast_message)
        self._register_undo(
            undo_message or "Deleted",
            lambda: self._undo_delete(intent, tracked, task, actor_id),
        )
        return task

    def undo(self) -> bool:
        """Run the current undo affordance. Returns False if none is active."""
        if self._undo is None:
            return False
        return self._undo.invoke()

    async def drain(self) -> None:
        """Wait until every remote call (and undo compensation) has settled."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    # ----------------------------
    # Settling
    # ----------------------------
    async def _settle_update(self, intent: MutationIntent, applied: _AppliedUpdate) -> MutationResult:
        try:
            await intent.remote_call()
        except Exception as exc:
            self._revert_update(intent.entity_id, applied)
            return self._reverted(intent, exc)
        applied.settled = True
        self._trim_updates(intent.entity_id)
        return self._confirmed(intent)

    def _revert_update(self, entity_id: str, failed: _AppliedUpdate) -> None:
        """
        Drop a failed update from the entity's chain.

        Later updates on the same entity were applied on top of the failed
        value; they are re-applied to the failed update's snapshot so their
        own (possibly confirmed) changes survive the revert.
        """
        chain = self._updates.get(entity_id, [])
        if failed not in chain:
            return
        shown = chain[-1].updated
        position = chain.index(failed)
        later = chain[position + 1 :]
        del chain[position]

        value = failed.snapshot
        for entry in later:
            entry.snapshot = value
            entry.updated = entry.transform(value)
            value = entry.updated

        if self._collection.get(entity_id) is shown:
            self._collection.replace(entity_id, value)
        else:
            # Removed or replaced (e.g. reloaded) since; nothing to restore.
            logger.debug("Revert skipped: %s changed since the update", entity_id)
        self._trim_updates(entity_id)

    def _trim_updates(self, entity_id: str) -> None:
        chain = self._updates.get(entity_id)
        if chain is None:
            return
        while chain and chain[0].settled:
            chain.pop(0)
        if not chain:
            del self._updates[entity_id]

    async def _settle_insert(
        self,
        intent: MutationIntent,
        tracked: _Tracked,
        actor_id: str,
    ) -> MutationResult:
        try:
            created = await intent.remote_call()
        except Exception as exc:
            if not tracked.undone:
                self._collection.remove(tracked.current_id)
            return self._reverted(intent, exc)

        tracked.server_entity = created
        if not tracked.undone:
            self._swap_placeholder(tracked, created)

        await self._record_history(AuditEventType.CREATED, created.id, actor_id)
        return self._confirmed(intent, result_entity_id=created.id)

    async def _settle_delete(
        self,
        intent: MutationIntent,
        tracked: _Tracked,
        actor_id: str,
    ) -> MutationResult:
        try:
            await intent.remote_call()
        except Exception as exc:
            self._restore(tracked)
            return self._reverted(intent, exc)

        tracked.server_entity = tracked.entity
        await self._record_history(AuditEventType.DELETED, intent.entity_id, actor_id)
        return self._confirmed(intent)

    def _swap_placeholder(self, tracked: _Tracked, created: E) -> None:
        if created.id != tracked.current_id and created.id in self._collection:
            # A reload already brought the server row in; drop the placeholder.
            self._collection.remove(tracked.current_id)
        else:
            self._collection.replace(tracked.current_id, created)
        tracked.current_id = created.id

    def _restore(self, tracked: _Tracked) -> None:
        if tracked.current_id in self._collection:
            return
        self._collection.insert(
            tracked.index if tracked.index is not None else len(self._collection),
            tracked.entity,
        )

    # ----------------------------
    # Undo
    # ----------------------------
    def _register_undo(self, message: str, action: Callable[[], None]) -> None:
        self._supersede_undo()
        self._undo = UndoAffordance(
            message,
            action,
            window_sec=self._settings.undo_window_sec,
        )

    def _supersede_undo(self) -> None:
        if self._undo is not None:
            self._undo.expire()
            self._undo = None

    def _undo_insert(
        self,
        intent: MutationIntent,
        tracked: _Tracked,
        task: asyncio.Task,
        actor_id: str,
    ) -> None:
        tracked.undone = True
        self._collection.remove(tracked.current_id)
        logger.debug("Undo insert of %s", tracked.current_id)

        if intent.undo_remote_call is not None:
            self._spawn(self._compensate_insert(intent, tracked, task, actor_id))

    def _undo_delete(
        self,
        intent: MutationIntent,
        tracked: _Tracked,
        task: asyncio.Task,
        actor_id: str,
    ) -> None:
        tracked.undone = True
        self._restore(tracked)
        logger.debug("Undo delete of %s", tracked.current_id)

        if intent.undo_remote_call is not None:
            self._spawn(self._compensate_delete(intent, tracked, task, actor_id))

    async def _compensate_insert(
        self,
        intent: MutationIntent,
        tracked: _Tracked,
        task: asyncio.Task,
        actor_id: str,
    ) -> None:
        result: MutationResult = await task
        if not result.ok:
            return

        created = tracked.server_entity
        try:
            await intent.undo_remote_call(created)  # type: ignore[misc]
        except Exception as exc:
            # The row still exists remotely; show it again.
            tracked.entity = created
            tracked.current_id = created.id
            tracked.index = None
            self._restore(tracked)
            self._report(f"Failed to undo: {exc}", exc, intent)
            return
        await self._record_history(AuditEventType.DELETED, created.id, actor_id)

    async def _compensate_delete(
        self,
        intent: MutationIntent,
        tracked: _Tracked,
        task: asyncio.Task,
        actor_id: str,
    ) -> None:
        result: MutationResult = await task
        if not result.ok:
            return

        try:
            await intent.undo_remote_call(tracked.entity)  # type: ignore[misc]
        except Exception as exc:
            # The row is gone remotely; hide it again.
            self._collection.remove(tracked.current_id)
            self._report(f"Failed to undo: {exc}", exc, intent)
            return
        await self._record_history(AuditEventType.CREATED, tracked.current_id, actor_id)

    # ----------------------------
    # Internals
    # ----------------------------
    def _new_intent(
        self,
        action: MutationAction,
        entity_id: str,
        remote_call: RemoteCall,
        label: str,
        **fields: Any,
    ) -> MutationIntent:
        intent = MutationIntent(
            intent_id=new_intent_id(),
            action=action,
            entity_id=entity_id,
            remote_call=remote_call,
            label=label,
            **fields,
        )
        try:
            intent.validate_required_fields()
        except ValueError as exc:
            raise LocalValidationError(
                "Invalid mutation intent",
                details={"action": action.value, "entity_id": entity_id},
                cause=exc,
            ) from exc
        return intent

    def _spawn(self, coro: Awaitable[Any]) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)  # type: ignore[arg-type]
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _record_history(
        self,
        event_type: AuditEventType,
        entity_id: str,
        actor_id: str,
    ) -> None:
        if self._history is None:
            return
        try:
            await self._history.record(event_type, entity_id, actor_id)
        except Exception as exc:
            logger.warning(
                "History record %s for %s failed: %s",
                event_type.value,
                entity_id,
                exc,
            )

    def _report(self, message: str, exc: BaseException, intent: MutationIntent) -> None:
        logger.warning(
            "%s of %s reverted (%s): %s",
            intent.action.value,
            intent.entity_id,
            exc.__class__.__name__,
            exc,
        )
        self._feedback.report_error(message)

    async def _skipped(self, intent: MutationIntent) -> MutationResult:
        return MutationResult(
            intent_id=intent.intent_id,
            kind=intent.action.value,  # type: ignore[arg-type]
            entity_id=intent.entity_id,
            status="skipped",
        )

    async def _unauthenticated(self, intent: MutationIntent) -> MutationResult:
        exc = AuthenticationMissingError(NOT_AUTHENTICATED_MESSAGE)
        self._feedback.report_error(NOT_AUTHENTICATED_MESSAGE)
        return MutationResult(
            intent_id=intent.intent_id,
            kind=intent.action.value,  # type: ignore[arg-type]
            entity_id=intent.entity_id,
            status="skipped",
            error_type=exc.__class__.__name__,
            error_message=str(exc),
        )

    def _confirmed(
        self,
        intent: MutationIntent,
        *,
        result_entity_id: Optional[str] = None,
    ) -> MutationResult:
        logger.debug("%s of %s confirmed", intent.action.value, intent.entity_id)
        return MutationResult(
            intent_id=intent.intent_id,
            kind=intent.action.value,  # type: ignore[arg-type]
            entity_id=intent.entity_id,
            status="confirmed",
            result_entity_id=result_entity_id,
        )

    def _reverted(self, intent: MutationIntent, exc: Exception) -> MutationResult:
        message = f"{intent.label}: {_describe(exc)}"
        self._report(message, exc, intent)
        return MutationResult(
            intent_id=intent.intent_id,
            kind=intent.action.value,  # type: ignore[arg-type]
            entity_id=intent.entity_id,
            status="reverted",
            error_type=exc.__class__.__name__,
            error_message=message,
        )


def _describe(exc: BaseException) -> str:
    text = str(exc)
    if text:
        return text
    if isinstance(exc, HotelPmsError):
        return exc.__class__.__name__
    return repr(exc)
