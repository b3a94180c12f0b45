"""Event service: the consistency and fallback controller.

Every operation is attempted against the remote store first. Failures are
classified into an ErrorKind and resolved through FALLBACK_POLICY; successful
remote results are written through to the local replica so both stores
converge.
"""

from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar

from core.config import settings
from core.logging import get_module_logger
from infrastructure.operations.classifiers import classify_integration_error
from infrastructure.operations.status import ErrorKind
from infrastructure.persistence.key_value import FileKeyValueStorage, KeyValueStorage
from modules.events.local_replica import LocalReplicaStore
from modules.events.local_store import LocalEventStore
from modules.events.models import Event, EventDraft, EventStatus, ParticipantDraft
from modules.events.policy import (
    DEGRADED_KINDS,
    EventOperation,
    FallbackAction,
    resolve_action,
)
from modules.events.remote_store import DynamoDBEventStore

logger = get_module_logger()

T = TypeVar("T")


class EventService:
    """Single entry point for event operations.

    Args:
        remote: The authoritative remote store
        local: The local replica store used for fallback and write-through
    """

    def __init__(self, remote: DynamoDBEventStore, local: LocalEventStore):
        self.remote = remote
        self.local = local

    async def _execute(
        self,
        operation: EventOperation,
        remote_call: Callable[[], Awaitable[T]],
        local_call: Callable[[], Awaitable[T]],
        write_through: Callable[[T], None],
        retry_call: Optional[Callable[[], Awaitable[T]]] = None,
        **log_context: Any,
    ) -> T:
        call = remote_call
        retried = False
        while True:
            try:
                result = await call()
                break
            except Exception as e:  # pylint: disable=broad-except
                classified = classify_integration_error(e)
                kind = classified.error_kind or ErrorKind.UNKNOWN
                action = resolve_action(operation, kind)

                # The transformed call is attempted once; its own failure is
                # resolved through the policy like any other
                if action == FallbackAction.RETRY_TRANSFORMED and retry_call and not retried:
                    logger.info(
                        "event_store_retry_transformed",
                        operation=operation.value,
                        error_kind=kind.value,
                        **log_context,
                    )
                    call = retry_call
                    retried = True
                    continue

                if action == FallbackAction.FALLBACK:
                    log = logger.warning if kind in DEGRADED_KINDS else logger.error
                    log(
                        "event_store_degraded",
                        operation=operation.value,
                        error_kind=kind.value,
                        error=str(e),
                        retried=retried,
                        **log_context,
                    )
                    return await local_call()

                logger.error(
                    "event_store_operation_failed",
                    operation=operation.value,
                    error_kind=kind.value,
                    error=str(e),
                    retried=retried,
                    **log_context,
                )
                raise

        try:
            write_through(result)
        except Exception as e:  # pylint: disable=broad-except
            logger.error(
                "local_replica_write_through_failed",
                operation=operation.value,
                error=str(e),
                **log_context,
            )
        return result

    def _replace_all(self, events: List[Event]) -> None:
        self.local.replace_all(events)

    def _sync_one(self, event_id: str) -> Callable[[Optional[Event]], None]:
        def sync(event: Optional[Event]) -> None:
            if event is None:
                self.local.remove(event_id)
            else:
                self.local.upsert(event)

        return sync

    # Reads

    async def list_approved(self) -> List[Event]:
        """Approved events by date ascending.

        A successful remote listing fully replaces the local replica, keeping
        only records created offline. Pending and rejected events therefore
        drop out of the replica until the next list_all, so a moderator who
        goes offline right after a public listing sees an empty queue.
        """
        return await self._execute(
            EventOperation.LIST_APPROVED,
            self.remote.list_approved,
            self.local.list_approved,
            self._replace_all,
            retry_call=lambda: self.remote.list_approved(use_index=False),
        )

    async def list_all(self) -> List[Event]:
        return await self._execute(
            EventOperation.LIST_ALL,
            self.remote.list_all,
            self.local.list_all,
            self._replace_all,
        )

    async def get_by_id(self, event_id: str) -> Optional[Event]:
        return await self._execute(
            EventOperation.GET_BY_ID,
            lambda: self.remote.get_by_id(event_id),
            lambda: self.local.get_by_id(event_id),
            self._sync_one(event_id),
            event_id=event_id,
        )

    # Writes

    async def create(self, draft: EventDraft) -> Event:
        return await self._execute(
            EventOperation.CREATE,
            lambda: self.remote.create(draft),
            lambda: self.local.create(draft),
            self.local.upsert,
        )

    async def update(self, event_id: str, fields: Dict[str, Any]) -> Event:
        return await self._execute(
            EventOperation.UPDATE,
            lambda: self.remote.update(event_id, fields),
            lambda: self.local.update(event_id, fields),
            self.local.upsert,
            event_id=event_id,
        )

    async def set_status(self, event_id: str, status: EventStatus) -> Event:
        return await self._execute(
            EventOperation.SET_STATUS,
            lambda: self.remote.set_status(event_id, status),
            lambda: self.local.set_status(event_id, status),
            self.local.upsert,
            event_id=event_id,
            status=EventStatus(status).value,
        )

    async def delete(self, event_id: str) -> None:
        await self._execute(
            EventOperation.DELETE,
            lambda: self.remote.delete(event_id),
            lambda: self.local.delete(event_id),
            lambda _: self.local.remove(event_id),
            event_id=event_id,
        )

    async def add_participant(self, event_id: str, draft: ParticipantDraft) -> Event:
        return await self._execute(
            EventOperation.ADD_PARTICIPANT,
            lambda: self.remote.add_participant(event_id, draft),
            lambda: self.local.add_participant(event_id, draft),
            self.local.upsert,
            event_id=event_id,
        )

    async def probe(self) -> bool:
        """Advisory reachability check; never falls back and never raises."""
        try:
            return await self.remote.probe()
        except Exception as e:  # pylint: disable=broad-except
            logger.warning("events_probe_failed", error=str(e))
            return False


def build_event_service(
    storage: Optional[KeyValueStorage] = None,
) -> EventService:
    """Wire the remote DynamoDB store and the file-backed local replica."""
    storage = storage or FileKeyValueStorage(settings.events.LOCAL_REPLICA_DIR)
    replica = LocalReplicaStore(storage, settings.events.LOCAL_REPLICA_KEY)
    return EventService(remote=DynamoDBEventStore(), local=LocalEventStore(replica))
