"""Device-local replica of the event catalogue.

The whole list is serialized as one JSON array under a single well-known key.
Instants are written in the same millisecond ISO form the remote table uses
and are rebuilt as timezone-aware datetimes on read.
"""

import json
from typing import Callable, List, Optional

from pydantic import ValidationError

from core.logging import get_module_logger
from infrastructure.operations.status import ErrorKind
from infrastructure.persistence.key_value import KeyValueStorage
from modules.events.errors import ReplicaUnreadableError
from modules.events.models import Event, EventStatus, from_document, to_document
from modules.events.seed import seed_events

logger = get_module_logger()


class LocalReplicaStore:
    """Reads and replaces the full replica blob.

    Args:
        storage: Key-value backend holding the blob
        key: The well-known key of the blob
        seed_factory: Produces the starter dataset for a missing blob
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str,
        seed_factory: Callable[[], List[Event]] = seed_events,
    ):
        self.storage = storage
        self.key = key
        self.seed_factory = seed_factory

    def _seed(self) -> List[Event]:
        return [
            event.model_copy(update={"status": EventStatus.APPROVED})
            for event in self.seed_factory()
        ]

    def _initialize(self) -> List[Event]:
        events = self._seed()
        self.write_all(events)
        logger.info("local_replica_initialized", key=self.key, count=len(events))
        return events

    def _decode(self, blob: str) -> List[Event]:
        try:
            documents = json.loads(blob)
            if not isinstance(documents, list):
                raise ValueError("replica blob is not a list")
            return [from_document(document) for document in documents]
        except (ValueError, TypeError, ValidationError) as e:
            # json.JSONDecodeError is a ValueError
            raise ReplicaUnreadableError(self.key, str(e)) from e

    def read_all(self) -> List[Event]:
        """Return every replicated event.

        A missing blob is initialized with the seed dataset. A blob that cannot
        be decoded yields the seed dataset without overwriting the stored copy.
        """
        blob: Optional[str] = self.storage.get_item(self.key)
        if blob is None:
            return self._initialize()

        try:
            return self._decode(blob)
        except ReplicaUnreadableError as e:
            logger.warning(
                "local_replica_unreadable",
                key=self.key,
                error_kind=ErrorKind.SERIALIZATION_ERROR.value,
                error=str(e),
            )
            return self._seed()

    def read_for_update(self) -> List[Event]:
        """Like read_all, for callers that write the list back.

        Raises:
            ReplicaUnreadableError: the stored blob cannot be decoded; it is
                left untouched.
        """
        blob: Optional[str] = self.storage.get_item(self.key)
        if blob is None:
            return self._initialize()
        return self._decode(blob)

    def write_all(self, events: List[Event]) -> None:
        """Persist the full list, replacing any prior content."""
        blob = json.dumps([to_document(event) for event in events], ensure_ascii=False)
        self.storage.set_item(self.key, blob)
