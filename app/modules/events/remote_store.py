"""DynamoDB-backed remote event store.

Table Schema:
    PK: id (String)
    Attributes: camelCase event fields; ``date`` and participants'
                ``confirmedAt`` are ISO-8601 UTC strings with millisecond
                precision; ``participants`` is a list of maps, newest first
    GSI: status-date-index (status + date)

All boto3 calls are blocking and run through ``asyncio.to_thread``. Every
call returns a classified OperationResult; failures are raised as
EventStoreError carrying that result.
"""

import asyncio
import uuid
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional

from boto3.dynamodb.types import TypeDeserializer, TypeSerializer
from pydantic import ValidationError

from core.config import settings
from core.logging import get_module_logger
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import ErrorKind
from integrations.aws import dynamodb_next
from modules.events.errors import EventNotFoundError, EventStoreError
from modules.events.models import (
    Event,
    EventDraft,
    EventStatus,
    Participant,
    ParticipantDraft,
    from_document,
    to_document,
    to_update_document,
)
from modules.events.seed import seed_events
from modules.events.store import check_moderation_status, sort_by_date
from modules.events.timestamps import utc_now

logger = get_module_logger()

EXISTS_CONDITION = "attribute_exists(id)"
NOT_EXISTS_CONDITION = "attribute_not_exists(id)"

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


def _to_dynamodb_value(value: Any) -> Any:
    """Prepare a JSON-compatible value for TypeSerializer (floats → Decimal)."""
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: _to_dynamodb_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_to_dynamodb_value(v) for v in value]
    return value


def _from_dynamodb_value(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {k: _from_dynamodb_value(v) for k, v in value.items()}
    if isinstance(value, (list, set)):
        return [_from_dynamodb_value(v) for v in value]
    return value


def serialize_item(document: Dict[str, Any]) -> Dict[str, Any]:
    """camelCase document → DynamoDB attribute map."""
    return {
        key: _serializer.serialize(_to_dynamodb_value(value))
        for key, value in document.items()
    }


def serialize_value(value: Any) -> Dict[str, Any]:
    return _serializer.serialize(_to_dynamodb_value(value))


def deserialize_item(item: Dict[str, Any]) -> Event:
    """DynamoDB attribute map → Event."""
    document = {
        key: _from_dynamodb_value(_deserializer.deserialize(value))
        for key, value in item.items()
    }
    return from_document(document)


class DynamoDBEventStore:
    """Remote event store on a DynamoDB table.

    Args:
        table_name: DynamoDB table name (default: settings)
        status_index: Name of the status+date GSI (default: settings)
        seed_factory: Produces the starter dataset for an empty table
    """

    def __init__(
        self,
        table_name: Optional[str] = None,
        status_index: Optional[str] = None,
        seed_factory: Callable[[], List[Event]] = seed_events,
    ):
        self.table_name = table_name or settings.events.EVENTS_TABLE_NAME
        self.status_index = status_index or settings.events.EVENTS_STATUS_INDEX
        self.seed_factory = seed_factory

    async def _call(self, operation: Callable[..., OperationResult], **kwargs) -> OperationResult:
        return await asyncio.to_thread(
            operation, table_name=self.table_name, **kwargs
        )

    def _raise(self, action: str, result: OperationResult, event_id: Optional[str] = None):
        if result.error_kind == ErrorKind.NOT_FOUND and event_id is not None:
            raise EventNotFoundError(event_id, response=result)
        raise EventStoreError(f"Failed to {action}: {result.message}", response=result)

    @staticmethod
    def _items(result: OperationResult) -> List[Dict[str, Any]]:
        data = result.data
        if isinstance(data, dict):
            return data.get("Items", [])
        return data or []

    def _deserialize_all(self, items: List[Dict[str, Any]]) -> List[Event]:
        """Decode listed items, skipping records that are not valid events."""
        events = []
        for item in items:
            try:
                events.append(deserialize_item(item))
            except ValidationError as e:
                logger.warning(
                    "event_record_unreadable",
                    table_name=self.table_name,
                    event_id=item.get("id", {}).get("S"),
                    error_kind=ErrorKind.SERIALIZATION_ERROR.value,
                    error=str(e),
                )
        return events

    # Reads

    async def list_approved(self, use_index: bool = True) -> List[Event]:
        """Approved events by date ascending.

        Seeds the table once when it is completely empty, then re-issues the
        listing exactly once. The re-issued listing is a consistent scan
        because index reads may not yet see the seed records.
        """
        events = await self._list_approved_once(use_index)
        if events:
            return events

        if not await self._is_empty():
            return events

        await self.seed()
        return await self._list_approved_once(use_index=False)

    async def _list_approved_once(self, use_index: bool) -> List[Event]:
        if use_index:
            result = await self._call(
                dynamodb_next.query,
                IndexName=self.status_index,
                KeyConditionExpression="#status = :status",
                ExpressionAttributeNames={"#status": "status"},
                ExpressionAttributeValues={
                    ":status": {"S": EventStatus.APPROVED.value}
                },
                ScanIndexForward=True,
            )
            if result.is_success:
                indexed = self._deserialize_all(self._items(result))
                # The index is sparse: records without a status are missing
                return sort_by_date(indexed + await self._list_legacy())

            if result.error_kind != ErrorKind.QUERY_UNSUPPORTED:
                self._raise("list approved events", result)

            logger.warning(
                "events_status_index_missing",
                table_name=self.table_name,
                index=self.status_index,
            )

        events = await self._scan_all()
        return [event for event in events if event.status == EventStatus.APPROVED]

    async def _list_legacy(self) -> List[Event]:
        """Records written before moderation existed; they read as approved."""
        result = await self._call(
            dynamodb_next.scan,
            FilterExpression="attribute_not_exists(#status)",
            ExpressionAttributeNames={"#status": "status"},
            ConsistentRead=True,
        )
        if not result.is_success:
            self._raise("list legacy events", result)
        return self._deserialize_all(self._items(result))

    async def list_all(self) -> List[Event]:
        """Every event regardless of status, by date ascending."""
        return await self._scan_all()

    async def _scan_all(self) -> List[Event]:
        result = await self._call(dynamodb_next.scan, ConsistentRead=True)
        if not result.is_success:
            self._raise("scan events", result)
        return sort_by_date(self._deserialize_all(self._items(result)))

    async def _is_empty(self) -> bool:
        result = await self._call(dynamodb_next.scan, Limit=1, ProjectionExpression="id")
        if not result.is_success:
            self._raise("check for an empty table", result)
        return not self._items(result)

    async def get_by_id(self, event_id: str) -> Optional[Event]:
        result = await self._call(
            dynamodb_next.get_item,
            Key={"id": {"S": event_id}},
            ConsistentRead=True,
        )
        if not result.is_success:
            self._raise("get event", result)
        item = (result.data or {}).get("Item")
        if not item:
            return None
        return deserialize_item(item)

    async def probe(self) -> bool:
        """Minimal one-record read; True when the table is reachable and readable."""
        try:
            result = await self._call(
                dynamodb_next.scan, Limit=1, ProjectionExpression="id"
            )
        except Exception as e:  # pylint: disable=broad-except
            logger.warning("events_probe_failed", error=str(e))
            return False
        return result.is_success

    # Writes

    async def seed(self) -> int:
        """Write the starter dataset; returns how many records were written.

        Records that already exist are left alone, so concurrent seeding
        converges on a single copy of each seed record.
        """
        written = 0
        for event in self.seed_factory():
            seeded = event.model_copy(update={"status": EventStatus.APPROVED})
            result = await self._call(
                dynamodb_next.put_item,
                Item=serialize_item(to_document(seeded)),
                ConditionExpression=NOT_EXISTS_CONDITION,
            )
            if result.is_success:
                written += 1
            elif result.error_kind != ErrorKind.NOT_FOUND:
                self._raise("seed events", result)

        logger.info("events_seeded", table_name=self.table_name, written=written)
        return written

    async def create(self, draft: EventDraft) -> Event:
        """Insert a new pending event with no participants."""
        event = draft.to_event(str(uuid.uuid4()))
        result = await self._call(
            dynamodb_next.put_item,
            Item=serialize_item(to_document(event)),
            ConditionExpression=NOT_EXISTS_CONDITION,
        )
        if not result.is_success:
            self._raise("create event", result)

        logger.info("event_created", event_id=event.id, title=event.title)
        return event

    async def _update(
        self,
        event_id: str,
        action: str,
        update_expression: str,
        names: Dict[str, str],
        values: Dict[str, Any],
    ) -> Event:
        kwargs: Dict[str, Any] = {
            "Key": {"id": {"S": event_id}},
            "UpdateExpression": update_expression,
            "ConditionExpression": EXISTS_CONDITION,
            "ExpressionAttributeValues": values,
            "ReturnValues": "ALL_NEW",
        }
        if names:
            kwargs["ExpressionAttributeNames"] = names

        result = await self._call(dynamodb_next.update_item, **kwargs)
        if not result.is_success:
            self._raise(action, result, event_id=event_id)
        return deserialize_item(result.data["Attributes"])

    async def update(self, event_id: str, fields: Dict[str, Any]) -> Event:
        """Merge the given fields into the stored event; other fields are untouched."""
        document = to_update_document(fields)
        if not document:
            event = await self.get_by_id(event_id)
            if event is None:
                raise EventNotFoundError(event_id)
            return event

        names = {}
        values = {}
        assignments = []
        for index, (name, value) in enumerate(document.items()):
            names[f"#f{index}"] = name
            values[f":v{index}"] = serialize_value(value)
            assignments.append(f"#f{index} = :v{index}")

        event = await self._update(
            event_id,
            "update event",
            "SET " + ", ".join(assignments),
            names,
            values,
        )
        logger.info("event_updated", event_id=event_id, fields=list(document))
        return event

    async def set_status(self, event_id: str, status: EventStatus) -> Event:
        status = check_moderation_status(status)
        event = await self._update(
            event_id,
            "set event status",
            "SET #status = :status",
            {"#status": "status"},
            {":status": {"S": status.value}},
        )
        logger.info("event_status_set", event_id=event_id, status=status.value)
        return event

    async def delete(self, event_id: str) -> None:
        result = await self._call(
            dynamodb_next.delete_item,
            Key={"id": {"S": event_id}},
        )
        if not result.is_success:
            self._raise("delete event", result)
        logger.info("event_deleted", event_id=event_id)

    async def add_participant(self, event_id: str, draft: ParticipantDraft) -> Event:
        """Prepend an RSVP with an atomic list_append and return the stored event.

        Concurrent additions from other clients are never lost: the append is
        applied by the table, not by rewriting the whole participant list.
        """
        participant = Participant(
            id=f"part-{uuid.uuid4()}",
            confirmed_at=utc_now(),
            **draft.model_dump(),
        )
        participant_document = participant.model_dump(
            mode="json", by_alias=True, exclude_none=True
        )
        event = await self._update(
            event_id,
            "add participant",
            "SET participants = list_append(:new_participants, "
            "if_not_exists(participants, :empty_list))",
            {},
            {
                ":new_participants": serialize_value([participant_document]),
                ":empty_list": {"L": []},
            },
        )
        logger.info(
            "participant_added",
            event_id=event_id,
            participant_id=participant.id,
            participants=len(event.participants),
        )
        return event
