"""Event catalogue domain models.

Field names are snake_case in Python and camelCase in every serialized form
(remote documents, the local replica blob and the HTTP API).
"""

from datetime import datetime
from enum import Enum
from functools import lru_cache
from typing import Annotated, Any, Dict, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_serializer,
    field_validator,
)
from pydantic.alias_generators import to_camel

from modules.events.timestamps import to_instant, to_store_timestamp

ALL_CITIES = "Todas"
ALL_CATEGORIES = "Todas"

CITIES = [
    "Ananindeua",
    "Aparecida de Goiânia",
    "Aracaju",
    "Belém",
    "Belford Roxo",
    "Belo Horizonte",
    "Boa Vista",
    "Brasília",
    "Campinas",
    "Campo Grande",
    "Campos dos Goytacazes",
    "Caxias do Sul",
    "Contagem",
    "Cuiabá",
    "Curitiba",
    "Duque de Caxias",
    "Feira de Santana",
    "Florianópolis",
    "Fortaleza",
    "Goiânia",
    "Guarulhos",
    "Jaboatão dos Guararapes",
    "João Pessoa",
    "Joinville",
    "Juiz de Fora",
    "Londrina",
    "Macapá",
    "Maceió",
    "Manaus",
    "Natal",
    "Niterói",
    "Nova Iguaçu",
    "Osasco",
    "Olinda",
    "Palmas",
    "Porto Alegre",
    "Porto Velho",
    "Recife",
    "Ribeirão Preto",
    "Rio Branco",
    "Rio de Janeiro",
    "Salvador",
    "Santo André",
    "Santos",
    "São Bernardo do Campo",
    "São Gonçalo",
    "São João de Meriti",
    "São José dos Campos",
    "São Luís",
    "São Paulo",
    "Serra",
    "Sorocaba",
    "Teresina",
    "Uberlândia",
    "Vila Velha",
    "Vitória",
]


class EventStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


# Statuses a moderation action may set
MODERATION_STATUSES = (EventStatus.APPROVED, EventStatus.REJECTED)


class EventCategory(str, Enum):
    PARTY = "Festa"
    SHOW = "Show"
    SPORTS = "Esportes"
    NETWORKING = "Networking"
    CULTURAL = "Cultural"
    FOOD = "Gastronomia"
    TECH = "Tecnologia"


class Gender(str, Enum):
    MALE = "Masculino"
    FEMALE = "Feminino"
    OTHER = "Outro"
    UNDISCLOSED = "Prefiro não dizer"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Coordinates(CamelModel):
    lat: float
    lng: float


# Map pin used when the proposer gives no location
DEFAULT_COORDINATES = Coordinates(lat=-23.5505, lng=-46.6333)


class ParticipantDraft(CamelModel):
    """RSVP payload as composed by the attendee."""

    name: str
    age: int = Field(ge=0)
    gender: Gender
    origin_city: str
    photo_url: str = ""
    instagram_handle: Optional[str] = None


class Participant(ParticipantDraft):
    """One confirmed attendee. Identity and timestamp are set by the store."""

    id: str
    confirmed_at: datetime

    @field_validator("confirmed_at", mode="before")
    @classmethod
    def _normalize_confirmed_at(cls, value: Any) -> datetime:
        return to_instant(value)

    @field_serializer("confirmed_at", when_used="json")
    def _serialize_confirmed_at(self, value: datetime) -> str:
        return to_store_timestamp(value)


class EventFields(CamelModel):
    """Fields shared by proposals and stored events."""

    title: str
    description: str = ""
    city: str
    date: datetime
    start_time: str = ""
    location_name: str = ""
    address: str = ""
    coordinates: Coordinates = Field(
        default_factory=lambda: DEFAULT_COORDINATES.model_copy()
    )
    category: EventCategory
    price: float = Field(default=0, ge=0)
    duration: str = ""
    image_url: str = ""
    ticket_link: Optional[str] = None
    participants_goal: int = Field(gt=0)
    organizer: str = ""

    @field_validator("date", mode="before")
    @classmethod
    def _normalize_date(cls, value: Any) -> datetime:
        return to_instant(value)

    @field_serializer("date", when_used="json")
    def _serialize_date(self, value: datetime) -> str:
        return to_store_timestamp(value)


class EventDraft(EventFields):
    """An event proposal.

    ``status`` and ``participants`` are accepted so that any payload can be
    passed through, but stores always ignore them on creation.
    """

    status: Optional[EventStatus] = None
    participants: Optional[List[Dict[str, Any]]] = None

    @field_validator("city")
    @classmethod
    def _validate_city(cls, value: str) -> str:
        if value not in CITIES:
            raise ValueError(f"unknown city: {value}")
        return value

    def to_event(self, event_id: str) -> "Event":
        """Materialize the draft as a new pending event with no participants."""
        fields = self.model_dump(exclude={"status", "participants"})
        return Event(
            id=event_id,
            status=EventStatus.PENDING,
            participants=[],
            **fields,
        )


class Event(EventFields):
    """A published or proposed gathering."""

    id: str
    status: EventStatus = EventStatus.APPROVED
    participants: List[Participant] = Field(default_factory=list)

    @field_validator("status", mode="before")
    @classmethod
    def _default_legacy_status(cls, value: Any) -> Any:
        # Records written before moderation existed have no status
        if value is None or value == "":
            return EventStatus.APPROVED
        return value

    @field_validator("participants", mode="before")
    @classmethod
    def _default_participants(cls, value: Any) -> Any:
        return [] if value is None else value


# Fields that generic updates may not touch: identity is immutable, status
# changes only through moderation and participants only through RSVPs
PROTECTED_FIELDS = ("id", "status", "participants")


def to_document(event: Event) -> Dict[str, Any]:
    """Serialize an event into its store-native, camelCase document."""
    return event.model_dump(mode="json", by_alias=True, exclude_none=True)


def from_document(document: Dict[str, Any]) -> Event:
    return Event.model_validate(document)


def _event_field(name: str) -> str:
    """Resolve a snake_case or camelCase event field name to its Python name."""
    fields = Event.model_fields
    if name in fields:
        return name
    for field_name, info in fields.items():
        if info.alias == name:
            return field_name
    raise KeyError(name)


def field_alias(name: str) -> str:
    """Resolve a snake_case or camelCase event field name to its stored name.

    Raises:
        KeyError: if the name is not an event field.
    """
    field_name = _event_field(name)
    return Event.model_fields[field_name].alias or field_name


@lru_cache(maxsize=None)
def _field_adapter(field_name: str) -> TypeAdapter:
    info = Event.model_fields[field_name]
    annotation = info.annotation
    if info.metadata:
        # Carries constraints such as ge/gt
        annotation = Annotated[(annotation, *info.metadata)]
    return TypeAdapter(annotation)


def validate_field_value(name: str, value: Any) -> Any:
    """Check a single field value against the Event schema.

    Raises:
        ValueError: if the value is not valid for the field.
    """
    field_name = _event_field(name)
    if field_name == "date":
        return to_instant(value)
    try:
        return _field_adapter(field_name).validate_python(value)
    except ValidationError as e:
        reason = e.errors()[0]["msg"] if e.errors() else str(e)
        raise ValueError(f"invalid value for {name}: {reason}") from None


def serialize_field_value(value: Any) -> Any:
    """Render a field value in store-native form."""
    if isinstance(value, datetime):
        return to_store_timestamp(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    return value


def to_update_document(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Translate partial update fields into store-native names and values.

    Every value is validated against the Event schema first, so a stored
    record always reads back as a valid Event.

    Raises:
        ValueError: on a protected or unknown field name, or an invalid value.
    """
    document: Dict[str, Any] = {}
    for name, value in fields.items():
        try:
            alias = field_alias(name)
        except KeyError:
            raise ValueError(f"unknown event field: {name}") from None
        if alias in PROTECTED_FIELDS:
            raise ValueError(f"field cannot be updated directly: {name}")
        document[alias] = serialize_field_value(validate_field_value(name, value))
    return document
