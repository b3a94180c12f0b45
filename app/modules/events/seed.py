"""Built-in starter dataset.

Used to populate an empty remote table and to initialize a missing local
replica. Identifiers are fixed so that two clients seeding the same empty
table concurrently write the same records instead of duplicating them.
"""

from datetime import timedelta
from typing import List

from modules.events.models import (
    Coordinates,
    Event,
    EventCategory,
    EventStatus,
    Gender,
    Participant,
)
from modules.events.timestamps import to_instant

_NAMES = [
    "Ana Silva",
    "Bruno Santos",
    "Carla Dias",
    "Daniel Oliveira",
    "Elena Costa",
    "Fábio Lima",
    "Gabriela Rocha",
    "Hugo Souza",
]
_ORIGIN_CITIES = ["São Paulo", "Rio de Janeiro", "Curitiba", "Belo Horizonte"]


def _participants(event_key: str, count: int, confirmed_from: str) -> List[Participant]:
    """Newest-first participants, one hour apart."""
    newest = to_instant(confirmed_from)
    participants = []
    for i in range(count):
        name = _NAMES[i % len(_NAMES)]
        participants.append(
            Participant(
                id=f"part-{event_key}-{i}",
                name=name,
                age=20 + (i * 7) % 15,
                gender=Gender.MALE if i % 2 else Gender.FEMALE,
                origin_city=_ORIGIN_CITIES[i % len(_ORIGIN_CITIES)],
                photo_url=f"https://i.pravatar.cc/150?u={i + 100}",
                instagram_handle="@" + name.lower().replace(" ", "."),
                confirmed_at=newest - timedelta(hours=i),
            )
        )
    return participants


def seed_events() -> List[Event]:
    """Return a fresh copy of the starter dataset, all approved."""
    return [
        Event(
            id="seed-01",
            title="Sunset Jazz no Ibirapuera",
            description="Tarde de jazz ao ar livre com bandas locais.",
            city="São Paulo",
            date="2026-11-07T20:00:00.000Z",
            start_time="17:00",
            location_name="Parque Ibirapuera",
            address="Av. Pedro Álvares Cabral - Vila Mariana",
            coordinates=Coordinates(lat=-23.5874, lng=-46.6576),
            category=EventCategory.SHOW,
            price=0,
            duration="4 horas",
            image_url="https://images.unsplash.com/photo-1415201364774-f6f0bb35f28f",
            participants_goal=200,
            organizer="Coletivo Jazz SP",
            status=EventStatus.APPROVED,
            participants=_participants("01", 5, "2026-10-18T15:00:00.000Z"),
        ),
        Event(
            id="seed-02",
            title="Corrida da Orla",
            description="Corrida de 5 km pela orla com hidratação e medalha.",
            city="Rio de Janeiro",
            date="2026-11-15T09:30:00.000Z",
            start_time="06:30",
            location_name="Posto 6",
            address="Av. Atlântica - Copacabana",
            coordinates=Coordinates(lat=-22.9868, lng=-43.1898),
            category=EventCategory.SPORTS,
            price=45,
            duration="2 horas",
            image_url="https://images.unsplash.com/photo-1452626038306-9aae5e071dd3",
            participants_goal=500,
            organizer="Rio Runners",
            status=EventStatus.APPROVED,
            participants=_participants("02", 3, "2026-10-17T12:00:00.000Z"),
        ),
        Event(
            id="seed-03",
            title="Meetup Python Curitiba",
            description="Palestras relâmpago e networking para devs.",
            city="Curitiba",
            date="2026-11-20T22:00:00.000Z",
            start_time="19:00",
            location_name="Hub de Inovação",
            address="Rua Eng. Rebouças, 1732 - Rebouças",
            coordinates=Coordinates(lat=-25.4431, lng=-49.2697),
            category=EventCategory.TECH,
            price=0,
            duration="3 horas",
            image_url="https://images.unsplash.com/photo-1540575467063-178a50c2df87",
            participants_goal=80,
            organizer="Python Sul",
            status=EventStatus.APPROVED,
            participants=_participants("03", 2, "2026-10-16T18:00:00.000Z"),
        ),
        Event(
            id="seed-04",
            title="Festival de Comida de Rua",
            description="Food trucks, música ao vivo e feira de artesanato.",
            city="Belo Horizonte",
            date="2026-11-28T15:00:00.000Z",
            start_time="12:00",
            location_name="Praça da Liberdade",
            address="Praça da Liberdade - Funcionários",
            coordinates=Coordinates(lat=-19.9320, lng=-43.9381),
            category=EventCategory.FOOD,
            price=10,
            duration="8 horas",
            image_url="https://images.unsplash.com/photo-1555939594-58d7cb561ad1",
            participants_goal=1000,
            organizer="BH Gastronomia",
            status=EventStatus.APPROVED,
            participants=[],
        ),
        Event(
            id="seed-05",
            title="Noite Eletrônica",
            description="Line-up com DJs da cena nacional até o amanhecer.",
            city="Florianópolis",
            date="2026-12-05T02:00:00.000Z",
            start_time="23:00",
            location_name="Jurerê Beach Club",
            address="Av. dos Búzios - Jurerê Internacional",
            coordinates=Coordinates(lat=-27.4393, lng=-48.4961),
            category=EventCategory.PARTY,
            price=120,
            duration="7 horas",
            image_url="https://images.unsplash.com/photo-1492684223066-81342ee5ff30",
            participants_goal=800,
            organizer="Floripa Nights",
            status=EventStatus.APPROVED,
            participants=_participants("05", 8, "2026-10-18T22:00:00.000Z"),
        ),
        Event(
            id="seed-06",
            title="Sarau no Pelourinho",
            description="Poesia, capoeira e música popular no centro histórico.",
            city="Salvador",
            date="2026-12-12T21:00:00.000Z",
            start_time="18:00",
            location_name="Largo do Pelourinho",
            address="Largo do Pelourinho - Centro Histórico",
            coordinates=Coordinates(lat=-12.9714, lng=-38.5108),
            category=EventCategory.CULTURAL,
            price=0,
            duration="3 horas",
            image_url="https://images.unsplash.com/photo-1514525253161-7a46d19cd819",
            participants_goal=150,
            organizer="Casa de Cultura Bahia",
            status=EventStatus.APPROVED,
            participants=_participants("06", 1, "2026-10-15T10:00:00.000Z"),
        ),
    ]
