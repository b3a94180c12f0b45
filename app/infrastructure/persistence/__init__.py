"""Persistence layer for device-local data.

Provides key-value storage backends used by the local replica of the event
catalogue.
"""

from infrastructure.persistence.key_value import (
    FileKeyValueStorage,
    InMemoryKeyValueStorage,
    KeyValueStorage,
)

__all__ = [
    "FileKeyValueStorage",
    "InMemoryKeyValueStorage",
    "KeyValueStorage",
]
