from pokebinder.db.storage import (
    BackgroundJsonFileStorage,
    JsonFileStorage,
    KeyValueStorage,
    MemoryStorage,
    StorageError,
)

__all__ = [
    "BackgroundJsonFileStorage",
    "JsonFileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "StorageError",
]
