from .json_local_store import InMemoryLocalStore, JsonFileLocalStore

__all__ = ["InMemoryLocalStore", "JsonFileLocalStore"]
