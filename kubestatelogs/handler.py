"""Handler contracts plus an in-memory object store and informer cache."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from datetime import timedelta
from typing import Any, Protocol, runtime_checkable

from kubestatelogs.fields import extract_name, extract_namespace


@runtime_checkable
class Logger(Protocol):
    """Something that accepts collected log entries."""

    def log(self, entry: Any) -> None:
        """Record one entry; raise on failure."""


@runtime_checkable
class ResourceHandler(Protocol):
    """A collector for one resource type."""

    def setup_informer(self, factory: "InformerFactory", logger: Logger, resync_period: timedelta) -> None:
        """Register the informer this handler reads from."""

    def collect(self, namespaces: list[str]) -> list[Any]:
        """Build log entries from the cached objects."""


def _object_key(obj: Any) -> str:
    if not isinstance(obj, Mapping):
        return ""
    namespace = extract_namespace(obj)
    name = extract_name(obj)
    return f"{namespace}/{name}" if namespace else name


class Informer:
    """A cache of objects of one kind, keyed by namespace and name."""

    def __init__(self, api_version: str, kind: str) -> None:
        self.api_version = api_version
        self.kind = kind
        self._items: dict[str, Any] = {}
        self._lock = threading.Lock()
        self._synced = False

    def add(self, obj: Any) -> None:
        """Insert or replace an object."""
        with self._lock:
            self._items[_object_key(obj)] = obj

    def delete(self, obj: Any) -> None:
        """Remove an object if present."""
        with self._lock:
            self._items.pop(_object_key(obj), None)

    def replace(self, objects: list[Any]) -> None:
        """Swap the whole content and mark the cache as synced."""
        with self._lock:
            self._items = {_object_key(obj): obj for obj in objects}
            self._synced = True

    def list(self) -> list[Any]:
        """Snapshot of all cached objects."""
        with self._lock:
            return list(self._items.values())

    def has_synced(self) -> bool:
        """True once the initial listing has been loaded."""
        return self._synced


class InMemoryClient:
    """A cluster stand-in holding objects as mappings with apiVersion and kind."""

    def __init__(self, *args: Mapping[str, Any]) -> None:
        self._objects: list[Mapping[str, Any]] = list(args)
        self._subscribers: list[Informer] = []
        self._lock = threading.Lock()

    def add(self, obj: Mapping[str, Any]) -> None:
        """Store an object and push it to informers watching its kind."""
        with self._lock:
            self._objects.append(obj)
            watchers = [
                informer
                for informer in self._subscribers
                if informer.api_version == obj.get("apiVersion") and informer.kind == obj.get("kind")
            ]
        for informer in watchers:
            informer.add(obj)

    def list_objects(self, api_version: str, kind: str) -> list[Mapping[str, Any]]:
        """All stored objects of the given API version and kind."""
        with self._lock:
            return [
                obj
                for obj in self._objects
                if isinstance(obj, Mapping) and obj.get("apiVersion") == api_version and obj.get("kind") == kind
            ]

    def _subscribe(self, informer: Informer) -> None:
        with self._lock:
            self._subscribers.append(informer)


class InformerFactory:
    """Hands out shared informers and fills them from a client when started."""

    def __init__(self, client: InMemoryClient, resync_period: timedelta) -> None:
        self.client = client
        self.resync_period = resync_period
        self._informers: dict[tuple[str, str], Informer] = {}
        self._started: set[tuple[str, str]] = set()

    def informer(self, api_version: str, kind: str) -> Informer:
        """The shared informer for a kind, created on first request."""
        return self._informers.setdefault((api_version, kind), Informer(api_version, kind))

    def start(self) -> None:
        """Load and begin watching every informer not yet started."""
        for key, informer in self._informers.items():
            if key in self._started:
                continue
            informer.replace(self.client.list_objects(*key))
            self.client._subscribe(informer)
            self._started.add(key)

    def wait_for_cache_sync(self) -> dict[tuple[str, str], bool]:
        """Sync state of each informer, keyed by (api_version, kind)."""
        return {key: informer.has_synced() for key, informer in self._informers.items()}


class BaseHandler:
    """State shared by resource handlers: client, informer and logger."""

    def __init__(self, client: InMemoryClient | None) -> None:
        self.client = client
        self.informer: Informer | None = None
        self.logger: Logger | None = None

    def setup_base_informer(self, informer: Informer, logger: Logger) -> None:
        """Attach the informer and logger this handler uses."""
        self.informer = informer
        self.logger = logger


def safe_get_store_list(informer: Informer | None) -> list[Any]:
    """The informer's cached objects, or an empty list when there is none."""
    if informer is None:
        return []
    return informer.list()