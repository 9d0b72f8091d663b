from datetime import timedelta

import pytest

from kubestatelogs.handler import (
    BaseHandler,
    InformerFactory,
    Informer,
    InMemoryClient,
    safe_get_store_list,
)


def make(kind, name, namespace="default", api_version="apps/v1"):
    return {
        "apiVersion": api_version,
        "kind": kind,
        "metadata": {"name": name, "namespace": namespace},
    }


class RecordingLogger:
    def __init__(self):
        self.entries = []

    def log(self, entry):
        self.entries.append(entry)


@pytest.fixture
def client():
    return InMemoryClient(
        make("StatefulSet", "a"),
        make("StatefulSet", "b", "kube-system"),
        make("Pod", "p", api_version="v1"),
    )


def test_client_filters_by_kind(client):
    names = [obj["metadata"]["name"] for obj in client.list_objects("apps/v1", "StatefulSet")]
    assert names == ["a", "b"]
    assert client.list_objects("apps/v1", "Deployment") == []


def test_factory_shares_informers(client):
    factory = InformerFactory(client, timedelta(hours=1))
    first = factory.informer("apps/v1", "StatefulSet")
    second = factory.informer("apps/v1", "StatefulSet")
    factory.start()
    assert factory.wait_for_cache_sync() == {("apps/v1", "StatefulSet"): True}
    extra = make("StatefulSet", "shared")
    first.add(extra)
    assert extra in second.list()
    assert first.list() == second.list()


def test_factory_start_populates(client):
    factory = InformerFactory(client, timedelta(hours=1))
    informer = factory.informer("apps/v1", "StatefulSet")
    assert informer.has_synced() is False
    assert informer.list() == []
    factory.start()
    assert informer.list() == client.list_objects("apps/v1", "StatefulSet")
    assert factory.wait_for_cache_sync() == {("apps/v1", "StatefulSet"): True}


def test_client_add_reaches_started_informer(client):
    factory = InformerFactory(client, timedelta(hours=1))
    informer = factory.informer("apps/v1", "StatefulSet")
    factory.start()
    extra = make("StatefulSet", "c")
    client.add(extra)
    client.add(make("Deployment", "d"))
    assert extra in informer.list()
    assert len(informer.list()) == len(client.list_objects("apps/v1", "StatefulSet"))


def test_informer_keys_by_namespace_and_name():
    informer = Informer("apps/v1", "StatefulSet")
    first = make("StatefulSet", "a")
    second = make("StatefulSet", "a")
    other_ns = make("StatefulSet", "a", "kube-system")
    informer.add(first)
    informer.add(second)
    informer.add(other_ns)
    assert informer.list() == [second, other_ns]
    informer.delete(second)
    assert informer.list() == [other_ns]


def test_informer_accepts_foreign_objects():
    informer = Informer("apps/v1", "StatefulSet")
    pod = make("Pod", "p", api_version="v1")
    informer.add(pod)
    assert safe_get_store_list(informer) == [pod]


def test_replace_marks_synced():
    informer = Informer("v1", "Pod")
    informer.add(make("Pod", "old", api_version="v1"))
    fresh = [make("Pod", "new", api_version="v1")]
    informer.replace(fresh)
    assert informer.list() == fresh
    assert informer.has_synced() is True


def test_safe_get_store_list_without_informer():
    assert safe_get_store_list(None) == []


def test_base_handler_setup(client):
    handler = BaseHandler(client)
    assert handler.informer is None
    informer = Informer("apps/v1", "StatefulSet")
    logger = RecordingLogger()
    handler.setup_base_informer(informer, logger)
    assert handler.informer is informer
    assert handler.logger is logger
    assert handler.client is client