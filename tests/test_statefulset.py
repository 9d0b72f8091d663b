from datetime import timedelta

from kubestatelogs.core_entries import StatefulSetData
from kubestatelogs.handler import InMemoryClient, InformerFactory
from kubestatelogs.resources.statefulset import StatefulSetHandler

HOUR = timedelta(hours=1)


class MockLogger:
    def __init__(self):
        self.entries = []

    def log(self, entry):
        self.entries.append(entry)


def make_statefulset(name, namespace, replicas):
    return {
        "apiVersion": "apps/v1",
        "kind": "StatefulSet",
        "metadata": {
            "name": name,
            "namespace": namespace,
            "labels": {"app": name, "version": "v1"},
            "annotations": {"description": "test statefulset"},
            "creationTimestamp": "2024-01-01T00:00:00Z",
            "generation": 1,
        },
        "spec": {
            "replicas": replicas,
            "serviceName": name + "-service",
            "selector": {"matchLabels": {"app": name}},
            "updateStrategy": {"type": "RollingUpdate"},
            "podManagementPolicy": "OrderedReady",
        },
        "status": {
            "replicas": 3,
            "readyReplicas": 2,
            "updatedReplicas": 3,
            "currentRevision": "test-revision-1",
            "updateRevision": "test-revision-2",
            "observedGeneration": 1,
            "conditions": [
                {"type": "Available", "status": "True", "reason": "StatefulSetAvailable"},
                {"type": "Progressing", "status": "True", "reason": "StatefulSetProgressing"},
            ],
        },
    }


def started_handler(*objects):
    client = InMemoryClient(*objects)
    handler = StatefulSetHandler(client)
    factory = InformerFactory(client, HOUR)
    handler.setup_informer(factory, MockLogger(), HOUR)
    factory.start()
    return handler, factory, client


def test_new_handler_keeps_client():
    client = InMemoryClient()
    handler = StatefulSetHandler(client)
    assert handler.client is client
    assert handler.informer is None


def test_setup_informer():
    client = InMemoryClient()
    handler = StatefulSetHandler(client)
    factory = InformerFactory(client, HOUR)
    logger = MockLogger()
    handler.setup_informer(factory, logger, HOUR)
    assert handler.informer is factory.informer("apps/v1", "StatefulSet")
    assert handler.logger is logger


def test_collect_all_and_filtered():
    handler, _, _ = started_handler(
        make_statefulset("test-statefulset-1", "default", 3),
        make_statefulset("test-statefulset-2", "kube-system", 2),
    )
    entries = handler.collect([])
    assert len(entries) == 2
    assert entries[0].timestamp == entries[1].timestamp

    entries = handler.collect(["default"])
    assert len(entries) == 1
    assert isinstance(entries[0], StatefulSetData)
    assert entries[0].namespace == "default"


def test_create_log_entry():
    handler = StatefulSetHandler(InMemoryClient())
    entry = handler.create_log_entry(make_statefulset("test-statefulset", "default", 3))
    assert entry.resource_type == "statefulset"
    assert entry.name == "test-statefulset"
    assert entry.namespace == "default"
    assert entry.desired_replicas == 3
    assert entry.current_replicas == 3
    assert entry.ready_replicas == 2
    assert entry.updated_replicas == 3
    assert entry.current_revision == "test-revision-1"
    assert entry.update_revision == "test-revision-2"
    assert entry.service_name == "test-statefulset-service"
    assert entry.pod_management_policy == "OrderedReady"
    assert entry.update_strategy == "RollingUpdate"
    assert entry.condition_available is True
    assert entry.condition_progressing is True
    assert entry.condition_replica_failure is None
    assert entry.conditions == {}
    assert entry.created_timestamp == 1704067200
    assert entry.labels == {"app": "test-statefulset", "version": "v1"}


def test_create_log_entry_defaults_and_other_conditions():
    sts = make_statefulset("sts", "default", 2)
    del sts["spec"]["replicas"]
    sts["status"]["conditions"] = [
        {"type": "ReplicaFailure", "status": "False"},
        {"type": "Custom", "status": "Unknown"},
        {"type": "Other", "status": "True"},
    ]
    sts["metadata"]["ownerReferences"] = [{"kind": "Operator", "name": "op"}]
    entry = StatefulSetHandler(None).create_log_entry(sts)
    assert entry.desired_replicas == 1
    assert entry.condition_replica_failure is False
    assert entry.condition_available is None
    assert entry.conditions == {"Custom": None, "Other": True}
    assert (entry.created_by_kind, entry.created_by_name) == ("Operator", "op")


def test_collect_namespace_filtering():
    handler, _, _ = started_handler(
        make_statefulset("test-statefulset-1", "default", 3),
        make_statefulset("test-statefulset-2", "kube-system", 2),
        make_statefulset("test-statefulset-3", "monitoring", 1),
    )
    entries = handler.collect(["default"])
    assert len(entries) == 1
    assert entries[0].namespace == "default"

    entries = handler.collect(["default", "kube-system"])
    assert len(entries) == 2
    assert {entry.namespace for entry in entries} == {"default", "kube-system"}


def test_collect_skips_other_kinds():
    handler, factory, _ = started_handler()
    factory.informer("apps/v1", "StatefulSet").add(
        {"apiVersion": "v1", "kind": "Pod", "metadata": {"name": "p"}}
    )
    assert handler.collect([]) == []


def test_collect_sees_objects_added_after_start():
    handler, _, client = started_handler()
    assert handler.collect([]) == []
    client.add(make_statefulset("late", "default", 1))
    entries = handler.collect([])
    assert [entry.name for entry in entries] == ["late"]


def test_collect_without_informer_is_empty():
    assert StatefulSetHandler(None).collect([]) == []