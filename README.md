# kubestatelogs

`kubestatelogs` turns the state of Kubernetes objects into flat, structured
log entries. Each entry is a dataclass that serialises to compact JSON with
`to_json`, using the camelCase field names of the log stream
(`resourceType`, `createdTimestamp`, `desiredReplicas`, ...).

It has no dependencies outside the standard library.

## Installation

```
pip install kubestatelogs
```

## Concepts

- **Objects** are plain dictionaries in the shape the Kubernetes API returns,
  with `apiVersion`, `kind`, `metadata`, `spec` and `status`.
- **`InMemoryClient`** (in `kubestatelogs.handler`) holds such objects.
  `InMemoryClient.add` stores another one and pushes it to any started
  informer watching its kind.
- **`InformerFactory`** hands out one shared `Informer` per
  `(apiVersion, kind)`. `start()` fills each informer from the client;
  `wait_for_cache_sync()` returns the sync state of each informer.
- **Handlers** read from their informer and return entries from
  `collect(namespaces)`. Objects of another kind in the cache are skipped.
  Each entry's `timestamp` is the time of the listing.

| Handler | Module | Kind | Entry |
| --- | --- | --- | --- |
| `StatefulSetHandler` | `kubestatelogs.resources.statefulset` | `apps/v1` `StatefulSet` | `StatefulSetData` |
| `StorageClassHandler` | `kubestatelogs.resources.storageclass` | `storage.k8s.io/v1` `StorageClass` | `StorageClassData` |
| `VolumeAttachmentHandler` | `kubestatelogs.resources.volumeattachment` | `storage.k8s.io/v1` `VolumeAttachment` | `VolumeAttachmentData` |
| `ValidatingAdmissionPolicyHandler` | `kubestatelogs.resources.validatingadmissionpolicy` | `admissionregistration.k8s.io/v1beta1` `ValidatingAdmissionPolicy` | `ValidatingAdmissionPolicyData` |
| `ValidatingAdmissionPolicyBindingHandler` | `kubestatelogs.resources.validatingadmissionpolicybinding` | `admissionregistration.k8s.io/v1beta1` `ValidatingAdmissionPolicyBinding` | `ValidatingAdmissionPolicyBindingData` |
| `ValidatingWebhookConfigurationHandler` | `kubestatelogs.resources.validatingwebhookconfiguration` | `admissionregistration.k8s.io/v1` `ValidatingWebhookConfiguration` | `ValidatingWebhookConfigurationData` |

The stateful set and policy binding handlers filter by namespace: an empty
list means every namespace. The other handlers ignore the list.

A few behaviours worth knowing:

- A stateful set without `spec.replicas` reports `desired_replicas=1`. The
  `Available`, `Progressing` and `ReplicaFailure` conditions get their own
  fields; any other condition goes into `conditions`. Condition statuses map
  `"True"`/`"False"` to `True`/`False` and anything else to `None`.
- A storage class is the default class when its
  `storageclass.kubernetes.io/is-default-class` annotation is `"true"`.
- `ValidatingWebhookConfigurationHandler.create_log_entry` raises
  `ValueError` when a webhook lacks `failurePolicy`, `matchPolicy` or
  `sideEffects`, or a rule lacks `scope`. A `caBundle` given as a string is
  base64-decoded.

## Example

```python
from datetime import timedelta

from kubestatelogs.core_entries import to_json
from kubestatelogs.handler import InMemoryClient, InformerFactory
from kubestatelogs.resources.statefulset import StatefulSetHandler

sts = {
    "apiVersion": "apps/v1",
    "kind": "StatefulSet",
    "metadata": {"name": "db", "namespace": "default"},
    "spec": {"replicas": 3, "serviceName": "db"},
    "status": {"replicas": 3, "readyReplicas": 2},
}

client = InMemoryClient(sts)
factory = InformerFactory(client, timedelta(hours=1))
handler = StatefulSetHandler(client)
handler.setup_informer(factory, logger=None, resync_period=timedelta(hours=1))
factory.start()

for entry in handler.collect(["default"]):
    print(to_json(entry))
```

## Entry types

`kubestatelogs.core_entries` and `kubestatelogs.cluster_entries` define the
entry dataclasses for many resource kinds (deployments, pods, containers,
services, nodes, jobs, ingresses, RBAC objects, leases, webhooks and more).
Every resource entry extends `LogEntryMetadata`; `to_dict()` gives the
JSON-ready mapping and `to_json(entry)` the compact JSON text. Map keys are
written in sorted order, datetimes as RFC 3339 and bytes as base64.

## Configuration helpers

`kubestatelogs.config` parses the comma-separated settings a collector uses:

```python
from kubestatelogs.config import Config, parse_crd_configs, parse_duration, parse_resource_configs

configs = parse_resource_configs("deployments:5m,pods:1m,services", parse_duration("1m"))
crds = parse_crd_configs("apps/v1:deployments:spec.replicas|spec.paused")
config = Config(log_interval=parse_duration("1m"), resource_configs=configs, crds=crds)
config.get_resource_interval("pods")      # 1 minute
config.get_resource_interval("secrets")   # falls back to log_interval
```

`parse_duration` reads durations such as `1h30m` or `250ms` and raises
`ValueError` for malformed text. If an interval in `parse_resource_configs`
cannot be parsed, a warning is logged and the default is used.
`set_log_level` sets the level of the `kubestatelogs` logger from `debug`,
`info`, `warn` or `error` and raises `ValueError` for anything else.

## Other utilities

- `kubestatelogs.quantity` parses resource quantities such as `500m`, `1Gi`
  and `2e3` into `Quantity`, prints them in canonical form, and converts and
  compares them (`convert_to_millicores`, `compare_quantities`,
  `extract_resource_map`, ...). These helpers accept a `Quantity`, a string
  or an int.
- `kubestatelogs.conditions` maps condition statuses to `True`, `False` or
  `None`.
- `kubestatelogs.fields` reads metadata fields, owner references and
  dot-separated paths (`extract_field`) from object dictionaries, and decides
  namespace inclusion (`should_include_namespace`).

## What it does not do

- It does not talk to a Kubernetes API server or read a kubeconfig; objects
  must be put into an `InMemoryClient` by the caller. `Config.kubeconfig` is
  only stored.
- There is no command-line program and no loop that collects and logs on an
  interval; the caller runs `collect` and handles the entries.
- Handlers exist only for the six kinds listed above. The other entry types
  are data records with no handler that fills them.

## Running the tests

```
pip install -e ".[test]"
pytest
```