"""Log entry records for workloads, pods, services, nodes and other core resources."""

from __future__ import annotations

import base64
import dataclasses
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _key(json_name: str, default: Any = None) -> Any:
    """A field whose JSON name is not the plain camel-case form of its attribute."""
    return field(default=default, metadata={"json": json_name})


def _seconds_time() -> Any:
    """An optional timestamp written with whole-second precision in UTC."""
    return field(default=None, metadata={"seconds": True})


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _format_time(moment: datetime, seconds: bool = False) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    if seconds:
        moment = moment.astimezone(timezone.utc).replace(microsecond=0)
    text = moment.strftime("%Y-%m-%dT%H:%M:%S")
    if moment.microsecond:
        text += "." + f"{moment.microsecond:06d}".rstrip("0")
    offset = moment.utcoffset()
    if not offset:
        return text + "Z"
    total = int(offset.total_seconds())
    sign = "+" if total >= 0 else "-"
    hours, minutes = divmod(abs(total) // 60, 60)
    return f"{text}{sign}{hours:02d}:{minutes:02d}"


def _record_dict(record: Any) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for item in dataclasses.fields(record):
        name = item.metadata.get("json") or _camel(item.name)
        result[name] = _encode(getattr(record, item.name), item.metadata.get("seconds", False))
    return result


def _encode(value: Any, seconds: bool = False) -> Any:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, datetime):
        return _format_time(value, seconds)
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _record_dict(value)
    if isinstance(value, Mapping):
        return {str(key): _encode(value[key]) for key in sorted(value, key=str)}
    if isinstance(value, (list, tuple)):
        return [_encode(item) for item in value]
    raise TypeError(f"cannot encode {type(value).__name__} as JSON")


def to_json(entry: Any) -> str:
    """Serialise an entry to compact JSON with the field names used in the log stream."""
    text = json.dumps(_encode(entry), ensure_ascii=False, separators=(",", ":"))
    for char, escape in _HTML_ESCAPES.items():
        text = text.replace(char, escape)
    return text


@dataclass(kw_only=True)
class LogEntryMetadata:
    """Metadata shared by every resource log entry."""

    timestamp: datetime = field(default_factory=_now)
    resource_type: str = ""
    name: str = ""
    namespace: str = ""
    created_timestamp: int = 0
    labels: dict[str, str] | None = None
    annotations: dict[str, str] | None = None
    created_by_kind: str = ""
    created_by_name: str = ""

    def to_dict(self) -> dict[str, Any]:
        """The entry as a JSON-ready mapping, metadata fields first."""
        return _record_dict(self)


@dataclass(kw_only=True)
class DeploymentData(LogEntryMetadata):
    """State of a deployment."""

    desired_replicas: int = 0
    current_replicas: int = 0
    ready_replicas: int = 0
    available_replicas: int = 0
    unavailable_replicas: int = 0
    updated_replicas: int = 0
    observed_generation: int = 0
    collision_count: int = 0
    strategy_type: str = ""
    strategy_rolling_update_max_surge: int = 0
    strategy_rolling_update_max_unavailable: int = 0
    condition_available: bool | None = None
    condition_progressing: bool | None = None
    condition_replica_failure: bool | None = None
    conditions: dict[str, bool | None] | None = None
    paused: bool = False
    min_ready_seconds: int = 0
    revision_history_limit: int = 0
    progress_deadline_seconds: int = 0
    metadata_generation: int = 0


@dataclass(kw_only=True)
class TolerationData:
    """One pod toleration."""

    key: str = ""
    value: str = ""
    effect: str = ""
    operator: str = ""
    toleration_seconds: str = ""


@dataclass(kw_only=True)
class PVCData:
    """A persistent volume claim mounted by a pod."""

    claim_name: str = ""
    read_only: bool = False


@dataclass(kw_only=True)
class PodData(LogEntryMetadata):
    """State of a pod."""

    node_name: str = ""
    host_ip: str = _key("hostIP", "")
    pod_ip: str = _key("podIP", "")
    phase: str = ""
    qos_class: str = ""
    priority_class: str = ""
    ready: bool | None = None
    initialized: bool | None = None
    scheduled: bool | None = None
    containers_ready: bool | None = None
    pod_scheduled: bool | None = None
    conditions: dict[str, bool | None] | None = None
    restart_count: int = 0
    deletion_timestamp: datetime | None = None
    start_time: datetime | None = None
    initialized_time: datetime | None = None
    ready_time: datetime | None = None
    scheduled_time: datetime | None = None
    status_reason: str = ""
    unschedulable: bool | None = None
    restart_policy: str = ""
    service_account: str = ""
    scheduler_name: str = ""
    overhead_cpu_cores: str = _key("overheadCPUCores", "")
    overhead_memory_bytes: str = ""
    runtime_class_name: str = ""
    pod_ips: list[str] | None = _key("podIPs")
    tolerations: list[TolerationData] | None = None
    node_selectors: dict[str, str] | None = None
    persistent_volume_claims: list[PVCData] | None = None
    completion_time: datetime | None = None


@dataclass(kw_only=True)
class ContainerData:
    """State of one container in a pod."""

    resource_type: str = ""
    timestamp: datetime = field(default_factory=_now)
    name: str = ""
    image: str = ""
    image_id: str = _key("imageID", "")
    pod_name: str = ""
    namespace: str = ""
    ready: bool | None = None
    restart_count: int = 0
    state: str = ""
    state_running: bool | None = None
    state_waiting: bool | None = None
    state_terminated: bool | None = None
    waiting_reason: str = ""
    waiting_message: str = ""
    started_at: datetime | None = None
    exit_code: int = 0
    reason: str = ""
    message: str = ""
    finished_at: datetime | None = None
    started_at_term: datetime | None = None
    resource_requests: dict[str, str] | None = None
    resource_limits: dict[str, str] | None = None
    last_terminated_reason: str = ""
    last_terminated_exit_code: int = 0
    last_terminated_timestamp: datetime | None = None
    state_started: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """The entry as a JSON-ready mapping."""
        return _record_dict(self)


@dataclass(kw_only=True)
class ServicePortData:
    """One port exposed by a service."""

    name: str = ""
    protocol: str = ""
    port: int = 0
    target_port: int = 0
    node_port: int = 0


@dataclass(kw_only=True)
class LoadBalancerIngressData:
    """An address assigned by a load balancer."""

    ip: str = ""
    hostname: str = ""


@dataclass(kw_only=True)
class ServiceData(LogEntryMetadata):
    """State of a service."""

    type: str = ""
    cluster_ip: str = _key("clusterIP", "")
    external_ip: str = _key("externalIP", "")
    load_balancer_ip: str = _key("loadBalancerIP", "")
    ports: list[ServicePortData] | None = None
    selector: dict[str, str] | None = None
    endpoints_count: int = 0
    load_balancer_ingress: list[LoadBalancerIngressData] | None = None
    session_affinity: str = ""
    external_name: str = ""
    external_traffic_policy: str = ""
    session_affinity_client_ip_timeout_seconds: int = _key("sessionAffinityClientIPTimeoutSeconds", 0)
    allocate_load_balancer_node_ports: bool | None = None
    load_balancer_class: str | None = None
    load_balancer_source_ranges: list[str] | None = None


@dataclass(kw_only=True)
class TaintData:
    """One node taint."""

    key: str = ""
    value: str = ""
    effect: str = ""


@dataclass(kw_only=True)
class NodeData(LogEntryMetadata):
    """State of a node."""

    architecture: str = ""
    operating_system: str = ""
    kernel_version: str = ""
    kubelet_version: str = ""
    kube_proxy_version: str = ""
    container_runtime_version: str = ""
    capacity: dict[str, str] | None = None
    allocatable: dict[str, str] | None = None
    ready: bool | None = None
    phase: str = ""
    internal_ip: str = _key("internalIP", "")
    external_ip: str = _key("externalIP", "")
    hostname: str = ""
    unschedulable: bool | None = None
    role: str = ""
    taints: list[TaintData] | None = None
    deletion_timestamp: datetime | None = None
    conditions: dict[str, bool | None] | None = None


@dataclass(kw_only=True)
class ReplicaSetData(LogEntryMetadata):
    """State of a replica set."""

    desired_replicas: int = 0
    current_replicas: int = 0
    ready_replicas: int = 0
    available_replicas: int = 0
    fully_labeled_replicas: int = 0
    observed_generation: int = 0
    condition_available: bool | None = None
    condition_progressing: bool | None = None
    condition_replica_failure: bool | None = None
    conditions: dict[str, bool | None] | None = None


@dataclass(kw_only=True)
class StatefulSetData(LogEntryMetadata):
    """State of a stateful set."""

    desired_replicas: int = 0
    current_replicas: int = 0
    ready_replicas: int = 0
    updated_replicas: int = 0
    observed_generation: int = 0
    current_revision: str = ""
    update_revision: str = ""
    condition_available: bool | None = None
    condition_progressing: bool | None = None
    condition_replica_failure: bool | None = None
    conditions: dict[str, bool | None] | None = None
    service_name: str = ""
    pod_management_policy: str = ""
    update_strategy: str = ""


@dataclass(kw_only=True)
class DaemonSetData(LogEntryMetadata):
    """State of a daemon set."""

    desired_number_scheduled: int = 0
    current_number_scheduled: int = 0
    number_ready: int = 0
    number_available: int = 0
    number_unavailable: int = 0
    number_misscheduled: int = 0
    updated_number_scheduled: int = 0
    observed_generation: int = 0
    condition_available: bool | None = None
    condition_progressing: bool | None = None
    condition_replica_failure: bool | None = None
    conditions: dict[str, bool | None] | None = None
    update_strategy: str = ""
    metadata_generation: int = 0
    collision_count: int | None = None


@dataclass(kw_only=True)
class NamespaceData(LogEntryMetadata):
    """State of a namespace."""

    phase: str = ""
    condition_active: bool | None = None
    condition_terminating: bool | None = None
    conditions: dict[str, bool | None] | None = None
    deletion_timestamp: datetime | None = _seconds_time()


@dataclass(kw_only=True)
class JobData(LogEntryMetadata):
    """State of a job."""

    active_pods: int = 0
    succeeded_pods: int = 0
    failed_pods: int = 0
    completions: int | None = None
    parallelism: int | None = None
    backoff_limit: int = 0
    active_deadline_seconds: int | None = None
    condition_complete: bool | None = None
    condition_failed: bool | None = None
    conditions: dict[str, bool | None] | None = None
    job_type: str = ""
    suspend: bool | None = None


@dataclass(kw_only=True)
class CronJobData(LogEntryMetadata):
    """State of a cron job."""

    schedule: str = ""
    concurrency_policy: str = ""
    suspend: bool | None = None
    successful_jobs_history_limit: int | None = None
    failed_jobs_history_limit: int | None = None
    active_jobs_count: int = 0
    last_schedule_time: datetime | None = None
    next_schedule_time: datetime | None = None
    condition_active: bool | None = None
    conditions: dict[str, bool | None] | None = None


@dataclass(kw_only=True)
class ConfigMapData(LogEntryMetadata):
    """Keys held by a config map."""

    data_keys: list[str] | None = None


@dataclass(kw_only=True)
class SecretData(LogEntryMetadata):
    """Type and keys of a secret; never its values."""

    type: str = ""
    data_keys: list[str] | None = None


@dataclass(kw_only=True)
class PersistentVolumeClaimData(LogEntryMetadata):
    """State of a persistent volume claim."""

    access_modes: list[str] | None = None
    storage_class_name: str | None = None
    volume_name: str = ""
    phase: str = ""
    capacity: dict[str, str] | None = None
    condition_pending: bool | None = None
    condition_bound: bool | None = None
    condition_lost: bool | None = None
    conditions: dict[str, bool | None] | None = None
    request_storage: str = ""
    used_storage: str = ""


@dataclass(kw_only=True)
class IngressPathData:
    """One path of an ingress rule."""

    path: str = ""
    path_type: str = ""
    service: str = ""
    port: str = ""


@dataclass(kw_only=True)
class IngressRuleData:
    """One host rule of an ingress."""

    host: str = ""
    paths: list[IngressPathData] | None = None


@dataclass(kw_only=True)
class IngressTLSData:
    """TLS settings for a set of ingress hosts."""

    hosts: list[str] | None = None
    secret_name: str = ""


@dataclass(kw_only=True)
class IngressData(LogEntryMetadata):
    """State of an ingress."""

    ingress_class_name: str | None = None
    load_balancer_ip: str = _key("loadBalancerIP", "")
    load_balancer_ingress: list[LoadBalancerIngressData] | None = None
    rules: list[IngressRuleData] | None = None
    tls: list[IngressTLSData] | None = None
    condition_load_balancer_ready: bool | None = None
    conditions: dict[str, bool | None] | None = None