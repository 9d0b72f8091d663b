"""Collection of stateful set state from the informer cache."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any

from kubestatelogs.conditions import convert_core_condition_status
from kubestatelogs.core_entries import StatefulSetData
from kubestatelogs.fields import (
    extract_annotations,
    extract_creation_timestamp,
    extract_labels,
    extract_name,
    extract_namespace,
    get_owner_reference_info,
    should_include_namespace,
)
from kubestatelogs.handler import BaseHandler, InformerFactory, Logger, safe_get_store_list

API_VERSION = "apps/v1"
KIND = "StatefulSet"

_TOP_LEVEL_CONDITIONS = {
    "Available": "condition_available",
    "Progressing": "condition_progressing",
    "ReplicaFailure": "condition_replica_failure",
}


def _is_statefulset(obj: Any) -> bool:
    return isinstance(obj, Mapping) and obj.get("apiVersion") == API_VERSION and obj.get("kind") == KIND


class StatefulSetHandler(BaseHandler):
    """Builds log entries for stateful sets."""

    def setup_informer(self, factory: InformerFactory, logger: Logger, resync_period: timedelta) -> None:
        """Attach the shared stateful set informer."""
        self.setup_base_informer(factory.informer(API_VERSION, KIND), logger)

    def collect(self, namespaces: list[str]) -> list[Any]:
        """One entry per cached stateful set in the selected namespaces."""
        objects = safe_get_store_list(self.informer)
        list_time = datetime.now(timezone.utc)
        entries: list[Any] = []
        for obj in objects:
            if not _is_statefulset(obj):
                continue
            if not should_include_namespace(namespaces, extract_namespace(obj)):
                continue
            entry = self.create_log_entry(obj)
            entry.timestamp = list_time
            entries.append(entry)
        return entries

    def create_log_entry(self, sts: Mapping[str, Any]) -> StatefulSetData:
        """Build the entry for one stateful set."""
        created_by_kind, created_by_name = get_owner_reference_info(sts)
        spec = sts.get("spec") or {}
        status = sts.get("status") or {}

        replicas = spec.get("replicas")
        desired_replicas = 1 if replicas is None else int(replicas)

        top_level: dict[str, bool | None] = {attr: None for attr in _TOP_LEVEL_CONDITIONS.values()}
        other_conditions: dict[str, bool | None] = {}
        for condition in status.get("conditions") or []:
            value = convert_core_condition_status(condition.get("status", ""))
            condition_type = condition.get("type", "")
            attr = _TOP_LEVEL_CONDITIONS.get(condition_type)
            if attr is not None:
                top_level[attr] = value
            else:
                other_conditions[condition_type] = value

        return StatefulSetData(
            resource_type="statefulset",
            name=extract_name(sts),
            namespace=extract_namespace(sts),
            created_timestamp=extract_creation_timestamp(sts),
            labels=extract_labels(sts),
            annotations=extract_annotations(sts),
            created_by_kind=created_by_kind,
            created_by_name=created_by_name,
            desired_replicas=desired_replicas,
            current_replicas=int(status.get("replicas") or 0),
            ready_replicas=int(status.get("readyReplicas") or 0),
            updated_replicas=int(status.get("updatedReplicas") or 0),
            observed_generation=int(status.get("observedGeneration") or 0),
            current_revision=status.get("currentRevision") or "",
            update_revision=status.get("updateRevision") or "",
            service_name=spec.get("serviceName") or "",
            pod_management_policy=spec.get("podManagementPolicy") or "",
            update_strategy=(spec.get("updateStrategy") or {}).get("type") or "",
            conditions=other_conditions,
            **top_level,
        )