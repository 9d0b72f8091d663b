"""Collection of storage class settings from the informer cache."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any

from kubestatelogs.cluster_entries import StorageClassData
from kubestatelogs.fields import (
    extract_annotations,
    extract_creation_timestamp,
    extract_labels,
    extract_name,
    extract_namespace,
    get_owner_reference_info,
)
from kubestatelogs.handler import BaseHandler, InformerFactory, Logger, safe_get_store_list

API_VERSION = "storage.k8s.io/v1"
KIND = "StorageClass"
DEFAULT_CLASS_ANNOTATION = "storageclass.kubernetes.io/is-default-class"


def _is_storageclass(obj: Any) -> bool:
    return isinstance(obj, Mapping) and obj.get("apiVersion") == API_VERSION and obj.get("kind") == KIND


class StorageClassHandler(BaseHandler):
    """Builds log entries for storage classes."""

    def setup_informer(self, factory: InformerFactory, logger: Logger, resync_period: timedelta) -> None:
        """Attach the shared storage class informer."""
        self.setup_base_informer(factory.informer(API_VERSION, KIND), logger)

    def collect(self, namespaces: list[str]) -> list[Any]:
        """One entry per cached storage class; storage classes have no namespace."""
        objects = safe_get_store_list(self.informer)
        list_time = datetime.now(timezone.utc)
        entries: list[Any] = []
        for obj in objects:
            if not _is_storageclass(obj):
                continue
            entry = self.create_log_entry(obj)
            entry.timestamp = list_time
            entries.append(entry)
        return entries

    def create_log_entry(self, sc: Mapping[str, Any]) -> StorageClassData:
        """Build the entry for one storage class."""
        reclaim_policy = sc.get("reclaimPolicy")
        binding_mode = sc.get("volumeBindingMode")
        allow_expansion = sc.get("allowVolumeExpansion")

        allowed_topologies: dict[str, Any] = {}
        if sc.get("allowedTopologies") is not None:
            allowed_topologies["allowedTopologies"] = sc["allowedTopologies"]

        annotations = extract_annotations(sc)
        is_default = bool(annotations) and annotations.get(DEFAULT_CLASS_ANNOTATION) == "true"
        created_by_kind, created_by_name = get_owner_reference_info(sc)

        return StorageClassData(
            resource_type="storageclass",
            name=extract_name(sc),
            namespace=extract_namespace(sc),
            created_timestamp=extract_creation_timestamp(sc),
            labels=extract_labels(sc),
            annotations=annotations,
            created_by_kind=created_by_kind,
            created_by_name=created_by_name,
            provisioner=sc.get("provisioner") or "",
            reclaim_policy="" if reclaim_policy is None else str(reclaim_policy),
            volume_binding_mode="" if binding_mode is None else str(binding_mode),
            allow_volume_expansion=bool(allow_expansion) if allow_expansion is not None else False,
            parameters=dict(sc.get("parameters") or {}),
            mount_options=sc.get("mountOptions"),
            allowed_topologies=allowed_topologies,
            is_default_class=is_default,
        )