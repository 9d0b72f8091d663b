"""Collection of volume attachment state from the informer cache."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any

from kubestatelogs.cluster_entries import VolumeAttachmentData
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
KIND = "VolumeAttachment"


def _is_volumeattachment(obj: Any) -> bool:
    return isinstance(obj, Mapping) and obj.get("apiVersion") == API_VERSION and obj.get("kind") == KIND


class VolumeAttachmentHandler(BaseHandler):
    """Builds log entries for volume attachments."""

    def setup_informer(self, factory: InformerFactory, logger: Logger, resync_period: timedelta) -> None:
        """Attach the shared volume attachment informer."""
        self.setup_base_informer(factory.informer(API_VERSION, KIND), logger)

    def collect(self, namespaces: list[str]) -> list[Any]:
        """One entry per cached volume attachment; they have no namespace."""
        objects = safe_get_store_list(self.informer)
        list_time = datetime.now(timezone.utc)
        entries: list[Any] = []
        for obj in objects:
            if not _is_volumeattachment(obj):
                continue
            entry = self.create_log_entry(obj)
            entry.timestamp = list_time
            entries.append(entry)
        return entries

    def create_log_entry(self, va: Mapping[str, Any]) -> VolumeAttachmentData:
        """Build the entry for one volume attachment."""
        spec = va.get("spec") or {}
        status = va.get("status") or {}
        source = spec.get("source") or {}
        created_by_kind, created_by_name = get_owner_reference_info(va)

        return VolumeAttachmentData(
            resource_type="volumeattachment",
            name=extract_name(va),
            namespace=extract_namespace(va),
            created_timestamp=extract_creation_timestamp(va),
            labels=extract_labels(va),
            annotations=extract_annotations(va),
            created_by_kind=created_by_kind,
            created_by_name=created_by_name,
            attacher=spec.get("attacher") or "",
            volume_name=source.get("persistentVolumeName") or "",
            node_name=spec.get("nodeName") or "",
            attached=bool(status.get("attached", False)),
        )