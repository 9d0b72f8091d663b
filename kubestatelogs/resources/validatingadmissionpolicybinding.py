"""Collection of validating admission policy bindings from the informer cache."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any

from kubestatelogs.cluster_entries import ValidatingAdmissionPolicyBindingData
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

API_VERSION = "admissionregistration.k8s.io/v1beta1"
KIND = "ValidatingAdmissionPolicyBinding"


def _is_binding(obj: Any) -> bool:
    return isinstance(obj, Mapping) and obj.get("apiVersion") == API_VERSION and obj.get("kind") == KIND


class ValidatingAdmissionPolicyBindingHandler(BaseHandler):
    """Builds log entries for validating admission policy bindings."""

    def setup_informer(self, factory: InformerFactory, logger: Logger, resync_period: timedelta) -> None:
        """Attach the shared binding informer."""
        self.setup_base_informer(factory.informer(API_VERSION, KIND), logger)

    def collect(self, namespaces: list[str]) -> list[Any]:
        """One entry per cached binding in the selected namespaces."""
        objects = safe_get_store_list(self.informer)
        list_time = datetime.now(timezone.utc)
        entries: list[Any] = []
        for obj in objects:
            if not _is_binding(obj):
                continue
            if not should_include_namespace(namespaces, extract_namespace(obj)):
                continue
            entry = self.create_log_entry(obj)
            entry.timestamp = list_time
            entries.append(entry)
        return entries

    def create_log_entry(self, binding: Mapping[str, Any]) -> ValidatingAdmissionPolicyBindingData:
        """Build the entry for one binding."""
        spec = binding.get("spec") or {}
        param_ref = spec.get("paramRef")
        created_by_kind, created_by_name = get_owner_reference_info(binding)

        return ValidatingAdmissionPolicyBindingData(
            resource_type="validatingadmissionpolicybinding",
            name=extract_name(binding),
            namespace=extract_namespace(binding),
            created_timestamp=extract_creation_timestamp(binding),
            labels=extract_labels(binding),
            annotations=extract_annotations(binding),
            created_by_kind=created_by_kind,
            created_by_name=created_by_name,
            policy_name=spec.get("policyName") or "",
            param_ref="" if param_ref is None else param_ref.get("name") or "",
            match_resources=[],
            validation_actions=[],
            observed_generation=0,
        )