"""Collection of validating admission policies from the informer cache."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any

from kubestatelogs.cluster_entries import ValidatingAdmissionPolicyData
from kubestatelogs.fields import (
    extract_annotations,
    extract_creation_timestamp,
    extract_labels,
    extract_name,
    extract_namespace,
    get_owner_reference_info,
)
from kubestatelogs.handler import BaseHandler, InformerFactory, Logger, safe_get_store_list

API_VERSION = "admissionregistration.k8s.io/v1beta1"
KIND = "ValidatingAdmissionPolicy"


def _is_policy(obj: Any) -> bool:
    return isinstance(obj, Mapping) and obj.get("apiVersion") == API_VERSION and obj.get("kind") == KIND


class ValidatingAdmissionPolicyHandler(BaseHandler):
    """Builds log entries for validating admission policies."""

    def setup_informer(self, factory: InformerFactory, logger: Logger, resync_period: timedelta) -> None:
        """Attach the shared validating admission policy informer."""
        self.setup_base_informer(factory.informer(API_VERSION, KIND), logger)

    def collect(self, namespaces: list[str]) -> list[Any]:
        """One entry per cached policy; policies are cluster-scoped."""
        objects = safe_get_store_list(self.informer)
        list_time = datetime.now(timezone.utc)
        entries: list[Any] = []
        for obj in objects:
            if not _is_policy(obj):
                continue
            entry = self.create_log_entry(obj)
            entry.timestamp = list_time
            entries.append(entry)
        return entries

    def create_log_entry(self, policy: Mapping[str, Any]) -> ValidatingAdmissionPolicyData:
        """Build the entry for one policy."""
        spec = policy.get("spec") or {}
        status = policy.get("status") or {}
        created_by_kind, created_by_name = get_owner_reference_info(policy)

        failure_policy = spec.get("failurePolicy")
        param_kind = spec.get("paramKind")

        return ValidatingAdmissionPolicyData(
            resource_type="validatingadmissionpolicy",
            name=extract_name(policy),
            namespace=extract_namespace(policy),
            created_timestamp=extract_creation_timestamp(policy),
            labels=extract_labels(policy),
            annotations=extract_annotations(policy),
            created_by_kind=created_by_kind,
            created_by_name=created_by_name,
            failure_policy="" if failure_policy is None else str(failure_policy),
            match_constraints=[],
            validations=[],
            audit_annotations=[],
            match_conditions=[],
            variables=[],
            param_kind="" if param_kind is None else param_kind.get("kind") or "",
            observed_generation=int(status.get("observedGeneration") or 0),
            type_checking="",
            expression_warnings=[],
        )