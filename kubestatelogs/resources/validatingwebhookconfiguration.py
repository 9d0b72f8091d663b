"""Collection of validating webhook configurations from the informer cache."""

from __future__ import annotations

import base64
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any

from kubestatelogs.cluster_entries import (
    ValidatingWebhookConfigurationData,
    WebhookClientConfigData,
    WebhookData,
    WebhookRuleData,
    WebhookServiceData,
)
from kubestatelogs.fields import (
    extract_annotations,
    extract_creation_timestamp,
    extract_labels,
    extract_name,
    extract_namespace,
    get_owner_reference_info,
)
from kubestatelogs.handler import BaseHandler, InformerFactory, Logger, safe_get_store_list

API_VERSION = "admissionregistration.k8s.io/v1"
KIND = "ValidatingWebhookConfiguration"


def _is_config(obj: Any) -> bool:
    return isinstance(obj, Mapping) and obj.get("apiVersion") == API_VERSION and obj.get("kind") == KIND


def _required(mapping: Mapping[str, Any], key: str, owner: str) -> str:
    value = mapping.get(key)
    if value is None:
        raise ValueError(f"webhook {owner!r} has no {key}")
    return str(value)


def _ca_bundle(value: Any) -> bytes | None:
    if value is None:
        return None
    if isinstance(value, str):
        return base64.b64decode(value)
    return bytes(value)


def _client_config(config: Mapping[str, Any]) -> WebhookClientConfigData:
    service = config.get("service")
    service_data = None
    if service is not None:
        service_data = WebhookServiceData(
            namespace=service.get("namespace") or "",
            name=service.get("name") or "",
            path=service.get("path") or "",
            port=int(service.get("port") or 0),
        )
    return WebhookClientConfigData(
        url=config.get("url") or "",
        service=service_data,
        ca_bundle=_ca_bundle(config.get("caBundle")),
    )


def _match_labels(selector: Mapping[str, Any] | None) -> dict[str, str] | None:
    if selector is None:
        return None
    return selector.get("matchLabels")


def _webhook(webhook: Mapping[str, Any]) -> WebhookData:
    name = webhook.get("name") or ""
    rules = [
        WebhookRuleData(
            api_groups=rule.get("apiGroups"),
            api_versions=rule.get("apiVersions"),
            resources=rule.get("resources"),
            scope=_required(rule, "scope", name),
        )
        for rule in webhook.get("rules") or []
    ]
    timeout = webhook.get("timeoutSeconds")
    return WebhookData(
        name=name,
        client_config=_client_config(webhook.get("clientConfig") or {}),
        rules=rules or None,
        failure_policy=_required(webhook, "failurePolicy", name),
        match_policy=_required(webhook, "matchPolicy", name),
        namespace_selector=_match_labels(webhook.get("namespaceSelector")),
        object_selector=_match_labels(webhook.get("objectSelector")),
        side_effects=_required(webhook, "sideEffects", name),
        timeout_seconds=None if timeout is None else int(timeout),
        admission_review_versions=webhook.get("admissionReviewVersions"),
    )


class ValidatingWebhookConfigurationHandler(BaseHandler):
    """Builds log entries for validating webhook configurations."""

    def setup_informer(self, factory: InformerFactory, logger: Logger, resync_period: timedelta) -> None:
        """Attach the shared validating webhook configuration informer."""
        self.setup_base_informer(factory.informer(API_VERSION, KIND), logger)

    def collect(self, namespaces: list[str]) -> list[Any]:
        """One entry per cached configuration; they are cluster-scoped."""
        objects = safe_get_store_list(self.informer)
        list_time = datetime.now(timezone.utc)
        entries: list[Any] = []
        for obj in objects:
            if not _is_config(obj):
                continue
            entry = self.create_log_entry(obj)
            entry.timestamp = list_time
            entries.append(entry)
        return entries

    def create_log_entry(self, config: Mapping[str, Any]) -> ValidatingWebhookConfigurationData:
        """Build the entry for one configuration; raise ValueError if a webhook lacks required settings."""
        webhooks = [_webhook(webhook) for webhook in config.get("webhooks") or []]
        created_by_kind, created_by_name = get_owner_reference_info(config)

        return ValidatingWebhookConfigurationData(
            resource_type="validatingwebhookconfiguration",
            name=extract_name(config),
            namespace=extract_namespace(config),
            created_timestamp=extract_creation_timestamp(config),
            labels=extract_labels(config),
            annotations=extract_annotations(config),
            created_by_kind=created_by_kind,
            created_by_name=created_by_name,
            webhooks=webhooks,
        )