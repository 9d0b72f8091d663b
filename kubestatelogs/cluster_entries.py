"""Log entry records for autoscaling, storage, RBAC, admission and other cluster resources."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from kubestatelogs.core_entries import LoadBalancerIngressData, LogEntryMetadata, _key

__all__ = [
    "LoadBalancerIngressData",
    "HorizontalPodAutoscalerData",
    "ServiceAccountData",
    "EndpointsData",
    "EndpointAddressData",
    "EndpointPortData",
    "PersistentVolumeData",
    "ResourceQuotaData",
    "PodDisruptionBudgetData",
    "CRDData",
    "StorageClassData",
    "NetworkPolicyData",
    "NetworkPolicyIngressRule",
    "NetworkPolicyEgressRule",
    "NetworkPolicyPort",
    "NetworkPolicyPeer",
    "ReplicationControllerData",
    "LimitRangeData",
    "LimitRangeItem",
    "CertificateSigningRequestData",
    "PolicyRule",
    "RoleData",
    "ClusterRoleData",
    "RoleRef",
    "Subject",
    "RoleBindingData",
    "ClusterRoleBindingData",
    "IngressClassData",
    "LeaseData",
    "WebhookData",
    "WebhookClientConfigData",
    "WebhookServiceData",
    "WebhookRuleData",
    "MutatingWebhookConfigurationData",
    "PriorityClassData",
    "RuntimeClassData",
    "VolumeAttachmentData",
    "ValidatingAdmissionPolicyData",
    "ValidatingAdmissionPolicyBindingData",
    "ValidatingWebhookConfigurationData",
]


@dataclass(kw_only=True)
class HorizontalPodAutoscalerData(LogEntryMetadata):
    """State of a horizontal pod autoscaler."""

    min_replicas: int | None = None
    max_replicas: int = 0
    target_cpu_utilization_percentage: int | None = _key("targetCPUUtilizationPercentage")
    target_memory_utilization_percentage: int | None = None
    current_replicas: int = 0
    desired_replicas: int = 0
    current_cpu_utilization_percentage: int | None = _key("currentCPUUtilizationPercentage")
    current_memory_utilization_percentage: int | None = None
    condition_able_to_scale: bool | None = None
    condition_scaling_active: bool | None = None
    condition_scaling_limited: bool | None = None
    conditions: dict[str, bool | None] | None = None
    scale_target_ref: str = ""
    scale_target_kind: str = ""


@dataclass(kw_only=True)
class ServiceAccountData(LogEntryMetadata):
    """Secrets and token settings of a service account."""

    secrets: list[str] | None = None
    image_pull_secrets: list[str] | None = None
    automount_service_account_token: bool | None = None


@dataclass(kw_only=True)
class EndpointAddressData:
    """One address behind an endpoints object."""

    ip: str = ""
    hostname: str = ""
    node_name: str = ""
    target_ref: str = ""


@dataclass(kw_only=True)
class EndpointPortData:
    """One port of an endpoints object."""

    name: str = ""
    protocol: str = ""
    port: int = 0


@dataclass(kw_only=True)
class EndpointsData(LogEntryMetadata):
    """Addresses and ports of an endpoints object."""

    addresses: list[EndpointAddressData] | None = None
    ports: list[EndpointPortData] | None = None
    ready: bool | None = None


@dataclass(kw_only=True)
class PersistentVolumeData(LogEntryMetadata):
    """State of a persistent volume."""

    capacity_bytes: int = 0
    access_modes: str = ""
    reclaim_policy: str = ""
    status: str = ""
    storage_class_name: str = ""
    volume_mode: str = ""
    volume_plugin_name: str = ""
    persistent_volume_source: str = ""
    is_default_class: bool = False


@dataclass(kw_only=True)
class ResourceQuotaData(LogEntryMetadata):
    """Hard limits and usage of a resource quota."""

    hard: dict[str, int] | None = None
    used: dict[str, int] | None = None
    scopes: list[str] | None = None


@dataclass(kw_only=True)
class PodDisruptionBudgetData(LogEntryMetadata):
    """Spec and status of a pod disruption budget."""

    min_available: int = 0
    max_unavailable: int = 0
    current_healthy: int = 0
    desired_healthy: int = 0
    expected_pods: int = 0
    disruptions_allowed: int = 0
    total_replicas: int = 0
    disruption_allowed: bool = False
    status_current_healthy: int = 0
    status_desired_healthy: int = 0
    status_expected_pods: int = 0
    status_disruptions_allowed: int = 0
    status_total_replicas: int = 0
    status_disruption_allowed: bool = False


@dataclass(kw_only=True)
class CRDData(LogEntryMetadata):
    """A custom resource with its spec, status and selected fields."""

    api_version: str = ""
    kind: str = ""
    spec: dict[str, Any] | None = None
    status: dict[str, Any] | None = None
    custom_fields: dict[str, Any] | None = None


@dataclass(kw_only=True)
class StorageClassData(LogEntryMetadata):
    """Settings of a storage class."""

    provisioner: str = ""
    reclaim_policy: str = ""
    volume_binding_mode: str = ""
    allow_volume_expansion: bool = False
    parameters: dict[str, str] | None = None
    mount_options: list[str] | None = None
    allowed_topologies: dict[str, Any] | None = None
    is_default_class: bool = False


@dataclass(kw_only=True)
class NetworkPolicyPort:
    """A port matched by a network policy rule."""

    protocol: str = ""
    port: int = 0
    end_port: int = 0


@dataclass(kw_only=True)
class NetworkPolicyPeer:
    """A peer matched by a network policy rule."""

    pod_selector: dict[str, str] | None = None
    namespace_selector: dict[str, str] | None = None
    ip_block: dict[str, Any] | None = None


@dataclass(kw_only=True)
class NetworkPolicyIngressRule:
    """An ingress rule of a network policy."""

    ports: list[NetworkPolicyPort] | None = None
    from_: list[NetworkPolicyPeer] | None = _key("from")


@dataclass(kw_only=True)
class NetworkPolicyEgressRule:
    """An egress rule of a network policy."""

    ports: list[NetworkPolicyPort] | None = None
    to: list[NetworkPolicyPeer] | None = None


@dataclass(kw_only=True)
class NetworkPolicyData(LogEntryMetadata):
    """Rules of a network policy."""

    policy_types: list[str] | None = None
    ingress_rules: list[NetworkPolicyIngressRule] | None = None
    egress_rules: list[NetworkPolicyEgressRule] | None = None


@dataclass(kw_only=True)
class ReplicationControllerData(LogEntryMetadata):
    """State of a replication controller."""

    desired_replicas: int = 0
    current_replicas: int = 0
    ready_replicas: int = 0
    available_replicas: int = 0
    fully_labeled_replicas: int = 0
    observed_generation: int = 0


@dataclass(kw_only=True)
class LimitRangeItem:
    """One limit of a limit range."""

    type: str = ""
    resource_type: str = ""
    resource_name: str = ""
    min: dict[str, str] | None = None
    max: dict[str, str] | None = None
    default: dict[str, str] | None = None
    default_request: dict[str, str] | None = None
    max_limit_request_ratio: dict[str, str] | None = None


@dataclass(kw_only=True)
class LimitRangeData(LogEntryMetadata):
    """Limits of a limit range."""

    limits: list[LimitRangeItem] | None = None


@dataclass(kw_only=True)
class CertificateSigningRequestData(LogEntryMetadata):
    """State of a certificate signing request."""

    status: str = ""
    signer_name: str = ""
    expiration_seconds: int | None = None
    usages: list[str] | None = None


@dataclass(kw_only=True)
class PolicyRule:
    """One RBAC policy rule."""

    api_groups: list[str] | None = None
    resources: list[str] | None = None
    verbs: list[str] | None = None
    resource_names: list[str] | None = None
    non_resource_urls: list[str] | None = _key("nonResourceURLs")


@dataclass(kw_only=True)
class RoleData(LogEntryMetadata):
    """Rules of a role."""

    rules: list[PolicyRule] | None = None


@dataclass(kw_only=True)
class ClusterRoleData(LogEntryMetadata):
    """Rules of a cluster role."""

    rules: list[PolicyRule] | None = None


@dataclass(kw_only=True)
class RoleRef:
    """The role a binding refers to."""

    api_group: str = ""
    kind: str = ""
    name: str = ""


@dataclass(kw_only=True)
class Subject:
    """A user, group or service account named by a binding."""

    kind: str = ""
    api_group: str = ""
    name: str = ""
    namespace: str = ""


@dataclass(kw_only=True)
class RoleBindingData(LogEntryMetadata):
    """A role binding."""

    role_ref: RoleRef = field(default_factory=RoleRef)
    subjects: list[Subject] | None = None


@dataclass(kw_only=True)
class ClusterRoleBindingData(LogEntryMetadata):
    """A cluster role binding."""

    role_ref: RoleRef = field(default_factory=RoleRef)
    subjects: list[Subject] | None = None


@dataclass(kw_only=True)
class IngressClassData(LogEntryMetadata):
    """An ingress class."""

    controller: str = ""
    is_default: bool = False


@dataclass(kw_only=True)
class LeaseData(LogEntryMetadata):
    """State of a coordination lease."""

    holder_identity: str = ""
    lease_duration_seconds: int = 0
    renew_time: datetime | None = None
    acquire_time: datetime | None = None
    lease_transitions: int = 0


@dataclass(kw_only=True)
class WebhookServiceData(LogEntryMetadata):
    """The in-cluster service a webhook calls."""

    namespace: str = ""
    name: str = ""
    path: str = ""
    port: int = 0


@dataclass(kw_only=True)
class WebhookClientConfigData(LogEntryMetadata):
    """How a webhook is reached."""

    url: str = ""
    service: WebhookServiceData | None = None
    ca_bundle: bytes | None = None


@dataclass(kw_only=True)
class WebhookRuleData(LogEntryMetadata):
    """The requests a webhook rule matches."""

    api_groups: list[str] | None = None
    api_versions: list[str] | None = None
    resources: list[str] | None = None
    scope: str = ""


@dataclass(kw_only=True)
class WebhookData(LogEntryMetadata):
    """One admission webhook."""

    name: str = ""
    client_config: WebhookClientConfigData = field(default_factory=WebhookClientConfigData)
    rules: list[WebhookRuleData] | None = None
    failure_policy: str = ""
    match_policy: str = ""
    namespace_selector: dict[str, str] | None = None
    object_selector: dict[str, str] | None = None
    side_effects: str = ""
    timeout_seconds: int | None = None
    admission_review_versions: list[str] | None = None


@dataclass(kw_only=True)
class MutatingWebhookConfigurationData(LogEntryMetadata):
    """Webhooks of a mutating webhook configuration."""

    webhooks: list[WebhookData] | None = None


@dataclass(kw_only=True)
class PriorityClassData(LogEntryMetadata):
    """A priority class."""

    value: int = 0
    global_default: bool = False
    description: str = ""
    preemption_policy: str = ""


@dataclass(kw_only=True)
class RuntimeClassData(LogEntryMetadata):
    """A runtime class."""

    handler: str = ""


@dataclass(kw_only=True)
class VolumeAttachmentData(LogEntryMetadata):
    """State of a volume attachment."""

    attacher: str = ""
    volume_name: str = ""
    node_name: str = ""
    attached: bool = False


@dataclass(kw_only=True)
class ValidatingAdmissionPolicyData(LogEntryMetadata):
    """A validating admission policy."""

    failure_policy: str = ""
    match_constraints: list[str] | None = None
    validations: list[str] | None = None
    audit_annotations: list[str] | None = None
    match_conditions: list[str] | None = None
    variables: list[str] | None = None
    param_kind: str = ""
    observed_generation: int = 0
    type_checking: str = ""
    expression_warnings: list[str] | None = None


@dataclass(kw_only=True)
class ValidatingAdmissionPolicyBindingData(LogEntryMetadata):
    """A validating admission policy binding."""

    policy_name: str = ""
    param_ref: str = ""
    match_resources: list[str] | None = None
    validation_actions: list[str] | None = None
    observed_generation: int = 0


@dataclass(kw_only=True)
class ValidatingWebhookConfigurationData(LogEntryMetadata):
    """Webhooks of a validating webhook configuration."""

    webhooks: list[WebhookData] | None = None