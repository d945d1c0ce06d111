"""Hand-authored profiles for the built-in Kubernetes kinds.

``NATIVE_PROFILES`` is built once at import and exposed through a
read-only mapping; nothing writes to it afterwards.
"""

from __future__ import annotations

from types import MappingProxyType

from teleskope.models.resources import (
    ActionDefinition,
    ActionType,
    ColumnDefinition,
    ColumnType,
    ResourceIdentity,
    ResourceProfile,
)

T = ColumnType

NAME = ColumnDefinition("Name", "$.metadata.name", T.LINK)
NAMESPACE = ColumnDefinition("Namespace", "$.metadata.namespace", T.TEXT)
AGE = ColumnDefinition("Age", "$.metadata.creationTimestamp", T.AGE)

_EDIT = ActionDefinition("Edit", ActionType.EDIT)
_DELETE = ActionDefinition("Delete", ActionType.DELETE)


def _profile(
    group: str,
    version: str,
    kind: str,
    *columns: ColumnDefinition,
    actions: tuple[ActionDefinition, ...] | None = None,
) -> ResourceProfile:
    return ResourceProfile(
        identity=ResourceIdentity(group, version, kind),
        columns=tuple(columns),
        actions=actions,
    )


def profile_key(identity: ResourceIdentity) -> str:
    """Lookup key ``group/version/kind``; the empty group becomes ``core``."""
    return f"{identity.group or 'core'}/{identity.version}/{identity.kind}"


_PROFILES = (
    _profile(
        "", "v1", "Pod",
        ColumnDefinition("Status", "$", T.ENHANCED_STATUS, width="40px"),
        NAME,
        ColumnDefinition("Containers", "$.status.containerStatuses[*]", T.CONTAINER_STATUSES),
        ColumnDefinition("Node", "$.spec.nodeName", T.TEXT),
        AGE,
        actions=(
            ActionDefinition("View Logs", ActionType.VIEW),
            ActionDefinition("Terminal", ActionType.TERMINAL),
            _EDIT,
            _DELETE,
        ),
    ),
    _profile(
        "apps", "v1", "Deployment",
        NAME,
        NAMESPACE,
        ColumnDefinition("Ready", "$.status.readyReplicas", T.TEXT),
        ColumnDefinition("Up-to-date", "$.status.updatedReplicas", T.NUMBER),
        ColumnDefinition("Available", "$.status.availableReplicas", T.NUMBER),
        AGE,
        actions=(ActionDefinition("Scale", ActionType.CUSTOM), _EDIT, _DELETE),
    ),
    _profile(
        "", "v1", "Service",
        NAME,
        NAMESPACE,
        ColumnDefinition("Type", "$.spec.type", T.TEXT),
        ColumnDefinition("Cluster IP", "$.spec.clusterIP", T.TEXT),
        ColumnDefinition("External IP", "$.status.loadBalancer.ingress[0].ip", T.TEXT),
        ColumnDefinition("Ports", "$.spec.ports[*].port", T.LIST),
        AGE,
    ),
    _profile(
        "networking.k8s.io", "v1", "Ingress",
        NAME,
        NAMESPACE,
        ColumnDefinition("Class", "$.spec.ingressClassName", T.TEXT),
        ColumnDefinition("Hosts", "$.spec.rules[*].host", T.LIST),
        ColumnDefinition("Address", "$.status.loadBalancer.ingress[0].ip", T.TEXT),
        AGE,
    ),
    _profile(
        "", "v1", "ConfigMap",
        NAME,
        NAMESPACE,
        ColumnDefinition("Data", "$.data", T.TEXT),
        AGE,
    ),
    _profile(
        "", "v1", "Secret",
        NAME,
        NAMESPACE,
        ColumnDefinition("Type", "$.type", T.TEXT),
        ColumnDefinition("Data", "$.data", T.TEXT),
        AGE,
    ),
    _profile(
        "", "v1", "Namespace",
        NAME,
        ColumnDefinition("Status", "$.status.phase", T.STATUS),
        AGE,
    ),
    _profile(
        "", "v1", "Node",
        NAME,
        ColumnDefinition("Status", "$.status.conditions[?(@.type=='Ready')].status", T.STATUS),
        ColumnDefinition("Roles", "$.metadata.labels['kubernetes.io/role']", T.TEXT),
        ColumnDefinition("Version", "$.status.nodeInfo.kubeletVersion", T.TEXT),
        AGE,
    ),
    _profile(
        "apps", "v1", "StatefulSet",
        NAME,
        NAMESPACE,
        ColumnDefinition("Ready", "$.status.readyReplicas", T.TEXT),
        ColumnDefinition("Replicas", "$.spec.replicas", T.NUMBER),
        AGE,
    ),
    _profile(
        "apps", "v1", "DaemonSet",
        NAME,
        NAMESPACE,
        ColumnDefinition("Desired", "$.status.desiredNumberScheduled", T.NUMBER),
        ColumnDefinition("Current", "$.status.currentNumberScheduled", T.NUMBER),
        ColumnDefinition("Ready", "$.status.numberReady", T.NUMBER),
        AGE,
    ),
    _profile(
        "batch", "v1", "Job",
        NAME,
        NAMESPACE,
        ColumnDefinition("Completions", "$.status.succeeded", T.NUMBER),
        ColumnDefinition("Duration", "$.status.completionTime", T.TEXT),
        AGE,
    ),
    _profile(
        "batch", "v1", "CronJob",
        NAME,
        NAMESPACE,
        ColumnDefinition("Schedule", "$.spec.schedule", T.TEXT),
        ColumnDefinition("Suspend", "$.spec.suspend", T.BOOLEAN),
        ColumnDefinition("Active", "$.status.active.length", T.NUMBER),
        ColumnDefinition("Last Schedule", "$.status.lastScheduleTime", T.AGE),
        AGE,
    ),
)

NATIVE_PROFILES: MappingProxyType[str, ResourceProfile] = MappingProxyType(
    {profile_key(p.identity): p for p in _PROFILES}
)
