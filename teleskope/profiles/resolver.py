"""Profile resolution for a Group/Version/Kind.

Priority, first hit wins:
    1. Native profiles (hand-authored, ``teleskope.profiles.native``)
    2. User profiles -- reserved, not consulted
    3. Printer columns declared by a CRD -- reserved, not consulted
    4. Generic fallback (Name, Namespace, Age)
"""

from __future__ import annotations

from collections.abc import Mapping

from teleskope.models.resources import ResourceIdentity, ResourceProfile
from teleskope.observability.logging import get_logger
from teleskope.profiles.native import AGE, NAME, NAMESPACE, NATIVE_PROFILES, profile_key

_logger = get_logger("profiles.resolver")

_CATEGORIES = {
    "Workloads": ("Pod", "Deployment", "ReplicaSet", "StatefulSet", "DaemonSet", "Job", "CronJob"),
    "Network": ("Service", "Endpoints", "Ingress", "NetworkPolicy", "IngressClass"),
    "Storage": ("PersistentVolume", "PersistentVolumeClaim", "StorageClass", "VolumeAttachment"),
    "Config": ("ConfigMap", "Secret", "ResourceQuota", "LimitRange", "HorizontalPodAutoscaler"),
    "RBAC": ("ServiceAccount", "Role", "RoleBinding", "ClusterRole", "ClusterRoleBinding"),
    "Cluster": ("Namespace", "Node", "Event"),
}
_CATEGORY_BY_KIND = {kind: category for category, kinds in _CATEGORIES.items() for kind in kinds}


def categorize_resource(group: str, kind: str) -> str:
    """Sidebar category for a kind; unknown kinds in a named group are CRDs."""
    category = _CATEGORY_BY_KIND.get(kind)
    if category is not None:
        return category
    if group:
        return f"CRDs ({group})"
    return "Other"


def generic_profile(identity: ResourceIdentity) -> ResourceProfile:
    """Fallback profile for kinds without a dedicated one."""
    return ResourceProfile(identity=identity, columns=(NAME, NAMESPACE, AGE))


def resolve_profile(
    identity: ResourceIdentity,
    native: Mapping[str, ResourceProfile] = NATIVE_PROFILES,
) -> ResourceProfile:
    """Return the display profile for ``identity``.  Never fails."""
    key = profile_key(identity)

    profile = native.get(key)
    if profile is not None:
        return profile

    _logger.debug("profile_fallback", key=key)
    return generic_profile(identity)
