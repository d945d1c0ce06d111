"""Resource profiles: column schemas, path extraction and cell formatting.

Submodules:
    jsonpath    -- Tolerant JSONPath evaluation over untyped records.
    status      -- Status normalisation and categorisation.
    formatting  -- Value + column type -> display string.
    native      -- Read-only table of hand-authored profiles.
    resolver    -- Priority-ordered profile resolution.
    rendering   -- Table rows, quick-info and detail sections.
"""

from teleskope.profiles.formatting import format_age, format_value
from teleskope.profiles.jsonpath import extract
from teleskope.profiles.native import NATIVE_PROFILES, profile_key
from teleskope.profiles.rendering import detail_sections, quick_info, render_row, render_table
from teleskope.profiles.resolver import categorize_resource, generic_profile, resolve_profile
from teleskope.profiles.status import StatusBadge, StatusCategory, classify_status, pod_status

__all__ = [
    "NATIVE_PROFILES",
    "StatusBadge",
    "StatusCategory",
    "categorize_resource",
    "classify_status",
    "detail_sections",
    "extract",
    "format_age",
    "format_value",
    "generic_profile",
    "pod_status",
    "profile_key",
    "quick_info",
    "render_row",
    "render_table",
    "resolve_profile",
]
