"""Host-facing entry point for Teleskope.

Wires configuration and logging, then exposes the rendering and topology
operations with the configured geometry and quick-info width.
Startup order: config -> logging -> profile table (import time).

    app = TeleskopeApp()
    rows = app.table(identity, records)
    dashboard = app.dashboard(provider, sink)
"""

from __future__ import annotations

from collections.abc import Collection, Iterable
from datetime import datetime

from teleskope import __version__
from teleskope.config import load_config
from teleskope.dashboard import DataProvider, NavigationSink, TopologyDashboard
from teleskope.models.config import TeleskopeConfig
from teleskope.models.resources import Record, ResourceIdentity, ResourceProfile
from teleskope.observability.logging import get_logger, setup_logging
from teleskope.profiles.native import NATIVE_PROFILES
from teleskope.profiles.rendering import (
    DetailSection,
    RenderedCell,
    detail_sections,
    quick_info,
    render_table,
)
from teleskope.profiles.resolver import resolve_profile


class TeleskopeApp:
    """Application root.  Holds the configuration every view is rendered with."""

    def __init__(self, config: TeleskopeConfig | None = None, json_logs: bool = True) -> None:
        self.config = config or load_config()
        setup_logging(self.config.log.level, json_output=json_logs)
        self._log = get_logger("app")
        self._log.info("teleskope starting", version=__version__, native_profiles=len(NATIVE_PROFILES))

    def profile(self, identity: ResourceIdentity) -> ResourceProfile:
        return resolve_profile(identity)

    def table(
        self,
        identity: ResourceIdentity,
        records: Iterable[Record],
        hidden: Collection[str] = (),
        now: datetime | None = None,
    ) -> list[list[RenderedCell]]:
        return render_table(records, self.profile(identity), hidden=hidden, now=now)

    def quick_info(self, identity: ResourceIdentity, record: Record, now: datetime | None = None) -> list[RenderedCell]:
        return quick_info(record, self.profile(identity), count=self.config.render.quick_info_columns, now=now)

    def detail(self, identity: ResourceIdentity, record: Record, now: datetime | None = None) -> list[DetailSection]:
        return detail_sections(identity.kind, record, now=now)

    def dashboard(self, provider: DataProvider, sink: NavigationSink | None = None) -> TopologyDashboard:
        return TopologyDashboard(provider, sink=sink, layout=self.config.layout)
