"""
src/data/monitor.py
───────────────────
Live plant state shared by the dashboard callbacks.

PlantMonitor owns the simulated tags, the random generator, the causality
store and the fault tree library. Two periodic entry points drive it:
  - tick()    : sample every tag, mint and persist alarms on status changes
  - refresh() : rescore open alarms, escalate overdue ones, persist changes

Acknowledgement goes through acknowledge(), which also writes the operation
log. Acknowledged alarms are skipped by refresh(), so an acknowledgement that
lands between two refreshes can never be overridden by an escalation.
"""
from __future__ import annotations

import logging
import threading
from datetime import UTC, datetime

import numpy as np

from config.settings import settings
from src.analytics.causality import CausalityStore
from src.analytics.fault_tree import FaultTreeLibrary
from src.analytics.priority import refresh_alarm
from src.data import store
from src.data.models import Alarm, TagData
from src.data.simulator import create_initial_tags, generate_alarm, update_tag

logger = logging.getLogger(__name__)


class PlantMonitor:
    def __init__(
        self,
        causality: CausalityStore,
        seed: int = settings.SIMULATION_SEED,
        now: datetime | None = None,
        fault_trees: FaultTreeLibrary | None = None,
    ) -> None:
        self.causality = causality
        self.fault_trees = fault_trees if fault_trees is not None else FaultTreeLibrary()
        self.rng = np.random.default_rng(seed)
        self.tags: list[TagData] = create_initial_tags(self.rng, now)
        self._lock = threading.RLock()

    def get_tag(self, tag_id: str) -> TagData | None:
        with self._lock:
            return next((t for t in self.tags if t.id == tag_id), None)

    def tick(self, now: datetime | None = None) -> list[Alarm]:
        """Advance every tag one sample. Returns the alarms minted this tick."""
        now = now or datetime.now(tz=UTC)
        minted: list[Alarm] = []
        with self._lock:
            updated: list[TagData] = []
            for tag in self.tags:
                previous_status = tag.status
                new_tag = update_tag(tag, self.rng, now)
                alarm = generate_alarm(new_tag, previous_status, now, self.causality.graph)
                if alarm is not None:
                    store.insert_alarm(alarm)
                    minted.append(alarm)
                updated.append(new_tag)
            self.tags = updated
        return minted

    def refresh(self, now: datetime | None = None) -> list[Alarm]:
        """Recompute risk / escalation for every open alarm (no query limit). Returns those that changed."""
        now = now or datetime.now(tz=UTC)
        changed: list[Alarm] = []
        for alarm in store.get_alarms(limit=None, unacknowledged_only=True):
            refreshed = refresh_alarm(alarm, now)
            if refreshed != alarm:
                store.update_alarm_risk(refreshed)
                changed.append(refreshed)
        return changed

    def acknowledge(self, alarm_id: str, operator: str, now: datetime | None = None) -> bool:
        now = now or datetime.now(tz=UTC)
        if not store.acknowledge_alarm(alarm_id, operator, now):
            return False
        store.log_operation(operator, operator, "alarm_acknowledge", {"alarm_id": alarm_id})
        return True
