"""
src/data/store.py
─────────────────
SQLite data store abstraction.

Provides:
  - initialize_db()        : Create tables (optionally wiping existing rows)
  - insert_alarm()         : Persist a newly minted Alarm
  - get_alarms()           : Most recent alarms, newest first (retention by limit)
  - acknowledge_alarm()    : One-way acknowledgement
  - update_alarm_risk()    : Persist priority / risk / deadline / escalation
  - SQLiteKeyValue         : Key-value backend for the causality override
  - log_operation()        : Operator audit trail
  - start_shift() / end_shift() / shift events : Shift handover log

Timestamps are stored as ISO-8601 strings.
Thread safety: uses check_same_thread=False + a module-level lock.
"""
from __future__ import annotations

import json
import logging
import sqlite3
import threading
import uuid
from datetime import UTC, datetime

import pandas as pd

from config.settings import settings
from src.data.models import Alarm, AlarmSummary, Shift, ShiftEvent

logger = logging.getLogger(__name__)

_lock = threading.RLock()
_DB: sqlite3.Connection | None = None


# ── Connection ────────────────────────────────────────────────────────────────

def _get_conn() -> sqlite3.Connection:
    global _DB
    if _DB is None:
        _DB = sqlite3.connect(settings.DATABASE_URL, check_same_thread=False)
        _DB.row_factory = sqlite3.Row
    return _DB


# ── Schema ────────────────────────────────────────────────────────────────────

_CREATE_ALARMS = """
CREATE TABLE IF NOT EXISTS alarms (
    id                 TEXT PRIMARY KEY,
    tag_id             TEXT NOT NULL,
    tag_name           TEXT NOT NULL,
    message            TEXT NOT NULL,
    kind               TEXT NOT NULL,
    created_at         TEXT NOT NULL,
    acknowledged       INTEGER NOT NULL DEFAULT 0,
    acknowledged_by    TEXT,
    acknowledged_at    TEXT,
    priority           INTEGER NOT NULL DEFAULT 4,
    category           TEXT NOT NULL DEFAULT 'process',
    risk_score         INTEGER NOT NULL DEFAULT 0,
    response_deadline  TEXT,
    escalated          INTEGER NOT NULL DEFAULT 0,
    upstream_causes    TEXT NOT NULL DEFAULT '[]'
);
"""

_CREATE_KV = """
CREATE TABLE IF NOT EXISTS kv_store (
    key    TEXT PRIMARY KEY,
    value  TEXT NOT NULL
);
"""

_CREATE_OPERATION_LOGS = """
CREATE TABLE IF NOT EXISTS operation_logs (
    id          TEXT PRIMARY KEY,
    user_id     TEXT NOT NULL,
    user_name   TEXT NOT NULL,
    action      TEXT NOT NULL,
    details     TEXT NOT NULL DEFAULT '{}',
    area_id     TEXT,
    created_at  TEXT NOT NULL
);
"""

_CREATE_SHIFTS = """
CREATE TABLE IF NOT EXISTS shifts (
    id              TEXT PRIMARY KEY,
    operator_id     TEXT NOT NULL,
    operator_name   TEXT NOT NULL,
    shift_type      TEXT NOT NULL,
    start_time      TEXT NOT NULL,
    end_time        TEXT,
    handover_notes  TEXT,
    alarm_summary   TEXT,
    status          TEXT NOT NULL DEFAULT 'active'
);
"""

_CREATE_SHIFT_EVENTS = """
CREATE TABLE IF NOT EXISTS shift_events (
    id             TEXT PRIMARY KEY,
    shift_id       TEXT NOT NULL,
    operator_id    TEXT NOT NULL,
    operator_name  TEXT NOT NULL,
    event_type     TEXT NOT NULL,
    title          TEXT NOT NULL,
    description    TEXT,
    severity       TEXT NOT NULL DEFAULT 'info',
    created_at     TEXT NOT NULL
);
"""

_CREATE_IDX = """
CREATE INDEX IF NOT EXISTS idx_alarms_created   ON alarms (created_at);
CREATE INDEX IF NOT EXISTS idx_oplogs_created   ON operation_logs (created_at);
CREATE INDEX IF NOT EXISTS idx_events_shift     ON shift_events (shift_id, created_at);
"""

_TABLES = ("alarms", "kv_store", "operation_logs", "shifts", "shift_events")


def _create_tables(conn: sqlite3.Connection) -> None:
    with conn:
        conn.executescript(
            _CREATE_ALARMS + _CREATE_KV + _CREATE_OPERATION_LOGS + _CREATE_SHIFTS + _CREATE_SHIFT_EVENTS + _CREATE_IDX
        )


def _now() -> datetime:
    return datetime.now(tz=UTC)


def _iso(ts: datetime | None) -> str | None:
    return ts.isoformat() if ts is not None else None


# ── Public API ────────────────────────────────────────────────────────────────

def initialize_db(force_reset: bool = False) -> None:
    """
    Create tables. Safe to call multiple times (idempotent).
    With force_reset every table is emptied.
    """
    conn = _get_conn()
    _create_tables(conn)
    if not force_reset:
        return
    with _lock, conn:
        for table in _TABLES:
            conn.execute(f"DELETE FROM {table}")


# ── Alarms ────────────────────────────────────────────────────────────────────

def _alarm_from_row(row: sqlite3.Row) -> Alarm:
    return Alarm(
        id=row["id"],
        tag_id=row["tag_id"],
        tag_name=row["tag_name"],
        message=row["message"],
        kind=row["kind"],
        timestamp=row["created_at"],
        acknowledged=bool(row["acknowledged"]),
        acknowledged_by=row["acknowledged_by"],
        acknowledged_at=row["acknowledged_at"],
        priority=row["priority"],
        category=row["category"],
        risk_score=row["risk_score"],
        response_deadline=row["response_deadline"],
        escalated=bool(row["escalated"]),
        upstream_causes=json.loads(row["upstream_causes"]),
    )


def insert_alarm(alarm: Alarm) -> None:
    conn = _get_conn()
    with _lock, conn:
        conn.execute(
            """INSERT OR IGNORE INTO alarms
               (id, tag_id, tag_name, message, kind, created_at,
                acknowledged, acknowledged_by, acknowledged_at,
                priority, category, risk_score, response_deadline,
                escalated, upstream_causes)
               VALUES (?,?,?,?,?,?,?,?,?,?,?,?,?,?,?)""",
            (
                alarm.id,
                alarm.tag_id,
                alarm.tag_name,
                alarm.message,
                alarm.kind.value,
                alarm.timestamp.isoformat(),
                int(alarm.acknowledged),
                alarm.acknowledged_by,
                _iso(alarm.acknowledged_at),
                alarm.priority,
                alarm.category.value,
                alarm.risk_score,
                _iso(alarm.response_deadline),
                int(alarm.escalated),
                json.dumps(alarm.upstream_causes),
            ),
        )


def get_alarms(limit: int | None = settings.ALARM_QUERY_LIMIT, unacknowledged_only: bool = False) -> list[Alarm]:
    """
    Most recent alarms, newest first; alarms sharing a timestamp are ordered
    by id, descending. `limit=None` returns every matching row.
    """
    where = "WHERE acknowledged = 0" if unacknowledged_only else ""
    sql = f"SELECT * FROM alarms {where} ORDER BY created_at DESC, id DESC"
    params: tuple = ()
    if limit is not None:
        sql += " LIMIT ?"
        params = (limit,)
    conn = _get_conn()
    with _lock:
        rows = conn.execute(sql, params).fetchall()
    return [_alarm_from_row(r) for r in rows]


def get_alarm(alarm_id: str) -> Alarm | None:
    conn = _get_conn()
    with _lock:
        row = conn.execute("SELECT * FROM alarms WHERE id = ?", (alarm_id,)).fetchone()
    return _alarm_from_row(row) if row else None


def acknowledge_alarm(alarm_id: str, acknowledged_by: str, at: datetime | None = None) -> bool:
    """
    Mark an alarm acknowledged. Returns False when the id is unknown or the
    alarm was already acknowledged (the first acknowledger is kept).
    """
    conn = _get_conn()
    with _lock, conn:
        cur = conn.execute(
            """UPDATE alarms
               SET acknowledged = 1, acknowledged_by = ?, acknowledged_at = ?
               WHERE id = ? AND acknowledged = 0""",
            (acknowledged_by, (at or _now()).isoformat(), alarm_id),
        )
    if cur.rowcount == 0:
        logger.warning("Acknowledge skipped for alarm %s (unknown or already acknowledged)", alarm_id)
        return False
    return True


def update_alarm_risk(alarm: Alarm) -> None:
    """Persist the fields touched by periodic recomputation. Acknowledged rows are left alone."""
    conn = _get_conn()
    with _lock, conn:
        conn.execute(
            """UPDATE alarms
               SET priority = ?, risk_score = ?, response_deadline = ?, escalated = ?
               WHERE id = ? AND acknowledged = 0""",
            (
                alarm.priority,
                alarm.risk_score,
                _iso(alarm.response_deadline),
                int(alarm.escalated),
                alarm.id,
            ),
        )


def get_active_alarm_count() -> int:
    conn = _get_conn()
    with _lock:
        return conn.execute("SELECT COUNT(*) FROM alarms WHERE acknowledged = 0").fetchone()[0]


# ── Key-value (causality override) ────────────────────────────────────────────

class SQLiteKeyValue:
    """KeyValueBackend over the kv_store table."""

    def get(self, key: str) -> str | None:
        conn = _get_conn()
        with _lock:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        conn = _get_conn()
        with _lock, conn:
            conn.execute(
                "INSERT INTO kv_store (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )

    def delete(self, key: str) -> None:
        conn = _get_conn()
        with _lock, conn:
            conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))


# ── Operation log ─────────────────────────────────────────────────────────────

ACTION_LABELS: dict[str, str] = {
    "login": "Logged in",
    "logout": "Logged out",
    "alarm_acknowledge": "Acknowledged alarm",
    "setpoint_change": "Changed setpoint",
    "shift_handover": "Shift handover",
    "mode_change": "Changed mode",
    "causality_import": "Imported causality graph",
    "causality_reset": "Reset causality graph",
    "fault_tree_reset": "Reset fault trees",
}


def get_action_label(action: str) -> str:
    return ACTION_LABELS.get(action, action)


def log_operation(
    user_id: str,
    user_name: str,
    action: str,
    details: dict | None = None,
    area_id: str | None = None,
) -> None:
    conn = _get_conn()
    with _lock, conn:
        conn.execute(
            """INSERT INTO operation_logs
               (id, user_id, user_name, action, details, area_id, created_at)
               VALUES (?,?,?,?,?,?,?)""",
            (
                str(uuid.uuid4()),
                user_id,
                user_name,
                action,
                json.dumps(details or {}),
                area_id,
                _now().isoformat(),
            ),
        )


def get_operation_logs(limit: int = 50, user_id: str | None = None) -> pd.DataFrame:
    """Fetch operation log entries, newest first."""
    where = ""
    params: list = []
    if user_id:
        where = "WHERE user_id = ?"
        params.append(user_id)
    params.append(limit)

    conn = _get_conn()
    with _lock:
        df = pd.read_sql_query(
            f"SELECT * FROM operation_logs {where} ORDER BY created_at DESC LIMIT ?",
            conn,
            params=params,
        )
    if not df.empty:
        df["created_at"] = pd.to_datetime(df["created_at"], utc=True)
        df["details"] = df["details"].map(json.loads)
    return df


# ── Shifts ────────────────────────────────────────────────────────────────────

SHIFT_TYPE_LABELS: dict[str, str] = {
    "morning": "Morning (08–16)",
    "evening": "Evening (16–24)",
    "night": "Night (00–08)",
}

EVENT_TYPE_LABELS: dict[str, str] = {
    "general": "General",
    "emergency": "Emergency",
    "maintenance": "Maintenance",
    "inspection": "Inspection",
    "other": "Other",
}

EVENT_SEVERITY_LABELS: dict[str, str] = {
    "info": "Info",
    "warning": "Attention",
    "critical": "Important",
}


def get_shift_type(now: datetime) -> str:
    if 8 <= now.hour < 16:
        return "morning"
    if now.hour >= 16:
        return "evening"
    return "night"


def _shift_from_row(row: sqlite3.Row) -> Shift:
    summary = row["alarm_summary"]
    return Shift(
        id=row["id"],
        operator_id=row["operator_id"],
        operator_name=row["operator_name"],
        shift_type=row["shift_type"],
        start_time=row["start_time"],
        end_time=row["end_time"],
        handover_notes=row["handover_notes"],
        alarm_summary=AlarmSummary.model_validate_json(summary) if summary else None,
        status=row["status"],
    )


def start_shift(operator_id: str, operator_name: str, now: datetime | None = None) -> Shift:
    """Open a shift; any shift still active for this operator is completed first."""
    now = now or _now()
    shift = Shift(
        id=str(uuid.uuid4()),
        operator_id=operator_id,
        operator_name=operator_name,
        shift_type=get_shift_type(now),
        start_time=now,
    )
    conn = _get_conn()
    with _lock, conn:
        conn.execute(
            "UPDATE shifts SET status = 'completed', end_time = ? WHERE operator_id = ? AND status = 'active'",
            (now.isoformat(), operator_id),
        )
        conn.execute(
            """INSERT INTO shifts
               (id, operator_id, operator_name, shift_type, start_time, status)
               VALUES (?,?,?,?,?, 'active')""",
            (shift.id, operator_id, operator_name, shift.shift_type, now.isoformat()),
        )
    return shift


def end_shift(shift_id: str, handover_notes: str, summary: AlarmSummary, now: datetime | None = None) -> bool:
    conn = _get_conn()
    with _lock, conn:
        cur = conn.execute(
            """UPDATE shifts
               SET status = 'completed', end_time = ?, handover_notes = ?, alarm_summary = ?
               WHERE id = ?""",
            ((now or _now()).isoformat(), handover_notes, summary.model_dump_json(), shift_id),
        )
    return cur.rowcount > 0


def get_current_shift(operator_id: str) -> Shift | None:
    conn = _get_conn()
    with _lock:
        row = conn.execute(
            "SELECT * FROM shifts WHERE operator_id = ? AND status = 'active' ORDER BY start_time DESC LIMIT 1",
            (operator_id,),
        ).fetchone()
    return _shift_from_row(row) if row else None


def get_recent_shifts(limit: int = 10) -> pd.DataFrame:
    conn = _get_conn()
    with _lock:
        df = pd.read_sql_query(
            "SELECT * FROM shifts ORDER BY start_time DESC LIMIT ?",
            conn,
            params=(limit,),
        )
    if not df.empty:
        df["start_time"] = pd.to_datetime(df["start_time"], utc=True)
        df["end_time"] = pd.to_datetime(df["end_time"], utc=True)
    return df


# ── Shift events ──────────────────────────────────────────────────────────────

def add_shift_event(
    shift_id: str,
    operator_id: str,
    operator_name: str,
    event_type: str,
    title: str,
    description: str | None = None,
    severity: str = "info",
    now: datetime | None = None,
) -> ShiftEvent:
    """Validate and persist a shift event. Raises pydantic.ValidationError on bad input."""
    event = ShiftEvent(
        id=str(uuid.uuid4()),
        shift_id=shift_id,
        operator_id=operator_id,
        operator_name=operator_name,
        event_type=event_type,
        title=title,
        description=description,
        severity=severity,
        created_at=now or _now(),
    )
    conn = _get_conn()
    with _lock, conn:
        conn.execute(
            """INSERT INTO shift_events
               (id, shift_id, operator_id, operator_name, event_type,
                title, description, severity, created_at)
               VALUES (?,?,?,?,?,?,?,?,?)""",
            (
                event.id,
                event.shift_id,
                event.operator_id,
                event.operator_name,
                event.event_type,
                event.title,
                event.description,
                event.severity,
                event.created_at.isoformat(),
            ),
        )
    return event


def get_shift_events(shift_id: str) -> pd.DataFrame:
    conn = _get_conn()
    with _lock:
        df = pd.read_sql_query(
            "SELECT * FROM shift_events WHERE shift_id = ? ORDER BY created_at DESC",
            conn,
            params=(shift_id,),
        )
    if not df.empty:
        df["created_at"] = pd.to_datetime(df["created_at"], utc=True)
    return df


_EDITABLE_EVENT_FIELDS = ("title", "description", "event_type", "severity")


def update_shift_event(event_id: str, **updates) -> bool:
    fields = {k: v for k, v in updates.items() if k in _EDITABLE_EVENT_FIELDS}
    if not fields:
        return False
    if fields.get("event_type", "general") not in EVENT_TYPE_LABELS:
        raise ValueError(f"unknown event type: {fields['event_type']!r}")
    if fields.get("severity", "info") not in EVENT_SEVERITY_LABELS:
        raise ValueError(f"unknown severity: {fields['severity']!r}")
    assignments = ", ".join(f"{k} = ?" for k in fields)
    conn = _get_conn()
    with _lock, conn:
        cur = conn.execute(
            f"UPDATE shift_events SET {assignments} WHERE id = ?",
            (*fields.values(), event_id),
        )
    return cur.rowcount > 0


def delete_shift_event(event_id: str) -> bool:
    conn = _get_conn()
    with _lock, conn:
        cur = conn.execute("DELETE FROM shift_events WHERE id = ?", (event_id,))
    return cur.rowcount > 0
