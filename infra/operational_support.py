# infra/operational_support.py
"""
Support event log.

Handled errors and other support-relevant events are appended as one JSON
object per line to ``<user data dir>/logs/support-events.jsonl`` so a
support request can be answered from a single trace id. Apprentice personal
data (names, contact details, addresses) and credentials are redacted
before anything is written.
"""
from __future__ import annotations

import json
import logging
import re
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import asdict, dataclass, field
from datetime import date, datetime, timezone
from pathlib import Path
from threading import Lock
from typing import Any, Iterator, Mapping

from infra.path import logs_dir
from infra.settings import get_app_version

logger = logging.getLogger(__name__)

REDACTED = "<redacted>"
REDACTED_EMAIL = "<redacted-email>"

_trace_id_var: ContextVar[str | None] = ContextVar("dualify_trace_id", default=None)

# Form keys that hold personal data of apprentices, supervisors and instructors.
PERSONAL_FIELDS = frozenset(
    {
        "first_name",
        "last_name",
        "email",
        "phone",
        "supervisor_name",
        "supervisor_email",
        "supervisor_phone",
        "instructor_name",
        "instructor_email",
        "instructor_phone",
        "company_address",
        "school_address",
    }
)
_CREDENTIAL_MARKERS = ("password", "token", "secret", "api_key", "authorization", "cookie")

_EMAIL_RE = re.compile(r"\b[\w.%+-]+@[\w.-]+\.[A-Za-z]{2,}\b")
_BEARER_RE = re.compile(r"(?i)\bbearer\s+\S+")
_CREDENTIAL_PAIR_RE = re.compile(
    r"(?i)\b(password|token|secret|api[_-]?key|authorization)\b\s*[:=]\s*([^\s,;]+)"
)
_MAX_DEPTH = 8


def create_trace_id() -> str:
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
    return f"err-{stamp}-{uuid.uuid4().hex[:8]}"


def current_trace_id() -> str | None:
    return (_trace_id_var.get() or "").strip() or None


@contextmanager
def bind_trace_id(trace_id: str | None = None) -> Iterator[str]:
    """Tag every log line and support event emitted inside the block with one id."""
    bound = (trace_id or "").strip() or create_trace_id()
    token = _trace_id_var.set(bound)
    try:
        yield bound
    finally:
        _trace_id_var.reset(token)


def is_sensitive_key(key: object) -> bool:
    name = str(key).strip().lower().replace("-", "_")
    if name in PERSONAL_FIELDS:
        return True
    return any(marker in name for marker in _CREDENTIAL_MARKERS)


def redact_text(value: str) -> str:
    text = _EMAIL_RE.sub(REDACTED_EMAIL, str(value or ""))
    text = _BEARER_RE.sub(f"Bearer {REDACTED}", text)
    return _CREDENTIAL_PAIR_RE.sub(lambda m: f"{m.group(1)}={REDACTED}", text)


def redact_value(value: Any, depth: int = 0) -> Any:
    """Return a JSON-safe copy of ``value`` with sensitive content masked."""
    if depth >= _MAX_DEPTH:
        return "<max-depth>"
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {
            str(key): REDACTED if is_sensitive_key(key) else redact_value(item, depth + 1)
            for key, item in value.items()
        }
    if isinstance(value, (set, frozenset)):
        value = sorted(value, key=str)
    if isinstance(value, (list, tuple)):
        return [redact_value(item, depth + 1) for item in value]
    return redact_text(str(value))


class TraceIdLogFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = current_trace_id() or "-"
        return True


@dataclass(frozen=True)
class SupportEvent:
    event_type: str
    message: str
    trace_id: str
    level: str = "INFO"
    timestamp_utc: str = ""
    app_version: str = ""
    data: Mapping[str, Any] = field(default_factory=dict)

    def to_json(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=True, sort_keys=True)

    @classmethod
    def from_json(cls, line: str) -> "SupportEvent":
        payload = json.loads(line)
        if not isinstance(payload, dict):
            raise ValueError("support event line is not a JSON object")
        return cls(
            event_type=str(payload.get("event_type", "")),
            message=str(payload.get("message", "")),
            trace_id=str(payload.get("trace_id", "")),
            level=str(payload.get("level", "INFO")),
            timestamp_utc=str(payload.get("timestamp_utc", "")),
            app_version=str(payload.get("app_version", "")),
            data=payload.get("data") or {},
        )


class OperationalSupport:
    """Append-only support event log; usable as ErrorHandler's event sink."""

    def __init__(self, events_path: str | Path | None = None) -> None:
        self._events_path = Path(events_path) if events_path else logs_dir() / "support-events.jsonl"
        self._events_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = Lock()

    @property
    def events_path(self) -> Path:
        return self._events_path

    def emit_event(
        self,
        *,
        event_type: str,
        message: str,
        level: str = "INFO",
        trace_id: str | None = None,
        data: Mapping[str, Any] | None = None,
    ) -> str:
        event = SupportEvent(
            event_type=event_type.strip() or "support.event",
            message=redact_text(message),
            trace_id=(trace_id or current_trace_id() or create_trace_id()).strip(),
            level=level.strip().upper() or "INFO",
            timestamp_utc=datetime.now(timezone.utc).isoformat(),
            app_version=get_app_version(),
            data=redact_value(dict(data or {})),
        )
        with self._lock:
            with self._events_path.open("a", encoding="utf-8") as handle:
                handle.write(event.to_json() + "\n")
        return event.trace_id

    def read_events(self, *, trace_id: str | None = None) -> list[SupportEvent]:
        if not self._events_path.exists():
            return []
        events: list[SupportEvent] = []
        with self._events_path.open(encoding="utf-8", errors="replace") as handle:
            for number, line in enumerate(handle, start=1):
                if not line.strip():
                    continue
                try:
                    event = SupportEvent.from_json(line)
                except ValueError:
                    logger.warning("Skipping malformed support event at %s:%d", self._events_path, number)
                    continue
                if trace_id and event.trace_id != trace_id.strip():
                    continue
                events.append(event)
        return events


_support: OperationalSupport | None = None


def get_operational_support() -> OperationalSupport:
    global _support
    if _support is None:
        _support = OperationalSupport()
    return _support


__all__ = [
    "OperationalSupport",
    "PERSONAL_FIELDS",
    "REDACTED",
    "REDACTED_EMAIL",
    "SupportEvent",
    "TraceIdLogFilter",
    "bind_trace_id",
    "create_trace_id",
    "current_trace_id",
    "get_operational_support",
    "is_sensitive_key",
    "redact_text",
    "redact_value",
]
