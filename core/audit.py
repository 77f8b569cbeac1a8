"""
Audit Logging Module
====================

Every grant, revoke and access request produces exactly one audit line.
AccessManager hands each operation to an AccessLogger as an AccessEvent;
sinks that only care about text implement log(message), sinks that store
structured fields override record(event).

Sinks:
- ConsoleAccessLogger: "[timestamp] message" lines on standard output
- MemoryAccessLogger: in-process trail, handy for tests and reports
- CompositeAccessLogger: fan-out to several sinks
- SqlAuditLogger: stored trail with query and reporting capabilities
"""

import csv
import io
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional, Tuple

from rich.console import Console
from sqlalchemy import desc
from sqlalchemy.orm import Session

from models.entities import AuditAction, AuditEvent, Facility, Person


@dataclass(frozen=True)
class AccessEvent:
    """
    A single auditable operation.

    Only identities and display labels are captured, never the person or
    facility objects themselves.
    """
    action: AuditAction
    person_id: str
    person_description: str
    facility_id: str
    facility_name: str
    result: Optional[bool] = None

    @classmethod
    def of(
        cls,
        action: AuditAction,
        person: Person,
        facility: Facility,
        result: Optional[bool] = None
    ) -> "AccessEvent":
        return cls(
            action=action,
            person_id=person.id,
            person_description=person.describe(),
            facility_id=facility.id,
            facility_name=facility.name,
            result=result
        )

    @property
    def message(self) -> str:
        if self.action == AuditAction.GRANT:
            return f"Access granted to {self.person_description} for {self.facility_name}"
        if self.action == AuditAction.REVOKE:
            return f"Access revoked from {self.person_description} for {self.facility_name}"
        return (
            f"Access request: {self.person_description} -> {self.facility_name}"
            f" = {format_result(self.result)}"
        )


def format_result(result: Optional[bool]) -> str:
    """Render a decision the way audit lines spell it: true / false."""
    return str(bool(result)).lower()


class MonotonicClock:
    """
    Wall-clock timestamps that never step backwards within a run.

    If the source clock is adjusted backwards, the previous timestamp is
    repeated until the source catches up.
    """

    def __init__(self, source: Callable[[], datetime] = datetime.now):
        self._source = source
        self._last: Optional[datetime] = None

    def now(self) -> datetime:
        current = self._source()
        if self._last is not None and current < self._last:
            current = self._last
        self._last = current
        return current


class AccessLogger(ABC):
    """Sink for audit lines."""

    @abstractmethod
    def log(self, message: str) -> None:
        """Write one complete audit line."""

    def record(self, event: AccessEvent) -> None:
        self.log(event.message)


class ConsoleAccessLogger(AccessLogger):
    """
    Writes "[timestamp] message" to standard output.

    Output goes through a rich Console with markup, highlighting and
    wrapping disabled so names containing brackets or long descriptions
    come out verbatim on a single line.
    """

    def __init__(self, console: Optional[Console] = None, clock: Optional[MonotonicClock] = None):
        self.console = console or Console(highlight=False, markup=False, emoji=False, soft_wrap=True)
        self.clock = clock or MonotonicClock()

    def log(self, message: str) -> None:
        self.console.print(f"[{self.clock.now().isoformat()}] {message}")


class MemoryAccessLogger(AccessLogger):
    """Keeps (timestamp, message) entries in call order."""

    def __init__(self, clock: Optional[MonotonicClock] = None):
        self.clock = clock or MonotonicClock()
        self.entries: List[Tuple[datetime, str]] = []
        self.events: List[AccessEvent] = []

    def log(self, message: str) -> None:
        self.entries.append((self.clock.now(), message))

    def record(self, event: AccessEvent) -> None:
        self.events.append(event)
        super().record(event)

    @property
    def messages(self) -> List[str]:
        return [message for _, message in self.entries]

    def clear(self):
        self.entries.clear()
        self.events.clear()


class CompositeAccessLogger(AccessLogger):
    """Forwards every line to each wrapped sink, in order."""

    def __init__(self, *loggers: AccessLogger):
        self.loggers = list(loggers)

    def log(self, message: str) -> None:
        for logger in self.loggers:
            logger.log(message)

    def record(self, event: AccessEvent) -> None:
        for logger in self.loggers:
            logger.record(event)


class SqlAuditLogger(AccessLogger):
    """
    Audit sink backed by the audit_events table.

    Provides:
    - Storage of every grant, revoke and request
    - Query capabilities for investigating who went where
    - Statistics over decisions
    - Export to JSON or CSV
    """

    def __init__(self, session: Session, clock: Optional[MonotonicClock] = None):
        """
        Initialize the SQL sink.

        Args:
            session: SQLAlchemy session for database operations
            clock: Timestamp source, defaults to a fresh monotonic clock
        """
        self.session = session
        self.clock = clock or MonotonicClock()

    def log(self, message: str) -> None:
        self.session.add(AuditEvent(timestamp=self.clock.now(), message=message))
        self.session.flush()

    def record(self, event: AccessEvent) -> None:
        self.session.add(AuditEvent(
            timestamp=self.clock.now(),
            action=event.action,
            person_id=event.person_id,
            person_description=event.person_description,
            facility_id=event.facility_id,
            facility_name=event.facility_name,
            result=event.result,
            message=event.message
        ))
        self.session.flush()

    def get_events(
        self,
        person_id: Optional[str] = None,
        facility_id: Optional[str] = None,
        action: Optional[AuditAction] = None,
        result: Optional[bool] = None,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
        limit: int = 100,
        offset: int = 0
    ) -> List[AuditEvent]:
        """
        Query stored events, newest first.

        Args:
            person_id: Filter by person
            facility_id: Filter by facility
            action: Filter by GRANT / REVOKE / REQUEST
            result: Filter by request outcome
            start_time: Only events at or after this time
            end_time: Only events at or before this time
            limit: Maximum results to return
            offset: Pagination offset

        Returns:
            List of matching AuditEvent rows
        """
        query = self.session.query(AuditEvent)

        if person_id is not None:
            query = query.filter(AuditEvent.person_id == person_id)
        if facility_id is not None:
            query = query.filter(AuditEvent.facility_id == facility_id)
        if action is not None:
            query = query.filter(AuditEvent.action == action)
        if result is not None:
            query = query.filter(AuditEvent.result == result)
        if start_time is not None:
            query = query.filter(AuditEvent.timestamp >= start_time)
        if end_time is not None:
            query = query.filter(AuditEvent.timestamp <= end_time)

        return query.order_by(desc(AuditEvent.timestamp), desc(AuditEvent.id)).limit(limit).offset(offset).all()

    def get_recent_denials(self, hours: int = 24, limit: int = 50) -> List[AuditEvent]:
        """Denied requests within the look-back window, newest first."""
        cutoff = datetime.now() - timedelta(hours=hours)
        return self.session.query(AuditEvent).filter(
            AuditEvent.action == AuditAction.REQUEST,
            AuditEvent.result == False,  # noqa: E712
            AuditEvent.timestamp >= cutoff
        ).order_by(desc(AuditEvent.timestamp), desc(AuditEvent.id)).limit(limit).all()

    def get_person_activity(self, person_id: str, hours: int = 24) -> Dict[str, Any]:
        """
        Summarize what one person asked for and what they were given.

        Args:
            person_id: Person to analyze
            hours: Look back period

        Returns:
            Activity summary dictionary
        """
        cutoff = datetime.now() - timedelta(hours=hours)
        events = self.session.query(AuditEvent).filter(
            AuditEvent.person_id == person_id,
            AuditEvent.timestamp >= cutoff
        ).all()

        requests = [e for e in events if e.action == AuditAction.REQUEST]
        permits = sum(1 for e in requests if e.result)

        facilities = {}
        for event in requests:
            if event.facility_name:
                facilities[event.facility_name] = facilities.get(event.facility_name, 0) + 1

        return {
            'person_id': person_id,
            'period_hours': hours,
            'total_requests': len(requests),
            'permits': permits,
            'denials': len(requests) - permits,
            'grants': sum(1 for e in events if e.action == AuditAction.GRANT),
            'revokes': sum(1 for e in events if e.action == AuditAction.REVOKE),
            'facilities_requested': facilities,
            'first_activity': min(e.timestamp for e in events).isoformat() if events else None,
            'last_activity': max(e.timestamp for e in events).isoformat() if events else None
        }

    def export_events(
        self,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
        format: str = 'json'
    ) -> str:
        """
        Export the stored trail.

        Args:
            start_time: Export start time
            end_time: Export end time
            format: Output format ('json' or 'csv')

        Returns:
            Formatted event data as string
        """
        events = self.get_events(start_time=start_time, end_time=end_time, limit=10000)

        if format == 'json':
            return json.dumps([
                {
                    'timestamp': event.timestamp.isoformat(),
                    'action': event.action.value if event.action else None,
                    'person_id': event.person_id,
                    'person': event.person_description,
                    'facility_id': event.facility_id,
                    'facility': event.facility_name,
                    'result': event.result,
                    'message': event.message
                }
                for event in events
            ], indent=2)

        elif format == 'csv':
            buffer = io.StringIO()
            writer = csv.writer(buffer, lineterminator='\n')
            writer.writerow(['timestamp', 'action', 'person_id', 'facility_id', 'facility', 'result'])
            for event in events:
                writer.writerow([
                    event.timestamp.isoformat(),
                    event.action.value if event.action else '',
                    event.person_id or '',
                    event.facility_id or '',
                    event.facility_name or '',
                    '' if event.result is None else format_result(event.result)
                ])
            return buffer.getvalue()

        else:
            raise ValueError(f"Unsupported format: {format}")

    def get_statistics(self, hours: int = 24) -> Dict[str, Any]:
        """
        Overall figures for the audit trail.

        Args:
            hours: Analysis period

        Returns:
            Statistics dictionary
        """
        cutoff = datetime.now() - timedelta(hours=hours)
        events = self.session.query(AuditEvent).filter(
            AuditEvent.timestamp >= cutoff
        ).all()

        requests = [e for e in events if e.action == AuditAction.REQUEST]
        total = len(requests)
        permits = sum(1 for e in requests if e.result)
        denials = total - permits

        return {
            'period_hours': hours,
            'total_events': len(events),
            'total_requests': total,
            'grants': sum(1 for e in events if e.action == AuditAction.GRANT),
            'revokes': sum(1 for e in events if e.action == AuditAction.REVOKE),
            'permits': permits,
            'denials': denials,
            'permit_rate': permits / total if total > 0 else 0,
            'denial_rate': denials / total if total > 0 else 0,
            'unique_persons': len(set(e.person_id for e in events if e.person_id)),
            'unique_facilities': len(set(e.facility_id for e in events if e.facility_id))
        }
