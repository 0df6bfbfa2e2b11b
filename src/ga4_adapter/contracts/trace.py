"""Per-query tracing for debugging and auditability."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass
class TraceEvent:
    """Single event in a query trace."""
    timestamp: str
    event_type: str  # e.g., "predicate_parsed", "report_requested", "rows_mapped"
    data: dict[str, Any]

    @classmethod
    def now(cls, event_type: str, **data) -> TraceEvent:
        """Create event with current timestamp."""
        return cls(
            timestamp=datetime.now(timezone.utc).isoformat(),
            event_type=event_type,
            data=data
        )


@dataclass
class QueryTrace:
    """Complete trace for one translated query."""
    query_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    property_path: str = ""
    predicate: str = ""
    events: list[TraceEvent] = field(default_factory=list)

    def add_event(self, event_type: str, **data) -> None:
        """Add event to trace."""
        self.events.append(TraceEvent.now(event_type, **data))

    @property
    def event_types(self) -> list[str]:
        return [e.event_type for e in self.events]

    def to_dict(self) -> dict:
        """Convert to dictionary for logging."""
        return {
            "query_id": self.query_id,
            "property": self.property_path,
            "predicate": self.predicate,
            "events": [
                {
                    "timestamp": e.timestamp,
                    "type": e.event_type,
                    "data": e.data
                }
                for e in self.events
            ]
        }

    def print_summary(self) -> None:
        """Print human-readable trace summary."""
        print(f"\n{'='*80}")
        print(f"TRACE: {self.query_id}")
        print(f"Property: {self.property_path or '-'}")
        print(f"Predicate: {self.predicate or '(none)'}")
        print(f"{'-'*80}")
        for event in self.events:
            print(f"[{event.timestamp}] {event.event_type}")
            for key, value in event.data.items():
                print(f"  {key}: {value}")
        print(f"{'='*80}\n")
