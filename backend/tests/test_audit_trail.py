import threading
from datetime import datetime, timezone

from planner.models.projection import AuditEntry, AuditInput, ProjectionSummary
from planner.services.audit_trail import AuditTrail


def _entry(n: int) -> AuditEntry:
    now = datetime(2025, 1, 1, tzinfo=timezone.utc)
    return AuditEntry(
        month="2025-01",
        input=AuditInput(accounts=[], cashflows=[], months_to_project=n),
        summary=ProjectionSummary(
            start_net_worth=0, end_net_worth=0, total_return=0,
            average_savings_rate=0.0, months_projected=n, projection_date=now,
        ),
        timestamp=now,
        version="test",
    )


def test_singleton():
    assert AuditTrail.get() is AuditTrail.get()


def test_reset_gives_fresh_instance():
    trail = AuditTrail.get()
    trail.record(_entry(1))
    AuditTrail.reset()
    assert AuditTrail.get() is not trail
    assert len(AuditTrail.get()) == 0


def test_keeps_most_recent_entries_oldest_first():
    trail = AuditTrail(max_entries=3)
    for n in range(5):
        trail.record(_entry(n))
    assert len(trail) == 3
    assert [e.input.months_to_project for e in trail.entries()] == [2, 3, 4]


def test_default_size_from_settings():
    trail = AuditTrail()
    for n in range(105):
        trail.record(_entry(n))
    assert len(trail) == 100


def test_clear():
    trail = AuditTrail.get()
    trail.record(_entry(1))
    trail.clear()
    assert trail.entries() == []


def test_concurrent_records_all_counted():
    trail = AuditTrail(max_entries=500)
    threads = [
        threading.Thread(target=lambda: [trail.record(_entry(n)) for n in range(50)])
        for _ in range(4)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(trail) == 200
    assert len(trail.entries()) == 200
