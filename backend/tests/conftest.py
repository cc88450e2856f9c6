import pytest

from planner.services.audit_trail import AuditTrail


@pytest.fixture(autouse=True)
def _reset_audit_trail():
    """Each test starts with an empty audit trail."""
    AuditTrail.reset()
    yield
    AuditTrail.reset()
