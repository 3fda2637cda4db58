"""
Audit logging for administrative changes. Records who changed which resource server;
never keys, secrets or request bodies.
Rows are added to the caller's transaction, so a rolled-back change leaves no trace.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from admin_server.config import AUDIT_LIST_MAX
from admin_server.database import get_db
from admin_server.identity import get_owner
from admin_server.models import AuditLog

EVENT_RESOURCE_SERVER_CREATED = "resource_server_created"
EVENT_RESOURCE_SERVER_UPDATED = "resource_server_updated"
EVENT_RESOURCE_SERVER_DELETED = "resource_server_deleted"
EVENT_CLIENT_SCOPES_PRUNED = "client_scopes_pruned"


def log_audit(
    db: Session,
    event_type: str,
    *,
    owner: str,
    resource_server_id: int | None = None,
    client_id: str | None = None,
) -> None:
    """Append one audit record to the current unit of work (no commit here)."""
    db.add(
        AuditLog(
            event_type=event_type,
            owner=owner,
            resource_server_id=resource_server_id,
            client_id=client_id,
        )
    )


router = APIRouter(tags=["audit"])


def _query_audit_logs(
    db: Session,
    owner: str,
    *,
    limit: int = 100,
    event_type: str | None = None,
):
    """Audit rows for one owner with optional event filter. Most recent first."""
    q = db.query(AuditLog).filter(AuditLog.owner == owner).order_by(AuditLog.id.desc())
    if event_type is not None and event_type != "":
        q = q.filter(AuditLog.event_type == event_type)
    rows = q.limit(min(max(1, limit), AUDIT_LIST_MAX)).all()
    return [
        {
            "created_at": r.created_at.isoformat() if r.created_at else None,
            "event_type": r.event_type,
            "resource_server_id": r.resource_server_id,
            "client_id": r.client_id,
        }
        for r in rows
    ]


@router.get("/audit")
def list_audit_logs(
    limit: int = 100,
    event_type: str | None = None,
    owner: str = Depends(get_owner),
    db: Session = Depends(get_db),
):
    """List the caller's own audit events, most recent first."""
    return _query_audit_logs(db, owner, limit=limit, event_type=event_type)
