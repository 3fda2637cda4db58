"""
Resource server administration endpoints. Every route is scoped to the caller's
owner identity; ids owned by someone else answer 404 like ids that do not exist.

POST /resourceServer creates and PUT /resourceServer/{id} updates. The older
verb mapping (PUT on the collection creates, POST on an id updates) is also
accepted for existing admin clients.
"""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.orm import Session

from admin_server.database import get_db
from admin_server.identity import get_owner
from admin_server.manager import ResourceServerManager
from admin_server.models import Client, ResourceServer
from admin_server.schemas import ResourceServerDraft

logger = logging.getLogger(__name__)
router = APIRouter()

# Store ids are signed 64-bit; anything outside is rejected as invalid input, not looked up
ResourceServerId = Annotated[int, Path(ge=1, le=2**63 - 1)]


def get_manager(db: Session = Depends(get_db)) -> ResourceServerManager:
    """Dependency: manager bound to this request's session."""
    return ResourceServerManager(db)


def resource_server_to_dict(rs: ResourceServer) -> dict:
    return {
        "id": rs.id,
        "key": rs.key,
        "secret": rs.secret,
        "owner": rs.owner,
        "name": rs.name,
        "description": rs.description,
        "contact_name": rs.contact_name,
        "contact_email": rs.contact_email,
        "thumbnail_url": rs.thumbnail_url,
        "scopes": rs.get_scopes_list(),
        "version": rs.version,
        "created_at": rs.created_at.isoformat() if rs.created_at else None,
    }


def client_to_dict(client: Client) -> dict:
    """Client view for admins. The secret hash is never returned."""
    return {
        "id": client.id,
        "client_id": client.client_id,
        "name": client.name,
        "scopes": client.get_scopes_list(),
        "redirect_uris": client.get_redirect_uris_list(),
        "confidential": client.is_confidential,
    }


@router.get("/resourceServer")
def list_resource_servers(
    owner: str = Depends(get_owner),
    manager: ResourceServerManager = Depends(get_manager),
):
    """All resource servers of the caller (possibly empty)."""
    return [resource_server_to_dict(rs) for rs in manager.list_by_owner(owner)]


@router.api_route("/resourceServer", methods=["POST", "PUT"], status_code=status.HTTP_201_CREATED)
def create_resource_server(
    draft: ResourceServerDraft,
    response: Response,
    owner: str = Depends(get_owner),
    manager: ResourceServerManager = Depends(get_manager),
):
    """Create a resource server. key, secret and owner are assigned by the server."""
    saved = manager.create(owner, draft)
    response.headers["Location"] = f"/resourceServer/{saved.id}"
    return resource_server_to_dict(saved)


@router.get("/resourceServer/{resource_server_id}")
def get_resource_server(
    resource_server_id: ResourceServerId,
    owner: str = Depends(get_owner),
    manager: ResourceServerManager = Depends(get_manager),
):
    return resource_server_to_dict(manager.get_by_id_and_owner(resource_server_id, owner))


@router.api_route("/resourceServer/{resource_server_id}", methods=["PUT", "POST"])
def update_resource_server(
    resource_server_id: ResourceServerId,
    draft: ResourceServerDraft,
    owner: str = Depends(get_owner),
    manager: ResourceServerManager = Depends(get_manager),
):
    """Full replacement of the editable fields; key, secret and owner are kept."""
    saved = manager.update(owner, resource_server_id, draft)
    return resource_server_to_dict(saved)


@router.delete("/resourceServer/{resource_server_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_resource_server(
    resource_server_id: ResourceServerId,
    owner: str = Depends(get_owner),
    manager: ResourceServerManager = Depends(get_manager),
):
    manager.delete(resource_server_id, owner)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/resourceServer/{resource_server_id}/client")
def list_resource_server_clients(
    resource_server_id: ResourceServerId,
    owner: str = Depends(get_owner),
    manager: ResourceServerManager = Depends(get_manager),
):
    """Clients registered under one of the caller's resource servers."""
    return [client_to_dict(c) for c in manager.list_clients(resource_server_id, owner)]
