"""
Resource server management: CRUD scoped by owner, with key/secret/owner write-once
and client scopes kept within the resource server's scopes.

Each operation is one transaction on the session it was given; any failure rolls
back everything, including scopes already pruned from clients.
"""
import logging

from sqlalchemy.orm import Session

from admin_server.audit import (
    EVENT_CLIENT_SCOPES_PRUNED,
    EVENT_RESOURCE_SERVER_CREATED,
    EVENT_RESOURCE_SERVER_DELETED,
    EVENT_RESOURCE_SERVER_UPDATED,
    log_audit,
)
from admin_server.credentials import CredentialGenerator
from admin_server.database import transaction
from admin_server.errors import ConflictError, NotFoundError
from admin_server.models import Client, ResourceServer
from admin_server.schemas import ResourceServerDraft
from admin_server.scopes import prune_client_scopes
from admin_server.stores import ClientStore, ResourceServerStore

logger = logging.getLogger(__name__)


def _apply_draft(resource_server: ResourceServer, draft: ResourceServerDraft) -> None:
    """Copy the replaceable fields. key, secret and owner are never touched here."""
    resource_server.name = draft.name
    resource_server.description = draft.description
    resource_server.contact_name = draft.contact_name
    resource_server.contact_email = draft.contact_email
    resource_server.thumbnail_url = draft.thumbnail_url
    resource_server.set_scopes_list(draft.scopes)


class ResourceServerManager:
    def __init__(self, db: Session, credentials: CredentialGenerator | None = None):
        self.db = db
        self.credentials = credentials or CredentialGenerator()
        self.resource_servers = ResourceServerStore(db)
        self.clients = ClientStore(db)

    def _require(self, resource_server_id: int, owner: str) -> ResourceServer:
        resource_server = self.resource_servers.find_by_id_and_owner(resource_server_id, owner)
        if resource_server is None:
            raise NotFoundError()
        return resource_server

    def list_by_owner(self, owner: str) -> list[ResourceServer]:
        with transaction(self.db):
            resource_servers = self.resource_servers.find_by_owner(owner)
        logger.debug("About to return all resource servers (%d) for owner %s", len(resource_servers), owner)
        return resource_servers

    def get_by_id_and_owner(self, resource_server_id: int, owner: str) -> ResourceServer:
        with transaction(self.db):
            resource_server = self._require(resource_server_id, owner)
        logger.debug("About to return resource server %s", resource_server_id)
        return resource_server

    def list_clients(self, resource_server_id: int, owner: str) -> list[Client]:
        with transaction(self.db):
            resource_server = self._require(resource_server_id, owner)
            clients = self.clients.find_by_resource_server(resource_server.id)
        return clients

    def create(self, owner: str, draft: ResourceServerDraft) -> ResourceServer:
        """Save a new resource server owned by owner with freshly generated key and secret."""
        with transaction(self.db):
            resource_server = ResourceServer(
                key=self.credentials.generate_key(),
                secret=self.credentials.generate_secret(),
                owner=owner,
            )
            _apply_draft(resource_server, draft)
            saved = self.resource_servers.save(resource_server)
            log_audit(self.db, EVENT_RESOURCE_SERVER_CREATED, owner=owner, resource_server_id=saved.id)
            total = self.resource_servers.count()
        logger.info("New resource server has been saved: %s. Nr of entities in store now: %d", saved.id, total)
        return saved

    def update(self, owner: str, resource_server_id: int, draft: ResourceServerDraft) -> ResourceServer:
        """
        Replace the editable fields of an owned resource server.
        Scopes it no longer offers are removed from its clients in the same transaction.
        """
        with transaction(self.db):
            persisted = self._require(resource_server_id, owner)
            if draft.version is not None and draft.version != persisted.version:
                raise ConflictError(
                    f"Resource server is at version {persisted.version}, update was based on {draft.version}"
                )

            old_scopes = persisted.get_scopes_list()
            clients = self.clients.find_by_resource_server(persisted.id)
            for client in prune_client_scopes(draft.scopes, old_scopes, clients):
                self.clients.save(client)
                log_audit(
                    self.db,
                    EVENT_CLIENT_SCOPES_PRUNED,
                    owner=owner,
                    resource_server_id=persisted.id,
                    client_id=client.client_id,
                )

            logger.debug("About to update existing resource server %s", persisted.id)
            _apply_draft(persisted, draft)
            saved = self.resource_servers.save(persisted)
            log_audit(self.db, EVENT_RESOURCE_SERVER_UPDATED, owner=owner, resource_server_id=saved.id)
        return saved

    def delete(self, resource_server_id: int, owner: str) -> None:
        """Delete an owned resource server; its clients go with it."""
        with transaction(self.db):
            resource_server = self._require(resource_server_id, owner)
            logger.debug("About to delete resource server %s", resource_server_id)
            self.resource_servers.delete(resource_server)
            log_audit(self.db, EVENT_RESOURCE_SERVER_DELETED, owner=owner, resource_server_id=resource_server_id)
