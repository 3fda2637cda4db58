"""
Seed a resource server and a client from environment for local development.
No hardcoded credentials: key/secret are generated, the client secret comes from env.
Set ADMIN_SEED_OWNER + ADMIN_SEED_RESOURCE_SERVER (+ ADMIN_SEED_SCOPES), and optionally
ADMIN_SEED_CLIENT_ID (+ ADMIN_SEED_CLIENT_SCOPES, ADMIN_SEED_CLIENT_SECRET, ADMIN_SEED_REDIRECT_URIS).
"""
import json
import logging
import os

import bcrypt
from sqlalchemy.orm import Session

from admin_server.credentials import CredentialGenerator
from admin_server.models import Client, ResourceServer
from admin_server.scopes import normalize_scopes

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    # Bcrypt has a 72-byte limit
    raw = password.encode("utf-8")
    if len(raw) > 72:
        raw = raw[:72]
    return bcrypt.hashpw(raw, bcrypt.gensalt()).decode("utf-8")


def _split(value: str | None) -> list[str]:
    if not value:
        return []
    return [v.strip() for v in value.split(",") if v.strip()]


def seed_from_env(db: Session, credentials: CredentialGenerator | None = None) -> None:
    """
    Create one resource server and/or one client from env if set and not yet present.
    Seeded scopes go through the same checks as API input; a bad scope raises ValueError.
    """
    owner = os.environ.get("ADMIN_SEED_OWNER")
    rs_name = os.environ.get("ADMIN_SEED_RESOURCE_SERVER")
    if not owner or not rs_name:
        return

    rs = (
        db.query(ResourceServer)
        .filter(ResourceServer.owner == owner, ResourceServer.name == rs_name)
        .first()
    )
    if rs is None:
        credentials = credentials or CredentialGenerator()
        rs = ResourceServer(
            name=rs_name,
            owner=owner,
            key=credentials.generate_key(),
            secret=credentials.generate_secret(),
        )
        rs.set_scopes_list(normalize_scopes(_split(os.environ.get("ADMIN_SEED_SCOPES"))))
        db.add(rs)
        db.commit()
        logger.info("Seeded resource server: %s (owner=%s)", rs_name, owner)
    else:
        logger.debug("Resource server already exists: %s", rs_name)

    client_id = os.environ.get("ADMIN_SEED_CLIENT_ID")
    if not client_id:
        return
    if db.query(Client).filter(Client.client_id == client_id).first() is not None:
        logger.debug("Client already exists: %s", client_id)
        return

    # Clients may only hold scopes their resource server offers
    offered = set(rs.get_scopes_list())
    client_scopes = [s for s in normalize_scopes(_split(os.environ.get("ADMIN_SEED_CLIENT_SCOPES"))) if s in offered]
    client_secret = os.environ.get("ADMIN_SEED_CLIENT_SECRET")
    secret_hash = hash_password(client_secret) if client_secret else None
    client = Client(
        client_id=client_id,
        resource_server_id=rs.id,
        redirect_uris=json.dumps(_split(os.environ.get("ADMIN_SEED_REDIRECT_URIS"))),
        client_secret_hash=secret_hash,
    )
    client.set_scopes_list(client_scopes)
    db.add(client)
    db.commit()
    logger.info("Seeded client: %s (confidential=%s)", client_id, bool(secret_hash))
