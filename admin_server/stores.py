"""
Entity stores over a SQLAlchemy session. Writes flush immediately so store
failures surface at the call site; reads and writes alike come back already
translated into AdminError.
"""
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from admin_server.errors import translate_store_error
from admin_server.models import Client, ResourceServer


@contextmanager
def _translated():
    try:
        yield
    except SQLAlchemyError as e:
        raise translate_store_error(e) from e


def _flush(db: Session) -> None:
    with _translated():
        db.flush()


class ResourceServerStore:
    def __init__(self, db: Session):
        self.db = db

    def find_by_owner(self, owner: str) -> list[ResourceServer]:
        with _translated():
            return self.db.query(ResourceServer).filter(ResourceServer.owner == owner).order_by(ResourceServer.id).all()

    def find_by_id_and_owner(self, resource_server_id: int, owner: str) -> ResourceServer | None:
        # Both columns in one query: another owner's row looks exactly like a missing one
        with _translated():
            return (
                self.db.query(ResourceServer)
                .filter(ResourceServer.id == resource_server_id, ResourceServer.owner == owner)
                .first()
            )

    def save(self, resource_server: ResourceServer) -> ResourceServer:
        self.db.add(resource_server)
        _flush(self.db)
        return resource_server

    def delete(self, resource_server: ResourceServer) -> None:
        self.db.delete(resource_server)
        _flush(self.db)

    def count(self) -> int:
        with _translated():
            return self.db.query(ResourceServer).count()


class ClientStore:
    def __init__(self, db: Session):
        self.db = db

    def find_by_resource_server(self, resource_server_id: int) -> list[Client]:
        with _translated():
            return (
                self.db.query(Client)
                .filter(Client.resource_server_id == resource_server_id)
                .order_by(Client.id)
                .all()
            )

    def save(self, client: Client) -> Client:
        self.db.add(client)
        _flush(self.db)
        return client
