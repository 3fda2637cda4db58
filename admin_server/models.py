"""
SQLAlchemy models for the admin server: resource servers, their clients, audit log.
List-valued fields (scopes, redirect URIs) are stored as JSON strings.
"""
import json
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class ResourceServer(Base):
    __tablename__ = "resource_servers"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    # Generated on create, never changed afterwards
    key: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    secret: Mapped[str] = mapped_column(String(255), nullable=False)
    owner: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    contact_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    contact_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    thumbnail_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    # JSON array; the universe of scopes valid for clients of this resource server
    scopes: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    # Optimistic concurrency stamp, bumped by SQLAlchemy on every UPDATE
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utc_now)

    clients: Mapped[list["Client"]] = relationship(
        "Client",
        back_populates="resource_server",
        cascade="all, delete-orphan",
        order_by="Client.id",
    )

    __mapper_args__ = {"version_id_col": version}

    def get_scopes_list(self) -> list[str]:
        return json.loads(self.scopes or "[]")

    def set_scopes_list(self, scopes: list[str]) -> None:
        self.scopes = json.dumps(list(scopes))

    def __repr__(self) -> str:
        return f"<ResourceServer id={self.id} name={self.name!r} owner={self.owner!r}>"


class Client(Base):
    __tablename__ = "clients"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    client_id: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    resource_server_id: Mapped[int] = mapped_column(
        ForeignKey("resource_servers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # JSON array; always a subset of the parent's scopes after a parent update
    scopes: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    redirect_uris: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    # Confidential client: bcrypt hash of client_secret; None = public client
    client_secret_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utc_now)

    resource_server: Mapped["ResourceServer"] = relationship("ResourceServer", back_populates="clients")

    def get_scopes_list(self) -> list[str]:
        return json.loads(self.scopes or "[]")

    def set_scopes_list(self, scopes: list[str]) -> None:
        self.scopes = json.dumps(list(scopes))

    def get_redirect_uris_list(self) -> list[str]:
        return json.loads(self.redirect_uris or "[]")

    @property
    def is_confidential(self) -> bool:
        return self.client_secret_hash is not None and len(self.client_secret_hash) > 0

    def __repr__(self) -> str:
        return f"<Client client_id={self.client_id!r} resource_server_id={self.resource_server_id}>"


class AuditLog(Base):
    """Administrative changes to resource servers and their clients. No keys or secrets stored."""
    __tablename__ = "audit_log"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utc_now)
    event_type: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    owner: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    # No FK: history outlives deleted resource servers
    resource_server_id: Mapped[int | None] = mapped_column(nullable=True)
    client_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
