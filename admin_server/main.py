"""
Admin server for the authorization server: manages resource servers (protected APIs)
and keeps their clients' scopes consistent. Callers are authenticated upstream.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI

from admin_server.audit import router as audit_router
from admin_server.database import init_db, SessionLocal
from admin_server.errors import install_error_handlers
from admin_server.resource_servers import router as resource_servers_router
from admin_server.seed import seed_from_env


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and seed development data from env on startup."""
    init_db()
    db = SessionLocal()
    try:
        seed_from_env(db)
    finally:
        db.close()
    yield


app = FastAPI(title="Admin Server", version="0.1.0", lifespan=lifespan)
install_error_handlers(app)
app.include_router(resource_servers_router, tags=["resource-servers"])
app.include_router(audit_router)


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "ok", "service": "admin_server"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "admin_server.main:app",
        host="127.0.0.1",
        port=9001,
        reload=True,
    )
