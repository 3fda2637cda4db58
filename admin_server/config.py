"""
Admin server configuration. Values come from env with development defaults.
No secrets in this file; resource server credentials are generated at runtime.
"""
import os

# SQLite DB for development; any SQLAlchemy URL works
DATABASE_URL = os.environ.get("ADMIN_DATABASE_URL", "sqlite:///./admin_server.db")

# Header carrying the caller identity established by the upstream authenticator.
# Its value becomes the owner of every resource server the caller creates.
OWNER_HEADER = os.environ.get("ADMIN_OWNER_HEADER", "X-Authenticated-User")

# Random bytes per generated key/secret (token_urlsafe). Must be >= 16 (128 bits).
CREDENTIAL_TOKEN_BYTES = int(os.environ.get("ADMIN_CREDENTIAL_TOKEN_BYTES", "32"))

# Upper bound for GET /audit?limit=
AUDIT_LIST_MAX = 500

# Longest accepted scope string (matches the column size used for names)
SCOPE_MAX_LENGTH = 255
