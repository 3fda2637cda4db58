"""
Key/secret generation for new resource servers.
Tokens are URL-safe base64 from the OS CSPRNG, so they can go in headers and Basic auth.
"""
import secrets

from admin_server.config import CREDENTIAL_TOKEN_BYTES

# 128 bits
MIN_TOKEN_BYTES = 16


class CredentialGenerator:
    """
    Produces unguessable tokens. Uniqueness is the store's job (unique index on key);
    a collision comes back as ConflictError from the save.
    """

    def __init__(self, token_bytes: int = CREDENTIAL_TOKEN_BYTES):
        if token_bytes < MIN_TOKEN_BYTES:
            raise ValueError(f"token_bytes must be at least {MIN_TOKEN_BYTES}, got {token_bytes}")
        self.token_bytes = token_bytes

    def generate_random_token(self) -> str:
        return secrets.token_urlsafe(self.token_bytes)

    def generate_key(self) -> str:
        return self.generate_random_token()

    def generate_secret(self) -> str:
        return self.generate_random_token()
