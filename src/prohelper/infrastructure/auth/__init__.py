"""Authentication infrastructure."""

from prohelper.infrastructure.auth.credential_provider import (
    CredentialProvider,
    FileCredentialProvider,
    StaticCredentialProvider,
)

__all__ = [
    "CredentialProvider",
    "FileCredentialProvider",
    "StaticCredentialProvider",
]
