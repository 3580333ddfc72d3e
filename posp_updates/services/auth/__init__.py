# Access guard
from .credentials import (
    CredentialVerifier,
    HtpasswdVerifier,
    StaticCredentialVerifier,
    add_htpasswd_user,
    build_verifier,
    check_password,
    hash_password
)
from .guard import get_credential_verifier, require_operator

__all__ = [
    "CredentialVerifier",
    "HtpasswdVerifier",
    "StaticCredentialVerifier",
    "add_htpasswd_user",
    "build_verifier",
    "check_password",
    "hash_password",
    "get_credential_verifier",
    "require_operator"
]
