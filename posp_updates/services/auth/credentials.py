# posp_updates/services/auth/credentials.py
import base64
import hashlib
import logging
import os
import secrets
from typing import Dict, Optional, Protocol

import bcrypt

logger = logging.getLogger(__name__)

BCRYPT_PREFIXES = ("$2y$", "$2b$", "$2a$")
SHA_PREFIX = "{SHA}"


class CredentialVerifier(Protocol):
    """Checks operator credentials for the protected endpoints"""

    def verify(self, username: str, password: str) -> bool:
        ...


def hash_password(password: str) -> str:
    """bcrypt hash in the form written to the htpasswd file"""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("ascii")


def check_password(password: str, hashed: str) -> bool:
    """Compare a password against one htpasswd hash"""
    if hashed.startswith(BCRYPT_PREFIXES):
        # $2y$ is Apache's name for $2b$
        normalized = "$2b$" + hashed[4:]
        try:
            return bcrypt.checkpw(password.encode("utf-8"), normalized.encode("ascii"))
        except ValueError:
            return False
    if hashed.startswith(SHA_PREFIX):
        digest = base64.b64encode(hashlib.sha1(password.encode("utf-8")).digest()).decode("ascii")
        return secrets.compare_digest(digest, hashed[len(SHA_PREFIX):])
    if hashed.startswith("$"):
        # $apr1$, crypt(3) variants
        return False
    return secrets.compare_digest(password.encode("utf-8"), hashed.encode("utf-8"))


class HtpasswdVerifier:
    """
    Credentials from an Apache style htpasswd file.

    One `username:hash` entry per line. bcrypt, {SHA} and plain text
    entries are understood; other schemes never verify.
    """

    def __init__(self, entries: Dict[str, str]):
        self.entries = entries

    @classmethod
    def from_file(cls, path: str) -> "HtpasswdVerifier":
        entries: Dict[str, str] = {}
        with open(path, "r", encoding="utf-8") as f:
            for lineno, line in enumerate(f, start=1):
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                username, sep, hashed = line.partition(":")
                if not sep or not username:
                    logger.warning(f"Skipping malformed line {lineno} in {path}")
                    continue
                if hashed.startswith("$") and not hashed.startswith(BCRYPT_PREFIXES):
                    logger.warning(f"Unsupported password hash for user '{username}' in {path}")
                entries[username] = hashed

        logger.info(f"Loaded {len(entries)} credential(s) from {path}")
        return cls(entries)

    def verify(self, username: str, password: str) -> bool:
        hashed = self.entries.get(username)
        if hashed is None:
            return False
        return check_password(password, hashed)


class StaticCredentialVerifier:
    """Credentials from an in-memory username -> password map"""

    def __init__(self, users: Dict[str, str]):
        self.users = users

    def verify(self, username: str, password: str) -> bool:
        expected = self.users.get(username)
        if expected is None:
            return False
        return secrets.compare_digest(password.encode("utf-8"), expected.encode("utf-8"))


def build_verifier(settings) -> CredentialVerifier:
    """Pick the credential source configured in settings"""
    if settings.HTPASSWD_FILE and os.path.exists(settings.HTPASSWD_FILE):
        return HtpasswdVerifier.from_file(settings.HTPASSWD_FILE)

    if settings.ADMIN_USER and settings.ADMIN_PASS:
        logger.info("Using ADMIN_USER/ADMIN_PASS credentials")
        return StaticCredentialVerifier({settings.ADMIN_USER: settings.ADMIN_PASS})

    logger.warning(
        f"Credential file {settings.HTPASSWD_FILE} not found and ADMIN_USER/ADMIN_PASS not set; "
        "protected endpoints will reject every request"
    )
    return StaticCredentialVerifier({})


def add_htpasswd_user(path: str, username: str, password: str, hashed: Optional[str] = None) -> None:
    """Add a user to the htpasswd file, replacing an existing entry"""
    if not username or ":" in username:
        raise ValueError(f"Invalid username: {username!r}")

    entry = f"{username}:{hashed or hash_password(password)}"
    lines = []
    replaced = False
    if os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            for line in f.read().splitlines():
                if line.partition(":")[0] == username:
                    lines.append(entry)
                    replaced = True
                else:
                    lines.append(line)
    if not replaced:
        lines.append(entry)

    with open(path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")
    logger.info(f"{'Updated' if replaced else 'Added'} user '{username}' in {path}")
