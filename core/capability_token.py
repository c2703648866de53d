# core/capability_token.py
import base64
import hashlib
import logging
from typing import Optional
from cryptography.fernet import Fernet, InvalidToken

logger = logging.getLogger(__name__)


def derive_key(secret: str) -> bytes:
    """Stretch an arbitrary secret string into a Fernet key (32 bytes, urlsafe b64)."""
    digest = hashlib.sha256(secret.encode("utf-8")).digest()
    return base64.urlsafe_b64encode(digest)


class CapabilityTokenService:
    """
    Stateless issue/validate of bearer tokens for namespaces.

    A token is the namespace id encrypted under the process secret. It is
    reversible encryption, not a signature: anyone holding the secret can mint
    a token for any id offline. No expiry, no revocation, no per-holder
    distinction. Every token that decrypts to the id is equally authoritative.
    """

    def __init__(self, secret: str) -> None:
        if not secret:
            raise ValueError("secret must be non-empty")
        self._fernet = Fernet(derive_key(secret))

    def issue(self, identifier: str) -> str:
        # Fernet draws a fresh IV per call: same id, different token each time
        return self._fernet.encrypt(identifier.encode("utf-8")).decode("ascii")

    def validate(self, token: Optional[str], identifier: str) -> bool:
        if not token:
            return False
        try:
            plaintext = self._fernet.decrypt(token)
        except (InvalidToken, ValueError, TypeError):
            logger.debug("token.decrypt.rejected")
            return False
        try:
            return plaintext.decode("utf-8") == identifier
        except UnicodeDecodeError:
            return False
