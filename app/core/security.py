import logging
from typing import Any, Dict, Iterable
from cryptography.fernet import Fernet, InvalidToken
from app.core.config import settings

logger = logging.getLogger(__name__)

_cipher = Fernet(settings.encryption_key)

MASK = "****"

def encrypt_data(data: str) -> str:
    """Encrypt sensitive string data."""
    if not data:
        return data
    return _cipher.encrypt(data.encode()).decode()

def decrypt_data(encrypted_data: str) -> str:
    """Decrypt sensitive string data."""
    if not encrypted_data:
        return encrypted_data
    try:
        return _cipher.decrypt(encrypted_data.encode()).decode()
    except InvalidToken:
        # Rows written before encryption was enabled hold plaintext
        logger.warning("Decryption failed (possibly not encrypted)")
        return encrypted_data

def mask_value(value: str) -> str:
    """Keep the last four characters of an identifier."""
    if not value:
        return value
    return MASK + value[-4:] if len(value) > 4 else MASK

def mask_payload(payload: Dict[str, Any], sensitive: Iterable[str]) -> Dict[str, Any]:
    """Return a copy of `payload` with the named keys masked."""
    sensitive = set(sensitive)
    return {
        key: mask_value(value) if key in sensitive and isinstance(value, str) else value
        for key, value in payload.items()
    }
