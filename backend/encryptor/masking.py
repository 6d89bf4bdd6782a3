# encryptor/masking.py
from typing import Any, Dict

SENSITIVE_KEYS = {
    'password', 'secret', 'key', 'token',
    'api_key', 'apikey', 'auth', 'credential'
}
REDACTED = "********"

def mask_sensitive_values(data: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively redact sensitive values in dictionaries.

    Unlike a partial mask, nothing of the original value survives: no prefix,
    no suffix, not even its length. Hex key material loses too much entropy
    from a few leaked characters.
    """
    masked = {}
    for k, v in data.items():
        if isinstance(v, dict):
            masked[k] = mask_sensitive_values(v)
        elif any(sens in k.lower() for sens in SENSITIVE_KEYS):
            masked[k] = REDACTED if v else None
        else:
            masked[k] = v
    return masked
