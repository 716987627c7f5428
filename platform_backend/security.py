"""
Input validation and log-sanitization helpers shared by the request models and handlers.
"""
import re


# ============================================================================
# EMAIL VALIDATION
# ============================================================================

EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')


def is_valid_email(email: str, max_length: int = 254) -> bool:
    """
    Validate email address format and length.

    Args:
        email: Email string to validate
        max_length: Maximum allowed email length (RFC 5321 = 254)

    Returns:
        bool: True if valid, False otherwise
    """
    if not isinstance(email, str) or not email:
        return False

    if len(email) > max_length:
        return False

    # Basic RFC 5322 pattern (simplified for common cases)
    return EMAIL_PATTERN.match(email) is not None


# ============================================================================
# LOGGING HELPERS
# ============================================================================

SENSITIVE_KEYS = ['password', 'token', 'api_key', 'secret']


def sanitize_for_logging(data: dict, sensitive_keys: list = None, max_value_length: int = 120) -> dict:
    """
    Sanitize a request body before logging.
    Masks secret-like fields and truncates long values such as inline
    base64 images, receipts and ad files.

    Args:
        data: Dictionary to sanitize
        sensitive_keys: List of keys to redact (default: common secret fields)
        max_value_length: Strings longer than this are cut

    Returns:
        Sanitized dictionary
    """
    if not isinstance(data, dict):
        return {}

    if sensitive_keys is None:
        sensitive_keys = SENSITIVE_KEYS

    sanitized = {}
    for key, value in data.items():
        if any(sensitive_key.lower() in str(key).lower() for sensitive_key in sensitive_keys):
            sanitized[key] = '***REDACTED***'
        elif isinstance(value, str) and len(value) > max_value_length:
            sanitized[key] = f"{value[:max_value_length]}... ({len(value)} chars)"
        else:
            sanitized[key] = value

    return sanitized
