import secrets
import time
from datetime import UTC, datetime

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def utc_now() -> datetime:
    """Naive UTC timestamp, matching what the DateTime columns store"""
    return datetime.now(UTC).replace(tzinfo=None)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _to_base36(number: int) -> str:
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits)) or "0"


def generate_tenant_id() -> str:
    """Millisecond timestamp in base36 plus 8 random characters"""
    return f"{_to_base36(int(time.time() * 1000))}-{secrets.token_hex(4)}"
