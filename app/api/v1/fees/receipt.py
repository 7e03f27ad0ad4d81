"""
Fee receipt numbers.
Format: REC + last 6 digits of the millisecond timestamp + 3 random uppercase alphanumerics.
"""

import secrets
import string
import time
from typing import Optional


RECEIPT_PREFIX = "REC"


def generate_receipt_number(now_ms: Optional[int] = None) -> str:
    """
    Generate a receipt number such as REC482913K7Q.

    Rules:
    - "REC" prefix.
    - Last 6 digits of the current time in milliseconds (zero padded).
    - 3 random uppercase alphanumeric (A-Z, 0-9).

    Uniqueness is checked by the caller against stored payments.
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    timestamp_part = str(now_ms)[-6:].rjust(6, "0")
    alphabet = string.ascii_uppercase + string.digits
    random_part = "".join(secrets.choice(alphabet) for _ in range(3))
    return RECEIPT_PREFIX + timestamp_part + random_part
