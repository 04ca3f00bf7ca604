"""US postal code normalization."""

from __future__ import annotations

import re
from typing import Any

from zipsalestax.core.exceptions import InvalidInput

# ASCII only: \D would let other scripts' digits through
_NON_DIGITS = re.compile(r"[^0-9]+")


def normalize_zip(postcode: Any) -> str:
    """Reduce a raw postcode to its 5-digit ZIP.

    Every non-digit is stripped and anything past the fifth digit (a ZIP+4
    extension) is dropped, so ``"78641-1234"`` becomes ``"78641"``.

    Raises:
        InvalidInput: fewer than 5 digits remain.
    """
    raw = "" if postcode is None else str(postcode)
    digits = _NON_DIGITS.sub("", raw)
    if len(digits) < 5:
        raise InvalidInput(raw)
    return digits[:5]
