"""Application export – friendly column labels synthesised from field names."""
from __future__ import annotations

import re

__all__ = ["friendly_name"]

_UPPER_RUN = re.compile(r"([A-Z]+)")
_WORD_START = re.compile(r"([A-Z][a-z])")
_SPACES = re.compile(r"  +")


def friendly_name(field: str) -> str:
    """Turn a raw field identifier into a human readable label.

    Handles snake_case, camelCase, PascalCase and mixtures of them::

        this_is_a_test  -> This Is A Test
        thisIsATest     -> This Is A Test
        this_isATest    -> This Is A Test
        CheckUPSDate    -> Check UPS Date
        check_UPS_date  -> Check UPS Date

    Acronym runs are kept together; the last capital of a run followed by a
    lowercase letter starts the next word.
    """
    joined = "".join(
        (bit[:1].upper() + bit[1:]).strip()
        for bit in (part.strip() for part in field.split("_"))
    )
    label = joined[:1].upper() + joined[1:]
    label = _UPPER_RUN.sub(r" \1", label)
    label = _WORD_START.sub(r" \1", label)
    return _SPACES.sub(" ", label).strip()
