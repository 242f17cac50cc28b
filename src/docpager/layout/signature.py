"""
Module: layout.signature

Purpose:
    Derive the fingerprint of a block sequence that decides whether
    pagination must be recomputed.

Key Classes:
    - SignatureMode: Which block fields take part in the signature

Key Functions:
    - sequence_signature(): Fingerprint a block sequence

Dependencies:
    - hashlib, json (std)

Used By:
    - controller: Recompute-on-change decisions
"""

from __future__ import annotations

import hashlib
import json
from enum import Enum
from typing import List, Sequence

from .models import Block


class SignatureMode(str, Enum):
    """
    NARROW: key, variant and title only. Content edits that change a
    block's height (longer text, extra rows) do not re-paginate.
    LAYOUT: NARROW plus the fingerprint of every content item.
    """

    NARROW = "narrow"
    LAYOUT = "layout"


def sequence_signature(blocks: Sequence[Block], mode: SignatureMode = SignatureMode.LAYOUT) -> str:
    """
    Fingerprint a block sequence, header markers included.

    Args:
        blocks: Full block sequence
        mode: Fields to include

    Returns:
        Hex digest; equal sequences give equal digests

    Example:
        >>> sequence_signature(blocks) == sequence_signature(list(blocks))
        True
    """
    entries: List[list] = []
    for block in blocks:
        entry = [block.key, block.variant.value, block.title]
        if mode is SignatureMode.LAYOUT:
            entry.append([item.fingerprint() for item in block.content])
        entries.append(entry)

    payload = json.dumps(entries, separators=(",", ":"))
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()
