from __future__ import annotations

import string
from dataclasses import dataclass


ALPHANUMERIC = string.ascii_lowercase + string.ascii_uppercase + string.digits


@dataclass
class GenerationConfig:
    """Size policy for bounded shapes."""

    collection_max_len: int = 8  # list/set/dict lengths drawn from [0, 8)
    string_max_len: int = 32  # string lengths drawn from [0, 32)
    string_alphabet: str = ALPHANUMERIC


# Default configuration instance
DEFAULT_CONFIG = GenerationConfig()
