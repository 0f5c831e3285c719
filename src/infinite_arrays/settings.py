"""Environment-driven defaults, read once at import."""

from __future__ import annotations

import os
from typing import Final

DEFAULT_DTYPE: Final[str] = os.environ.get("INFINITE_ARRAYS_DEFAULT_DTYPE", "float").strip() or "float"
CUMSUM_WARN_INDEX: Final[int] = max(1, int(os.environ.get("INFINITE_ARRAYS_CUMSUM_WARN_INDEX", "100000")))
REPR_PREVIEW: Final[int] = max(0, int(os.environ.get("INFINITE_ARRAYS_REPR_PREVIEW", "5")))
