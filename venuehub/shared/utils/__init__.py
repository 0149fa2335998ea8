"""Small pure helpers (time, identifiers, text normalization)."""

from venuehub.shared.utils.datetime import ensure_utc, utc_now
from venuehub.shared.utils.generators import generate_cuid
from venuehub.shared.utils.text import normalize_key

__all__ = ["ensure_utc", "generate_cuid", "normalize_key", "utc_now"]
