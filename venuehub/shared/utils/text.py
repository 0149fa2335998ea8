"""Text normalization for case-insensitive unique fields."""


def normalize_key(value: str | None) -> str | None:
    """Return the lookup form of a name or email (trimmed, lowercased).

    Stored next to the original value (e.g. name_lower, email_lower) so
    uniqueness and prefix search can use exact index lookups.
    """
    if value is None:
        return None
    return value.strip().lower()
