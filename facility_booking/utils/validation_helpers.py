from datetime import timezone


def to_naive_utc(value):
    """Store timestamps naive; aware inputs are converted to UTC first."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def clean_string_list(value):
    if value is None:
        return []
    return [item.strip() for item in value if item and item.strip()]
