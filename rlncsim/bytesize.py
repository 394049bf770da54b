"""Human readable byte sizes."""

_UNITS = ("B", "KB", "MB", "GB", "TB")


def bytes_to_human_readable(num_bytes: int) -> str:
    """Format a byte count with two decimals and a binary unit (B up to TB)."""
    if num_bytes < 0:
        raise ValueError("byte count cannot be negative")
    size = float(num_bytes)
    for unit in _UNITS[:-1]:
        if size < 1024.0:
            return f"{size:.2f} {unit}"
        size /= 1024.0
    return f"{size:.2f} {_UNITS[-1]}"