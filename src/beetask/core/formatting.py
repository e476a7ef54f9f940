"""Formatting helpers shared by the task layer and the CLI."""


def format_duration(seconds: float) -> str:
    """Format an elapsed time for progress markers.

    Example:
        >>> format_duration(4.25)
        '4.2s'
        >>> format_duration(83)
        '1m 23s'
    """
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes, secs = divmod(int(seconds), 60)
    if minutes < 60:
        return f"{minutes}m {secs}s"
    hours, minutes = divmod(minutes, 60)
    return f"{hours}h {minutes}m {secs}s"
