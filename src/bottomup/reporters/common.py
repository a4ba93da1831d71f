from bottomup.aggregation import AggregatedRecord


def time_fmt(milliseconds: float) -> str:
    """Render a duration given in milliseconds with a readable unit."""
    if abs(milliseconds) >= 1000:
        return f"{milliseconds / 1000:.3f}s"
    if abs(milliseconds) >= 1 or milliseconds == 0:
        return f"{milliseconds:.3f}ms"
    return f"{milliseconds * 1000:.3f}us"


def format_location(record: AggregatedRecord) -> str:
    # Line numbers are 0-based in the profile.
    if not record.url:
        return record.function_name
    return f"{record.function_name} at {record.url}:{record.line_number + 1}"
