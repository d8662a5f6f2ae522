"""Text helpers for log output."""


def preview(text: str | None, limit: int = 80) -> str:
    """Single-line, truncated rendering of ``text`` safe for log lines."""
    if not text:
        return ""
    flat = " ".join(text.split())
    if len(flat) <= limit:
        return flat
    return flat[: max(limit - 3, 0)] + "..."
