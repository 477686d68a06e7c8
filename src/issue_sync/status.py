"""Pure mapping from GitHub issue state to Notion status label."""
from __future__ import annotations

from typing import Optional

from .config import DEFAULT_STATUS_LABELS, StatusLabels


def map_status(state: Optional[str], labels: StatusLabels = DEFAULT_STATUS_LABELS) -> str:
    """Return the Notion status name for a GitHub issue ``state``.

    Only the exact GitHub values ``open`` and ``closed`` are recognised; any
    other input, including ``None``, maps to the default status.
    """
    if state == "open":
        return labels.open
    if state == "closed":
        return labels.closed
    return labels.default


__all__ = ["map_status"]
