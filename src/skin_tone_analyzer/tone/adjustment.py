"""Lighting-aware correction of the classifier's top-1 label.

The classifier leans towards lighter labels on dim photos. Mid-range predictions are
pushed darker when the normalized crop is dark, and pushed again when it is very dark.
The second rule reads the already-corrected value, so both can fire on one request.
"""

import re

LOW_LIGHT_LUMINANCE = 80
VERY_LOW_LIGHT_LUMINANCE = 50

_LABEL_RE = re.compile(r"^MST(10|[1-9])$")


def label_number(label: str) -> int:
    """Return the numeric suffix of an ``MST{n}`` label."""
    match = _LABEL_RE.match(label)
    if match is None:
        raise ValueError(f"Not an MST label: {label!r}")
    return int(match.group(1))


def adjust(raw_label: str, luminance: float) -> str:
    """Return the label corrected for low-light capture."""
    n = label_number(raw_label)
    if luminance < LOW_LIGHT_LUMINANCE and 4 <= n <= 7:
        n = min(10, n + 2)
    if luminance < VERY_LOW_LIGHT_LUMINANCE and n < 8:
        n = min(10, n + 3)
    return f"MST{n}"
