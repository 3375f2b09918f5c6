# utils.py

import colorsys
import math
import re
from typing import List

from config import EMPTY_SLOT, MAX_FRAME_COUNT, MIN_FRAME_COUNT

EMPTY_COLOR = "#d3d3d3"


def get_color(page):
    """Return a color for a page id; empty slots are light grey."""
    if page == EMPTY_SLOT or page is None:
        return EMPTY_COLOR
    # stable pastel color per page
    r, g, b = colorsys.hls_to_rgb(((page * 47) % 360) / 360, 0.75, 0.7)
    return "#{:02x}{:02x}{:02x}".format(int(r * 255), int(g * 255), int(b * 255))


def format_frame(page):
    return "-" if page == EMPTY_SLOT else str(page)


def format_frames(frames):
    return " ".join(format_frame(f) for f in frames)


# -----------------------------
# Input validation
# -----------------------------
def parse_reference_string(text: str) -> List[int]:
    """
    Parse a space and/or comma separated reference string into page ids.

    Raises:
        ValueError: On a non-numeric token or a negative page id
    """
    pages = []
    for token in re.split(r"[\s,]+", text.strip()):
        if token == "":
            continue
        try:
            page = int(token)
        except ValueError:
            raise ValueError(f"Invalid page reference: {token!r}") from None
        if page < 0:
            raise ValueError(f"Page ids must be non-negative, got {page}")
        pages.append(page)
    return pages


def validate_frame_count(value) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Frame count must be an integer, got {value!r}")
    try:
        count = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Frame count must be an integer, got {value!r}") from None
    if count != value and not isinstance(value, str):
        raise ValueError(f"Frame count must be an integer, got {value!r}")
    if count < MIN_FRAME_COUNT or count > MAX_FRAME_COUNT:
        raise ValueError(
            f"Frame count must be between {MIN_FRAME_COUNT} and {MAX_FRAME_COUNT}, got {count}"
        )
    return count


def parse_weight(value, name="weight") -> float:
    # Any finite real is a valid AFR weight, including zero and negatives
    try:
        weight = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a number, got {value!r}") from None
    if not math.isfinite(weight):
        raise ValueError(f"{name} must be finite, got {value!r}")
    return weight


def trace_rows(result):
    """Display rows for a SimulationResult: one column per frame."""
    rows = []
    for raw in result.to_rows():
        row = {"step": raw["step"], "page": raw["page"]}
        for j, f in enumerate(raw["frames"]):
            row[f"frame {j}"] = format_frame(f)
        row["fault"] = "F" if raw["fault"] else ""
        row["evicted"] = "" if raw["evicted"] is None else str(raw["evicted"])
        rows.append(row)
    return rows
