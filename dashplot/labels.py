from __future__ import annotations

import math


def get_spaced_indices(total: int, max_labels: int) -> list[int]:
    """Indices of the axis labels to draw, always keeping the first and last.

    Interior picks are ``round(i * (total - 1) / (max_labels - 1))`` with
    halves rounded up. When ``total > max_labels >= 2`` the step exceeds one,
    so consecutive picks cannot collide.
    """
    if total <= 0 or max_labels <= 0:
        return []
    if total <= max_labels:
        return list(range(total))
    if max_labels == 1:
        return [0]

    step = (total - 1) / (max_labels - 1)
    indices = [0]
    for i in range(1, max_labels - 1):
        indices.append(int(math.floor(i * step + 0.5)))
    indices.append(total - 1)
    return indices


def truncate_label(label: str, max_width: float, *, char_width: float = 7.0) -> str:
    max_chars = int(max_width // char_width) if char_width > 0 else len(label)
    if len(label) <= max_chars:
        return label
    if max_chars <= 3:
        return ""
    return label[: max_chars - 3] + "..."
