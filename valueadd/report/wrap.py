from __future__ import annotations

import logging
from typing import Callable

from valueadd.errors import RecoverableRenderError


logger = logging.getLogger(__name__)

MeasureFn = Callable[[str, float], float]


def wrap_text(
    text: str,
    measure: MeasureFn,
    font_size: float,
    max_width: float,
) -> list[str]:
    """Greedily pack words into lines no wider than ``max_width``.

    A single word wider than the limit is emitted on its own line rather
    than split. Words whose measurement raises ``RecoverableRenderError`` are
    skipped.
    """
    lines: list[str] = []
    current = ''
    for word in str(text or '').split():
        candidate = f'{current} {word}' if current else word
        try:
            width = float(measure(candidate, font_size))
        except RecoverableRenderError as exc:
            logger.warning('Skipping unmeasurable word %r: %s', word, exc)
            continue

        if width > max_width and current:
            lines.append(current)
            current = word
            continue
        current = candidate

    if current:
        lines.append(current)
    return lines
