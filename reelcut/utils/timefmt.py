"""Playhead and ruler labels.

`format_playhead` renders the mm:ss.ss clock shown over the preview,
`format_ruler_label` the m:ss captions of major ruler ticks.
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
import math

__all__ = ["format_playhead", "format_ruler_label"]


def format_playhead(seconds: float) -> str:
    """mm:ss.ss with hundredths rounded half-up (1.005 -> 00:01.01).

    Negative input shows as zero.
    """
    cs_total = int(
        (Decimal(str(max(0.0, seconds))) * 100).to_integral_value(
            rounding=ROUND_HALF_UP
        )
    )
    m, cs = divmod(cs_total, 6000)
    return f"{m:02d}:{cs // 100:02d}.{cs % 100:02d}"


def format_ruler_label(seconds: float) -> str:
    whole = max(0, math.floor(seconds))
    m, s = divmod(whole, 60)
    return f"{m}:{s:02d}"
