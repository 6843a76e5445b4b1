# -*- coding: utf-8 -*-
"""Decide whether and in which direction called segments must be recentered"""

import decimal
import enum

import attr


#: Default threshold on the absolute delta above which recentering is performed
DEFAULT_THRESHOLD = decimal.Decimal("0.2")


class RecenterKind(enum.StrEnum):
    """Branch to take for refining the copy number calls"""

    #: Run ``copyCaller --recenter-down``
    DOWN = "down"
    #: Run ``copyCaller --recenter-up``
    UP = "up"
    #: Pass through the called segments
    NOOP = "noop"


@attr.s(frozen=True, auto_attribs=True)
class RecenterDecision:
    kind: RecenterKind
    #: Non-negative amount to recenter by, ``None`` for ``NOOP``
    amount: decimal.Decimal | None = None


def classify(delta, threshold=DEFAULT_THRESHOLD):
    """Classify the median log-ratio ``delta``

    Both boundaries belong to the no-op branch.
    """
    delta = decimal.Decimal(str(delta))
    threshold = decimal.Decimal(str(threshold))
    if delta < -threshold:
        return RecenterDecision(RecenterKind.DOWN, abs(delta))
    elif delta > threshold:
        return RecenterDecision(RecenterKind.UP, delta)
    else:
        return RecenterDecision(RecenterKind.NOOP)
