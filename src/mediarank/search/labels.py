"""Codec for the serialized label:confidence storage format.

Label records store their classifier output as a single string::

    "dog:0.95,animal:0.88,pet:0.75"

Decoding is lenient: a malformed pair is dropped and the remaining pairs are
still used. A record that decodes to nothing simply never matches.
"""

import math
from typing import Iterable

from loguru import logger

from ..core.types import LabelWithConfidence


def clamp_confidence(value: float) -> float:
    """Clamp a confidence value to [0, 1]."""
    return min(max(value, 0.0), 1.0)


def parse_labels_with_confidence(serialized: str) -> list[LabelWithConfidence]:
    """Decode a serialized label string.

    Args:
        serialized: Comma-separated ``label:confidence`` pairs.

    Returns:
        Decoded pairs in stored order. Pairs with the wrong arity, an empty
        label, or an unparsable confidence are dropped. Confidences are
        clamped to [0, 1].

    Example:
        >>> parse_labels_with_confidence("dog:0.95,bad,cat:x")
        [LabelWithConfidence(label='dog', confidence=0.95)]
    """
    if not serialized or not serialized.strip():
        return []

    decoded = []
    dropped = 0
    for entry in serialized.split(","):
        parts = entry.split(":")
        if len(parts) != 2:
            dropped += 1
            continue

        label = parts[0].strip()
        try:
            confidence = float(parts[1].strip())
        except ValueError:
            dropped += 1
            continue

        if not label or math.isnan(confidence):
            dropped += 1
            continue

        decoded.append(LabelWithConfidence(label, clamp_confidence(confidence)))

    if dropped:
        logger.debug(f"Dropped {dropped} malformed label entries from {serialized!r}")
    return decoded


def encode_labels(labels: Iterable[LabelWithConfidence]) -> str:
    """Serialize labels with two-decimal confidences."""
    return ",".join(f"{item.label}:{item.confidence:.2f}" for item in labels)


def plain_labels(labels: Iterable[LabelWithConfidence]) -> str:
    """Comma-joined lowercase label text, without confidences."""
    return ",".join(item.label.lower() for item in labels)
