"""Confidence thresholding, false-positive suppression and ranking for label matches.

Classifier labels are noisy: a portrait of a person with a plush toy can come
back as ``"person:0.92,cat:0.70"``. This module decides which label matches
are trustworthy enough to show and in what order:

1. **Category thresholds**: animal queries need 0.75, food queries 0.70,
   anything else 0.65.
2. **Negative signals**: a weak animal match next to a strong person label
   (or a weak food match next to a strong building label) is suppressed.
3. **Rank score**: the matched confidence, halved when suppressed, with a
   10% bonus when at least two other animal labels back up an animal match.

The same label-set matching is reused by smart albums, which supply a fixed
label set and threshold instead of a free-text token.

Example:
    >>> results = filter_and_rank("dog", records, media_items)
    >>> [(r.media_item.id, r.rank_score) for r in results]
    [(1, 1.0), (7, 0.8)]
"""

from typing import Iterable

from loguru import logger

from ..core.config import DEFAULT_THRESHOLDS, ClassificationThresholds
from ..core.types import LabelRecord, LabelWithConfidence, MediaItem, RankedResult
from .labels import clamp_confidence, parse_labels_with_confidence

STRONG_PERSON_SIGNAL = "strong_person_signal"
STRONG_BUILDING_SIGNAL = "strong_building_signal"


def min_confidence_for_query(
    query: str,
    thresholds: ClassificationThresholds = DEFAULT_THRESHOLDS,
) -> float:
    """Pick the confidence threshold for a free-text query term."""
    term = query.lower()
    if term in thresholds.animal_labels:
        return thresholds.animal_min_confidence
    if term in thresholds.food_labels:
        return thresholds.object_min_confidence
    return thresholds.general_min_confidence


def find_matching_label(
    labels: list[LabelWithConfidence],
    token: str,
) -> LabelWithConfidence | None:
    """Find the first label that contains, or is contained by, the token."""
    if not token:
        return None
    for item in labels:
        text = item.label.lower()
        if token in text or text in token:
            return item
    return None


def match_label_set(
    labels: list[LabelWithConfidence],
    label_set: frozenset[str],
    min_confidence: float,
) -> LabelWithConfidence | None:
    """Find the strongest label that is a member of label_set above min_confidence.

    Args:
        labels: Decoded labels of one record.
        label_set: Lowercase labels that count as a match.
        min_confidence: Inclusive confidence floor.

    Returns:
        The highest-confidence qualifying label, or None.
    """
    best = None
    for item in labels:
        if item.label.lower() in label_set and item.confidence >= min_confidence:
            if best is None or item.confidence > best.confidence:
                best = item
    return best


def has_strong_signal(
    labels: Iterable[LabelWithConfidence],
    signal_labels: frozenset[str],
    threshold: float,
) -> bool:
    """True when any label in signal_labels reaches threshold."""
    return any(
        item.label.lower() in signal_labels and item.confidence >= threshold
        for item in labels
    )


def check_negative_signals(
    query: str,
    match_confidence: float,
    all_labels: list[LabelWithConfidence],
    thresholds: ClassificationThresholds = DEFAULT_THRESHOLDS,
) -> str | None:
    """Return a suppression reason if a conflicting strong label is present.

    Strong matches (at or above the strong-signal threshold) are never
    suppressed.
    """
    if match_confidence >= thresholds.strong_signal_threshold:
        return None
    if match_confidence >= thresholds.weak_match_threshold:
        return None

    term = query.lower()
    strong = thresholds.strong_signal_threshold

    if term in thresholds.animal_labels and has_strong_signal(
        all_labels, thresholds.person_labels, strong
    ):
        return STRONG_PERSON_SIGNAL

    if term in thresholds.food_labels and has_strong_signal(
        all_labels, thresholds.building_labels, strong
    ):
        return STRONG_BUILDING_SIGNAL

    return None


def calculate_rank_score(
    match_confidence: float,
    suppress_reason: str | None,
    siblings: list[LabelWithConfidence],
    query: str,
    thresholds: ClassificationThresholds = DEFAULT_THRESHOLDS,
) -> float:
    """Combine match confidence, suppression penalty and supporting labels.

    Args:
        match_confidence: Confidence of the matched label.
        suppress_reason: Suppression reason, if any.
        siblings: The record's other labels (matched label excluded).
        query: Lowercase query term.
        thresholds: Threshold table.

    Returns:
        Score clamped to [0, 1].
    """
    score = clamp_confidence(match_confidence)

    if suppress_reason is not None:
        score *= thresholds.suppression_penalty

    if query.lower() in thresholds.animal_labels:
        supporting = sum(
            1
            for item in siblings
            if item.label.lower() in thresholds.animal_labels
            and item.confidence > thresholds.support_min_confidence
        )
        if supporting >= thresholds.support_min_count:
            score *= thresholds.support_bonus

    return clamp_confidence(score)


def filter_and_rank(
    query: str,
    matched_labels: list[LabelRecord],
    media_items: list[MediaItem],
    hard_filter: bool = True,
    thresholds: ClassificationThresholds = DEFAULT_THRESHOLDS,
) -> list[RankedResult]:
    """Filter and rank label matches for a free-text query.

    Args:
        query: Search term (typically the residual query text).
        matched_labels: Candidate label records.
        media_items: Current media snapshot, used to resolve media ids.
        hard_filter: Drop low-confidence and suppressed weak matches instead
            of only ranking them lower.
        thresholds: Threshold table.

    Returns:
        One RankedResult per matching media item, best score first.
    """
    token = query.lower().strip()
    if not token:
        return []

    min_confidence = min_confidence_for_query(token, thresholds)
    media_map = {item.id: item for item in media_items}

    results: list[RankedResult] = []
    seen: set[int] = set()
    for record in matched_labels:
        if record.media_id in seen:
            continue

        media_item = media_map.get(record.media_id)
        if media_item is None:
            logger.debug(f"Skipping labels for unknown media id {record.media_id}")
            continue

        parsed = parse_labels_with_confidence(record.labels_with_confidence)
        matched = find_matching_label(parsed, token)
        if matched is None:
            continue

        if matched.confidence < min_confidence and hard_filter:
            continue

        suppress_reason = check_negative_signals(
            token, matched.confidence, parsed, thresholds
        )

        if (
            hard_filter
            and suppress_reason is not None
            and matched.confidence < thresholds.weak_match_threshold
        ):
            continue

        siblings = [item for item in parsed if item is not matched]
        rank_score = calculate_rank_score(
            matched.confidence, suppress_reason, siblings, token, thresholds
        )

        seen.add(record.media_id)
        results.append(
            RankedResult(
                media_item=media_item,
                matched_label=matched.label,
                confidence=matched.confidence,
                rank_score=rank_score,
                suppress_reason=suppress_reason,
            )
        )

    results.sort(key=lambda r: r.rank_score, reverse=True)

    logger.debug(
        f"Label ranking {token!r}: {len(results)} of {len(matched_labels)} records kept "
        f"(min_confidence={min_confidence}, hard_filter={hard_filter})"
    )
    return results


def filter_and_rank_media(
    query: str,
    matched_labels: list[LabelRecord],
    media_items: list[MediaItem],
    hard_filter: bool = True,
    thresholds: ClassificationThresholds = DEFAULT_THRESHOLDS,
) -> list[MediaItem]:
    """Like filter_and_rank, but return just the media items."""
    return [
        r.media_item
        for r in filter_and_rank(query, matched_labels, media_items, hard_filter, thresholds)
    ]
