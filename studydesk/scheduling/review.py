"""
Flashcard review scheduling.

A simplified SM-2 style recurrence. The rating picks how the interval (in
days) grows and how the ease factor moves:

    again: interval = 1                          ease = max(1.3, ease - 0.2)
    hard:  interval = max(1, floor(interval*1.2)) ease = max(1.3, ease - 0.15)
    good:  interval = floor(interval * ease)      ease unchanged
    easy:  interval = floor(interval*ease*1.3)    ease = ease + 0.15

The ease factor is floored at 1.3 and has no ceiling; the interval has no
ceiling. Note that a brand-new card (interval 0) stays at 0 under good/easy.
"""

import math
from enum import Enum as PyEnum
from typing import NamedTuple

from studydesk.clock import NS_PER_DAY

MIN_EASE_FACTOR = 1.3
DEFAULT_EASE_FACTOR = 2.5


class ReviewRating(str, PyEnum):
    """How well the learner recalled the card."""

    AGAIN = "again"
    HARD = "hard"
    GOOD = "good"
    EASY = "easy"


class ReviewOutcome(NamedTuple):
    interval: int
    ease_factor: float
    next_review: int


def next_review_at(now_ns: int, interval: int) -> int:
    """Timestamp `interval` days after `now_ns`."""
    return now_ns + interval * NS_PER_DAY


def schedule_review(
    rating: ReviewRating | str,
    interval: int,
    ease_factor: float,
    now_ns: int,
) -> ReviewOutcome:
    """Compute the card's next interval, ease factor and due time."""
    rating = ReviewRating(rating)

    if rating is ReviewRating.AGAIN:
        new_interval = 1
        new_ease = max(MIN_EASE_FACTOR, ease_factor - 0.2)
    elif rating is ReviewRating.HARD:
        new_interval = max(1, math.floor(interval * 1.2))
        new_ease = max(MIN_EASE_FACTOR, ease_factor - 0.15)
    elif rating is ReviewRating.GOOD:
        new_interval = math.floor(interval * ease_factor)
        new_ease = ease_factor
    else:
        new_interval = math.floor(interval * ease_factor * 1.3)
        new_ease = ease_factor + 0.15

    return ReviewOutcome(
        interval=new_interval,
        ease_factor=new_ease,
        next_review=next_review_at(now_ns, new_interval),
    )
