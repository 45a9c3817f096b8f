"""Scoring rules shared by every read and write path.

These functions are pure: they never touch storage, so the same rule is
applied when a prediction is submitted and whenever it is read back.
"""

from typing import Iterable, Sequence

from predictably.domain.model import Question, VoteDistribution, VoteHistogram
from predictably.domain.value import PredictionScore, Scale


def evaluate_prediction(
    predicted: float, actual: float, threshold: float
) -> PredictionScore:
    """Score a prediction against the crowd average.

    Args:
        predicted: The predicted average
        actual: The crowd average at evaluation time
        threshold: Maximum distance still counted as correct

    Returns:
        Absolute distance and whether it is within the threshold

    Examples:
        >>> evaluate_prediction(3, 5, 2)
        PredictionScore(accuracy=2.0, is_correct=True)
    """
    accuracy = abs(float(predicted) - float(actual))
    return PredictionScore(accuracy=accuracy, is_correct=accuracy <= threshold)


def build_histogram(
    question: Question, distribution: Sequence[VoteDistribution], scale: Scale
) -> VoteHistogram:
    """Expand a sparse distribution into one bucket per scale value.

    Values outside the scale are not represented by any bucket.
    """
    counts = {entry.value: entry.count for entry in distribution}
    buckets = [
        VoteDistribution(value=value, count=counts.get(value, 0))
        for value in scale.values()
    ]
    return VoteHistogram(
        buckets=buckets,
        total_votes=question.total_votes,
        average_vote=question.average_vote,
    )


def walk_streaks(outcomes: Iterable[bool]) -> tuple[int, int]:
    """Compute streaks of consecutive correct predictions.

    Args:
        outcomes: Correctness of each prediction, in walk order

    Returns:
        (current_streak, best_streak) where the current streak is the run
        of correct predictions ending at the last outcome
    """
    running = 0
    best = 0
    for is_correct in outcomes:
        if is_correct:
            running += 1
            best = max(best, running)
        else:
            running = 0
    return running, best
