"""Mappers between domain entities and stored hash records.

Hash fields are strings. Parsing never fails on partial records:
missing or malformed numbers read as 0 and a missing flag reads as
closed.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from predictably.domain.model import Question, Vote
from predictably.domain.value import QuestionId, UserId
from predictably.persistence.store.base import format_number

ACTIVE = "1"
INACTIVE = "0"


def to_millis(moment: datetime) -> float:
    """Sorted-set score of a timestamp."""
    return float(int(moment.timestamp() * 1000))


def from_millis(score: float) -> datetime:
    return datetime.fromtimestamp(score / 1000, tz=timezone.utc)


def format_datetime(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.isoformat()


def parse_datetime(raw: Optional[str]) -> Optional[datetime]:
    if not raw:
        return None
    try:
        moment = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def parse_int(raw: Optional[str]) -> int:
    if not raw:
        return 0
    try:
        return int(raw)
    except ValueError:
        try:
            return int(float(raw))
        except ValueError:
            return 0


def parse_float(raw: Optional[str]) -> float:
    if not raw:
        return 0.0
    try:
        return float(raw)
    except ValueError:
        return 0.0


def question_to_hash(question: Question) -> dict[str, str]:
    """Convert Question entity to its metadata hash."""
    record = {
        "id": question.id,
        "text": question.text,
        "date": format_datetime(question.date),
        "totalVotes": str(question.total_votes),
        "voteSum": format_number(question.vote_sum),
        "isActive": ACTIVE if question.is_active else INACTIVE,
    }
    if question.submitted_by:
        record["submittedBy"] = question.submitted_by
    if question.closing_date:
        record["closingDate"] = format_datetime(question.closing_date)
    return record


def hash_to_question(question_id: str, record: dict[str, Any]) -> Question:
    """Convert a metadata hash to a Question entity."""
    total_votes = max(parse_int(record.get("totalVotes")), 0)
    return Question(
        id=QuestionId(record.get("id") or question_id),
        text=record.get("text") or "",
        date=parse_datetime(record.get("date")) or datetime.fromtimestamp(0, tz=timezone.utc),
        total_votes=total_votes,
        vote_sum=parse_float(record.get("voteSum")),
        is_active=record.get("isActive") == ACTIVE,
        submitted_by=UserId(record["submittedBy"]) if record.get("submittedBy") else None,
        closing_date=parse_datetime(record.get("closingDate")),
    )


def entry_to_vote(
    user_id: str, question_id: str, raw_value: str, timestamp: datetime
) -> Vote:
    """Convert a vote map entry to a Vote entity."""
    return Vote(
        user_id=UserId(user_id),
        question_id=QuestionId(question_id),
        value=parse_int(raw_value),
        timestamp=timestamp,
    )
