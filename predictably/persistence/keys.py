"""Key layout of the game records in the key-value store."""

TODAY_QUESTION_ID = "question:today:id"
YESTERDAY_QUESTION_ID = "question:yesterday:id"

# Global indices
ALL_QUESTIONS = "questions:all"
CLOSING_SCHEDULE = "questions:closing"
SELECTED_QUESTIONS = "questions:selected"


def question_metadata(question_id: str) -> str:
    return f"question:{question_id}:metadata"


def question_votes(question_id: str) -> str:
    """Hash of user id to vote value."""
    return f"question:{question_id}:votes"


def question_predictions(question_id: str) -> str:
    """Hash of user id to predicted average."""
    return f"question:{question_id}:predictions"


def user_history(user_id: str) -> str:
    """Sorted set of voted question ids scored by vote time (ms)."""
    return f"user:{user_id}:history"


def user_votes(user_id: str) -> str:
    return f"user:{user_id}:votes"


def user_predictions(user_id: str) -> str:
    return f"user:{user_id}:predictions"


def user_prediction_history(user_id: str) -> str:
    """Sorted set of predicted question ids scored by prediction time (ms)."""
    return f"user:{user_id}:prediction_history"


def user_submissions(user_id: str) -> str:
    return f"user:{user_id}:submitted"


def user_keys(user_id: str) -> list[str]:
    """Every personal key of a user, subject to inactivity expiry."""
    return [
        user_history(user_id),
        user_votes(user_id),
        user_predictions(user_id),
        user_prediction_history(user_id),
    ]
