"""Strongly typed identifiers for game entities.

Question ids double as platform post ids and user ids come from the
platform identity collaborator, so both are opaque strings.
"""

from typing import NewType

QuestionId = NewType("QuestionId", str)
UserId = NewType("UserId", str)
