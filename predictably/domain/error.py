"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class VotingClosedError(BusinessRuleViolationError):
    """Raised when a vote arrives after voting on a question has closed."""

    def __init__(self, question_id: str):
        self.question_id = question_id
        super().__init__(f"Voting is closed for question {question_id}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")
