"""Base service class."""


class Service:
    """Base for game services.

    Services hold the rules (voting windows, scoring, closing) and talk to
    storage only through the GameRepository they are given.
    """
