"""Exceptions raised by the rules engine and its loaders."""


class QuizRaceError(Exception):
    """Base class for quiz race errors."""


class InvalidPathError(QuizRaceError):
    """The path is empty, too short or malformed. Not recoverable without a new path."""


class InvalidQuestionError(QuizRaceError):
    """A question file could not be parsed."""


class InvalidTeamCountError(QuizRaceError):
    """A game needs at least two teams."""
