"""Exception types for the goldfish engine."""


class GoldfishError(Exception):
    """Base class for goldfish errors."""


class IllegalActionError(GoldfishError):
    """An action was applied that the current state does not allow.

    Search code only applies actions produced by ``legal_actions``, so this
    signals a caller bug rather than a recoverable condition.
    """
