"""
Dispatch error taxonomy.

"No provider available" is deliberately absent: it is a normal outcome and
is reported as ``AssignmentDecision.none()``.
"""


class DispatchError(Exception):
    """Base class for failures that abort a dispatch call."""


class NotAuthenticated(DispatchError):
    """No requester identity could be resolved."""

    def __init__(self, message: str = "User not authenticated"):
        super().__init__(message)


class ProviderFetchFailed(DispatchError):
    """Reading candidate hospitals or responders failed."""


class PersistAssignmentFailed(DispatchError):
    """A candidate was chosen but the request record could not be written."""
