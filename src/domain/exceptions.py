"""
Domain Exceptions

Raised by entity state transitions and invitee validation. Use cases catch
them and turn them into Result errors carrying the same code.
"""


class DomainException(Exception):
    """Base exception for all domain errors."""

    def __init__(self, message: str, code: str = "DOMAIN_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


# ============================================================================
# Invitation Exceptions
# ============================================================================


class InvitationException(DomainException):
    """Base exception for invitation lifecycle errors."""

    def __init__(self, message: str, code: str = "INVITATION_ERROR"):
        super().__init__(message, code)


class InvitationAlreadyProcessedError(InvitationException):
    """Raised when a transition is attempted out of a terminal state."""

    def __init__(self, status: str):
        self.status = status
        super().__init__(
            f"This invitation has already been processed ({status})",
            "INVITATION_ALREADY_PROCESSED",
        )


class InvitationExpiredError(InvitationException):
    """Raised when a pending invitation is acted upon after its expiry."""

    def __init__(self, message: str = "This invitation has expired"):
        super().__init__(message, "INVITATION_EXPIRED")


class InvalidInviteeError(InvitationException):
    """Raised when the invitee field required by the invitation type is unusable."""

    def __init__(self, message: str):
        super().__init__(message, "INVALID_INVITEE")
