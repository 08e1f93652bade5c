"""
Exceptions raised by the bill-recommendation pipeline and its collaborators.

Routes translate these into JSON error responses; the script generator
swallows collaborator failures and falls back to a local template instead.
"""


class CivicPulseError(Exception):
    """Base exception for CivicPulse errors."""
    pass


class ExternalCallFailure(CivicPulseError):
    """A collaborator call failed (network error or non-success status)."""
    pass


class MalformedResponse(CivicPulseError):
    """A collaborator responded, but the payload could not be parsed."""
    pass


class ConfigurationMissing(CivicPulseError):
    """A required external credential is not configured."""
    pass


class ValidationFailure(CivicPulseError):
    """Caller-supplied input was rejected before any external call."""
    pass


class StorageQuotaExceeded(CivicPulseError):
    """A key-value store write would exceed the store's byte quota."""
    pass
