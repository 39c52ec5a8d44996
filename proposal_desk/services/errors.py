"""Exceptions raised by the proposal services."""


class ProposalError(Exception):
    """Base exception for proposal service errors."""


class ProposalNotFoundError(ProposalError, LookupError):
    """Unknown proposal id, share token or template id."""
