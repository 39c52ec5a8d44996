"""Persistence — ProposalRepository, InMemoryProposalRepository."""

from proposal_desk.persistence.proposal_repository import (
    InMemoryProposalRepository,
    ProposalRepository,
)

__all__ = ["ProposalRepository", "InMemoryProposalRepository"]
