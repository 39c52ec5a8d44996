"""
Proposal Repository — persistence boundary for proposals.
The service only talks to ProposalRepository; the in-memory
implementation backs the dev server and the tests.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any

from proposal_desk.models.schemas import StoredProposal

logger = logging.getLogger(__name__)


class ProposalRepository(ABC):
    """Storage contract used by ProposalService."""

    @abstractmethod
    def add(self, proposal: StoredProposal) -> StoredProposal:
        ...

    @abstractmethod
    def update(self, proposal_id: str, changes: dict[str, Any]) -> StoredProposal:
        """
        Apply field changes to a stored proposal in one step.
        Raises KeyError when the id is unknown. Concurrent updates are
        last-writer-wins per call; no field-level merging.
        """
        ...

    @abstractmethod
    def get(self, proposal_id: str) -> StoredProposal | None:
        ...

    @abstractmethod
    def get_by_share_token(self, share_token: str) -> StoredProposal | None:
        ...

    @abstractmethod
    def list_all(self) -> list[StoredProposal]:
        ...


class InMemoryProposalRepository(ProposalRepository):
    """
    Dict-backed store. Copies on the way in and out so callers
    never mutate stored state.
    """

    def __init__(self):
        self._store: dict[str, StoredProposal] = {}
        self._lock = threading.Lock()

    def add(self, proposal: StoredProposal) -> StoredProposal:
        with self._lock:
            if proposal.id in self._store:
                raise ValueError(f"Proposal {proposal.id} already exists")
            self._store[proposal.id] = proposal.model_copy(deep=True)
        logger.info(f"Stored proposal {proposal.id}")
        return proposal.model_copy(deep=True)

    def update(self, proposal_id: str, changes: dict[str, Any]) -> StoredProposal:
        with self._lock:
            existing = self._store.get(proposal_id)
            if existing is None:
                raise KeyError(proposal_id)
            updated = existing.model_copy(update=changes).model_copy(deep=True)
            self._store[proposal_id] = updated
            result = updated.model_copy(deep=True)
        logger.info(f"Updated proposal {proposal_id}")
        return result

    def get(self, proposal_id: str) -> StoredProposal | None:
        with self._lock:
            stored = self._store.get(proposal_id)
            return stored.model_copy(deep=True) if stored else None

    def get_by_share_token(self, share_token: str) -> StoredProposal | None:
        with self._lock:
            for stored in self._store.values():
                if stored.share_token == share_token:
                    return stored.model_copy(deep=True)
        return None

    def list_all(self) -> list[StoredProposal]:
        """All proposals, most recently updated first."""
        with self._lock:
            items = [p.model_copy(deep=True) for p in self._store.values()]
        return sorted(items, key=lambda p: p.updated_at, reverse=True)
