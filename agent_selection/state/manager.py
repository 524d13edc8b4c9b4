# -*- coding: utf-8 -*-
"""Persisted provider / agent selection, reconciled against availability.

Two snapshots are kept:

* ``persisted`` - what state.json held when the manager was created.
  It is read once and never mutated in place.
* ``live`` - the validated selection the running process reads and
  changes. It starts empty and is filled by :meth:`SelectionState.reconcile`
  (or seeded with :meth:`SelectionState.init_live_entry`).

:meth:`SelectionState.save` writes the live snapshot back to state.json.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union

from ..constant import WORKING_DIR
from . import store
from .models import (
    ProviderAgents,
    ProviderSelection,
    RoleLike,
    SelectionSnapshot,
    to_role,
)

logger = logging.getLogger(__name__)

AvailableAgents = Mapping[str, Union[ProviderAgents, Mapping[str, Any]]]


def load_snapshot(path: Path) -> SelectionSnapshot:
    """Read the snapshot at *path*, or an empty one if there is no file."""
    if not store.file_exists(path):
        logger.debug("No selection state at %s; starting empty", path)
        return SelectionSnapshot()
    snapshot = SelectionSnapshot.from_table(store.file_to_table(path))
    logger.debug(
        "Loaded selection state from %s (%d providers)",
        path,
        len(snapshot.entries),
    )
    return snapshot


def _candidates(
    available_agents: AvailableAgents,
    provider_id: str,
    role: RoleLike,
) -> List[str]:
    """Ordered agents available for *provider_id* under *role*."""
    role = to_role(role)
    agents = available_agents.get(provider_id)
    if isinstance(agents, ProviderAgents):
        return agents.for_role(role)
    if not isinstance(agents, Mapping):
        return []
    values = agents.get(role.value)
    if not isinstance(values, (list, tuple)):
        return []
    return list(values)


class SelectionState:
    """Current provider and per-provider chat/command agent selection."""

    def __init__(self, state_dir: Optional[Union[str, Path]] = None) -> None:
        if state_dir is None:
            state_dir = WORKING_DIR
        elif state_dir == "" or state_dir == Path(""):
            raise ValueError("state_dir must not be empty")
        self.state_file = store.get_state_file_path(state_dir)
        self._persisted = load_snapshot(self.state_file)
        self._live = SelectionSnapshot()

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    @property
    def persisted(self) -> SelectionSnapshot:
        """Copy of the snapshot read from disk."""
        return self._persisted.model_copy(deep=True)

    @property
    def live(self) -> SelectionSnapshot:
        """Copy of the in-memory selection."""
        return self._live.model_copy(deep=True)

    # ------------------------------------------------------------------
    # Entry initialization
    # ------------------------------------------------------------------

    def init_persisted_entry(self, provider_id: str) -> None:
        """Make sure the persisted snapshot has a record for *provider_id*.

        An existing record is left untouched. The persisted snapshot is
        replaced, not modified, so earlier copies stay valid.
        """
        if provider_id in self._persisted.entries:
            return
        entries = dict(self._persisted.entries)
        entries[provider_id] = ProviderSelection()
        self._persisted = self._persisted.model_copy(
            update={"entries": entries},
        )

    def init_persisted_entries(self, provider_ids: Iterable[str]) -> None:
        for provider_id in provider_ids:
            self.init_persisted_entry(provider_id)

    def init_live_entry(self, provider_id: str) -> None:
        """Make sure the live snapshot has a record for *provider_id*."""
        self._live.entries.setdefault(provider_id, ProviderSelection())

    # ------------------------------------------------------------------
    # Reconciliation
    # ------------------------------------------------------------------

    def resolve_agent(
        self,
        provider_id: str,
        role: RoleLike,
        available_agents: AvailableAgents,
    ) -> None:
        """Pick the live agent for *provider_id* / *role*.

        The persisted choice is kept when it is still available; otherwise
        the first available agent is used, or the slot is left unset when
        the provider offers none.
        """
        role = to_role(role)
        candidates = _candidates(available_agents, provider_id, role)
        persisted_entry = self._persisted.entries.get(provider_id)
        choice = persisted_entry.get(role) if persisted_entry else None

        if choice is None or choice not in candidates:
            fallback = candidates[0] if candidates else None
            if choice is not None:
                logger.debug(
                    "%s agent %r for %s is no longer available; using %r",
                    role.value,
                    choice,
                    provider_id,
                    fallback,
                )
            choice = fallback

        self.init_live_entry(provider_id)
        self._live.entries[provider_id].set(role, choice)

    def reconcile(
        self,
        available_providers: Sequence[str],
        available_agents: AvailableAgents,
    ) -> None:
        """Rebuild the live snapshot from the persisted one.

        Afterwards the live entries are exactly *available_providers*, each
        role's agent is unset or one of that provider's available agents,
        and the current provider is unset or one of *available_providers*.
        """
        self._live.entries = {}
        for provider_id in available_providers:
            self.init_live_entry(provider_id)
            for role in ("chat", "command"):
                self.resolve_agent(provider_id, role, available_agents)

        provider = self._persisted.provider
        if provider is None or provider not in available_providers:
            fallback = available_providers[0] if available_providers else None
            if provider is not None:
                logger.debug(
                    "Provider %r is no longer available; using %r",
                    provider,
                    fallback,
                )
            provider = fallback
        self._live.provider = provider

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def set_provider(self, provider_id: str) -> None:
        """Set the current provider. The id is not checked."""
        self._live.provider = provider_id

    def get_provider(self) -> Optional[str]:
        return self._live.provider

    def set_agent(
        self,
        provider_id: str,
        agent: str,
        role: RoleLike,
    ) -> None:
        """Set *role*'s agent for *provider_id*. The agent is not checked.

        Raises ``KeyError`` if *provider_id* has no live record.
        """
        self._live.entries[provider_id].set(role, agent)

    def get_agent(self, provider_id: str, role: RoleLike) -> Optional[str]:
        entry = self._live.entries.get(provider_id)
        if entry is None:
            return None
        return entry.get(role)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self) -> None:
        """Overwrite state.json with the live snapshot."""
        store.table_to_file(self._live.to_table(), self.state_file)
        logger.debug("Saved selection state to %s", self.state_file)
