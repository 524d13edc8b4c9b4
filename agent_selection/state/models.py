# -*- coding: utf-8 -*-
"""Pydantic data models for provider / agent selection."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

# Key of the current provider in the persisted document. Every other
# top-level key is a provider id.
PROVIDER_KEY = "provider"


class AgentRole(str, Enum):
    """The two independent agent slots each provider has."""

    CHAT = "chat"
    COMMAND = "command"

    @property
    def field_name(self) -> str:
        return f"{self.value}_agent"


RoleLike = Union[AgentRole, str]


def to_role(role: RoleLike) -> AgentRole:
    """Coerce ``"chat"`` / ``"command"`` (or an AgentRole) to AgentRole."""
    try:
        return AgentRole(role)
    except ValueError:
        raise ValueError(
            f"Unknown agent role {role!r}; "
            f"expected one of {[r.value for r in AgentRole]}",
        ) from None


class ProviderSelection(BaseModel):
    """Chosen agent per role for one provider (either may be unset)."""

    chat_agent: Optional[str] = Field(
        default=None,
        description="Agent used for chat sessions",
    )
    command_agent: Optional[str] = Field(
        default=None,
        description="Agent used for one-shot commands",
    )

    def get(self, role: RoleLike) -> Optional[str]:
        return getattr(self, to_role(role).field_name)

    def set(self, role: RoleLike, agent: Optional[str]) -> None:
        setattr(self, to_role(role).field_name, agent)


class ProviderAgents(BaseModel):
    """Agents currently available from one provider, in preference order."""

    chat: List[str] = Field(default_factory=list)
    command: List[str] = Field(default_factory=list)

    def for_role(self, role: RoleLike) -> List[str]:
        return getattr(self, to_role(role).value)


def _read_field(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _read_entry(value: Any) -> Optional[ProviderSelection]:
    """Read one provider record from the raw document.

    Older writers encoded an empty record as an empty JSON array.
    """
    if isinstance(value, list) and not value:
        return ProviderSelection()
    if not isinstance(value, dict):
        return None
    return ProviderSelection(
        chat_agent=_read_field(value.get(AgentRole.CHAT.field_name)),
        command_agent=_read_field(value.get(AgentRole.COMMAND.field_name)),
    )


class SelectionSnapshot(BaseModel):
    """Current provider plus one selection record per provider."""

    provider: Optional[str] = Field(
        default=None,
        description="ID of the active provider",
    )
    entries: Dict[str, ProviderSelection] = Field(default_factory=dict)

    def to_table(self) -> dict:
        """Return the flat document shape written to state.json."""
        table: dict = {
            pid: entry.model_dump(mode="json", exclude_none=True)
            for pid, entry in self.entries.items()
        }
        if self.provider is not None:
            table[PROVIDER_KEY] = self.provider
        return table

    @classmethod
    def from_table(cls, raw: Any) -> SelectionSnapshot:
        """Build a snapshot from a parsed state.json document.

        Anything with the wrong shape is read as unset rather than
        rejected; reconciliation replaces it with a default later.
        """
        if not isinstance(raw, dict):
            return cls()
        entries: dict[str, ProviderSelection] = {}
        for key, value in raw.items():
            if key == PROVIDER_KEY:
                continue
            entry = _read_entry(value)
            if entry is not None:
                entries[key] = entry
        return cls(
            provider=_read_field(raw.get(PROVIDER_KEY)),
            entries=entries,
        )
