# -*- coding: utf-8 -*-
from .state import (
    AgentRole,
    ProviderAgents,
    ProviderSelection,
    SelectionSnapshot,
    SelectionState,
)

__all__ = [
    "AgentRole",
    "ProviderAgents",
    "ProviderSelection",
    "SelectionSnapshot",
    "SelectionState",
]
