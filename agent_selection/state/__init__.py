# -*- coding: utf-8 -*-
"""Provider / agent selection: models, state.json store and manager."""

from .manager import SelectionState, load_snapshot
from .models import (
    AgentRole,
    ProviderAgents,
    ProviderSelection,
    SelectionSnapshot,
)
from .store import (
    file_exists,
    file_to_table,
    get_state_file_path,
    table_to_file,
)

__all__ = [
    # models
    "AgentRole",
    "ProviderAgents",
    "ProviderSelection",
    "SelectionSnapshot",
    # store
    "file_exists",
    "file_to_table",
    "get_state_file_path",
    "table_to_file",
    # manager
    "SelectionState",
    "load_snapshot",
]
