# -*- coding: utf-8 -*-
import os
from pathlib import Path

WORKING_DIR = (
    Path(os.environ.get("AGENT_SELECTION_WORKING_DIR", "~/.agent_selection"))
    .expanduser()
    .resolve()
)

# Fixed state file name (not configurable).
STATE_FILE = "state.json"
