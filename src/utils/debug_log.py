"""
Debug Log Utility

Provides optional, file-based debug logging for frame loading and rendering.
Logs are written only when enabled via environment variable; write failures
are ignored so the viewer keeps animating even if the log cannot be written.

Inputs:
    - debug_log(location, message, data) calls from application code
    - Environment: DICOMLOOPVIEWER_DEBUG_LOG (set to 1, true, or yes to enable)
    - Environment: DICOMLOOPVIEWER_DEBUG_LOG_PATH (optional override of the log file)

Outputs:
    - When enabled: appends JSON lines to <project_root>/.debug/debug.log
    - When disabled or on error: no side effects

Requirements:
    - Standard library only: pathlib, os, json, time
"""

import json
import os
import time
from pathlib import Path
from typing import Any, Dict, Optional

# This file is src/utils/debug_log.py -> parent.parent.parent is the project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

_TRUE_VALUES = ("1", "true", "yes")


def is_debug_log_enabled() -> bool:
    """Return True when DICOMLOOPVIEWER_DEBUG_LOG is set to 1, true, or yes."""
    return os.getenv("DICOMLOOPVIEWER_DEBUG_LOG", "0").strip().lower() in _TRUE_VALUES


def get_debug_log_path() -> Path:
    """
    Get the file debug lines are appended to.

    Returns:
        Path from DICOMLOOPVIEWER_DEBUG_LOG_PATH, or <project_root>/.debug/debug.log
    """
    override: Optional[str] = os.getenv("DICOMLOOPVIEWER_DEBUG_LOG_PATH")
    if override:
        return Path(override)
    return _PROJECT_ROOT / ".debug" / "debug.log"


def debug_log(location: str, message: str, data: Optional[Dict[str, Any]] = None) -> None:
    """
    Append one JSON log line when debug logging is enabled.

    Args:
        location: Call site identifier (e.g. "dicom_loader.py:load_file").
        message: Short description of the event.
        data: Optional dict of context (must be JSON-serializable).
    """
    if not is_debug_log_enabled():
        return
    try:
        log_path = get_debug_log_path()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "location": location,
            "message": message,
            "data": data or {},
            "timestamp": int(time.time() * 1000),
        }
        with open(log_path, "a", encoding="utf-8") as f:
            f.write(json.dumps(payload) + "\n")
    except (OSError, TypeError, ValueError):
        pass
