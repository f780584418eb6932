"""Module: external_tools.py

Author: Michael Economou
Date: 2026-10-12

External tool detection and path resolution.

Lookup order for an executable:
- an explicit path given by the caller (e.g. --exiftool)
- the tool's environment variable (MEDIARENAME_EXIFTOOL for ExifTool)
- the system PATH

Usage:
    from mediarename.utils.shared.external_tools import ToolName, get_tool_path

    exiftool = get_tool_path(ToolName.EXIFTOOL)
"""

import os
import platform
import shutil
import subprocess
from enum import Enum

from mediarename.config import EXIFTOOL_PATH_ENV, EXIFTOOL_TIMEOUT_VERSION
from mediarename.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


class ToolName(str, Enum):
    """Supported external tools."""

    EXIFTOOL = "exiftool"


TOOL_ENV_VARS = {
    ToolName.EXIFTOOL: EXIFTOOL_PATH_ENV,
}


def get_system_tool_path(tool_name: ToolName) -> str | None:
    """Find tool in system PATH.

    Args:
        tool_name: Tool to locate

    Returns:
        Path string to the tool or None if not found

    """
    candidates = [tool_name.value]
    if platform.system() == "Windows":
        candidates.insert(0, f"{tool_name.value}.exe")

    for candidate in candidates:
        found = shutil.which(candidate)
        if found:
            logger.debug("[ExternalTools] Found system %s at: %s", tool_name.value, found)
            return found
    return None


def get_tool_path(tool_name: ToolName, explicit_path: str | None = None) -> str:
    """Get the path to an external tool, with fallback strategies.

    Args:
        tool_name: Tool to locate
        explicit_path: Path given by the user; takes precedence when set

    Returns:
        Path to the executable

    Raises:
        FileNotFoundError: Tool could not be located

    """
    configured = explicit_path or os.environ.get(TOOL_ENV_VARS[tool_name], "")
    if configured:
        configured = os.path.expanduser(configured)
        if os.path.isfile(configured):
            return configured
        found = shutil.which(configured)
        if found:
            return found
        raise FileNotFoundError(f"{tool_name.value} not found at {configured}")

    system_path = get_system_tool_path(tool_name)
    if system_path:
        return system_path

    raise FileNotFoundError(
        f"{tool_name.value} not found in PATH; install it or set {TOOL_ENV_VARS[tool_name]}"
    )


def get_tool_version(tool_path: str) -> str | None:
    """Return `<tool> -ver` output, or None when the tool cannot run."""
    try:
        result = subprocess.run(
            [tool_path, "-ver"],
            capture_output=True,
            text=True,
            timeout=EXIFTOOL_TIMEOUT_VERSION,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.warning("[ExternalTools] Cannot run %s: %s", tool_path, e)
        return None

    if result.returncode != 0:
        logger.warning("[ExternalTools] %s -ver returned code %d", tool_path, result.returncode)
        return None
    return result.stdout.strip()


def is_tool_available(tool_name: ToolName, explicit_path: str | None = None) -> bool:
    """Check whether the tool can be located and executed."""
    try:
        path = get_tool_path(tool_name, explicit_path)
    except FileNotFoundError:
        return False
    return get_tool_version(path) is not None
