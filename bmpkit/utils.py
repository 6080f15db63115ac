"""Opening image files with the platform's default viewer."""

from __future__ import annotations

import subprocess
import sys


def open_command(filename: str, platform: str) -> list[str] | None:
    """Return the command that opens ``filename`` on ``platform``, or None if unsupported."""
    if platform == "win32":
        return ["cmd", "/c", "start", filename]
    if platform == "darwin":
        return ["open", filename]
    if platform.startswith("linux"):
        return ["xdg-open", filename]
    return None


def open_image_file(filename: str) -> bool:
    """Open ``filename`` in the default viewer; return False when the platform is unsupported."""
    command = open_command(filename, sys.platform)
    if command is None:
        print("Plateforme non supportée pour ouverture automatique.")
        return False
    subprocess.run(command, check=False)
    return True