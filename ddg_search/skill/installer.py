"""Install the bundled agent skill description into an OpenClaw state directory."""

import os
import shutil
import sys
from importlib import resources
from pathlib import Path

from ddg_search.core.config import settings
from ddg_search.monitoring.logger import get_logger, setup_logging

logger = get_logger(__name__)

SKILL_NAME = "ddg-search"
SKILL_FILE = "SKILL.md"


def candidate_dirs(home: Path | None = None) -> list[Path]:
    """State directories checked for an existing ``skills`` folder, in order.

    Environment overrides come first, then configured extras, then common
    home and container locations. Workspace-local paths are never included.

    Args:
        home: Home directory (defaults to the current user's)

    Returns:
        Candidate directories
    """
    home = home or Path.home()
    raw = [
        os.environ.get("OPENCLAW_STATE_DIR"),
        os.environ.get("OPENCLAW_HOME"),
        *settings.skill_dirs,
        home / ".openclaw",
        home / "openclaw",
        "/home/openclaw",
        "/home/linuxbrew/.openclaw",
        "/home/linuxbrew/openclaw",
        "/openclaw",
        "/.openclaw",
    ]
    return [Path(d) for d in raw if d]


def install_skill(candidates: list[Path] | None = None) -> Path | None:
    """Copy SKILL.md into the first candidate whose ``skills`` folder exists.

    Args:
        candidates: Directories to check (defaults to candidate_dirs())

    Returns:
        Path of the installed file, or None if no candidate matched
    """
    for state_dir in candidates if candidates is not None else candidate_dirs():
        skills_dir = state_dir / "skills"
        if not skills_dir.is_dir():
            continue

        dest = skills_dir / SKILL_NAME
        dest.mkdir(parents=True, exist_ok=True)
        source = resources.files("ddg_search.skill").joinpath(SKILL_FILE)
        with resources.as_file(source) as path:
            shutil.copyfile(path, dest / SKILL_FILE)

        logger.info(f"Installed skill | dest={dest / SKILL_FILE}")
        return dest / SKILL_FILE

    logger.debug("No skills directory found, skipping skill install")
    return None


def main() -> None:
    """Console script entry point."""
    setup_logging()
    dest = install_skill()
    if dest is None:
        print("No OpenClaw skills directory found; nothing installed.", file=sys.stderr)
    else:
        print(f"Installed {dest}", file=sys.stderr)
