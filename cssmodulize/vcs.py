"""Renaming stylesheets to their module names."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from .errors import VcsError
from .styles.naming import module_style_name

logger = logging.getLogger(__name__)


def _inside_work_tree(directory: Path) -> bool:
    try:
        completed = subprocess.run(
            ["git", "rev-parse", "--is-inside-work-tree"],
            cwd=directory,
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError:
        return False
    return completed.returncode == 0 and completed.stdout.strip() == "true"


def rename_style_file(path: Path, use_git: bool = True) -> Path:
    """Rename ``path`` to its ``.module`` name and return the new path.

    With ``use_git`` the rename goes through ``git mv`` so history follows
    the file.

    Raises:
        VcsError: if the file is missing, the target exists or git fails.
    """
    path = Path(path)
    target = path.with_name(module_style_name(path.name))
    if target == path:
        return path
    if not path.exists():
        raise VcsError("Stylesheet to rename does not exist", path=str(path))
    if target.exists():
        raise VcsError(f"Cannot rename: {target.name} already exists", path=str(path))

    if not use_git:
        path.rename(target)
        logger.info("Renamed %s -> %s", path, target.name)
        return target

    if not _inside_work_tree(path.parent):
        raise VcsError(
            "Stylesheet is not inside a git work tree",
            path=str(path),
            hint="Run inside a git repository or pass --no-git",
        )
    try:
        subprocess.run(
            ["git", "mv", path.name, target.name],
            cwd=path.parent,
            capture_output=True,
            text=True,
            check=True,
        )
    except subprocess.CalledProcessError as exc:
        detail = (exc.stderr or exc.stdout or "").strip()
        raise VcsError(f"git mv failed: {detail}", path=str(path)) from exc
    logger.info("git mv %s -> %s", path, target.name)
    return target


__all__ = ["rename_style_file"]
