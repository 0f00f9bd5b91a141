"""Path helpers for arena output and run metadata.

Environment-first, with fallbacks that still work when installed as a
package or executed from arbitrary CWDs.
"""

from __future__ import annotations

import os
import subprocess
from pathlib import Path


def _find_git_root(start: Path) -> Path | None:
    cur = start
    for _ in range(5):
        if (cur / ".git").exists():
            return cur
        if cur.parent == cur:
            break
        cur = cur.parent
    return None


def repo_root() -> Path:
    """Best-effort repository root.

    Order: env var TICTAC_REPO_ROOT -> nearest parent containing .git -> CWD.
    """
    env = os.getenv("TICTAC_REPO_ROOT")
    if env:
        return Path(env)
    git_root = _find_git_root(Path(__file__).resolve())
    if git_root is not None:
        return git_root
    return Path.cwd()


def runs_dir() -> Path:
    p = os.getenv("TICTAC_RUNS_DIR")
    return Path(p) if p else repo_root() / "runs"


def get_git_commit() -> str | None:
    """Return the current git commit hash, or None outside a repository."""
    root = repo_root()
    try:
        out = subprocess.check_output(
            ["git", "-C", str(root), "rev-parse", "HEAD"],
            stderr=subprocess.DEVNULL,
            text=True,
            timeout=2.0,
        )
        return out.strip()
    except (OSError, subprocess.SubprocessError):
        # Try reading .git/HEAD and the ref file
        head = root / ".git" / "HEAD"
        try:
            txt = head.read_text().strip()
        except OSError:
            return None
        if txt.startswith("ref:"):
            ref_file = root / ".git" / txt.split()[1]
            if ref_file.exists():
                return ref_file.read_text().strip()
        return txt or None


def get_git_is_dirty() -> bool | None:
    """True with uncommitted changes, False if clean, None if unknown."""
    root = repo_root()
    try:
        out = subprocess.check_output(
            ["git", "-C", str(root), "status", "--porcelain"],
            stderr=subprocess.DEVNULL,
            text=True,
            timeout=2.0,
        )
        return len(out.strip()) > 0
    except (OSError, subprocess.SubprocessError):
        return None
