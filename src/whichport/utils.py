from __future__ import annotations

import subprocess
from typing import Iterable

from whichport.errors import CommandError, CommandFailed

def run(
    args: Iterable[str],
    check: bool = True,
) -> subprocess.CompletedProcess[str]:
    """Run a tool to completion and capture its output.

    Spawn failures become ``CommandFailed``; with ``check`` a non-zero exit
    becomes ``CommandError`` carrying the trimmed stderr.
    """
    argv = list(args)
    try:
        cp = subprocess.run(
            argv,
            text=True,
            encoding="utf-8",
            errors="replace",
            capture_output=True,
            check=False,
        )
    except OSError as e:
        raise CommandFailed(argv[0], str(e)) from e
    if check and cp.returncode != 0:
        stderr = cp.stderr.strip() if cp.stderr else ""
        raise CommandError(argv[0], stderr)
    return cp
