# src/iview/utils/launch.py
from __future__ import annotations

import logging
import subprocess
from typing import Optional, Sequence

from iview.errors import ViewerLaunchError

log = logging.getLogger(__name__)


def launch(argv: Sequence[str], wait: bool = False, timeout: Optional[float] = None) -> subprocess.Popen:
    """
    引数リストをそのまま外部ビューアに渡して起動する。
    シェルは通さない（クォート処理は build 側で済んでいる）。
    """
    if not argv:
        raise ViewerLaunchError("empty command")

    log.debug("launch: %r", list(argv))
    try:
        proc = subprocess.Popen(list(argv))  # 非同期でOK
    except OSError as e:
        raise ViewerLaunchError(f"failed to start viewer {argv[0]!r}: {e}") from e
    log.debug("launched pid=%s", proc.pid)

    if wait:
        try:
            proc.wait(timeout=timeout)
        except subprocess.TimeoutExpired as e:
            raise ViewerLaunchError(f"viewer did not exit within {timeout}s: {argv[0]}") from e
    return proc
