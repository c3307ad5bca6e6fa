# src/iview/discovery.py
from __future__ import annotations

import logging
import shutil
import sys
from pathlib import Path
from typing import Callable, Iterable, List, Optional

log = logging.getLogger(__name__)


def _is_bare(name: str) -> bool:
    return "/" not in name and "\\" not in name


def _first_match(dirs: List[Path], name: str, check: Callable[[Path], bool]) -> str:
    for d in dirs:
        cand = d / name
        if check(cand):
            return str(cand.resolve())
    return ""


def find_viewing_application(
    executable_names: Iterable[str],
    search_path: Iterable[str],
    platform: Optional[str] = None,
) -> str:
    """
    search_path の各ディレクトリから executable_names を順に探す。
    macOS では .app バンドル（ディレクトリ）を全ディレクトリで先に探す。
    見つからなければ空文字。
    """
    platform = platform or sys.platform
    dirs = [Path(d).expanduser() for d in search_path]
    log.debug("Default search path: %s", [str(d) for d in dirs])

    result = ""
    for name in executable_names:
        if platform == "darwin":
            # 先に探索パス全体からディレクトリ（.app）を探し、無ければファイル
            result = _first_match(dirs, name, Path.is_dir)
        if not result:
            result = _first_match(dirs, name, Path.is_file)
        if not result and _is_bare(name):
            result = shutil.which(name) or ""
        if result:
            break

    log.debug("FindViewingApplication: %s", result or "(none)")
    return result
