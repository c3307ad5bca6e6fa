# src/iview/command/build.py
from __future__ import annotations

import logging
from typing import List

from iview.command.substitute import substitute
from iview.command.tokenize import tokenize

log = logging.getLogger(__name__)


def build(template: str, app: str, file: str, title: str = "") -> List[str]:
    """
    テンプレートから外部プロセス用の引数リストを作る。

    title が空ならファイル名を使う。テンプレートに %f が無ければ
    ファイル名を最後の引数として（分割せずに）追加する。
    """
    resolved, file_seen = substitute(template, app, file, title or file)
    argv = tokenize(resolved)
    if not file_seen:
        argv.append(file)
    log.debug("build: %r -> %r", template, argv)
    return argv
