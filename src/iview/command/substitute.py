# src/iview/command/substitute.py
from __future__ import annotations

from typing import List, Tuple

from iview.errors import MissingApplication

PERCENT = "%"


def substitute(template: str, app: str, file: str, title: str) -> Tuple[str, bool]:
    """
    テンプレート中の %a / %f / %t / %% を置換する。

    戻り値は (置換後の文字列, %f が現れたかどうか)。
    %a が使われていて app が空なら MissingApplication。
    未知の %x と末尾の % はそのまま出力する。
    """
    out: List[str] = []
    file_seen = False

    chars = iter(template)
    for ch in chars:
        if ch != PERCENT:
            out.append(ch)
            continue

        nxt = next(chars, None)
        if nxt is None:
            # 末尾の % は素通し
            out.append(PERCENT)
        elif nxt == PERCENT:
            out.append(PERCENT)
        elif nxt == "a":
            if not app:
                raise MissingApplication()
            out.append(app)
        elif nxt == "t":
            out.append(title)
        elif nxt == "f":
            out.append(file)
            file_seen = True
        else:
            out.append(PERCENT + nxt)

    return "".join(out), file_seen
