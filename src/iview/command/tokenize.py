# src/iview/command/tokenize.py
from __future__ import annotations

from typing import List

QUOTES = ("'", '"')
SEPARATOR = " "


def unquote(word: str) -> str:
    """先頭と末尾が同じ引用符なら 1 組だけ外す。"""
    if len(word) >= 2 and word[0] in QUOTES and word[-1] == word[0]:
        return word[1:-1]
    return word


def tokenize(resolved: str) -> List[str]:
    """
    スペース区切りで単語に分割する。引用符の中のスペースは区切りにしない。

    引用符はスタックで追跡する。スタック先頭と同じ引用符なら閉じ、
    違う引用符なら入れ子として積む（' の中の " も 1 段になる）。
    閉じていない引用符はエラーにせず、集めた分をそのまま単語にする。
    """
    words: List[str] = []
    stack: List[str] = []
    word: List[str] = []

    for ch in resolved:
        if ch in QUOTES:
            word.append(ch)
            if stack and stack[-1] == ch:
                stack.pop()
            else:
                stack.append(ch)
        elif ch == SEPARATOR:
            if stack:
                word.append(ch)
            elif word:
                words.append(unquote("".join(word)))
                word = []
        else:
            word.append(ch)

    if word:
        words.append(unquote("".join(word)))
    return words
