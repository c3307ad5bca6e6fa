# src/iview/tempfiles.py
from __future__ import annotations

import itertools
import logging
import os
import sys
from pathlib import Path
from typing import Mapping, Optional

from PIL import Image

from iview.errors import TempDirectoryNotFound, TempFileWriteError

log = logging.getLogger(__name__)

_WINDOWS_TMP_VARS = ("TMP", "TEMP", "USERPROFILE", "WINDIR")

# プロセス内で単調増加するタグ
_counter = itertools.count()


def next_tag() -> int:
    return next(_counter)


def format_file_name(temp_dir: str, name: str, extension: str, tag: int) -> str:
    pid = os.getpid()
    if name:
        stem = "".join(name.split())  # 空白は除去
    else:
        stem = "TempFile"
    return f"{temp_dir}{stem}-{pid}-{tag}{extension}"


def double_backslashes(word: str) -> str:
    """
    / と \\ を \\\\ に置き換える。ImageJ マクロ内で Windows のパスを
    文字列として読ませるため。
    """
    return "".join("\\\\" if ch in ("\\", "/") else ch for ch in word)


def temp_directory(platform: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> str:
    platform = platform or sys.platform
    environ = os.environ if environ is None else environ

    if not platform.startswith("win"):
        return "/tmp/"

    for var in _WINDOWS_TMP_VARS:
        value = environ.get(var)
        if value:
            return double_backslashes(value + "\\")
    raise TempDirectoryNotFound(
        "Can not find temporary directory. Tried " + ", ".join(_WINDOWS_TMP_VARS) + " environment variables"
    )


def build_full_file_name(
    name: str,
    extension: str,
    tag: int,
    platform: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    return format_file_name(temp_directory(platform, environ), name, extension, tag)


def is_writable_extension(extension: str) -> bool:
    """Pillow がその拡張子で保存できるか"""
    fmt = Image.registered_extensions().get(extension.lower())
    return fmt is not None and fmt in Image.SAVE


def write_temp_image(image: Image.Image, path: str) -> Path:
    out = Path(path)
    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        image.save(out)
    except (ValueError, OSError) as e:
        raise TempFileWriteError(f"cannot write temp image {out}: {e}") from e
    log.debug("wrote temp image: %s", out)
    return out
