# src/iview/config.py
from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field, replace
from typing import Mapping, Optional, Sequence, Tuple

IMAGEJ_OPEN_MACRO = 'open("%f"); rename("%t");'
NIFTI_COLOR_MACRO = ' run("Make Composite", "display=Composite");'

DEFAULT_EXTENSION = ".tif"

ENV_COMMAND = "IVIEW_SHOW_COMMAND"
ENV_COLOR_COMMAND = "IVIEW_SHOW_COLOR_COMMAND"
ENV_EXTENSION = "IVIEW_SHOW_EXTENSION"


@dataclass(frozen=True)
class ViewerConfig:
    """起動時に一度だけ作って ImageViewer に渡す設定値"""
    view_command: str
    color_command: str
    fiji_command: str
    file_extension: str = DEFAULT_EXTENSION
    search_path: Tuple[str, ...] = field(default_factory=tuple)
    executable_names: Tuple[str, ...] = field(default_factory=tuple)

    def with_overrides(self, **changes) -> "ViewerConfig":
        # None は「指定なし」扱い
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def _is_windows(platform: str) -> bool:
    return platform.startswith("win")


def default_commands(platform: str) -> Tuple[str, str, str]:
    """(view, color, fiji) の既定テンプレート"""
    if _is_windows(platform):
        view = f"%a -eval '{IMAGEJ_OPEN_MACRO}'"
        color = f"%a -eval '{IMAGEJ_OPEN_MACRO}{NIFTI_COLOR_MACRO}'"
        fiji = f"%a -eval '{IMAGEJ_OPEN_MACRO}'"
    elif platform == "darwin":
        view = f"open -a %a -n --args -eval '{IMAGEJ_OPEN_MACRO}'"
        color = f"open -a %a -n --args -eval '{IMAGEJ_OPEN_MACRO}{NIFTI_COLOR_MACRO}'"
        fiji = view
    else:
        # linux: ImageJ は -e、Fiji は -eval
        view = f"%a -e '{IMAGEJ_OPEN_MACRO}'"
        color = f"%a -e '{IMAGEJ_OPEN_MACRO}{NIFTI_COLOR_MACRO}'"
        fiji = f"%a -eval '{IMAGEJ_OPEN_MACRO}'"
    return view, color, fiji


def default_search_path(platform: str, environ: Mapping[str, str]) -> Tuple[str, ...]:
    path = []
    if _is_windows(platform):
        for var in ("PROGRAMFILES", "PROGRAMFILES(x86)", "PROGRAMW6432"):
            if environ.get(var):
                path.append(environ[var] + "\\")
        profile = environ.get("USERPROFILE")
        if profile:
            path.append(profile + "\\")
            path.append(profile + "\\Desktop\\")
    elif platform == "darwin":
        path += ["/Applications/", "/Developer/", "/opt/", "/usr/local/"]
    else:
        path.append("./")
        home = environ.get("HOME")
        if home:
            path.append(home + "/bin/")
        path += ["/opt/", "/usr/local/"]
    return tuple(path)


def default_executable_names(platform: str) -> Tuple[str, ...]:
    if _is_windows(platform):
        return ("Fiji.app/ImageJ-win64.exe", "Fiji.app/ImageJ-win32.exe", "ImageJ/ImageJ.exe")
    if platform == "darwin":
        return ("Fiji.app", "ImageJ/ImageJ64.app", "ImageJ/ImageJ.app")
    return ("Fiji.app/ImageJ-linux64", "ImageJ/ImageJ")


def load_config(
    platform: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    command: Optional[str] = None,
    color_command: Optional[str] = None,
    extension: Optional[str] = None,
    search_path: Optional[Sequence[str]] = None,
    executable_names: Optional[Sequence[str]] = None,
) -> ViewerConfig:
    """
    優先順位: 引数での明示指定 > 環境変数 > プラットフォーム既定値
    """
    platform = platform or sys.platform
    environ = os.environ if environ is None else environ

    view, color, fiji = default_commands(platform)
    return ViewerConfig(
        view_command=command or environ.get(ENV_COMMAND) or view,
        color_command=color_command or environ.get(ENV_COLOR_COMMAND) or color,
        fiji_command=fiji,
        file_extension=extension or environ.get(ENV_EXTENSION) or DEFAULT_EXTENSION,
        search_path=tuple(search_path) if search_path is not None
        else default_search_path(platform, environ),
        executable_names=tuple(executable_names) if executable_names is not None
        else default_executable_names(platform),
    )
