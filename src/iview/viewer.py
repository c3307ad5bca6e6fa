# src/iview/viewer.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from PIL import Image

from iview.command.build import build
from iview.config import ViewerConfig
from iview.discovery import find_viewing_application
from iview.tempfiles import build_full_file_name, next_tag, write_temp_image
from iview.utils.launch import launch

log = logging.getLogger(__name__)

COLOR_MODES = {"RGB", "RGBA", "CMYK", "YCbCr", "LAB", "HSV"}


def is_color_image(image: Image.Image) -> bool:
    return image.mode in COLOR_MODES


class ImageViewer:
    """ViewerConfig を受け取り、画像を外部ビューアで表示する"""

    def __init__(self, config: ViewerConfig, application: Optional[str] = None):
        self.config = config
        if application is None:
            application = find_viewing_application(config.executable_names, config.search_path)
        self.application = application
        self.file_extension = config.file_extension
        self.title = ""
        self._custom_command = ""

    # --- command -------------------------------------------------------

    @property
    def command(self) -> str:
        return self._custom_command or self.config.view_command

    def set_command(self, command: str) -> None:
        self._custom_command = command

    def clear_command(self) -> None:
        self._custom_command = ""

    def select_template(self, is_color: bool = False) -> str:
        if self._custom_command:
            return self._custom_command
        if "Fiji" in self.application:
            # Fiji はカラー用コマンド不要
            return self.config.fiji_command
        return self.config.color_command if is_color else self.config.view_command

    def build_command(self, file: str, is_color: bool = False) -> List[str]:
        template = self.select_template(is_color)
        log.debug("template: %s", template)
        return build(template, self.application, file, self.title)

    # --- show ----------------------------------------------------------

    def temp_file_for(self, name: str = "") -> str:
        return build_full_file_name(name, self.file_extension, next_tag())

    def execute(self, image: Image.Image, name: str = "", wait: bool = False) -> Tuple[str, List[str]]:
        """一時ファイルに書き出してからビューアを起動する"""
        path = self.temp_file_for(name)
        # 先にコマンドを組み立てる（%a 不足なら書き出さずに失敗させる）
        argv = self.build_command(path, is_color=is_color_image(image))
        write_temp_image(image, path)
        launch(argv, wait=wait)
        return path, argv

    def show_file(self, path: Path, wait: bool = False) -> List[str]:
        path = Path(path).resolve()
        if not path.exists():
            raise FileNotFoundError(path)
        argv = self.build_command(str(path))
        launch(argv, wait=wait)
        return argv
