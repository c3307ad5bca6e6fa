# src/iview/cli.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text
from PIL import Image, UnidentifiedImageError

from iview.command.build import build
from iview.config import ViewerConfig, load_config
from iview.config_store import ConfigStore, KEYS
from iview.discovery import find_viewing_application
from iview.errors import ViewerError
from iview.logging_utils import setup_logger
from iview.tempfiles import is_writable_extension
from iview.viewer import ImageViewer, is_color_image

app = typer.Typer(help="外部画像ビューア（ImageJ / Fiji）で画像を開く")
console = Console()

# --- sub apps ---
config_app = typer.Typer(help="プロファイル設定を管理します")
app.add_typer(config_app, name="config")

_store: Optional[ConfigStore] = None


def get_store() -> ConfigStore:
    global _store
    if _store is None:
        _store = ConfigStore()
    return _store


# --- 小ヘルパ：設定の解決 ---
def resolve_config(profile: str, ext: Optional[str]) -> ViewerConfig:
    return load_config().with_overrides(file_extension=ext or get_store().get(profile, "extension"))


def argv_table(argv, title: str = "Command") -> Table:
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Argument")
    for i, word in enumerate(argv):
        table.add_row(str(i), Text(word))
    return table


@app.command("show")
def show_cmd(
    image: Path = typer.Argument(..., exists=True, dir_okay=False, help="表示する画像"),
    title: str = typer.Option("", "--title", "-t", help="ウィンドウタイトル（省略時はファイル名）"),
    command: Optional[str] = typer.Option(None, "--command", "-c", help="コマンドテンプレート（%a %f %t %%）"),
    application: Optional[str] = typer.Option(None, "--app", help="ビューアの実行ファイル"),
    ext: Optional[str] = typer.Option(None, "--ext", help="一時ファイルの拡張子 例: .tif"),
    profile: str = typer.Option("default", "--profile", "-p", help="設定プロフィール名"),
    copy: bool = typer.Option(True, "--copy/--no-copy", help="一時ファイルに書き出してから開く"),
    dry_run: bool = typer.Option(False, "--dry-run", help="起動せずコマンドだけ表示"),
    wait: bool = typer.Option(False, "--wait", help="ビューアの終了を待つ"),
    debug: bool = typer.Option(False, "--debug", "-d", help="詳細ログ"),
):
    setup_logger(debug)
    store = get_store()
    cfg = resolve_config(profile, ext)
    viewer = ImageViewer(cfg, application or store.get(profile, "application"))
    viewer.title = title
    # カスタムコマンドはカラー用・Fiji 用より優先
    custom = command or store.get(profile, "command")
    if custom:
        viewer.set_command(custom)

    try:
        if not copy:
            if dry_run:
                argv = viewer.build_command(str(image.resolve()))
            else:
                argv = viewer.show_file(image, wait=wait)
            console.print(argv_table(argv))
            return

        try:
            with Image.open(image) as im:
                im.load()
                name = image.stem
                if dry_run:
                    path = viewer.temp_file_for(name)
                    argv = viewer.build_command(path, is_color=is_color_image(im))
                else:
                    path, argv = viewer.execute(im, name, wait=wait)
        except (UnidentifiedImageError, OSError) as e:
            typer.secho(f"[show] 画像を読み込めません: {image}: {e}", fg=typer.colors.RED)
            raise typer.Exit(code=2)
    except ViewerError as e:
        typer.secho(f"[show] error: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=2)

    console.print(argv_table(argv))
    if dry_run:
        console.print(f"[yellow]dry-run[/yellow]: {path} は書き出していません")
    else:
        console.print(f"[green]Wrote:[/green] {path}")


@app.command("command")
def command_cmd(
    template: str = typer.Argument(..., help="コマンドテンプレート"),
    file: str = typer.Argument(..., help="%f に入るファイル名"),
    application: str = typer.Option("", "--app", help="%a に入るアプリケーション"),
    title: str = typer.Option("", "--title", "-t", help="%t に入るタイトル"),
):
    """テンプレートを展開して引数リストを表示（デバッグ用）"""
    try:
        argv = build(template, application, file, title)
    except ViewerError as e:
        typer.secho(f"[command] error: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=2)
    console.print(argv_table(argv))


@app.command("find")
def find_cmd(
    debug: bool = typer.Option(False, "--debug", "-d", help="詳細ログ"),
):
    """ビューアを探索パスから探す"""
    setup_logger(debug)
    cfg = load_config()

    table = Table(title="Search")
    table.add_column("Search path")
    table.add_column("Executable names")
    rows = max(len(cfg.search_path), len(cfg.executable_names))
    for i in range(rows):
        d = cfg.search_path[i] if i < len(cfg.search_path) else ""
        n = cfg.executable_names[i] if i < len(cfg.executable_names) else ""
        table.add_row(d, n)
    console.print(table)

    found = find_viewing_application(cfg.executable_names, cfg.search_path)
    if not found:
        typer.secho("[find] ビューアが見つかりません。iview config set-app で指定してください。", fg=typer.colors.YELLOW)
        raise typer.Exit(code=1)
    typer.echo(found)


def _set_value(profile: str, key: str, value: str) -> None:
    try:
        get_store().set(profile, key, value)
        typer.secho(f'[config] "{profile}".{key} = {value}', fg=typer.colors.GREEN)
    except (KeyError, ValueError, OSError) as e:
        typer.secho(f"[config] error: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)


@config_app.command("set-command")
def config_set_command(
    profile: str = typer.Argument(..., help="プロフィール名（例: default）"),
    command: str = typer.Argument(..., help="コマンドテンプレート"),
):
    """プロフィールのコマンドテンプレートを登録"""
    _set_value(profile, "command", command)


@config_app.command("set-app")
def config_set_app(
    profile: str = typer.Argument(..., help="プロフィール名（例: default）"),
    application: Path = typer.Argument(..., exists=True, help="ビューアの実行ファイル"),
):
    """プロフィールのビューアを登録"""
    _set_value(profile, "application", str(application.expanduser().resolve()))


@config_app.command("set-ext")
def config_set_ext(
    profile: str = typer.Argument(..., help="プロフィール名（例: default）"),
    ext: str = typer.Argument(..., help="一時ファイルの拡張子"),
):
    if not ext.startswith("."):
        ext = f".{ext}"
    if not is_writable_extension(ext):
        typer.secho(f"[config] error: Pillow で保存できない拡張子です: {ext}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    _set_value(profile, "extension", ext)


@config_app.command("unset")
def config_unset(
    profile: str = typer.Argument(..., help="プロフィール名"),
    key: str = typer.Argument(..., help=f"キー（{' / '.join(KEYS)}）"),
):
    if not get_store().unset(profile, key):
        typer.secho(f'[config] "{profile}".{key} は未設定', fg=typer.colors.YELLOW)
        raise typer.Exit(code=1)
    typer.secho(f'[config] "{profile}".{key} を削除しました', fg=typer.colors.GREEN)


@config_app.command("show")
def config_show(
    profile: str = typer.Argument("default", help="プロフィール名（省略時 default）"),
):
    store = get_store()
    values = {k: store.get(profile, k) for k in KEYS}
    if not any(values.values()):
        typer.secho(f'[config] "{profile}" は未設定', fg=typer.colors.YELLOW)
        raise typer.Exit(code=1)
    for k, v in values.items():
        typer.echo(f"{k}: {v if v else '(unset)'}")


@config_app.command("list")
def config_list():
    names = get_store().list_profiles()
    if not names:
        typer.echo("（まだプロファイルがありません）")
    else:
        for n in names:
            typer.echo(n)


def main():
    app()


if __name__ == "__main__":
    main()
