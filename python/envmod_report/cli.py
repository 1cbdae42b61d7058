from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from dotenv import find_dotenv, load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .collector import ConfigCollector
from .errors import EnvModReportError
from .rc_files import load_active_configuration
from .reporting import ReportFormatter, report, report_json
from .settings import ModuleToolSettings

app = typer.Typer(help="環境モジュール管理ツールの構成を表示するツール")
console = Console()


class OutputFormat(str, Enum):
    text = "text"
    json = "json"
    table = "table"


def load_settings(env_file: Optional[Path]) -> ModuleToolSettings:
    if env_file is not None:
        if not env_file.exists():
            raise typer.BadParameter(f"env ファイルが見つかりません: {env_file}")
        load_dotenv(env_file)
    else:
        load_dotenv(find_dotenv(usecwd=True))
    try:
        return ModuleToolSettings.from_env()
    except ValidationError as exc:
        raise typer.BadParameter(f"設定の読み込みに失敗しました: {exc}") from exc


@app.command()
def show(
    output_format: OutputFormat = typer.Option(
        OutputFormat.text,
        "--format",
        "-f",
        help="出力形式（text / json / table）",
    ),
    env_file: Optional[Path] = typer.Option(
        None,
        "--env-file",
        help="設定を読み込む .env ファイル",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="詳細ログを出力する"),
) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    settings = load_settings(env_file)

    try:
        active = load_active_configuration(settings.rc_search_path())
        collector = ConfigCollector(settings, active)
        if output_format is OutputFormat.json:
            output = report_json(collector)
        elif output_format is OutputFormat.table:
            collector.snapshot()
            output = None
        else:
            output = report(collector)
    except EnvModReportError as exc:
        console.print(f"[red]レポートの作成に失敗しました:[/] {exc}")
        raise typer.Exit(code=1) from exc

    if output is None:
        _print_table(collector)
    else:
        typer.echo(output)


def _print_table(collector: ConfigCollector) -> None:
    table = Table(title="Configuration")
    table.add_column("Description")
    table.add_column("Value")
    for _, entry in collector.snapshot().sorted_items():
        table.add_row(entry.label, Text(str(entry.value)))
    console.print(table)

    formatter = ReportFormatter(collector)
    for block in [formatter.rc_file_block(), formatter.cache_block(), formatter.property_block()]:
        if block:
            console.print()
            console.print(block, markup=False, highlight=False)


if __name__ == "__main__":
    app()
