# displaycontent/cli/console_output.py
"""
Renders the configured folders and their files for the terminal.
"""
from typing import Sequence

import click
from rich.console import Console as RichConsole
from rich.markup import escape
from rich.table import Table
import structlog

from displaycontent.core.discovery import FolderConfiguration
from displaycontent.core.step import DisplayContentStep

log = structlog.get_logger(__name__)

def print_folder_tables(step: DisplayContentStep, console: RichConsole) -> None:
    folders = step.configured_folders
    log.debug("console_folder_output_requested", folders=len(folders))
    if not folders:
        click.secho("No folders configured for this project and step.", fg="yellow", err=True)
        return

    for folder in folders:
        title = folder.label or folder.path.name
        table = Table(title=escape(f"{title} ({folder.path})"), title_justify="left", expand=False)
        table.add_column("File", overflow="fold")
        table.add_column("Size", justify="right", no_wrap=True)
        if not folder.files:
            table.add_row("[dim]no files[/dim]", "")
        for file_path in folder.files:
            table.add_row(escape(file_path.name), step.get_file_size(file_path))
        console.print(table)

def print_folder_paths(folders: Sequence[FolderConfiguration]) -> None:
    # one absolute path per line, for scripting.
    for folder in folders:
        for file_path in folder.files:
            click.echo(str(file_path))
