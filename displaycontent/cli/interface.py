# displaycontent/cli/interface.py
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import click
from click_option_group import optgroup
from rich.console import Console as RichConsole
import structlog

from displaycontent import __version__ as app_version
from displaycontent.cli.console_output import print_folder_paths, print_folder_tables
from displaycontent.config.settings import WILDCARD, StepContext
from displaycontent.core.download import FileDownloadSink
from displaycontent.core.filesize import file_size_display
from displaycontent.core.step import DisplayContentStep
from displaycontent.exceptions import DisplayContentError
from displaycontent.logging_setup import configure_logging

log = structlog.get_logger(__name__)

def _parse_user_vars(raw_vars: Tuple[str, ...]) -> Dict[str, str]:
    user_vars: Dict[str, str] = {}
    for item in raw_vars:
        if "=" not in item:
            log.warning("ignoring_malformed_var", value=item)
            click.echo(f"Warning: ignoring --var '{item}' (expected KEY=VALUE).", err=True)
            continue
        key, value = item.split("=", 1)
        user_vars[key.strip()] = value
    return user_vars

def _fail(message: str, error: Exception) -> None:
    log.error("handled_application_error_in_cli", error_type=type(error).__name__, message=str(error))
    click.secho(f"Error: {message}", fg="red", err=True)
    sys.exit(1)

def _initialized_step(ctx: click.Context) -> DisplayContentStep:
    obj: Dict[str, Any] = ctx.obj
    step = DisplayContentStep(config_path=obj["config_path"])
    step.initialize(obj["context"], return_path="")
    return step

@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@optgroup.group("Configuration", help="Where the folder configuration comes from.")
@optgroup.option("-C", "--config", "config_path", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Config TOML file. Default: .displaycontent.toml, displaycontent.toml or pyproject.toml in the current directory, then ~/.config/displaycontent/config.toml.")
@optgroup.group("Process Context", help="Values used to select the config block and fill path variables.")
@optgroup.option("--project", "project", default=WILDCARD, show_default=True, help="Project name of the process.")
@optgroup.option("--step", "step_name", default=WILDCARD, show_default=True, help="Name of the workflow step.")
@optgroup.option("--process-id", "process_id", default=None, help="Process id, available as {processid}.")
@optgroup.option("--process-title", "process_title", default=None, help="Process title, available as {processtitle}.")
@optgroup.option("--var", "user_vars", multiple=True, metavar="KEY=VALUE", help="Extra path variables, available as {KEY}.")
@optgroup.group("Application Behavior", help="Logging.")
@optgroup.option("--verbose", "-v", "verbosity_level", count=True, help="Verbosity: -v info, -vv debug.")
@optgroup.option("--force-json-logs", "force_json_logs", is_flag=True, default=False, help="Force JSON logs.")
@click.version_option(version=app_version, package_name="displaycontent", prog_name="displaycontent", help="Show version and exit.")
@click.pass_context
def main_cli_group(ctx: click.Context, **cli_params: Any):
    """displaycontent: list the files of configured workflow folders,
    show their sizes and download them."""

    log_level = "warning"
    if cli_params.get("verbosity_level", 0) == 1: log_level = "info"
    elif cli_params.get("verbosity_level", 0) >= 2: log_level = "debug"
    configure_logging(log_level_str=log_level, force_json_logs=cli_params.get("force_json_logs", False))

    log.debug("cli_command_invoked", params=cli_params)

    context = StepContext(
        project=cli_params["project"],
        step=cli_params["step_name"],
        process_id=cli_params.get("process_id"),
        process_title=cli_params.get("process_title"),
        user_vars=_parse_user_vars(cli_params.get("user_vars") or ()),
    )
    ctx.obj = {
        "config_path": cli_params.get("config_path"),
        "context": context,
        "verbosity": cli_params.get("verbosity_level", 0),
    }

@main_cli_group.command("list")
@click.option("--paths-only", "paths_only", is_flag=True, default=False, help="Print one file path per line instead of tables.")
@click.pass_context
def list_command(ctx: click.Context, paths_only: bool):
    """Resolve the configured folders and list their files with sizes."""
    try:
        step = _initialized_step(ctx)
    except DisplayContentError as e:
        _fail(str(e), e)
        return

    if paths_only:
        print_folder_paths(step.configured_folders)
    else:
        print_folder_tables(step, RichConsole())

@main_cli_group.command("size")
@click.argument("file_path", type=click.Path(path_type=Path))
def size_command(file_path: Path):
    """Print the human-readable size of FILE_PATH ('-' if it cannot be read)."""
    click.echo(file_size_display(file_path))

@main_cli_group.command("download")
@click.argument("file_path", type=click.Path(path_type=Path))
@click.option("-o", "--output", "output_file", type=click.Path(dir_okay=False, writable=True, path_type=Path), default=None, help="Write the file here instead of stdout.")
@click.pass_context
def download_command(ctx: click.Context, file_path: Path, output_file: Optional[Path]):
    """Stream FILE_PATH to --output or stdout."""
    step = DisplayContentStep()

    if output_file is not None:
        # the target is only replaced once the copy has completed.
        partial_file = output_file.with_name(output_file.name + ".part")
        with partial_file.open("wb") as out_stream:
            sink = FileDownloadSink(out_stream)
            step.download_file(file_path, sink)
        if sink.completed:
            partial_file.replace(output_file)
        else:
            partial_file.unlink(missing_ok=True)
    else:
        sink = FileDownloadSink(click.get_binary_stream("stdout"))
        step.download_file(file_path, sink)

    if ctx.obj.get("verbosity", 0) > 0:
        click.echo(f"Content-Type: {sink.content_type}", err=True)
        click.echo(f"Content-Length: {sink.content_length}", err=True)
        for name, value in sink.headers.items():
            click.echo(f"{name}: {value}", err=True)

    if not sink.completed:
        click.secho(f"Error: download of '{file_path}' failed; see log for details.", fg="red", err=True)
        sys.exit(1)
    if output_file is not None:
        click.echo(f"Info: {sink.bytes_written} bytes written to: {output_file}", err=True)
