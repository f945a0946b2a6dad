import logging
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any, Optional
from urllib.parse import urlparse

import click
import requests  # type: ignore[import-untyped]
from dotenv import load_dotenv

from sidenotes import widget
from sidenotes.config import WidgetConfig, load_config
from sidenotes.serialize import FORMATS, dump_notes

try:
    __version__ = version("sidenotes")
except PackageNotFoundError:
    __version__ = "0.0.1-dev"


@click.group()
@click.option("--debug/--no-debug", default=False)
@click.option("--trace/--no-trace", default=False)
@click.option(
    "--log-file",
    type=click.Path(file_okay=True, dir_okay=False),
    envvar="SIDENOTES_LOG_FILE",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, file_okay=True, dir_okay=False),
    default=None,
    help="YAML file overriding the widget markup settings.",
)
@click.version_option(__version__, prog_name="sidenotes")
@click.pass_context
def cli(
    ctx: click.Context,
    debug: bool,
    trace: bool,
    log_file: Optional[str] = None,
    config_path: Optional[str] = None,
) -> None:
    """Configure logging, load environment variables and settings.

    Args:
        ctx: Click context object.
        debug: Toggle debug logging.
        trace: Toggle trace logging.
        log_file: Optional path to the log file.
        config_path: Optional YAML configuration file.
    """
    if trace:
        level = 1
    elif debug:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        filename=log_file,
        level=level,
        format="[%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    if trace:
        logging.debug("Trace mode is on")
    if debug:
        logging.debug("Debug mode is on")
    load_dotenv()

    # Environment variables first, then the optional file on top.
    try:
        config = WidgetConfig.from_env()
        if config_path:
            config = load_config(Path(config_path), base=config)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--config") from exc

    ctx.ensure_object(dict)
    ctx.obj["config"] = config


def _load(source: str, cache_dir: Optional[str]) -> Any:  # noqa: ANN401
    """Load the page at ``source``, reporting failures as usage errors."""

    cache_path = Path(cache_dir) if cache_dir else None
    try:
        return widget.load_document(source, cache_path)
    except (OSError, requests.RequestException) as exc:
        raise click.BadParameter(str(exc), param_hint="SOURCE") from exc


def _output_name(source: str) -> str:
    """Return the file name used when writing into a directory."""

    path = urlparse(source).path if widget.is_url(source) else source
    stem = Path(path).stem
    return f"{stem or 'index'}.html"


@cli.command()
@click.argument("source")
@click.option(
    "--cache-dir",
    type=click.Path(file_okay=False, dir_okay=True),
    default=None,
    help="Directory for downloaded pages.",
)
@click.option(
    "--output",
    "output_path",
    type=click.Path(file_okay=True, dir_okay=True),
    default=None,
    help="Write output to FILE or DIRECTORY instead of the console.",
)
@click.option(
    "--expand",
    "expand_ids",
    multiple=True,
    help="Identifier of a note to leave expanded (repeatable).",
)
@click.option("--expand-all", is_flag=True, help="Leave every note expanded.")
@click.pass_context
def transform(
    ctx: click.Context,
    source: str,
    cache_dir: Optional[str] = None,
    output_path: Optional[str] = None,
    expand_ids: tuple[str, ...] = (),
    expand_all: bool = False,
) -> None:
    """Convert the side notes of a rendered page into widgets.

    Args:
        ctx: Click context object.
        source: HTML file path or URL of the page.
        cache_dir: Directory used to cache downloaded pages.
        output_path: Optional file or directory path for the page. If a
            directory is provided, the file name is derived from
            ``source``.
        expand_ids: Notes to expand after initialization.
        expand_all: Expand every note after initialization.
    """

    document = _load(source, cache_dir)
    controller = widget.initialize(document, ctx.obj["config"])

    # Resolve every identifier before touching the document.
    try:
        requested = [controller.get(note_id) for note_id in expand_ids]
    except widget.UnknownNoteError as exc:
        raise click.BadParameter(
            f"Unknown note id: {exc.args[0]}", param_hint="--expand"
        ) from exc

    if expand_all:
        requested = controller.notes
    for note in requested:
        controller.expand(note)

    logging.info(
        "Converted %d side notes, %d expanded",
        len(controller.notes),
        sum(1 for note in controller.notes if note.expanded),
    )

    content = str(document)
    if output_path is None:
        click.echo(content)
        return

    final_path = Path(output_path)
    if final_path.is_dir():
        final_path = final_path / _output_name(source)
    final_path.write_text(content, encoding="utf-8")


@cli.command("inspect")
@click.argument("source")
@click.option(
    "--cache-dir",
    type=click.Path(file_okay=False, dir_okay=True),
    default=None,
    help="Directory for downloaded pages.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(FORMATS),
    default="json",
    help="Output format.",
)
@click.pass_context
def inspect_notes(
    ctx: click.Context,
    source: str,
    cache_dir: Optional[str] = None,
    output_format: str = "json",
) -> None:
    """List the side notes of a rendered page.

    Args:
        ctx: Click context object.
        source: HTML file path or URL of the page.
        cache_dir: Directory used to cache downloaded pages.
        output_format: Format of the listing.
    """

    document = _load(source, cache_dir)
    controller = widget.initialize(document, ctx.obj["config"])
    click.echo(dump_notes(controller.notes, output_format))
