"""CLI interface for gtmpl - Gauge project templates."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn, Optional

import click

from .config import DEFAULT_SETTINGS, gtmpl_home, load_settings, save_setting
from .errors import GtmplError
from .init import InitContext, from_template, from_url, from_zip_file
from .templates import all_names, get_template, list_templates, merge, update_template
from .utils import console, err_console

logger = logging.getLogger(__name__)


def _fail(error: GtmplError) -> NoReturn:
    err_console.print(str(error), style="bold red", markup=False, highlight=False)
    raise SystemExit(1)


def _home(ctx: click.Context) -> Path:
    return ctx.obj["home"]


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Create Gauge projects from templates and manage template locations."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    home = gtmpl_home()
    ctx.ensure_object(dict)
    ctx.obj["home"] = home
    try:
        merge(home)
    except GtmplError as e:
        logger.warning("Could not refresh template configuration: %s", e)


@cli.group("template")
def template_group() -> None:
    """Manage template names and download locations."""


@template_group.command("list")
@click.option(
    "--machine-readable",
    is_flag=True,
    default=False,
    help="Print templates as JSON.",
)
@click.pass_context
def template_list_cmd(ctx: click.Context, machine_readable: bool) -> None:
    """List all templates and their locations."""
    try:
        output = list_templates(_home(ctx), machine_readable=machine_readable)
    except GtmplError as e:
        _fail(e)
    click.echo(output.rstrip("\n"))


@template_group.command("get")
@click.argument("name")
@click.pass_context
def template_get_cmd(ctx: click.Context, name: str) -> None:
    """Print the download location of a template."""
    try:
        click.echo(get_template(name, _home(ctx)))
    except GtmplError as e:
        _fail(e)


@template_group.command("add")
@click.argument("name")
@click.argument("url")
@click.pass_context
def template_add_cmd(ctx: click.Context, name: str, url: str) -> None:
    """
    Add a template or change the location of an existing one.

    The location must be an absolute URI pointing at a zip archive.
    """
    try:
        update_template(name, url, _home(ctx))
    except GtmplError as e:
        _fail(e)
    console.print(f"✓ Template {name} -> {url}", style="green")


@template_group.command("names")
@click.pass_context
def template_names_cmd(ctx: click.Context) -> None:
    """Print template names, one per line."""
    try:
        click.echo(all_names(_home(ctx)))
    except GtmplError as e:
        _fail(e)


@cli.command("init")
@click.argument("template_name", required=False)
@click.option("--url", "template_url", default=None, help="Template archive URL.")
@click.option(
    "--zip",
    "template_zip",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Local template zip file.",
)
@click.option("--silent", is_flag=True, default=False, help="Suppress plugin install output.")
@click.pass_context
def init_cmd(
    ctx: click.Context,
    template_name: Optional[str],
    template_url: Optional[str],
    template_zip: Optional[Path],
    silent: bool,
) -> None:
    """
    Initialize a Gauge project in the current directory.

    Give exactly one of TEMPLATE_NAME, --url or --zip. Run
    `gtmpl template names` to see the available templates.
    """
    sources = [s for s in (template_name, template_url, template_zip) if s]
    if len(sources) != 1:
        raise click.UsageError("Specify exactly one of TEMPLATE_NAME, --url or --zip.")

    home = _home(ctx)
    try:
        init_ctx = InitContext(
            project_root=Path.cwd(),
            home=home,
            settings=load_settings(home),
            silent=silent,
        )
        if template_name:
            from_template(template_name, init_ctx)
        elif template_url:
            from_url(template_url, init_ctx)
        else:
            assert template_zip is not None
            from_zip_file(template_zip, init_ctx)
    except GtmplError as e:
        _fail(e)


@cli.command("config")
@click.argument("key", type=click.Choice(list(DEFAULT_SETTINGS.keys())))
@click.argument("value", required=False)
@click.pass_context
def config_cmd(ctx: click.Context, key: str, value: Optional[str]) -> None:
    """Show or change a setting."""
    home = _home(ctx)
    try:
        if value is None:
            settings = load_settings(home)
        else:
            settings = save_setting(key, value, home)
    except GtmplError as e:
        _fail(e)
    current = settings[key]  # type: ignore[literal-required]
    click.echo(str(current).lower() if isinstance(current, bool) else current)


def main() -> None:
    cli(obj={})
