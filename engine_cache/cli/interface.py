# engine_cache/cli/interface.py
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import click
from click_option_group import optgroup
import structlog

from engine_cache import __version__ as app_version
from engine_cache.cli.console_output import print_engine_table
from engine_cache.config.loader import build_config, engines_from_config, load_and_merge_configs
from engine_cache.config.settings import EngineCacheConfig
from engine_cache.core.invoke import invoke_render_file
from engine_cache.core.registry import Engines
from engine_cache.exceptions import EngineCacheError, OutputError
from engine_cache.logging_setup import configure_logging
from engine_cache.util import parse_user_vars

log = structlog.get_logger(__name__)


def _fail(message: str):
    click.secho(f"Error: {message}", fg="red", err=True)
    sys.exit(1)


def _load_registry(ctx: click.Context) -> Tuple[EngineCacheConfig, Engines]:
    # config and engine imports are resolved once, on first use by a subcommand.
    state = ctx.ensure_object(dict)
    if "engines" not in state:
        config = build_config(load_and_merge_configs(), profile=state.get("config_profile"))
        state["config"] = config
        state["engines"] = engines_from_config(config)
    return state["config"], state["engines"]


def _emit(rendered: str, output_file: Optional[Path]):
    if output_file is None:
        click.echo(rendered, nl=False)
        return
    log.info("writing_output_to_file", path=str(output_file))
    try:
        output_file.write_text(rendered, encoding="utf-8")
    except OSError as e:
        raise OutputError(f"failed to write to file '{output_file}': {e}") from e
    click.echo(f"Info: Output written to: {output_file}", err=True)


def _run_guarded(action, *args):
    try:
        action(*args)
    except click.exceptions.Exit: raise
    except EngineCacheError as e:
        log.error("handled_application_error_in_cli", error_type=type(e).__name__, message=str(e))
        _fail(str(e))
    except click.ClickException as e:
        log.error("click_exception_in_cli", error_type=type(e).__name__, message=str(e))
        e.show(); sys.exit(e.exit_code)
    except Exception as e:
        log.critical("unexpected_critical_error_in_cli", message=str(e), exc_info=True)
        _fail(f"unexpected {type(e).__name__}: {e}")


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@optgroup.group("Configuration", help="Where registry options and engines come from.")
@optgroup.option("--config-profile", "config_profile", default=None, help="Apply a profile from config file(s).")
@optgroup.group("Application Behavior", help="Logging.")
@optgroup.option("--verbose", "-v", "verbosity_level", count=True, help="Verbosity: -v info, -vv debug.")
@optgroup.option("--force-json-logs", "force_json_logs", is_flag=True, default=False, help="Force JSON logs.")
@click.version_option(version=app_version, package_name="engine-cache", prog_name="engine-cache", help="Show version and exit.")
@click.pass_context
def main_cli_group(ctx: click.Context, config_profile: Optional[str], verbosity_level: int, force_json_logs: bool):
    """engine-cache: render templates through engines registered by file extension."""
    log_level = "warning"
    if verbosity_level == 1: log_level = "info"
    elif verbosity_level >= 2: log_level = "debug"
    configure_logging(log_level_str=log_level, force_json_logs=force_json_logs)
    ctx.ensure_object(dict)["config_profile"] = config_profile


def _render(ctx: click.Context, template_path: Path, user_vars: Tuple[str, ...],
            engine_ext: Optional[str], output_file: Optional[Path]):
    config, engines = _load_registry(ctx)
    ext = engine_ext or template_path.suffix
    descriptor = engines.get(ext) if ext else engines.get("*")
    if descriptor is None:
        raise EngineCacheError(f"no engine registered for '{ext}' and no '*' fallback.")

    locals_data: Dict[str, Any] = {**config.locals, **parse_user_vars(user_vars)}
    log.info("rendering_template", path=str(template_path), ext=ext, engine=descriptor.name,
             exact_match=engines.has(ext) if ext else False)
    _emit(invoke_render_file(descriptor, template_path, locals_data), output_file)


@main_cli_group.command("render")
@click.argument("template_path", type=click.Path(exists=True, dir_okay=False, readable=True, path_type=Path))
@click.option("--var", "user_vars", multiple=True, metavar="KEY=VALUE", help="Template variables, override config locals.")
@click.option("--engine", "engine_ext", default=None, metavar="EXT", help="Engine extension to use instead of the file suffix.")
@click.option("-o", "--output", "output_file", type=click.Path(dir_okay=False, writable=True, path_type=Path), default=None, help="Path to write the output to.")
@click.pass_context
def render_command(ctx: click.Context, template_path: Path, user_vars: Tuple[str, ...], engine_ext: Optional[str], output_file: Optional[Path]):
    """Render TEMPLATE_PATH with the engine registered for its extension."""
    _run_guarded(_render, ctx, template_path, user_vars, engine_ext, output_file)


@main_cli_group.command("list")
@click.pass_context
def list_command(ctx: click.Context):
    """List registered engines."""
    _run_guarded(lambda: print_engine_table(_load_registry(ctx)[1]))
