"""Command-line interface for RockLoaders."""

import sys
import time
from pathlib import Path

import click
from colorama import init, Fore, Style

from rockloaders.compilation.change_detector import FingerprintChangeDetector
from rockloaders.config import CONFIG_FILE, LoadersConfig
from rockloaders.constants import MARKUP_EXTENSION, STUBS_DIR, STYLE_EXTENSION
from rockloaders.exceptions import CacheUnavailable, ConfigError, FragmentReadError, InvalidPath
from rockloaders.factory import create_pipeline
from rockloaders.registry.discovery import available_loaders
from rockloaders.utils.console import (
    _rich_success, _rich_error, _rich_info, _rich_warning, _rich_blank_line,
    _create_files_table, _print_table, _plain, _get_console
)
from rockloaders.version import get_version

init(autoreset=True)

ERROR = f"{Fore.RED}{Style.BRIGHT}"
RESET = Style.RESET_ALL


def print_version(ctx, param, value):
    """Print version and exit."""
    if not value or ctx.resilient_parsing:
        return

    from rich.text import Text
    from rich.panel import Panel
    version_text = Text()
    version_text.append("RockLoaders", style="bold cyan")
    version_text.append(f" version {get_version()}", style="white")
    _get_console().print(Panel(version_text, border_style="cyan", padding=(0, 1)))
    ctx.exit()


@click.group(help="RockLoaders: named CSS loading animations compiled into one stylesheet")
@click.option('--version', is_flag=True, callback=print_version,
              expose_value=False, is_eager=True, help="Show version and exit.")
@click.option('--config', 'config_path', default=CONFIG_FILE, show_default=True,
              type=click.Path(dir_okay=False), help="Project configuration file")
@click.pass_context
def cli(ctx, config_path):
    """Main entry point for the RockLoaders CLI."""
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


def _load_config(ctx, **overrides) -> LoadersConfig:
    try:
        return LoadersConfig.from_yml(ctx.obj['config_path'], **overrides)
    except ConfigError as e:
        _rich_error(str(e))
        sys.exit(1)


def _load_pipeline(config: LoadersConfig):
    try:
        return create_pipeline(config)
    except InvalidPath as e:
        _rich_error(str(e))
        _rich_info("Loader paths must be inside the project root or contain the "
                   f"'{config.root_marker}' directory", symbol="info")
        sys.exit(1)
    except ValueError as e:
        _rich_error(f"Invalid configuration: {e}")
        sys.exit(1)


def _report(result, verbose=False):
    """Render a BuildResult; exits 1 if the build failed."""
    for warning in result.warnings:
        _rich_warning(warning, symbol="warning")

    if result.errors:
        _rich_error(f"Build failed with {len(result.errors)} error(s):", symbol="error")
        for error in result.errors:
            click.echo(f"  {error}")
        _rich_info("The previous stylesheet was left in place", symbol="info")
        sys.exit(1)

    stats = result.stats
    if not result.rebuilt:
        _rich_info(f"Stylesheet is up to date ({stats.get('loaders', 0)} loaders)", symbol="check")
        return

    _rich_success(f"Compiled loaders to {result.artifact_path}", symbol="success")
    if verbose:
        _rich_blank_line()
        rows = [
            ("Strategy", stats.get('strategy', '-')),
            ("Loaders", str(stats.get('loaders', 0))),
            ("With styles", str(stats.get('styled', 0))),
            ("Size", f"{stats.get('bytes', 0) / 1024:.1f}KB"),
            ("Fingerprint", stats.get('fingerprint') or '-'),
        ]
        _print_table(_create_files_table(rows, title="Build Summary", columns=("Item", "Value")))


@cli.command(help="Compile the loader stylesheet if it is out of date")
@click.option('--force', '-f', is_flag=True, help="Rebuild even if nothing changed")
@click.option('--debug/--production', default=None,
              help="Timestamp checks (debug) or stored fingerprint (production)")
@click.option('--verbose', '-v', is_flag=True, help="Show a build summary")
@click.pass_context
def build(ctx, force, debug, verbose):
    """Run the freshness check and rebuild when needed."""
    config = _load_config(ctx, debug=debug)
    pipeline = _load_pipeline(config)
    result = pipeline.ensure_fresh(force=force)
    _report(result, verbose=verbose)


@cli.command(help="Show whether the stylesheet needs a rebuild")
@click.option('--debug/--production', default=None,
              help="Timestamp checks (debug) or stored fingerprint (production)")
@click.pass_context
def status(ctx, debug):
    """Report staleness without building."""
    config = _load_config(ctx, debug=debug)
    pipeline = _load_pipeline(config)
    detector = pipeline.detector

    rows = [
        ("Strategy", detector.name),
        ("Stylesheet", str(pipeline.artifact_path)),
        ("Exists", "yes" if pipeline.artifact_path.is_file() else "no"),
        ("Fingerprint", pipeline.registry.fingerprint() or '-'),
    ]
    if isinstance(detector, FingerprintChangeDetector):
        try:
            stored = detector.stored_fingerprint()
        except CacheUnavailable as e:
            stored = f"unavailable ({e})"
        rows.append(("Stored fingerprint", stored if stored is not None else '-'))
    needed = pipeline.rebuild_needed()
    rows.append(("Rebuild needed", "yes" if needed else "no"))
    _print_table(_create_files_table(rows, title="Loader Status", columns=("Item", "Value")))


@cli.command(name="list", help="List attached loaders")
@click.option('--available', is_flag=True, help="List the loaders bundled with RockLoaders instead")
@click.pass_context
def list_loaders(ctx, available):
    """Show attached (or bundled) loaders."""
    if available:
        names = available_loaders()
        rows = [(name, f"registry.attach_by_name('{name}')") for name in names]
        _print_table(_create_files_table(rows, title="Bundled Loaders", columns=("Name", "Setup")))
        return

    config = _load_config(ctx)
    pipeline = _load_pipeline(config)
    registry = pipeline.registry
    if not len(registry):
        _rich_warning("No loaders attached", symbol="warning")
        _rich_info("Add 'internal_loaders' or 'loaders' to rockloaders.yml, "
                   "see 'rockloaders list --available'", symbol="info")
        return

    rows = []
    for key, base_path, setup in registry.describe():
        loader = registry.get(key)
        present = [ext for ext, path in ((STYLE_EXTENSION, loader.style_file),
                                         (MARKUP_EXTENSION, loader.markup_file)) if path.is_file()]
        rows.append((key, f"{base_path} ({'/'.join(present) or 'no fragments'})", setup))
    _print_table(_create_files_table(rows, title="Attached Loaders", columns=("Name", "Path", "Setup")))


@cli.command(help="Print the markup for all attached loaders")
@click.pass_context
def markup(ctx):
    """Write the markup blob to stdout."""
    config = _load_config(ctx)
    pipeline = _load_pipeline(config)
    try:
        _plain(pipeline.render_markup())
    except FragmentReadError as e:
        _rich_error(str(e))
        sys.exit(1)


@cli.command(help="Forget the stored fingerprint so the next build recompiles")
@click.pass_context
def invalidate(ctx):
    """Delete the stored fingerprint."""
    config = _load_config(ctx, debug=False)
    pipeline = _load_pipeline(config)
    if pipeline.invalidate():
        _rich_success("Fingerprint cleared; the next build recompiles", symbol="check")
    else:
        _rich_warning("Fingerprint store unavailable; nothing was cleared", symbol="warning")
        sys.exit(1)


@cli.command(help="Rebuild the stylesheet whenever a fragment changes")
@click.option('--interval', default=1.0, show_default=True, help="Debounce delay in seconds")
@click.pass_context
def watch(ctx, interval):
    """Watch fragment directories and rebuild with timestamp checks."""
    config = _load_config(ctx, debug=True)
    pipeline = _load_pipeline(config)
    _watch_mode(pipeline, interval)


def _watch_paths(pipeline):
    directories = {STUBS_DIR.resolve()}
    for loader in pipeline.registry:
        directories.add(loader.style_file.parent.resolve())
    return sorted(path for path in directories if path.is_dir())


def _watch_mode(pipeline, interval):
    """Rebuild on fragment changes until interrupted."""
    try:
        from watchdog.observers import Observer
        from watchdog.events import FileSystemEventHandler
    except ImportError:
        _rich_error("Watch mode requires the 'watchdog' library")
        _rich_info("Install it with: pip install watchdog")
        sys.exit(1)

    suffixes = (f".{STYLE_EXTENSION}", f".{MARKUP_EXTENSION}")

    class FragmentHandler(FileSystemEventHandler):
        def __init__(self):
            self.last_build = 0.0

        def on_any_event(self, event):
            if event.is_directory or not str(event.src_path).endswith(suffixes):
                return
            now = time.time()
            if now - self.last_build < interval:
                return
            self.last_build = now
            _rich_info(f"File changed: {event.src_path}", symbol="eyes")
            _report_watch(pipeline.ensure_fresh())

    paths = _watch_paths(pipeline)
    if not paths:
        _rich_warning("No fragment directories to watch")
        return

    observer = Observer()
    handler = FragmentHandler()
    for path in paths:
        observer.schedule(handler, str(path), recursive=False)

    observer.start()
    _rich_info(f"Watching for changes in: {', '.join(str(p) for p in paths)}", symbol="eyes")
    _rich_info("Press Ctrl+C to stop watching...", symbol="info")
    _report_watch(pipeline.ensure_fresh())

    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        observer.stop()
        _rich_info("Stopped watching for changes", symbol="info")
    observer.join()


def _report_watch(result):
    for warning in result.warnings:
        _rich_warning(warning, symbol="warning")
    if result.errors:
        _rich_error("Rebuild failed, previous stylesheet kept", symbol="error")
        for error in result.errors:
            click.echo(f"  {error}")
    elif result.rebuilt:
        _rich_success(f"Recompiled {Path(result.artifact_path).name}", symbol="success")


def main():
    """Main entry point for the CLI."""
    try:
        cli(obj={})
    except Exception as e:
        click.echo(f"{ERROR}Error: {e}{RESET}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
