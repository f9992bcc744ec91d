"""Main CLI entry point."""

import logging
import logging.handlers
import sys
import threading
from pathlib import Path

import click

from chaindeck import __version__

logger = logging.getLogger(__name__)


def resolve_log_path(debug: bool, log_file: Path | None) -> Path:
    """Where setup_logging writes, given the CLI flags."""
    if log_file:
        return log_file
    if debug:
        return Path.cwd() / "chaindeck-debug.log"
    return Path.home() / ".chaindeck" / "logs" / "chaindeck.log"


def setup_logging(verbose: int, debug: bool, log_file: Path | None, log_level: str) -> None:
    """
    Configure logging for the application.

    Args:
        verbose: Verbosity count (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        debug: If True, enable debug mode with file logging in the current directory
        log_file: Custom log file path (optional)
        log_level: Log level for file logging (DEBUG/INFO/WARNING/ERROR)
    """
    if debug or verbose >= 2:
        console_level = logging.DEBUG
    elif verbose == 1:
        console_level = logging.INFO
    else:
        console_level = logging.WARNING

    file_level = logging.DEBUG if debug else getattr(logging, log_level.upper())

    log_path = resolve_log_path(debug, log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Keeps last 5 files, max 10MB each
    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))

    root_logger = logging.getLogger()
    root_logger.setLevel(min(file_level, console_level))
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logger.info(f"Logging configured: level={logging.getLevelName(file_level)}, file={log_path}")


def _create_transport():
    # Imported lazily so --check and --help work without the HID backend
    from chaindeck.devices.streamdeck import StreamDeckTransport

    return StreamDeckTransport()


def _create_activator(port_name: str | None):
    from chaindeck.core import LoggingActivator
    from chaindeck.exceptions import MidiPortError
    from chaindeck.midi import MidiActivator

    if not port_name:
        return LoggingActivator()

    activator = MidiActivator(port_name)
    try:
        activator.start()
    except MidiPortError as e:
        logger.warning(f"{e.user_message}; module presses will only be logged")
        click.echo(f"Warning: {e.user_message}. {e.recovery_hint}", err=True)
        return LoggingActivator()
    return activator


def _wait_for_interrupt() -> None:
    stop = threading.Event()
    while not stop.wait(0.5):
        pass


def _report_error(e: Exception, log_path: Path) -> None:
    from chaindeck.exceptions import format_error_for_display

    user_message, recovery_hint = format_error_for_display(e)

    click.echo("\n" + "=" * 70, err=True)
    click.echo(f"ERROR: {user_message}", err=True)
    click.echo("=" * 70, err=True)

    if recovery_hint:
        click.echo(f"\n{recovery_hint}", err=True)

    click.echo(f"\nFor details, check the log file: {log_path}", err=True)


def _print_layout(catalog, config) -> None:
    from chaindeck.layout import ButtonLayoutEngine
    from chaindeck.models import SlotKind

    engine = ButtonLayoutEngine(
        nav_font_size=config.nav_font_size,
        module_font_size=config.module_font_size,
        corner_radius=config.corner_radius,
    )

    click.echo(f"Chains ({len(catalog.chains)}):")
    for slot in engine.layout_catalog_view(catalog):
        overlay = f"  [ch {slot.label.overlay_text}]" if slot.label.overlay_text else ""
        click.echo(f"  [{slot.index:2d}] {slot.display_text}{overlay}")

    for chain in catalog.chains:
        click.echo(f"\n{chain.name}:")
        for slot in engine.layout_chain_detail_view(chain):
            if slot.kind != SlotKind.MODULE_ENTRY:
                continue
            role = slot.module.role.value
            click.echo(f"  [{slot.index:2d}] {slot.display_text} ({role})")


@click.command()
@click.version_option(version=__version__, prog_name="chaindeck")
@click.argument(
    'catalog_file',
    type=click.Path(dir_okay=False, path_type=Path),
    required=False,
)
@click.option(
    '-v', '--verbose',
    count=True,
    help='Increase verbosity (-v: INFO, -vv: DEBUG)'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug mode (DEBUG level, logs to ./chaindeck-debug.log)'
)
@click.option(
    '--log-file',
    type=click.Path(path_type=Path),
    default=None,
    help='Custom log file path'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Log level for file logging (default: INFO)'
)
@click.option(
    '--config', 'config_path',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Config file (default: ~/.chaindeck/config.json)'
)
@click.option('--model', type=str, default=None, help='Stream Deck model to use (e.g. studio, xl)')
@click.option(
    '--brightness',
    type=click.IntRange(0, 100),
    default=None,
    help='Panel brightness in percent'
)
@click.option(
    '--midi-out',
    type=str,
    default=None,
    help='MIDI output port for module buttons (default: log only)'
)
@click.option('--list-devices', is_flag=True, help='List connected Stream Decks and exit')
@click.option('--check', is_flag=True, help='Load the catalog, print its button layout and exit')
@click.pass_context
def cli(
    ctx,
    catalog_file: Path | None,
    verbose: int,
    debug: bool,
    log_file: Path | None,
    log_level: str,
    config_path: Path | None,
    model: str | None,
    brightness: int | None,
    midi_out: str | None,
    list_devices: bool,
    check: bool,
):
    """
    Chaindeck - browse routing chains on a Stream Deck.

    Loads CATALOG_FILE (a JSON chain layout export) and shows every chain on
    the panel. Press a chain to see its modules, press "Show Chains" to go back.

    \b
    Examples:
      # Run on the default panel (Stream Deck Studio)
      chaindeck chains.json

      # Use a Stream Deck XL and send module presses as MIDI notes
      chaindeck chains.json --model xl --midi-out "IAC Driver Bus 1"

      # Print the button layout without a panel
      chaindeck chains.json --check

      # List connected panels
      chaindeck --list-devices
    """
    from chaindeck.catalog import load_catalog_file
    from chaindeck.devices import DeckController
    from chaindeck.exceptions import CatalogError, ChainDeckError
    from chaindeck.models import AppConfig

    setup_logging(verbose, debug, log_file, log_level)
    log_path = resolve_log_path(debug, log_file)

    logger.info(f"Starting chaindeck {__version__}")

    if list_devices:
        try:
            devices = _create_transport().list_devices()
        except Exception as e:
            logger.exception("Error listing devices")
            _report_error(e, log_path)
            sys.exit(1)

        click.echo("Stream Decks:\n")
        if not devices:
            click.echo("  No Stream Deck devices found.")
        for i, info in enumerate(devices):
            click.echo(f"  [{i}] {info.model} ({info.path})")
        return

    if catalog_file is None:
        click.echo(ctx.get_usage(), err=True)
        click.echo("\nError: Missing argument 'CATALOG_FILE'.", err=True)
        sys.exit(1)

    try:
        config = AppConfig.load_or_default(config_path)
        overrides = {
            key: value
            for key, value in (
                ("device_model", model),
                ("brightness", brightness),
                ("midi_output_port", midi_out),
            )
            if value is not None
        }
        if overrides:
            config = config.model_copy(update=overrides)
    except ChainDeckError as e:
        logger.exception("Error loading configuration")
        _report_error(e, log_path)
        sys.exit(1)

    if check:
        try:
            catalog = load_catalog_file(catalog_file)
        except CatalogError as e:
            _report_error(e, log_path)
            sys.exit(1)
        _print_layout(catalog, config)
        return

    activator = _create_activator(config.midi_output_port)
    controller = DeckController(_create_transport(), config=config, activator=activator)

    try:
        controller.start()
    except ChainDeckError as e:
        logger.exception("Error opening Stream Deck")
        _report_error(e, log_path)
        sys.exit(1)

    try:
        try:
            catalog = controller.load_catalog_file(catalog_file)
            click.echo(f"Loaded {len(catalog.chains)} chains from {catalog_file}", err=True)
        except CatalogError as e:
            # Keep serving the panel; every button stays a no-op
            logger.error(f"Catalog not loaded: {e}")
            click.echo(f"Error: {e.user_message}", err=True)

        click.echo("Press Ctrl+C to quit.", err=True)
        _wait_for_interrupt()
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
        click.echo("\nShutting down...", err=True)
    finally:
        controller.stop()
        stop_activator = getattr(activator, "stop", None)
        if stop_activator:
            stop_activator()


if __name__ == "__main__":
    cli()
