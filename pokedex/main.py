"""Main entry point for the Pokédex TUI application.

This module provides the application entry point with:
- Command-line argument parsing
- Application initialization and dependency injection
- A headless mode that loads the catalog and prints a page of it
"""

import argparse
import asyncio
import sys
from dataclasses import replace
from pathlib import Path

import structlog

from pokedex.models import GENERATIONS, AppConfig, Entry, LoadProgress
from pokedex.services.catalog_loader import CatalogLoaderService
from pokedex.services.catalog_view import ALL, ViewState, derive_page, parse_generation, update_filters
from pokedex.services.config import VALID_LOG_LEVELS, ConfigurationService
from pokedex.services.detail_service import DetailService
from pokedex.services.errors import CatalogLoadError, get_error_service, handle_error
from pokedex.services.http_client import HttpClientService
from pokedex.services.logging import setup_logging


VERSION = "0.1.0"

log = structlog.stdlib.get_logger()


class ApplicationContext:
    """Container for application services.

    Services are built lazily from the loaded configuration and shared
    between the TUI screens and headless mode.
    """

    def __init__(
        self,
        config_path: Path | None = None,
        log_level: str | None = None,
        log_dir: Path | None = None,
    ) -> None:
        """Initialize the application context.

        Args:
            config_path: Path to configuration file
            log_level: Log level from the command line; overrides the file
            log_dir: Directory for log files (None for console only)
        """
        self._config_path: Path | None = config_path
        self._log_level: str | None = log_level
        self._log_dir: Path | None = log_dir

        self._config_service: ConfigurationService | None = None
        self._http_client: HttpClientService | None = None
        self._catalog_loader: CatalogLoaderService | None = None
        self._detail_service: DetailService | None = None

        self._config: AppConfig | None = None

    @property
    def config_service(self) -> ConfigurationService:
        if self._config_service is None:
            self._config_service = ConfigurationService(config_path=self._config_path)
        return self._config_service

    @property
    def config(self) -> AppConfig:
        """Loaded configuration with command-line overrides applied."""
        if self._config is None:
            config = self.config_service.load_config()
            if self._log_level is not None:
                config = replace(config, log_level=self._log_level)
            self._config = self.config_service.ensure_valid(config)
        return self._config

    @property
    def http_client(self) -> HttpClientService:
        """HTTP client with its connection pool sized to one batch."""
        if self._http_client is None:
            self._http_client = HttpClientService(
                timeout=self.config.request_timeout,
                max_connections=self.config.batch_size,
            )
        return self._http_client

    @property
    def catalog_loader(self) -> CatalogLoaderService:
        if self._catalog_loader is None:
            self._catalog_loader = CatalogLoaderService(
                http_client=self.http_client,
                base_url=self.config.api_base_url,
                universe_size=self.config.universe_size,
                batch_size=self.config.batch_size,
            )
        return self._catalog_loader

    @property
    def detail_service(self) -> DetailService:
        if self._detail_service is None:
            self._detail_service = DetailService(
                http_client=self.http_client,
                base_url=self.config.api_base_url,
                universe_size=self.config.universe_size,
                language=self.config.description_language,
            )
        return self._detail_service

    async def cleanup(self) -> None:
        """Close network connections."""
        log.info("Cleaning up application resources")

        if self._http_client is not None:
            await self._http_client.close()

        log.info("Application cleanup complete")


class ParsedArgs:
    """Type-safe container for parsed command-line arguments."""

    def __init__(
        self,
        config: Path | None,
        log_level: str | None,
        log_dir: Path | None,
        no_tui: bool,
        search: str = "",
        category: str = ALL,
        generation: str = ALL,
        page: int = 1,
    ) -> None:
        self.config: Path | None = config
        self.log_level: str | None = log_level
        self.log_dir: Path | None = log_dir
        self.no_tui: bool = no_tui
        self.search: str = search
        self.category: str = category
        self.generation: str = generation
        self.page: int = page


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pokedex-tui",
        description="Browse the National Pokédex (generations 1-8) in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pokedex-tui                              Start the TUI application
  pokedex-tui --log-level DEBUG            Start with debug logging
  pokedex-tui --no-tui --type fire         Print the first page of fire types
  pokedex-tui --no-tui --generation 3 --page 2
        """,
    )

    _ = parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")

    _ = parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: ~/.config/pokedex-tui/config.json)",
    )

    _ = parser.add_argument(
        "--log-level",
        choices=list(VALID_LOG_LEVELS),
        default=None,
        help="Set the logging level (default: from configuration, INFO)",
    )

    _ = parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Directory for log files (default: ./logs in TUI mode, console only otherwise)",
    )

    _ = parser.add_argument(
        "--no-tui",
        action="store_true",
        help="Load the catalog and print a page instead of starting the TUI",
    )

    headless = parser.add_argument_group("headless filters (with --no-tui)")
    _ = headless.add_argument("--search", default="", help="Name substring or exact number")
    _ = headless.add_argument("--type", dest="category", default=ALL, help="Category tag, e.g. fire")
    _ = headless.add_argument(
        "--generation",
        choices=[ALL] + [str(generation.id) for generation in GENERATIONS],
        default=ALL,
        help="Generation band 1-8 (default: all)",
    )
    _ = headless.add_argument("--page", type=int, default=1, help="Page number (default: 1)")

    return parser


def parse_arguments(argv: list[str] | None = None) -> ParsedArgs:
    """Parse command-line arguments.

    Args:
        argv: Argument list (defaults to ``sys.argv[1:]``)
    """
    ns = build_parser().parse_args(argv)

    config_val: Path | None = ns.config
    log_level_val: str | None = ns.log_level
    log_dir_val: Path | None = ns.log_dir

    return ParsedArgs(
        config=config_val,
        log_level=log_level_val,
        log_dir=log_dir_val,
        no_tui=bool(ns.no_tui),
        search=str(ns.search),
        category=str(ns.category).lower(),
        generation=str(ns.generation),
        page=int(ns.page),
    )


async def run_tui(context: ApplicationContext) -> int:
    """Run the TUI application.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    from pokedex.ui.app import PokedexApp

    log.info("Starting TUI application")

    try:
        app = PokedexApp(
            config=context.config,
            catalog_loader=context.catalog_loader,
            detail_service=context.detail_service,
        )
        await app.run_async()

        log.info("TUI application exited normally")
        return 0

    except Exception as e:
        log.error("TUI application error", error=str(e), exc_info=True)
        return 1
    finally:
        await context.cleanup()


def format_entry_line(entry: Entry) -> str:
    types = "/".join(entry.types)
    return f"{entry.display_number}  {entry.name.capitalize():<14} {types:<18} gen {entry.generation}"


def generation_summary(entries: list[Entry]) -> list[str]:
    """One line per generation band with its loaded entry count."""
    counts = {generation.id: 0 for generation in GENERATIONS}
    for entry in entries:
        counts[entry.generation] += 1
    return [
        f"  {generation.name:<7} {generation.range_label:<9} {counts[generation.id]:>4}"
        for generation in GENERATIONS
    ]


async def run_headless(context: ApplicationContext, args: ParsedArgs) -> int:
    """Load the catalog, print a summary and one filtered page.

    Returns:
        Exit code (0 for success, 1 if the catalog could not be loaded)
    """
    def print_progress(progress: LoadProgress) -> None:
        print(f"Loading... {progress.percent}% ({progress.entries_loaded}/{progress.total_entries})")

    try:
        entries = await context.catalog_loader.load_catalog(on_progress=print_progress)
    except CatalogLoadError as e:
        user_error = handle_error(e, "load_catalog", component="headless")
        print(get_error_service().create_user_message(user_error), file=sys.stderr)
        return 1
    finally:
        await context.cleanup()

    failed = context.catalog_loader.get_load_progress().entries_failed
    print(f"\nLoaded {len(entries)} entries ({failed} failed)")
    print("\n".join(generation_summary(entries)))

    state = ViewState(page_size=context.config.page_size)
    state = update_filters(
        state,
        search=args.search,
        category=args.category,
        generation=parse_generation(args.generation),
    )
    # derive_page clamps the requested page to what the filters leave
    page = derive_page(entries, replace(state, page=args.page))

    print(f"\nPage {page.page} of {page.total_pages} ({page.total_matches} matches)")
    if page.total_matches == 0:
        print("No entries match your search criteria.")
    for entry in page.entries:
        print(format_entry_line(entry))
    return 0


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the application."""
    args = parse_arguments(argv)

    log_dir = args.log_dir
    if log_dir is None and not args.no_tui:
        log_dir = Path("logs")

    _ = setup_logging(
        log_level=args.log_level or "INFO",
        log_dir=log_dir,
        tui_mode=not args.no_tui,
    )

    context = ApplicationContext(
        config_path=args.config,
        log_level=args.log_level,
        log_dir=log_dir,
    )

    try:
        # Re-apply logging once the file's level is known
        if args.log_level is None and context.config.log_level != "INFO":
            _ = setup_logging(
                log_level=context.config.log_level,
                log_dir=log_dir,
                tui_mode=not args.no_tui,
            )

        log.info(
            "Starting Pokédex TUI",
            version=VERSION,
            log_level=context.config.log_level,
            config_path=str(context.config_service.config_path),
        )

        if args.no_tui:
            log.info("Running in headless mode")
            exit_code = asyncio.run(run_headless(context, args))
        else:
            exit_code = asyncio.run(run_tui(context))

    except KeyboardInterrupt:
        log.info("Application interrupted by user")
        exit_code = 130

    except Exception as e:
        log.error("Unhandled exception", error=str(e), exc_info=True)
        print(f"Fatal error: {e}", file=sys.stderr)
        exit_code = 1

    log.info("Application exiting", exit_code=exit_code)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
