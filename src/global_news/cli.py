"""CLI for the Global News aggregator."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from pydantic import BaseModel, ValidationError, field_validator

from global_news.config import (
    DisplayConfig,
    GlobalNewsConfig,
    create_from_config,
    get_default_config_path,
    load_config,
)
from global_news.controller import NewsFetchController
from global_news.data import Country
from global_news.view import format_country_menu, render_state

logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  country CODE   select a country and reload headlines
  query [TEXT]   set (or clear) the search text without fetching
  search [TEXT]  fetch now, optionally setting the search text first
  countries      list selectable countries
  show           print the current results again
  help           show this message
  quit           leave"""


class CLIArgs(BaseModel):
    """Validated CLI arguments."""

    query: str = ""
    country: str | None = None
    config: Path | None = None
    log: bool = False
    log_dir: str = "logs"
    interactive: bool = False

    @field_validator("country")
    @classmethod
    def country_must_be_known(cls, v: str | None) -> str | None:
        if v is None:
            return v
        try:
            return Country(v.lower()).value
        except ValueError:
            codes = ", ".join(c.value for c in Country)
            raise ValueError(f"Unknown country '{v}'. Choose one of: {codes}") from None

    @field_validator("config")
    @classmethod
    def config_must_exist(cls, v: Path | None) -> Path | None:
        if v is not None and not v.exists():
            raise ValueError(f"Config file not found: {v}")
        return v


def _show(controller: NewsFetchController, display: DisplayConfig) -> None:
    print(
        render_state(
            controller.state,
            placeholder=display.description_placeholder,
            footer=display.footer,
        )
    )


async def handle_command(
    controller: NewsFetchController,
    line: str,
    display: DisplayConfig,
) -> bool:
    """Apply one interactive command.

    Args:
        controller: Controller holding the session state.
        line: Raw command line typed by the user.
        display: Display settings for rendering.

    Returns:
        False when the session should end, True otherwise.
    """
    command, _, arg = line.strip().partition(" ")
    command = command.lower()
    arg = arg.strip()

    if command in ("quit", "exit"):
        return False
    if not command:
        return True

    if command == "country":
        try:
            country = Country(arg.lower())
        except ValueError:
            print(f"Unknown country '{arg}'. Type 'countries' for the list.")
            return True
        await controller.set_country(country.value)
        _show(controller, display)
    elif command == "query":
        controller.set_query(arg)
        print(f"Query set to '{arg}'." if arg else "Query cleared.")
    elif command == "search":
        if arg:
            controller.set_query(arg)
        await controller.search()
        _show(controller, display)
    elif command == "countries":
        print(format_country_menu(controller.state.country))
    elif command == "show":
        _show(controller, display)
    elif command == "help":
        print(HELP_TEXT)
    else:
        print(f"Unknown command '{command}'. Type 'help' for a list of commands.")
    return True


async def _interactive(controller: NewsFetchController, display: DisplayConfig) -> None:
    print(HELP_TEXT)
    while True:
        try:
            line = await asyncio.to_thread(input, f"[{controller.state.country}]> ")
        except EOFError:
            break
        if not await handle_command(controller, line, display):
            break


async def run(args: CLIArgs) -> None:
    """Run a session with the given arguments.

    Args:
        args: Validated CLI arguments.
    """
    config = load_config(args.config) if args.config else GlobalNewsConfig()
    controller, run_logger = create_from_config(
        config,
        country_override=args.country,
        log_override=args.log if args.log else None,
        log_dir_override=args.log_dir if args.log_dir != "logs" else None,
    )
    if args.query:
        controller.set_query(args.query)

    if run_logger:
        run_logger.start_session(controller.state.country)

    logger.info(f"Config: {args.config or 'built-in defaults'}")

    await controller.mount()
    _show(controller, config.display)

    if args.interactive:
        await _interactive(controller, config.display)

    usage = controller.usage
    logger.info("\n--- Usage Summary ---")
    logger.info(f"Requests: {usage.requests}")
    if usage.fallback_requests:
        logger.info(f"Fallback requests: {usage.fallback_requests}")
    if usage.failed_requests:
        logger.info(f"Failed fetches: {usage.failed_requests}")

    if run_logger:
        run_logger.finish_session(len(controller.state.articles), usage)
        if run_logger.last_log_path:
            logger.info(f"\nSession log written to: {run_logger.last_log_path}")


def main() -> None:
    """Entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Browse top headlines and search news.")
    parser.add_argument(
        "--query",
        "-q",
        default="",
        help="Search text (overrides country headlines)",
    )
    parser.add_argument(
        "--country",
        default=None,
        help="Country code for headlines (default from config: us)",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to YAML config file (default: configs/default.yaml if present)",
    )
    parser.add_argument(
        "--interactive",
        "-i",
        action="store_true",
        default=False,
        help="Keep the session open and read commands",
    )
    parser.add_argument(
        "--log",
        action="store_true",
        default=False,
        help="Write a JSON log of every fetch in the session",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default="logs",
        help="Directory for log files (default: logs/)",
    )

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    ns = parser.parse_args()
    config_path: Path | None = ns.config
    if config_path is None and get_default_config_path().exists():
        config_path = get_default_config_path()

    try:
        args = CLIArgs(
            query=ns.query,
            country=ns.country,
            config=config_path,
            log=ns.log,
            log_dir=ns.log_dir,
            interactive=ns.interactive,
        )
    except ValidationError as e:
        for err in e.errors():
            logger.error(err["msg"])
        sys.exit(1)

    try:
        asyncio.run(run(args))
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
