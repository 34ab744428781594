"""Command-line access to the CNC library.

Usage:
    cnc-library search --content-type POST_PROCESSOR --pages 2
    cnc-library search --sort recent --manufacturer Haas --page-size 10
    cnc-library filters
    cnc-library login dealer1 --password secret
    cnc-library logout
"""

import argparse
import asyncio
import sys

import structlog

from cnc_library.application import AuthSession, IncrementalCatalogLoader, LibraryBrowser
from cnc_library.domain import (
    CatalogAPIError,
    ContentCategory,
    ContentType,
    LoadFailed,
    MachineType,
    SortMode,
)
from cnc_library.infrastructure.api_client import CatalogAPIClient
from cnc_library.infrastructure.catalog_gateway import CatalogGateway
from cnc_library.infrastructure.config import Settings, get_settings
from cnc_library.infrastructure.logging import configure_logging
from cnc_library.infrastructure.session_store import SessionStore
from cnc_library.presentation.formatting import describe, format_enum

logger = structlog.get_logger()


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        number = 0
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cnc-library",
        description="Browse the CNC digital-content library",
    )
    parser.add_argument("--api-url", help="Override the API base URL")
    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="List catalog entries page by page")
    search.add_argument("query", nargs="?", default="", help="Free-text query")
    search.add_argument("--category", choices=[c.value for c in ContentCategory])
    search.add_argument("--content-type", choices=[c.value for c in ContentType])
    search.add_argument("--machine-type", choices=[m.value for m in MachineType])
    search.add_argument("--manufacturer", help="Machine manufacturer")
    search.add_argument("--controller", help="Controller manufacturer")
    search.add_argument("--axes", type=int, help="Number of axes")
    search.add_argument("--owner", help="Content owner")
    search.add_argument(
        "--sort",
        choices=[m.value for m in SortMode],
        default=SortMode.POPULAR.value,
    )
    search.add_argument("--pages", type=_positive_int, default=1, help="Pages to load (default: 1)")
    search.add_argument("--page-size", type=_positive_int, help="Entries per page")

    sub.add_parser("filters", help="Show available filter values")

    login = sub.add_parser("login", help="Log in and remember the session")
    login.add_argument("username")
    login.add_argument("--password", required=True)

    sub.add_parser("logout", help="Forget the stored session")
    return parser


async def run_search(browser: LibraryBrowser, args: argparse.Namespace) -> int:
    failures: list[LoadFailed] = []
    browser.loader.subscribe_errors(failures.append)

    criteria = browser.criteria.with_sort(SortMode(args.sort))
    for field, value in (
        ("query", args.query),
        ("category", args.category),
        ("content_type", args.content_type),
        ("machine_type", args.machine_type),
        ("machine_manufacturer", args.manufacturer),
        ("controller_manufacturer", args.controller),
        ("number_of_axes", args.axes),
        ("content_owner", args.owner),
    ):
        criteria = criteria.with_filter(field, value)
    browser.criteria = criteria
    await browser.open()

    for _ in range(args.pages - 1):
        if not browser.state.has_more:
            break
        await browser.scroll_near_end()

    for failure in failures:
        print(f"! {failure.reason}", file=sys.stderr)

    state = browser.state
    for entry in state.entries:
        print(f"{entry.id:>6}  {describe(entry)}")
    total = state.total_elements if state.total_elements is not None else "?"
    print(f"-- {len(state.entries)} of {total} shown{' (more available)' if state.has_more else ''}")
    return 1 if state.error else 0


async def run_filters(gateway: CatalogGateway) -> int:
    try:
        options = await gateway.filter_options()
    except CatalogAPIError as e:
        print(f"! {e.message}", file=sys.stderr)
        return 1
    for label, values in (
        ("Category", options.categories),
        ("Content", options.content_types),
        ("Machine type", options.machine_types),
        ("Provided by", options.machine_manufacturers),
        ("Controller", options.controller_manufacturers),
        ("Axes", [str(n) for n in options.number_of_axes]),
        ("Owner", options.content_owners),
    ):
        print(f"{label}: {', '.join(format_enum(v) for v in values) or '-'}")
    return 0


async def main(argv: list[str] | None = None, settings: Settings | None = None) -> int:
    """Run one CLI command.

    Returns:
        Process exit code.
    """
    args = build_parser().parse_args(argv)
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_json)

    client = CatalogAPIClient(
        base_url=args.api_url or settings.api_url,
        timeout=settings.request_timeout,
    )
    async with client:
        gateway = CatalogGateway(client)
        session = AuthSession(gateway, SessionStore(settings.session_file))

        if args.command == "search":
            page_size = args.page_size if args.page_size is not None else settings.page_size
            loader = IncrementalCatalogLoader(gateway, page_size=page_size)
            browser = LibraryBrowser(gateway, loader, session)
            try:
                return await run_search(browser, args)
            finally:
                browser.close()
        if args.command == "filters":
            return await run_filters(gateway)
        if args.command == "login":
            try:
                user = await session.login(args.username, args.password)
            except CatalogAPIError as e:
                print(f"! {e.message}", file=sys.stderr)
                return 1
            print(f"Logged in as {user.username} ({format_enum(user.role.value)})")
            return 0
        if args.command == "logout":
            session.logout()
            print("Logged out")
            return 0
    return 2


def run() -> None:
    """Console script entry point."""
    sys.exit(asyncio.run(main()))
