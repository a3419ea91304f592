"""Command-line entrypoint.

Usage:
    nutri-snap serve [--host HOST] [--port PORT]
    nutri-snap analyze PHOTO [--save]
    nutri-snap log
    nutri-snap delete MEAL_ID
"""

import argparse
import asyncio
import logging
import mimetypes
import sys
from collections.abc import Sequence
from pathlib import Path

import uvicorn

from nutri_snap.app_logging import configure_logging
from nutri_snap.client.views import NutriSnapApp
from nutri_snap.config import Settings
from nutri_snap.containers import (
    ClientContainer,
    build_client_container,
    build_container,
)
from nutri_snap.errors import MealNotFoundError, NutriSnapError

logger = logging.getLogger(__name__)


def cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    """Run the analysis API."""
    from nutri_snap.api.app import create_app

    app = create_app(build_container(settings))
    host = args.host if args.host is not None else settings.host
    port = args.port if args.port is not None else settings.port
    uvicorn.run(app, host=host, port=port)
    return 0


async def cmd_analyze(args: argparse.Namespace, container: ClientContainer) -> int:
    """Upload a photo, show the results and optionally save them."""
    path = Path(args.photo).expanduser()
    if not path.is_file():
        print(f"Error: photo not found: {path}")
        return 1

    app = NutriSnapApp(container.meal_log_service)
    app.start_app()
    try:
        image_bytes = path.read_bytes()
    except OSError as exc:
        print(f"Error: could not read photo {path}: {exc.strerror or exc}")
        return 1
    content_type, _ = mimetypes.guess_type(path.name)
    print("Analyzing... this can take a few seconds.")
    analysis = await container.backend_client.analyze_meal(
        image_bytes, path.name, content_type
    )
    app.meal_analyzed(analysis, str(path.resolve()))
    print(app.render())
    if args.save:
        record = app.save_to_log()
        print(f"\nSaved meal {record.id}.\n")
        print(app.render())
    return 0


async def cmd_log(_args: argparse.Namespace, container: ClientContainer) -> int:
    """Show the dashboard."""
    app = NutriSnapApp(container.meal_log_service)
    app.go_to_log()
    print(app.render())
    return 0


async def cmd_delete(args: argparse.Namespace, container: ClientContainer) -> int:
    """Delete a meal and show the dashboard."""
    app = NutriSnapApp(container.meal_log_service)
    if container.meal_log_service.get_meal(args.meal_id) is None:
        raise MealNotFoundError(f"No saved meal with id {args.meal_id}")
    app.delete_meal(args.meal_id)
    app.go_to_log()
    print(app.render())
    return 0


CLIENT_COMMANDS = {
    "analyze": cmd_analyze,
    "log": cmd_log,
    "delete": cmd_delete,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nutri-snap", description="Meal photo nutrition analysis"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the analysis API")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)

    analyze = subparsers.add_parser("analyze", help="Analyze a meal photo")
    analyze.add_argument("photo", help="Path to the meal photo")
    analyze.add_argument(
        "--save", action="store_true", help="Save the result to the meal log"
    )

    subparsers.add_parser("log", help="Show the 7-day dashboard and meal log")

    delete = subparsers.add_parser("delete", help="Delete a saved meal")
    delete.add_argument("meal_id")
    return parser


def main(argv: Sequence[str] | None = None, settings: Settings | None = None) -> int:
    """Parse arguments and dispatch to a command."""
    configure_logging()
    args = build_parser().parse_args(argv)
    resolved_settings = settings or Settings()

    if args.command == "serve":
        return cmd_serve(args, resolved_settings)

    container = build_client_container(resolved_settings)
    return asyncio.run(run_client_command(args, container))


async def run_client_command(
    args: argparse.Namespace, container: ClientContainer
) -> int:
    """Run a client command and release the container's resources."""
    try:
        return await CLIENT_COMMANDS[args.command](args, container)
    except NutriSnapError as exc:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {exc}")
        return 1
    finally:
        await container.close_resources()


if __name__ == "__main__":
    sys.exit(main())
