"""Main entry point with CLI."""
import argparse
import asyncio
import logging
import sys
from typing import Optional

from salesboard.config import config, Config
from salesboard.logging_conf import setup_logging
from salesboard.fetch.client import DatasetClient
from salesboard.jobs.seed import seed_database
from salesboard.store.records import RecordStore

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Transaction dashboard backend")
    parser.add_argument(
        "--log-level",
        default=None,
        help=f"Log level (default: {config.LOG_LEVEL})",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument(
        "--host",
        default=config.HOST,
        help=f"Bind address (default: {config.HOST})",
    )
    serve.add_argument(
        "--port",
        type=int,
        default=config.PORT,
        help=f"Bind port (default: {config.PORT})",
    )
    serve.add_argument(
        "--reload",
        action="store_true",
        help="Reload on code changes (development)",
    )

    seed = subparsers.add_parser("seed", help="Replace the store with the seed dataset")
    seed.add_argument(
        "--source",
        default=None,
        help=f"Dataset URL or JSON file path (default: {config.SEED_URL})",
    )
    seed.add_argument(
        "--database",
        default=None,
        help=f"SQLite file (default: {config.DATABASE_PATH})",
    )

    return parser.parse_args(argv)


async def run_seed(source: Optional[str], database: Optional[str]) -> None:
    store = RecordStore(database)
    await store.initialize()
    async with DatasetClient() as client:
        summary = await seed_database(store, client, source)
    for error in summary.errors:
        logger.warning(f"Skipped item {error['index']}: {error['reason']}")


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.log_level)

    try:
        Config.validate()
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    if args.command == "serve":
        import uvicorn

        logger.info(f"Serving on {args.host}:{args.port} (store: {config.DATABASE_PATH})")
        uvicorn.run(
            "salesboard.api.main:app",
            host=args.host,
            port=args.port,
            reload=args.reload,
            log_level=(args.log_level or config.LOG_LEVEL).lower(),
        )
        return

    try:
        asyncio.run(run_seed(args.source, args.database))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Seeding failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
