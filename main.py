import asyncio
import argparse
import yaml
from core.catalog import load_catalog
from core.catalog_validator import CatalogValidationError, ExitCode, ValidationRules, supported_languages, validate_data_dir
from core.config import load_settings
from core.dispatcher import dispatch
from core.verifier import LivenessChecker
from core.worker_pool import WorkerPool
from core.logger import Logger
import sys
import logging

log = logging.getLogger("main")

def build_parser():
    parser = argparse.ArgumentParser(description="Report catalog entries whose links are dead or return HTTP 404.")
    parser.add_argument("--config", default="config.yaml", help="Config file path")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command")
    ping = commands.add_parser("ping", help="Check every catalog URL (default)")
    ping.add_argument("--catalog", help="Catalog file, overrides the config")
    validate = commands.add_parser("validate", help="Validate the data directory")
    validate.add_argument("--data-dir", help="Data directory, overrides the config")
    return parser

async def ping(settings, catalog_path, logger: Logger):
    entries = load_catalog(catalog_path)
    log.info("Checking %d catalog entries with %d workers", len(entries), settings.pool_size)
    async with LivenessChecker(settings.timeout, logger) as checker:
        pool = WorkerPool(settings.pool_size, checker.check_job, settings.queue_size)
        scheduled = await dispatch(entries, pool)
    log.info("Checked %d URLs", scheduled)

def validate(settings, data_dir, logger: Logger):
    rules = ValidationRules.from_settings(settings, supported_languages(settings.translations_dir))
    try:
        count = validate_data_dir(data_dir, rules)
    except CatalogValidationError as e:
        logger.error(e.message)
        return int(e.exit_code)
    log.info("Validated %d files", count)
    return int(ExitCode.SUCCESS)

def main(argv=None):
    args = build_parser().parse_args(argv)

    # Configure logging
    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s - %(levelname)s - %(name)s - %(message)s")
        logging.getLogger("aiohttp").setLevel(logging.DEBUG)

    logger = Logger()
    try:
        settings = load_settings(args.config)
        if args.command == "validate":
            return validate(settings, args.data_dir or settings.data_dir, logger)
        asyncio.run(ping(settings, getattr(args, "catalog", None) or settings.catalog, logger))
    except (OSError, ValueError, yaml.YAMLError) as e:
        # json.JSONDecodeError is a ValueError
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    return 0

if __name__ == "__main__":
    # Set event loop policy for Windows to avoid ProactorEventLoop issues
    if sys.platform.startswith("win"):
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())
    sys.exit(main())
