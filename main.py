"""mcmeta-mojang - Fetch and validate Mojang version metadata."""

import argparse
import asyncio
import sys
from pathlib import Path

from archive import load_zipped_version
from config import Config
from errors import MetadataError
from logging_setup import get_logger, setup_logging
from manifest import load_manifest, load_version_manifest
from models import MinecraftVersion


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Fetch and validate Mojang version manifests and version documents",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to config file (default: config.toml)",
    )
    parser.add_argument(
        "-m", "--manifest-url",
        type=str,
        default=None,
        help="Override manifest URL from config and environment",
    )
    parser.add_argument(
        "-t", "--timeout",
        type=float,
        default=None,
        help="HTTP timeout in seconds",
    )

    # Logging verbosity (mutually exclusive)
    verbosity_group = parser.add_mutually_exclusive_group()
    verbosity_group.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output (DEBUG level)",
    )
    verbosity_group.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Quiet mode (only warnings and errors)",
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Write logs to file (always DEBUG level)",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("manifest", help="Fetch the version manifest and summarize it")

    version_parser = commands.add_parser("version", help="Fetch a single version document")
    version_parser.add_argument("url", help="URL of the version document or archive")
    version_parser.add_argument(
        "-z", "--zipped",
        action="store_true",
        help="The URL points at a zip archive containing the document",
    )

    latest_parser = commands.add_parser("latest", help="Fetch the newest version document")
    latest_parser.add_argument(
        "--channel",
        choices=["release", "snapshot"],
        default="release",
        help="Release channel (default: release)",
    )

    return parser.parse_args(argv)


def describe_version(version: MinecraftVersion) -> None:
    logger = get_logger()
    logger.info("Version: %s (%s)", version.id, version.type)
    logger.info("Released: %s", version.release_time.isoformat())
    if version.main_class:
        logger.info("Main class: %s", version.main_class)
    logger.info("Libraries: %d", len(version.libraries))


async def run_command(args: argparse.Namespace, config: Config) -> None:
    logger = get_logger()

    if args.command == "version":
        if args.zipped:
            version = await load_zipped_version(args.url, config=config)
        else:
            version = await load_version_manifest(args.url, config=config)
        describe_version(version)
        return

    manifest = await load_manifest(config)

    if args.command == "manifest":
        logger.info("Latest release: %s", manifest.latest.release)
        logger.info("Latest snapshot: %s", manifest.latest.snapshot)
        logger.info("Found %d versions in manifest", len(manifest.versions))
        return

    summary = manifest.latest_version(args.channel)
    logger.debug("Latest %s is %s", args.channel, summary.id)
    version = await load_version_manifest(summary.url, config=config)
    describe_version(version)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    # Setup logging first
    verbosity = 1 if args.verbose else (-1 if args.quiet else 0)
    setup_logging(verbosity=verbosity, log_file=args.log_file)
    logger = get_logger()

    logger.debug("Loading configuration...")
    try:
        config = Config.load(
            config_path=args.config,
            manifest_url_override=args.manifest_url,
            timeout_override=args.timeout,
        )
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    logger.debug("Manifest URL: %s", config.manifest_url)

    try:
        asyncio.run(run_command(args, config))
    except MetadataError as e:
        logger.error("Error fetching metadata: %s", e)
        return 1

    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
