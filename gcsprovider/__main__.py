"""Command line entry point.

Usage:
    python -m gcsprovider check
    python -m gcsprovider upload ./cat.png --folder articles
    python -m gcsprovider delete https://storage.googleapis.com/my-media/articles/cat_1a2b.png

    Or via the console script:
    gcsprovider check

Configuration:
    --config: Host YAML file; its ``gcs`` section provides the settings
    GCS_SERVICE_ACCOUNT: Service account JSON text
    GCS_BUCKET_NAME: Bucket name
    GCS_BUCKET_LOCATION: Bucket location (asia, eu, us; default: us)
    GCS_BASE_URL: Base URL template
"""

import argparse
import asyncio
import json
import logging
import sys

from .config import GcsSettings, ProviderConfig, load_host_config
from .errors import ProviderError
from .models import UploadFile
from .registry import default_registry

logger = logging.getLogger(__name__)

PROVIDER_KEY = "google-cloud-storage"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gcsprovider",
        description="Upload and delete media in a Google Cloud Storage bucket.",
    )
    parser.add_argument("--config", help="Host YAML config file with a 'gcs' section")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("check", help="Validate configuration and ensure the bucket exists")

    upload = commands.add_parser("upload", help="Upload a local file")
    upload.add_argument("path", help="Local file to upload")
    upload.add_argument("--folder", help="Folder inside the bucket (default: file hash)")

    delete = commands.add_parser("delete", help="Delete an object by its public URL")
    delete.add_argument("url", help="Public URL returned by upload")
    return parser


async def run(args: argparse.Namespace) -> int:
    """Run one command. Returns the process exit code."""
    overrides = load_host_config(args.config) if args.config else GcsSettings()
    uploader = default_registry().init(
        PROVIDER_KEY, ProviderConfig(), overrides=overrides
    )

    if args.command == "check":
        logger.info(f"Bucket {uploader.config.bucket_name} is ready")
    elif args.command == "upload":
        file = UploadFile.from_local_file(args.path, args.folder)
        await uploader.upload(file)
        print(json.dumps(file.urls, indent=2))
    elif args.command == "delete":
        await uploader.delete(UploadFile(hash="-", url=args.url))
        logger.info(f"Deleted {args.url}")
    return 0


def main(argv: list[str] | None = None) -> None:
    """Run the command line interface."""
    args = build_parser().parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    # Suppress SDK transport logging
    logging.getLogger("google").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    try:
        code = asyncio.run(run(args))
    except (ProviderError, FileNotFoundError) as e:
        logger.error(f"{args.command} failed: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted")
        sys.exit(130)

    sys.exit(code)


if __name__ == "__main__":
    main()
