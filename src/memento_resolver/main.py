"""Main entry point for memento resolution."""

import argparse
import logging
import sys
from pathlib import Path

from .config.loader import Config, load_config
from .errors import ProcessorError
from .models.submission import SubmissionEvent
from .processor.registry import DepotRegistry
from .processor.time_travel_processor import TimeTravelProcessor
from .tools.url_tool import extract_urls, get_valid_url, is_auto_eligible

logger = logging.getLogger(__name__)


def collect_urls(config: Config, urls: list[str], text: str | None) -> tuple[list[str], list[str]]:
    """Return (valid URLs, rejected inputs) from arguments and free text."""
    valid: list[str] = []
    rejected: list[str] = []
    for url in urls:
        valid_url = get_valid_url(url, add_https=True)
        if valid_url is None:
            rejected.append(url)
        else:
            valid.append(valid_url)

    if text:
        for url in extract_urls(text):
            if config.auto_time_travel and not is_auto_eligible(url, config.allowlist):
                logger.debug("Skipping %s: not allowlisted", url)
                continue
            valid.append(url)
    return valid, rejected


def print_submission(event: SubmissionEvent) -> None:
    print(f"Saving {event.original_url} to {event.submitter_name}...", file=sys.stderr)


def time_travel(url: str, registry: DepotRegistry) -> bool:
    """Resolve one URL and print the outcome. Returns True on success."""
    logger.info("Attempting to time travel %s", url)
    try:
        processor = TimeTravelProcessor(url, registry)
    except ProcessorError as e:
        print(f"Invalid URL: {url} ({e.message})", file=sys.stderr)
        return False

    try:
        result = processor.process(on_submission=print_submission)
    except ProcessorError as e:
        logger.error("Time travel failed for %s: %s", url, e.message)
        print(f"No memento found for {url}. Try searching: {processor.get_fallback_url()}")
        return False

    logger.info(
        "%s %s via %s: %s",
        "Submitted" if result.was_submitted else "Found",
        url,
        result.source_name,
        result.memento_url,
    )
    print(result.model_dump_json())
    return True


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Find or create an archived snapshot (memento) of a URL"
    )
    parser.add_argument("urls", nargs="*", help="URLs to resolve")
    parser.add_argument(
        "-c",
        "--config",
        default="config/config.yaml",
        help="Path to config file (YAML or JSON)",
    )
    parser.add_argument(
        "-t",
        "--text",
        help="Free text to scan for URLs (allowlist applies when auto_time_travel is on)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    args = parser.parse_args()

    # Resolve paths relative to project root
    project_root = Path(__file__).resolve().parent.parent.parent
    config_path = Path(args.config)
    if not config_path.is_absolute() and not config_path.exists():
        config_path = project_root / config_path

    if not config_path.exists():
        print(f"Config not found: {config_path}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    config = load_config(config_path)
    registry = DepotRegistry.from_config(config)

    urls, rejected = collect_urls(config, args.urls, args.text)
    for bad in rejected:
        print(f"Invalid URL: {bad}", file=sys.stderr)
    if not urls:
        print("No URLs to resolve", file=sys.stderr)
        return 1

    failures = 0
    for url in urls:
        if not time_travel(url, registry):
            failures += 1
    return 1 if failures or rejected else 0


if __name__ == "__main__":
    sys.exit(main())
