"""Command-line enrichment runner.

Streams events for a list of app ids as JSON lines, one event per line::

    python -m enrichment.programmatic.cli 620 730 --stats --output out.jsonl
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import TextIO

from common.config import get_settings

from enrichment.exceptions import InvalidRequestError

from .enrichment_pipeline import build_orchestrator, create_http_session
from .events import DoneEvent
from .validation import parse_app_ids

logger = logging.getLogger(__name__)


async def run(app_ids: list[str], *, with_stats: bool, out: TextIO) -> int:
    """Resolve `app_ids` and write each event to `out`.

    Returns:
        int: Process exit code; ``1`` if every app failed or input was invalid.
    """
    settings = get_settings()
    try:
        ids = parse_app_ids(app_ids, max_items=settings.service.max_stream_size)
    except InvalidRequestError as e:
        logger.error("%s", e)
        return 1

    async with create_http_session(settings) as session:
        orchestrator = build_orchestrator(session, settings)
        failed = completed = 0
        async for event in orchestrator.stream(ids, with_stats=with_stats):
            out.write(json.dumps(event.to_wire(), ensure_ascii=False) + "\n")
            out.flush()
            if isinstance(event, DoneEvent):
                completed, failed = event.completed, event.failed

    return 1 if completed and failed == completed else 0


async def main() -> int:
    """
    CLI entry point for the enrichment runner.

    Returns:
        int: Process exit code.
    """
    parser = argparse.ArgumentParser(
        description="Fetch normalized Steam catalog records as JSON lines."
    )
    parser.add_argument("app_ids", nargs="+", help="Steam app ids to resolve")
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Also fetch SteamSpy tags and usage statistics",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write events to this file instead of stdout",
    )
    args = parser.parse_args()

    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.service.log_level),
        format=settings.service.log_format,
        stream=sys.stderr,
    )

    try:
        if args.output:
            with open(args.output, "w", encoding="utf-8") as f:
                return await run(args.app_ids, with_stats=args.stats, out=f)
        return await run(args.app_ids, with_stats=args.stats, out=sys.stdout)
    except OSError:
        logger.exception("Failed to write enrichment output")
        return 1


def console_main() -> None:
    """Console-script entry point."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":  # pragma: no cover
    console_main()
