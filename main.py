#!/usr/bin/env python
"""CLI for the question-guided site explorer."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from pydantic import BaseModel, field_validator

from site_explorer.config import create_from_config, get_default_config_path, load_config
from site_explorer.errors import ReportError

logger = logging.getLogger(__name__)


class CLIArgs(BaseModel):
    """Validated CLI arguments."""

    config: Path
    log: bool = False
    log_dir: str = "logs"
    report: bool = False

    @field_validator("config")
    @classmethod
    def config_must_exist(cls, v: Path) -> Path:
        if not v.exists():
            raise ValueError(f"Config file not found: {v}")
        return v


async def run(args: CLIArgs) -> int:
    """Explore the configured site and optionally report the answers.

    Args:
        args: Validated CLI arguments.

    Returns:
        Process exit code.
    """
    config = load_config(args.config)
    explorer, run_logger, reporter = create_from_config(
        config,
        log_override=args.log if args.log else None,
        log_dir_override=args.log_dir if args.log_dir != "logs" else None,
        report_override=True if args.report else None,
    )

    logger.info(f"Exploring {explorer.site_root} for {len(config.questions)} question(s)")
    logger.info(f"Config: {args.config}")

    try:
        answers = await explorer.explore(config.questions)
    finally:
        await explorer.aclose()

    print(f"\nAnswered {len(answers)} of {len(config.questions)} question(s):\n")
    for question_id, question in config.questions.items():
        print(f"{question_id}. {question}")
        print(f"   -> {answers.get(question_id, '(no answer)')}")

    usage = explorer.usage
    logger.info("\n--- Usage Summary ---")
    logger.info(f"API calls: {len(usage.api_calls)}")
    logger.info(f"Input tokens: {usage.input_tokens:,}")
    logger.info(f"Output tokens: {usage.output_tokens:,}")
    logger.info(f"Embeddings: {usage.embedding_requests}")
    logger.info(f"Page fetches: {usage.page_fetches}")

    if run_logger.last_log_path:
        logger.info(f"\nRun log written to: {run_logger.last_log_path}")

    if reporter is None:
        return 0
    try:
        verification = await reporter.submit(answers)
    except ReportError as e:
        logger.error(str(e))
        return 1
    logger.info(f"Verification response: {verification}")
    return 0


def main() -> None:
    """Entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Answer questions by exploring a website.")
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to YAML config file (default: configs/default.yaml)",
    )
    parser.add_argument(
        "--log",
        action="store_true",
        default=False,
        help="Write the exploration event record to a JSON file",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default="logs",
        help="Directory for log files (default: logs/)",
    )
    parser.add_argument(
        "--report",
        action="store_true",
        default=False,
        help="Submit the answers to the configured verification endpoint",
    )

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    ns = parser.parse_args()
    config_path: Path = ns.config if ns.config else get_default_config_path()

    try:
        args = CLIArgs(
            config=config_path,
            log=ns.log,
            log_dir=ns.log_dir,
            report=ns.report,
        )
    except Exception as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        sys.exit(asyncio.run(run(args)))
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
