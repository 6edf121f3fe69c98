"""
Command line interface.

    python -m string_processor list
    python -m string_processor run --processor normalize_whitespace --processor slugify "  Hello World "
    python -m string_processor run --config pipeline.yaml < titles.txt
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from .config.loader import ConfigLoader, PipelineConfig, ProcessorConfig
from .core.errors import StringProcessorError
from .core.helper import list_registered_processors
from .core.logger import DEFAULT_LEVEL, configure_logging, logger
from .core.pipeline import AsyncPipeline


def show_available_processors() -> None:
    """Display all registered processors and their filters."""
    for name, info in sorted(list_registered_processors().items()):
        print(f"{name} ({info['class_name']})")
        print(f"   {info['description']}")
        print(f"   filters: {', '.join(info['filters']) or '-'}")


def run_pipeline(config: PipelineConfig, texts: List[str]) -> None:
    pipeline = ConfigLoader().create_pipeline(config)
    if isinstance(pipeline, AsyncPipeline):
        results = asyncio.run(pipeline.run_many(texts))
    else:
        results = [pipeline.run(text) for text in texts]
    for result in results:
        print(result)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="string_processor", description="Apply string processors to text.")
    parser.add_argument("--log-level", default=None, help="loguru level, e.g. DEBUG or INFO")
    parser.add_argument("--log-file", default=None, help="also write logs to this file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="list the registered processors")

    run = subparsers.add_parser("run", help="run a pipeline on TEXT arguments or stdin lines")
    source = run.add_mutually_exclusive_group(required=True)
    source.add_argument("-c", "--config", help="YAML or JSON pipeline configuration")
    source.add_argument("-p", "--processor", action="append", dest="processors", metavar="NAME",
                        help="registered processor name, repeat to chain")
    run.add_argument("texts", nargs="*", metavar="TEXT")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(level=(args.log_level or DEFAULT_LEVEL).upper(), log_file=args.log_file)

    if args.command == "list":
        show_available_processors()
        return 0

    try:
        if args.config:
            config = ConfigLoader().load_from_file(args.config)
        else:
            config = PipelineConfig(pipeline=[ProcessorConfig(name=name) for name in args.processors])
        texts = args.texts or [line.rstrip("\n") for line in sys.stdin]
        run_pipeline(config, texts)
    except StringProcessorError as e:
        logger.bind(object_name="cli").debug(f"Command failed: {e.to_dict()}")
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0
