#!/usr/bin/env python3
"""
SwfMeta Command Line Interface
Extract stage size, frame count and frame rate from SWF files
"""
import argparse
import logging
import sys
from typing import List, Optional

from swfmeta import __version__
from swfmeta.core.config_manager import ConfigManager
from swfmeta.core.errors import ConfigurationError, InputNotFoundError
from swfmeta.core.logging_system import setup_logging
from swfmeta.core.pipeline import Pipeline
from swfmeta.models.config import AppConfig, OutputFormat

EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_BAD_INPUT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="extract-metadata",
        description="Extract metadata from SWF files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Single file, writes movie.swf.json
  extract-metadata -i movie.swf

  # Whole tree as YAML with progress output
  extract-metadata -i ./swfs -f yaml -v

  # Four files at a time
  extract-metadata -i ./swfs --workers 4
        """
    )

    parser.add_argument('-i', '--input', required=True, metavar='PATH',
                        help='Path to the SWF file or directory to extract metadata from')
    parser.add_argument('-f', '--format', choices=[f.value for f in OutputFormat], default=None,
                        help='Output format (json, yaml, or text); default json')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Verbose output')

    parser.add_argument('--config', help='Path to a JSON or YAML configuration file')
    parser.add_argument('--workers', type=int, default=None,
                        help='Number of files processed concurrently')
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        default=None, help='Logging level')
    parser.add_argument('--log-file', help='Log file path')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    return parser


def create_config_from_args(args) -> AppConfig:
    """Merge file and environment configuration with command line overrides"""
    config = ConfigManager(args.config).get_config()
    data = config.model_dump()

    if args.format:
        data['extraction']['output_format'] = args.format
    if args.workers is not None:
        data['extraction']['max_workers'] = args.workers
    if args.log_level:
        data['logging']['level'] = args.log_level
    if args.log_file:
        data['logging']['log_file'] = args.log_file

    try:
        return AppConfig(**data)
    except ValueError as e:
        raise ConfigurationError(f"Invalid command line option: {e}") from e


def _print_result(source_path: str, ok: bool, detail: str):
    if ok:
        print(f"Saved metadata to: {detail}", file=sys.stderr)
    else:
        print(f"Error: Failed to process {source_path}: {detail}", file=sys.stderr)


def _print_failure(source_path: str, ok: bool, detail: str):
    if not ok:
        _print_result(source_path, ok, detail)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = create_config_from_args(args)
    except ConfigurationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_BAD_INPUT

    try:
        setup_logging(config.logging)
    except ConfigurationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_BAD_INPUT
    logger = logging.getLogger(__name__)

    if args.verbose:
        print(f"Input path: {args.input}", file=sys.stderr)
        print(f"Format: {config.extraction.output_format.value}", file=sys.stderr)

    pipeline = Pipeline(
        config.extraction,
        on_result=_print_result if args.verbose else _print_failure
    )

    try:
        summary = pipeline.run(args.input)
    except InputNotFoundError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_BAD_INPUT
    except KeyboardInterrupt:
        logger.info("Processing interrupted by user")
        return EXIT_FAILURES

    if summary.is_empty and not summary.aborted:
        print(f"No {config.extraction.target_extension} files found in {args.input}", file=sys.stderr)

    if summary.aborted:
        print(f"Error: Run aborted: {summary.abort_reason}", file=sys.stderr)

    if args.verbose:
        print(
            f"Processed {summary.processed} SWF file(s): "
            f"{summary.successes} succeeded, {summary.failure_count} failed",
            file=sys.stderr
        )

    return EXIT_OK if summary.ok else EXIT_FAILURES


if __name__ == '__main__':
    sys.exit(main())
