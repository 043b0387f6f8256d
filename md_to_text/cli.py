"""Command-line interface for md-to-text converter."""

import argparse
import json
import logging
import sys
from pathlib import Path

from .pipeline import ConversionPipeline
from .processing import (
    CodeHandling,
    ConversionConfig,
    HeadingStyle,
    ListStyle,
    MdToTextError,
    TableFormat,
)


logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(name)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        stream=sys.stderr,
    )


def build_config(args: argparse.Namespace) -> ConversionConfig:
    """Translate policy flags into a ConversionConfig."""
    return ConversionConfig(
        preserve_links=args.preserve_links,
        list_style=args.list_style,
        code_handling=args.code_handling,
        table_format=args.table_format,
        heading_style=args.heading_style,
    )


def _emit(result, args: argparse.Namespace) -> None:
    sys.stdout.write(result.text + '\n')
    if args.metadata:
        sys.stderr.write(json.dumps(result.to_dict()["metadata"], indent=2) + '\n')


def cmd_text(args: argparse.Namespace) -> int:
    """Handle the text command."""
    markdown = args.markdown if args.markdown is not None else sys.stdin.read()
    pipeline = ConversionPipeline()
    try:
        result = pipeline.convert(markdown, build_config(args))
    except MdToTextError as e:
        logger.error(f"Error converting markdown: {e}")
        return 1
    _emit(result, args)
    return 0


def cmd_file(args: argparse.Namespace) -> int:
    """Handle the file command."""
    pipeline = ConversionPipeline()
    try:
        result = pipeline.convert_file(args.input, build_config(args))
    except MdToTextError as e:
        logger.error(f"Error converting file: {e}")
        return 1

    if args.output:
        output_path = Path(args.output)
        try:
            output_path.write_text(result.text + '\n', encoding='utf-8')
        except OSError as e:
            logger.error(f"Error writing output file: {e}")
            return 1
        logger.info(f"[OK] Converted: {args.input} -> {output_path}")
        if args.metadata:
            sys.stderr.write(json.dumps(result.to_dict()["metadata"], indent=2) + '\n')
        return 0

    _emit(result, args)
    return 0


def cmd_url(args: argparse.Namespace) -> int:
    """Handle the url command."""
    pipeline = ConversionPipeline()
    try:
        result = pipeline.convert_url(args.url, build_config(args))
    except MdToTextError as e:
        logger.error(f"Error converting URL: {e}")
        return 1
    _emit(result, args)
    return 0


def cmd_batch(args: argparse.Namespace) -> int:
    """Handle the batch command for directory processing."""
    pipeline = ConversionPipeline()
    try:
        batch = pipeline.convert_directory(
            args.input_dir,
            pattern=args.pattern,
            recursive=not args.no_recursive,
            config=build_config(args),
            output_dir=args.output_dir,
        )
    except MdToTextError as e:
        logger.error(f"Error in batch conversion: {e}")
        return 1

    if not batch.total_files:
        logger.info(f"No markdown files found in directory: {args.input_dir}")
        return 0

    sys.stdout.write(batch.format_summary() + '\n')
    if args.metadata:
        sys.stderr.write(json.dumps(batch.to_dict(), indent=2) + '\n')
    return 0 if batch.success else 1


def _add_policy_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--preserve-links',
        action='store_true',
        help='Keep link and image targets in parentheses'
    )
    parser.add_argument(
        '--list-style',
        choices=[s.value for s in ListStyle],
        default=ListStyle.BULLETS.value,
        help='List item prefix (default: bullets)'
    )
    parser.add_argument(
        '--code-handling',
        choices=[c.value for c in CodeHandling],
        default=CodeHandling.PRESERVE.value,
        help='What to do with code blocks and spans (default: preserve)'
    )
    parser.add_argument(
        '--table-format',
        choices=[t.value for t in TableFormat],
        default=TableFormat.SIMPLE.value,
        help='Table rendering (default: simple)'
    )
    parser.add_argument(
        '--heading-style',
        choices=[h.value for h in HeadingStyle],
        default=HeadingStyle.HASH.value,
        help='Heading rendering (default: hash)'
    )
    parser.add_argument(
        '--metadata',
        action='store_true',
        help='Print conversion metadata as JSON to stderr'
    )


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='md-to-text',
        description='Convert Markdown documents to plain text'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Text command
    text_parser = subparsers.add_parser(
        'text',
        help='Convert markdown given as an argument or on stdin'
    )
    text_parser.add_argument(
        'markdown',
        nargs='?',
        help='Markdown text (default: read stdin)'
    )
    _add_policy_arguments(text_parser)
    text_parser.set_defaults(func=cmd_text)

    # File command
    file_parser = subparsers.add_parser(
        'file',
        help='Convert a local markdown file'
    )
    file_parser.add_argument(
        'input',
        help='Path to input markdown file'
    )
    file_parser.add_argument(
        '-o', '--output',
        help='Write the text to this path instead of stdout'
    )
    _add_policy_arguments(file_parser)
    file_parser.set_defaults(func=cmd_file)

    # URL command
    url_parser = subparsers.add_parser(
        'url',
        help='Fetch a remote markdown document and convert it'
    )
    url_parser.add_argument(
        'url',
        help='http(s) URL of the document'
    )
    _add_policy_arguments(url_parser)
    url_parser.set_defaults(func=cmd_url)

    # Batch command
    batch_parser = subparsers.add_parser(
        'batch',
        help='Convert all markdown files in a directory'
    )
    batch_parser.add_argument(
        'input_dir',
        help='Directory containing markdown files'
    )
    batch_parser.add_argument(
        '-p', '--pattern',
        default='*.md',
        help='File name pattern (default: *.md)'
    )
    batch_parser.add_argument(
        '--no-recursive',
        action='store_true',
        help='Do not descend into subdirectories'
    )
    batch_parser.add_argument(
        '-o', '--output-dir',
        help='Write one .txt file per converted document here'
    )
    _add_policy_arguments(batch_parser)
    batch_parser.set_defaults(func=cmd_batch)

    return parser


def main(argv=None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    setup_logging(args.verbose)
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
