# cli.py

import argparse
import json
import logging
import sys

from config import ReaderConfig
from core.catalog import Catalog
from core.errors import ReaderError
from core.extraction import load_groups
from security.input_validation import ReferenceValidator
from utils.logging_config import setup_logging

logger = logging.getLogger(__name__)

def _load_catalog(source: str) -> Catalog:
    return Catalog.build(load_groups(source))

def info_command(args):
    """List groups and page counts"""
    catalog = _load_catalog(args.source)
    
    if args.json:
        output_data = [
            {"title": group.title, "pages": len(group), "metadata": group.metadata}
            for group in catalog.groups
        ]
        print(json.dumps(output_data, indent=2, default=str))
        return 0
    
    print(f"Source: {args.source}")
    print(f"{len(catalog.groups)} groups, {catalog.length()} pages\n")
    first_page = 0
    for i, group in enumerate(catalog.groups, 1):
        span = (f"pages {first_page + 1}-{first_page + len(group)}"
                if len(group) else "no pages")
        print(f"{i}. {group.title} ({span})")
        first_page += len(group)
    return 0

def check_command(args):
    """Validate every reference in the source"""
    groups = load_groups(args.source)
    invalid = ReferenceValidator.invalid_sources(groups)
    total = sum(len(group) for group in groups)
    
    print(f"Checked {total} references")
    if not invalid:
        print("All references are valid.")
        return 0
    
    print(f"{len(invalid)} invalid references:")
    for source in invalid:
        print(f"  - {source}")
    return 1

def view_command(args):
    """Open the reader window"""
    from main import run_reader
    
    config = args.config_obj
    if args.preload is not None:
        config.navigator.preload_quantity = args.preload
    return run_reader(config, args.source, args.start)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Comic Reader - Command Line Interface"
    )
    parser.add_argument('-c', '--config', default='config.yaml',
                        help='Configuration file')
    subparsers = parser.add_subparsers(dest='command', help='Commands')
    
    info_parser = subparsers.add_parser('info', help='List groups and page counts')
    info_parser.add_argument('source', help='Folder, manifest or image')
    info_parser.add_argument('--json', action='store_true', help='Output JSON')
    info_parser.set_defaults(func=info_command)
    
    check_parser = subparsers.add_parser('check', help='Validate image references')
    check_parser.add_argument('source', help='Folder, manifest or image')
    check_parser.set_defaults(func=check_command)
    
    view_parser = subparsers.add_parser('view', help='Open the reader window')
    view_parser.add_argument('source', help='Folder, manifest or image')
    view_parser.add_argument('--start', type=int, help='Page to open first (zero-based)')
    view_parser.add_argument('--preload', type=int, help='Number of pages to keep preloaded')
    view_parser.set_defaults(func=view_command)
    
    return parser

def main_cli(argv=None) -> int:
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)
    
    if args.command is None:
        parser.print_help()
        return 0
    
    args.config_obj = ReaderConfig.load(args.config)
    setup_logging(args.config_obj.log_level, args.config_obj.log_dir)
    
    try:
        return args.func(args)
    except (ReaderError, OSError) as e:
        logger.error("%s failed: %s", args.command, e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

if __name__ == "__main__":
    sys.exit(main_cli())
