"""
Command-line interface for the patch tool.
"""

import argparse
import json
import logging
import os
import sys
from typing import List

from filepatch import FileAccessError, FilePatchApplier, FilePatchError, FilePatchRequest, InvalidRequestError
from patch_tool import setup_logging
from patch_tool.config import DEFAULT_CONFIG_FILE, ConfigError, PatchToolConfig
from textpatch import NoEffectiveChangeError, PatchError


EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NO_CHANGE = 3


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="textpatch",
        description="Search/replace patching for text files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s apply src/app.py --search "return 1;" --replace "return 2;"
  %(prog)s apply src/app.py --search-file old.txt --replace-file new.txt --dry-run
  %(prog)s apply --request patch.json --commit
  %(prog)s init                     # Create default config
  %(prog)s validate-config          # Validate configuration
        """
    )

    parser.add_argument('--config', '-c', default=None,
                        help=f'Configuration file path (default: <root>/{DEFAULT_CONFIG_FILE} if present)')
    parser.add_argument('--root', default=None,
                        help='Directory that patched files are resolved against (default: current directory)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Log to stderr as well as the log file')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Apply command
    apply_parser = subparsers.add_parser('apply', help='Apply a search/replace patch to a file')
    apply_parser.add_argument('path', nargs='?', help='File to patch')
    search_group = apply_parser.add_mutually_exclusive_group()
    search_group.add_argument('--search', '-s', help='Text to search for')
    search_group.add_argument('--search-file', help='File containing the text to search for')
    replace_group = apply_parser.add_mutually_exclusive_group()
    replace_group.add_argument('--replace', '-r', help='Replacement text')
    replace_group.add_argument('--replace-file', help='File containing the replacement text')
    apply_parser.add_argument('--request', help='JSON file with path, search and replace fields')
    apply_parser.add_argument('--dry-run', action='store_true',
                              help='Check that the patch applies without writing the file')
    apply_parser.add_argument('--commit', action='store_true',
                              help='Commit the patched file with git')
    apply_parser.add_argument('--message', '-m', help='Commit message')
    apply_parser.add_argument('--no-diff', action='store_true',
                              help='Do not print the before/after diff')

    # Init command
    init_parser = subparsers.add_parser('init', help='Create default configuration')
    init_parser.add_argument('--force', action='store_true',
                             help='Overwrite existing configuration')

    # Validate config command
    subparsers.add_parser('validate-config', help='Validate configuration')

    return parser


def main(argv: List[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_ERROR

    root = os.path.abspath(args.root if args.root else os.getcwd())
    config_path = args.config if args.config else os.path.join(root, DEFAULT_CONFIG_FILE)

    try:
        if args.command == 'apply':
            return handle_apply(args, root, config_path)

        if args.command == 'init':
            return handle_init(args, config_path)

        if args.command == 'validate-config':
            return handle_validate_config(config_path)

        print(f"Unknown command: {args.command}", file=sys.stderr)
        return EXIT_ERROR

    except NoEffectiveChangeError as e:
        _print_error("No effective change", e, getattr(e, 'error_details', None))
        return EXIT_NO_CHANGE

    except (PatchError, FilePatchError) as e:
        _print_error("Error", e, getattr(e, 'error_details', None))
        return EXIT_ERROR

    except (ConfigError, FileNotFoundError) as e:
        _print_error("Error", e, None)
        return EXIT_ERROR


def _print_error(prefix: str, error: Exception, error_details: dict | None) -> None:
    logging.getLogger("PatchToolCLI").error("%s: %s", prefix, error)
    print(f"{prefix}: {error}", file=sys.stderr)
    if error_details:
        print(f"\nError details:\n{error_details}", file=sys.stderr)


def load_config(config_path: str, explicit: bool) -> PatchToolConfig:
    """
    Load and validate the configuration.

    A missing default configuration file is not an error; a missing explicitly
    named one is.
    """
    if not os.path.exists(config_path) and not explicit:
        return PatchToolConfig.create_default()

    config = PatchToolConfig.load_from_file(config_path)
    errors = config.validate()
    if errors:
        raise ConfigError("Invalid configuration: " + "; ".join(errors))

    return config


def _read_text(path: str, encoding: str) -> str:
    try:
        with open(path, 'r', encoding=encoding, newline='') as f:
            return f.read()

    except UnicodeDecodeError as e:
        raise FileAccessError(f"Failed to decode {path} with encoding '{encoding}': {str(e)}") from e

    except OSError as e:
        raise FileAccessError(f"Failed to read {path}: {str(e)}") from e


def build_request(args: argparse.Namespace, encoding: str) -> FilePatchRequest:
    """
    Build a file patch request from the apply command's arguments.

    Raises:
        InvalidRequestError: If required arguments are missing, or --request
            is combined with a path or search/replace arguments
    """
    if args.request:
        conflicting = [
            name for name, value in (
                ('path', args.path),
                ('--search', args.search),
                ('--search-file', args.search_file),
                ('--replace', args.replace),
                ('--replace-file', args.replace_file),
            ) if value is not None
        ]
        if conflicting:
            raise InvalidRequestError(
                f"--request cannot be combined with {', '.join(conflicting)}",
                {'request': args.request}
            )

        try:
            data = json.loads(_read_text(args.request, 'utf-8'))

        except json.JSONDecodeError as e:
            raise InvalidRequestError(f"Failed to parse request file {args.request}: {str(e)}") from e

        request = FilePatchRequest.from_dict(data)
        request.dry_run = request.dry_run or args.dry_run
        request.commit = request.commit or args.commit
        if args.message:
            request.commit_message = args.message

        return request

    if not args.path:
        raise InvalidRequestError("A file path is required (or use --request)")

    if args.search is not None:
        search = args.search

    elif args.search_file:
        search = _read_text(args.search_file, encoding)

    else:
        raise InvalidRequestError("One of --search or --search-file is required")

    if args.replace is not None:
        replacement = args.replace

    elif args.replace_file:
        replacement = _read_text(args.replace_file, encoding)

    else:
        raise InvalidRequestError("One of --replace or --replace-file is required")

    return FilePatchRequest(
        path=args.path,
        search=search,
        replacement=replacement,
        dry_run=args.dry_run,
        commit=args.commit,
        commit_message=args.message
    )


def handle_apply(args: argparse.Namespace, root: str, config_path: str) -> int:
    """Handle the apply command."""
    config = load_config(config_path, explicit=args.config is not None)
    setup_logging(config.logging.directory, config.logging.level, args.verbose)

    request = build_request(args, config.encoding)
    applier = FilePatchApplier(config.to_settings(root))
    result = applier.patch_file(request)

    print(result.message)
    if result.committed:
        print(f"Committed {result.path}")

    if config.show_diff and not args.no_diff and result.diff:
        print()
        print(result.diff, end='')

    return EXIT_OK


def handle_init(args: argparse.Namespace, config_path: str) -> int:
    """Handle the init command."""
    if os.path.exists(config_path) and not args.force:
        print(f"Configuration file already exists: {config_path}")
        print("Use --force to overwrite.")
        return EXIT_ERROR

    config = PatchToolConfig.create_default()
    config.save_to_file(config_path)

    print(f"Created configuration file: {config_path}")
    return EXIT_OK


def handle_validate_config(config_path: str) -> int:
    """Handle the validate-config command."""
    if not os.path.exists(config_path):
        print(f"Configuration file not found: {config_path}")
        return EXIT_ERROR

    config = PatchToolConfig.load_from_file(config_path)
    errors = config.validate()

    if errors:
        print("Configuration validation failed:")
        for error in errors:
            print(f"  ✗ {error}")

        return EXIT_ERROR

    print("✓ Configuration is valid")
    print(f"  Binary extensions: {len(config.binary_extensions)}")
    print(f"  Git commit: {'enabled' if config.git.commit else 'disabled'}")
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
