#!/usr/bin/env python3
"""
ex-sync - keep a peer task store in line with Exchange.
"""

import argparse
import logging
import sys

from ex_sync.core import SyncConfig
from ex_sync.core.config import load_config, save_config, get_default_config_path
from ex_sync.core.paths import get_path_manager
from ex_sync.commands import SyncCommand, StatusCommand, ConfigCommand


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(config: SyncConfig, verbose: bool = False) -> None:
    """Configure root logging from the config and the --verbose flag."""
    level = logging.DEBUG if verbose else getattr(logging, config.log_level, logging.INFO)

    handlers = [logging.StreamHandler()]
    if config.log_to_file:
        manager = get_path_manager()
        try:
            manager.log_dir.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(manager.log_path, encoding='utf-8'))
        except OSError as exc:
            print(f"Warning: file logging disabled ({exc})")

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)


def main(argv=None):
    """Main entry point for ex-sync."""
    parser = argparse.ArgumentParser(
        description="One-way task sync from Exchange to a peer task store",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  ex-sync config --exchange exchange.json --other other.json
  ex-sync status                  # Show pairing and pending changes
  ex-sync sync                    # Run sync (dry-run by default)
  ex-sync sync --apply            # Apply sync changes
        """
    )

    default_config = get_default_config_path()

    parser.add_argument(
        '--config',
        help=f'Path to configuration file (default: {default_config})',
        default=None
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Verbose output'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Sync command
    sync_parser = subparsers.add_parser('sync', help='Sync tasks')
    sync_parser.add_argument(
        '--apply',
        action='store_true',
        help='Apply changes (default is dry-run)'
    )

    # Status command
    subparsers.add_parser('status', help='Show pairing and pending changes')

    # Config command
    config_parser = subparsers.add_parser('config', help='Show or set the task store paths')
    config_parser.add_argument('--exchange', metavar='PATH', help='Exchange task store (JSON)')
    config_parser.add_argument('--other', metavar='PATH', help='Peer task store (JSON)')

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    config = load_config(args.config)
    setup_logging(config, verbose=args.verbose)

    if args.verbose:
        actual_config_path = args.config if args.config else default_config
        print(f"Using config: {actual_config_path}")

    try:
        if args.command == 'sync':
            cmd = SyncCommand(config, verbose=args.verbose)
            success = cmd.run(apply_changes=args.apply)

        elif args.command == 'status':
            cmd = StatusCommand(config, verbose=args.verbose)
            success = cmd.run()

        elif args.command == 'config':
            cmd = ConfigCommand(config, verbose=args.verbose)
            if cmd.run(exchange=args.exchange, other=args.other):
                save_config(cmd.config, args.config)
            success = True

        else:
            print(f"Unknown command '{args.command}'.")
            return 1

        return 0 if success else 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        return 130
    except Exception as e:
        print(f"Error: {e}")
        if not args.verbose:
            print("Re-run with --verbose for more detail.")
        else:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
