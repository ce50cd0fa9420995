"""
Command-line interface for hledger-sidecar.

Usage:
    hledger-sidecar placeholder   # Create an empty sidecar for the build target
    hledger-sidecar status        # Show which hledger binary will be used
    hledger-sidecar path          # Print the hledger path only
    hledger-sidecar version       # Show version information
"""

import argparse
import sys
from typing import List, Optional

from . import __version__
from .config import get_binaries_dir, get_build_target, load_env
from .logger import setup_logging
from .sidecar import (
    BundleAppHandle,
    SidecarResolver,
    ensure_placeholder,
    placeholder_path,
    sidecar_name,
)


def _resolve(args: argparse.Namespace) -> SidecarResolver:
    resolver = SidecarResolver()
    resolver.init_from_app(BundleAppHandle(args.resource_dir))
    return resolver


def cmd_placeholder(args: argparse.Namespace) -> int:
    """Create the build placeholder. Always succeeds so builds are not blocked."""
    target = args.target if args.target is not None else get_build_target()
    binaries_dir = args.binaries_dir or get_binaries_dir()

    if not target:
        if not args.quiet:
            print("⏭ No build target set, skipping sidecar placeholder")
        return 0

    path = placeholder_path(target, binaries_dir)
    created = ensure_placeholder(target, binaries_dir)
    if not args.quiet:
        if created:
            print(f"✓ Created placeholder: {path}")
        elif path.exists():
            print(f"✓ Sidecar present: {path}")
        else:
            print(f"✗ Could not create placeholder: {path}")
    return 0


def print_status(resolver: SidecarResolver, handle: BundleAppHandle) -> None:
    """Print resolution status."""
    print("hledger Sidecar Status")
    print("=" * 40)

    try:
        resource_dir = handle.resource_dir()
        print(f"Resource directory: {resource_dir}")
    except Exception as e:
        print(f"Resource directory: unavailable ({e})")

    if resolver.is_resolved:
        print(f"✓ Bundled {sidecar_name()} resolved")
        print(f"  Location: {resolver.path()}")
    else:
        print(f"✗ No usable bundled {sidecar_name()}")
        print(f"  Falling back to PATH lookup: {resolver.path()}")


def cmd_status(args: argparse.Namespace) -> int:
    """Show resolution status."""
    try:
        print_status(_resolve(args), BundleAppHandle(args.resource_dir))
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_path(args: argparse.Namespace) -> int:
    """Print the path the application would spawn."""
    try:
        print(_resolve(args).path())
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_version(args: argparse.Namespace) -> int:
    """Show version information."""
    print(f"hledger-sidecar: v{__version__}")
    print(f"Runtime sidecar name: {sidecar_name()}")
    target = get_build_target()
    print(f"Build target: {target or 'not set'}")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="hledger-sidecar",
        description="Locate the hledger sidecar binary bundled with an application",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  hledger-sidecar placeholder --target aarch64-apple-darwin
  TARGET=x86_64-pc-windows-msvc hledger-sidecar placeholder
  hledger-sidecar status --resource-dir /app/resources
  hledger-sidecar path
        """
    )

    parser.add_argument(
        "-V", "--version",
        dest="show_version",
        action="store_true",
        help="Show version information"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # placeholder command
    placeholder_parser = subparsers.add_parser(
        "placeholder",
        help="Create an empty sidecar file for the build target if missing"
    )
    placeholder_parser.add_argument(
        "--target", "-t",
        default=None,
        help="Target triple (default: $TARGET)"
    )
    placeholder_parser.add_argument(
        "--binaries-dir",
        default=None,
        help="Sidecar directory (default: $HLEDGER_SIDECAR_BINARIES_DIR or ./binaries)"
    )
    placeholder_parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress output"
    )
    placeholder_parser.set_defaults(func=cmd_placeholder)

    # status / path commands
    for name, func, help_text in (
        ("status", cmd_status, "Show which hledger binary will be used"),
        ("path", cmd_path, "Print the hledger path to spawn"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument(
            "--resource-dir",
            default=None,
            help="Application resource directory (default: bundle directory when frozen)"
        )
        sub.set_defaults(func=func)

    # version command
    version_parser = subparsers.add_parser(
        "version",
        help="Show version information"
    )
    version_parser.set_defaults(func=cmd_version)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    load_env()
    setup_logging()

    parser = create_parser()
    args = parser.parse_args(argv)

    if args.show_version:
        return cmd_version(args)

    if not args.command:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
