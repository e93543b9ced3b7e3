"""
CLI argument parser module.
"""

from argparse import ArgumentParser


def create_argument_parser() -> ArgumentParser:
    """Create and configure the argument parser."""
    parser = ArgumentParser(
        prog="motown",
        description="Load and validate MoTown startup configuration",
        epilog="""
Examples:
  motown --show-config
  APP_ENV=development motown --verbose
  motown --root /srv/motown --show-config
        """,
    )
    parser.add_argument(
        "--root",
        default=None,
        help="Application root holding config/ (default: the repository root)",
    )
    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Print the resolved configuration as JSON, with secrets masked",
    )
    parser.add_argument(
        "--skip-runtime-check",
        action="store_true",
        help="Do not verify the Python version against the package requirement",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging (DEBUG level), ignoring logger.level",
    )
    return parser
