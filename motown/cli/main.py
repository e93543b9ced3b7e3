"""
CLI main application module.

This module contains the process entry point: it runs the startup
configuration sequence and turns configuration errors into diagnostics
and exit codes.
"""

import json
import logging
import sys

from ..constants import (
    EXIT_SUCCESS,
    EXIT_CONFIG_ERROR,
    EXIT_INTERRUPTED,
    EXIT_RUNTIME_ERROR,
    EXIT_UNEXPECTED_ERROR,
)
from ..config import ConfigError, RuntimeVersionError, load_configuration
from ..config import loader as config_loader
from ..utils import apply_log_level, setup_logging
from .parser import create_argument_parser

logger = logging.getLogger(__name__)


def main(argv=None):
    """Main entry point for the script."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose)

    try:
        config = load_configuration(root=args.root, check_runtime=not args.skip_runtime_check)
    except RuntimeVersionError as e:
        sys.stderr.write(f"{e}\n")
        sys.exit(EXIT_RUNTIME_ERROR)
    except ConfigError as e:
        print(f"\nError validating configuration! \n\tSee {config_loader.__file__}. \n\tError: {e}")
        sys.exit(EXIT_CONFIG_ERROR)
    except KeyboardInterrupt:
        logger.info("Interrupted by user.")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as e:
        logger.exception(f"Unexpected error while loading configuration: {e}")
        sys.exit(EXIT_UNEXPECTED_ERROR)

    if not args.verbose:
        apply_log_level(config.logger.level)

    if args.show_config:
        print(json.dumps(config.mask(), indent=2))

    return EXIT_SUCCESS
