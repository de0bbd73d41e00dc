"""Main module entrypoint for running the SPA web server.

This module loads the environment configuration, wires the application and
serves it until an OS termination signal arrives.
"""

import argparse
import logging
from collections.abc import Sequence

from spaserver.bootstrap import bootstrap_create_lifecycle, bootstrap_load_configuration
from spaserver.config import ConfigError


def main_parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Arguments without the program name, `sys.argv` when None.

    Returns:
        argparse.Namespace: Parsed arguments with a boolean `verbose`.

    Raises:
        SystemExit: Raised by argparse on invalid arguments.
    """

    argument_parser = argparse.ArgumentParser(description="Single Page Application web server")
    argument_parser.add_argument(
        "-verbose",
        "--verbose",
        dest="verbose",
        action="store_true",
        help="Log every request URI and configuration lookup",
    )
    return argument_parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the server with validated startup configuration.

    Args:
        argv: Arguments without the program name, `sys.argv` when None.

    Returns:
        int: Process exit status, `0` after shutdown, `1` on startup failure.

    Raises:
        SystemExit: Raised by argparse on invalid arguments.
    """

    parsed_arguments = main_parse_arguments(argv)
    logging.basicConfig(level=logging.DEBUG if parsed_arguments.verbose else logging.INFO)

    try:
        configuration = bootstrap_load_configuration()
    except ConfigError as error:
        print(f"unable to start the server: {error}")
        return 1

    print(f"Starting the SPA web server serving pages and APIs on port {configuration.http_port}")
    if parsed_arguments.verbose:
        print("logging is on")
    if not configuration.http_cache_control:
        print("cache is off")

    try:
        lifecycle = bootstrap_create_lifecycle(configuration, request_logging_enabled=parsed_arguments.verbose)
    except RuntimeError as error:
        print(f"unable to start the server: {error}")
        return 1

    outcome = lifecycle.lifecycle_run()
    print("SPA web server shutdown")
    return outcome.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
