"""CLI entry point."""

import sys
import os

from common.logging_config import setup_logging
from cli.commands import get_config, get_uploader, upload_files
from cli.repl import repl_loop


def _pop_option(argv: list[str], name: str) -> str | None:
    """Remove '--name value' from argv and return value."""
    if name not in argv:
        return None
    index = argv.index(name)
    if index + 1 >= len(argv):
        print(f"Error: {name} requires a value")
        sys.exit(2)
    value = argv[index + 1]
    del argv[index:index + 2]
    return value


def main() -> None:
    """Entry point for CLI."""
    argv = sys.argv[1:]
    log_level = 'DEBUG' if '--debug' in argv else os.getenv('LOG_LEVEL', 'INFO')

    logger = setup_logging('cli', log_level=log_level)

    if '--debug' in argv:
        logger.info("Debug logging enabled")
        argv.remove('--debug')

    relay_url = _pop_option(argv, '--relay-url')
    if relay_url:
        get_config().relay_url_override = relay_url
        logger.info(f"Using relay URL from command line: {relay_url}")

    if argv:
        uploader = get_uploader()
        try:
            results, failures = upload_files(argv, uploader)
        finally:
            uploader.close()
        print('\n'.join(results))
        sys.exit(1 if failures else 0)

    logger.info("CLI starting...")
    try:
        repl_loop()
    except Exception as e:
        logger.error(f"CLI error: {e}", exc_info=True)
        raise
    finally:
        logger.info("CLI exiting")


if __name__ == "__main__":
    main()
