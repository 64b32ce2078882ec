"""Argument parsing for webjars-requirejs."""

import argparse
from constants import Constants, OutputFormats


def _add_common(parser):
    """Options shared by every subcommand."""
    parser.add_argument("-p", "--classpath",
                        dest="CLASSPATH",
                        help="Directory or .jar/.zip archive holding webjars (repeatable, searched in order)",
                        action="append",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to a YAML configuration file",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default=None)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("--cdn-prefix",
                        dest="CDN_PREFIX",
                        help=f"CDN prefix tried before the local one (default when given without a value: {Constants.DEFAULT_CDN_PREFIX})",
                        action="store",
                        nargs="?",
                        const=Constants.DEFAULT_CDN_PREFIX,
                        type=str)
    parser.add_argument("--max-workers",
                        dest="MAX_WORKERS",
                        help="Resolve webjars on this many threads",
                        action="store",
                        type=int)


def build_parser():
    """Build the argument parser with its subcommands."""
    parser = argparse.ArgumentParser(
        prog="webjars-requirejs",
        description="Generate RequireJS configuration for the webjars on a classpath",
        add_help=True,
    )
    subparsers = parser.add_subparsers(dest="COMMAND", metavar="command")
    subparsers.required = True

    resolve = subparsers.add_parser("resolve", help="Print the RequireJS setup (JSON or script)")
    _add_common(resolve)
    resolve.add_argument("-f", "--format",
                         dest="OUTPUT_FORMAT",
                         help="Output format: json (per-webjar configs) or js (setup script)",
                         action="store",
                         type=str.lower,
                         choices=[fmt.value for fmt in OutputFormats],
                         default=OutputFormats.JSON.value)
    resolve.add_argument("-o", "--output",
                         dest="OUTPUT",
                         help="Write the result to this file instead of stdout",
                         action="store",
                         type=str)
    resolve.add_argument("--url-prefix",
                         dest="URL_PREFIX",
                         help=f"Local URL prefix of the webjars (default: {Constants.DEFAULT_URL_PREFIX})",
                         action="store",
                         type=str)
    resolve.add_argument("--no-version",
                         dest="NO_VERSION",
                         help="Leave the version segment out of generated URLs",
                         action="store_true")
    resolve.add_argument("--error-on-warnings",
                         dest="ERROR_ON_WARNINGS",
                         help="Exit with a non-zero status code if some webjar could not be resolved.",
                         action="store_true")

    listing = subparsers.add_parser("list", help="List installed webjars and their format")
    _add_common(listing)

    serve = subparsers.add_parser("serve", help="Serve the setup and webjar files over HTTP")
    _add_common(serve)
    serve.add_argument("--host",
                       dest="HOST",
                       help=f"Bind address (default: {Constants.SERVER_HOST})",
                       action="store",
                       type=str)
    serve.add_argument("--port",
                       dest="PORT",
                       help=f"Bind port (default: {Constants.SERVER_PORT})",
                       action="store",
                       type=int)
    serve.add_argument("--allow-external",
                       dest="ALLOW_EXTERNAL",
                       help="Allow binding to a non-loopback address",
                       action="store_true")

    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)
