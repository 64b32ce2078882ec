"""webjars-requirejs - RequireJS configuration for the webjars on a classpath

    Returns:
        int: Exit code
"""
import json
import logging
import os
import sys

from constants import Constants, ExitCodes, OutputFormats
from common.logging_utils import add_file_handler, configure_logging, extra_context, is_debug_enabled
from errors import ConfigError
from args import parse_args
from settings import load_settings
from requirejs import RequireJS, default_chain

logger = logging.getLogger(__name__)


def _setup_logging(args, level=None):
    """Configure logging from ``--loglevel``/``--logfile`` (or the config level)."""
    # CLI, then WEBJARS_LOG_LEVEL, then the config file
    configure_logging(getattr(args, "LOG_LEVEL", None) or os.environ.get(Constants.ENV_LOG_LEVEL) or level)
    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        add_file_handler(log_file)
        logger.info("Logging to file: %s", log_file)


def settings_from_args(args):
    """Merge CLI arguments over environment, config file and defaults."""
    overrides = {
        "classpath": getattr(args, "CLASSPATH", None),
        "url_prefix": getattr(args, "URL_PREFIX", None),
        "cdn_prefix": getattr(args, "CDN_PREFIX", None),
        "max_workers": getattr(args, "MAX_WORKERS", None),
        "host": getattr(args, "HOST", None),
        "port": getattr(args, "PORT", None),
    }
    if getattr(args, "NO_VERSION", False):
        overrides["include_version"] = False
    return load_settings(getattr(args, "CONFIG", None), overrides=overrides)


def write_output(text, path=None):
    """Write ``text`` to ``path`` or stdout.

    Args:
        text (str): Output content.
        path (str): Destination file; stdout when None.
    """
    if not path:
        sys.stdout.write(text)
        if not text.endswith("\n"):
            sys.stdout.write("\n")
        return
    try:
        with open(path, 'w', encoding='utf-8') as file:
            file.write(text)
        logging.info("Output has been successfully written to: %s", path)
    except OSError as e:
        logging.error("Output file couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def run_resolve(args, settings):
    """Resolve every webjar and print the JSON configs or the setup script."""
    requirejs = RequireJS.from_settings(settings)
    try:
        chain = default_chain(settings.url_prefix, settings.cdn_prefix, settings.include_version)
        as_script = args.OUTPUT_FORMAT == OutputFormats.JS.value
        aggregate = requirejs.aggregate(chain, legacy_scripts=as_script)
        if as_script:
            text = requirejs.aggregator.render_javascript(aggregate)
        else:
            text = json.dumps(aggregate.to_json(), indent=2)
    finally:
        requirejs.close()

    write_output(text, getattr(args, "OUTPUT", None))

    unresolved = aggregate.unresolved()
    for webjar_id, outcome in unresolved.items():
        logging.info("No RequireJS config for %s: %s", webjar_id, outcome.reason.value)
    if is_debug_enabled(logger):
        logger.debug(
            "Resolve finished",
            extra=extra_context(
                event="function_exit", component="cli", action="resolve",
                count=len(aggregate.outcomes), outcome="warnings" if unresolved else "success"
            )
        )
    if unresolved and getattr(args, "ERROR_ON_WARNINGS", False):
        return ExitCodes.EXIT_WARNINGS.value
    return ExitCodes.SUCCESS.value


def run_list(args, settings):
    """Print installed webjars with their version and descriptor format."""
    requirejs = RequireJS.from_settings(settings)
    try:
        webjars = requirejs.webjars()
        if not webjars:
            logging.warning("No webjars found on the classpath.")
            return ExitCodes.SUCCESS.value
        width = max(len(webjar_id) for webjar_id in webjars)
        lines = []
        for webjar_id, version in webjars.items():
            fmt = requirejs.dispatcher.classify(webjar_id)
            lines.append(f"{webjar_id.ljust(width)}  {version}  {fmt.value if fmt else '-'}")
    finally:
        requirejs.close()
    write_output("\n".join(lines))
    return ExitCodes.SUCCESS.value


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    configure_logging(getattr(args, "LOG_LEVEL", None))

    try:
        settings = settings_from_args(args)
    except ConfigError as e:
        logging.error("%s", e)
        sys.exit(ExitCodes.CONFIG_ERROR.value)
    _setup_logging(args, settings.log_level)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action=args.COMMAND)
        )

    if not settings.classpath:
        logging.warning("Empty classpath: pass -p/--classpath or set %s.", Constants.ENV_CLASSPATH)

    if args.COMMAND == "serve":
        from cli_server import run_server
        run_server(args, settings)
        sys.exit(ExitCodes.SUCCESS.value)
    if args.COMMAND == "list":
        sys.exit(run_list(args, settings))
    sys.exit(run_resolve(args, settings))


if __name__ == "__main__":
    main()
