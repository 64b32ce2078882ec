"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONFIG_ERROR = 2
    EXIT_WARNINGS = 3


class OutputFormats(Enum):
    """Output formats supported by the resolve command.

    Args:
        Enum (string): Output formats supported by the program.
    """

    JSON = "json"
    JS = "js"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    # Resource layout inside a webjar
    WEBJARS_PATH_PREFIX = "META-INF/resources/webjars"
    WEBJARS_MAVEN_PREFIX = "META-INF/maven/org.webjars"
    WEBJARS_MAVEN_BOWER_PREFIX = "META-INF/maven/org.webjars.bower"
    WEBJARS_MAVEN_NPM_PREFIX = "META-INF/maven/org.webjars.npm"
    POM_XML_FILE = "pom.xml"
    BOWER_JSON_FILE = "bower.json"
    PACKAGE_JSON_FILE = "package.json"
    INDEX_JS_FILE = "index.js"
    LEGACY_SCRIPT_FILE = "webjars-requirejs.js"
    REQUIREJS_PROPERTY = "requirejs"
    ARCHIVE_SUFFIXES = (".jar", ".zip")

    # Prefix defaults
    DEFAULT_URL_PREFIX = "/webjars/"
    DEFAULT_CDN_PREFIX = "https://cdn.jsdelivr.net/webjars/"

    # Logging
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
    ENV_LOG_LEVEL = "WEBJARS_LOG_LEVEL"

    # Configuration
    CONFIG_FILE_NAMES = ("webjars-requirejs.yml", "webjars-requirejs.yaml")
    USER_CONFIG_PATH = "~/.config/webjars-requirejs/config.yml"
    ENV_CLASSPATH = "WEBJARS_CLASSPATH"
    ENV_URL_PREFIX = "WEBJARS_URL_PREFIX"
    ENV_CDN_PREFIX = "WEBJARS_CDN_PREFIX"
    ENV_MAX_WORKERS = "WEBJARS_MAX_WORKERS"

    # HTTP surface
    SERVER_HOST = "127.0.0.1"
    SERVER_PORT = 8080
    SERVER_MOUNT = "/webjars"
