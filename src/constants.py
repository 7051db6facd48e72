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
    RENDER_ERROR = 3


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    POM_XML_FILE = "pom.xml"
    MANIFEST_FILE = "pom-dependencies.xml"
    MANIFEST_ARTIFACT_SUFFIX = "-dependencies"
    MANIFEST_PACKAGING = "pom"

    POM_NAMESPACE = "http://maven.apache.org/POM/4.0.0"
    XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
    POM_SCHEMA_LOCATION = "http://maven.apache.org/POM/4.0.0 http://maven.apache.org/xsd/maven-4.0.0.xsd"
    POM_MODEL_VERSION = "4.0.0"

    DEFAULT_TYPE = "jar"
    ADDITIONAL_ARTIFACT_SCOPE = "compile"
    DEFAULT_PLUGIN_GROUP = "org.apache.maven.plugins"
    DEFAULT_PARENT_RELATIVE_PATH = "../pom.xml"

    CENTRAL_REPO_ID = "central"
    CENTRAL_REPO_NAME = "Central Repository"
    CENTRAL_REPO_URL = "https://repo.maven.apache.org/maven2"

    CONFIG_SECTION = "finddeps"
    ENV_LOG_LEVEL = "FINDDEPS_LOG_LEVEL"
    ENV_LOG_FORMAT = "FINDDEPS_LOG_FORMAT"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    MAX_PARENT_DEPTH = 64
    MAX_INTERPOLATION_PASSES = 10
