"""Argument parsing functionality for finddeps."""

import argparse


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="finddeps",
        description=(
            "finddeps - Aggregate every dependency, plugin and repository of a "
            "multi-module Maven project into one pom-dependencies.xml"
        ),
        add_help=True,
    )

    parser.add_argument("-d", "--directory",
                        dest="DIRECTORY",
                        help="Module directory or pom.xml to run for (default: current directory)",
                        action="store", type=str,
                        default=".")
    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Write the manifest to this path instead of <top-level>/pom-dependencies.xml",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)

    parser.add_argument("--include-repo-id",
                        dest="INCLUDE_REPO_IDS",
                        help="Only keep repositories with this id (repeatable)",
                        action="append", type=str,
                        default=[])
    parser.add_argument("--include-repo-url",
                        dest="INCLUDE_REPO_URLS",
                        help="Only keep repositories with this URL (repeatable)",
                        action="append", type=str,
                        default=[])
    parser.add_argument("--exclude-repo-id",
                        dest="EXCLUDE_REPO_IDS",
                        help="Drop repositories with this id (repeatable)",
                        action="append", type=str,
                        default=[])
    parser.add_argument("--exclude-repo-url",
                        dest="EXCLUDE_REPO_URLS",
                        help="Drop repositories with this URL (repeatable)",
                        action="append", type=str,
                        default=[])
    parser.add_argument("-a", "--additional-artifact",
                        dest="ADDITIONAL_ARTIFACTS",
                        help="Extra artifact group:artifact:version[:type[:classifier]] (repeatable)",
                        action="append", type=str,
                        default=[])
    parser.add_argument("--no-super-pom",
                        dest="NO_SUPER_POM",
                        help="Do not add the implicit Maven Central repository to every module.",
                        action="store_true")

    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'])
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)

    return parser.parse_args(argv)
