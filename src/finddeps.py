"""finddeps - aggregate dependency manifest generator for multi-module Maven projects.

    Returns:
        int: Exit code
"""
import logging
import sys

from aggregate.pipeline import generate
from args import parse_args
from cli_config import build_config, load_config_file
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import ExitCodes
from errors import (
    ConfigError,
    CoordinateParseError,
    ManifestWriteError,
    ProjectReadError,
    RenderError,
)
from reactor.tree import ProjectTree

logger = logging.getLogger(__name__)


def _setup_logging(args):
    """Configure logging based on CLI arguments."""
    configure_logging(level=getattr(args, "LOG_LEVEL", None))

    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        logging.getLogger().addHandler(file_handler)
        logger.info("Logging to file: %s", log_file)


def run(args):
    """Run one manifest generation for ``args.DIRECTORY``.

    Returns:
        Path of the written manifest, or None when the module is not top-level.
    """
    config = build_config(args, load_config_file(getattr(args, "CONFIG", None)))
    tree = ProjectTree(include_super_pom=not getattr(args, "NO_SUPER_POM", False))

    current = tree.load(args.DIRECTORY)
    top = tree.top_level(current)
    if is_debug_enabled(logger):
        logger.debug(
            "Resolved top-level project",
            extra=extra_context(
                event="decision",
                component="cli",
                action="top_level",
                outcome="current" if top is current else "ancestor",
                target=top.path,
            ),
        )

    # Only the top-level module needs the full reactor.
    modules = [tree.effective(pom) for pom in tree.reactor(top)] if top is current else []
    return generate(
        current=tree.effective(current),
        top_level=tree.effective(top),
        modules=modules,
        config=config,
        output_path=getattr(args, "OUTPUT", None),
    )


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    _setup_logging(args)

    try:
        run(args)
    except (CoordinateParseError, ConfigError) as exc:
        logger.error("Configuration error: %s", exc)
        return ExitCodes.CONFIG_ERROR.value
    except RenderError as exc:
        logger.error("Error while rendering manifest: %s", exc)
        return ExitCodes.RENDER_ERROR.value
    except (ProjectReadError, ManifestWriteError) as exc:
        logger.error("%s", exc)
        return ExitCodes.FILE_ERROR.value
    except FileNotFoundError as exc:
        logger.error("File not found: %s, aborting", exc)
        return ExitCodes.FILE_ERROR.value
    return ExitCodes.SUCCESS.value


if __name__ == "__main__":
    sys.exit(main())
