"""Logging setup for git-feature."""

import logging

import click

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(message)s"

logger = logging.getLogger("git_feature")


class ClickHandler(logging.Handler):
    """Write log records to stderr through click."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


def configure_logging(verbose: bool = False) -> None:
    """Attach the stderr handler to the package logger.

    Only warnings are shown unless ``verbose`` is set. Calling this again
    just adjusts the level.
    """
    if not any(isinstance(h, ClickHandler) for h in logger.handlers):
        handler = ClickHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)
        logger.propagate = False

    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
