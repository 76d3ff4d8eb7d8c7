"""Logging setup shared by the CLI and web entry points."""

import logging

from rich.logging import RichHandler

from skin_tone_analyzer.config import LOG_LEVEL


def setup_logging(level: str | None = None) -> None:
    """Route all log records through a rich console handler."""
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
    # insightface / onnxruntime are chatty at INFO
    logging.getLogger("insightface").setLevel(logging.WARNING)
