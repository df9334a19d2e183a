"""structlog setup for scripts and applications.

The library itself only calls ``structlog.get_logger()``; nothing is
configured on import.
"""

import logging

import structlog


def configure_logging(level: str | int = "INFO", *, json: bool = False) -> None:
    """Configure structlog with a console or JSON renderer.

    Args:
        level: Minimum log level, as a name ("DEBUG") or a logging constant
        json: Render one JSON object per line instead of colored console output
    """
    if isinstance(level, str):
        level = logging.getLevelNamesMapping()[level.upper()]

    renderer: structlog.typing.Processor = (
        structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )
