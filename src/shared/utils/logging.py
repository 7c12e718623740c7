"""Process-wide loguru setup."""
import sys

import loguru


def configure_logging(level: str, service: str) -> None:
    """Replace loguru's default sink with one tagged by service name and filtered by level."""
    loguru.logger.remove()
    loguru.logger.add(
        sys.stderr,
        level=level.upper(),
        format=(
            "<green>{time:HH:mm:ss}</green> "
            f"<blue>[{service}]</blue> "
            "<level>{level: <8}</level> {message}"
        ),
    )
