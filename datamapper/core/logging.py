import logging
import sys
from datamapper.core.config import settings


class ContextFormatter(logging.Formatter):
    """Formatter that tolerates records without an entity_class field."""
    def format(self, record):
        if not hasattr(record, 'entity_class'):
            record.entity_class = '-'
        return super().format(record)


def configure_logging(level: str | None = None) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ContextFormatter(
        "%(asctime)s %(levelname)s %(name)s [class=%(entity_class)s] - %(message)s"
    ))
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        handlers=[handler],
    )
