from importlib.metadata import entry_points
from typing import Any, Dict, Optional, Type

from tablelink.common.logger import get_logger
from tablelink.common.settings import settings
from .protocols import SchemaBackend

logger = get_logger(__name__)

ENTRY_POINT_GROUP = "tablelink.backends"


def discover_backends() -> Dict[str, Type[SchemaBackend]]:
    """Discovers installed schema backends via 'tablelink.backends' entry points.

    Returns:
        Dict[str, Type[SchemaBackend]]: Dict mapping backend name (e.g., 'sqlalchemy')
            to the backend class.
    """
    backends = {}
    for ep in entry_points(group=ENTRY_POINT_GROUP):
        try:
            backends[ep.name] = ep.load()
        except Exception as e:
            logger.error(f"Failed to load schema backend {ep.name}: {e}")

    return backends


def build_backend(name: Optional[str] = None, url: Optional[str] = None, **kwargs: Any) -> SchemaBackend:
    """
    Instantiates a discovered backend through its `from_url` constructor.

    Args:
        name: Entry point name; defaults to the `TABLELINK_BACKEND` setting.
        url: Database URL; defaults to the `DATABASE_URL` setting.
        **kwargs: Extra arguments for the backend's engine.

    Raises:
        ValueError: If no backend is installed under `name`.
    """
    name = (name or settings.default_backend).lower()
    available = discover_backends()
    if name not in available:
        raise ValueError(
            f"No schema backend found for: '{name}'. "
            f"Available: {list(available.keys())}."
        )
    return available[name].from_url(url or settings.database_url, **kwargs)
