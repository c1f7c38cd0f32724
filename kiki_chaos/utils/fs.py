import os

from kiki_chaos.utils.logger import get_module_logger

logger = get_module_logger(__name__)


def env_is_truthy(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")


def env_float(name: str, default: float) -> float:
    value = os.getenv(name, "")
    if value.strip() == "":
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %s", name, value, default)
        return default
