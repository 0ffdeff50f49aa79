"""Configuration loading."""

from pathlib import Path
from typing import Optional

from prompt_outline.ids import CounterIdFactory, IdFactory, generate_random_id
from prompter.models.config import PrompterConfig
from prompter.utils.logging import get_logger


logger = get_logger(__name__)


def default_config_path() -> Path:
    """Location of the user config: ~/.config/prompter/config.yaml."""
    return Path.home() / ".config" / "prompter" / "config.yaml"


def load_config(path: Optional[Path] = None) -> PrompterConfig:
    """
    Load configuration from a path, or from the default location.

    A missing file at the default location is not an error: the defaults
    are used. A missing file at an explicit path is.

    Args:
        path: Path to config.yaml (None = default location)

    Returns:
        Loaded PrompterConfig

    Raises:
        FileNotFoundError: If an explicit config path doesn't exist
        ValueError: If config is invalid
    """
    explicit = path is not None
    path = path if explicit else default_config_path()

    logger.info("config_loading", path=str(path))

    if not explicit and not path.exists():
        logger.warning("config_not_found", path=str(path), fallback="defaults")
        return PrompterConfig()

    try:
        config = PrompterConfig.load(path)
    except FileNotFoundError as e:
        logger.error("config_not_found", path=str(path), error=str(e))
        raise
    except ValueError as e:
        logger.error("config_validation_error", path=str(path), error=str(e))
        raise

    logger.info("config_loaded", path=str(path))
    return config


def build_id_factory(config: PrompterConfig) -> IdFactory:
    """Create the section id source selected by the config."""
    if config.ids.strategy == "counter":
        return CounterIdFactory(prefix=config.ids.prefix)
    return generate_random_id
