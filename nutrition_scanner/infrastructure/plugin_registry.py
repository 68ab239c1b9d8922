"""Plugin registry - discovers and loads text engines via entry points."""

from __future__ import annotations

import logging
from functools import lru_cache
from importlib.metadata import entry_points
from typing import TYPE_CHECKING

from ..exceptions import ConfigurationError

if TYPE_CHECKING:
    from ..application.ports.vision_engine import TextDetector

logger = logging.getLogger(__name__)


class PluginRegistry:
    """Registry for discovering and loading text engine plugins.

    Uses entry points for plugin discovery:
    - nutrition_scanner.text_engines: TextDetector implementations

    Third-party packages can register plugins:

    [project.entry-points."nutrition_scanner.text_engines"]
    my_ocr = "my_package:MyTextDetector"
    """

    TEXT_ENGINE_GROUP = "nutrition_scanner.text_engines"

    @classmethod
    @lru_cache(maxsize=1)
    def discover_text_engines(cls) -> dict[str, type]:
        """Discover all available text engines.

        Returns:
            Dict mapping engine names to classes
        """
        engines = {}

        for ep in entry_points(group=cls.TEXT_ENGINE_GROUP):
            try:
                engines[ep.name] = ep.load()
                logger.debug(f"Discovered text engine: {ep.name}")
            except Exception as e:
                logger.warning(f"Failed to load text engine {ep.name}: {e}")

        # Always include built-in engines
        from ..adapters.ocr.paddle_adapter import PaddleTextDetector
        engines["paddleocr"] = PaddleTextDetector

        return engines

    @classmethod
    def create_text_engine(cls, name: str, **kwargs) -> "TextDetector":
        """Create text engine instance by name.

        Args:
            name: Engine name (e.g., 'paddleocr')
            **kwargs: Constructor arguments

        Returns:
            TextDetector instance

        Raises:
            ConfigurationError: If engine not found
        """
        engines = cls.discover_text_engines()

        if name not in engines:
            available = ", ".join(engines.keys())
            raise ConfigurationError(
                f"Unknown text engine: {name}. Available: {available}",
                config_key="text_engine"
            )

        return engines[name](**kwargs)

    @classmethod
    def list_available_text_engines(cls) -> list[str]:
        """List available text engine names."""
        return list(cls.discover_text_engines().keys())
