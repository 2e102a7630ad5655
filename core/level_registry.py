# core/level_registry.py

from __future__ import annotations
import logging
from pathlib import Path
from typing import Dict, List, Tuple, Callable, Optional, Any

logger = logging.getLogger(__name__)


class LevelRegistry:
    def __init__(self):
        # name → (level file, launcher_callable?)
        self._registry: Dict[str, Tuple[Path, Optional[Callable[..., Any]]]] = {}

    def register(
        self,
        name: str,
        path: Path,
        launcher: Callable[..., Any] | None = None,
    ) -> None:
        """
        launcher: called as launcher(screen, path, **kwargs) and expected to
        return a scene.
        """
        self._registry[name] = (Path(path), launcher)

    def all_levels(self) -> List[str]:
        return list(self._registry.keys())

    def path(self, name: str) -> Path:
        return self._registry[name][0]

    def launcher(self, name: str) -> Callable[..., Any] | None:
        return self._registry[name][1]

    def __contains__(self, name: object) -> bool:
        return name in self._registry

    def __len__(self) -> int:
        return len(self._registry)

    def launch_level(
        self,
        name: str,
        screen: Any,
        **kwargs: Any
    ) -> Any | None:
        """
        Call the registered launcher with the screen, the level file and any kwargs.
        """
        if name not in self._registry:
            logger.warning("No such level: %s", name)
            return None
        path, launcher = self._registry[name]
        if not launcher:
            logger.warning("No launcher defined for level: %s", name)
            return None
        return launcher(screen, path, **kwargs)
