# debug.py
from __future__ import annotations
import logging
from typing import Dict

COMPONENTS = ("config", "settings", "plugboard", "stepping", "machine")

LOGGER_NAME = "ENIGMA"


class Debug:
    """Per-component trace switches over the ``ENIGMA`` logger.

    Creating one never touches the root logger; the program entry point
    calls :meth:`configure_root` once when it wants traces on stderr.
    """

    _root_configured: bool = False          # class-level guard

    def __init__(self) -> None:
        self.logger = logging.getLogger(LOGGER_NAME)
        self.components: Dict[str, bool] = {c: False for c in COMPONENTS}

    @classmethod
    def configure_root(cls, *, log_to: str | None = None) -> None:
        """
        Send DEBUG records to stderr (and to `log_to`, if given).
        Only the first call has any effect.
        """
        if cls._root_configured:
            return
        handlers: list[logging.Handler] = [logging.StreamHandler()]
        if log_to:
            handlers.append(logging.FileHandler(log_to, encoding="utf-8"))

        logging.basicConfig(
            level=logging.DEBUG,
            format="[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            handlers=handlers,
        )
        cls._root_configured = True

    # ── logging API ──────────────────────────────────────────────
    def log(self, component: str, message: str) -> None:
        if self.components.get(component, False):
            self.logger.debug("[%s] %s", component.upper(), message)

    def active(self, component: str) -> bool:
        """True when `log(component, ...)` would emit anything."""
        return self.components.get(component, False)

    def enable(self, *components: str) -> None:
        for c in components:
            if c not in self.components:
                raise ValueError(f"No such component: {c!r}")
            self.components[c] = True

    def any_active(self) -> bool:
        return any(self.components.values())
