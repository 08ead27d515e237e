"""Process-level setup: logging and generator registration."""

from __future__ import annotations

import logging

from dotenv import load_dotenv

from grille.config import settings

load_dotenv()


def configure_logging(level: str | None = None) -> None:
    """Route grille diagnostics to stderr. Level defaults to GRILLE_LOG_LEVEL."""
    name = (level or settings.grille_log_level).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def register_generators() -> None:
    """Import all generator modules so @generator decorators fire."""
    import importlib
    import pkgutil

    for package_name in ["grille.engine.patterns", "grille.engine.center_fill"]:
        package = importlib.import_module(package_name)
        for _, module_name, _ in pkgutil.iter_modules(package.__path__):
            importlib.import_module(f"{package_name}.{module_name}")
