# __main__.py – Point d'entrée : python -m lolstats
# -----------------------------------------------------------------------------
#  • Logging par défaut dès le départ, puis au niveau de Settings.LOG_LEVEL.
#  • Sans RIOT_API_KEY le process ne démarre pas (exit 1, clé jamais loguée).
#  • Un seul worker : le cache est en mémoire du process.
# -----------------------------------------------------------------------------

from __future__ import annotations

import sys

import uvicorn
from pydantic import ValidationError

from lolstats.config import get_settings
from lolstats.logging_config import get_logger, setup_logging
from lolstats.web.app import create_app


def main() -> int:
    setup_logging()
    log = get_logger("lolstats.main")

    try:
        settings = get_settings()
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        log.error(f"Invalid configuration ({fields}); RIOT_API_KEY environment variable is required")
        return 1

    setup_logging(settings.LOG_LEVEL)
    log.info(f"🚀 Starting API on {settings.HOST}:{settings.PORT}")
    uvicorn.run(create_app(), host=settings.HOST, port=settings.PORT, log_config=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
