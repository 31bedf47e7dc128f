from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


@dataclass(frozen=True)
class Settings:
    """Runtime settings read from the environment.

    TTL_KV_LOG_LEVEL   logging level name, default INFO
    TTL_KV_LOG_FORMAT  logging format string
    """

    log_level: str = "INFO"
    log_format: str = DEFAULT_LOG_FORMAT

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        return cls(
            log_level=env.get("TTL_KV_LOG_LEVEL", "INFO").upper(),
            log_format=env.get("TTL_KV_LOG_FORMAT", DEFAULT_LOG_FORMAT),
        )


def configure_logging(settings: Settings | None = None) -> None:
    """Configure root logging for applications embedding the cache.

    The library itself never installs handlers; call this from application code.
    """
    settings = settings or Settings.from_env()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=settings.log_format,
    )
