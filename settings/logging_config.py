from __future__ import annotations

import logging
from logging.config import dictConfig


def configure_logging(level: int | str = logging.INFO) -> None:
	if isinstance(level, str):
		level = logging.getLevelName(level.upper())
	dictConfig(
		{
			"version": 1,
			"disable_existing_loggers": False,
			"formatters": {
				"standard": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"}
			},
			"handlers": {
				"console": {
					"class": "logging.StreamHandler",
					"formatter": "standard",
					"level": level,
				}
			},
			"loggers": {
				"": {"handlers": ["console"], "level": level},
				"uvicorn": {"handlers": ["console"], "level": level, "propagate": False},
				"arq": {"handlers": ["console"], "level": level, "propagate": False},
				"sqlalchemy.engine": {"handlers": ["console"], "level": logging.WARNING, "propagate": False},
			},
		}
	)
