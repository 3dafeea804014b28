import logging

"""
Package logger. The level starts at INFO and is replaced by `config.apply_settings`.
"""

logger = logging.getLogger("weightedpool")
logger.propagate = False
logger.setLevel(logging.INFO)

_handler = logging.StreamHandler()
_handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
logger.addHandler(_handler)
