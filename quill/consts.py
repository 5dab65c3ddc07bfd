from os import environ
from pathlib import Path

TOP_LEVEL = Path(__file__).resolve().parent

_CONF_DIR = TOP_LEVEL / "config"
CONFIG_YML = _CONF_DIR / "defaults.yml"


DEBUG = "QUILL_DEBUG" in environ


# Name of the unresolved type
DYNAMIC = "dynamic"
# Synthetic / unnamed entities
PLACEHOLDER = "_"
PRIVATE_PREFIX = "_"
DEPRECATED = "deprecated"

CORE_LIBRARY = "dart:core"
