from pathlib import Path
from typing import Any, Mapping, Optional

from std2.configparser import hydrate
from std2.pickle.decoder import new_decoder
from std2.tree import merge
from yaml import safe_load

from ..consts import CONFIG_YML
from .types import Settings

_DECODER = new_decoder[Settings](Settings)


def load(user_config: Optional[Mapping[str, Any]] = None) -> Settings:
    config = _DECODER(
        merge(
            safe_load(CONFIG_YML.read_text("UTF-8")),
            hydrate(user_config or {}),
            replace=True,
        )
    )
    return config


def load_file(path: Optional[Path]) -> Settings:
    if path is None:
        return load()
    else:
        user_config = safe_load(path.read_text("UTF-8")) or {}
        return load(user_config)
