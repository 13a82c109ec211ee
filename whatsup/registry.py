from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from whatsup.config import settings
from whatsup.models import WhatsupConfig


def parse_config(data: Any) -> WhatsupConfig:
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("Config must be a mapping")

    return WhatsupConfig.model_validate(data)


def load_config(path: Path | str | None = None) -> WhatsupConfig:
    """
    Load the endpoint config file.

    `.json` files are read with json (YAML rejects tab indentation), anything
    else goes through yaml.safe_load.
    """
    path = Path(path or settings.WHATSUP_CONFIG_PATH)
    if not path.exists():
        raise FileNotFoundError(f"Missing config file at {path}")

    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        return parse_config(json.loads(text))
    return parse_config(yaml.safe_load(text))
