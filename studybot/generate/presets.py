# Named generationConfig presets, loaded from YAML.

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional

import yaml

from .types import GenerationConfig

DEFAULT_CONFIG_PATH = Path(__file__).with_name("config.yaml")

SIMPLE = "simple"
CHAT = "chat"
STYLED = "styled"
FLASHCARDS = "flashcards"
QUIZ = "quiz"

PRESET_NAMES = (SIMPLE, CHAT, STYLED, FLASHCARDS, QUIZ)


@lru_cache(maxsize=8)
def load_presets(config_path: Optional[str] = None) -> Dict[str, GenerationConfig]:
    path = config_path or DEFAULT_CONFIG_PATH
    if not os.path.exists(path):
        raise FileNotFoundError(f"Generation config not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}

    raw = cfg.get("presets", {})
    missing = [name for name in PRESET_NAMES if name not in raw]
    if missing:
        raise ValueError(f"Generation config {path} lacks presets: {', '.join(missing)}")
    return {name: GenerationConfig.model_validate(raw[name]) for name in PRESET_NAMES}
