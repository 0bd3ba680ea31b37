from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

TOOL_FIELDS = (
    "graffle",
    "dia",
    "epstopdf",
    "gnuplot",
    "latex",
    "pdflatex",
    "bibtex",
    "dvips",
    "vega",
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="DOCTASKS_", case_sensitive=False)

    definition_file: Path = Path("Doctasks.py")
    dep_file: str = ".doctasks.db"
    check_file_uptodate: Literal["timestamp", "md5"] = "timestamp"

    graffle: str = "graffle.sh"
    dia: str = "dia"
    epstopdf: str = "epstopdf"
    gnuplot: str = "gnuplot-latex-fonts"
    latex: str = "latex"
    pdflatex: str = "pdflatex"
    bibtex: str = "bibtex"
    dvips: str = "dvips"
    vega: str = "vega"

    @field_validator(*TOOL_FIELDS)
    @classmethod
    def _anchor_relative_tool(cls, value: str) -> str:
        # Tools such as gnuplot run inside the script's directory.
        if os.path.dirname(value) and not os.path.isabs(value):
            return os.path.abspath(value)
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
