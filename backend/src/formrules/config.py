"""Runtime settings for formrules tooling."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass
class Settings:
    """Settings for the CLI and form loading.

    Attributes:
        forms_path: Directory containing form YAML files
        log_level: Logging level name (e.g. "WARNING", "DEBUG")
    """

    forms_path: Path
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, base_path: Path | None = None) -> Settings:
        """Create settings from environment variables.

        Resolution order for the forms directory:
        1. FORMRULES_FORMS_PATH env var
        2. Default: {base_path}/forms, or ./forms
        """
        forms_path = os.environ.get("FORMRULES_FORMS_PATH")
        if forms_path:
            path = Path(forms_path)
        else:
            path = (base_path or Path.cwd()) / "forms"

        return cls(
            forms_path=path,
            log_level=os.environ.get("FORMRULES_LOG_LEVEL", "WARNING").upper(),
        )
