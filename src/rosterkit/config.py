"""Configuration model for the rosterkit bulk-import pipeline.

Provides ``ImportConfig`` with all tunable parameters and sensible defaults.
Supports loading overrides from YAML or JSON files via the ``from_file()``
classmethod.
"""

from __future__ import annotations

import json
import pathlib

import yaml
from pydantic import BaseModel


class ImportConfig(BaseModel):
    """All tunable parameters with sensible defaults for employee imports."""

    # --- Identity ---
    parser_version: str = "rosterkit:1.0.0"
    tenant_id: str | None = None

    # --- Security / Resource Limits ---
    max_file_size_mb: int = 10
    max_rows: int = 1000

    # --- Delimited text ---
    csv_delimiter: str = ","
    csv_quote: str = '"'
    text_encoding: str = "utf-8"

    # --- Validation ---
    detect_duplicate_emails: bool = True

    # --- Sink ---
    sink_batch_size: int = 250

    # --- Template ---
    template_sheet_name: str = "Employees"
    template_creator: str = "rosterkit"

    # --- Logging / PII Safety ---
    log_sample_data: bool = False

    @classmethod
    def from_file(cls, path: str) -> ImportConfig:
        """Load configuration from a YAML or JSON file.

        File format is detected by extension: ``.yaml`` / ``.yml`` for YAML,
        ``.json`` for JSON.  Keys present in the file override the
        corresponding defaults; keys not present retain their defaults.

        Raises:
            FileNotFoundError: If *path* does not exist.
            ValueError: If the file extension is not recognized.
        """
        file_path = pathlib.Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        suffix = file_path.suffix.lower()

        if suffix in (".yaml", ".yml"):
            with open(file_path) as fh:
                data = yaml.safe_load(fh)
        elif suffix == ".json":
            with open(file_path) as fh:
                data = json.load(fh)
        else:
            raise ValueError(
                f"Unsupported config file extension '{suffix}'. "
                "Use .yaml, .yml, or .json."
            )

        if data is None:
            data = {}

        return cls(**data)
