"""Configuration management for Prompt Extractor"""

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class ExtractorConfig(BaseModel):
    """Output configuration"""

    output_dir: Optional[str] = Field(
        default=None, description="Directory for output files (default: next to the input)"
    )
    json_filename: str = Field(default="extracted_prompts.json")
    csv_filename: str = Field(default="extracted_prompts.csv")
    json_indent: int = Field(default=2, description="Indentation of the JSON output")

    def output_paths(self, input_path: Path, output_dir: Optional[Path] = None):
        """Resolve the (json_path, csv_path) pair for an input file"""
        directory = output_dir or (Path(self.output_dir) if self.output_dir else input_path.parent)
        return directory / self.json_filename, directory / self.csv_filename


class ConfigManager:
    """Loads configuration from an optional JSON file"""

    def __init__(self, config_file: Optional[Path] = None):
        self.config_file = config_file
        self._config: Optional[ExtractorConfig] = None

    def load(self) -> ExtractorConfig:
        """Load configuration from file"""
        if self._config is not None:
            return self._config

        if self.config_file is None:
            self._config = ExtractorConfig()
            return self._config

        if not self.config_file.exists():
            print(f"Warning: Config file not found: {self.config_file}. Using defaults.")
            self._config = ExtractorConfig()
            return self._config

        try:
            with open(self.config_file, encoding="utf-8") as f:
                data = json.load(f)
            self._config = ExtractorConfig(**data)
        except Exception as e:
            print(f"Warning: Could not load config: {e}. Using defaults.")
            self._config = ExtractorConfig()

        return self._config
