"""Configuration persistence manager for the flow-line tracer.

This module handles loading and saving of tracer configuration to/from JSON files.
"""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Optional, Tuple

from flowlines.models import CONFIG_FILE, SamplingMode, TracerConfig


class ConfigManager:
    """Handles loading and saving of tracer configuration."""

    def __init__(self, config_path: Path = CONFIG_FILE):
        """Initialize config manager.

        Args:
            config_path: Path to configuration file (defaults to ~/.flowlines_config.json)
        """
        self.config_path = Path(config_path)

    def load(self) -> TracerConfig:
        """Load configuration from file, returning defaults if not found.

        Returns:
            TracerConfig with loaded or default values
        """
        defaults = TracerConfig()

        try:
            if self.config_path.exists():
                with open(self.config_path, "r") as f:
                    data = json.load(f)
                # All values convert before anything is kept (fallback to defaults)
                config = TracerConfig(
                    step_length=float(data.get("step_length", defaults.step_length)),
                    max_steps=int(data.get("max_steps", defaults.max_steps)),
                    taper_min=float(data.get("taper_min", defaults.taper_min)),
                    taper_max=float(data.get("taper_max", defaults.taper_max)),
                    num_lines=int(data.get("num_lines", defaults.num_lines)),
                    seed=data.get("seed", defaults.seed),
                    sampling_mode=SamplingMode(
                        data.get("sampling_mode", defaults.sampling_mode.value)
                    ),
                    max_workers=int(data.get("max_workers", defaults.max_workers)),
                )
                print(f"✓ Loaded configuration from {self.config_path}")
                return config
        except (OSError, ValueError, TypeError, AttributeError) as e:
            print(f"Warning: Could not load config file: {e}")

        return defaults

    def save(self, config: TracerConfig) -> Tuple[bool, Optional[str]]:
        """Save configuration to file.

        Args:
            config: TracerConfig to save

        Returns:
            Tuple of (success: bool, error_message: Optional[str])
        """
        data = asdict(config)
        data["sampling_mode"] = config.sampling_mode.value

        try:
            with open(self.config_path, "w") as f:
                json.dump(data, f, indent=2)
            return True, None
        except (OSError, TypeError) as e:
            return False, str(e)
