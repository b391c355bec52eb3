"""Configuration management for Fretwise callers."""

from typing import Dict, Any, Optional
import copy
import json
import os
from pathlib import Path

from ..fretboard import Tuning, parse_tuning
from ..logger import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIGS: Dict[str, Dict[str, Any]] = {
    "chord_identifier": {
        "min_confidence": 0.5,
        "extra_note_penalty": 0.15,
        "max_matches": 5,
    },
    "fretboard": {
        "tuning": ["E4", "B3", "G3", "D3", "A2", "E2"],
        "max_fret": 24,
        "explorer_window": 4,
        "builder_window": 12,
    },
}


class ConfigManager:
    """Configuration manager for Fretwise settings.

    The engine itself takes every setting as a plain argument; this class
    only persists the values callers pass in.
    """

    def __init__(self, config_dir: Optional[str] = None):
        """Initialize the configuration manager.

        Args:
            config_dir: Directory to store configuration files, or None to use default
        """
        if config_dir is None:
            # Use ~/.config/fretwise by default
            home = os.path.expanduser("~")
            config_dir = os.path.join(home, ".config", "fretwise")

        self.config_dir = Path(config_dir)
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self.default_configs = copy.deepcopy(DEFAULT_CONFIGS)

        # Load existing configurations or create default ones
        self.configs = {}
        for config_name, default_config in self.default_configs.items():
            self.configs[config_name] = self.load_config(config_name, default_config)

    def load_config(self, name: str, default_config: Dict[str, Any]) -> Dict[str, Any]:
        """Load configuration from file or create default.

        Args:
            name: Configuration name
            default_config: Default configuration to use if file doesn't exist

        Returns:
            Configuration dictionary
        """
        config_file = self.config_dir / f"{name}.json"

        if config_file.exists():
            try:
                with open(config_file, "r") as f:
                    config = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.error(f"Error loading configuration from {config_file}: {e}")
                return copy.deepcopy(default_config)

            if not isinstance(config, dict):
                logger.error(f"Ignoring {config_file}: expected a JSON object")
                return copy.deepcopy(default_config)

            logger.info(f"Loaded configuration from {config_file}")

            # Ensure all default keys are present
            for key, value in default_config.items():
                if key not in config:
                    config[key] = copy.deepcopy(value)

            return config

        # Create default configuration
        config = copy.deepcopy(default_config)
        self.save_config(name, config)
        return config

    def save_config(self, name: str, config: Dict[str, Any]) -> bool:
        """Save configuration to file.

        Args:
            name: Configuration name
            config: Configuration dictionary

        Returns:
            True if saved successfully, False otherwise
        """
        config_file = self.config_dir / f"{name}.json"

        try:
            with open(config_file, "w") as f:
                json.dump(config, f, indent=2)
        except OSError as e:
            logger.error(f"Error saving configuration to {config_file}: {e}")
            return False

        logger.info(f"Saved configuration to {config_file}")
        return True

    def get_config(self, name: str) -> Dict[str, Any]:
        """Get a copy of a configuration by name."""
        return copy.deepcopy(self.configs.get(name, {}))

    def update_config(self, name: str, updates: Dict[str, Any]) -> bool:
        """Update configuration and save to file.

        Args:
            name: Configuration name
            updates: Dictionary of updates to apply

        Returns:
            True if updated and saved successfully, False otherwise
        """
        if name not in self.configs:
            logger.error(f"Unknown configuration: {name}")
            return False

        self.configs[name].update(updates)
        return self.save_config(name, self.configs[name])

    def reset_config(self, name: str) -> bool:
        """Reset configuration to default.

        Returns:
            True if reset successfully, False otherwise
        """
        if name not in self.default_configs:
            logger.error(f"Unknown configuration: {name}")
            return False

        self.configs[name] = copy.deepcopy(self.default_configs[name])
        return self.save_config(name, self.configs[name])

    def get_tuning(self) -> Tuning:
        """Open-string pitches from the fretboard configuration.

        Raises:
            FormatError: If a configured string is not a valid pitch
        """
        return parse_tuning(self.configs["fretboard"]["tuning"])
