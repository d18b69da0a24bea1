"""
Configuration manager for the compass heading engine.
"""

import copy
import json
import logging
import os
from typing import Dict, Any, Optional

from .math import constants
from .sensors.location import DEFAULT_TEMPLATES

logger = logging.getLogger(__name__)

class CompassConfig:
    """Configuration manager for the compass heading engine."""
    
    DEFAULT_CONFIG = {
        # Animation tick
        "tick_period_ms": constants.TICK_PERIOD_MS,
        
        # Heading animation
        "animation": {
            "max_rotate_degree": constants.MAX_ROTATE_DEGREE,
            "ease_far": constants.EASE_INPUT_FAR,
            "ease_near": constants.EASE_INPUT_NEAR,
            "interpolator_factor": constants.INTERPOLATOR_FACTOR,
            "convergence_epsilon": constants.CONVERGENCE_EPSILON_DEG
        },
        
        # Calibration monitor
        "calibration": {
            "min_field_strength": constants.MIN_FIELD_STRENGTH,
            "max_field_strength": constants.MAX_FIELD_STRENGTH,
            "accurate_count": constants.MAX_ACCURATE_COUNT,
            "inaccurate_count": constants.MAX_INACCURATE_COUNT
        },
        
        # Location updates
        "location": {
            "min_interval_ms": constants.LOCATION_MIN_INTERVAL_MS,
            "min_distance_m": constants.LOCATION_MIN_DISTANCE_M
        },
        
        # Display
        "use_alternate_ordering": False,
        "text": dict(DEFAULT_TEMPLATES),
        
        # Logging
        "enable_logging": True,
        "log_file": None,
        "log_level": "INFO"
    }
    
    def __init__(self, config_file: Optional[str] = None, create_if_missing: bool = False):
        """
        Initialize configuration.
        
        Args:
            config_file: Path to a JSON configuration file, None for defaults only
            create_if_missing: Write the defaults to config_file if it does not exist
        """
        self.config_file = config_file
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)
        
        if config_file is None:
            return
        
        # Load configuration from file if it exists
        if os.path.exists(config_file):
            self.load_config()
        else:
            logger.info("Config file %s not found, using defaults", config_file)
            if create_if_missing:
                self.save_config()
    
    @classmethod
    def from_dict(cls, overrides: Dict[str, Any]) -> 'CompassConfig':
        """Build a configuration from defaults merged with ``overrides``."""
        config = cls()
        config._merge_config(config.config, overrides)
        return config
    
    def load_config(self) -> bool:
        """
        Load configuration from file.
        
        Returns:
            True if loaded successfully
        """
        try:
            with open(self.config_file, 'r') as f:
                file_config = json.load(f)
        except (OSError, ValueError) as e:
            logger.error("Failed to load config %s: %s", self.config_file, e)
            return False
        
        if not isinstance(file_config, dict):
            logger.error("Config %s must contain a JSON object", self.config_file)
            return False
        
        # Merge with defaults (file config overrides defaults)
        self._merge_config(self.config, file_config)
        
        logger.info("Configuration loaded from %s", self.config_file)
        return True
    
    def save_config(self) -> bool:
        """
        Save current configuration to file.
        
        Returns:
            True if saved successfully
        """
        try:
            with open(self.config_file, 'w') as f:
                json.dump(self.config, f, indent=2, ensure_ascii=False)
        except (OSError, TypeError) as e:
            logger.error("Failed to save config %s: %s", self.config_file, e)
            return False
        
        logger.info("Configuration saved to %s", self.config_file)
        return True
    
    def _merge_config(self, base: Dict[str, Any], override: Dict[str, Any]):
        """Recursively merge configuration dictionaries."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_config(base[key], value)
            else:
                base[key] = value
    
    def get(self, key: str, default=None):
        """Get configuration value with optional default."""
        keys = key.split('.')
        value = self.config
        
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        
        return value
    
    def set(self, key: str, value: Any):
        """Set configuration value."""
        keys = key.split('.')
        config = self.config
        
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]
        
        config[keys[-1]] = value
    
    # Property accessors for common configuration values
    @property
    def tick_period_ms(self) -> int:
        return self.config["tick_period_ms"]
    
    @property
    def tick_period_s(self) -> float:
        return self.tick_period_ms / 1000.0
    
    @property
    def max_rotate_degree(self) -> float:
        return self.config["animation"]["max_rotate_degree"]
    
    @property
    def ease_far(self) -> float:
        return self.config["animation"]["ease_far"]
    
    @property
    def ease_near(self) -> float:
        return self.config["animation"]["ease_near"]
    
    @property
    def interpolator_factor(self) -> float:
        return self.config["animation"]["interpolator_factor"]
    
    @property
    def convergence_epsilon(self) -> float:
        return self.config["animation"]["convergence_epsilon"]
    
    @property
    def calibration(self) -> Dict[str, Any]:
        return self.config["calibration"]
    
    @property
    def location_min_interval_ms(self) -> int:
        return self.config["location"]["min_interval_ms"]
    
    @property
    def location_min_distance_m(self) -> float:
        return self.config["location"]["min_distance_m"]
    
    @property
    def use_alternate_ordering(self) -> bool:
        return self.config["use_alternate_ordering"]
    
    @property
    def text(self) -> Dict[str, str]:
        return self.config["text"]
    
    @property
    def enable_logging(self) -> bool:
        return self.config["enable_logging"]
    
    @property
    def log_file(self) -> Optional[str]:
        return self.config["log_file"]
    
    @property
    def log_level(self) -> str:
        return self.config["log_level"]
    
    def dumps(self) -> str:
        """Current configuration as indented JSON."""
        return json.dumps(self.config, indent=2, ensure_ascii=False)

def setup_logging(config: CompassConfig):
    """
    Configure the root logger from the logging keys of ``config``.
    
    With logging disabled only warnings and errors are emitted.
    """
    if not config.enable_logging:
        level = logging.WARNING
    else:
        level = getattr(logging, str(config.log_level).upper(), logging.INFO)
    
    handlers = [logging.StreamHandler()]
    if config.enable_logging and config.log_file:
        handlers.append(logging.FileHandler(config.log_file))
    
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
        force=True,
    )
