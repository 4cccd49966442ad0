# social_recovery/config/config_manager.py

from dataclasses import dataclass, field, asdict
from typing import Optional, Dict, Any
import logging
import yaml
from pathlib import Path

from ..exceptions.chain_errors import ConfigError

logger = logging.getLogger("RecoveryWallet.Config")

@dataclass
class ChainConfig:
    """Local ledger configuration"""
    chain_id: int = 31337
    account_count: int = 10
    initial_balance: int = 10 ** 22  # 10000 ether

@dataclass
class SerializationConfig:
    """Snapshot encoding configuration"""
    compression_enabled: bool = True
    compression_threshold: int = 1024  # 1KB

@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    json_format: bool = False
    file_enabled: bool = False
    file_path: str = "./logs"
    file: str = "social_recovery.log"
    max_size: int = 10485760  # 10MB
    backup_count: int = 5

@dataclass
class Config:
    chain: ChainConfig = field(default_factory=ChainConfig)
    serialization: SerializationConfig = field(default_factory=SerializationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

SECTIONS = ('chain', 'serialization', 'logging')

class ConfigManager:
    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path
        self.config = Config()

        self._load_config()

    def _load_config(self):
        """Load configuration from file"""
        if not self.config_path:
            return

        config_file = Path(self.config_path)
        if not config_file.exists():
            logger.warning(f"Config file {config_file} not found, using defaults")
            return

        try:
            with open(config_file, 'r') as f:
                config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}", str(config_file))

        if not isinstance(config_data, dict):
            raise ConfigError("Top level must be a mapping", str(config_file))
        self._update_config_from_dict(config_data)

    def _update_config_from_dict(self, config_data: Dict[str, Any]):
        """Update config from dictionary"""
        for section in SECTIONS:
            if section in config_data:
                section_config = getattr(self.config, section)
                for key, value in (config_data[section] or {}).items():
                    if hasattr(section_config, key):
                        setattr(section_config, key, value)
                    else:
                        logger.debug(f"Ignoring unknown config key {section}.{key}")

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation"""
        obj = self.config
        for part in key.split('.'):
            if not hasattr(obj, part):
                return default
            obj = getattr(obj, part)
        return obj

    def get_all(self) -> Dict[str, Any]:
        """Get all configuration as dictionary"""
        return asdict(self.config)

def init_config(config_path: Optional[str] = None) -> ConfigManager:
    """Initialize configuration manager"""
    return ConfigManager(config_path)
