from .config_manager import (
    Config, ChainConfig, SerializationConfig, LoggingConfig,
    ConfigManager, init_config
)

__all__ = [
    'Config', 'ChainConfig', 'SerializationConfig', 'LoggingConfig',
    'ConfigManager', 'init_config'
]
