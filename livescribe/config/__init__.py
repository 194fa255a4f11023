"""Simple YAML configuration loader for Livescribe."""

import os
import copy
import tempfile
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "livescribe.yaml"
DEFAULT_PORT = 3002

DEFAULTS: Dict[str, Any] = {
    "server": {
        "host": "0.0.0.0",
        "port": DEFAULT_PORT,
        "websocket_path": "/transcription",
    },
    "openai": {
        "api_key": None,
        "base_url": "https://api.openai.com/v1",
        "transcription_model": "whisper-1",
        "translation_model": "gpt-4o-mini",
        "translation_max_tokens": 500,
        "request_timeout_seconds": 60.0,
    },
    "resolver": {
        "executable": "yt-dlp",
        "format": "worst[ext=mp4]",
        "base_url": "https://www.youtube.com",
        "timeout_seconds": 60.0,
    },
    "capture": {
        "executable": "ffmpeg",
        "chunk_duration_seconds": 30,
        "timeout_grace_seconds": 10,
        "sample_rate": 16000,
        "channels": 1,
        "codec": "libmp3lame",
        "temp_dir": None,
    },
    "session": {
        "chunk_pause_seconds": 2.0,
        "shutdown_timeout_seconds": 10.0,
    },
    "pubsub": {
        "transcript_topic": "transcription_events",
        "error_topic": "transcription_errors",
    },
    "logging": {
        "level": "INFO",
        "file_path": "logs/livescribe.log",
        "console_output": True,
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class LivescribeConfig:
    """Livescribe configuration loader."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration loader.

        Args:
            config_path: Path to YAML config file. If None, looks for livescribe.yaml
                        in the current directory and falls back to built-in defaults.
        """
        if config_path is None:
            candidate = Path.cwd() / DEFAULT_CONFIG_FILENAME
            self.config_file: Optional[Path] = candidate if candidate.exists() else None
        else:
            self.config_file = Path(config_path)
            if not self.config_file.exists():
                raise FileNotFoundError(f"Configuration file not found: {self.config_file}")

        if self.config_file is None:
            logger.info("No configuration file found, using defaults")
            self.config = copy.deepcopy(DEFAULTS)
        else:
            logger.info(f"Loading configuration from: {self.config_file}")
            self.config = _merge(DEFAULTS, self._load_config())
            self._resolve_paths(self.config)

    def _load_config(self) -> Dict[str, Any]:
        """Load and parse YAML configuration file."""
        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}")

        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ValueError("Configuration file must contain a mapping")

        logger.info("Configuration loaded successfully")
        return config

    def _resolve_paths(self, config: Dict[str, Any]) -> None:
        """Resolve relative paths in configuration relative to config file location."""
        config_dir = self.config_file.parent

        log_path = config['logging'].get('file_path')
        if log_path and not os.path.isabs(log_path):
            config['logging']['file_path'] = str(config_dir / log_path)

        temp_dir = config['capture'].get('temp_dir')
        if temp_dir and not os.path.isabs(temp_dir):
            config['capture']['temp_dir'] = str(config_dir / temp_dir)

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get configuration value using dot notation (e.g., 'capture.sample_rate').

        Args:
            key_path: Dot-separated key path
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split('.')
        value = self.config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def set(self, key_path: str, value: Any) -> None:
        """Set configuration value using dot notation.

        Args:
            key_path: Dot-separated path to config value (e.g., 'session.chunk_pause_seconds')
            value: Value to set
        """
        keys = key_path.split('.')
        config_dict = self.config

        for key in keys[:-1]:
            if key not in config_dict:
                config_dict[key] = {}
            config_dict = config_dict[key]

        config_dict[keys[-1]] = value
        logger.debug(f"Configuration key '{key_path}' set")

    def get_openai_api_key(self) -> Optional[str]:
        """Get the OpenAI key from config, then from OPENAI_API_KEY."""
        return self.get('openai.api_key') or os.environ.get('OPENAI_API_KEY') or None

    def get_port(self) -> int:
        """Get the listening port; PORT and TRANSCRIPTION_PORT take precedence."""
        port = os.environ.get('PORT') or os.environ.get('TRANSCRIPTION_PORT')
        if port:
            return int(port)
        return int(self.get('server.port', DEFAULT_PORT))

    def get_temp_dir(self) -> str:
        """Get the directory for transient audio segments."""
        temp_dir = self.get('capture.temp_dir')
        if not temp_dir:
            temp_dir = os.path.join(tempfile.gettempdir(), "livescribe_audio")
        return str(Path(temp_dir).absolute())
