import os
from typing import Any, Dict

import yaml
from dotenv import load_dotenv

# environment variable -> config.yaml key
ENV_OVERRIDES = {
    "MATTERMOST_URL": "mattermost_url",
    "MATTERMOST_TOKEN": "token",
    "MATTERMOST_TEAM_ID": "team_id",
    "MATTERMOST_TIMEOUT": "request_timeout",
}

DEFAULT_TIMEOUT = 30.0


class ConfigLoader:
    _instance = None
    _config = None

    def __new__(cls):
        """
        Create a singleton instance of ConfigLoader.
        Loads configuration from YAML (plus environment overrides) on first instantiation.
        """
        if cls._instance is None:
            cls._instance = super(ConfigLoader, cls).__new__(cls)
            cls._load_config()
        return cls._instance

    @classmethod
    def _config_path(cls) -> str:
        explicit = os.environ.get("MATTERMOST_CONFIG")
        if explicit:
            return os.path.abspath(explicit)
        return os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "config.yaml"))

    @classmethod
    def _load_config(cls):
        """
        Load config.yaml into the class variable _config, then apply .env / environment overrides.
        A missing file is not an error; the environment may carry everything.
        """
        load_dotenv()
        config: Dict[str, Any] = {}
        config_path = cls._config_path()
        if os.path.isfile(config_path):
            with open(config_path, "r") as f:
                config = yaml.safe_load(f) or {}
        for env_name, key in ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value:
                config[key] = value
        config["request_timeout"] = float(config.get("request_timeout") or DEFAULT_TIMEOUT)
        cls._config = config

    @classmethod
    def reset(cls):
        """
        Drop the cached instance so the next access reloads from disk and environment.
        """
        cls._instance = None
        cls._config = None

    def get_config(self):
        """
        Return the loaded configuration dictionary.
        """
        return self._config


def get_config():
    """
    Helper function to get the singleton configuration instance's config dictionary.
    """
    return ConfigLoader().get_config()
