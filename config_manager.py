#!/usr/bin/env python3
"""
Configuration Manager - Handles upstream site and cache configuration
"""

import json
import os
import logging
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

CATEGORY_STRATEGIES = ('static', 'scraped')

# Environment variables take precedence over the config file
ENV_OVERRIDES = {
    'base_url': 'SITE_BASE_URL',
    'site_name': 'SITE_NAME',
    'cache_ttl': 'CACHE_TTL_SECONDS',
    'request_timeout': 'REQUEST_TIMEOUT',
    'rotate_user_agent': 'ROTATE_USER_AGENT',
    'category_strategy': 'CATEGORY_STRATEGY',
    'player_embed_url': 'PLAYER_EMBED_URL',
}


class ConfigManager:
    def __init__(self, config_path: Optional[str] = None):
        self.config_dir = os.path.dirname(os.path.abspath(__file__))
        self.site_config_path = config_path or os.path.join(self.config_dir, 'site_config.json')

    def load_site_config(self) -> Dict[str, Any]:
        """Load site configuration from file, merged over the defaults"""
        config = self._get_default_site_config()
        try:
            with open(self.site_config_path, 'r') as f:
                config.update(json.load(f))
        except FileNotFoundError:
            logger.info("Site config file not found, using default configuration")
        except Exception as e:
            logger.warning(f"Error loading site config: {e}, using default configuration")
        return config

    def save_site_config(self, config: Dict[str, Any]) -> bool:
        """Save site configuration to file"""
        try:
            with open(self.site_config_path, 'w') as f:
                json.dump(config, f, indent=2)
            logger.info("Site configuration saved successfully")
            return True
        except Exception as e:
            logger.error(f"Error saving site config: {e}")
            return False

    def get_site_config(self) -> Dict[str, Any]:
        """Get the effective configuration: defaults, then file, then environment"""
        config = self.load_site_config()

        for key, env_name in ENV_OVERRIDES.items():
            env_value = os.getenv(env_name)
            if env_value and env_value.strip():
                config[key] = env_value.strip()

        return self._normalize(config)

    def get_base_url(self) -> str:
        return self.get_site_config()['base_url']

    def get_cache_ttl(self) -> int:
        return self.get_site_config()['cache_ttl']

    def get_category_strategy(self) -> str:
        return self.get_site_config()['category_strategy']

    def _normalize(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Coerce string values coming from the environment into proper types"""
        defaults = self._get_default_site_config()

        config['base_url'] = str(config['base_url']).rstrip('/')

        for key in ('cache_ttl', 'request_timeout'):
            try:
                config[key] = int(config[key])
            except (TypeError, ValueError):
                logger.warning(f"Invalid value for {key}: {config[key]!r}, using {defaults[key]}")
                config[key] = defaults[key]

        rotate = config['rotate_user_agent']
        if isinstance(rotate, str):
            config['rotate_user_agent'] = rotate.lower() in ('1', 'true', 'yes')

        if config['category_strategy'] not in CATEGORY_STRATEGIES:
            logger.warning(f"Unknown category strategy {config['category_strategy']!r}, using static")
            config['category_strategy'] = 'static'

        return config

    def _get_default_site_config(self) -> Dict[str, Any]:
        """Get default site configuration"""
        return {
            "base_url": "https://vegamovies.you",
            "site_name": "hdlove4u",
            "cache_ttl": 3600,
            "request_timeout": 30,
            "rotate_user_agent": False,
            "category_strategy": "static",
            "player_embed_url": "https://vidsrc.to/embed/movie/{imdb_id}",
        }


# Global instance
config_manager = ConfigManager()


def get_site_config() -> Dict[str, Any]:
    """Convenience function to get the effective site configuration"""
    return config_manager.get_site_config()


def get_base_url() -> str:
    """Convenience function to get the upstream base URL"""
    return config_manager.get_base_url()


if __name__ == "__main__":
    print("Site Config:", json.dumps(config_manager.get_site_config(), indent=2))
