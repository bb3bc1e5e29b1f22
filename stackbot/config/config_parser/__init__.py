"""Config parser logic."""

import os
from typing import Any, Dict, Mapping, Optional
import logging
import yaml

# Get module logger
logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = '.stackbot.yaml'

SectionConfig = Dict[str, Any]  # Use Any since yaml can return various types
Config = Dict[str, SectionConfig]

def parse_config(path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> Config:
    """Parse config from the repository config file and the environment."""
    if environ is None:
        environ = os.environ

    config: Config = {
        'repo': {
            'default_branch': None,
        },
        'stack': {
            'marker': '/stack',
            'branch_prefix': 'stackbot/pr-',
            'check_name': 'stacked-dependencies',
            'label': 'stacked',
            'search_page_size': 100,
        },
    }

    config_path = path or DEFAULT_CONFIG_FILE
    try:
        with open(config_path, 'r') as f:
            logger.info(f"Found {config_path}, loading...")
            file_config = yaml.safe_load(f)
            logger.debug(f"Config from {config_path}: {file_config}")
            if file_config:
                for section in ('repo', 'stack'):
                    if section in file_config and isinstance(file_config[section], dict):
                        config[section].update(file_config[section])
    except FileNotFoundError:
        if path:
            # An explicitly requested file must exist
            raise
        logger.debug(f"No {config_path} found, using defaults")

    # Fill in owner/name from the Actions environment if not in config
    repo_config = config['repo']
    if not repo_config.get('github_repo_owner') or not repo_config.get('github_repo_name'):
        full_name = environ.get('GITHUB_REPOSITORY', '')
        parts = full_name.strip().split('/')
        if len(parts) == 2 and all(parts):
            if not repo_config.get('github_repo_owner'):
                repo_config['github_repo_owner'] = parts[0]
            if not repo_config.get('github_repo_name'):
                repo_config['github_repo_name'] = parts[1]
        elif full_name:
            logger.error(f"Failed to parse GITHUB_REPOSITORY: {full_name}")

    return config
