"""Config module."""

from typing import Dict, Any
from .models import RepoConfig, StackConfig, StackbotConfig

class Config(StackbotConfig):
    """Config object holding repository and stacking config.

    Built from the plain dict produced by the config parser.
    """
    def __init__(self, config: Dict[str, Dict[str, Any]]):
        """Initialize with parsed config dict."""
        repo_config = config.get('repo', {}) or {}
        stack_config = config.get('stack', {}) or {}

        super().__init__(
            repo=RepoConfig.model_validate(repo_config),
            stack=StackConfig.model_validate(stack_config),
        )

def default_config() -> Config:
    """Get default config without reading any files."""
    return Config({
        'repo': {},
        'stack': {},
    })

__all__ = ['Config', 'default_config', 'RepoConfig', 'StackConfig', 'StackbotConfig']
