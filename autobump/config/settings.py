"""Configuration management for Autobump."""

import json
import logging
import os
from pathlib import Path
from typing import Optional, List
from pydantic import validator
from pydantic_settings import BaseSettings
import requests


DOWNLOAD_TIMEOUT = 30


# File helpers
def read_lines(file_path: str) -> List[str]:
    """Read a text file into a list of lines.
    
    Args:
        file_path: Path to the file
        
    Returns:
        Lines without trailing newlines
    """
    with open(file_path, 'r', encoding='utf-8') as f:
        return f.read().splitlines()


def write_lines(file_path: str, lines: List[str]) -> None:
    """Write lines to a text file, each terminated by a newline.
    
    Args:
        file_path: Path to the file
        lines: Lines to write
    """
    with open(file_path, 'w', encoding='utf-8') as f:
        for line in lines:
            f.write(f"{line}\n")


class Config(BaseSettings):
    """Configuration settings for Autobump."""
    
    gitlab_host: str = "https://gitlab.com"
    gitlab_token: Optional[str] = None
    project: Optional[str] = None
    ref: Optional[str] = None
    changelog_file: str = "CHANGELOG.md"
    branch_prefix: str = "chore/bump-"
    config_file: Optional[str] = None
    
    @validator('gitlab_host')
    def normalize_gitlab_host(cls, v):
        """Ensure GitLab host has proper protocol."""
        if v and not v.startswith(('http://', 'https://')):
            return f"https://{v}"
        return v
    
    class Config:
        env_prefix = "AUTOBUMP_"
        case_sensitive = False
        extra = "ignore"


def load_json_config(config_path: str) -> dict:
    """Load configuration from a JSON file or an http(s) URL.
    
    Args:
        config_path: Path or URL of the JSON configuration file
        
    Returns:
        Configuration dictionary
    """
    if config_path.startswith(('http://', 'https://')):
        try:
            response = requests.get(config_path, timeout=DOWNLOAD_TIMEOUT)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            raise ValueError(f"Error downloading config file {config_path}: {e}")
    
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        raise ValueError(f"Error loading config file {config_path}: {e}")


def find_config_file() -> Optional[str]:
    """Find configuration file in common locations.
    
    Returns:
        Path to config file or None if not found
    """
    search_paths = [
        "autobump.json",
        ".autobump.json",
        "~/.autobump.json",
        "~/.config/autobump/config.json",
        "/etc/autobump/config.json"
    ]
    
    for path_str in search_paths:
        path = Path(path_str).expanduser()
        if path.exists() and path.is_file():
            return str(path)
    
    return None


def get_config(config_file: Optional[str] = None) -> Config:
    """Load configuration from environment variables and/or JSON file.
    
    Args:
        config_file: Optional path or URL of a JSON config file
        
    Returns:
        Configuration object
    """
    logger = logging.getLogger(__name__)
    config_data = {}
    
    json_config_path = config_file or find_config_file()
    if json_config_path:
        try:
            config_data.update(load_json_config(json_config_path))
            config_data['config_file'] = json_config_path
        except ValueError as e:
            # Environment variables and defaults still apply
            logger.warning(str(e))
    
    # Environment variables override JSON config
    env_config = {
        'gitlab_host': os.getenv('AUTOBUMP_GITLAB_HOST'),
        'gitlab_token': os.getenv('AUTOBUMP_GITLAB_TOKEN'),
        'project': os.getenv('AUTOBUMP_PROJECT'),
        'ref': os.getenv('AUTOBUMP_REF'),
        'changelog_file': os.getenv('AUTOBUMP_CHANGELOG_FILE'),
        'branch_prefix': os.getenv('AUTOBUMP_BRANCH_PREFIX'),
    }
    
    env_config = {k: v for k, v in env_config.items() if v is not None}
    config_data.update(env_config)
    
    return Config(**config_data)


def create_sample_config(path: str = "autobump.json") -> None:
    """Create a sample configuration file.
    
    Args:
        path: Path where to create the sample config file
    """
    sample_config = {
        "gitlab_host": "https://gitlab.com",
        "gitlab_token": "your-gitlab-token-here",
        "project": "group/project-name",
        "ref": "main",
        "changelog_file": "CHANGELOG.md",
        "branch_prefix": "chore/bump-"
    }
    
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(sample_config, f, indent=2)
    
    print(f"Sample configuration file created at: {path}")
    print("Please edit the file and add your GitLab token and project details.")
