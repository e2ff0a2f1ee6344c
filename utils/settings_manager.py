"""
This module is responsible for loading and managing the application settings

It ensures that the settings variables are available and accessed safely,
from a YAML configuration file.
"""

from pathlib import Path

import yaml

SETTINGS_PATH = Path(__file__).resolve().parent.parent / '_config' / 'settings.yaml'

settings = {}

# Load settings
with SETTINGS_PATH.open('r', encoding='utf-8') as file:
    settings = yaml.safe_load(file)
if not settings:
    raise ValueError("Error: Settings file is empty.")

def get_setting(*keys):
    current = settings
    for key in keys:
        if isinstance(current, dict) and key in current:
            current = current[key]
        else:
            raise ValueError(f"Error: '{'.'.join(keys)}' is missing from the settings file.")
    return current
