# growth_models/io/file_utils.py
"""
File I/O utilities for loading and saving data.

This module provides safe file operations with proper error handling
and logging for configuration files.

Example:
    >>> from growth_models.io.file_utils import load_json_file, save_json_file
    >>> data = load_json_file("hyperparam/growth_params.json")
    >>> save_json_file(data, "results/growth_params_backup.json")
"""

import json
import os
import sys
import logging
from typing import Dict, Any

logger = logging.getLogger(__name__)


def load_json_file(filename: str) -> Dict[str, Any]:
    """
    Safely load a JSON file with comprehensive error handling.

    Args:
        filename: Path to the JSON file.

    Returns:
        Parsed JSON data as a dictionary.

    Raises:
        SystemExit: If file not found, invalid JSON, or read error.
    """
    if not os.path.exists(filename):
        logger.error(f"File '{filename}' not found.")
        sys.exit(1)

    try:
        with open(filename, 'r') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in {filename}: {e}")
        sys.exit(1)
    except OSError as e:
        logger.error(f"Error reading {filename}: {e}")
        sys.exit(1)


def save_json_file(data: Dict[str, Any], filename: str) -> None:
    """
    Save data to a JSON file with directory creation.

    Args:
        data: Dictionary to serialize to JSON.
        filename: Target file path.

    Raises:
        IOError: If write operation fails.
    """
    directory = os.path.dirname(filename)
    if directory:
        os.makedirs(directory, exist_ok=True)
    try:
        with open(filename, 'w') as f:
            json.dump(data, f, indent=4)
        logger.info(f"Saved data to {filename}")
    except IOError as e:
        logger.error(f"Failed to save to {filename}: {e}")
        raise
