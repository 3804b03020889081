"""
File operation utilities.

JSON helpers used by the file-backed lesson store.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional


logger = logging.getLogger(__name__)


def save_json(data: Dict[str, Any], filepath: Path) -> bool:
    """
    Save data to JSON file.

    The file is written next to its destination first and then moved
    into place, so readers never see a half-written snapshot.

    Args:
        data: Dictionary data to save
        filepath: Path to save the JSON file

    Returns:
        True if save successful, False otherwise
    """
    tmp_path = filepath.with_name(filepath.name + ".tmp")
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        tmp_path.replace(filepath)

        logger.debug(f"Saved JSON file: {filepath}")
        return True

    except (OSError, TypeError, ValueError) as e:
        logger.error(f"Failed to save JSON file {filepath}: {e}", exc_info=True)
        return False


def load_json(filepath: Path) -> Optional[Dict[str, Any]]:
    """
    Load data from JSON file.

    Args:
        filepath: Path to the JSON file

    Returns:
        Loaded data dictionary, or None if the file does not exist

    Raises:
        json.JSONDecodeError: If the file is not valid JSON
        OSError: If the file cannot be read
    """
    if not filepath.exists():
        logger.debug(f"JSON file not found: {filepath}")
        return None

    with open(filepath, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in file {filepath}: {e}")
            raise

    logger.debug(f"Loaded JSON file: {filepath}")
    return data
