"""Record file loading for the search tool server."""
import json
from pathlib import Path
from typing import Any, Dict, List, Union

# Top-level keys that may hold the record list in a JSON object
RECORD_KEYS = ("records", "items", "products", "users", "orders")


def load_records_file(records_path: Path) -> Union[List[Any], Dict[str, Any]]:
    """Load a JSON records file.

    Args:
        records_path: Path to the JSON file

    Returns:
        Parsed JSON data

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file is malformed
    """
    if not records_path.exists():
        raise FileNotFoundError(f"Records file not found at {records_path}")

    with open(records_path, "r", encoding="utf-8") as f:
        return json.load(f)


def extract_records(data: Union[List[Any], Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Pull the list of record objects out of parsed JSON.

    Accepts a bare list or an object holding the list under one of
    RECORD_KEYS. Entries that aren't JSON objects are skipped.

    Raises:
        ValueError: If no record list can be found
    """
    if isinstance(data, dict):
        for key in RECORD_KEYS:
            if isinstance(data.get(key), list):
                data = data[key]
                break
        else:
            raise ValueError(f"Expected a list of records or an object with one of {RECORD_KEYS}")

    if not isinstance(data, list):
        raise ValueError(f"Expected a list of records, got {type(data).__name__}")

    return [record for record in data if isinstance(record, dict)]


def read_records(records_path: Path) -> List[Dict[str, Any]]:
    """Read all records from a JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file is malformed
        ValueError: If the file holds no record list
    """
    return extract_records(load_records_file(records_path))
