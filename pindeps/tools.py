import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

from packaging.version import InvalidVersion, Version

log = logging.getLogger(__name__)

DEFAULT_TOOLS_FILE = 'pkgs.json'


class InputNotFoundError(RuntimeError):
    pass


class InputParseError(RuntimeError):
    pass


@dataclass(frozen=True)
class Tool:
    name: str
    version: str


def find_tools_file(start: Path, filename: str = DEFAULT_TOOLS_FILE) -> Path:
    """Look for `filename` in `start`, then in each of its parents up to the filesystem root."""
    start = Path(start).absolute()
    for directory in (start, *start.parents):
        candidate = directory / filename
        if candidate.is_file():
            log.debug(f"Found {candidate}")
            return candidate
    raise InputNotFoundError(f"{filename} not found in {start} or any parent directories")


def load_tools(path: Path) -> List[Tool]:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            document = json.load(f)
    except OSError as e:
        raise InputParseError(f"Failed to open {path}: {e}") from e
    except ValueError as e:
        raise InputParseError(f"Failed to parse {path}: {e}") from e

    if not isinstance(document, dict) or not isinstance(document.get('tools'), list):
        raise InputParseError(f"Failed to parse {path}: expected an object with a 'tools' list")

    tools: List[Tool] = []
    for index, entry in enumerate(document['tools']):
        if not isinstance(entry, dict) or not all(isinstance(entry.get(key), str) for key in ('name', 'version')):
            raise InputParseError(f"Failed to parse {path}: tools[{index}] needs a string 'name' and 'version'")
        if not entry['name']:
            raise InputParseError(f"Failed to parse {path}: tools[{index}] has an empty name")
        tool = Tool(entry['name'], entry['version'])
        try:
            Version(tool.version)
        except InvalidVersion:
            log.warning(f"{tool.name} is pinned to '{tool.version}', which is not a valid PEP 440 version")
        tools.append(tool)
    return tools
