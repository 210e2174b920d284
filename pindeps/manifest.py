import logging
from typing import Dict, List, Sequence

from pindeps.requirement import Dependency, extract_dependency
from pindeps.tools import Tool

log = logging.getLogger(__name__)

INDENT = '    '


class OutputWriteError(RuntimeError):
    pass


def render(tools: Sequence[Tool], resolved: Dict[str, List[Dependency]]) -> str:
    lines: List[str] = []
    for tool in tools:
        lines.append(f"[{tool.name}]")
        lines.append(f"version = \"{tool.version}\"")
        dependencies = resolved.get(tool.name)
        if dependencies:
            lines.append('dependencies = [')
            lines.extend(f"{INDENT}\"{dependency}\"," for dependency in dependencies)
            lines.append(']')
        lines.append('')
    return ''.join(f"{line}\n" for line in lines)


def write_manifest(path, text: str):
    try:
        with open(path, 'w', encoding='utf-8') as f:
            f.write(text)
    except (OSError, UnicodeError) as e:
        raise OutputWriteError(f"Could not write {path}: {e}") from e
    log.debug(f"Wrote {len(text)} characters to {path}")


def read_manifest(text: str) -> Dict[str, List[Dependency]]:
    """
    Read the dependency lists back out of a rendered manifest, keyed by section name. A section without a
    dependencies block maps to an empty list.
    """
    result: Dict[str, List[Dependency]] = {}
    section = None
    in_dependencies = False
    for line in text.splitlines():
        stripped = line.strip()
        if in_dependencies:
            if stripped == ']':
                in_dependencies = False
            elif stripped:
                entry = stripped[:-1] if stripped.endswith(',') else stripped
                dependency = extract_dependency(entry[1:-1])
                if dependency is not None:
                    result[section].append(dependency)
        elif stripped.startswith('[') and stripped.endswith(']'):
            section = stripped[1:-1]
            result[section] = []
        elif stripped == 'dependencies = [' and section is not None:
            in_dependencies = True
    return result
