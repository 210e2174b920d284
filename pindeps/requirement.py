from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

log = logging.getLogger(__name__)

LATEST = 'latest'

# Order matters: '>=' and '<=' have to be tried before the bare '>' and '<' they contain
VERSION_OPERATORS = ('==', '>=', '<=', '~=', '!=', '>', '<')

IGNORED_MARKERS = ('extra == ', 'python_version')


@dataclass(frozen=True)
class Dependency:
    name: str
    version: str = LATEST

    def __str__(self) -> str:
        return f"{self.name}=={self.version}"


def extract_dependency(raw: str) -> Optional[Dependency]:
    """
    Reduce a raw requirement string from the registry to a (name, version) pair.

    Only the part before the first ';' is looked at, and of that only the part before the first space, so
    'requests>=2.0; extra == "socks"' becomes 'requests>=2.0' and 'numpy (>=1.20)' becomes 'numpy'. The first
    operator found in VERSION_OPERATORS order splits the name from the version, and quotes around the version are
    dropped. A fragment without an operator is unconstrained and gets the 'latest' version.

    Returns None instead of raising when nothing usable is left.
    """
    token = raw.split(';', 1)[0].split(' ', 1)[0]
    if not token:
        return None

    for operator in VERSION_OPERATORS:
        position = token.find(operator)
        if position != -1:
            name = token[:position]
            if not name:
                return None
            return Dependency(name, token[position + len(operator):].strip('"\''))

    return Dependency(token, LATEST)


def should_include(raw: str) -> bool:
    # Substring test on the whole raw string, not a marker parse
    return not any(marker in raw for marker in IGNORED_MARKERS)


def parse_requirements(raw_requirements: Optional[Iterable[str]]) -> List[Dependency]:
    dependencies: List[Dependency] = []
    if not raw_requirements:
        return dependencies

    for raw in raw_requirements:
        if not should_include(raw):
            log.debug(f"Ignoring '{raw}'.")
            continue
        dependency = extract_dependency(raw)
        if dependency is None:
            log.debug(f"Couldn't extract a dependency from '{raw}', skipping.")
            continue
        dependencies.append(dependency)
    return dependencies
