import logging
from typing import Dict, List, Optional, Sequence, Tuple

from pindeps.repository import FetchError, Repository
from pindeps.requirement import Dependency, parse_requirements
from pindeps.tools import Tool
from pindeps.utils import parallel_map

log = logging.getLogger(__name__)


class Resolver:
    """
    Looks up each tool on the registry and turns its requires_dist into a list of dependencies.

    Only direct requirements are collected; the dependencies of those dependencies are never fetched. A tool whose
    lookup fails is logged and left out of the result, it doesn't stop the others from being resolved.
    """

    def __init__(self, repository: Optional[Repository] = None):
        if repository is None:
            repository = Repository()
        self._repository = repository

    def resolve(self, tool: Tool) -> List[Dependency]:
        metadata = self._repository.get_package_info(tool.name)
        log.debug(f"{tool.name}: registry version {metadata.current_version}, "
                  f"requires_dist: {metadata.raw_requirements}")
        return parse_requirements(metadata.raw_requirements)

    def resolve_many(self, tools: Sequence[Tool], jobs: int = 1) -> Dict[str, List[Dependency]]:
        if jobs > 1:
            results = parallel_map(self._try_resolve, tools, max_workers=jobs)
        else:
            results = [self._try_resolve(tool) for tool in tools]

        # Filled in input order whatever order the fetches finished in
        resolved: Dict[str, List[Dependency]] = {}
        for tool, dependencies in results:
            if dependencies is not None:
                resolved[tool.name] = dependencies
        return resolved

    def _try_resolve(self, tool: Tool) -> Tuple[Tool, Optional[List[Dependency]]]:
        log.info(f"\nFetching dependencies for {tool.name} v{tool.version}...")
        try:
            dependencies = self.resolve(tool)
        except FetchError as e:
            log.error(f"Error fetching dependencies for {tool.name}: {e}")
            return tool, None
        log.info(f"Found {len(dependencies)} dependencies")
        return tool, dependencies
