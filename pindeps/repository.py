from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import requests
from packaging.utils import canonicalize_name

log = logging.getLogger(__name__)


class FetchError(RuntimeError):
    pass


class PackageNotFoundError(FetchError):
    def __init__(self, package_name: str, status_code: int):
        super().__init__(f"Package not found on PyPI: {package_name} (HTTP {status_code})")
        self.package_name = package_name
        self.status_code = status_code


class TransportError(FetchError):
    pass


class DecodeError(FetchError):
    pass


@dataclass
class PackageMetadata:
    current_version: str
    raw_requirements: Optional[List[str]] = field(default=None)

    @classmethod
    def from_json(cls, json: dict) -> PackageMetadata:
        # Only info.version and info.requires_dist matter, everything else (releases included) is ignored
        try:
            info = json['info']
            version = info['version']
            requires_dist = info.get('requires_dist')
        except (KeyError, TypeError, AttributeError) as e:
            raise DecodeError(f"Unexpected package metadata layout: missing {e}") from e

        if not isinstance(version, str):
            raise DecodeError(f"Expected a string for info.version, got {version!r}")
        if requires_dist is not None and not isinstance(requires_dist, list):
            raise DecodeError(f"Expected a list or null for info.requires_dist, got {requires_dist!r}")
        if requires_dist and not all(isinstance(raw, str) for raw in requires_dist):
            raise DecodeError(f"Expected only strings in info.requires_dist, got {requires_dist!r}")
        return cls(version, requires_dist)


class Repository:
    DEFAULT_URL = 'https://pypi.org/pypi'

    def __init__(self, url=DEFAULT_URL):
        self.url = url.rstrip('/')

    def package_url(self, package_name: str) -> str:
        return f"{self.url}/{canonicalize_name(package_name)}/json"

    def get_package_info(self, package_name: str) -> PackageMetadata:
        url = self.package_url(package_name)
        log.debug(f"GET {url}")
        try:
            response = requests.get(url)
        except requests.RequestException as e:
            raise TransportError(f"Could not fetch {package_name} from {self.url}: {e}") from e

        if not response.ok:
            raise PackageNotFoundError(package_name, response.status_code)

        try:
            json = response.json()
        except ValueError as e:
            raise DecodeError(f"Could not parse the registry response for {package_name}: {e}") from e
        return PackageMetadata.from_json(json)
