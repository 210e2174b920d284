import json
import os
from unittest.mock import Mock

from pindeps.repository import PackageMetadata, PackageNotFoundError

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), 'fixtures')


def load_fixture(filename):
    with open(os.path.join(FIXTURES_DIR, filename), 'r') as f:
        return f.read()


def fixture_path(filename):
    return os.path.join(FIXTURES_DIR, filename)


def _package_info(name):
    try:
        return PackageMetadata.from_json(json.loads(load_fixture(f"pypi/pypi_{name.lower()}.json")))
    except FileNotFoundError:
        raise PackageNotFoundError(name, 404)


def mock_repository_json(mocker):
    return mocker.patch('pindeps.repository.Repository.get_package_info', side_effect=_package_info)


def mock_response(status_code=200, body=None, json_error=None):
    response = Mock()
    response.status_code = status_code
    response.ok = status_code < 400
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = body
    return response
