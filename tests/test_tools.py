import json
import logging

import pytest

from pindeps.tools import InputNotFoundError, InputParseError, Tool, find_tools_file, load_tools
from tests.conftest import fixture_path


class TestFindToolsFile:
    def test_in_start_directory(self, tmp_path):
        (tmp_path / 'pkgs.json').write_text('{}')
        assert find_tools_file(tmp_path) == tmp_path / 'pkgs.json'

    def test_in_parent_directory(self, tmp_path):
        (tmp_path / 'pkgs.json').write_text('{}')
        start = tmp_path / 'a' / 'b' / 'c'
        start.mkdir(parents=True)
        assert find_tools_file(start) == tmp_path / 'pkgs.json'

    def test_nearest_wins(self, tmp_path):
        (tmp_path / 'pkgs.json').write_text('{}')
        (tmp_path / 'a').mkdir()
        (tmp_path / 'a' / 'pkgs.json').write_text('{}')
        assert find_tools_file(tmp_path / 'a') == tmp_path / 'a' / 'pkgs.json'

    def test_directory_with_same_name_is_skipped(self, tmp_path):
        (tmp_path / 'pkgs.json').write_text('{}')
        (tmp_path / 'a' / 'pkgs.json').mkdir(parents=True)
        assert find_tools_file(tmp_path / 'a') == tmp_path / 'pkgs.json'

    def test_not_found(self, tmp_path):
        with pytest.raises(InputNotFoundError):
            find_tools_file(tmp_path, 'no-such-file-anywhere-3f9a1c.json')


class TestLoadTools:
    def test_load(self):
        assert load_tools(fixture_path('pkgs.json')) == [Tool('flask', '3.0.3'),
                                                         Tool('does-not-exist', '1.0.0'),
                                                         Tool('six', '1.16.0')]

    def test_empty_list(self, tmp_path):
        path = tmp_path / 'pkgs.json'
        path.write_text('{"tools": []}')
        assert load_tools(path) == []

    def test_extra_fields_ignored(self, tmp_path):
        path = tmp_path / 'pkgs.json'
        path.write_text(json.dumps({'tools': [{'name': 'six', 'version': '1.16.0', 'note': 'x'}], 'other': 1}))
        assert load_tools(path) == [Tool('six', '1.16.0')]

    @pytest.mark.parametrize('content',
                             ['not json',
                              '[]',
                              '{}',
                              '{"tools": {}}',
                              '{"tools": ["six"]}',
                              '{"tools": [{"name": "six"}]}',
                              '{"tools": [{"name": "six", "version": 1}]}',
                              '{"tools": [{"name": "", "version": "1.0"}]}'])
    def test_malformed(self, tmp_path, content):
        path = tmp_path / 'pkgs.json'
        path.write_text(content)
        with pytest.raises(InputParseError):
            load_tools(path)

    def test_unreadable(self, tmp_path):
        with pytest.raises(InputParseError):
            load_tools(tmp_path / 'missing.json')

    def test_non_pep440_version_warns(self, tmp_path, caplog):
        path = tmp_path / 'pkgs.json'
        path.write_text('{"tools": [{"name": "six", "version": "latest-and-greatest"}]}')
        with caplog.at_level(logging.WARNING, logger='pindeps.tools'):
            assert load_tools(path) == [Tool('six', 'latest-and-greatest')]
        assert 'not a valid PEP 440 version' in caplog.text

    def test_utf8_names(self, tmp_path):
        path = tmp_path / 'pkgs.json'
        path.write_bytes('{"tools": [{"name": "café-tool", "version": "1.0"}]}'.encode('utf-8'))
        assert load_tools(path) == [Tool('café-tool', '1.0')]
