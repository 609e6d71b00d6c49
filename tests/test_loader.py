# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for ConfigurationLoader."""

import io

import pytest

from genro_configtree import (
    ConfigurationLoader,
    ConfigurationTree,
    DuplicateNameError,
    VersionMismatchError,
)


def doc(body: str, version: str | None = None) -> str:
    version_attr = f' Version="{version}"' if version is not None else ''
    return f"<Configuration{version_attr}>{body}</Configuration>"


@pytest.fixture
def app_file(tmp_path):
    path = tmp_path / 'app.xml'
    path.write_text(doc('<Port>8080</Port><Debug>off</Debug>', '1.0'), encoding='utf-8')
    return path


@pytest.fixture
def local_file(tmp_path):
    path = tmp_path / 'local.xml'
    path.write_text(doc('<Host>localhost</Host>', '1.0'), encoding='utf-8')
    return path


class TestLoaderLoad:
    """Tests for loading sources."""

    def test_initial_tree_is_empty(self):
        """Test a new loader publishes an empty tree."""
        loader = ConfigurationLoader()
        assert isinstance(loader.tree, ConfigurationTree)
        assert len(loader.tree) == 0
        assert loader.sources == ()

    def test_load_file(self, app_file):
        """Test loading a file."""
        loader = ConfigurationLoader()
        tree = loader.load(app_file)
        assert tree is loader.tree
        assert tree['Port'].as_int() == 8080
        assert tree.version == '1.0'
        assert loader.sources[0].path == app_file

    def test_load_several_files(self, app_file, local_file):
        """Test files merge in load order."""
        loader = ConfigurationLoader()
        loader.load(app_file)
        loader.load(str(local_file))
        assert loader.tree.names == ['Port', 'Debug', 'Host']

    def test_load_honours_encoding_declaration(self, tmp_path):
        """Test files are decoded per their XML declaration."""
        path = tmp_path / 'latin.xml'
        path.write_bytes(
            '<?xml version="1.0" encoding="ISO-8859-1"?>'
            '<Configuration><Name>Caf\xe9</Name></Configuration>'.encode('latin-1')
        )
        loader = ConfigurationLoader()
        assert loader.load(path)['Name'].text == 'Caf\xe9'

    def test_load_text_and_stream(self):
        """Test in-memory sources."""
        loader = ConfigurationLoader()
        loader.load_text(doc('<A>1</A>'))
        loader.load_stream(io.StringIO(doc('<B>2</B>')))
        loader.load_stream(io.BytesIO(doc('<C>3</C>').encode()))
        assert loader.tree.names == ['A', 'B', 'C']
        assert len(loader.sources) == 3

    def test_missing_file_raises(self, tmp_path):
        """Test I/O errors propagate and record nothing."""
        loader = ConfigurationLoader()
        with pytest.raises(FileNotFoundError):
            loader.load(tmp_path / 'missing.xml')
        assert loader.sources == ()

    def test_failed_load_records_nothing(self, app_file, tmp_path):
        """Test a rejected document is not recorded."""
        clash = tmp_path / 'clash.xml'
        clash.write_text(doc('<Port>1</Port>'), encoding='utf-8')
        loader = ConfigurationLoader()
        loader.load(app_file)
        with pytest.raises(DuplicateNameError):
            loader.load(clash)
        assert len(loader.sources) == 1
        assert loader.tree['Port'].as_int() == 8080


class TestLoaderVersion:
    """Tests for expected versions."""

    def test_default_expected_version(self, app_file, tmp_path):
        """Test the loader default applies to every load."""
        other = tmp_path / 'other.xml'
        other.write_text(doc('<X>1</X>', '2.0'), encoding='utf-8')
        loader = ConfigurationLoader(expected_version='2.0')
        with pytest.raises(VersionMismatchError):
            loader.load(app_file)
        loader.load(other)
        assert loader.tree.version == '2.0'

    def test_per_call_override(self, app_file):
        """Test a load can pass its own expected version."""
        loader = ConfigurationLoader(expected_version='2.0')
        loader.load(app_file, expected_version='1.0')
        assert loader.sources[0].expected_version == '1.0'


class TestLoaderReload:
    """Tests for reloading."""

    def test_reload_without_sources(self):
        """Test reload is a no-op before anything is loaded."""
        loader = ConfigurationLoader()
        tree = loader.tree
        assert loader.reload() is tree

    def test_reload_picks_up_changes(self, app_file, local_file):
        """Test reload re-reads files in order and publishes a new tree."""
        loader = ConfigurationLoader()
        loader.load(app_file)
        loader.load(local_file)
        old_tree = loader.tree

        app_file.write_text(doc('<Port>9090</Port><Debug>on</Debug>', '1.0'), encoding='utf-8')
        new_tree = loader.reload()

        assert new_tree is loader.tree
        assert new_tree is not old_tree
        assert new_tree['Port'].as_int() == 9090
        assert new_tree.names == ['Port', 'Debug', 'Host']
        assert old_tree['Port'].as_int() == 8080

    def test_reload_replays_text_sources(self, app_file):
        """Test in-memory sources survive a reload."""
        loader = ConfigurationLoader()
        loader.load(app_file)
        loader.load_text(doc('<Extra>yes</Extra>'))
        tree = loader.reload()
        assert tree['Extra'].as_bool() is True

    def test_failed_reload_keeps_published_tree(self, app_file, local_file):
        """Test a broken file on reload leaves the old tree in place."""
        loader = ConfigurationLoader()
        loader.load(app_file)
        loader.load(local_file)
        old_tree = loader.tree

        local_file.write_text(doc('<Port>1</Port>', '1.0'), encoding='utf-8')
        with pytest.raises(DuplicateNameError):
            loader.reload()
        assert loader.tree is old_tree
        assert loader.tree.names == ['Port', 'Debug', 'Host']

    def test_reload_checks_recorded_versions(self, app_file):
        """Test each source is replayed with its expected version."""
        loader = ConfigurationLoader()
        loader.load(app_file, expected_version='1.0')
        app_file.write_text(doc('<Port>1</Port>', '3.0'), encoding='utf-8')
        with pytest.raises(VersionMismatchError):
            loader.reload()
