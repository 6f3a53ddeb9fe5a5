##############################################################################
# Copyright (c) ghostdb Project developers. See top-level LICENSE and
# COPYRIGHT files for dates and other details. No copyright assignment is
# required to contribute to ghostdb.
##############################################################################

"""
Tests for the configfile.py module.
"""

import logging
import os

import pytest
from pytest_mock import MockerFixture

from ghostdb.config import Config, configfile
from ghostdb.config.configfile import find_config_file, get_config, get_default_config, initialize_config, load_config
from tests.fixture_types import FixtureCallable, FixtureStr


@pytest.fixture
def no_global_config_files(mocker: MockerFixture, create_testing_dir: FixtureCallable, config_testing_dir: FixtureStr):
    """
    Point the fallback config locations at an empty directory so the real home
    directory is never read.

    Args:
        mocker: PyTest mocker fixture.
        create_testing_dir: A fixture which returns a function that creates the testing directory.
        config_testing_dir: The path to the temporary testing directory for config tests.

    Returns:
        The empty directory standing in for the ghostdb home directory.
    """
    empty_home = create_testing_dir(config_testing_dir, "empty_home")
    mocker.patch("ghostdb.config.configfile.GHOSTDB_HOME", empty_home)
    mocker.patch("ghostdb.config.configfile.CONFIG_PATH_FILE", os.path.join(empty_home, "config_path.txt"))
    return empty_home


def test_get_default_config():
    """
    Test that the default configuration uses an in-memory backend.
    """
    default_config = get_default_config()

    assert default_config["backend"]["name"] == "memory"
    assert default_config["backend"]["port"] == 6379
    assert default_config["logging"] == {"level": "INFO", "colors": True}


def test_load_config(write_app_yaml: FixtureCallable):
    """
    Test that an existing config file is read.

    Args:
        write_app_yaml: A function writing an `app.yaml` into a fresh directory.
    """
    app_dir = write_app_yaml("load_config", {"backend": {"name": "sqlite"}})
    assert load_config(os.path.join(app_dir, "app.yaml")) == {"backend": {"name": "sqlite"}}


def test_load_config_missing_file(config_testing_dir: FixtureStr):
    """
    Test that a missing config file yields None.

    Args:
        config_testing_dir: The path to the temporary testing directory for config tests.
    """
    assert load_config(os.path.join(config_testing_dir, "nope.yaml")) is None


def test_find_config_file_in_given_path(write_app_yaml: FixtureCallable, config_testing_dir: FixtureStr):
    """
    Test that `app.yaml` is found in an explicitly given directory, and not found
    in a directory without one.

    Args:
        write_app_yaml: A function writing an `app.yaml` into a fresh directory.
        config_testing_dir: The path to the temporary testing directory for config tests.
    """
    app_dir = write_app_yaml("given_path", {})

    assert find_config_file(app_dir) == os.path.join(app_dir, "app.yaml")
    assert find_config_file(os.path.join(config_testing_dir, "missing")) is None


def test_find_config_file_in_cwd(
    monkeypatch: pytest.MonkeyPatch, write_app_yaml: FixtureCallable, no_global_config_files: FixtureStr
):
    """
    Test that `app.yaml` in the current working directory is found first.

    Args:
        monkeypatch: The built-in pytest monkeypatch fixture.
        write_app_yaml: A function writing an `app.yaml` into a fresh directory.
        no_global_config_files: An empty directory standing in for the ghostdb home.
    """
    app_dir = write_app_yaml("cwd", {})
    monkeypatch.chdir(app_dir)

    assert find_config_file() == os.path.join(app_dir, "app.yaml")


def test_find_config_file_from_config_path_file(
    monkeypatch: pytest.MonkeyPatch, write_app_yaml: FixtureCallable, no_global_config_files: FixtureStr
):
    """
    Test that the path stored in the config path file is used when the working
    directory has no `app.yaml`.

    Args:
        monkeypatch: The built-in pytest monkeypatch fixture.
        write_app_yaml: A function writing an `app.yaml` into a fresh directory.
        no_global_config_files: An empty directory standing in for the ghostdb home.
    """
    app_file = os.path.join(write_app_yaml("config_path_target", {}), "app.yaml")
    with open(configfile.CONFIG_PATH_FILE, "w") as path_file:
        path_file.write(f"{app_file}\n")
    monkeypatch.chdir(no_global_config_files)

    try:
        assert find_config_file() == app_file
    finally:
        os.remove(configfile.CONFIG_PATH_FILE)


def test_find_config_file_nowhere(monkeypatch: pytest.MonkeyPatch, no_global_config_files: FixtureStr):
    """
    Test that None is returned when no config file exists anywhere.

    Args:
        monkeypatch: The built-in pytest monkeypatch fixture.
        no_global_config_files: An empty directory standing in for the ghostdb home.
    """
    monkeypatch.chdir(no_global_config_files)
    assert find_config_file() is None


def test_get_config_merges_over_defaults(write_app_yaml: FixtureCallable):
    """
    Test that values from the config file override the defaults one key at a time.

    Args:
        write_app_yaml: A function writing an `app.yaml` into a fresh directory.
    """
    app_dir = write_app_yaml("merge", {"backend": {"name": "sqlite", "path": "/tmp/ghost.db"}})
    config = get_config(app_dir)

    assert config["backend"]["name"] == "sqlite"
    assert config["backend"]["path"] == "/tmp/ghost.db"
    assert config["backend"]["port"] == 6379
    assert config["logging"] == {"level": "INFO", "colors": True}


def test_get_config_empty_file(write_app_yaml: FixtureCallable):
    """
    Test that an empty config file gives the default configuration.

    Args:
        write_app_yaml: A function writing an `app.yaml` into a fresh directory.
    """
    app_dir = write_app_yaml("empty", None)
    assert get_config(app_dir) == get_default_config()


def test_get_config_rejects_non_mapping(write_app_yaml: FixtureCallable):
    """
    Test that a config file whose top level isn't a mapping raises a ValueError.

    Args:
        write_app_yaml: A function writing an `app.yaml` into a fresh directory.
    """
    app_dir = write_app_yaml("not_a_mapping", ["backend", "logging"])

    with pytest.raises(ValueError, match="must contain a mapping"):
        get_config(app_dir)


def test_get_config_without_file(mocker: MockerFixture):
    """
    Test that the defaults are used when no config file can be found.

    Args:
        mocker: PyTest mocker fixture.
    """
    mocker.patch("ghostdb.config.configfile.find_config_file", return_value=None)
    assert get_config() == get_default_config()


def test_initialize_config(mocker: MockerFixture, write_app_yaml: FixtureCallable):
    """
    Test that `initialize_config` loads the file into the module-level `CONFIG`.

    Args:
        mocker: PyTest mocker fixture.
        write_app_yaml: A function writing an `app.yaml` into a fresh directory.
    """
    mocker.patch("ghostdb.config.configfile.CONFIG", None)
    app_dir = write_app_yaml("initialize", {"logging": {"level": "DEBUG"}})

    config = initialize_config(app_dir)

    assert isinstance(config, Config)
    assert configfile.CONFIG is config
    assert config.logging.level == "DEBUG"
    assert config.backend.name == "memory"


def test_initialize_config_falls_back_to_defaults(
    mocker: MockerFixture, write_app_yaml: FixtureCallable, caplog: pytest.LogCaptureFixture
):
    """
    Test that a broken config file is reported and the defaults are used instead.

    Args:
        mocker: PyTest mocker fixture.
        write_app_yaml: A function writing an `app.yaml` into a fresh directory.
        caplog: A built-in fixture from the pytest library to capture logs.
    """
    caplog.set_level(logging.WARNING)
    mocker.patch("ghostdb.config.configfile.CONFIG", None)
    app_dir = write_app_yaml("broken", "just a string")

    config = initialize_config(app_dir)

    assert config.backend.name == "memory"
    assert "Falling back to default configuration" in caplog.text


def test_get_config_rejects_non_mapping_section(write_app_yaml: FixtureCallable):
    """
    Test that a known section that isn't a mapping raises a ValueError.

    Args:
        write_app_yaml: A function writing an `app.yaml` into a fresh directory.
    """
    app_dir = write_app_yaml("scalar_section", {"backend": "sqlite"})

    with pytest.raises(ValueError, match="'backend' section"):
        get_config(app_dir)


def test_get_config_empty_section(write_app_yaml: FixtureCallable):
    """
    Test that a section left empty in the config file keeps its defaults.

    Args:
        write_app_yaml: A function writing an `app.yaml` into a fresh directory.
    """
    app_dir = write_app_yaml("empty_section", {"backend": None, "logging": {"level": "DEBUG"}})
    config = get_config(app_dir)

    assert config["backend"] == get_default_config()["backend"]
    assert config["logging"]["level"] == "DEBUG"


def test_initialize_config_non_mapping_section_falls_back_to_defaults(
    mocker: MockerFixture, write_app_yaml: FixtureCallable, caplog: pytest.LogCaptureFixture
):
    """
    Test that a scalar section in the config file is reported and the defaults are used.

    Args:
        mocker: PyTest mocker fixture.
        write_app_yaml: A function writing an `app.yaml` into a fresh directory.
        caplog: A built-in fixture from the pytest library to capture logs.
    """
    caplog.set_level(logging.WARNING)
    mocker.patch("ghostdb.config.configfile.CONFIG", None)
    app_dir = write_app_yaml("scalar_section_init", {"backend": "sqlite"})

    config = initialize_config(app_dir)

    assert config.backend.name == "memory"
    assert "Falling back to default configuration" in caplog.text
