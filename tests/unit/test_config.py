# -*- Mode:Python; indent-tabs-mode:nil; tab-width:4 -*-
#
# Copyright 2024 Canonical Ltd.
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License version 3 as
# published by the Free Software Foundation.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from pathlib import Path
from textwrap import dedent

import pytest

from snaptarget import config, errors
from snaptarget.options import SnapOptions


@pytest.fixture
def config_file(new_dir):
    path = Path(new_dir, "snaptarget.yaml")
    path.write_text(
        dedent(
            """\
            name: myapp
            productName: My App
            version: 1.2.3
            description: A test application
            executableName: my-app
            directories:
              output: release
            linux:
              category: Utility
              summary: linux summary
            snap:
              summary: snap summary
              stagePackages: [default, libfoo]
            """
        )
    )
    yield path


def test_load_project(config_file):
    project = config.load_project(config_file)

    assert project.name == "myapp"
    assert project.product_name == "My App"
    assert project.version == "1.2.3"
    assert project.effective_executable_name == "my-app"
    assert project.directories.output == "release"
    assert project.directories.build_resources == "build"
    assert project.snap == {"summary": "snap summary", "stagePackages": ["default", "libfoo"]}


def test_load_project_defaults(new_dir):
    path = Path(new_dir, "snaptarget.yaml")
    path.write_text("name: myapp\nversion: 1.0\n")

    project = config.load_project(path)

    assert project.version == "1.0"
    assert project.effective_executable_name == "myapp"
    assert project.directories.output == "dist"
    assert project.linux == {}
    assert project.snap == {}


def test_load_project_missing(new_dir):
    with pytest.raises(errors.ConfigError) as raised:
        config.load_project(Path(new_dir, "snaptarget.yaml"))

    assert str(raised.value).startswith("Cannot load project configuration")


def test_load_project_invalid_yaml(new_dir):
    path = Path(new_dir, "snaptarget.yaml")
    path.write_text("name: [myapp\n")

    with pytest.raises(errors.ConfigError) as raised:
        config.load_project(path)

    assert "invalid YAML" in str(raised.value)


def test_load_project_not_a_mapping(new_dir):
    path = Path(new_dir, "snaptarget.yaml")
    path.write_text("- myapp\n")

    with pytest.raises(errors.ConfigError) as raised:
        config.load_project(path)

    assert str(raised.value).endswith("expected a mapping")


def test_load_project_missing_version(new_dir):
    path = Path(new_dir, "snaptarget.yaml")
    path.write_text("name: myapp\n")

    with pytest.raises(errors.ConfigError) as raised:
        config.load_project(path)

    assert "'version'" in str(raised.value)


def test_find_config(new_dir):
    Path(new_dir, "electron-builder.yml").write_text("name: myapp\n")

    assert config.find_config(Path(new_dir)) == Path(new_dir, "electron-builder.yml")


def test_find_config_prefers_snaptarget(new_dir, config_file):
    Path(new_dir, "electron-builder.yml").write_text("name: myapp\n")

    assert config.find_config(Path(new_dir)) == config_file


def test_find_config_missing(new_dir):
    with pytest.raises(errors.ConfigError):
        config.find_config(Path(new_dir))


def test_create_packager(new_dir, config_file):
    project = config.load_project(config_file)

    packager = config.create_packager(project, Path(new_dir))

    assert packager.app_info.display_name == "My App"
    assert packager.executable_name == "my-app"
    assert packager.icon_dir == Path(new_dir, "build", "icons")
    assert packager.effective_option_computed is None

    options = SnapOptions.merge(packager.platform_options, packager.config["snap"])
    assert options.summary == "snap summary"
    assert options.category == "Utility"
    assert options.get_stage_packages()[-1] == "libfoo"


def test_get_output_dir(new_dir, config_file):
    project = config.load_project(config_file)

    assert config.get_output_dir(project, Path(new_dir)) == Path(new_dir, "release").resolve()
