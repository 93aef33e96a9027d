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

"""Project configuration file definitions and helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pydantic
import yaml
from craft_cli import emit
from pydantic import ConfigDict
from pydantic.alias_generators import to_camel

from snaptarget import errors
from snaptarget.options import format_validation_error
from snaptarget.packager import AppInfo, LinuxPackager

CONFIG_FILENAMES = ("snaptarget.yaml", "electron-builder.yml", "electron-builder.yaml")


class _ConfigModel(pydantic.BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class Directories(_ConfigModel):
    """Project directory layout, relative to the project directory."""

    output: str = "dist"
    build_resources: str = "build"


class ProjectConfig(_ConfigModel):
    """The project configuration file."""

    name: str
    version: str
    product_name: str | None = None
    description: str = ""
    executable_name: str | None = None
    directories: Directories = Directories()
    linux: dict[str, Any] = {}
    snap: dict[str, Any] = {}

    @pydantic.field_validator("version", mode="before")
    @classmethod
    def _version_to_str(cls, value):
        # YAML reads versions such as 1.2 as floats
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @property
    def effective_executable_name(self) -> str:
        """The application binary name."""
        return self.executable_name or self.name


def find_config(project_dir: Path) -> Path:
    """Return the first known configuration file in the project directory."""
    for filename in CONFIG_FILENAMES:
        path = project_dir / filename
        if path.is_file():
            return path

    raise errors.ConfigError(
        str(project_dir),
        f"none of {', '.join(CONFIG_FILENAMES)} found",
    )


def load_project(path: Path) -> ProjectConfig:
    """Load and validate a project configuration file.

    :param path: The configuration file.

    :raises ConfigError: If the file cannot be read or is invalid.
    """
    emit.debug(f"Loading project configuration from {str(path)!r}")
    try:
        with path.open(encoding="utf-8") as file:
            data = yaml.safe_load(file)
    except OSError as err:
        raise errors.ConfigError(str(path), err.strerror or str(err)) from err
    except yaml.YAMLError as err:
        raise errors.ConfigError(str(path), f"invalid YAML: {err}") from err

    if not isinstance(data, dict):
        raise errors.ConfigError(str(path), "expected a mapping")

    try:
        return ProjectConfig.model_validate(data)
    except pydantic.ValidationError as err:
        raise errors.ConfigError(
            str(path), "\n" + format_validation_error(err)
        ) from err


def create_packager(config: ProjectConfig, project_dir: Path) -> LinuxPackager:
    """Create the packager context for a project."""
    return LinuxPackager(
        app_info=AppInfo(
            name=config.name,
            version=config.version,
            product_name=config.product_name,
            description=config.description,
        ),
        executable_name=config.effective_executable_name,
        project_dir=project_dir,
        config={"snap": config.snap},
        platform_options=config.linux,
        icon_dir=project_dir / config.directories.build_resources / "icons",
    )


def get_output_dir(config: ProjectConfig, project_dir: Path) -> Path:
    """Return the absolute output directory of a project."""
    return (project_dir / config.directories.output).resolve()
