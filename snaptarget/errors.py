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

"""Snap target error definitions."""

from typing import Optional

from craft_cli import CraftError


class SnapTargetError(CraftError):
    """Failure in a snap target operation."""


class OptionsValidationError(SnapTargetError):
    """Invalid snap target options."""


class InvalidArchitecture(SnapTargetError):
    """The architecture is not supported.

    :param arch_name: The unsupported architecture name.
    """

    def __init__(self, arch_name: str, *, supported: Optional[str] = None) -> None:
        self.arch_name = arch_name
        resolution = "Make sure the architecture name is correct."
        if supported:
            resolution = f"Supported architectures are {supported}."
        super().__init__(
            f"Architecture {arch_name!r} is not supported.",
            resolution=resolution,
        )


class PackError(SnapTargetError):
    """The snap packaging tool failed."""

    def __init__(self, tool: str, *, details: Optional[str] = None) -> None:
        super().__init__(
            f"Failed to create snap package with {tool!r}",
            details=details,
            resolution="Check the output of the packaging tool above.",
        )


class ConfigError(SnapTargetError):
    """Project configuration cannot be loaded."""

    def __init__(self, filename: str, message: str) -> None:
        super().__init__(f"Cannot load project configuration {filename!r}: {message}")


class DesktopFileError(SnapTargetError):
    """Failed to create application desktop file."""

    def __init__(self, filename: str, message: str) -> None:
        super().__init__(f"Failed to generate desktop file {filename!r}: {message}")
