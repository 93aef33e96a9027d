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

"""Constants used in snaptarget."""

import enum

from snaptarget import errors


class Arch(str, enum.Enum):
    """An architecture the application is built for."""

    ia32 = "ia32"
    x64 = "x64"
    armv7l = "armv7l"
    arm64 = "arm64"

    def __str__(self) -> str:
        """Stringify the value."""
        return str(self.value)

    @property
    def linux_arch(self) -> str:
        """The Debian architecture name used by snaps."""
        return _LINUX_ARCHS[self]

    @classmethod
    def from_name(cls, name: str) -> "Arch":
        """Get the architecture for a packager or Debian architecture name.

        :raises InvalidArchitecture: If the name is not known.
        """
        try:
            return cls(name)
        except ValueError:
            pass

        for arch, linux_arch in _LINUX_ARCHS.items():
            if linux_arch == name:
                return arch

        raise errors.InvalidArchitecture(
            name, supported=", ".join(arch.value for arch in cls)
        )


_LINUX_ARCHS = {
    Arch.ia32: "i386",
    Arch.x64: "amd64",
    Arch.armv7l: "armhf",
    Arch.arm64: "arm64",
}


def to_linux_arch_string(arch: Arch) -> str:
    """Return the Debian architecture name for ``arch``."""
    return arch.linux_arch


DEFAULT_SENTINEL = "default"
"""List entry replaced by the built-in default list."""

DEFAULT_PLUGS = (
    "home",
    "x11",
    "unity7",
    "browser-support",
    "network",
    "gsettings",
    "pulseaudio",
    "opengl",
)

# libxss1, libasound2 and gconf2 are needed at runtime on Xubuntu 16.04
DEFAULT_STAGE_PACKAGES = (
    "libnotify4",
    "libappindicator1",
    "libxtst6",
    "libnss3",
    "libxss1",
    "fontconfig-config",
    "gconf2",
    "libasound2",
    "pulseaudio",
)

PLATFORM_STAGE_PACKAGES = ("libnss3",)
"""Stage packages when ubuntu-app-platform provides the rest."""

DEFAULT_CONFINEMENT = "strict"
DEFAULT_GRADE = "stable"

MANIFEST_FILENAME = "snapcraft.yaml"
MANIFEST_LINE_WIDTH = 160

ICON_PATH = "setup/gui/icon.png"
DESKTOP_ICON = "${SNAP}/meta/gui/icon.png"
GUI_DIR = "setup/gui"

EXTRA_SOURCE_DIR = ".extra"
PLATFORM_CONTENT_DIR = "ubuntu-app-platform"

SNAPCRAFT_TOOL = "snapcraft"
DOCKER_TOOL = "docker"
DOCKER_IMAGE = "electronuserland/electron-builder:latest"
DOCKER_PROJECT_DIR = "/project"
DOCKER_CONFIG_DIR = "/root/.electron"
DOCKER_OUT_DIR = "/out"
DOCKER_WORK_DIR = "/s"
USER_CONFIG_DIR = ".electron"
