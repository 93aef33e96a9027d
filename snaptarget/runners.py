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

"""Run snapcraft on the host or in a container."""

import abc
import subprocess
from pathlib import Path, PurePosixPath
from typing import List, Optional

from craft_cli import emit

from snaptarget import const, errors
from snaptarget.utils import is_docker_required


class SnapcraftRunner(abc.ABC):
    """Strategy to invoke snapcraft for a staged snap directory.

    :param project_dir: The project root directory.
    """

    name: str

    def __init__(self, project_dir: Path) -> None:
        self.project_dir = project_dir

    @abc.abstractmethod
    def source_path(self, path: Path, *, base: Optional[Path] = None) -> str:
        """Return the path snapcraft sees for a host path.

        :param path: The host path.
        :param base: A directory mounted as a whole that contains ``path``.
        """

    @abc.abstractmethod
    def get_command(
        self, *, snap_dir: Path, out_dir: Path, snap_name: str, linux_arch: str
    ) -> List[str]:
        """Return the command line that packs the snap."""

    @abc.abstractmethod
    def run(
        self, *, snap_dir: Path, out_dir: Path, snap_name: str, linux_arch: str
    ) -> Path:
        """Pack the staged snap directory.

        :param snap_dir: The staging directory containing snapcraft.yaml.
        :param out_dir: The directory to write the snap to.
        :param snap_name: The snap file name.
        :param linux_arch: The Debian architecture to build for.

        :returns: The host path of the snap file.

        :raises PackError: If snapcraft cannot be run or fails.
        """


class NativeRunner(SnapcraftRunner):
    """Run snapcraft directly on a Linux host."""

    name = "native"

    def source_path(self, path: Path, *, base: Optional[Path] = None) -> str:
        return str(path)

    def get_command(
        self, *, snap_dir: Path, out_dir: Path, snap_name: str, linux_arch: str
    ) -> List[str]:
        return [
            const.SNAPCRAFT_TOOL,
            "snap",
            "--target-arch",
            linux_arch,
            "-o",
            str(out_dir / snap_name),
        ]

    def run(
        self, *, snap_dir: Path, out_dir: Path, snap_name: str, linux_arch: str
    ) -> Path:
        command = self.get_command(
            snap_dir=snap_dir, out_dir=out_dir, snap_name=snap_name, linux_arch=linux_arch
        )
        emit.debug(f"Pack command: {command}")
        try:
            with emit.open_stream("Running snapcraft") as stream:
                subprocess.run(
                    command,
                    cwd=snap_dir,
                    stdin=subprocess.DEVNULL,
                    stdout=stream,
                    stderr=subprocess.PIPE,
                    check=True,
                    universal_newlines=True,
                )
        except subprocess.CalledProcessError as err:
            details = err.stderr.strip() if err.stderr else str(err)
            raise errors.PackError(const.SNAPCRAFT_TOOL, details=details) from err
        except OSError as err:
            raise errors.PackError(const.SNAPCRAFT_TOOL, details=str(err)) from err

        return out_dir / snap_name


class DockerRunner(SnapcraftRunner):
    """Run snapcraft in a container on hosts other than Linux.

    The project, the user configuration and the output directory are
    mounted in the container, snapcraft builds a copy of the staged tree.
    """

    name = "docker"

    def source_path(self, path: Path, *, base: Optional[Path] = None) -> str:
        out_dir = PurePosixPath(const.DOCKER_OUT_DIR)
        if base is None:
            return str(out_dir / path.name)
        return str(out_dir / base.name / path.relative_to(base).as_posix())

    def get_command(
        self, *, snap_dir: Path, out_dir: Path, snap_name: str, linux_arch: str
    ) -> List[str]:
        config_dir = Path.home() / const.USER_CONFIG_DIR
        script = (
            f"{const.SNAPCRAFT_TOOL} --version"
            f" && cp -R {const.DOCKER_OUT_DIR}/{snap_dir.name} {const.DOCKER_WORK_DIR}/"
            f" && cd {const.DOCKER_WORK_DIR}"
            f" && {const.SNAPCRAFT_TOOL} snap --target-arch {linux_arch}"
            f" -o {const.DOCKER_OUT_DIR}/{snap_name}"
        )
        return [
            const.DOCKER_TOOL,
            "run",
            "--rm",
            "-v",
            f"{self.project_dir}:{const.DOCKER_PROJECT_DIR}",
            "-v",
            f"{config_dir}:{const.DOCKER_CONFIG_DIR}",
            # the output directory can be outside of the project
            "-v",
            f"{out_dir}:{const.DOCKER_OUT_DIR}",
            const.DOCKER_IMAGE,
            "/bin/bash",
            "-c",
            script,
        ]

    def run(
        self, *, snap_dir: Path, out_dir: Path, snap_name: str, linux_arch: str
    ) -> Path:
        command = self.get_command(
            snap_dir=snap_dir, out_dir=out_dir, snap_name=snap_name, linux_arch=linux_arch
        )
        emit.debug(f"Pack command: {command}")
        try:
            with emit.open_stream("Running snapcraft in docker") as stream:
                subprocess.run(
                    command,
                    cwd=self.project_dir,
                    stdin=subprocess.DEVNULL,
                    stdout=stream,
                    stderr=stream,
                    check=True,
                )
        except subprocess.CalledProcessError as err:
            raise errors.PackError(const.DOCKER_TOOL, details=str(err)) from err
        except OSError as err:
            raise errors.PackError(const.DOCKER_TOOL, details=str(err)) from err

        return out_dir / snap_name


def get_runner(project_dir: Path) -> SnapcraftRunner:
    """Select how snapcraft is run on this host."""
    if is_docker_required():
        emit.debug("Host is not Linux, running snapcraft in docker")
        return DockerRunner(project_dir)

    return NativeRunner(project_dir)
