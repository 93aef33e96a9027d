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

"""Packager context shared by the Linux targets."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

from craft_cli import emit

from snaptarget.const import Arch

if TYPE_CHECKING:
    from snaptarget.manifest import SnapManifest


EffectiveOptionHook = Callable[["SnapManifest"], bool]
"""Called with the complete manifest, returns True if the build was handled."""

ArtifactListener = Callable[["TargetArtifact"], None]


@dataclass(frozen=True)
class AppInfo:
    """Application metadata."""

    name: str
    version: str
    product_name: Optional[str] = None
    description: str = ""

    @property
    def display_name(self) -> str:
        """The human readable application name."""
        return self.product_name or self.name


@dataclass(frozen=True)
class TargetArtifact:
    """A package file produced by a target."""

    file: Path
    arch: Arch
    target: str


@dataclass
class LinuxPackager:
    """Application data and callbacks the Linux targets build with.

    :param app_info: The application metadata.
    :param executable_name: Name of the application binary in the output dir.
    :param project_dir: The project root directory.
    :param config: Per-target configuration sections, keyed by target name.
    :param platform_options: Options shared by all Linux targets.
    :param icon_dir: Directory holding the application icons.
    :param effective_option_computed: Hook to intercept builds.
    """

    app_info: AppInfo
    executable_name: str
    project_dir: Path
    config: Dict[str, Any] = field(default_factory=dict)
    platform_options: Dict[str, Any] = field(default_factory=dict)
    icon_dir: Optional[Path] = None
    effective_option_computed: Optional[EffectiveOptionHook] = None
    listeners: List[ArtifactListener] = field(default_factory=list)

    def add_listener(self, listener: ArtifactListener) -> None:
        """Register a callback for created artifacts."""
        self.listeners.append(listener)

    def dispatch_artifact_created(
        self, file: Path, target: str, arch: Arch
    ) -> TargetArtifact:
        """Notify listeners of a new artifact.

        :returns: The reported artifact.
        """
        artifact = TargetArtifact(file=file.resolve(), arch=arch, target=target)
        emit.progress(f"Created {target} package {str(artifact.file)!r}", permanent=True)
        for listener in self.listeners:
            listener(artifact)
        return artifact
