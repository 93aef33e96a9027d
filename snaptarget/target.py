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

"""The snap packaging target."""

import shutil
from pathlib import Path
from typing import Dict, Optional

import pydantic
from craft_cli import emit

from snaptarget import const, errors, manifest
from snaptarget.const import Arch
from snaptarget.desktop import LinuxTargetHelper
from snaptarget.manifest import ContentPlug, ManifestApp, ManifestPart, SnapManifest
from snaptarget.options import SnapOptions, format_validation_error
from snaptarget.packager import LinuxPackager, TargetArtifact
from snaptarget.runners import SnapcraftRunner, get_runner

_PLATFORM_PLUG = "platform"
_PLATFORM_AFTER = ["extra", "desktop-ubuntu-app-platform"]
_DEFAULT_AFTER = ["desktop-glib-only"]


def _empty_dir(directory: Path) -> None:
    """Create a directory, removing any previous content."""
    try:
        if directory.exists():
            shutil.rmtree(directory)
        directory.mkdir(parents=True)
    except OSError as err:
        raise errors.SnapTargetError(
            f"Cannot create directory {str(directory)!r}: {err.strerror}"
        ) from err


def _copy_file(source: Path, destination: Path) -> None:
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, destination)
    except OSError as err:
        raise errors.SnapTargetError(
            f"Cannot copy {str(source)!r} to {str(destination)!r}: {err.strerror}"
        ) from err


def get_snap_filename(name: str, version: str, arch: Arch) -> str:
    """Return the file name of the snap built for ``arch``."""
    return f"{name}_{version}_{arch.linux_arch}.snap"


class SnapTarget:
    """Build a snap from an unpacked application directory.

    :param packager: The packager context.
    :param helper: Icon and desktop file helper.
    :param out_dir: The directory to write snaps to.
    :param runner: How to run snapcraft, selected from the host if not set.
    """

    name = "snap"

    def __init__(
        self,
        packager: LinuxPackager,
        helper: LinuxTargetHelper,
        out_dir: Path,
        *,
        runner: Optional[SnapcraftRunner] = None,
    ) -> None:
        self.packager = packager
        self.helper = helper
        self.out_dir = Path(out_dir).resolve()
        self.options = SnapOptions.merge(
            packager.platform_options, packager.config.get(self.name)
        )
        self.runner = runner or get_runner(packager.project_dir)

    def build(self, app_out_dir: Path, arch: Arch) -> Optional[TargetArtifact]:
        """Build the snap for one architecture.

        :param app_out_dir: The unpacked application directory.
        :param arch: The architecture the application was built for.

        :returns: The created artifact, or None if the effective option hook
            handled the build.
        """
        emit.progress(f"Building snap for arch {arch}")

        options = self.options
        app_out_dir = Path(app_out_dir).resolve()
        snap_dir = app_out_dir.with_name(f"{app_out_dir.name}-snap")
        _empty_dir(snap_dir)

        extra_source_dir = snap_dir / const.EXTRA_SOURCE_DIR
        if options.use_ubuntu_platform:
            # snapcraft checks that ubuntu-app-platform is an empty directory
            _empty_dir(extra_source_dir / const.PLATFORM_CONTENT_DIR)

        snap_manifest = self._create_manifest(
            app_out_dir=app_out_dir,
            snap_dir=snap_dir,
            extra_source_dir=extra_source_dir,
        )

        hook = self.packager.effective_option_computed
        if hook is not None and hook(snap_manifest):
            emit.debug("Snap build handled by the effective option hook")
            return None

        manifest.write(snap_manifest, snap_dir)

        snap_name = get_snap_filename(snap_manifest.name, snap_manifest.version, arch)
        result_file = self.runner.run(
            snap_dir=snap_dir,
            out_dir=self.out_dir,
            snap_name=snap_name,
            linux_arch=arch.linux_arch,
        )

        return self.packager.dispatch_artifact_created(result_file, self.name, arch)

    def _create_manifest(
        self, *, app_out_dir: Path, snap_dir: Path, extra_source_dir: Path
    ) -> SnapManifest:
        options = self.options
        app_info = self.packager.app_info
        snap_name = self.packager.executable_name
        assumes = options.validate_assumes()

        icon = None
        icon_source = self.helper.max_icon_path
        if icon_source is not None:
            icon = const.ICON_PATH
            _copy_file(icon_source, snap_dir / const.ICON_PATH)

        self.helper.compute_desktop_entry(
            options,
            snap_name,
            snap_dir / const.GUI_DIR / f"{snap_name}.desktop",
            {"Icon": const.DESKTOP_ICON},
        )

        plugs = options.get_plugs()
        content_plugs: Optional[Dict[str, ContentPlug]] = None
        if options.use_ubuntu_platform:
            plugs.append(_PLATFORM_PLUG)
            content_plugs = {
                _PLATFORM_PLUG: ContentPlug(
                    content="ubuntu-app-platform1",
                    target="ubuntu-app-platform",
                    default_provider="ubuntu-app-platform",
                )
            }

        parts = {
            "app": ManifestPart(
                plugin="dump",
                stage_packages=options.get_stage_packages(),
                source=self.runner.source_path(app_out_dir),
                after=_PLATFORM_AFTER if options.use_ubuntu_platform else _DEFAULT_AFTER,
            )
        }
        if options.use_ubuntu_platform:
            parts["extra"] = ManifestPart(
                plugin="dump",
                source=self.runner.source_path(extra_source_dir, base=snap_dir),
            )

        try:
            return SnapManifest(
                name=snap_name,
                version=app_info.version,
                summary=options.summary or app_info.display_name,
                description=self.helper.get_description(options),
                confinement=options.confinement or const.DEFAULT_CONFINEMENT,
                grade=options.grade or const.DEFAULT_GRADE,
                icon=icon,
                assumes=assumes,
                apps={
                    snap_name: ManifestApp(
                        command=f"desktop-launch $SNAP/{snap_name}", plugs=plugs
                    )
                },
                plugs=content_plugs,
                parts=parts,
            )
        except pydantic.ValidationError as err:
            raise errors.OptionsValidationError(
                "Invalid snap manifest:\n" + format_validation_error(err)
            ) from err
