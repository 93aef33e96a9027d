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

"""Icon lookup and desktop file generation for the Linux targets."""

import configparser
import re
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from craft_cli import emit

from snaptarget import errors
from snaptarget.options import SnapOptions
from snaptarget.packager import LinuxPackager

_ICON_NAME = re.compile(r"^(?:icon[_-]?)?(\d+)x(\d+)\.png$")
_DESKTOP_SECTION = "Desktop Entry"


class LinuxTargetHelper:
    """Resources shared by the Linux targets of a packager.

    :param packager: The packager context.
    """

    def __init__(self, packager: LinuxPackager) -> None:
        self._packager = packager
        self._icons: Optional[List[Tuple[int, Path]]] = None

    @property
    def icons(self) -> List[Tuple[int, Path]]:
        """Icons found in the icon directory as (size, path), smallest first."""
        if self._icons is None:
            self._icons = self._collect_icons()
        return self._icons

    @property
    def max_icon_path(self) -> Optional[Path]:
        """The largest available icon, if any."""
        if not self.icons:
            return None
        return self.icons[-1][1]

    def _collect_icons(self) -> List[Tuple[int, Path]]:
        icon_dir = self._packager.icon_dir
        if icon_dir is None or not icon_dir.is_dir():
            emit.debug("No icon directory, snap will have no icon")
            return []

        icons: List[Tuple[int, Path]] = []
        for path in icon_dir.iterdir():
            match = _ICON_NAME.match(path.name)
            if match and path.is_file():
                icons.append((int(match.group(1)), path))

        fallback = icon_dir / "icon.png"
        if not icons and fallback.is_file():
            icons.append((0, fallback))

        icons.sort(key=lambda icon: (icon[0], icon[1].name))
        emit.debug(f"Found icons: {[str(path) for _, path in icons]}")
        return icons

    def get_description(self, options: SnapOptions) -> str:
        """Return the description configured for the target or the app."""
        return options.description or self._packager.app_info.description

    def compute_desktop_entry(
        self,
        options: SnapOptions,
        exec_name: str,
        destination: Path,
        extra: Optional[Dict[str, str]] = None,
    ) -> Path:
        """Write a freedesktop desktop entry file.

        Entries from ``options.desktop`` override the generated ones and
        ``extra`` overrides everything.

        :param options: The target options.
        :param exec_name: The command launching the application.
        :param destination: The desktop file to write.
        :param extra: Additional entries.

        :returns: The desktop file path.
        """
        app_info = self._packager.app_info
        comment = options.synopsis or self.get_description(options)

        entries: Dict[str, str] = {
            "Name": app_info.display_name,
            "Comment": " ".join(comment.split()),
            "Exec": exec_name,
            "Terminal": "false",
            "Type": "Application",
            "Icon": self._packager.executable_name,
        }
        if options.category:
            entries["Categories"] = f"{options.category};"
        if options.mime_types:
            entries["MimeType"] = ";".join(options.mime_types) + ";"
        if options.desktop:
            entries.update({key: str(value) for key, value in options.desktop.items()})
        if extra:
            entries.update(extra)

        parser = configparser.ConfigParser(interpolation=None)
        parser.optionxform = str  # type: ignore
        parser[_DESKTOP_SECTION] = entries

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            with destination.open("w", encoding="utf-8") as desktop_file:
                parser.write(desktop_file, space_around_delimiters=False)
        except OSError as err:
            raise errors.DesktopFileError(str(destination), str(err)) from err

        emit.debug(f"Wrote desktop file {str(destination)!r}")
        return destination
