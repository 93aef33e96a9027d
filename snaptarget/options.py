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

"""Snap target options and helpers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pydantic
from craft_cli import emit
from pydantic import ConfigDict
from pydantic.alias_generators import to_camel

from snaptarget import const, errors
from snaptarget.utils import replace_default


def format_validation_error(error: pydantic.ValidationError) -> str:
    """Render pydantic errors as a single readable line per field."""
    messages = []
    for entry in error.errors():
        location = ".".join(str(part) for part in entry["loc"]) or "options"
        messages.append(f"- {entry['msg']} (in field {location!r})")
    return "\n".join(messages)


class SnapOptions(pydantic.BaseModel):
    """User options for the snap target.

    Every field is optional, the build applies defaults for missing ones.
    Keys may be given in camelCase (``stagePackages``) or snake_case.
    Unknown keys are kept so other parts of the packager can consume them.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    summary: str | None = None
    description: str | None = None
    synopsis: str | None = None
    confinement: str | None = None
    grade: str | None = None
    # validated when the manifest is built
    assumes: Any = None
    plugs: list[str] | None = None
    stage_packages: list[str] | None = None
    # any value enables the platform, its content is not inspected
    ubuntu_app_platform_content: Any = None
    category: str | None = None
    mime_types: list[str] | None = None
    desktop: dict[str, Any] | None = None

    @classmethod
    def unmarshal(cls, data: Mapping[str, Any]) -> SnapOptions:
        """Create and validate a new ``SnapOptions`` object from dictionary data.

        :param data: The dictionary data to unmarshal.
        :return: The newly created object.
        :raise OptionsValidationError: If the data is not valid.
        """
        if not isinstance(data, Mapping):
            raise errors.OptionsValidationError("snap options must be a mapping")

        try:
            return cls.model_validate(dict(data))
        except pydantic.ValidationError as err:
            raise errors.OptionsValidationError(
                "Bad snap options:\n" + format_validation_error(err)
            ) from err

    @classmethod
    def merge(cls, *layers: Mapping[str, Any] | SnapOptions | None) -> SnapOptions:
        """Merge option layers, later layers override earlier ones.

        Only keys that are explicitly set in a layer override the previous
        value, including keys explicitly set to None.
        """
        data: dict[str, Any] = {}
        for layer in layers:
            if layer is None:
                continue
            if not isinstance(layer, SnapOptions):
                layer = cls.unmarshal(layer)
            data.update(layer.model_dump(exclude_unset=True))

        return cls.model_validate(data)

    @property
    def use_ubuntu_platform(self) -> bool:
        """Whether ubuntu-app-platform content sharing is enabled."""
        return self.ubuntu_app_platform_content is not None

    def get_plugs(self) -> list[str]:
        """Return the effective app plugs."""
        return replace_default(self.plugs, const.DEFAULT_PLUGS)

    def get_stage_packages(self) -> list[str]:
        """Return the effective stage packages for the app part."""
        if self.use_ubuntu_platform:
            defaults = const.PLATFORM_STAGE_PACKAGES
        else:
            defaults = const.DEFAULT_STAGE_PACKAGES
        return replace_default(self.stage_packages, defaults)

    def validate_assumes(self) -> list[str] | None:
        """Check the assumed snapd features.

        :returns: The list of features, or None if not set.
        :raises OptionsValidationError: If assumes is not a list of strings.
        """
        if self.assumes is None:
            return None

        if not isinstance(self.assumes, list) or not all(
            isinstance(feature, str) for feature in self.assumes
        ):
            emit.debug(f"Invalid assumes value: {self.assumes!r}")
            raise errors.OptionsValidationError(
                "snap.assumes must be an array of strings",
                resolution="Set 'assumes' to a list of snapd feature names.",
            )

        return list(self.assumes)
