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

"""Create the snapcraft.yaml manifest consumed by snapcraft."""

from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

import pydantic
import yaml
from craft_cli import emit
from pydantic import ConfigDict, field_validator, model_validator

from snaptarget import const, errors


class _ManifestModel(pydantic.BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        alias_generator=lambda s: s.replace("_", "-"),
    )


class ManifestApp(_ManifestModel):
    """snapcraft.yaml app entry."""

    command: str
    plugs: Optional[List[str]] = None


class ContentPlug(_ManifestModel):
    """Content plug definition in the manifest."""

    interface: Literal["content"] = "content"
    content: str
    target: str
    default_provider: Optional[str] = None

    @field_validator("target")
    @classmethod
    def _validate_target_not_empty(cls, val):
        if val == "":
            raise ValueError("value cannot be empty")
        return val


class ManifestPart(_ManifestModel):
    """snapcraft.yaml part entry."""

    plugin: str = "dump"
    stage_packages: Optional[List[str]] = None
    source: str
    after: Optional[List[str]] = None


class SnapManifest(_ManifestModel):
    """The snapcraft.yaml model.

    Only the keys the snap target generates are modelled, see
    https://snapcraft.io/docs/snapcraft-yaml-reference for details.
    """

    name: str
    version: str
    summary: str
    description: str
    confinement: str = const.DEFAULT_CONFINEMENT
    grade: str = const.DEFAULT_GRADE
    icon: Optional[str] = None
    assumes: Optional[List[str]] = None
    apps: Dict[str, ManifestApp]
    plugs: Optional[Dict[str, ContentPlug]] = None
    parts: Dict[str, ManifestPart]

    @model_validator(mode="after")
    def _validate_apps_and_parts(self):
        if list(self.apps) != [self.name]:
            raise ValueError(f"manifest must define exactly one app named {self.name!r}")

        if "app" not in self.parts:
            raise ValueError("manifest must define an 'app' part")

        unknown = set(self.parts) - {"app", "extra"}
        if unknown:
            raise ValueError(f"unexpected parts: {sorted(unknown)}")

        if "extra" in self.parts:
            if not self.plugs or "platform" not in self.plugs:
                raise ValueError("'extra' part requires the 'platform' content plug")
            if "platform" not in (self.apps[self.name].plugs or []):
                raise ValueError(f"app {self.name!r} must use the 'platform' plug")

        return self

    @classmethod
    def unmarshal(cls, data: Dict[str, Any]) -> "SnapManifest":
        """Create and populate a new ``SnapManifest`` object from dictionary data.

        :param data: The dictionary data to unmarshal.
        :return: The newly created object.
        :raise TypeError: If data is not a dictionary.
        """
        if not isinstance(data, dict):
            raise TypeError("data is not a dictionary")

        return cls(**data)

    @property
    def app(self) -> ManifestApp:
        """The single app entry."""
        return self.apps[self.name]

    def marshal(self) -> Dict[str, Any]:
        """Return the manifest as snapcraft.yaml data, without unset keys."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_yaml(self) -> str:
        """Serialize the manifest, wrapping long lines."""
        return yaml.dump(
            self.marshal(),
            Dumper=_ManifestDumper,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=const.MANIFEST_LINE_WIDTH,
        )


class _ManifestDumper(yaml.SafeDumper):
    pass


def _repr_str(dumper, data):
    """Multi-line string representer for the YAML dumper."""
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


_ManifestDumper.add_representer(str, _repr_str)


def write(manifest: SnapManifest, directory: Path) -> Path:
    """Create a snapcraft.yaml file.

    :param manifest: The manifest to serialize.
    :param directory: The staging directory to write to.

    :returns: The path to the written file.
    """
    snapcraft_yaml = directory / const.MANIFEST_FILENAME
    emit.debug(f"Writing {str(snapcraft_yaml)!r}")
    snapcraft_yaml.write_text(manifest.to_yaml(), encoding="utf-8")
    return snapcraft_yaml


def read(snapcraft_yaml: Path) -> SnapManifest:
    """Read a snapcraft.yaml file written by :func:`write`.

    :param snapcraft_yaml: The manifest file.
    :return: The populated manifest.
    """
    try:
        with snapcraft_yaml.open(encoding="utf-8") as file:
            data = yaml.safe_load(file)
    except OSError as error:
        raise errors.SnapTargetError(f"Cannot read snap manifest: {error}") from error

    return SnapManifest.unmarshal(data)
