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

import pytest

from snaptarget.packager import AppInfo, LinuxPackager


@pytest.fixture
def app_info():
    return AppInfo(
        name="myapp",
        version="1.2.3",
        product_name="My App",
        description="A test application",
    )


@pytest.fixture
def make_packager(new_dir, app_info):
    """Return a factory for packagers rooted in the test directory."""

    def _make_packager(*, snap=None, linux=None, **kwargs) -> LinuxPackager:
        config = {}
        if snap is not None:
            config["snap"] = snap
        return LinuxPackager(
            app_info=kwargs.pop("app_info", app_info),
            executable_name=kwargs.pop("executable_name", "myapp"),
            project_dir=Path(new_dir),
            config=config,
            platform_options=linux or {},
            icon_dir=Path(new_dir, "build", "icons"),
            **kwargs,
        )

    yield _make_packager


@pytest.fixture
def app_out_dir(new_dir):
    """Create an unpacked application directory in dist/."""
    app_dir = Path(new_dir, "dist", "linux-unpacked")
    app_dir.mkdir(parents=True)
    (app_dir / "myapp").write_text("#!/bin/sh\n")
    yield app_dir


@pytest.fixture
def out_dir(app_out_dir):
    yield app_out_dir.parent


@pytest.fixture
def icons(new_dir):
    """Create application icons of several sizes."""
    icon_dir = Path(new_dir, "build", "icons")
    icon_dir.mkdir(parents=True)
    for size in (16, 256, 64):
        (icon_dir / f"{size}x{size}.png").write_bytes(f"png-{size}".encode())
    yield icon_dir
