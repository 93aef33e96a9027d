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

import argparse
import os
from pathlib import Path

import pytest
from craft_cli import ArgumentParsingError, EmitterMode

from snaptarget import __version__, cli, errors
from snaptarget.manifest import SnapManifest


@pytest.fixture
def project(new_dir, app_out_dir):
    Path(new_dir, "snaptarget.yaml").write_text(
        "name: myapp\nproductName: My App\nversion: 1.2.3\n"
    )
    yield Path(new_dir)


def _parse(command, argv):
    parser = argparse.ArgumentParser()
    command.fill_parser(parser)
    return parser.parse_args(argv)


def test_pack(mocker, project, app_out_dir, emitter):
    mocker.patch("snaptarget.runners.is_docker_required", return_value=False)
    mock_run = mocker.patch(
        "snaptarget.runners.NativeRunner.run",
        return_value=project / "dist" / "myapp_1.2.3_amd64.snap",
    )
    command = cli.PackCommand(None)

    command.run(_parse(command, [str(app_out_dir)]))

    mock_run.assert_called_once_with(
        snap_dir=app_out_dir.with_name("linux-unpacked-snap"),
        out_dir=(project / "dist").resolve(),
        snap_name="myapp_1.2.3_amd64.snap",
        linux_arch="amd64",
    )
    emitter.assert_message("Packed myapp_1.2.3_amd64.snap")


def test_pack_arch_and_output(mocker, project, app_out_dir):
    mocker.patch("snaptarget.runners.is_docker_required", return_value=False)
    mock_run = mocker.patch(
        "snaptarget.runners.NativeRunner.run",
        return_value=project / "out" / "myapp_1.2.3_arm64.snap",
    )
    command = cli.PackCommand(None)

    command.run(
        _parse(command, [str(app_out_dir), "--arch", "arm64", "--output", "out"])
    )

    assert Path(project, "out").is_dir()
    assert mock_run.call_args.kwargs["snap_name"] == "myapp_1.2.3_arm64.snap"
    assert mock_run.call_args.kwargs["linux_arch"] == "arm64"
    assert mock_run.call_args.kwargs["out_dir"] == (project / "out").resolve()
    assert mock_run.call_args.kwargs["out_dir"].is_absolute()


def test_pack_relative_paths(mocker, project, app_out_dir):
    mocker.patch("snaptarget.runners.is_docker_required", return_value=False)
    mock_run = mocker.patch(
        "snaptarget.runners.NativeRunner.run",
        return_value=project / "out" / "myapp_1.2.3_amd64.snap",
    )
    command = cli.PackCommand(None)

    command.run(_parse(command, ["dist/linux-unpacked", "--output", "out"]))

    mock_run.assert_called_once_with(
        snap_dir=app_out_dir.resolve().with_name("linux-unpacked-snap"),
        out_dir=(project / "out").resolve(),
        snap_name="myapp_1.2.3_amd64.snap",
        linux_arch="amd64",
    )


def test_pack_dry_run(mocker, project, app_out_dir):
    mock_print = mocker.patch("snaptarget.cli._print_manifest", return_value=True)
    mock_run = mocker.patch("snaptarget.runners.NativeRunner.run")
    mocker.patch("snaptarget.runners.is_docker_required", return_value=False)
    command = cli.PackCommand(None)

    command.run(_parse(command, [str(app_out_dir), "--dry-run"]))

    mock_print.assert_called_once()
    assert isinstance(mock_print.call_args.args[0], SnapManifest)
    mock_run.assert_not_called()
    assert not (app_out_dir.with_name("linux-unpacked-snap") / "snapcraft.yaml").exists()


def test_pack_invalid_arch(project, app_out_dir):
    command = cli.PackCommand(None)

    with pytest.raises(errors.InvalidArchitecture):
        command.run(_parse(command, [str(app_out_dir), "--arch", "sparc"]))


def test_pack_no_config(new_dir, app_out_dir):
    command = cli.PackCommand(None)

    with pytest.raises(errors.ConfigError):
        command.run(_parse(command, [str(app_out_dir)]))


def test_print_manifest(emitter):
    snap_manifest = SnapManifest(
        name="myapp",
        version="1.2.3",
        summary="My App",
        description="",
        apps={"myapp": {"command": "desktop-launch $SNAP/myapp"}},
        parts={"app": {"source": "/out/linux-unpacked"}},
    )

    assert cli._print_manifest(snap_manifest) is True
    emitter.assert_message(snap_manifest.to_yaml())


def test_version_command(emitter):
    cli.VersionCommand(None).run(argparse.Namespace())

    emitter.assert_message(f"snaptarget {__version__}")


@pytest.mark.parametrize(
    "isatty,env,expected",
    [
        (True, None, EmitterMode.BRIEF),
        (False, None, EmitterMode.VERBOSE),
        (True, "debug", EmitterMode.DEBUG),
        (False, "QUIET", EmitterMode.QUIET),
    ],
)
def test_get_verbosity(mocker, isatty, env, expected):
    mocker.patch("sys.stdin.isatty", return_value=isatty)
    environ = {"SNAPTARGET_VERBOSITY_LEVEL": env} if env else {}
    mocker.patch.dict(os.environ, environ, clear=True)

    assert cli.get_verbosity() == expected


def test_get_verbosity_invalid(mocker):
    mocker.patch.dict(os.environ, {"SNAPTARGET_VERBOSITY_LEVEL": "loud"})

    with pytest.raises(ArgumentParsingError) as raised:
        cli.get_verbosity()

    assert "cannot parse verbosity level 'loud'" in str(raised.value)


def test_get_dispatcher():
    dispatcher = cli.get_dispatcher()

    assert set(dispatcher.commands) == {"pack", "version"}
