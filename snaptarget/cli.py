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

"""Command-line application entry point."""

import argparse
import os
import sys
import textwrap
from pathlib import Path

import craft_cli
from craft_cli import (
    ArgumentParsingError,
    BaseCommand,
    EmitterMode,
    ProvideHelpException,
    emit,
)

from snaptarget import __version__, config, utils
from snaptarget.const import Arch
from snaptarget.desktop import LinuxTargetHelper
from snaptarget.errors import SnapTargetError
from snaptarget.manifest import SnapManifest
from snaptarget.target import SnapTarget


def _print_manifest(snap_manifest: SnapManifest) -> bool:
    emit.message(snap_manifest.to_yaml())
    return True


class PackCommand(BaseCommand):
    """Build a snap from an unpacked application."""

    name = "pack"
    help_msg = "Build a snap from an unpacked application directory"
    overview = textwrap.dedent(
        """
        Build a snap package from an unpacked application directory.

        Metadata is read from the project configuration file. The snap is
        written to the configured output directory as
        ``<executable>_<version>_<arch>.snap``.

        On hosts other than Linux snapcraft runs in a docker container.
        """
    )

    def fill_parser(self, parser: "argparse.ArgumentParser") -> None:
        parser.add_argument(
            "app_dir",
            metavar="app-dir",
            type=Path,
            help="Unpacked application directory",
        )
        parser.add_argument(
            "--arch",
            default=Arch.x64.value,
            help="Architecture the application was built for (default: x64)",
        )
        parser.add_argument(
            "--project-dir",
            type=Path,
            default=Path("."),
            help="Project directory (default: current directory)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            default=None,
            help="Project configuration file",
        )
        parser.add_argument(
            "--output",
            type=Path,
            default=None,
            help="Directory to write the snap to",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Print the snapcraft.yaml instead of building the snap",
        )

    def run(self, parsed_args: argparse.Namespace) -> None:
        """Run the command."""
        project_dir = parsed_args.project_dir.resolve()
        config_path = parsed_args.config or config.find_config(project_dir)
        project = config.load_project(config_path)

        packager = config.create_packager(project, project_dir)
        if parsed_args.dry_run:
            packager.effective_option_computed = _print_manifest

        if parsed_args.output is not None:
            out_dir = parsed_args.output.resolve()
        else:
            out_dir = config.get_output_dir(project, project_dir)
        out_dir.mkdir(parents=True, exist_ok=True)

        target = SnapTarget(packager, LinuxTargetHelper(packager), out_dir)
        artifact = target.build(parsed_args.app_dir.resolve(), Arch.from_name(parsed_args.arch))
        if artifact is not None:
            emit.message(f"Packed {artifact.file.name}")


class VersionCommand(BaseCommand):
    """Show the snaptarget version."""

    name = "version"
    help_msg = "Show the application version and exit"
    overview = "Show the application version and exit"
    common = True

    def run(self, parsed_args: argparse.Namespace) -> None:
        """Run the command."""
        emit.message(f"snaptarget {__version__}")


COMMAND_GROUPS = [
    craft_cli.CommandGroup("Lifecycle", [PackCommand]),
    craft_cli.CommandGroup("Other", [VersionCommand]),
]


def get_verbosity() -> EmitterMode:
    """Return the verbosity level to use.

    If stdin is closed, the default verbosity will be set to
    EmitterMode.VERBOSE. SNAPTARGET_VERBOSITY_LEVEL overrides it.
    """
    verbosity = EmitterMode.BRIEF

    if not sys.stdin.isatty():
        verbosity = EmitterMode.VERBOSE

    verbosity_env = os.getenv("SNAPTARGET_VERBOSITY_LEVEL")
    if verbosity_env:
        try:
            verbosity = EmitterMode[verbosity_env.strip().upper()]
        except KeyError:
            values = utils.humanize_list(
                [e.name.lower() for e in EmitterMode], "and", sort=False
            )
            raise ArgumentParsingError(
                f"cannot parse verbosity level {verbosity_env!r} from environment "
                f"variable SNAPTARGET_VERBOSITY_LEVEL (valid values are {values})"
            ) from KeyError

    return verbosity


def get_dispatcher() -> craft_cli.Dispatcher:
    """Return an instance of Dispatcher."""
    return craft_cli.Dispatcher(
        "snaptarget",
        COMMAND_GROUPS,
        summary="Build snap packages for desktop applications",
        default_command=PackCommand,
    )


def _emit_error(error, cause=None):
    """Emit the error in a centralized way so we can alter it consistently."""
    if cause is not None:
        error.__cause__ = cause

    emit.error(error)


def run() -> int:
    """Run the CLI."""
    try:
        verbosity = get_verbosity()
    except ArgumentParsingError as err:
        print(err, file=sys.stderr)
        return 1

    emit.init(verbosity, "snaptarget", f"Starting snaptarget {__version__}")
    dispatcher = get_dispatcher()
    retcode = 1

    try:
        dispatcher.pre_parse_args(sys.argv[1:])
        dispatcher.load_command(None)
        dispatcher.run()
        emit.ended_ok()
        retcode = 0
    except ArgumentParsingError as err:
        print(err, file=sys.stderr)  # to stderr, as argparse normally does
        emit.ended_ok()
        retcode = 1
    except ProvideHelpException as err:
        print(err, file=sys.stderr)  # to stderr, as argparse normally does
        emit.ended_ok()
        retcode = 0
    except KeyboardInterrupt as err:
        _emit_error(craft_cli.CraftError("Interrupted."), cause=err)
        retcode = 1
    except SnapTargetError as err:
        _emit_error(err)
        retcode = 1
    except craft_cli.CraftError as err:
        _emit_error(err)
        retcode = 1

    return retcode
