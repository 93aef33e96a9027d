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

"""Utilities for snaptarget."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Sequence

from snaptarget.const import DEFAULT_SENTINEL


def replace_default(
    in_list: Sequence[str] | None, default_list: Sequence[str]
) -> list[str]:
    """Resolve a user-supplied list against a built-in default list.

    - If ``in_list`` is None, the default list is used.
    - If ``in_list`` contains ``"default"``, the default list is spliced in
      at that position, keeping the entries before and after it.
    - Otherwise ``in_list`` is used as is.

    :param in_list: The user-supplied list, if any.
    :param default_list: The built-in default entries.

    :returns: A new list with the effective entries.
    """
    if in_list is None:
        return list(default_list)

    entries = list(in_list)
    try:
        index = entries.index(DEFAULT_SENTINEL)
    except ValueError:
        return entries

    return entries[:index] + list(default_list) + entries[index + 1 :]


def is_docker_required() -> bool:
    """Check if snapcraft must run in a container on this host."""
    return sys.platform != "linux"


def humanize_list(
    items: Iterable[str],
    conjunction: str,
    item_format: str = "{!r}",
    sort: bool = True,
) -> str:
    """Format a list into a human-readable string.

    :param items: list to humanize.
    :param conjunction: the conjunction used to join the final element to
                        the rest of the list (e.g. 'and').
    :param item_format: format string to use per item.
    :param sort: if true, sort the list.
    """
    if not items:
        return ""

    quoted_items = [item_format.format(item) for item in items]

    if sort:
        quoted_items = sorted(quoted_items)

    if len(quoted_items) == 1:
        return quoted_items[0]

    humanized = ", ".join(quoted_items[:-1])

    if len(quoted_items) > 2:
        humanized += ","

    return f"{humanized} {conjunction} {quoted_items[-1]}"
