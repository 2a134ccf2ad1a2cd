"""Static package metadata surfaced by the CLI banner.

Keep these values in sync with ``pyproject.toml`` when releasing.
"""

from __future__ import annotations

from typing import Callable

name = "lib_leaky_bucket"
title = "Immutable per-identity leaky-bucket admission control"
version = "0.1.0"
shell_command = "lib_leaky_bucket"


def print_info(writer: Callable[[str], object] | None = None) -> None:
    """Write the metadata banner using ``writer`` (defaults to stdout).

    Examples
    --------
    >>> print_info()  # doctest: +ELLIPSIS
    Info for lib_leaky_bucket:
    ...
    """

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    text = "\n".join(lines) + "\n"
    if writer is None:
        print(text, end="")
    else:
        writer(text)
