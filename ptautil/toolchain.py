"""Helpers for locating the compiler toolchain and classifying crates."""

from __future__ import annotations

import os
from typing import Mapping, Optional

_STD_CRATES = frozenset({"alloc", "core", "std"})


class SysrootNotFound(RuntimeError):
    """Raised when no toolchain sysroot can be determined."""


def find_sysroot(env: Optional[Mapping[str, str]] = None) -> str:
    """Return the toolchain sysroot.

    ``RUSTUP_HOME`` together with ``RUSTUP_TOOLCHAIN`` takes precedence;
    otherwise ``RUST_SYSROOT`` is used.
    """
    if env is None:
        env = os.environ
    home = env.get("RUSTUP_HOME")
    toolchain = env.get("RUSTUP_TOOLCHAIN")
    if home is not None and toolchain is not None:
        return f"{home}/toolchains/{toolchain}"
    sysroot = env.get("RUST_SYSROOT")
    if sysroot is None:
        raise SysrootNotFound(
            "Could not find sysroot. Specify the RUST_SYSROOT environment variable, "
            "or use rustup to set the compiler to use"
        )
    return sysroot


def is_std_lib_crate(crate_name: str) -> bool:
    """Return True if the crate belongs to the standard library."""
    return crate_name in _STD_CRATES