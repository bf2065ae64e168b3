import pytest

from ptautil.toolchain import SysrootNotFound, find_sysroot, is_std_lib_crate


def test_rustup_variables_take_precedence():
    env = {
        "RUSTUP_HOME": "/opt/rustup",
        "RUSTUP_TOOLCHAIN": "nightly",
        "RUST_SYSROOT": "/elsewhere",
    }
    assert find_sysroot(env) == "/opt/rustup/toolchains/nightly"


def test_falls_back_to_rust_sysroot():
    env = {"RUSTUP_HOME": "/opt/rustup", "RUST_SYSROOT": "/usr/local/sysroot"}
    assert find_sysroot(env) == "/usr/local/sysroot"


def test_missing_everything_raises():
    with pytest.raises(SysrootNotFound, match="RUST_SYSROOT"):
        find_sysroot({"RUSTUP_TOOLCHAIN": "stable"})


def test_reads_process_environment(monkeypatch):
    monkeypatch.delenv("RUSTUP_HOME", raising=False)
    monkeypatch.delenv("RUSTUP_TOOLCHAIN", raising=False)
    monkeypatch.setenv("RUST_SYSROOT", "/tmp/sysroot")
    assert find_sysroot() == "/tmp/sysroot"


@pytest.mark.parametrize("name", ["alloc", "core", "std"])
def test_std_crates(name):
    assert is_std_lib_crate(name) is True


@pytest.mark.parametrize("name", ["proc_macro", "serde", "Std", ""])
def test_other_crates(name):
    assert is_std_lib_crate(name) is False