"""Statistics about unsafe functions among the reachable functions."""

from __future__ import annotations

import enum
import sys
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Hashable, Iterable, Iterator, Mapping, TextIO, Union

_SEPARATOR = "-" * 58 + "\n"
_LIBRARY_CRATES = frozenset({"alloc", "std", "core"})


class UnsafeSource(enum.Enum):
    """Where an unsafe block comes from."""

    USER_PROVIDED = "user_provided"
    COMPILER_GENERATED = "compiler_generated"


@dataclass(frozen=True)
class FunctionInfo:
    """What is known about one function instance."""

    def_id: Hashable
    crate_name: str
    declared_unsafe: bool = False
    unsafe_blocks: tuple[UnsafeSource, ...] = ()


def is_library_crate(crate_name: str) -> bool:
    """Return True for the standard library crates."""
    return crate_name in _LIBRARY_CRATES


@contextmanager
def _output(out: Union[str, TextIO]) -> Iterator[TextIO]:
    if isinstance(out, str):
        if out == "stdout":
            yield sys.stdout
            sys.stdout.flush()
        else:
            with open(out, "w", encoding="utf-8") as handle:
                yield handle
    else:
        yield out


class UnsafeStat:
    """Classifies reachable functions as explicitly or possibly unsafe."""

    def __init__(
        self,
        functions: Mapping[Hashable, FunctionInfo],
        call_edges: Iterable[tuple[Hashable, Hashable]],
        reach_funcs: Iterable[Hashable],
        exclude_unsafe_std: bool = True,
    ) -> None:
        self.functions = functions
        self.exclude_unsafe_std = exclude_unsafe_std
        self.caller_to_callees: dict[Hashable, set[Hashable]] = {}
        self.callee_to_callers: dict[Hashable, set[Hashable]] = {}
        for caller, callee in call_edges:
            self.caller_to_callees.setdefault(caller, set()).add(callee)
            self.callee_to_callers.setdefault(callee, set()).add(caller)
        self.reach_funcs = list(reach_funcs)

    def _excluded(self, func_id: Hashable) -> bool:
        return self.exclude_unsafe_std and is_library_crate(self.functions[func_id].crate_name)

    def collect_explicit_unsafe_functions(self, conservative: bool) -> set[Hashable]:
        """Functions declared unsafe or containing an unsafe block.

        Unless ``conservative``, compiler-generated unsafe blocks are ignored.
        """
        explicit: set[Hashable] = set()
        for func_id in self.reach_funcs:
            if self._excluded(func_id):
                continue
            info = self.functions[func_id]
            if info.declared_unsafe or any(
                conservative or source is UnsafeSource.USER_PROVIDED for source in info.unsafe_blocks
            ):
                explicit.add(func_id)
        return explicit

    def collect_possible_unsafe_functions(self, explicit: set[Hashable]) -> set[Hashable]:
        """Functions that transitively call an explicitly unsafe function."""
        possible: set[Hashable] = set()
        worklist = deque(explicit)
        while worklist:
            func = worklist.popleft()
            for caller in self.callee_to_callers.get(func, ()):
                if caller in explicit or self._excluded(caller):
                    continue
                if caller not in possible:
                    possible.add(caller)
                    worklist.append(caller)
        return possible

    def count_unsafe_functions(self, conservative: bool, out: TextIO) -> None:
        """Write unsafe-function counts overall and per crate."""
        explicit = self.collect_explicit_unsafe_functions(conservative)
        possible = self.collect_possible_unsafe_functions(explicit)
        explicit_defids = {self.functions[f].def_id for f in explicit}
        possible_defids = {self.functions[f].def_id for f in possible}

        crate_funcs: dict[str, dict[Hashable, None]] = {}
        crate_defids: dict[str, dict[Hashable, None]] = {}
        for func_id in self.reach_funcs:
            info = self.functions[func_id]
            crate_funcs.setdefault(info.crate_name, {})[func_id] = None
            crate_defids.setdefault(info.crate_name, {})[info.def_id] = None

        out.write(f"#Explicit unsafe funcids: {len(explicit)}, defids: {len(explicit_defids)}\n")
        out.write(f"#Possible unsafe funcids: {len(possible)}, defids: {len(possible_defids)}\n")

        for crate_name, defids in crate_defids.items():
            funcs = crate_funcs[crate_name]
            out.write(
                f'crate: "{crate_name}", num_all_funcids: {len(funcs)}, num_all_defids: {len(defids)}\n'
            )
            for label, func_set, defid_set in (
                ("explicit", explicit, explicit_defids),
                ("possible", possible, possible_defids),
            ):
                crate_unsafe_funcs = [f for f in funcs if f in func_set]
                crate_unsafe_defids = [d for d in defids if d in defid_set]
                out.write(
                    f"\t{label} unsafe funcids: {len(crate_unsafe_funcs)}, "
                    f"defids: {len(crate_unsafe_defids)}\n"
                )
                for defid in crate_unsafe_defids:
                    out.write(f"\t\t{defid}\n")

    def dump_unsafe_functions(self, out: Union[str, TextIO]) -> None:
        """Write conservative and optimistic results to a stream or path ("stdout" allowed)."""
        with _output(out) as stream:
            stream.write(
                "Conservative results (Both compiler-generated unsafety & user-provided "
                "unsafety included): \n"
            )
            self.count_unsafe_functions(True, stream)
            stream.write(_SEPARATOR)
            stream.write("Optimistic results (Only user-provided unsafety included): \n")
            self.count_unsafe_functions(False, stream)