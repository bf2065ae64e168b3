"""Writers that dump analysis results: points-to sets, dynamic calls, contexts."""

from __future__ import annotations

import enum
import sys
from collections import Counter
from contextlib import contextmanager
from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Collection,
    Hashable,
    Iterable,
    Iterator,
    Mapping,
    Optional,
    TextIO,
    Union,
)

_TOP_CALLED = 100


class CallType(enum.Enum):
    """How a call site dispatches to its callees."""

    STATIC_DISPATCH = "static_dispatch"
    DYNAMIC_DISPATCH = "dynamic_dispatch"
    FN_PTR = "fn_ptr"
    DYNAMIC_FN_TRAIT = "dynamic_fn_trait"


@dataclass(frozen=True)
class CallSite:
    """A call site: the calling function and the location inside it."""

    func: Hashable
    location: Hashable


@dataclass(frozen=True)
class CallEdge:
    """A call-graph edge from a caller to a callee through a call site."""

    callsite: Any
    caller: Any
    callee: Any


def _debug(value: Any) -> str:
    """Format a value for a debug listing; strings are double-quoted."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        escaped = (
            value.replace("\\", "\\\\")
            .replace('"', '\\"')
            .replace("\n", "\\n")
            .replace("\t", "\\t")
        )
        return f'"{escaped}"'
    return repr(value)


def _func_id(func: Any) -> Hashable:
    return getattr(func, "func_id", func)


def _base_callsite(callsite: Any) -> Hashable:
    return getattr(callsite, "base", callsite)


@contextmanager
def open_output(path: Union[str, TextIO]) -> Iterator[TextIO]:
    """Yield a text stream for ``path``; ``"stdout"`` means standard output.

    An already open stream is passed through untouched.
    """
    if not isinstance(path, str):
        yield path
        return
    if path == "stdout":
        yield sys.stdout
        sys.stdout.flush()
        return
    with open(path, "w", encoding="utf-8") as handle:
        yield handle


def to_ci_call_graph(edges: Iterable[CallEdge]) -> list[CallEdge]:
    """Project edges onto functions and base call sites, dropping contexts.

    A caller or callee exposing ``func_id`` is replaced by it; a call site
    exposing ``base`` is replaced by it. Duplicate edges are kept once, in
    the order they first appear.
    """
    seen: dict[CallEdge, None] = {}
    for edge in edges:
        ci_edge = CallEdge(
            _base_callsite(edge.callsite), _func_id(edge.caller), _func_id(edge.callee)
        )
        seen.setdefault(ci_edge, None)
    return list(seen)


def dump_pts(
    pts_map: Mapping[Hashable, Collection[Hashable]],
    node_path: Callable[[Hashable], Any],
    out: Union[str, TextIO],
) -> None:
    """Write every non-empty points-to set, one pointer per line."""
    with open_output(out) as stream:
        for node, pts in pts_map.items():
            if not pts:
                continue
            pointees = "".join(f"{_debug(node_path(p))} " for p in pts)
            stream.write(f"{_debug(node_path(node))} ==> {{ {pointees}}}\n")


def dump_ci_pts(
    pts_map: Mapping[Hashable, Collection[Hashable]],
    node_value: Callable[[Hashable], Hashable],
    func_of: Callable[[Hashable], Optional[Hashable]],
    func_name: Callable[[Hashable], str],
    out: Union[str, TextIO],
) -> None:
    """Write points-to sets without contexts, grouped by owning function.

    ``node_value`` gives a node's context-free path and ``func_of`` the
    function that path belongs to, or None for paths outside any function.
    Functions are written in ascending order of their ids.
    """
    grouped: dict[Hashable, dict[Hashable, dict[Hashable, None]]] = {}
    for node, pts in pts_map.items():
        if not pts:
            continue
        value = node_value(node)
        func_id = func_of(value)
        if func_id is None:
            continue
        targets = grouped.setdefault(func_id, {}).setdefault(value, {})
        for pointee in pts:
            targets.setdefault(node_value(pointee), None)

    with open_output(out) as stream:
        for func_id in sorted(grouped):
            stream.write(f"{_debug(func_id)} - {_debug(func_name(func_id))}\n")
            for pointer, pointees in grouped[func_id].items():
                listed = "".join(f"{_debug(p)} " for p in pointees)
                stream.write(f"\t{_debug(pointer)} ({len(pointees)}) ==> {{ {listed}}}\n")


def group_dyn_calls(
    edges: Iterable[CallEdge],
    callsite_types: Mapping[Hashable, CallType],
) -> dict[CallType, dict[Hashable, set[Hashable]]]:
    """Collect callees of dynamically dispatched call sites, by kind of call.

    Every call site must have a type in ``callsite_types``; static call
    sites are left out.
    """
    groups: dict[CallType, dict[Hashable, set[Hashable]]] = {
        CallType.DYNAMIC_DISPATCH: {},
        CallType.FN_PTR: {},
        CallType.DYNAMIC_FN_TRAIT: {},
    }
    for edge in edges:
        callsite = _base_callsite(edge.callsite)
        call_type = callsite_types[callsite]
        bucket = groups.get(call_type)
        if bucket is not None:
            bucket.setdefault(callsite, set()).add(_func_id(edge.callee))
    return groups


_DYN_HEADERS = (
    (CallType.DYNAMIC_DISPATCH, "#Dynamic dispatch calls:\n"),
    (CallType.FN_PTR, "#Fnptr calls:\n"),
    (CallType.DYNAMIC_FN_TRAIT, "#Dynamic Fn* Trait calls:\n"),
)


def dump_dyn_calls(
    edges: Iterable[CallEdge],
    callsite_types: Mapping[Hashable, CallType],
    func_name: Callable[[Hashable], str],
    out: Union[str, TextIO],
) -> None:
    """Write resolved dynamic call sites together with their callees."""
    groups = group_dyn_calls(edges, callsite_types)
    with open_output(out) as stream:
        for call_type, header in _DYN_HEADERS:
            stream.write(header)
            for callsite, callees in groups[call_type].items():
                stream.write(
                    f"\tcallsite: {_debug(func_name(callsite.func))}, "
                    f"{_debug(callsite.location)}, callee: \n"
                )
                for callee in callees:
                    stream.write(f"\t\t{_debug(func_name(callee))}\n")


def dump_func_contexts(
    reach_funcs: Iterable[tuple[Hashable, Hashable]],
    func_name: Callable[[Hashable], str],
    describe: Callable[[Hashable], tuple[bool, bool]],
    out: Union[str, TextIO],
) -> None:
    """Write each reachable function with the contexts it is analysed under.

    ``reach_funcs`` yields ``(func_id, context)`` pairs; ``describe`` tells
    whether a function takes ``self`` and whether that ``self`` is a
    reference. Functions with fewer contexts come first.
    """
    func_ctxts: dict[Hashable, dict[Hashable, None]] = {}
    for func_id, context in reach_funcs:
        func_ctxts.setdefault(func_id, {}).setdefault(context, None)

    with open_output(out) as stream:
        for func_id, ctxts in sorted(func_ctxts.items(), key=lambda item: len(item[1])):
            has_self, has_self_ref = describe(func_id)
            stream.write(
                f"{_debug(func_name(func_id))}, has_self_param: {_debug(has_self)}, "
                f"has_self_ref_param: {_debug(has_self_ref)}, #ctxts: {len(ctxts)} \n"
            )
            stream.write("\t{" + ", ".join(_debug(c) for c in ctxts) + "}\n")


def dump_most_called_funcs(
    edges: Iterable[CallEdge],
    func_name: Callable[[Hashable], str],
    out: Union[str, TextIO],
) -> None:
    """Write the hundred functions that are the target of the most call edges."""
    counts = Counter(_func_id(edge.callee) for edge in edges)
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    with open_output(out) as stream:
        stream.write("Top-100 called functions: \n")
        for func_id, called in ranked[:_TOP_CALLED]:
            stream.write(f"\t{_debug(func_name(func_id))}: {called}\n")