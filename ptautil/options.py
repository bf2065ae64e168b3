"""Command-line options of the pointer analysis."""

from __future__ import annotations

import argparse
import enum
import re
import sys
from dataclasses import dataclass
from typing import Optional, Sequence

_USAGE = "pta [OPTIONS] INPUT -- [RUSTC OPTIONS]"
_PROG = "pta"
_VERSION = "v0.1.0"
_U32_MAX = 2**32 - 1
_U32_RE = re.compile(r"\+?\d+", re.ASCII)


class PTAType(enum.Enum):
    """The kind of pointer analysis to run."""

    ANDERSEN = "andersen"
    CALL_SITE_SENSITIVE = "callsite-sensitive"


_PTA_TYPES = {
    "andersen": PTAType.ANDERSEN,
    "ander": PTAType.ANDERSEN,
    "callsite-sensitive": PTAType.CALL_SITE_SENSITIVE,
    "cs": PTAType.CALL_SITE_SENSITIVE,
}


class OptionsError(Exception):
    """Raised when the analysis options cannot be parsed.

    ``kind`` is one of ``"help"``, ``"version"``, ``"unknown_argument"``
    or ``"invalid_value"``.
    """

    def __init__(self, kind: str, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


def _u32(text: str) -> int:
    if _U32_RE.fullmatch(text) is None or int(text) > _U32_MAX:
        raise argparse.ArgumentTypeError(f"invalid unsigned 32-bit value: {text!r}")
    return int(text)


class _HelpAction(argparse.Action):
    def __init__(self, option_strings, dest=argparse.SUPPRESS, default=argparse.SUPPRESS, help=None):
        super().__init__(option_strings, dest=dest, default=default, nargs=0, help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        raise OptionsError("help", parser.format_help())


class _VersionAction(argparse.Action):
    def __init__(self, option_strings, dest=argparse.SUPPRESS, default=argparse.SUPPRESS, help=None):
        super().__init__(option_strings, dest=dest, default=default, nargs=0, help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        raise OptionsError("version", f"{parser.prog} {_VERSION}")


class _Parser(argparse.ArgumentParser):
    def error(self, message: str):  # type: ignore[override]
        kind = "unknown_argument" if message.startswith("unrecognized arguments") else "invalid_value"
        raise OptionsError(kind, f"{self.prog}: error: {message}")


def make_options_parser() -> argparse.ArgumentParser:
    """Build the parser for the analysis options."""
    parser = _Parser(prog=_PROG, usage=_USAGE, add_help=False, allow_abbrev=False)
    parser.add_argument("-h", "--help", action=_HelpAction, help="Print help information.")
    parser.add_argument("-V", "--version", action=_VersionAction, help="Print version information.")
    parser.add_argument(
        "--entry-func",
        dest="entry_func_name",
        help="The name of entry function from which the pointer analysis begins.",
    )
    parser.add_argument(
        "--entry-id",
        dest="entry_func_id",
        type=_u32,
        help="The def_id of entry function from which the pointer analysis begins.",
    )
    parser.add_argument(
        "--pta-type",
        dest="pta_type",
        choices=list(_PTA_TYPES),
        default="callsite-sensitive",
        help="The type of pointer analysis.",
    )
    parser.add_argument(
        "--context-depth",
        dest="context_depth",
        type=_u32,
        default=1,
        help="The context depth limit for a context-sensitive pointer analysis.",
    )
    parser.add_argument(
        "--no-cast-constraint", dest="no_cast_constraint", action="store_true", help=argparse.SUPPRESS
    )
    parser.add_argument(
        "--dump-stats", dest="dump_stats", action="store_true", help="Dump the statistics of the analysis results."
    )
    parser.add_argument(
        "--dump-call-graph", dest="call_graph_output", help="Dump the call graph in DOT format to the output file."
    )
    parser.add_argument("--dump-pts", dest="pts_output", help="Dump points-to results to the output file.")
    parser.add_argument(
        "--dump-mir", dest="mir_output", help="Dump the mir of reachable functions to the output file."
    )
    parser.add_argument(
        "--dump-unsafe-stats",
        dest="unsafe_stats_output",
        help="Dump the statistics of unsafe functions in the analyzed program.",
    )
    parser.add_argument("--dump-dyn-calls", dest="dyn_calls_output", help=argparse.SUPPRESS)
    parser.add_argument("--dump-type-indices", dest="type_indices_output", help=argparse.SUPPRESS)
    parser.add_argument("INPUT", nargs="*", help="The input file to be analyzed.")
    return parser


@dataclass
class AnalysisOptions:
    """Settings that control the analysis and what it writes out."""

    entry_func: str = ""
    entry_def_id: Optional[int] = None
    pta_type: PTAType = PTAType.CALL_SITE_SENSITIVE
    context_depth: int = 1
    cast_constraint: bool = True
    dump_stats: bool = True
    call_graph_output: Optional[str] = None
    pts_output: Optional[str] = None
    mir_output: Optional[str] = None
    type_indices_output: Optional[str] = None
    dyn_calls_output: Optional[str] = None
    unsafe_stat_output: Optional[str] = None
    func_ctxts_output: Optional[str] = None

    def parse_from_args(self, args: Sequence[str], from_env: bool) -> list[str]:
        """Parse options from ``args`` and return the arguments meant for the compiler.

        Everything after the leftmost ``--`` is returned, followed by any input
        files given before it. Without ``--`` and when not reading from the
        environment, arguments that are not analysis options are all handed
        back untouched.
        """
        args = list(args)
        try:
            separator = args.index("--")
        except ValueError:
            pta_args = args
            rustc_args_start = 0
        else:
            pta_args = args[:separator]
            rustc_args_start = separator + 1

        parser = make_options_parser()
        if not from_env and rustc_args_start == 0:
            # The arguments may have been meant for the compiler alone.
            try:
                ns = parser.parse_intermixed_args(pta_args)
            except OptionsError as err:
                if err.kind == "help":
                    print(err.message, file=sys.stderr)
                    return list(args)
                if err.kind == "unknown_argument":
                    return list(args)
                raise
            rustc_args_start = len(args)
        else:
            ns = parser.parse_intermixed_args(pta_args)
            if rustc_args_start == 0:
                rustc_args_start = len(args)

        if ns.entry_func_name is not None:
            self.entry_func = ns.entry_func_name
        self.entry_def_id = ns.entry_func_id
        self.pta_type = _PTA_TYPES[ns.pta_type]
        self.context_depth = ns.context_depth
        self.cast_constraint = not ns.no_cast_constraint
        self.dump_stats = ns.dump_stats
        self.call_graph_output = ns.call_graph_output
        self.pts_output = ns.pts_output
        self.mir_output = ns.mir_output
        self.unsafe_stat_output = ns.unsafe_stats_output
        self.dyn_calls_output = ns.dyn_calls_output
        self.type_indices_output = ns.type_indices_output

        return args[rustc_args_start:] + list(ns.INPUT)