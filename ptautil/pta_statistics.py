"""Summary statistics over points-to results."""

from __future__ import annotations

import logging
import math
import sys
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Collection, Hashable, Mapping, Optional, TextIO

_log = logging.getLogger(__name__)

_RULE = "#" * 58 + "\n"
_SEPARATOR = "-" * 58 + "\n"


@dataclass(frozen=True)
class PointsToStats:
    """Counts of pointers and points-to relations."""

    num_pointers: int
    num_relations: int

    @property
    def average(self) -> float:
        """Average points-to set size; NaN when there are no pointers."""
        if self.num_pointers == 0:
            return math.nan
        return self.num_relations / self.num_pointers


def _format_float(value: float) -> str:
    """Format a float without an exponent and without a redundant fraction."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def points_to_stats(pts_map: Mapping[Hashable, Collection[Hashable]]) -> PointsToStats:
    """Count the pointers in ``pts_map`` and the relations they take part in."""
    return PointsToStats(
        num_pointers=len(pts_map),
        num_relations=sum(len(pts) for pts in pts_map.values()),
    )


def context_insensitive_pts(
    cs_pts_map: Mapping[Hashable, Collection[Hashable]],
    node_path: Callable[[Hashable], Hashable],
) -> dict[Hashable, set[Hashable]]:
    """Merge context-sensitive points-to sets by their context-free paths.

    ``node_path`` maps a context-sensitive node to its context-free path.
    """
    merged: dict[Hashable, set[Hashable]] = {}
    for pointer, pts in cs_pts_map.items():
        target = merged.setdefault(node_path(pointer), set())
        target.update(node_path(pointee) for pointee in pts)
    return merged


def format_stats(title: str, stats: PointsToStats) -> str:
    """Render one block of points-to statistics."""
    return (
        f"{title}: \n"
        f"#Pointers: {stats.num_pointers}\n"
        f"#Points-to relations: {stats.num_relations}\n"
        f"#Avg points-to size: {_format_float(stats.average)}\n"
    )


def _write_report(out: Optional[TextIO], call_graph_report: Optional[str], body: str) -> None:
    stream = out if out is not None else sys.stdout
    _log.info("Dumping pta statistics...")
    stream.write(_RULE)
    if call_graph_report:
        stream.write(call_graph_report)
    stream.write(_SEPARATOR)
    stream.write(body)
    stream.write(_RULE)
    stream.flush()


def dump_andersen_stats(
    pts_map: Mapping[Hashable, Collection[Hashable]],
    out: Optional[TextIO] = None,
    call_graph_report: Optional[str] = None,
) -> None:
    """Write call-graph and points-to statistics of a context-insensitive analysis."""
    body = format_stats("Points-to Statistics", points_to_stats(pts_map))
    _write_report(out, call_graph_report, body)


def dump_context_sensitive_stats(
    cs_pts_map: Mapping[Hashable, Collection[Hashable]],
    node_path: Callable[[Hashable], Hashable],
    out: Optional[TextIO] = None,
    call_graph_report: Optional[str] = None,
) -> None:
    """Write statistics of a context-sensitive analysis, with and without contexts."""
    cs_stats = points_to_stats(cs_pts_map)
    ci_stats = points_to_stats(context_insensitive_pts(cs_pts_map, node_path))
    body = format_stats("CS Points-to Statistics", cs_stats) + format_stats(
        "CI Points-to Statistics", ci_stats
    )
    _write_report(out, call_graph_report, body)