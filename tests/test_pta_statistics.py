import io
import math

from ptautil.pta_statistics import (
    PointsToStats,
    context_insensitive_pts,
    dump_andersen_stats,
    dump_context_sensitive_stats,
    format_stats,
    points_to_stats,
)

RULE = "#" * 58 + "\n"
SEP = "-" * 58 + "\n"


def test_points_to_stats_counts():
    stats = points_to_stats({"a": {"x", "y"}, "b": {"x"}})
    assert stats == PointsToStats(num_pointers=2, num_relations=3)
    assert stats.average == 3 / 2


def test_empty_map_average_is_nan():
    stats = points_to_stats({})
    assert stats.num_pointers == 0
    assert math.isnan(stats.average)
    assert "#Avg points-to size: NaN\n" in format_stats("T", stats)


def test_format_stats_exact():
    text = format_stats("Points-to Statistics", PointsToStats(2, 3))
    assert text == (
        "Points-to Statistics: \n"
        "#Pointers: 2\n"
        "#Points-to relations: 3\n"
        "#Avg points-to size: 1.5\n"
    )


def test_format_stats_whole_average_has_no_fraction():
    text = format_stats("X", PointsToStats(2, 4))
    assert text.endswith("#Avg points-to size: 2\n")


def test_context_insensitive_merges_contexts():
    cs = {("p", 1): [("o", 1)], ("p", 2): [("o", 2), ("q", 2)]}
    merged = context_insensitive_pts(cs, lambda node: node[0])
    assert merged == {"p": {"o", "q"}}


def test_dump_andersen_stats_layout():
    out = io.StringIO()
    pts = {"a": ["x"]}
    dump_andersen_stats(pts, out, "CG REPORT\n")
    expected = RULE + "CG REPORT\n" + SEP + format_stats("Points-to Statistics", points_to_stats(pts)) + RULE
    assert out.getvalue() == expected


def test_dump_context_sensitive_stats_has_both_blocks():
    out = io.StringIO()
    cs = {("p", 1): [("o", 1)], ("p", 2): [("o", 2)]}
    dump_context_sensitive_stats(cs, lambda node: node[0], out)
    text = out.getvalue()
    assert text.startswith(RULE + SEP + "CS Points-to Statistics: \n")
    cs_block, ci_block = text.split("CI Points-to Statistics: \n")
    assert "#Pointers: 2\n" in cs_block
    assert "#Pointers: 1\n" in ci_block
    assert "#Points-to relations: 1\n" in ci_block
    assert text.endswith(RULE)