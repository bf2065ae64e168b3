import pytest

from ptautil.options import AnalysisOptions, OptionsError, PTAType, make_options_parser


def test_defaults():
    opts = AnalysisOptions()
    assert opts.pta_type is PTAType.CALL_SITE_SENSITIVE
    assert opts.context_depth == 1
    assert opts.cast_constraint is True
    assert opts.dump_stats is True
    assert opts.entry_def_id is None


def test_known_options_without_separator():
    opts = AnalysisOptions()
    rest = opts.parse_from_args(
        ["--entry-func", "main", "--pta-type", "ander", "--context-depth", "2", "--dump-stats", "file.rs"],
        False,
    )
    assert rest == ["file.rs"]
    assert opts.entry_func == "main"
    assert opts.pta_type is PTAType.ANDERSEN
    assert opts.context_depth == 2
    assert opts.dump_stats is True


def test_unknown_argument_hands_everything_back():
    opts = AnalysisOptions()
    args = ["--edition=2021", "--dump-stats", "x.rs"]
    assert opts.parse_from_args(args, False) == args
    assert opts == AnalysisOptions()


def test_separator_splits_compiler_arguments():
    opts = AnalysisOptions()
    rest = opts.parse_from_args(["--dump-pts", "out.txt", "--", "-O", "x.rs"], False)
    assert rest == ["-O", "x.rs"]
    assert opts.pts_output == "out.txt"


def test_inputs_before_separator_are_appended():
    opts = AnalysisOptions()
    rest = opts.parse_from_args(["a.rs", "--", "--edition=2021"], False)
    assert rest == ["--edition=2021", "a.rs"]


def test_only_leftmost_separator_counts():
    opts = AnalysisOptions()
    rest = opts.parse_from_args(["--", "a", "--", "b"], True)
    assert rest == ["a", "--", "b"]


def test_flags_absent_turn_off_dump_stats():
    opts = AnalysisOptions()
    assert opts.parse_from_args([], True) == []
    assert opts.dump_stats is False
    assert opts.cast_constraint is True
    assert opts.pta_type is PTAType.CALL_SITE_SENSITIVE


def test_no_cast_constraint_and_hidden_outputs():
    opts = AnalysisOptions()
    opts.parse_from_args(
        ["--no-cast-constraint", "--dump-dyn-calls", "dyn.txt", "--dump-type-indices", "ti.txt"], True
    )
    assert opts.cast_constraint is False
    assert opts.dyn_calls_output == "dyn.txt"
    assert opts.type_indices_output == "ti.txt"


def test_output_options():
    opts = AnalysisOptions()
    opts.parse_from_args(
        ["--dump-call-graph", "cg.dot", "--dump-mir", "mir.txt", "--dump-unsafe-stats", "u.txt"], True
    )
    assert opts.call_graph_output == "cg.dot"
    assert opts.mir_output == "mir.txt"
    assert opts.unsafe_stat_output == "u.txt"
    assert opts.func_ctxts_output is None


def test_entry_id_parsed():
    opts = AnalysisOptions()
    opts.parse_from_args(["--entry-id", "42"], True)
    assert opts.entry_def_id == 42


@pytest.mark.parametrize("value", ["abc", "4294967296", " 1"])
def test_entry_id_rejects_bad_values(value):
    with pytest.raises(OptionsError) as info:
        AnalysisOptions().parse_from_args(["--entry-id", value], True)
    assert info.value.kind == "invalid_value"


def test_invalid_pta_type_raises_even_without_separator():
    with pytest.raises(OptionsError) as info:
        AnalysisOptions().parse_from_args(["--pta-type", "bogus"], False)
    assert info.value.kind == "invalid_value"


def test_unknown_argument_from_env_raises():
    with pytest.raises(OptionsError) as info:
        AnalysisOptions().parse_from_args(["--bogus"], True)
    assert info.value.kind == "unknown_argument"


def test_unknown_argument_before_separator_raises():
    with pytest.raises(OptionsError) as info:
        AnalysisOptions().parse_from_args(["--bogus", "--", "x.rs"], False)
    assert info.value.kind == "unknown_argument"


def test_help_prints_and_returns_args(capsys):
    args = ["--help"]
    assert AnalysisOptions().parse_from_args(args, False) == args
    assert "--entry-func" in capsys.readouterr().err


def test_version_raises():
    with pytest.raises(OptionsError) as info:
        AnalysisOptions().parse_from_args(["--version"], False)
    assert info.value.kind == "version"


def test_interleaved_inputs():
    opts = AnalysisOptions()
    rest = opts.parse_from_args(["a.rs", "--dump-stats", "b.rs"], True)
    assert rest == ["a.rs", "b.rs"]
    assert opts.dump_stats is True


def test_help_hides_hidden_options():
    text = make_options_parser().format_help()
    assert "--dump-stats" in text
    assert "--no-cast-constraint" not in text
    assert "--dump-dyn-calls" not in text
    assert "pta [OPTIONS] INPUT -- [RUSTC OPTIONS]" in text