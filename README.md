# ptautil

Helpers for building a pointer analysis and reporting on its results. The
package has no third-party dependencies and needs Python 3.10 or later.

## Modules

- `ptautil.dot`: `Graph` is a small directed or undirected graph. Its nodes
  and edges are numbered in insertion order. `Dot(graph, config=...)` renders
  it to Graphviz DOT text through `render()` or `str()`.
  - String weights are shown quoted, and you can pass your own `node_fmt` and
    `edge_fmt` callables.
  - `get_node_attributes` and `get_edge_attributes` add extra attribute text.
  - The `Config` flags are `NODE_INDEX_LABEL`, `EDGE_INDEX_LABEL`,
    `NODE_NO_LABEL`, `EDGE_NO_LABEL` and `GRAPH_CONTENT_ONLY`. They switch
    labels to indices, drop the labels, or leave out the surrounding
    `digraph { ... }`.
  - `escape` escapes a Graphviz label. Quotes and backslashes get a
    backslash, and a newline becomes the left-justified break `\l`.
- `ptautil.index_tree`: `IndexTree` is a tree held in one list and addressed
  by integer ids. The root has id 0.
  - Methods: `add_child`, `children`, `find_child`, `get`, `descendants` and
    `traverse`. `descendants` works in pre-order and leaves out the starting
    node. `traverse` yields `NodeEdge` values whose `kind` is an `EdgeKind`,
    either `START` or `END`.
  - `len(tree)` counts the nodes. `tree[id]` returns the `Node` and raises
    `IndexError` for an unknown id.
- `ptautil.mem_watcher`: reads `/proc/<pid>/statm` into a `Statm` record
  through `parse_statm`, `statm`, `statm_self` and `statm_task`.
  `parse_statm` raises `ValueError` on malformed input.
  - `MemoryWatcher` samples resident memory in a background thread. It can
    also be used as a context manager. `stop()` prints the memory in use at
    creation and the peak, both in MB, and returns the peak page count.
  - `rss_in_kilobytes`, `rss_in_megabytes` and `rss_in_gigabytes` convert
    page counts, taking a page to be 4 KiB.
- `ptautil.options`: `AnalysisOptions` holds the analysis settings.
  `AnalysisOptions.parse_from_args(args, from_env)` reads the options that
  come before a `--` separator. It returns what follows `--`, followed by any
  input files given before it.
  - Options: `--entry-func`, `--entry-id`, `--pta-type`
    (`andersen`/`ander` or `callsite-sensitive`/`cs`), `--context-depth`,
    `--dump-stats`, `--dump-call-graph`, `--dump-pts`, `--dump-mir` and
    `--dump-unsafe-stats`.
  - When there is no `--` and `from_env` is false, unknown options make it
    hand back all arguments unchanged. `--help` prints the help to standard
    error and also hands back all arguments.
  - In every other case bad input raises `OptionsError`, and its `kind` says
    why. `make_options_parser()` returns the underlying `argparse` parser.
  - `PTAType` names the two analysis kinds.
- `ptautil.toolchain`: `find_sysroot(env)` builds the toolchain root from
  `RUSTUP_HOME` and `RUSTUP_TOOLCHAIN`, or falls back to `RUST_SYSROOT`. It
  raises `SysrootNotFound` when neither is set. `is_std_lib_crate` is true for
  `std`, `core` and `alloc`.
- `ptautil.pta_statistics`: `points_to_stats` counts pointers and points-to
  relations into a `PointsToStats`. Its `average` is NaN when there are no
  pointers.
  - `context_insensitive_pts` merges context-sensitive sets by path, and
    `format_stats` renders one block of statistics.
  - `dump_andersen_stats` and `dump_context_sensitive_stats` write full
    reports. They go to standard output unless given a stream.
- `ptautil.unsafe_statistics`: `UnsafeStat` is built from `FunctionInfo`
  records, call edges and the reachable functions.
  - Explicitly unsafe functions are those declared unsafe or containing an
    unsafe block. In optimistic mode only blocks whose `UnsafeSource` is
    `USER_PROVIDED` count.
  - Possibly unsafe functions are the transitive callers of explicitly unsafe
    ones.
  - Standard-library crates are skipped by default, and `is_library_crate`
    tells which crates those are.
  - `count_unsafe_functions` and `dump_unsafe_functions` report the counts
    overall and per crate.
- `ptautil.results_dumper`: writers for analysis results.
  - `dump_pts` writes points-to sets. `dump_ci_pts` writes them without
    contexts, grouped by function in ascending id order.
  - `to_ci_call_graph` turns `CallEdge` values into context-insensitive
    edges.
  - `group_dyn_calls` and `dump_dyn_calls` handle call sites whose `CallType`
    is dynamic dispatch, function pointer or dynamic `Fn*` trait.
  - `dump_func_contexts` writes the contexts of each function.
  - `dump_most_called_funcs` writes the top 100 callees by edge count.
  - `open_output` treats the path `stdout` as standard output and passes open
    streams through.

## Example

```python
from ptautil.dot import Config, Dot, Graph, escape
from ptautil.mem_watcher import parse_statm, rss_in_megabytes

print(escape('say "hi"\n'))             # say \"hi\"\l

g = Graph()
a, b = g.add_node("A"), g.add_node("B")
g.add_edge(a, b, "edge_label")
print(Dot(g, config=[Config.EDGE_INDEX_LABEL]).render())

info = parse_statm("100 2048 30 4 0 50 0")
print(info.resident)                     # 2048
print(rss_in_megabytes(info.resident))   # 8
```

## What it does not do

This is a library of building blocks, not an analyser:

- It has no command-line program.
- It does not read or compile programs.
- It does not compute points-to sets or call graphs itself. The report
  writers take those results as plain mappings, edges and callables supplied
  by the caller.
- It has no writer for intermediate-representation listings or type
  indices.
- `Statm` reading works only where `/proc` exists.