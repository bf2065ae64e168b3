import pytest

from ptautil.dot import Config, Dot, Graph, escape


def simple_graph():
    graph = Graph()
    a = graph.add_node("A")
    b = graph.add_node("B")
    graph.add_edge(a, b, "edge_label")
    return graph


def test_escape():
    assert escape('" \\ \n') == '\\" \\\\ \\l'


def test_escape_plain_text_unchanged():
    assert escape("abc 123") == "abc 123"


def test_node_index_label_option():
    dot = Dot(simple_graph(), [Config.NODE_INDEX_LABEL]).render()
    assert dot == (
        'digraph {\n    0 [ label = "0" ]\n    1 [ label = "1" ]\n'
        '    0 -> 1 [ label = "\\"edge_label\\"" ]\n}\n'
    )


def test_edge_index_label_option():
    dot = Dot(simple_graph(), [Config.EDGE_INDEX_LABEL]).render()
    assert dot == (
        'digraph {\n    0 [ label = "\\"A\\"" ]\n    1 [ label = "\\"B\\"" ]\n'
        '    0 -> 1 [ label = "0" ]\n}\n'
    )


def test_edge_no_label_option():
    dot = Dot(simple_graph(), [Config.EDGE_NO_LABEL]).render()
    assert dot == (
        'digraph {\n    0 [ label = "\\"A\\"" ]\n    1 [ label = "\\"B\\"" ]\n'
        "    0 -> 1 [ ]\n}\n"
    )


def test_node_no_label_option():
    dot = Dot(simple_graph(), [Config.NODE_NO_LABEL]).render()
    assert dot == (
        "digraph {\n    0 [ ]\n    1 [ ]\n"
        '    0 -> 1 [ label = "\\"edge_label\\"" ]\n}\n'
    )


def test_with_attr_getters():
    dot = Dot(
        simple_graph(),
        [Config.NODE_NO_LABEL, Config.EDGE_NO_LABEL],
        get_edge_attributes=lambda _g, er: f'label = "{er.weight.upper()}"',
        get_node_attributes=lambda _g, nr: f'label = "{nr.weight.lower()}"',
    )
    assert str(dot) == (
        'digraph {\n    0 [ label = "a"]\n    1 [ label = "b"]\n'
        '    0 -> 1 [ label = "EDGE_LABEL"]\n}\n'
    )


def test_graph_content_only_and_undirected():
    graph = Graph(directed=False)
    graph.add_node(1)
    graph.add_node(2)
    graph.add_edge(0, 1, 7)
    dot = Dot(graph, [Config.GRAPH_CONTENT_ONLY]).render()
    assert dot == '    0 [ label = "1" ]\n    1 [ label = "2" ]\n    0 -- 1 [ label = "7" ]\n'


def test_custom_formatter_is_escaped():
    graph = Graph()
    graph.add_node('x"y\nz')
    dot = Dot(graph, node_fmt=str).render()
    assert dot == 'digraph {\n    0 [ label = "x\\"y\\lz" ]\n}\n'


def test_graph_iterators_and_indices():
    graph = simple_graph()
    assert [(n.id, n.weight) for n in graph.nodes()] == [(0, "A"), (1, "B")]
    assert [(e.id, e.source, e.target, e.weight) for e in graph.edges()] == [
        (0, 0, 1, "edge_label")
    ]


def test_add_edge_to_missing_node_raises():
    graph = simple_graph()
    with pytest.raises(IndexError):
        graph.add_edge(0, 5, "bad")