"""Tests for YAML graph snapshots."""

import pytest

from blockmenu.adapters.yaml_graph import dumps_graph, load_graph, loads_graph, save_graph

from conftest import CHILD_1, CHILD_2, PARENT

GRAPH = f"""
graph: demo
blocks:
  - id: {PARENT}
    content: Weekly review
    page: Projects
    properties:
      heading: 2
    children:
      - id: {CHILD_1}
        content: TODO Inbox zero
      - id: {CHILD_2.upper()}
        content: Plan next week
        format: org
"""


def test_loads_nested_blocks():
    graph = loads_graph(GRAPH)

    assert graph.name == "demo"
    parent = graph.get(PARENT)
    assert parent.children == [CHILD_1, CHILD_2]
    assert parent.properties["heading"] == 2
    assert graph.get(CHILD_1).page == "Projects"
    assert graph.get(CHILD_2).format == "org"


def test_invalid_block_id_rejected():
    with pytest.raises(ValueError):
        loads_graph("blocks:\n  - id: nope\n    content: x\n")


def test_non_mapping_rejected():
    with pytest.raises(ValueError):
        loads_graph("- just\n- a list\n")


def test_save_and_reload(tmp_path):
    graph = loads_graph(GRAPH)
    graph.set_heading([CHILD_1], 3)
    path = tmp_path / "out" / "graph.yaml"

    save_graph(graph, path)
    again = load_graph(path)

    assert again.get(CHILD_1).properties["heading"] == 3
    assert again.get(PARENT).children == [CHILD_1, CHILD_2]
    assert dumps_graph(again) == dumps_graph(graph)
