"""Tests for the in-memory graph and the adapters around it."""

import pytest

from blockmenu.adapters.flags import TagFlashcards
from blockmenu.adapters.memory_graph import new_block
from blockmenu.adapters.plugins import MemoryPluginRegistry, StaticPageMenu
from blockmenu.core.meta import PropertyBag

from conftest import CARD, CHILD_1, CHILD_2, LONE, PARENT, make_graph


def test_property_keys_are_normalized():
    """Test property names ignore case and underscores."""
    props = PropertyBag({"Background_Color": " red "})

    assert dict(props) == {"background-color": "red"}
    assert "BACKGROUND-COLOR" in props
    assert props["background_color"] == "red"

    del props["Background-Color"]
    assert len(props) == 0


def test_property_values_are_coerced():
    """Test values written as text by a graph file get their real types."""
    props = PropertyBag({
        "heading": "2",
        "collapsed": "true",
        "template-including-parent": "false",
        "template": "  Meeting ",
        "owner": " kept ",
    })

    assert props.heading == 2
    assert props["collapsed"] is True
    assert props["template-including-parent"] is False
    assert props.template == "Meeting"
    assert props["owner"] == " kept "

    props["heading"] = "true"
    assert props.heading is True
    assert PropertyBag().heading is False
    assert PropertyBag({"template": ""}).template is None


@pytest.mark.parametrize("value", [0, 7, "big"])
def test_invalid_heading_rejected(value):
    with pytest.raises(ValueError):
        PropertyBag({"heading": value})


def test_template_exists_ignores_case():
    graph = make_graph()
    graph.set_property([PARENT], "template", "Weekly Review")
    
    assert graph.template_exists("weekly review")
    assert graph.template_exists("  WEEKLY REVIEW ")
    assert not graph.template_exists("Daily")


def test_cut_copies_then_deletes():
    graph = make_graph()
    graph.cut_blocks([CHILD_1])
    
    assert graph.clipboard == "TODO Inbox zero"
    assert graph.get(CHILD_1) is None
    assert graph.get(PARENT).children == [CHILD_2]
    assert [c[0] for c in graph.calls] == ["copy", "delete"]


def test_empty_ids_are_ignored():
    graph = make_graph()
    graph.cut_blocks([])
    graph.copy_block_refs([], "ref")
    graph.export_blocks([])
    assert graph.calls == []


def test_copy_block_ref_marks_block():
    graph = make_graph()
    graph.copy_block_ref(LONE, f"(({LONE}))")
    
    assert graph.get(LONE).properties["id"] == LONE
    assert graph.clipboard == f"(({LONE}))"


def test_copy_block_refs_styles():
    graph = make_graph()
    graph.copy_block_refs([CHILD_1, CHILD_2], "embed")
    assert graph.clipboard == f"{{{{embed (({CHILD_1}))}}}}\n{{{{embed (({CHILD_2}))}}}}"


def test_cycle_todos():
    graph = make_graph()
    for expected in ("DOING Inbox zero", "DONE Inbox zero", "Inbox zero", "TODO Inbox zero"):
        graph.cycle_todos([CHILD_1])
        assert graph.get(CHILD_1).content == expected


def test_collapse_only_blocks_with_children():
    graph = make_graph()
    graph.collapse_all([PARENT, LONE])
    assert graph.get(PARENT).properties["collapsed"] is True
    assert "collapsed" not in graph.get(LONE).properties
    
    graph.expand_all([PARENT])
    assert "collapsed" not in graph.get(PARENT).properties


def test_ref_rewrites():
    graph = make_graph()
    graph.add(new_block(PARENT, f"See (({LONE})) today"))
    
    graph.replace_ref_with_embed(PARENT, LONE)
    assert graph.get(PARENT).content == f"See {{{{embed (({LONE}))}}}} today"
    
    graph.add(new_block(PARENT, f"See (({LONE})) today"))
    graph.replace_ref_with_text(PARENT, LONE)
    assert graph.get(PARENT).content == "See Call the dentist today"


def test_timestamp_on_missing_block_is_ignored():
    graph = make_graph()
    graph.set_block_timestamp("6566f0b4-0000-0000-0000-000000000000", "scheduled", "<2024-03-05 Tue>")
    assert graph.calls == []


def test_flashcards_tagging():
    graph = make_graph()
    cards = TagFlashcards(graph)
    
    assert cards.is_card(graph.get(CARD))
    assert not cards.is_card(graph.get(LONE))
    
    cards.make_cards([LONE, CARD])
    assert graph.get(LONE).content == "Call the dentist #card"
    assert graph.get(CARD).content == "What is a repeater? #card"


def test_plugin_registry():
    registry = MemoryPluginRegistry()
    seen = []
    cmd = registry.register("block-context-menu-item", "todo-plus", "snooze", "Snooze", seen.append)
    
    assert cmd.action == "todo-plus/snooze"
    assert registry.commands("block-context-menu-item") == [cmd]
    
    registry.execute(cmd, {"uuid": LONE})
    assert seen == [{"uuid": LONE}]
    
    with pytest.raises(ValueError):
        registry.register("block-context-menu-item", "todo-plus", "snooze", "Again", seen.append)
    
    registry.unregister_plugin("todo-plus")
    assert registry.commands("block-context-menu-item") == []
    with pytest.raises(KeyError):
        registry.execute(cmd, {})


def test_static_page_menu():
    groups = StaticPageMenu().page_menu("Projects")
    assert [g["title"] for g in groups] == ["page/actions", "page/danger"]
    assert groups[1]["options"] == [{"key": "page/delete", "label": "page/delete", "page": "Projects"}]
