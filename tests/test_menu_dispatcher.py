"""Tests for the contextual action sets."""

import pytest

from blockmenu.core.model import (
    BlockReference,
    ContextMenuEvent,
    Element,
    MultiBlockSelection,
    PageTitle,
    SingleBlock,
)
from blockmenu.menu.model import MenuGroup
from blockmenu.menu.render import menu_to_dict, render_text
from blockmenu.menu.widgets import ColorPicker, HeadingPicker, TemplateForm

from conftest import CARD, CHILD_1, CHILD_2, LONE, PARENT

SELECTION_KEYS = [
    "background-color", "heading", "separator",
    "cut", "delete", "copy", "copy-as", "copy-block-refs", "copy-block-embeds", "separator",
    "make-flashcard", "cycle-todos", "separator",
    "expand-all", "collapse-all",
]

BLOCK_KEYS = [
    "background-color", "heading", "separator",
    "open-in-sidebar", "separator",
    "copy-block-ref", "copy-block-embed", "copy-as", "cut", "delete", "separator",
    "template", "make-flashcard", "separator",
    "expand-all", "collapse-all",
]


def test_selection_menu_order(rt):
    menu = rt.dispatcher.build_menu(MultiBlockSelection((CHILD_1, CHILD_2)))
    assert menu.keys() == SELECTION_KEYS


def test_selection_menu_without_flashcards(make_rt):
    rt = make_rt(flashcards=False)
    menu = rt.dispatcher.build_menu(MultiBlockSelection((CHILD_1,)))
    assert "make-flashcard" not in menu.keys()


def test_selection_shortcut_hints(rt):
    menu = rt.dispatcher.build_menu(MultiBlockSelection((CHILD_1,)))
    assert menu.get("cut").shortcut == "mod+x"
    assert menu.get("copy-as").shortcut is None


def test_heading_applies_to_every_selected_block(rt):
    """Heading 2 on a 3-block selection, then remove on all three."""
    ids = (PARENT, CHILD_1, LONE)
    menu = rt.dispatcher.build_menu(MultiBlockSelection(ids))
    picker = menu.get("heading")
    assert isinstance(picker, HeadingPicker)

    picker.choose(2)
    assert [rt.graph.get(i).properties.get("heading") for i in ids] == [2, 2, 2]

    picker.remove()
    assert all("heading" not in rt.graph.get(i).properties for i in ids)
    assert "heading" not in rt.graph.get(CHILD_2).properties


def test_heading_default_and_range(rt):
    picker = rt.dispatcher.build_menu(SingleBlock(LONE)).get("heading")
    assert picker.options == [1, 2, 3, 4, 5, 6]
    picker.set_default()
    assert rt.graph.get(LONE).properties["heading"] is True
    with pytest.raises(ValueError):
        picker.choose(7)


def test_color_picker_applies_and_removes(rt):
    ids = (CHILD_1, CHILD_2)
    picker = rt.dispatcher.build_menu(MultiBlockSelection(ids)).get("background-color")
    assert isinstance(picker, ColorPicker)
    picker.choose("yellow")
    assert [rt.graph.get(i).properties["background-color"] for i in ids] == ["yellow", "yellow"]
    picker.remove()
    assert all("background-color" not in rt.graph.get(i).properties for i in ids)


def test_pickers_show_first_block_values(rt):
    rt.graph.get(CHILD_1).properties.update({"heading": 3, "background-color": "red"})
    menu = rt.dispatcher.build_menu(MultiBlockSelection((CHILD_1, CHILD_2)))
    assert menu.get("heading").current == 3
    assert menu.get("background-color").current == "red"


def test_selection_delete_hides_menu(rt):
    rt.selection.add(CHILD_1)
    rt.selection.add(CHILD_2)
    event = ContextMenuEvent(target=Element(classes=frozenset({"block-content"})))
    menu = rt.dispatcher.resolve_and_dispatch(event)
    assert rt.host.visible

    menu.invoke("delete")

    assert rt.graph.get(CHILD_1) is None
    assert rt.graph.get(CHILD_2) is None
    assert rt.graph.get(PARENT).children == []
    assert not rt.host.visible


def test_block_menu_order(rt):
    menu = rt.dispatcher.build_menu(SingleBlock(LONE))
    assert menu.keys() == BLOCK_KEYS


def test_block_menu_desktop_adds_block_url(make_rt):
    rt = make_rt(desktop=True)
    menu = rt.dispatcher.build_menu(SingleBlock(LONE))
    keys = menu.keys()
    assert keys.index("copy-block-url") == keys.index("copy-block-embed") + 1

    menu.invoke("copy-block-url")
    assert rt.graph.clipboard == f"logseq://graph/demo?block-id={LONE}"


def test_card_block_offers_preview_not_make(rt):
    menu = rt.dispatcher.build_menu(SingleBlock(CARD))
    assert "preview-flashcard" in menu.keys()
    assert "make-flashcard" not in menu.keys()


def test_flashcards_disabled_hides_make(make_rt):
    rt = make_rt(flashcards=False)
    keys = rt.dispatcher.build_menu(SingleBlock(LONE)).keys()
    assert "make-flashcard" not in keys
    assert "preview-flashcard" not in keys


def test_make_flashcard_tags_block(rt):
    rt.dispatcher.build_menu(SingleBlock(LONE)).invoke("make-flashcard")
    assert rt.graph.get(LONE).content == "Call the dentist #card"


def test_copy_block_ref_and_embed(rt):
    menu = rt.dispatcher.build_menu(SingleBlock(LONE))
    menu.invoke("copy-block-ref")
    assert rt.graph.clipboard == f"(({LONE}))"
    assert rt.graph.get(LONE).properties["id"] == LONE
    menu.invoke("copy-block-embed")
    assert rt.graph.clipboard == f"{{{{embed (({LONE}))}}}}"


def test_plugin_items_follow_registration_order(rt):
    ran = []
    rt.plugins.register("block-context-menu-item", "p1", "translate", "Translate", ran.append)
    rt.plugins.register("block-context-menu-item", "p2", "summarize", "Summarize", ran.append)
    rt.plugins.register("page-menu-item", "p3", "other", "Other", ran.append)

    menu = rt.dispatcher.build_menu(SingleBlock(LONE))
    assert menu.keys()[-2:] == ["translate", "summarize"]

    menu.invoke("summarize")
    assert ran == [{"uuid": LONE}]


def test_developer_items_only_in_dev_mode(rt, make_rt):
    assert "dev/show-block-data" not in rt.dispatcher.build_menu(SingleBlock(LONE)).keys()

    dev = make_rt(developer_mode=True)
    dev.plugins.register("block-context-menu-item", "p1", "translate", "Translate", lambda p: None)
    menu = dev.dispatcher.build_menu(SingleBlock(LONE))
    assert menu.keys()[-3:] == ["translate", "dev/show-block-data", "dev/show-block-ast"]

    menu.invoke("dev/show-block-data")
    assert "block/content: Call the dentist" in dev.devtools.output.getvalue()


def test_block_ref_menu(rt):
    owner = rt.graph.get(PARENT)
    owner.content = f"See (({LONE}))"
    menu = rt.dispatcher.build_menu(BlockReference(owner_block=PARENT, ref_id=LONE))
    assert menu.keys() == [
        "open-in-sidebar", "copy-ref", "delete-ref", "replace-with-text", "replace-with-embed",
    ]

    menu.invoke("open-in-sidebar")
    assert rt.graph.calls[-1] == ("sidebar", LONE, "block-ref")

    menu.invoke("replace-with-text")
    assert owner.content == "See Call the dentist"


def test_page_title_menu_lays_out_groups(rt):
    menu = rt.dispatcher.build_menu(PageTitle("Projects"))
    assert all(isinstance(e, MenuGroup) for e in menu)
    assert menu.keys() == ["page/actions", "page/danger"]
    assert menu.get("page/danger").options[0]["page"] == "Projects"


def test_template_created_then_duplicate_rejected(rt):
    """Second "Meeting" template is refused with a warning and no change."""
    form = rt.dispatcher.build_menu(SingleBlock(PARENT)).get("template")
    assert isinstance(form, TemplateForm)
    form.open()
    form.set_name("Meeting")
    assert form.submit() is True
    assert rt.graph.get(PARENT).properties["template"] == "Meeting"
    assert "template-including-parent" not in rt.graph.get(PARENT).properties

    before = {i: dict(b.properties) for i, b in rt.graph.blocks.items()}
    again = rt.dispatcher.build_menu(SingleBlock(CHILD_1)).get("template")
    again.open()
    again.set_name("Meeting")
    assert again.submit() is False

    assert rt.notifier.messages[-1] == ("context-menu/template-exists-warning", "error")
    assert {i: dict(b.properties) for i, b in rt.graph.blocks.items()} == before
    assert again.editing


def test_template_blank_name_ignored(rt):
    form = rt.dispatcher.build_menu(SingleBlock(LONE)).get("template")
    form.open()
    form.set_name("   ")
    assert form.submit() is False
    assert rt.notifier.messages == []
    assert "template" not in rt.graph.get(LONE).properties


def test_template_exclude_parent(rt):
    rt.host.show(None, "menu")
    form = rt.dispatcher.build_menu(SingleBlock(PARENT)).get("template")
    assert form.show_include_parent
    assert form.include_parent is True
    form.toggle_include_parent(False)
    form.set_name("Review")
    assert form.submit() is True

    props = rt.graph.get(PARENT).properties
    assert props["template"] == "Review"
    assert props["template-including-parent"] is False
    assert not rt.host.visible


def test_template_without_children_has_no_toggle(rt):
    form = rt.dispatcher.build_menu(SingleBlock(LONE)).get("template")
    assert not form.show_include_parent
    assert form.include_parent is None
    with pytest.raises(ValueError):
        form.toggle_include_parent(False)


def test_resolve_and_dispatch_prevents_native_menu(rt):
    rt.context.set_page_title("Projects")
    event = ContextMenuEvent(target=Element())
    menu = rt.dispatcher.resolve_and_dispatch(event)
    assert event.default_prevented
    assert rt.host.menu is menu


def test_unresolved_event_leaves_native_menu(rt):
    event = ContextMenuEvent(target=Element(attrs={"blockid": "42"}))
    assert rt.dispatcher.resolve_and_dispatch(event) is None
    assert not event.default_prevented
    assert not rt.host.visible


def test_render_text_and_dict(rt):
    menu = rt.dispatcher.build_menu(MultiBlockSelection((CHILD_1,)))
    text = render_text(menu)
    assert "editor/cut" in text
    assert "mod+x" in text
    data = menu_to_dict(menu)
    assert data["target"] == "MultiBlockSelection"
    assert data["entries"][1]["options"] == [1, 2, 3, 4, 5, 6]
