import pytest

from hyprline.models import MenuItem, TrayItem, TrayStatus
from hyprline.tray import (
    TrayRegistry,
    build_tray_item,
    parse_menu_layout,
    split_service,
    tray_status_from_string,
)


def test_split_service_without_path_uses_default():
    assert split_service(":1.42") == (":1.42", "/StatusNotifierItem")


def test_split_service_with_path():
    assert split_service("org.app/org/app/Item") == ("org.app", "/org/app/Item")


def test_split_service_round_trip():
    name, path = split_service("a.b/c/d")
    assert name + path == "a.b/c/d"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("Passive", TrayStatus.PASSIVE),
        ("NeedsAttention", TrayStatus.NEEDS_ATTENTION),
        ("Active", TrayStatus.ACTIVE),
        ("whatever", TrayStatus.ACTIVE),
    ],
)
def test_tray_status_from_string(value, expected):
    assert tray_status_from_string(value) is expected


def test_build_tray_item_defaults_title_to_bus_name():
    item = build_tray_item("org.app/Item", {})
    assert item.title == "org.app"
    assert item.service == "org.app/Item"
    assert item.status is TrayStatus.ACTIVE
    assert item.icon_name == ""
    assert item.menu_path is None


def test_build_tray_item_uses_attention_icon_when_needed():
    props = {
        "Status": "NeedsAttention",
        "AttentionIconName": "alert",
        "IconName": "normal",
    }
    assert build_tray_item("s", props).icon_name == "alert"


def test_build_tray_item_ignores_attention_icon_when_active():
    props = {"Status": "Active", "AttentionIconName": "alert", "IconName": "normal"}
    assert build_tray_item("s", props).icon_name == "normal"


def test_build_tray_item_empty_attention_icon_falls_back():
    props = {"Status": "NeedsAttention", "AttentionIconName": "", "IconName": "normal"}
    assert build_tray_item("s", props).icon_name == "normal"


def test_pixmap_dropped_when_icon_name_present():
    props = {"IconName": "normal", "IconPixmap": [(2, 2, b"\x00" * 16)]}
    assert build_tray_item("s", props).icon_pixmap is None


def test_pixmap_kept_for_generic_icon():
    pixmap = [(2, 2, b"\x01" * 16)]
    props = {"IconName": "application-x-executable", "IconPixmap": pixmap}
    assert build_tray_item("s", props).icon_pixmap == pixmap


def test_empty_pixmap_is_none():
    assert build_tray_item("s", {"IconPixmap": []}).icon_pixmap is None


def test_theme_path_and_menu():
    props = {"IconThemePath": "/icons", "Menu": "/MenuBar", "Title": "App"}
    item = build_tray_item("s", props)
    assert item.icon_theme_path == "/icons"
    assert item.menu_path == "/MenuBar"
    assert item.title == "App"
    assert build_tray_item("s", {"IconThemePath": ""}).icon_theme_path is None


def test_parse_menu_layout_reads_properties():
    layout = (
        0,
        {},
        [
            (1, {"label": "Open", "enabled": False}, []),
            (2, {"type": "separator"}, []),
            (3, {"label": "Quit", "visible": False}, []),
        ],
    )
    assert parse_menu_layout(layout) == [
        MenuItem(id=1, label="Open", enabled=False),
        MenuItem(id=2, label="", is_separator=True),
        MenuItem(id=3, label="Quit", visible=False),
    ]


def test_parse_menu_layout_skips_malformed_children():
    layout = (0, {}, ["junk", (4,), (5, "not a dict", []), (6, {"label": "Ok"}, [])])
    assert parse_menu_layout(layout) == [MenuItem(id=6, label="Ok")]


def test_parse_menu_layout_bad_id_becomes_zero():
    layout = (0, {}, [("x", {"label": "A"}, [])])
    assert [item.id for item in parse_menu_layout(layout)] == [0]


def test_parse_menu_layout_rejects_malformed_layout():
    with pytest.raises(ValueError):
        parse_menu_layout((0, {}))


def _item(service, title="t"):
    return TrayItem(service=service, icon_name="", title=title)


def test_registry_add_ignores_duplicates():
    registry = TrayRegistry()
    assert registry.add(_item("a")) is True
    assert registry.add(_item("a", "other")) is False
    assert [i.title for i in registry.items()] == ["t"]


def test_registry_remove_and_order():
    registry = TrayRegistry()
    for name in ("a", "b", "c"):
        registry.add(_item(name))
    removed = registry.remove("b")
    assert [i.service for i in removed] == ["b"]
    assert [i.service for i in registry.items()] == ["a", "c"]
    assert registry.remove("missing") == []


def test_registry_items_is_a_copy_and_clear():
    registry = TrayRegistry()
    registry.add(_item("a"))
    snapshot = registry.items()
    snapshot.clear()
    assert len(registry.items()) == 1
    registry.clear()
    assert registry.items() == []