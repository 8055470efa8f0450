"""Context-menu target resolution and menu building."""

from .dispatcher import MenuDispatcher, MenuServices
from .model import Menu, MenuGroup, MenuItem, Separator
from .render import menu_to_dict, render_text
from .resolver import InteractionContext, TargetResolver
from .widgets import ColorPicker, HeadingPicker, TemplateForm

__all__ = [
    "ColorPicker",
    "HeadingPicker",
    "InteractionContext",
    "Menu",
    "MenuDispatcher",
    "MenuGroup",
    "MenuItem",
    "MenuServices",
    "Separator",
    "TemplateForm",
    "TargetResolver",
    "menu_to_dict",
    "render_text",
]
