from typing import MutableMapping, Iterator, Any

BOOLEAN_KEYS = frozenset({"collapsed", "template-including-parent"})
TEXT_KEYS = frozenset({"template", "background-color"})
MAX_HEADING = 6


def normalize_key(key: str) -> str:
    """Property names are case-insensitive and dash-separated: ``Background_Color`` is ``background-color``."""
    return str(key).strip().lower().replace("_", "-")


def _to_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("true", "yes"):
        return True
    if text in ("false", "no", ""):
        return False
    raise ValueError(f"Property {key} expects true/false, got {value!r}")


def _to_heading(value: Any) -> int | bool:
    # True means "the default heading for the block's depth"
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("true", "auto"):
        return True
    if text == "false":
        return False
    try:
        level = int(text)
    except ValueError:
        raise ValueError(f"Invalid heading {value!r}")
    if not 1 <= level <= MAX_HEADING:
        raise ValueError(f"Heading level {level} out of range 1..{MAX_HEADING}")
    return level


def coerce(key: str, value: Any) -> Any:
    if key == "heading":
        return _to_heading(value)
    if key in BOOLEAN_KEYS:
        return _to_bool(key, value)
    if key in TEXT_KEYS:
        return str(value).strip()
    return value


class PropertyBag(MutableMapping[str, Any]):
    """
    Block properties as written in ``key:: value`` lines.

    Keys are normalized on every access, so ``props["Heading"]`` and
    ``props["heading"]`` are the same entry. Values of the properties the
    menus write are coerced when stored:
    - "heading": 1..6, or True for the default level
    - "collapsed", "template-including-parent": bool
    - "template", "background-color": stripped text
    Anything else is kept as given.
    """

    def __init__(self, initial: dict | None = None):
        self._props: dict[str, Any] = {}
        self.update(initial or {})

    def __getitem__(self, key: str) -> Any:
        return self._props[normalize_key(key)]

    def __setitem__(self, key: str, value: Any) -> None:
        key = normalize_key(key)
        self._props[key] = coerce(key, value)

    def __delitem__(self, key: str) -> None:
        del self._props[normalize_key(key)]

    def __contains__(self, key: object) -> bool:
        return normalize_key(str(key)) in self._props

    def __iter__(self) -> Iterator[str]:
        return iter(self._props)

    def __len__(self) -> int:
        return len(self._props)

    def __repr__(self) -> str:
        return f"PropertyBag({self._props!r})"

    @property
    def heading(self) -> int | bool:
        return self._props.get("heading", False)

    @property
    def template(self) -> str | None:
        name = self._props.get("template")
        return name or None
