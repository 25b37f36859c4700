# forms_sdk/frontend/attributes.py
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple, Union

from markupsafe import Markup

AttributeSource = Union[Mapping[str, Any], Iterable[Tuple[str, Any]], None]


def _normalize_name(name: str) -> str:
    # data_val -> data-val, как это принято для kwargs
    return name.strip().replace("_", "-")


def _normalize_value(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class HtmlAttributes:
    """
    Упорядоченный набор HTML-атрибутов.

    Порядок добавления сохраняется при выводе. Атрибут class обрабатывается
    отдельно: add_class объединяет списки классов без дубликатов.
    Значение None удаляет атрибут.
    """

    def __init__(self, attributes: AttributeSource = None, **kwargs: Any):
        self._attributes: Dict[str, str] = {}
        if attributes:
            self.attrs(attributes)
        if kwargs:
            self.attrs(kwargs)

    def attr(self, name: str, value: Any) -> "HtmlAttributes":
        key = _normalize_name(name)
        normalized = _normalize_value(value)
        if normalized is None:
            self._attributes.pop(key, None)
        elif key == "class":
            self._attributes.pop(key, None)
            self.add_class(normalized)
        else:
            self._attributes[key] = normalized
        return self

    def attrs(self, attributes: AttributeSource = None, **kwargs: Any) -> "HtmlAttributes":
        items = attributes.items() if isinstance(attributes, Mapping) else (attributes or ())
        for name, value in items:
            self.attr(name, value)
        for name, value in kwargs.items():
            self.attr(name, value)
        return self

    def add_class(self, classes: Optional[str]) -> "HtmlAttributes":
        if not classes:
            return self
        existing = self._attributes.get("class", "").split()
        for css_class in classes.split():
            if css_class not in existing:
                existing.append(css_class)
        if existing:
            self._attributes["class"] = " ".join(existing)
        return self

    def has(self, name: str) -> bool:
        return _normalize_name(name) in self._attributes

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self._attributes.get(_normalize_name(name), default)

    def remove(self, name: str) -> "HtmlAttributes":
        self._attributes.pop(_normalize_name(name), None)
        return self

    def copy(self) -> "HtmlAttributes":
        return HtmlAttributes(self._attributes)

    def items(self) -> Iterable[Tuple[str, str]]:
        return self._attributes.items()

    def to_dict(self) -> Dict[str, str]:
        return dict(self._attributes)

    def render(self) -> Markup:
        """Атрибуты в виде строки ' name="value"' с экранированием."""
        return Markup("").join(
            Markup(' {}="{}"').format(name, value)
            for name, value in self._attributes.items()
        )

    def __html__(self) -> str:
        return self.render()

    # Окружение Jinja2 без autoescape выводит {{ attrs }} через str()
    __str__ = render

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._attributes)

    def __len__(self) -> int:
        return len(self._attributes)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, HtmlAttributes):
            return list(self._attributes.items()) == list(other._attributes.items())
        return NotImplemented

    def __repr__(self) -> str:
        return f"HtmlAttributes({self._attributes!r})"
