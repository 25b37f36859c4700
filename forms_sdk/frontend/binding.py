# forms_sdk/frontend/binding.py
import logging
import re
from typing import Any, Callable, Optional, Union

from .exceptions import MissingIdentityError
from .utils import get_attr_path

logger = logging.getLogger("forms_sdk.frontend.binding")

_HTML_ID_INVALID_CHARS = re.compile(r"[^A-Za-z0-9_\-:]")


class FieldBinding:
    """
    Привязка поля формы к свойству модели.

    path - точечный путь к свойству ("address.city"). Из него строятся name/id
    элементов и ключ для поиска ошибок валидации. getter - функция, которая
    достает значение из модели; по умолчанию значение берется по path.
    metadata_key - путь, по которому адаптер метаданных ищет описание поля
    (если отличается от path).
    """

    def __init__(
        self,
        path: str,
        getter: Optional[Callable[[Any], Any]] = None,
        metadata_key: Optional[str] = None,
        prefix: Optional[str] = None,
    ):
        if not path or not str(path).strip():
            logger.error("FieldBinding created without a property path.")
            raise MissingIdentityError("A form field must be bound to a property path.")
        self.path = str(path).strip()
        self.getter = getter
        self.metadata_key = metadata_key or self.path
        self.prefix = prefix

    @classmethod
    def coerce(
        cls, binding: Union["FieldBinding", str, None], prefix: Optional[str] = None
    ) -> "FieldBinding":
        if isinstance(binding, FieldBinding):
            if prefix and not binding.prefix:
                return cls(binding.path, binding.getter, binding.metadata_key, prefix)
            return binding
        return cls(binding or "", prefix=prefix)

    @property
    def name(self) -> str:
        """Последний сегмент пути: "address.city" -> "city"."""
        return self.path.split(".")[-1]

    @property
    def full_name(self) -> str:
        """Полное имя поля для атрибута name и поиска состояния валидации."""
        return f"{self.prefix}.{self.path}" if self.prefix else self.path

    @property
    def html_id(self) -> str:
        return _HTML_ID_INVALID_CHARS.sub("_", self.full_name)

    def get_value(self, model: Any) -> Any:
        if model is None:
            return None
        if self.getter is not None:
            return self.getter(model)
        return get_attr_path(model, self.path)

    def __repr__(self) -> str:
        return f"FieldBinding({self.full_name!r})"
