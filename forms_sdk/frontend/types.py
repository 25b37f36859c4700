# forms_sdk/frontend/types.py
from enum import Enum


class FieldDisplayType(str, Enum):
    """
    Явно запрошенный способ отображения поля с конечным набором значений.
    """
    DEFAULT = "default"      # Решает обработчик поля
    LIST = "list"            # Радио-кнопки или чекбоксы
    DROP_DOWN = "drop_down"  # <select>


class StrategyKind(str, Enum):
    """
    Закрытый набор стратегий отображения поля. Выбирается функцией
    handlers.select_strategy.
    """
    TEXT = "text"
    PASSWORD = "password"
    TEXTAREA = "textarea"
    CHECKBOX = "checkbox"      # Одиночный чекбокс для bool
    DROP_DOWN = "drop_down"
    LIST = "list"              # Группа радио-кнопок или чекбоксов


class TextInputType(str, Enum):
    TEXT = "text"
    PASSWORD = "password"
    EMAIL = "email"
    URL = "url"
    NUMBER = "number"
    DATE = "date"
    DATETIME = "datetime-local"
    TIME = "time"
    TEL = "tel"
    COLOR = "color"


class ValidationState(str, Enum):
    VALID = "valid"
    INVALID = "invalid"
    UNVALIDATED = "unvalidated"


class FieldParent(str, Enum):
    """Где выводится поле: внутри секции формы или отдельно в форме."""
    FORM = "form"
    SECTION = "section"


class ComponentState(str, Enum):
    CREATED = "created"
    OPENED = "opened"
    CLOSED = "closed"
