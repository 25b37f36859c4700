# forms_sdk/frontend/field_config.py
from enum import Enum
from typing import Any, ClassVar, Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .attributes import HtmlAttributes
from .types import FieldDisplayType, TextInputType
from .utils import humanize, value_to_string


class SelectItem(BaseModel):
    """Вариант выбора для выпадающего списка / группы радио-кнопок / чекбоксов."""
    value: str
    text: str
    selected: bool = False

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_choice(cls, choice: Any) -> "SelectItem":
        """
        Принимает SelectItem, пару (value, text), член Enum или простое значение.
        """
        if isinstance(choice, SelectItem):
            return choice
        if isinstance(choice, (tuple, list)) and len(choice) == 2:
            value, text = choice
            return cls(value=value_to_string(value), text=str(text))
        if isinstance(choice, Enum):
            return cls(value=value_to_string(choice), text=humanize(choice.name))
        return cls(value=value_to_string(choice), text=str(choice))


class _FieldConfigurationValues(BaseModel):
    label_text: Optional[str] = None
    has_label_element: bool = True
    label_classes: Optional[str] = None
    validation_classes: Optional[str] = None
    hint: Optional[str] = None
    hint_id: Optional[str] = None
    format_string: Optional[str] = None
    none_string: Optional[str] = None
    true_string: Optional[str] = None
    false_string: Optional[str] = None
    display_type: FieldDisplayType = FieldDisplayType.DEFAULT
    input_type: Optional[TextInputType] = None
    is_readonly: bool = False
    # Готовый HTML поля, выводится вместо сгенерированного
    field_html: Optional[str] = None


class FieldConfiguration(_FieldConfigurationValues):
    """
    Изменяемая конфигурация одного поля формы.

    Все методы-настройки возвращают self, чтобы их можно было вызывать цепочкой:

        FieldConfiguration().label("E-mail").with_hint("Рабочий адрес").add_class("wide")

    Перед рендерингом конфигурация проходит через ConfigurationResolver и
    превращается в неизменяемую FinalizedFieldConfiguration.
    """

    is_finalized: ClassVar[bool] = False

    attributes: HtmlAttributes = Field(default_factory=HtmlAttributes)
    options: Optional[List[SelectItem]] = None
    excluded_values: List[str] = Field(default_factory=list)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    # --- Подпись ---
    def label(self, text: str) -> "FieldConfiguration":
        self.label_text = text
        return self

    def without_label_element(self) -> "FieldConfiguration":
        self.has_label_element = False
        return self

    def add_label_class(self, classes: str) -> "FieldConfiguration":
        self.label_classes = " ".join(filter(None, [self.label_classes, classes]))
        return self

    def add_validation_class(self, classes: str) -> "FieldConfiguration":
        self.validation_classes = " ".join(filter(None, [self.validation_classes, classes]))
        return self

    def with_hint(self, hint: str) -> "FieldConfiguration":
        self.hint = hint
        return self

    def with_hint_id(self, hint_id: str) -> "FieldConfiguration":
        self.hint_id = hint_id
        return self

    # --- Форматирование значений ---
    def with_format_string(self, format_string: str) -> "FieldConfiguration":
        self.format_string = format_string
        return self

    def with_none_as(self, none_string: str) -> "FieldConfiguration":
        self.none_string = none_string
        return self

    def with_true_as(self, true_string: str) -> "FieldConfiguration":
        self.true_string = true_string
        return self

    def with_false_as(self, false_string: str) -> "FieldConfiguration":
        self.false_string = false_string
        return self

    # --- Способ отображения ---
    def as_list(self) -> "FieldConfiguration":
        self.display_type = FieldDisplayType.LIST
        return self

    def as_drop_down(self) -> "FieldConfiguration":
        self.display_type = FieldDisplayType.DROP_DOWN
        return self

    def as_input_type(self, input_type: TextInputType) -> "FieldConfiguration":
        self.input_type = TextInputType(input_type)
        return self

    def as_password(self) -> "FieldConfiguration":
        return self.as_input_type(TextInputType.PASSWORD)

    def with_options(self, choices: Iterable[Any]) -> "FieldConfiguration":
        self.options = [SelectItem.from_choice(choice) for choice in choices]
        return self

    def exclude(self, *values: Any) -> "FieldConfiguration":
        self.excluded_values.extend(value_to_string(value) for value in values)
        return self

    def override_field_html(self, html: str) -> "FieldConfiguration":
        self.field_html = html
        return self

    # --- Атрибуты ---
    def attr(self, name: str, value: Any) -> "FieldConfiguration":
        self.attributes.attr(name, value)
        return self

    def attrs(self, attributes: Any = None, **kwargs: Any) -> "FieldConfiguration":
        self.attributes.attrs(attributes, **kwargs)
        return self

    def add_class(self, classes: str) -> "FieldConfiguration":
        self.attributes.add_class(classes)
        return self

    def id(self, value: str) -> "FieldConfiguration":
        return self.attr("id", value)

    def placeholder(self, text: str) -> "FieldConfiguration":
        return self.attr("placeholder", text)

    def readonly(self, readonly: bool = True) -> "FieldConfiguration":
        self.is_readonly = readonly
        return self.attr("readonly", "readonly" if readonly else None)

    def disabled(self, disabled: bool = True) -> "FieldConfiguration":
        return self.attr("disabled", "disabled" if disabled else None)

    def required(self, required: bool = True) -> "FieldConfiguration":
        return self.attr("required", "required" if required else None)

    def finalize(self) -> "FinalizedFieldConfiguration":
        values = self.model_dump(include=set(_FieldConfigurationValues.model_fields))
        return FinalizedFieldConfiguration(
            **values,
            attribute_items=tuple(self.attributes.items()),
            options=tuple(self.options) if self.options is not None else None,
            excluded_values=tuple(self.excluded_values),
        )


class FinalizedFieldConfiguration(_FieldConfigurationValues):
    """
    Итоговая конфигурация поля. Неизменяема: присваивание полей вызывает
    ValidationError, а набор атрибутов отдается копией.
    """

    is_finalized: ClassVar[bool] = True

    attribute_items: Tuple[Tuple[str, str], ...] = ()
    options: Optional[Tuple[SelectItem, ...]] = None
    excluded_values: Tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)

    @property
    def attributes(self) -> HtmlAttributes:
        return HtmlAttributes(self.attribute_items)

    def has_attribute(self, name: str) -> bool:
        return self.attributes.has(name)

    def finalize(self) -> "FinalizedFieldConfiguration":
        return self
