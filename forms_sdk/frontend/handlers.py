# forms_sdk/frontend/handlers.py
"""
Стратегии отображения поля.

select_strategy выбирает одну стратегию из закрытого набора StrategyKind по
базовому типу поля, его многозначности и явным настройкам; HANDLERS
сопоставляет стратегии класс обработчика, который готовит конфигурацию
(prepare) и выводит разметку поля (render).
"""
import logging
from collections.abc import Iterable
from datetime import date, datetime, time
from typing import TYPE_CHECKING, Any, ClassVar, Dict, List, Type

from markupsafe import Markup

from .attributes import HtmlAttributes
from .config import (
    DATA_TYPE_INPUT_MAPPING,
    DEFAULT_FIELD_TEMPLATES,
    FIELD_INPUT_TYPE_MAPPING,
    MULTILINE_DATA_TYPES,
)
from .exceptions import ConfigurationConflictError, RenderingError, TypeMismatchError
from .field_config import FieldConfiguration, FinalizedFieldConfiguration, SelectItem
from .metadata import FieldMetadata
from .types import FieldDisplayType, StrategyKind, TextInputType, ValidationState
from .utils import (
    get_literal_values,
    is_enum_type,
    is_literal_type,
    type_name,
    value_matches_type,
    value_to_string,
)

if TYPE_CHECKING:
    from .generator import FieldGenerator

logger = logging.getLogger("forms_sdk.frontend.handlers")


def select_strategy(metadata: FieldMetadata, config: FieldConfiguration) -> StrategyKind:
    """
    Выбор стратегии отображения:
    явный тип отображения -> bool -> конечный набор значений -> пароль/текст.
    """
    has_choices = metadata.has_bounded_choices or config.options is not None
    display_type = config.display_type

    if config.input_type is not None and (display_type != FieldDisplayType.DEFAULT or has_choices):
        logger.error(
            f"Field '{metadata.name}': input type '{config.input_type.value}' conflicts "
            f"with a choice field (display type '{display_type.value}')."
        )
        raise ConfigurationConflictError(
            metadata.name,
            f"input type '{config.input_type.value}' can't be used for a field with a set of choices.",
        )

    if display_type != FieldDisplayType.DEFAULT:
        if not has_choices:
            logger.error(
                f"Field '{metadata.name}': display type '{display_type.value}' requested "
                f"for type '{type_name(metadata.underlying_type)}' without a set of choices."
            )
            raise ConfigurationConflictError(
                metadata.name,
                f"display type '{display_type.value}' requires a set of choices, "
                f"but type '{type_name(metadata.underlying_type)}' has none.",
            )
        return StrategyKind.LIST if display_type == FieldDisplayType.LIST else StrategyKind.DROP_DOWN

    if metadata.underlying_type is bool and not metadata.is_multi_valued:
        return StrategyKind.CHECKBOX
    if has_choices:
        return StrategyKind.DROP_DOWN

    input_type = config.input_type or DATA_TYPE_INPUT_MAPPING.get(metadata.data_type or "")
    if input_type == TextInputType.PASSWORD:
        return StrategyKind.PASSWORD
    if metadata.data_type in MULTILINE_DATA_TYPES:
        return StrategyKind.TEXTAREA
    return StrategyKind.TEXT


class FieldHandler:
    """Базовый обработчик: доступ к значению поля, атрибутам и состоянию валидации."""

    kind: ClassVar[StrategyKind]

    def __init__(self, generator: "FieldGenerator"):
        self.generator = generator
        self.metadata: FieldMetadata = generator.metadata

    def prepare(self, config: FieldConfiguration) -> None:
        """Настройка конфигурации до финализации (по умолчанию ничего не меняет)."""
        pass

    def render(self, config: FinalizedFieldConfiguration) -> Markup:
        raise NotImplementedError

    @property
    def has_multiple_values(self) -> bool:
        return self.metadata.is_multi_valued

    def get_value(self) -> Any:
        value = self.generator.get_value()
        self._check_value_type(value)
        return value

    def get_values(self) -> List[Any]:
        value = self.get_value()
        return list(value) if value is not None else []

    def _check_value_type(self, value: Any) -> None:
        expected = self.metadata.underlying_type
        if value is None:
            return
        if self.has_multiple_values:
            if isinstance(value, (str, bytes, dict)) or not isinstance(value, Iterable):
                self._type_mismatch(f"collection of {type_name(expected)}", value)
            for item in value:
                if not value_matches_type(item, expected):
                    self._type_mismatch(expected, item)
        elif not value_matches_type(value, expected):
            self._type_mismatch(expected, value)

    def _type_mismatch(self, expected: Any, value: Any) -> None:
        logger.error(
            f"Field '{self.generator.field_name}': value {value!r} doesn't match declared type "
            f"'{type_name(expected)}'."
        )
        raise TypeMismatchError(self.generator.field_name, expected, value)

    def is_selected(self, value: Any) -> bool:
        """
        Многозначное поле: значение входит в текущую коллекцию.
        Однозначное поле: значение равно текущему.
        """
        candidate = value_to_string(value)
        if self.has_multiple_values:
            return candidate in {value_to_string(v) for v in self.get_values()}
        current = self.get_value()
        return current is not None and value_to_string(current) == candidate

    def apply_validation_state(self, attrs: HtmlAttributes) -> HtmlAttributes:
        if self.generator.validation_state == ValidationState.INVALID:
            attrs.add_class(self.generator.settings.VALIDATION_INPUT_CSS_CLASS)
            attrs.attr("aria-invalid", "true")
        return attrs

    def field_attributes(self, config: FinalizedFieldConfiguration, **leading: Any) -> HtmlAttributes:
        """name/id поля, затем атрибуты из конфигурации (id из конфигурации имеет приоритет)."""
        attrs = HtmlAttributes(leading)
        attrs.attr("name", self.generator.field_name)
        attrs.attr("id", self.generator.binding.html_id)
        attrs.attrs(config.attributes.items())
        return self.apply_validation_state(attrs)

    def render_template(self, **context: Any) -> Markup:
        return self.generator.template.render_element(DEFAULT_FIELD_TEMPLATES[self.kind], **context)


class TextHandler(FieldHandler):
    kind = StrategyKind.TEXT

    def get_input_type(self, config: FinalizedFieldConfiguration) -> TextInputType:
        if config.input_type is not None:
            return config.input_type
        if self.metadata.data_type in DATA_TYPE_INPUT_MAPPING:
            return DATA_TYPE_INPUT_MAPPING[self.metadata.data_type]
        underlying = self.metadata.underlying_type
        mapped = FIELD_INPUT_TYPE_MAPPING.get(underlying) if isinstance(underlying, type) else None
        return mapped or FIELD_INPUT_TYPE_MAPPING.get(type_name(underlying), TextInputType.TEXT)

    def format_value(self, value: Any, config: FinalizedFieldConfiguration) -> str:
        if value is None:
            return ""
        if self.has_multiple_values:
            return ", ".join(self._format_single(item, config) for item in value)
        return self._format_single(value, config)

    def _format_single(self, value: Any, config: FinalizedFieldConfiguration) -> str:
        if config.format_string:
            try:
                return config.format_string.format(value)
            except (ValueError, KeyError, IndexError, AttributeError) as e:
                logger.error(
                    f"Field '{self.generator.field_name}': format string {config.format_string!r} "
                    f"can't format {value!r}: {e}"
                )
                raise RenderingError(
                    f"Invalid format string {config.format_string!r} for field '{self.generator.field_name}'."
                ) from e
        if isinstance(value, datetime):
            return value.strftime("%Y-%m-%dT%H:%M")
        if isinstance(value, (date, time)):
            return value.isoformat()
        return value_to_string(value)

    def render(self, config: FinalizedFieldConfiguration) -> Markup:
        value = self.get_value()
        attrs = self.field_attributes(config, type=self.get_input_type(config).value)
        attrs.attr("value", self.format_value(value, config))
        return self.render_template(attrs=attrs)


class PasswordHandler(TextHandler):
    """Поле пароля: текущее значение никогда не попадает в разметку."""

    kind = StrategyKind.PASSWORD

    def render(self, config: FinalizedFieldConfiguration) -> Markup:
        # Проверяем тип значения, но само значение не выводим
        self.get_value()
        attrs = self.field_attributes(config, type=TextInputType.PASSWORD.value)
        attrs.remove("value")
        return self.render_template(attrs=attrs)


class TextAreaHandler(TextHandler):
    kind = StrategyKind.TEXTAREA

    def render(self, config: FinalizedFieldConfiguration) -> Markup:
        value = self.get_value()
        attrs = self.field_attributes(config)
        return self.render_template(attrs=attrs, value=self.format_value(value, config))


class CheckboxHandler(FieldHandler):
    """Одиночный чекбокс для bool; скрытое поле передает false, если чекбокс не отмечен."""

    kind = StrategyKind.CHECKBOX

    def render(self, config: FinalizedFieldConfiguration) -> Markup:
        value = self.get_value()
        attrs = self.field_attributes(config, type="checkbox", value="true")
        if value is True:
            attrs.attr("checked", "checked")
        return self.render_template(
            attrs=attrs,
            name=self.generator.field_name,
            id=attrs.get("id"),
            inline_label=config.true_string,
        )


class ChoiceHandler(FieldHandler):
    """Общая логика полей с конечным набором значений."""

    def get_choices(self, config: FinalizedFieldConfiguration) -> List[SelectItem]:
        if config.options is not None:
            return list(config.options)
        if self.metadata.choices is not None:
            return list(self.metadata.choices)
        underlying = self.metadata.underlying_type
        settings = self.generator.settings
        if underlying is bool:
            return [
                SelectItem(value="true", text=config.true_string or settings.DEFAULT_TRUE_TEXT),
                SelectItem(value="false", text=config.false_string or settings.DEFAULT_FALSE_TEXT),
            ]
        if is_enum_type(underlying):
            return [SelectItem.from_choice(member) for member in underlying]
        if is_literal_type(underlying):
            return [
                SelectItem(value=value_to_string(v), text=str(v)) for v in get_literal_values(underlying)
            ]
        logger.error(f"Field '{self.generator.field_name}': no choices available for a choice field.")
        raise ConfigurationConflictError(self.generator.field_name, "no choices available.")

    def should_add_none_item(self, config: FinalizedFieldConfiguration) -> bool:
        is_checkbox_list = config.display_type == FieldDisplayType.LIST and self.has_multiple_values
        return not self.metadata.is_required and not is_checkbox_list

    def get_none_item(self, config: FinalizedFieldConfiguration) -> SelectItem:
        value = self.get_value()
        selected = value is None
        if self.metadata.underlying_type is str and not self.has_multiple_values:
            selected = not value
        is_list = config.display_type == FieldDisplayType.LIST
        use_default_text = (
            (not config.none_string and is_list and not self.has_multiple_values)
            or (not is_list and self.has_multiple_values)
        )
        # Однозначный выпадающий список без none_string получает пустой текст, не "None"
        text = self.generator.settings.DEFAULT_NONE_TEXT if use_default_text else (config.none_string or "")
        return SelectItem(value="", text=text, selected=selected)

    def get_select_items(self, config: FinalizedFieldConfiguration) -> List[SelectItem]:
        excluded = set(config.excluded_values)
        items = [
            SelectItem(value=choice.value, text=choice.text, selected=self.is_selected(choice.value))
            for choice in self.get_choices(config)
            if choice.value not in excluded
        ]
        if self.should_add_none_item(config):
            items.insert(0, self.get_none_item(config))
        return items


class DropDownHandler(ChoiceHandler):
    kind = StrategyKind.DROP_DOWN

    def prepare(self, config: FieldConfiguration) -> None:
        if config.display_type == FieldDisplayType.DEFAULT:
            config.as_drop_down()
        if self.has_multiple_values:
            config.attr("multiple", "multiple")

    def render(self, config: FinalizedFieldConfiguration) -> Markup:
        items = self.get_select_items(config)
        attrs = self.field_attributes(config)
        if self.has_multiple_values:
            attrs.attr("multiple", "multiple")
        return self.render_template(attrs=attrs, items=items)


class ListHandler(ChoiceHandler):
    """
    Группа радио-кнопок (однозначное поле) или чекбоксов (многозначное поле).
    id элементов: {полное имя поля}_{номер с 1}.
    """

    kind = StrategyKind.LIST

    def render(self, config: FinalizedFieldConfiguration) -> Markup:
        input_type = "checkbox" if self.has_multiple_values else "radio"
        rendered_items = []
        for index, item in enumerate(self.get_select_items(config), start=1):
            item_id = f"{self.generator.field_name}_{index}"
            attrs = HtmlAttributes(type=input_type, name=self.generator.field_name, value=item.value)
            attrs.attrs(config.attributes.items())
            attrs.attr("id", item_id)
            if item.selected:
                attrs.attr("checked", "checked")
            # Каждый чекбокс - отдельный input, каждому нужна связь с сообщением валидации
            self.apply_validation_state(attrs)
            rendered_items.append({"id": item_id, "text": item.text, "attrs": attrs})
        return self.render_template(items=rendered_items)


HANDLERS: Dict[StrategyKind, Type[FieldHandler]] = {
    StrategyKind.TEXT: TextHandler,
    StrategyKind.PASSWORD: PasswordHandler,
    StrategyKind.TEXTAREA: TextAreaHandler,
    StrategyKind.CHECKBOX: CheckboxHandler,
    StrategyKind.DROP_DOWN: DropDownHandler,
    StrategyKind.LIST: ListHandler,
}


def get_handler(generator: "FieldGenerator", config: FieldConfiguration) -> FieldHandler:
    kind = select_strategy(generator.metadata, config)
    logger.debug(f"Field '{generator.field_name}': selected strategy '{kind.value}'.")
    return HANDLERS[kind](generator)
