# forms_sdk/frontend/components.py
"""
Компоненты формы: Form, Section и Field.

Компонент либо самозакрывающийся (разметка выводится один раз целиком),
либо контейнер: открывающая разметка пишется в буфер формы при создании,
закрывающая - при close() или выходе из блока with.

    with Form(model) as form:
        with form.begin_section("Контакты") as section:
            section.field_for("email")
            with section.begin_field_for("address") as address:
                address.field_for("address.city")
    html = form.to_html()
"""
import contextvars
import logging
from typing import Any, List, Optional, Type, Union

from markupsafe import Markup
from pydantic import BaseModel, ValidationError

from forms_sdk.config import FormsSettings, get_settings
from forms_sdk.exceptions import ConfigurationError
from .attributes import HtmlAttributes
from .binding import FieldBinding
from .field_config import FieldConfiguration
from .generator import AnyFieldConfiguration, FieldGenerator
from .metadata import MetadataAdapter, PydanticMetadataAdapter
from .template import DefaultFormTemplate, FormTemplate
from .types import ComponentState, FieldParent
from .validation import ModelState

logger = logging.getLogger("forms_sdk.frontend.components")

# Текущее родительское поле (контейнер), свое для каждого запроса/задачи
_current_parent_field: contextvars.ContextVar[Optional["Field"]] = (
    contextvars.ContextVar("current_parent_field", default=None)
)


def get_current_parent_field() -> Optional["Field"]:
    return _current_parent_field.get()


class FormComponent:
    def __init__(self, form: "Form", is_self_closing: bool):
        self.form = form
        self.is_self_closing = is_self_closing
        self.state = ComponentState.CREATED

    def initialise(self) -> None:
        """Контейнер сразу пишет открывающую разметку в буфер формы."""
        if self.is_self_closing:
            return
        self.form.write(self.begin())
        self.state = ComponentState.OPENED

    def begin(self) -> Markup:
        raise NotImplementedError

    def end(self) -> Markup:
        raise NotImplementedError

    def render(self) -> Markup:
        """Полная разметка самозакрывающегося компонента; выдается один раз."""
        if not self.is_self_closing:
            raise TypeError(f"{type(self).__name__} is a container and can't be rendered at once.")
        if self.state == ComponentState.CLOSED:
            return Markup("")
        markup = self.begin()
        self.state = ComponentState.CLOSED
        return markup

    def close(self) -> None:
        if self.state != ComponentState.OPENED:
            return
        try:
            self.form.write(self.end())
        finally:
            self.state = ComponentState.CLOSED
            self._on_closed()

    def _on_closed(self) -> None:
        pass

    def __html__(self) -> str:
        return self.render() if self.is_self_closing else Markup("")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class _FieldContainer:
    """Вывод дочерних полей внутри секции или поля-контейнера."""

    form: "Form"

    def field_for(self, path: Union[FieldBinding, str], config: Optional[FieldConfiguration] = None) -> "Field":
        field = Field(self.form, self.form.get_field_generator(path), config)
        self.form.write(field.render())
        return field

    def begin_field_for(
        self, path: Union[FieldBinding, str], config: Optional[FieldConfiguration] = None
    ) -> "Field":
        return Field(self.form, self.form.get_field_generator(path), config, is_parent=True)


class Field(FormComponent, _FieldContainer):
    """
    Поле формы. Контейнер (is_parent=True) выводит дочерние поля между
    begin_field и end_field и на время своей жизни становится текущим
    родительским полем.
    """

    def __init__(
        self,
        form: "Form",
        generator: FieldGenerator,
        config: Optional[FieldConfiguration] = None,
        is_parent: bool = False,
    ):
        super().__init__(form, is_self_closing=not is_parent)
        self.generator = generator
        self.config = config if config is not None else FieldConfiguration()
        self.parent_field = get_current_parent_field()
        self._token: Optional[contextvars.Token] = None
        self.initialise()
        if is_parent:
            self._token = _current_parent_field.set(self)
            logger.debug(f"Field '{generator.field_name}' opened as parent field.")

    def _render_parts(self):
        config = self.generator.prepare_field_configuration(self.config, FieldParent.SECTION)
        parent_name = self.parent_field.generator.field_name if self.parent_field else None
        return (
            self.generator.get_label_html(config),
            self.generator.get_field_html(config),
            self.generator.get_validation_html(config),
            self.generator.metadata,
            config,
            self.generator.is_valid,
            parent_name,
        )

    def begin(self) -> Markup:
        template = self.form.template
        if self.is_self_closing:
            return template.field(*self._render_parts())
        return template.begin_field(*self._render_parts())

    def end(self) -> Markup:
        return self.form.template.end_field()

    def _nearest_open_parent(self) -> Optional["Field"]:
        parent = self.parent_field
        while parent is not None and parent.state == ComponentState.CLOSED:
            parent = parent.parent_field
        return parent

    def _on_closed(self) -> None:
        if self._token is None:
            return
        token, self._token = self._token, None
        # Контейнеры могут закрываться не по порядку: текущим родителем
        # становится ближайший еще открытый предок, а не закрытое поле
        if _current_parent_field.get() is self:
            parent = self._nearest_open_parent()
            if parent is self.parent_field:
                _current_parent_field.reset(token)
            else:
                _current_parent_field.set(parent)
        logger.debug(f"Field '{self.generator.field_name}' closed.")


class Section(FormComponent, _FieldContainer):
    def __init__(
        self,
        form: "Form",
        heading: Optional[str] = None,
        hint: Optional[str] = None,
        nested: bool = False,
        attributes: Optional[HtmlAttributes] = None,
    ):
        super().__init__(form, is_self_closing=False)
        self.heading = heading
        self.hint = hint
        self.nested = nested
        self.attributes = attributes
        self.initialise()

    def begin(self) -> Markup:
        return self.form.template.begin_section(self.heading, self.hint, self.nested, self.attributes)

    def end(self) -> Markup:
        return self.form.template.end_section()

    def begin_section(self, heading: Optional[str] = None, hint: Optional[str] = None, **attrs: Any) -> "Section":
        return Section(self.form, heading, hint, nested=True, attributes=HtmlAttributes(attrs))


class Form(FormComponent, _FieldContainer):
    """
    Форма над моделью. Собирает разметку в собственный буфер; результат -
    to_html() (или сам объект в шаблоне Jinja2).
    """

    def __init__(
        self,
        model: Any = None,
        *,
        model_cls: Optional[Type[BaseModel]] = None,
        template: Optional[FormTemplate] = None,
        metadata_adapter: Optional[MetadataAdapter] = None,
        model_state: Union[ModelState, ValidationError, None] = None,
        action: str = "",
        method: str = "post",
        enctype: Optional[str] = None,
        attributes: Optional[HtmlAttributes] = None,
        prefix: Optional[str] = None,
        settings: Optional[FormsSettings] = None,
    ):
        super().__init__(self, is_self_closing=False)
        self.model = model
        self.prefix = prefix
        self.settings = settings or get_settings()
        self.template = template or DefaultFormTemplate()
        self.metadata_adapter = metadata_adapter or self._default_metadata_adapter(model, model_cls)
        if isinstance(model_state, ValidationError):
            model_state = ModelState.from_validation_error(model_state, prefix=prefix)
        self.model_state = model_state or ModelState()
        self.action = action
        self.method = method
        self.enctype = enctype
        self.attributes = attributes or HtmlAttributes()
        self._buffer: List[Markup] = []
        self.initialise()

    @staticmethod
    def _default_metadata_adapter(model: Any, model_cls: Optional[Type[BaseModel]]) -> MetadataAdapter:
        model_cls = model_cls or (type(model) if model is not None else None)
        if model_cls is None:
            logger.error("Form created without a model and without a model class.")
            raise ConfigurationError("Form needs a model, a model_cls or a metadata_adapter.")
        try:
            return PydanticMetadataAdapter(model_cls)
        except TypeError as e:
            logger.error(f"Can't build metadata adapter for {model_cls!r}: {e}")
            raise ConfigurationError(
                f"Model class {model_cls!r} is not a Pydantic model; pass a metadata_adapter."
            ) from e

    # --- Буфер ---
    def write(self, markup: Markup) -> None:
        self._buffer.append(Markup(markup))

    def to_html(self) -> Markup:
        return Markup("").join(self._buffer)

    def __html__(self) -> str:
        return self.to_html()

    def begin(self) -> Markup:
        return self.template.begin_form(self.action, self.method, self.attributes, self.enctype)

    def end(self) -> Markup:
        return self.template.end_form()

    # --- Поля ---
    def get_field_generator(self, path: Union[FieldBinding, str]) -> FieldGenerator:
        return FieldGenerator(
            self.model,
            FieldBinding.coerce(path, prefix=self.prefix),
            self.template,
            self.metadata_adapter,
            self.model_state,
            self.settings,
        )

    def begin_section(self, heading: Optional[str] = None, hint: Optional[str] = None, **attrs: Any) -> Section:
        return Section(self, heading, hint, attributes=HtmlAttributes(attrs))

    def _prepare(self, path: Union[FieldBinding, str], config: AnyFieldConfiguration):
        generator = self.get_field_generator(path)
        return generator, generator.prepare_field_configuration(config, FieldParent.FORM)

    def label_for(self, path: Union[FieldBinding, str], config: AnyFieldConfiguration = None) -> Markup:
        generator, finalized = self._prepare(path, config)
        return generator.get_label_html(finalized)

    def field_element_for(self, path: Union[FieldBinding, str], config: AnyFieldConfiguration = None) -> Markup:
        generator, finalized = self._prepare(path, config)
        return generator.get_field_html(finalized)

    def validation_message_for(
        self, path: Union[FieldBinding, str], config: AnyFieldConfiguration = None
    ) -> Markup:
        generator, finalized = self._prepare(path, config)
        return generator.get_validation_html(finalized)
