# forms_sdk/frontend/template.py
from typing import TYPE_CHECKING, Any, Optional

from jinja2 import Environment
from markupsafe import Markup

from .attributes import HtmlAttributes
from .config import FORM_TEMPLATES
from .field_config import FieldConfiguration, FinalizedFieldConfiguration
from .metadata import FieldMetadata
from .templating import get_environment, render_fragment
from .types import FieldParent

if TYPE_CHECKING:
    from .generator import FieldGenerator
    from .handlers import FieldHandler


class FormTemplate:
    """
    Шаблон (тема) формы: превращает готовые фрагменты (подпись, поле,
    сообщение валидации) в итоговую разметку. Ядро само разметку не собирает,
    кроме набора атрибутов.
    """

    def prepare_field_configuration(
        self,
        generator: "FieldGenerator",
        handler: "FieldHandler",
        config: FieldConfiguration,
        field_parent: FieldParent,
    ) -> None:
        """Последняя точка настройки поля перед финализацией конфигурации."""
        pass

    def render_element(self, template_name: str, **context: Any) -> Markup:
        raise NotImplementedError

    def begin_form(
        self, action: str, method: str, attributes: HtmlAttributes, enctype: Optional[str] = None
    ) -> Markup:
        raise NotImplementedError

    def end_form(self) -> Markup:
        raise NotImplementedError

    def begin_section(
        self,
        heading: Optional[str] = None,
        hint: Optional[str] = None,
        nested: bool = False,
        attributes: Optional[HtmlAttributes] = None,
    ) -> Markup:
        raise NotImplementedError

    def end_section(self) -> Markup:
        raise NotImplementedError

    def field(
        self,
        label_html: Markup,
        field_html: Markup,
        validation_html: Markup,
        metadata: FieldMetadata,
        config: FinalizedFieldConfiguration,
        is_valid: bool,
        parent_name: Optional[str] = None,
    ) -> Markup:
        raise NotImplementedError

    def begin_field(
        self,
        label_html: Markup,
        field_html: Markup,
        validation_html: Markup,
        metadata: FieldMetadata,
        config: FinalizedFieldConfiguration,
        is_valid: bool,
        parent_name: Optional[str] = None,
    ) -> Markup:
        raise NotImplementedError

    def end_field(self) -> Markup:
        raise NotImplementedError


class DefaultFormTemplate(FormTemplate):
    """Тема по умолчанию: шаблоны Jinja2 из forms_sdk/frontend/templates."""

    def __init__(self, env: Optional[Environment] = None):
        self._env = env

    @property
    def env(self) -> Environment:
        if self._env is None:
            self._env = get_environment()
        return self._env

    def render_element(self, template_name: str, **context: Any) -> Markup:
        return render_fragment(self.env, template_name, **context)

    def _field_context(
        self,
        label_html: Markup,
        field_html: Markup,
        validation_html: Markup,
        metadata: FieldMetadata,
        config: FinalizedFieldConfiguration,
        is_valid: bool,
        parent_name: Optional[str],
    ) -> dict:
        return {
            "label": label_html,
            "field": field_html,
            "validation": validation_html,
            "metadata": metadata,
            "config": config,
            "is_valid": is_valid,
            "is_required": config.has_attribute("required"),
            "hint": config.hint,
            "hint_id": config.hint_id,
            "parent": parent_name,
        }

    def begin_form(
        self, action: str, method: str, attributes: HtmlAttributes, enctype: Optional[str] = None
    ) -> Markup:
        return self.render_element(
            FORM_TEMPLATES["begin_form"],
            action=action, method=method, attrs=attributes, enctype=enctype,
        )

    def end_form(self) -> Markup:
        return self.render_element(FORM_TEMPLATES["end_form"])

    def begin_section(
        self,
        heading: Optional[str] = None,
        hint: Optional[str] = None,
        nested: bool = False,
        attributes: Optional[HtmlAttributes] = None,
    ) -> Markup:
        attrs = attributes.copy() if attributes is not None else HtmlAttributes()
        if nested:
            attrs.add_class("nested")
        return self.render_element(
            FORM_TEMPLATES["begin_section"], heading=heading, hint=hint, attrs=attrs,
        )

    def end_section(self) -> Markup:
        return self.render_element(FORM_TEMPLATES["end_section"])

    def field(self, label_html, field_html, validation_html, metadata, config, is_valid, parent_name=None) -> Markup:
        return self.render_element(
            FORM_TEMPLATES["field"],
            **self._field_context(label_html, field_html, validation_html, metadata, config, is_valid, parent_name),
        )

    def begin_field(self, label_html, field_html, validation_html, metadata, config, is_valid, parent_name=None) -> Markup:
        return self.render_element(
            FORM_TEMPLATES["begin_field"],
            **self._field_context(label_html, field_html, validation_html, metadata, config, is_valid, parent_name),
        )

    def end_field(self) -> Markup:
        return self.render_element(FORM_TEMPLATES["end_field"])
