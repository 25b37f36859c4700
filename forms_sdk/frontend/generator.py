# forms_sdk/frontend/generator.py
import logging
from functools import cached_property
from typing import Any, Optional, Union

from markupsafe import Markup, escape

from forms_sdk.config import FormsSettings, get_settings
from .attributes import HtmlAttributes
from .binding import FieldBinding
from .config import LABEL_TEMPLATE, VALIDATION_MESSAGE_TEMPLATE
from .field_config import FieldConfiguration, FinalizedFieldConfiguration
from .handlers import FieldHandler, get_handler
from .metadata import FieldMetadata, MetadataAdapter
from .resolver import ConfigurationResolver
from .template import FormTemplate
from .types import FieldParent, ValidationState
from .utils import humanize
from .validation import ModelState

logger = logging.getLogger("forms_sdk.frontend.generator")

AnyFieldConfiguration = Union[FieldConfiguration, FinalizedFieldConfiguration, None]


class FieldGenerator:
    """
    Фасад одного поля формы: достает метаданные (один раз), решает конфигурацию
    и отдает три фрагмента - подпись, элемент поля и сообщение валидации.
    """

    def __init__(
        self,
        model: Any,
        binding: Union[FieldBinding, str],
        template: FormTemplate,
        metadata_adapter: MetadataAdapter,
        model_state: Optional[ModelState] = None,
        settings: Optional[FormsSettings] = None,
    ):
        self.model = model
        self.binding = FieldBinding.coerce(binding)
        self.template = template
        self.model_state = model_state or ModelState()
        self.settings = settings or get_settings()
        self.metadata: FieldMetadata = metadata_adapter.get_metadata(self.binding)
        self.resolver = ConfigurationResolver(self.settings.HINT_ID_SUFFIX)

    @property
    def field_name(self) -> str:
        return self.binding.full_name

    @cached_property
    def validation_state(self) -> ValidationState:
        # Читается один раз: классы css и is_valid для шаблона должны совпадать
        return self.model_state.get_validation_state(self.field_name)

    @property
    def is_valid(self) -> bool:
        return self.validation_state != ValidationState.INVALID

    def get_value(self) -> Any:
        return self.binding.get_value(self.model)

    def get_handler(self, config: Union[FieldConfiguration, FinalizedFieldConfiguration]) -> FieldHandler:
        return get_handler(self, config)

    def prepare_field_configuration(
        self,
        config: AnyFieldConfiguration = None,
        field_parent: FieldParent = FieldParent.SECTION,
    ) -> FinalizedFieldConfiguration:
        def contextual_adjust(cfg: FieldConfiguration, handler: FieldHandler) -> None:
            self.template.prepare_field_configuration(self, handler, cfg, field_parent)

        return self.resolver.resolve(
            config,
            self.metadata,
            full_name=self.field_name,
            strategy_for=self.get_handler,
            contextual_adjust=contextual_adjust,
        )

    def get_field_display_name(self) -> str:
        if self.metadata.display_name:
            return self.metadata.display_name
        if self.settings.HUMANIZED_LABELS:
            return humanize(self.binding.name)
        return self.binding.name

    def get_label_html(self, config: AnyFieldConfiguration = None) -> Markup:
        config = self.prepare_field_configuration(config)
        text = config.label_text if config.label_text is not None else self.get_field_display_name()
        if not config.has_label_element:
            return escape(text)
        attrs = HtmlAttributes()
        attrs.attr("for", config.attributes.get("id") or self.binding.html_id)
        attrs.add_class(config.label_classes)
        return self.template.render_element(LABEL_TEMPLATE, attrs=attrs, text=text)

    def get_field_html(self, config: AnyFieldConfiguration = None) -> Markup:
        config = self.prepare_field_configuration(config)
        if config.field_html is not None:
            return Markup(config.field_html)
        return self.get_handler(config).render(config)

    def get_validation_html(self, config: AnyFieldConfiguration = None) -> Markup:
        config = self.prepare_field_configuration(config)
        errors = self.model_state.get_errors(self.field_name)
        attrs = HtmlAttributes()
        if self.validation_state == ValidationState.INVALID:
            attrs.add_class(self.settings.VALIDATION_MESSAGE_CSS_CLASS)
        else:
            attrs.add_class(self.settings.VALIDATION_VALID_CSS_CLASS)
        attrs.add_class(config.validation_classes)
        attrs.attr("data-valmsg-for", self.field_name)
        return self.template.render_element(VALIDATION_MESSAGE_TEMPLATE, attrs=attrs, errors=errors)

    def __repr__(self) -> str:
        return f"FieldGenerator({self.field_name!r})"
