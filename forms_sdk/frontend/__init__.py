# forms_sdk/frontend/__init__.py
from .attributes import HtmlAttributes
from .binding import FieldBinding
from .components import Field, Form, FormComponent, Section, get_current_parent_field
from .field_config import FieldConfiguration, FinalizedFieldConfiguration, SelectItem
from .generator import FieldGenerator
from .handlers import HANDLERS, FieldHandler, select_strategy
from .metadata import FieldMetadata, MetadataAdapter, PydanticMetadataAdapter, StaticMetadataAdapter
from .resolver import ConfigurationResolver
from .template import DefaultFormTemplate, FormTemplate
from .templating import get_templates, initialize_templates, templates
from .types import FieldDisplayType, StrategyKind, TextInputType, ValidationState
from .validation import ModelState

__all__ = [
    "Form",
    "Section",
    "Field",
    "FormComponent",
    "get_current_parent_field",
    "FieldConfiguration",
    "FinalizedFieldConfiguration",
    "SelectItem",
    "HtmlAttributes",
    "FieldBinding",
    "FieldGenerator",
    "FieldHandler",
    "HANDLERS",
    "select_strategy",
    "FieldMetadata",
    "MetadataAdapter",
    "PydanticMetadataAdapter",
    "StaticMetadataAdapter",
    "ConfigurationResolver",
    "FormTemplate",
    "DefaultFormTemplate",
    "ModelState",
    "FieldDisplayType",
    "StrategyKind",
    "TextInputType",
    "ValidationState",
    "templates",
    "get_templates",
    "initialize_templates",
]
