# forms_sdk/frontend/metadata.py
import logging
from typing import Any, Dict, Mapping, Optional, Protocol, Tuple, Type, runtime_checkable

from pydantic import BaseModel, ConfigDict
from pydantic.fields import FieldInfo as PydanticFieldInfo

from .binding import FieldBinding
from .exceptions import MissingIdentityError
from .field_config import SelectItem
from .utils import (
    get_base_type,
    get_list_item_type,
    get_underlying_type,
    is_enum_type,
    is_list_type,
    is_literal_type,
    is_nullable,
    type_name,
)

logger = logging.getLogger("forms_sdk.frontend.metadata")


class FieldMetadata(BaseModel):
    """
    Факты о поле, полученные из модели: обязательность, только чтение,
    отображаемое имя, строки форматирования, тип значения.
    """
    name: str
    model_type: Any = None
    underlying_type: Any = None
    is_multi_valued: bool = False
    is_nullable: bool = False
    is_required: bool = False
    is_read_only: bool = False
    display_name: Optional[str] = None
    edit_format_string: Optional[str] = None
    null_display_text: Optional[str] = None
    description: Optional[str] = None
    data_type: Optional[str] = None
    choices: Optional[Tuple[SelectItem, ...]] = None

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, protected_namespaces=())

    @classmethod
    def for_type(cls, name: str, annotation: Any, **facts: Any) -> "FieldMetadata":
        """Строит метаданные по аннотации типа; остальные факты передаются как есть."""
        choices = facts.pop("choices", None)
        return cls(
            name=name,
            model_type=annotation,
            underlying_type=get_underlying_type(annotation),
            is_multi_valued=is_list_type(annotation),
            is_nullable=is_nullable(annotation),
            choices=tuple(SelectItem.from_choice(c) for c in choices) if choices is not None else None,
            **facts,
        )

    @property
    def has_bounded_choices(self) -> bool:
        """Есть ли у поля конечный набор значений (Enum, Literal, bool, choices)."""
        return (
            self.choices is not None
            or self.underlying_type is bool
            or is_enum_type(self.underlying_type)
            or is_literal_type(self.underlying_type)
        )


@runtime_checkable
class MetadataAdapter(Protocol):
    """Источник метаданных поля. Отсутствующие факты просто не заполняются."""

    def get_metadata(self, binding: FieldBinding) -> FieldMetadata:
        ...


def _get_schema_extra(field_info: PydanticFieldInfo) -> Dict[str, Any]:
    extra = field_info.json_schema_extra
    if callable(extra):
        # Функция-модификатор схемы: вызываем на пустом словаре
        schema: Dict[str, Any] = {}
        try:
            extra(schema)
        except TypeError:
            extra(schema, None)
        return schema
    if isinstance(extra, dict):
        return dict(extra)
    return {}


class PydanticMetadataAdapter:
    """
    Метаданные из Pydantic-модели. Путь "address.city" проходит через
    вложенные модели (и списки моделей: "lines.0.sku").

    Используемые ключи json_schema_extra: readonly, format_string, none_text,
    data_type, choices.
    """

    def __init__(self, model_cls: Type[BaseModel]):
        if not (isinstance(model_cls, type) and issubclass(model_cls, BaseModel)):
            raise TypeError(f"model_cls must be a Pydantic model, got {model_cls!r}")
        self.model_cls = model_cls

    def _find_field(self, path: str) -> Tuple[str, PydanticFieldInfo]:
        current_cls: Any = self.model_cls
        segments = path.split(".")
        field_info: Optional[PydanticFieldInfo] = None
        name = segments[-1]
        for index, segment in enumerate(segments):
            if segment.isdigit() and field_info is not None and is_list_type(field_info.annotation):
                # Индекс в списке вложенных моделей
                current_cls = get_list_item_type(field_info.annotation)
                continue
            model_fields = getattr(current_cls, "model_fields", None)
            if not model_fields or segment not in model_fields:
                logger.error(
                    f"Field path '{path}' not found in model {self.model_cls.__name__} (segment '{segment}')."
                )
                raise MissingIdentityError(
                    f"Property '{path}' not found in model '{self.model_cls.__name__}'."
                )
            field_info = model_fields[segment]
            name = segment
            if index < len(segments) - 1:
                current_cls = get_base_type(field_info.annotation)
        return name, field_info

    def get_metadata(self, binding: FieldBinding) -> FieldMetadata:
        name, field_info = self._find_field(binding.metadata_key)
        extra = _get_schema_extra(field_info)
        annotation = field_info.annotation
        underlying = get_underlying_type(annotation)

        data_type = extra.get("data_type")
        if data_type is None and type_name(underlying) == "SecretStr":
            data_type = "password"

        metadata = FieldMetadata.for_type(
            name,
            annotation,
            is_required=field_info.is_required(),
            is_read_only=bool(extra.get("readonly", False) or field_info.frozen),
            display_name=field_info.title,
            edit_format_string=extra.get("format_string"),
            null_display_text=extra.get("none_text"),
            description=field_info.description,
            data_type=data_type,
            choices=extra.get("choices"),
        )
        logger.debug(
            "Metadata for '%s': type=%s, underlying=%s, multi=%s, required=%s, readonly=%s",
            binding.full_name, annotation, type_name(underlying),
            metadata.is_multi_valued, metadata.is_required, metadata.is_read_only,
        )
        return metadata


class StaticMetadataAdapter:
    """Метаданные из готового словаря {путь: FieldMetadata}; для моделей без схемы."""

    def __init__(self, metadata: Mapping[str, FieldMetadata]):
        self._metadata = dict(metadata)

    def get_metadata(self, binding: FieldBinding) -> FieldMetadata:
        try:
            return self._metadata[binding.metadata_key]
        except KeyError:
            raise MissingIdentityError(
                f"No metadata registered for property '{binding.metadata_key}'."
            ) from None
