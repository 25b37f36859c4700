# forms_sdk/frontend/resolver.py
import logging
from typing import TYPE_CHECKING, Callable, Optional, Union

from .field_config import FieldConfiguration, FinalizedFieldConfiguration
from .metadata import FieldMetadata
from .types import FieldDisplayType

if TYPE_CHECKING:
    from .handlers import FieldHandler

logger = logging.getLogger("forms_sdk.frontend.resolver")

StrategyFactory = Callable[[FieldConfiguration], "FieldHandler"]
ContextualAdjust = Callable[[FieldConfiguration, "FieldHandler"], None]


class ConfigurationResolver:
    """
    Сводит метаданные модели, явную конфигурацию поля и правила шаблона
    в одну неизменяемую FinalizedFieldConfiguration.

    Явно заданные значения метаданными не перезаписываются; исключение -
    readonly, который метаданные включают принудительно.
    """

    def __init__(self, hint_id_suffix: str = "--Hint"):
        self.hint_id_suffix = hint_id_suffix

    def resolve(
        self,
        config: Union[FieldConfiguration, FinalizedFieldConfiguration, None],
        metadata: FieldMetadata,
        *,
        full_name: str,
        strategy_for: StrategyFactory,
        contextual_adjust: Optional[ContextualAdjust] = None,
    ) -> FinalizedFieldConfiguration:
        if isinstance(config, FinalizedFieldConfiguration):
            return config

        # Исходный объект вызывающего кода не меняем
        config = config.model_copy(deep=True) if config is not None else FieldConfiguration()

        if config.format_string is None and metadata.edit_format_string:
            config.with_format_string(metadata.edit_format_string)
        if config.none_string is None and metadata.null_display_text is not None:
            config.with_none_as(metadata.null_display_text)
        if metadata.is_read_only:
            config.readonly()

        if config.hint is not None:
            hint_id = f"{full_name}{self.hint_id_suffix}"
            config.with_hint_id(hint_id)
            config.attr("aria-describedby", hint_id)

        handler = strategy_for(config)
        handler.prepare(config)

        if contextual_adjust is not None:
            contextual_adjust(config, handler)

        if self._should_add_required(config, metadata):
            config.required()

        finalized = config.finalize()
        logger.debug(
            f"Resolved configuration for '{full_name}': display={finalized.display_type.value}, "
            f"attributes={dict(finalized.attribute_items)}"
        )
        return finalized

    @staticmethod
    def _should_add_required(config: FieldConfiguration, metadata: FieldMetadata) -> bool:
        if not metadata.is_required:
            return False
        attrs = config.attributes
        if attrs.has("readonly") or attrs.has("disabled") or attrs.has("required"):
            return False
        # Группа чекбоксов: required на каждом элементе потребовал бы отметить все
        return not (config.display_type == FieldDisplayType.LIST and metadata.is_multi_valued)
