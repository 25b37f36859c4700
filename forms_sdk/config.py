# forms_sdk/config.py
from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    SettingsConfigDict,
)


class FormsSettings(BaseSettings):
    LOGGING_LEVEL: str = Field(
        "INFO",
        json_schema_extra={"examples": ["DEBUG", "INFO", "WARNING", "ERROR"]}
    )
    # Подписи полей по умолчанию: "first_name" -> "First name"
    HUMANIZED_LABELS: bool = True
    DEFAULT_NONE_TEXT: str = Field(
        "None", description="Текст пустого варианта в списках выбора."
    )
    DEFAULT_TRUE_TEXT: str = "Yes"
    DEFAULT_FALSE_TEXT: str = "No"
    VALIDATION_INPUT_CSS_CLASS: str = "input-validation-error"
    VALIDATION_MESSAGE_CSS_CLASS: str = "field-validation-error"
    VALIDATION_VALID_CSS_CLASS: str = "field-validation-valid"
    HINT_ID_SUFFIX: str = "--Hint"
    # Директории с шаблонами приложения; имеют приоритет над шаблонами SDK
    TEMPLATE_DIRS: List[str] = []

    model_config = SettingsConfigDict(
        env_prefix="FORMS_",
        extra='ignore',
    )


@lru_cache()
def get_settings() -> FormsSettings:
    return FormsSettings()
