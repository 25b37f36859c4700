# forms_sdk/frontend/config.py
import os
from datetime import date, datetime, time
from decimal import Decimal
from typing import Dict

from .types import StrategyKind, TextInputType

# Пути относительно директории frontend внутри SDK
_CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
TEMPLATES_DIR = os.path.join(_CURRENT_DIR, "templates")

# Карта базовых типов Python/Pydantic на type у <input>
# Ключ - сам тип или имя типа (для типов из сторонних пакетов, например EmailStr)
FIELD_INPUT_TYPE_MAPPING: Dict[type | str, TextInputType] = {
    str: TextInputType.TEXT,
    int: TextInputType.NUMBER,
    float: TextInputType.NUMBER,
    Decimal: TextInputType.NUMBER,
    datetime: TextInputType.DATETIME,
    date: TextInputType.DATE,
    time: TextInputType.TIME,
    "EmailStr": TextInputType.EMAIL,
    "NameEmail": TextInputType.EMAIL,
    "HttpUrl": TextInputType.URL,
    "AnyUrl": TextInputType.URL,
    "AnyHttpUrl": TextInputType.URL,
    "SecretStr": TextInputType.PASSWORD,
    "PhoneNumber": TextInputType.TEL,
    "Color": TextInputType.COLOR,
}

# Маркерные типы pydantic: значение в модели хранится как обычный тип Python
VALIDATED_VALUE_TYPES: Dict[str, type] = {
    "EmailStr": str,
    "PastDate": date,
    "FutureDate": date,
    "AwareDatetime": datetime,
    "NaiveDatetime": datetime,
    "PastDatetime": datetime,
    "FutureDatetime": datetime,
}

# Значения json_schema_extra["data_type"], которые задают тип <input>
DATA_TYPE_INPUT_MAPPING: Dict[str, TextInputType] = {
    "password": TextInputType.PASSWORD,
    "email": TextInputType.EMAIL,
    "url": TextInputType.URL,
    "phone": TextInputType.TEL,
    "date": TextInputType.DATE,
    "datetime": TextInputType.DATETIME,
    "time": TextInputType.TIME,
    "number": TextInputType.NUMBER,
    "color": TextInputType.COLOR,
}

MULTILINE_DATA_TYPES = ("multiline", "textarea")

# Шаблоны фрагментов для каждой стратегии отображения
DEFAULT_FIELD_TEMPLATES: Dict[StrategyKind, str] = {
    StrategyKind.TEXT: "elements/input.html",
    StrategyKind.PASSWORD: "elements/input.html",
    StrategyKind.TEXTAREA: "elements/textarea.html",
    StrategyKind.CHECKBOX: "elements/checkbox.html",
    StrategyKind.DROP_DOWN: "elements/select.html",
    StrategyKind.LIST: "elements/choice_list.html",
}

LABEL_TEMPLATE = "elements/label.html"
VALIDATION_MESSAGE_TEMPLATE = "elements/validation_message.html"

# Шаблоны обертки формы (тема по умолчанию)
FORM_TEMPLATES: Dict[str, str] = {
    "begin_form": "form/begin_form.html",
    "end_form": "form/end_form.html",
    "begin_section": "form/begin_section.html",
    "end_section": "form/end_section.html",
    "field": "form/field.html",
    "begin_field": "form/begin_field.html",
    "end_field": "form/end_field.html",
}
