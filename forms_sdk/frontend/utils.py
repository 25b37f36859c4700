# forms_sdk/frontend/utils.py
import inspect
import re
import types
from collections.abc import Sequence as AbcSequence, Set as AbcSet
from enum import Enum
from typing import (
    Any,
    List as TypingList,
    Literal,
    Tuple,
    Union,
    get_args,
    get_origin,
)

from .config import VALIDATED_VALUE_TYPES

# Коллекции, которые считаются многозначными полями
_COLLECTION_ORIGINS = (list, tuple, set, frozenset, AbcSequence, AbcSet, TypingList)


def _is_union(origin: Any) -> bool:
    return origin is Union or origin is types.UnionType


def get_base_type(annotation: Any) -> Any:
    """
    Рекурсивно извлекает "базовый" тип из Optional / Union.
    Для List[T] возвращает саму аннотацию List[T].
    """
    origin = get_origin(annotation)

    if _is_union(origin):
        non_none_args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if non_none_args:
            # Для Union[A, B] берем первый не-None тип
            return get_base_type(non_none_args[0])
        return Any

    return annotation


def is_nullable(annotation: Any) -> bool:
    """Допускает ли аннотация None (Optional[T], T | None)."""
    if annotation is None or annotation is type(None):
        return True
    if _is_union(get_origin(annotation)):
        return any(arg is type(None) for arg in get_args(annotation))
    return False


def is_list_type(annotation: Any) -> bool:
    """
    Проверяет, является ли аннотация коллекцией (List[T], Set[T], Tuple[T, ...]),
    возможно, обернутой в Optional. Строки и байты коллекциями не считаются.
    """
    base = get_base_type(annotation)
    origin = get_origin(base)
    if origin is not None:
        return origin in _COLLECTION_ORIGINS
    return inspect.isclass(base) and base in (list, tuple, set, frozenset)


def get_list_item_type(annotation: Any) -> Any:
    """
    Извлекает базовый тип элемента коллекции, даже если она обернута в Optional.
    Возвращает None, если это не коллекция, и Any для коллекции без параметров.
    """
    if not is_list_type(annotation):
        return None
    args = [arg for arg in get_args(get_base_type(annotation)) if arg is not Ellipsis]
    if args:
        return get_base_type(args[0])
    return Any


def get_underlying_type(annotation: Any) -> Any:
    """
    Тип значения поля после снятия Optional и обертки коллекции.
    По нему выбирается стратегия отображения.
    """
    if is_list_type(annotation):
        return get_list_item_type(annotation)
    return get_base_type(annotation)


def is_enum_type(type_to_check: Any) -> bool:
    return inspect.isclass(type_to_check) and issubclass(type_to_check, Enum)


def is_literal_type(type_to_check: Any) -> bool:
    return get_origin(type_to_check) is Literal


def get_literal_values(type_to_check: Any) -> Tuple[Any, ...]:
    if not is_literal_type(type_to_check):
        return ()
    return get_args(type_to_check)


def humanize(name: str) -> str:
    """
    "first_name" -> "First name", "postCode" -> "Post code", "HTTPProxy" -> "Http proxy".
    """
    if not name:
        return name
    words = re.sub(r"([a-z0-9])([A-Z])", r"\1 \2", name)
    words = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1 \2", words)
    words = words.replace("_", " ").replace("-", " ")
    words = " ".join(words.split()).lower()
    return words[:1].upper() + words[1:]


def type_name(type_to_name: Any) -> str:
    return getattr(type_to_name, "__name__", str(type_to_name))


def value_to_string(value: Any) -> str:
    """
    Строковое представление значения для атрибутов value / сравнения выбранных элементов.
    Enum -> значение члена, bool -> "true"/"false".
    """
    if value is None:
        return ""
    if isinstance(value, Enum):
        return value_to_string(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def get_validated_type(type_to_check: Any) -> Any:
    """
    Тип, в котором pydantic хранит значение поля.
    EmailStr, PastDate и подобные маркеры - это не типы значений: EmailStr -> str.
    """
    if not inspect.isclass(type_to_check):
        return type_to_check
    if not getattr(type_to_check, "__module__", "").startswith("pydantic"):
        return type_to_check
    return VALIDATED_VALUE_TYPES.get(type_to_check.__name__, type_to_check)


def value_matches_type(value: Any, expected: Any) -> bool:
    """
    Проверяет тип текущего значения поля относительно базового типа.
    None допустим всегда. int допустим для float/Decimal, bool - только для bool.
    """
    if value is None or expected is Any or expected is None:
        return True
    if is_literal_type(expected):
        return value in get_literal_values(expected)
    origin = get_origin(expected)
    check_type = origin if origin is not None else expected
    check_type = get_validated_type(check_type)
    if not inspect.isclass(check_type):
        # Неизвестные конструкции typing (Annotated, NewType и т.п.) не проверяем
        return True
    if isinstance(value, bool) and check_type is not bool:
        return issubclass(check_type, bool) or check_type is object
    if check_type is float and isinstance(value, int):
        return True
    if type_name(check_type) == "Decimal" and isinstance(value, (int, float)):
        return True
    try:
        return isinstance(value, check_type)
    except TypeError:
        return True


def get_attr_path(obj: Any, path: str, default: Any = None) -> Any:
    """
    Получает значение по точечному пути ("address.city", "lines.0.sku").
    Возвращает default, если любой промежуточный объект отсутствует.
    """
    current = obj
    for part in path.split("."):
        if current is None:
            return default
        if isinstance(current, dict):
            current = current.get(part, default)
        elif part.isdigit() and isinstance(current, (list, tuple)):
            index = int(part)
            current = current[index] if index < len(current) else default
        else:
            current = getattr(current, part, default)
    return current
