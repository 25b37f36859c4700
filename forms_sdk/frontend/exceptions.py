# forms_sdk/frontend/exceptions.py
from forms_sdk.exceptions import FormsSDKError


class FrontendError(FormsSDKError):
    """Базовый класс для ошибок движка рендеринга форм."""
    pass


class RenderingError(FrontendError):
    """Ошибка во время рендеринга шаблона или подготовки контекста."""
    pass


class ConfigurationConflictError(FrontendError):
    """
    Взаимоисключающие настройки поля, например явный тип отображения
    (список/выпадающий список) для поля без конечного набора значений.
    """

    def __init__(self, field_name: str, message: str):
        self.field_name = field_name
        super().__init__(f"Field '{field_name}': {message}")


class TypeMismatchError(FrontendError):
    """Тип текущего значения поля не совпадает с объявленным типом."""

    def __init__(self, field_name: str, expected: object, value: object):
        self.field_name = field_name
        self.expected = expected
        self.value = value
        expected_name = getattr(expected, "__name__", str(expected))
        super().__init__(
            f"Field '{field_name}': expected value of type '{expected_name}', "
            f"got '{type(value).__name__}' ({value!r})"
        )


class MissingIdentityError(FrontendError):
    """Поле создано без пути к свойству модели (или путь не найден)."""
    pass
