# forms_sdk/exceptions.py


class FormsSDKError(Exception):
    """
    Базовый класс для всех пользовательских исключений, возникающих в forms_sdk.
    Это позволяет ловить все ошибки SDK одним блоком except FormsSDKError, если нужно.
    """

    pass


class ConfigurationError(FormsSDKError):
    """
    Исключение, возникающее при ошибках конфигурации SDK.
    Например, если шаблоны не инициализированы или директория шаблонов не найдена.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"Configuration Error: {self.message}"
