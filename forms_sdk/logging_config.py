# forms_sdk/logging_config.py
import logging
import sys

# Определяем имя базового логгера для всего SDK
SDK_LOGGER_NAME = "forms_sdk"


def setup_sdk_logging(
    level=logging.INFO,
    log_format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
):
    """Настраивает базовый логгер SDK."""
    logger = logging.getLogger(SDK_LOGGER_NAME)

    # Предотвращаем дублирование обработчиков, если функция вызывается несколько раз
    if logger.handlers:
        logger.debug(
            f"Logger '{SDK_LOGGER_NAME}' already has handlers. Skipping setup."
        )
        return logger

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logger.setLevel(level)

    # Обработчик для вывода в консоль
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(log_format))
    logger.addHandler(handler)

    logger.debug(
        f"SDK Logging setup complete for '{SDK_LOGGER_NAME}' at level {logging.getLevelName(level)}"
    )
    return logger


def get_sdk_logger(name: str = SDK_LOGGER_NAME) -> logging.Logger:
    """Возвращает экземпляр логгера SDK (или его дочерний)."""
    return logging.getLogger(name)
