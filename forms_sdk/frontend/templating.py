# forms_sdk/frontend/templating.py
import logging
import os
from typing import Any, List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup
from starlette.templating import Jinja2Templates

from forms_sdk.config import get_settings
from forms_sdk.exceptions import ConfigurationError
from .config import TEMPLATES_DIR
from .exceptions import FrontendError, RenderingError
from .utils import value_to_string

# Путь к шаблонам внутри SDK остается как базовый
SDK_TEMPLATES_DIR = TEMPLATES_DIR

logger = logging.getLogger("forms_sdk.frontend.templating")

# Глобальная переменная для хранения экземпляра Jinja2Templates
# Инициализируется один раз при старте приложения (или лениво при первом рендеринге)
templates: Optional[Jinja2Templates] = None


def setup_jinja_env(template_dirs: List[str]) -> Environment:
    """
    Создает и настраивает окружение Jinja2 с поддержкой
    нескольких директорий для переопределения.
    Директории в начале списка имеют приоритет.
    """
    if not template_dirs:
        raise ValueError("At least one template directory must be provided.")

    logger.debug(f"Setting up Jinja2 environment with loaders for: {template_dirs}")
    env = Environment(
        loader=FileSystemLoader(template_dirs),  # Директории приложения должны быть первыми!
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
        enable_async=False,
    )
    env.filters["tostring"] = value_to_string

    logger.info(
        f"Jinja2 environment configured successfully with search path: {template_dirs}"
    )
    return env


def initialize_templates(service_template_dir: Optional[str] = None):
    """
    Инициализирует глобальный объект `templates`, настраивая пути поиска:
    директория сервиса, директории из настроек FORMS_TEMPLATE_DIRS, шаблоны SDK.

    :param service_template_dir: Путь к директории шаблонов сервиса (e.g., 'apps/frontend/templates')
    """
    global templates
    if templates is not None:
        logger.warning("Templates already initialized. Skipping re-initialization.")
        return

    search_paths = []
    for template_dir in [service_template_dir, *get_settings().TEMPLATE_DIRS]:
        if not template_dir:
            continue
        if os.path.isdir(template_dir):
            search_paths.append(template_dir)
        else:
            logger.warning(
                f"Template directory '{template_dir}' not found. Skipping it."
            )
    search_paths.append(SDK_TEMPLATES_DIR)

    try:
        templates = Jinja2Templates(env=setup_jinja_env(search_paths))
        logger.info("Global Jinja2Templates instance initialized.")
    except Exception as e:
        logger.critical("Failed to initialize Jinja2Templates.", exc_info=True)
        raise ConfigurationError("Failed to initialize templates") from e


def get_templates() -> Jinja2Templates:
    if templates is None:
        logger.debug("Templates accessed before initialization, using SDK defaults.")
        initialize_templates()
    return templates


def get_environment() -> Environment:
    return get_templates().env


def reset_templates() -> None:
    """Сбрасывает глобальные шаблоны (для тестов и горячей перезагрузки)."""
    global templates
    templates = None


def render_fragment(env: Environment, template_name: str, **context: Any) -> Markup:
    try:
        return Markup(env.get_template(template_name).render(**context))
    except FrontendError:
        raise
    except Exception as e:
        logger.error(f"Failed to render template '{template_name}': {e}", exc_info=True)
        raise RenderingError(f"Failed to render template '{template_name}'.") from e
