# forms_sdk/app_setup.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from forms_sdk.config import FormsSettings, get_settings
from forms_sdk.frontend.templating import initialize_templates, reset_templates
from forms_sdk.logging_config import setup_sdk_logging

logger = logging.getLogger("forms_sdk.app_setup")


@asynccontextmanager
async def forms_lifespan_manager(
    app: FastAPI,
    settings: Optional[FormsSettings] = None,
    service_template_dir: Optional[str] = None,
):
    """
    Подключает forms_sdk к жизненному циклу FastAPI приложения:
    логирование SDK и глобальные шаблоны Jinja2.

        app = FastAPI(lifespan=lambda app: forms_lifespan_manager(app, service_template_dir="templates"))
    """
    settings = settings or get_settings()
    setup_sdk_logging(settings.LOGGING_LEVEL)
    logger.info("Forms Lifespan: Starting up...")

    initialize_templates(service_template_dir)
    logger.info("Forms Lifespan: Templates initialized. Application running...")
    yield
    logger.info("Forms Lifespan: Starting shutdown sequence...")
    reset_templates()
    logger.info("Forms Lifespan: Shutdown sequence complete.")
