# forms_sdk/frontend/dependencies.py
import logging
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.responses import HTMLResponse

from .components import Form
from .template import DefaultFormTemplate, FormTemplate
from .templating import get_environment, get_templates

logger = logging.getLogger("forms_sdk.frontend.dependencies")


# Зависимость для эндпоинтов, которые строят формы: тема по умолчанию
# поверх глобального окружения Jinja2 (с директориями приложения)
def get_form_template() -> FormTemplate:
    return DefaultFormTemplate(env=get_environment())


def render_form_response(form: Form, status_code: int = 200) -> HTMLResponse:
    """Закрывает форму (если она еще открыта) и отдает ее разметку."""
    form.close()
    return HTMLResponse(content=str(form.to_html()), status_code=status_code)


def render_template_response(
    request: Request,
    template_name: str,
    context: Optional[Dict[str, Any]] = None,
    status_code: int = 200,
) -> HTMLResponse:
    """Рендерит страницу приложения, в контекст которой можно передать Form."""
    logger.debug(f"Rendering template response '{template_name}'.")
    return get_templates().TemplateResponse(
        request, template_name, context or {}, status_code=status_code
    )
