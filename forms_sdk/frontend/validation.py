# forms_sdk/frontend/validation.py
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import ValidationError

from .types import ValidationState

logger = logging.getLogger("forms_sdk.frontend.validation")

FORM_ERRORS_KEY = "_form"


class ModelState:
    """
    Ошибки валидации привязанной модели по полным именам полей.

    is_validated=False означает, что модель еще не проверялась (например,
    первая загрузка формы создания) - все поля в состоянии UNVALIDATED.
    """

    def __init__(
        self,
        errors: Optional[Mapping[str, Iterable[str]]] = None,
        is_validated: Optional[bool] = None,
    ):
        self._errors: Dict[str, List[str]] = {}
        for field_name, messages in (errors or {}).items():
            for message in messages:
                self.add_error(field_name, message)
        self.is_validated = bool(errors) if is_validated is None else is_validated

    @classmethod
    def from_validation_error(
        cls, error: ValidationError, prefix: Optional[str] = None
    ) -> "ModelState":
        """Собирает ошибки из pydantic.ValidationError; loc превращается в точечный путь."""
        state = cls(is_validated=True)
        for error_item in error.errors():
            loc = [str(part) for part in error_item.get("loc", ()) if part != "body"]
            field_name = ".".join(loc) if loc else FORM_ERRORS_KEY
            if prefix and loc:
                field_name = f"{prefix}.{field_name}"
            state.add_error(field_name, error_item.get("msg", "Validation error"))
        logger.debug(
            f"ModelState built from ValidationError: {len(state._errors)} field(s) with errors."
        )
        return state

    def add_error(self, field_name: str, message: str) -> None:
        self._errors.setdefault(field_name, []).append(message)
        self.is_validated = True

    def get_errors(self, field_name: str) -> List[str]:
        return list(self._errors.get(field_name, []))

    def get_validation_state(self, field_name: str) -> ValidationState:
        if self._errors.get(field_name):
            return ValidationState.INVALID
        if self.is_validated:
            return ValidationState.VALID
        return ValidationState.UNVALIDATED

    @property
    def is_valid(self) -> bool:
        return not any(self._errors.values())

    def to_dict(self) -> Dict[str, Any]:
        return {name: list(messages) for name, messages in self._errors.items()}
