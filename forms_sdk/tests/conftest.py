# forms_sdk/tests/conftest.py
import logging
from typing import Optional

import pytest
from pydantic import SecretStr

from forms_sdk.config import FormsSettings
from forms_sdk.frontend import templating
from forms_sdk.frontend.generator import FieldGenerator
from forms_sdk.frontend.metadata import PydanticMetadataAdapter
from forms_sdk.frontend.template import DefaultFormTemplate
from forms_sdk.frontend.validation import ModelState
from forms_sdk.tests.sample_models import Address, Color, Profile

logger = logging.getLogger("forms_sdk.tests.conftest")


@pytest.fixture(autouse=True)
def reset_templates_fixture():
    templating.reset_templates()
    yield
    templating.reset_templates()


@pytest.fixture
def test_settings() -> FormsSettings:
    return FormsSettings()


@pytest.fixture
def profile() -> Profile:
    return Profile(
        first_name="Ann",
        age=30,
        password=SecretStr("secret"),
        accepts_terms=True,
        colors=[Color.RED, Color.BLUE],
        address=Address(city="Riga"),
    )


@pytest.fixture
def metadata_adapter() -> PydanticMetadataAdapter:
    return PydanticMetadataAdapter(Profile)


@pytest.fixture
def default_template() -> DefaultFormTemplate:
    return DefaultFormTemplate()


@pytest.fixture
def make_generator(profile, metadata_adapter, default_template, test_settings):
    """Фабрика FieldGenerator над тестовым профилем."""

    def _make(
        path: str,
        model=profile,
        model_state: Optional[ModelState] = None,
        settings: Optional[FormsSettings] = None,
    ) -> FieldGenerator:
        return FieldGenerator(
            model,
            path,
            default_template,
            metadata_adapter,
            model_state=model_state,
            settings=settings or test_settings,
        )

    return _make
