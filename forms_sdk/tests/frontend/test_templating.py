# forms_sdk/tests/frontend/test_templating.py
import logging

import pytest

from forms_sdk.config import FormsSettings
from forms_sdk.frontend import templating
from forms_sdk.frontend.exceptions import RenderingError
from forms_sdk.frontend.templating import (
    SDK_TEMPLATES_DIR,
    get_environment,
    get_templates,
    initialize_templates,
    render_fragment,
    setup_jinja_env,
)


def test_setup_jinja_env_requires_directories():
    with pytest.raises(ValueError):
        setup_jinja_env([])


def test_get_templates_initializes_lazily():
    assert templating.templates is None
    templates = get_templates()
    assert templating.templates is templates
    assert get_environment().get_template("elements/input.html") is not None


def test_repeated_initialization_is_skipped(caplog):
    initialize_templates()
    first = templating.templates
    with caplog.at_level(logging.WARNING, logger="forms_sdk.frontend.templating"):
        initialize_templates()
    assert templating.templates is first
    assert "Templates already initialized" in caplog.text


def test_missing_directory_is_skipped(caplog, tmp_path):
    missing = str(tmp_path / "missing")
    with caplog.at_level(logging.WARNING, logger="forms_sdk.frontend.templating"):
        initialize_templates(missing)
    assert "not found" in caplog.text
    assert get_environment().loader.searchpath == [SDK_TEMPLATES_DIR]


def test_service_templates_override_sdk_templates(tmp_path, make_generator):
    (tmp_path / "elements").mkdir()
    (tmp_path / "elements" / "input.html").write_text('<input class="custom"{{ attrs }}>')
    initialize_templates(str(tmp_path))

    html = make_generator("first_name").get_field_html()
    assert html.startswith('<input class="custom" type="text"')


def test_template_dirs_from_settings(tmp_path, monkeypatch):
    monkeypatch.setattr(templating, "get_settings", lambda: FormsSettings(TEMPLATE_DIRS=[str(tmp_path)]))
    initialize_templates()
    assert get_environment().loader.searchpath == [str(tmp_path), SDK_TEMPLATES_DIR]


def test_tostring_filter_is_registered():
    env = get_environment()
    assert env.from_string("{{ value|tostring }}").render(value=True) == "true"


def test_render_fragment_wraps_errors():
    with pytest.raises(RenderingError):
        render_fragment(get_environment(), "elements/missing.html")
