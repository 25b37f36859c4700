# forms_sdk/tests/frontend/test_components.py
import contextvars

import pytest
from pydantic import ValidationError

from forms_sdk.exceptions import ConfigurationError
from forms_sdk.frontend.attributes import HtmlAttributes
from forms_sdk.frontend.components import Form, get_current_parent_field
from forms_sdk.frontend.exceptions import RenderingError, TypeMismatchError
from forms_sdk.frontend.field_config import FieldConfiguration
from forms_sdk.frontend.metadata import FieldMetadata, StaticMetadataAdapter
from forms_sdk.frontend.template import DefaultFormTemplate
from forms_sdk.frontend.types import ComponentState, FieldParent
from forms_sdk.tests.sample_models import Profile


class RecordingTemplate(DefaultFormTemplate):
    def __init__(self):
        super().__init__()
        self.field_parents = []

    def prepare_field_configuration(self, generator, handler, config, field_parent):
        self.field_parents.append(field_parent)
        config.add_class("themed")


class FailingEndTemplate(DefaultFormTemplate):
    def end_field(self):
        raise RenderingError("end_field failed")


def _container_config() -> FieldConfiguration:
    # Поле-контейнер без собственного элемента ввода
    return FieldConfiguration().override_field_html("")


@pytest.fixture(autouse=True)
def no_parent_field_leaks():
    assert get_current_parent_field() is None
    yield
    assert get_current_parent_field() is None


def test_form_writes_begin_and_end_once(profile):
    with Form(profile, action="/profile") as form:
        form.field_for("first_name")
    form.close()

    html = form.to_html()
    assert html.startswith('<form action="/profile" method="post">')
    assert html.endswith("</form>")
    assert html.count("</form>") == 1
    assert '<input type="text" name="first_name" id="first_name" required="required" value="Ann">' in html
    assert form.state == ComponentState.CLOSED


def test_form_begin_with_enctype_and_attributes(profile):
    form = Form(
        profile,
        action="/upload",
        method="get",
        enctype="multipart/form-data",
        attributes=HtmlAttributes(id="profile-form"),
    )
    assert form.to_html() == '<form action="/upload" method="get" enctype="multipart/form-data" id="profile-form">'


def test_self_closing_field_is_emitted_once(profile):
    form = Form(profile)
    field = form.field_for("first_name")
    before = form.to_html()

    assert field.state == ComponentState.CLOSED
    assert field.render() == ""
    assert field.__html__() == ""
    field.close()
    assert form.to_html() == before
    assert '<div class="field">' in before
    assert '<em class="required">*</em>' in before


def test_sections_wrap_fields(profile):
    with Form(profile) as form:
        with form.begin_section("Contacts", hint="How to reach you") as section:
            section.field_for("email")
            with section.begin_section("Inner") as inner:
                inner.field_for("age")

    html = form.to_html()
    assert "<legend>Contacts</legend>" in html
    assert '<p class="hint">How to reach you</p>' in html
    assert '<fieldset class="nested">' in html
    assert html.count("</fieldset>") == 2
    assert html.index('name="email"') < html.index('name="age"')


def test_container_field_sets_parent_context(profile):
    with Form(profile) as form:
        outer_context = contextvars.copy_context()
        with form.begin_field_for("address", _container_config()) as address:
            assert get_current_parent_field() is address
            assert outer_context.run(get_current_parent_field) is None
            child = address.field_for("address.city")
            assert child.parent_field is address
        assert get_current_parent_field() is None

    html = form.to_html()
    assert html.count('<div class="field__children">') == 1
    assert 'class="field field--nested" data-parent-field="address"' in html
    assert address.state == ComponentState.CLOSED


def test_container_close_is_idempotent(profile):
    form = Form(profile)
    address = form.begin_field_for("address", _container_config())
    address.close()
    html = form.to_html()
    address.close()
    assert form.to_html() == html


def test_container_closed_by_exception_emits_end_once(profile):
    form = Form(profile)
    with pytest.raises(ValueError):
        with form.begin_field_for("address", _container_config()) as address:
            raise ValueError("boom")

    assert get_current_parent_field() is None
    assert address.state == ComponentState.CLOSED
    html = form.to_html()
    assert html.count('<div class="field__children">') == 1
    assert html.endswith("</div>\n</div>\n</div>")


def test_context_cleared_when_end_markup_fails(profile):
    form = Form(profile, template=FailingEndTemplate())
    address = form.begin_field_for("address", _container_config())
    assert get_current_parent_field() is address

    with pytest.raises(RenderingError):
        address.close()

    assert get_current_parent_field() is None
    assert address.state == ComponentState.CLOSED
    address.close()


def test_context_unwinds_when_containers_close_out_of_order(profile):
    form = Form(profile)
    outer = form.begin_field_for("address", _container_config())
    inner = outer.begin_field_for("email", _container_config())
    assert inner.parent_field is outer

    outer.close()
    assert get_current_parent_field() is inner
    inner.close()
    assert get_current_parent_field() is None


def test_context_skips_closed_parent_to_open_ancestor(profile):
    form = Form(profile)
    root = form.begin_field_for("address", _container_config())
    middle = root.begin_field_for("email", _container_config())
    leaf = middle.begin_field_for("bio", _container_config())

    middle.close()
    leaf.close()
    assert get_current_parent_field() is root
    assert root.field_for("address.city").parent_field is root
    root.close()
    assert get_current_parent_field() is None


def test_failed_field_leaves_buffer_untouched():
    model = Profile.model_construct(first_name="Ann", age="thirty")
    form = Form(model)
    before = form.to_html()
    with pytest.raises(TypeMismatchError):
        form.field_for("age")
    assert form.to_html() == before


def test_form_requires_model_or_adapter():
    with pytest.raises(ConfigurationError):
        Form()
    with pytest.raises(ConfigurationError):
        Form({"title": "Hello"})


def test_form_with_static_metadata_adapter():
    adapter = StaticMetadataAdapter({"title": FieldMetadata.for_type("title", str, display_name="Heading")})
    form = Form({"title": "Hello"}, metadata_adapter=adapter)
    assert form.label_for("title") == '<label for="title">Heading</label>'
    assert form.field_element_for("title") == '<input type="text" name="title" id="title" value="Hello">'


def test_form_with_validation_error():
    with pytest.raises(ValidationError) as exc_info:
        Profile.model_validate({})

    form = Form(model_cls=Profile, model_state=exc_info.value)
    form.field_for("first_name")
    html = form.to_html()
    assert 'class="field field--invalid"' in html
    assert 'class="input-validation-error"' in html
    assert "Field required" in form.validation_message_for("first_name")
    assert form.model_state.get_validation_state("rating").value == "valid"


def test_form_prefix(profile):
    form = Form(profile, prefix="profile")
    html = form.field_element_for("first_name")
    assert 'name="profile.first_name" id="profile_first_name"' in html


def test_template_hook_receives_field_parent(profile):
    template = RecordingTemplate()
    form = Form(profile, template=template)
    form.field_for("first_name")
    form.label_for("first_name")

    assert template.field_parents == [FieldParent.SECTION, FieldParent.FORM]
    assert 'class="themed"' in form.to_html()
