# forms_sdk/tests/frontend/test_binding.py
import pytest

from forms_sdk.frontend.binding import FieldBinding
from forms_sdk.frontend.exceptions import MissingIdentityError


def test_binding_names():
    binding = FieldBinding("lines.0.sku", prefix="order")
    assert binding.name == "sku"
    assert binding.full_name == "order.lines.0.sku"
    assert binding.html_id == "order_lines_0_sku"
    assert binding.metadata_key == "lines.0.sku"


def test_html_id_replaces_invalid_characters():
    assert FieldBinding("items[2].name").html_id == "items_2__name"


@pytest.mark.parametrize("path", ["", "   ", None])
def test_binding_requires_path(path):
    with pytest.raises(MissingIdentityError):
        FieldBinding(path)


def test_coerce_keeps_binding_and_applies_prefix():
    binding = FieldBinding("title")
    assert FieldBinding.coerce(binding) is binding
    prefixed = FieldBinding.coerce(binding, prefix="post")
    assert prefixed.full_name == "post.title"
    assert FieldBinding.coerce("title").path == "title"


def test_get_value(profile):
    assert FieldBinding("address.city").get_value(profile) == "Riga"
    assert FieldBinding("first_name").get_value(None) is None
    assert FieldBinding("first_name", getter=lambda m: "x").get_value(profile) == "x"
