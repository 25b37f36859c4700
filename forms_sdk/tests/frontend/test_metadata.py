# forms_sdk/tests/frontend/test_metadata.py
import pytest
from pydantic import SecretStr, ValidationError

from forms_sdk.frontend.binding import FieldBinding
from forms_sdk.frontend.exceptions import MissingIdentityError
from forms_sdk.frontend.field_config import SelectItem
from forms_sdk.frontend.metadata import (
    FieldMetadata,
    MetadataAdapter,
    PydanticMetadataAdapter,
    StaticMetadataAdapter,
)
from forms_sdk.tests.sample_models import Address, Color


def _metadata(adapter: PydanticMetadataAdapter, path: str) -> FieldMetadata:
    return adapter.get_metadata(FieldBinding(path))


def test_adapter_implements_protocol(metadata_adapter):
    assert isinstance(metadata_adapter, MetadataAdapter)
    assert isinstance(StaticMetadataAdapter({}), MetadataAdapter)


def test_required_and_optional_fields(metadata_adapter):
    first_name = _metadata(metadata_adapter, "first_name")
    assert first_name.is_required is True
    assert first_name.underlying_type is str
    assert first_name.is_nullable is False

    age = _metadata(metadata_adapter, "age")
    assert age.is_required is False
    assert age.is_nullable is True
    assert age.underlying_type is int


def test_title_becomes_display_name(metadata_adapter):
    assert _metadata(metadata_adapter, "last_name").display_name == "Surname"
    assert _metadata(metadata_adapter, "first_name").display_name is None


def test_schema_extra_facts(metadata_adapter):
    price = _metadata(metadata_adapter, "price")
    assert price.edit_format_string == "{:.2f}"
    assert price.null_display_text == "No price"

    assert _metadata(metadata_adapter, "code").is_read_only is True
    assert _metadata(metadata_adapter, "bio").data_type == "multiline"

    country = _metadata(metadata_adapter, "country")
    assert country.choices == (
        SelectItem(value="lv", text="Latvia"),
        SelectItem(value="ee", text="Estonia"),
    )
    assert country.has_bounded_choices


def test_secret_str_is_password(metadata_adapter):
    password = _metadata(metadata_adapter, "password")
    assert password.underlying_type is SecretStr
    assert password.data_type == "password"


def test_collections_are_multi_valued(metadata_adapter):
    colors = _metadata(metadata_adapter, "colors")
    assert colors.is_multi_valued is True
    assert colors.underlying_type is Color
    assert colors.has_bounded_choices


def test_nested_paths(metadata_adapter):
    city = _metadata(metadata_adapter, "address.city")
    assert city.name == "city"
    assert city.is_required is True

    previous = _metadata(metadata_adapter, "previous_addresses.0.post_code")
    assert previous.name == "post_code"
    assert previous.is_nullable is True


def test_nested_model_field(metadata_adapter):
    address = _metadata(metadata_adapter, "address")
    assert address.underlying_type is Address
    assert not address.has_bounded_choices


def test_unknown_path_raises(metadata_adapter):
    with pytest.raises(MissingIdentityError):
        _metadata(metadata_adapter, "nickname")
    with pytest.raises(MissingIdentityError):
        _metadata(metadata_adapter, "address.street")


def test_metadata_key_overrides_path(metadata_adapter):
    binding = FieldBinding("billing_city", getter=lambda m: m.address.city, metadata_key="address.city")
    assert metadata_adapter.get_metadata(binding).name == "city"


def test_adapter_rejects_non_pydantic_class():
    with pytest.raises(TypeError):
        PydanticMetadataAdapter(dict)


def test_static_adapter_missing_key():
    adapter = StaticMetadataAdapter({"title": FieldMetadata.for_type("title", str)})
    assert adapter.get_metadata(FieldBinding("title")).name == "title"
    with pytest.raises(MissingIdentityError):
        adapter.get_metadata(FieldBinding("body"))


def test_metadata_is_frozen():
    metadata = FieldMetadata.for_type("title", str)
    with pytest.raises(ValidationError):
        metadata.is_required = True
