import pytest

from implantwarranty.products import (
    MetadataKind,
    Product,
    ProductCreateRequest,
    ProductError,
    ProductUpdateRequest,
    apply_update,
    build_product,
    metadata_kind,
    page_summary,
    validate_create_request,
    validate_warranty_years,
)


def _request(**overrides):
    fields = {
        "model_number": "M-100",
        "brand": "Brand",
        "type": "Round",
        "warranty_years": 10,
    }
    fields.update(overrides)
    return ProductCreateRequest(**fields)


def test_build_product_sanitizes_text():
    product = build_product(
        _request(brand="  <b>Brand</b> ", size=" 300cc ", description="it's fine")
    )
    assert product.brand == "Brand"
    assert product.size == "300cc"
    assert product.description == "its fine"
    assert product.is_active is True
    assert product.created_at == product.updated_at


def test_build_product_keeps_missing_optionals_empty():
    product = build_product(_request())
    assert product.size is None
    assert product.description is None
    assert product.warranty_years == 10


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"model_number": ""}, "model number is required"),
        ({"model_number": "x" * 101}, "model number too long"),
        ({"brand": ""}, "brand is required"),
        ({"brand": "b" * 101}, "brand name too long"),
        ({"type": ""}, "type is required"),
        ({"type": "t" * 51}, "type name too long"),
        ({"warranty_years": -2}, "warranty years must be between -1 and 50"),
        ({"warranty_years": 51}, "warranty years must be between -1 and 50"),
    ],
)
def test_validate_create_request_errors(overrides, message):
    with pytest.raises(ProductError, match=message):
        validate_create_request(_request(**overrides))


def test_length_limits_count_bytes():
    with pytest.raises(ProductError, match="model number too long"):
        validate_create_request(_request(model_number="型" * 34))


def test_length_limits_are_inclusive():
    product = build_product(_request(model_number="x" * 100, type="t" * 50))
    assert len(product.model_number) == 100


@pytest.mark.parametrize("years", [-1, 0, 50])
def test_validate_warranty_years_bounds(years):
    assert validate_warranty_years(years) == years


def test_apply_update_returns_changed_copy():
    original = build_product(_request())
    updated = apply_update(
        original,
        ProductUpdateRequest(brand="<i>New</i>", warranty_years=-1, is_active=False),
    )
    assert updated.brand == "New"
    assert updated.warranty_years == -1
    assert updated.is_active is False
    assert updated.model_number == original.model_number
    assert original.brand == "Brand"
    assert updated.updated_at >= original.updated_at


def test_apply_update_rejects_bad_warranty_years():
    original = build_product(_request())
    with pytest.raises(ProductError, match="between -1 and 50"):
        apply_update(original, ProductUpdateRequest(warranty_years=60))


def test_apply_update_without_changes_keeps_fields():
    original = Product(model_number="M", brand="B", type="T", warranty_years=5, size="S")
    updated = apply_update(original, ProductUpdateRequest())
    assert (updated.model_number, updated.brand, updated.type, updated.size) == (
        "M",
        "B",
        "T",
        "S",
    )


@pytest.mark.parametrize("kind", list(MetadataKind))
def test_metadata_kind_round_trip(kind):
    assert metadata_kind(kind.value) is kind


def test_metadata_kind_unknown():
    with pytest.raises(ProductError, match="unknown metadata: colors"):
        metadata_kind("colors")


def test_page_summary_empty_page():
    assert page_summary(37, 0, 20) == (0, 1)


@pytest.mark.parametrize("total", [1, 19, 20, 21, 40, 45])
def test_page_summary_pages_cover_total(total):
    reported, pages = page_summary(total, 1, 20)
    assert reported == total
    assert pages * 20 >= total
    assert (pages - 1) * 20 < total