"""Unit tests for product decoding and order payloads."""

import pytest

from megaport_client.exceptions import InvalidTermError
from megaport_client.models import (
    MCR,
    VXC,
    ErrorEnvelope,
    Port,
    PortOrder,
    ProductType,
    ProductUpdate,
    ProvisioningStatus,
    UnrecognizedProduct,
    decode_product,
    validate_term,
)


class TestDecodeProduct:
    def test_port(self, make_product):
        product = decode_product(make_product(uid="p-1", status="CONFIGURED"))

        assert isinstance(product, Port)
        assert product.product_uid == "p-1"
        assert product.product_type is ProductType.MEGAPORT
        assert product.port_speed == 10000
        assert product.provisioning_status == ProvisioningStatus.CONFIGURED
        assert product.is_live is False

    def test_each_variant_dispatches_on_tag(self, make_product):
        assert isinstance(decode_product(make_product(product_type="MCR2")), MCR)
        assert isinstance(decode_product(make_product(product_type="VXC")), VXC)

    def test_tag_is_case_insensitive(self, make_product):
        product = decode_product(make_product(product_type="megaport"))
        assert isinstance(product, Port)
        assert product.product_type is ProductType.MEGAPORT

    def test_unknown_tag(self, make_product):
        product = decode_product(make_product(product_type="IX"))

        assert isinstance(product, UnrecognizedProduct)
        assert product.product_type == "IX"
        assert "unknown product type" in product.reason

    def test_missing_required_field(self, make_product):
        raw = make_product()
        del raw["portSpeed"]
        product = decode_product(raw)

        assert isinstance(product, UnrecognizedProduct)
        assert product.raw is raw
        assert "Port" in product.reason

    def test_non_object_element(self):
        product = decode_product("not a product")
        assert isinstance(product, UnrecognizedProduct)
        assert product.reason == "expected an object, got str"

    def test_unknown_status_still_decodes(self, make_product):
        product = decode_product(make_product(status="SOMETHING_NEW"))
        assert isinstance(product, Port)
        assert product.provisioning_status == "SOMETHING_NEW"

    def test_extra_fields_kept(self, make_product):
        product = decode_product(make_product(companyUid="c-1"))
        assert product.model_extra["companyUid"] == "c-1"

    def test_padded_status_is_not_live(self, make_product):
        product = decode_product(make_product(status=" LIVE "))
        assert product.provisioning_status == " LIVE "
        assert product.is_live is False

    def test_known_tags(self):
        assert [t.value for t in ProductType] == ["MEGAPORT", "MCR2", "MVE", "VXC"]

    def test_family_names(self):
        assert ProductType.MEGAPORT.family == "port"
        assert ProductType.MCR.family == "MCR"
        assert ProductType.MCR.value == "MCR2"


class TestTerms:
    @pytest.mark.parametrize("term", [1, 12, 24, 36])
    def test_valid_terms(self, term):
        assert validate_term(term) == term

    @pytest.mark.parametrize("term", [0, 6, 13, 48, -1, True])
    def test_invalid_terms(self, term):
        with pytest.raises(InvalidTermError) as exc_info:
            validate_term(term)
        assert exc_info.value.message == "invalid term, valid values are 1, 12, 24, and 36"


class TestPayloads:
    def test_single_port_order_payload(self):
        payload = PortOrder(
            product_name="edge-1",
            term=12,
            port_speed=10000,
            location_id=19,
            marketplace_visibility=True,
            create_date=1700000000000,
        ).to_payload()

        assert payload == {
            "productName": "edge-1",
            "term": 12,
            "productType": "MEGAPORT",
            "portSpeed": 10000,
            "locationId": 19,
            "createDate": 1700000000000,
            "virtual": False,
            "marketplaceVisibility": True,
        }

    def test_lag_port_order_payload(self):
        payload = PortOrder(
            product_name="lag-1", term=1, port_speed=100000, location_id=3, lag_port_count=4
        ).to_payload()
        assert payload["lagPortCount"] == 4
        assert isinstance(payload["createDate"], int)

    def test_product_update_omits_unset_fields(self):
        assert ProductUpdate(name="renamed").to_payload() == {"name": "renamed"}
        assert ProductUpdate(cost_centre="cc-9", marketplace_visibility=False).to_payload() == {
            "costCentre": "cc-9",
            "marketplaceVisibility": False,
        }


class TestErrorEnvelope:
    def test_detail_only_for_text(self):
        assert ErrorEnvelope(message="m", data="  extra  ").detail() == "extra"
        assert ErrorEnvelope(message="m", data=["x"]).detail() is None
        assert ErrorEnvelope(message="m").detail() is None

    def test_list_items_use_error_key(self):
        envelope = ErrorEnvelope(message="m", data=[{"field": "term", "error": "bad"}])
        assert envelope.field_errors()[0].message == "bad"
