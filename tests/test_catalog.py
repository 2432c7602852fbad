"""Tests for the strategy, product and carrier catalog."""

import pytest

from prosperity_core.catalog import (
    CARRIERS,
    PRODUCT_TYPES,
    STRATEGIES,
    carriers_for_product,
    display_name,
    get_carrier,
    get_strategy,
    products_for_strategy,
)
from prosperity_core.exceptions import ValidationError


class TestLookups:
    """Catalog lookups."""

    def test_catalog_sizes(self):
        assert len(STRATEGIES) == 8
        assert len(PRODUCT_TYPES) == 10
        assert len(CARRIERS) == 6

    def test_get_strategy(self):
        assert get_strategy("infinite_banking").name == "Infinite Banking"

    def test_unknown_strategy(self):
        with pytest.raises(ValidationError) as exc_info:
            get_strategy("crypto")

        assert exc_info.value.field == "strategy"
        assert exc_info.value.recoverable is True
        assert "lirp" in exc_info.value.constraint

    def test_unknown_carrier(self):
        with pytest.raises(ValidationError):
            get_carrier("acme")


class TestRelationships:
    """Strategy to product to carrier links."""

    def test_products_for_strategy(self):
        products = [p.id for p in products_for_strategy("income_protection")]

        assert products == ["term_life", "whole_life", "disability_insurance"]

    def test_generic_products_skipped(self):
        """Generic product names without a catalog entry are left out."""
        products = [p.id for p in products_for_strategy("sep_ira")]

        assert products == ["mutual_funds"]

    def test_carriers_for_product(self):
        carriers = [c.id for c in carriers_for_product("indexed_annuity")]

        assert carriers == ["fg", "american_equity"]

    def test_carriers_for_unknown_product(self):
        with pytest.raises(ValidationError):
            carriers_for_product("timeshare")


class TestDisplayName:
    def test_known_and_unknown_ids(self):
        assert display_name("carrier", "fg") == "F&G (Fidelity & Guaranty)"
        assert display_name("carrier", "custom_co") == "custom_co"
        assert display_name("product", None) == ""
