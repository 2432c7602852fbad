"""Strategies, product types and carriers offered in proposals.

Proposals store the ids below; reports resolve them to display names.
"""

from typing import Optional

from pydantic import BaseModel, Field

from .exceptions import ValidationError


class Strategy(BaseModel):
    id: str
    name: str
    description: str
    category: str
    products: list[str] = Field(default_factory=list)


class ProductType(BaseModel):
    id: str
    name: str
    type: str


class Carrier(BaseModel):
    id: str
    name: str
    products: list[str] = Field(default_factory=list)
    rating: str
    established: str


STRATEGIES: dict[str, Strategy] = {
    s.id: s
    for s in [
        Strategy(
            id="lirp",
            name="LIRP (Life Insurance Retirement Plan)",
            description="Tax-free retirement income through life insurance cash value",
            category="retirement",
            products=["whole_life", "universal_life", "variable_universal_life", "indexed_universal_life"],
        ),
        Strategy(
            id="infinite_banking",
            name="Infinite Banking",
            description="Become your own bank using whole life insurance",
            category="wealth_building",
            products=["whole_life", "universal_life"],
        ),
        Strategy(
            id="income_protection",
            name="Income Protection",
            description="Protect your income with disability and life insurance",
            category="protection",
            products=["term_life", "whole_life", "disability_insurance"],
        ),
        Strategy(
            id="executive_bonus_eb162",
            name="Executive Bonus Plan (EB162)",
            description="Tax-advantaged executive compensation strategy",
            category="executive",
            products=["whole_life", "universal_life", "variable_universal_life"],
        ),
        Strategy(
            id="sep_ira",
            name="SEP IRA",
            description="Simplified Employee Pension for small businesses",
            category="retirement",
            products=["annuity", "mutual_funds", "life_insurance"],
        ),
        Strategy(
            id="simple_ira",
            name="SIMPLE IRA",
            description="Savings Incentive Match Plan for Employees",
            category="retirement",
            products=["annuity", "mutual_funds"],
        ),
        Strategy(
            id="charity_trust",
            name="Charitable Trust",
            description="Tax-efficient charitable giving strategy",
            category="estate_planning",
            products=["whole_life", "universal_life", "annuity"],
        ),
        Strategy(
            id="annuity_income",
            name="Annuity Income Strategy",
            description="Guaranteed lifetime income through annuities",
            category="retirement",
            products=["fixed_annuity", "variable_annuity", "indexed_annuity"],
        ),
    ]
}

PRODUCT_TYPES: dict[str, ProductType] = {
    p.id: p
    for p in [
        ProductType(id="term_life", name="Term Life Insurance", type="life_insurance"),
        ProductType(id="whole_life", name="Whole Life Insurance", type="life_insurance"),
        ProductType(id="universal_life", name="Universal Life Insurance", type="life_insurance"),
        ProductType(id="variable_universal_life", name="Variable Universal Life", type="life_insurance"),
        ProductType(id="indexed_universal_life", name="Indexed Universal Life", type="life_insurance"),
        ProductType(id="fixed_annuity", name="Fixed Annuity", type="annuity"),
        ProductType(id="variable_annuity", name="Variable Annuity", type="annuity"),
        ProductType(id="indexed_annuity", name="Indexed Annuity", type="annuity"),
        ProductType(id="disability_insurance", name="Disability Insurance", type="protection"),
        ProductType(id="mutual_funds", name="Mutual Funds", type="investment"),
    ]
}

CARRIERS: dict[str, Carrier] = {
    c.id: c
    for c in [
        Carrier(
            id="ethos",
            name="Ethos",
            products=["term_life", "whole_life", "universal_life"],
            rating="A+",
            established="2016",
        ),
        Carrier(
            id="fg",
            name="F&G (Fidelity & Guaranty)",
            products=["fixed_annuity", "indexed_annuity", "universal_life"],
            rating="A",
            established="1959",
        ),
        Carrier(
            id="ameritas",
            name="Ameritas",
            products=["whole_life", "universal_life", "variable_universal_life", "disability_insurance"],
            rating="A+",
            established="1887",
        ),
        Carrier(
            id="mutual_omaha",
            name="Mutual of Omaha",
            products=["term_life", "whole_life", "universal_life", "disability_insurance"],
            rating="A+",
            established="1909",
        ),
        Carrier(
            id="american_national",
            name="American National",
            products=["whole_life", "universal_life", "variable_universal_life", "fixed_annuity"],
            rating="A",
            established="1905",
        ),
        Carrier(
            id="american_equity",
            name="American Equity",
            products=["fixed_annuity", "indexed_annuity", "variable_annuity"],
            rating="A-",
            established="1995",
        ),
    ]
}


def get_strategy(strategy_id: str) -> Strategy:
    """Look up a strategy by id."""
    try:
        return STRATEGIES[strategy_id]
    except KeyError:
        raise ValidationError(
            f"Unknown strategy: {strategy_id}",
            field="strategy",
            value=strategy_id,
            constraint=f"Must be one of: {', '.join(STRATEGIES)}",
        ) from None


def get_product(product_id: str) -> ProductType:
    """Look up a product type by id."""
    try:
        return PRODUCT_TYPES[product_id]
    except KeyError:
        raise ValidationError(
            f"Unknown product type: {product_id}",
            field="product_type",
            value=product_id,
            constraint=f"Must be one of: {', '.join(PRODUCT_TYPES)}",
        ) from None


def get_carrier(carrier_id: str) -> Carrier:
    """Look up a carrier by id."""
    try:
        return CARRIERS[carrier_id]
    except KeyError:
        raise ValidationError(
            f"Unknown carrier: {carrier_id}",
            field="carrier",
            value=carrier_id,
            constraint=f"Must be one of: {', '.join(CARRIERS)}",
        ) from None


def products_for_strategy(strategy_id: str) -> list[ProductType]:
    """Product types a strategy can be built on.

    Strategies may name generic products ("annuity") with no catalog entry;
    those are skipped.
    """
    strategy = get_strategy(strategy_id)
    return [PRODUCT_TYPES[p] for p in strategy.products if p in PRODUCT_TYPES]


def carriers_for_product(product_id: str) -> list[Carrier]:
    """Carriers offering a product type."""
    get_product(product_id)
    return [c for c in CARRIERS.values() if product_id in c.products]


def display_name(kind: str, identifier: Optional[str]) -> str:
    """Resolve a stored id to its display name, falling back to the id itself."""
    if not identifier:
        return ""
    table = {"strategy": STRATEGIES, "product": PRODUCT_TYPES, "carrier": CARRIERS}.get(kind, {})
    entry = table.get(identifier)
    return entry.name if entry else identifier


__all__ = [
    "Strategy",
    "ProductType",
    "Carrier",
    "STRATEGIES",
    "PRODUCT_TYPES",
    "CARRIERS",
    "get_strategy",
    "get_product",
    "get_carrier",
    "products_for_strategy",
    "carriers_for_product",
    "display_name",
]
