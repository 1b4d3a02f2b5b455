import itertools

import pytest

from ecocart.domain.services import rule_scorer
from ecocart.domain.services.constants import BREAKDOWN_MAX


def test_reference_product_scores_70():
    product = {
        "materials": ["recycled cotton"],
        "packaging": "plastic",
        "shipping_type": "ground",
        "eco_tags": ["fair-trade"],
    }
    # 50 + 15 (recycled, substring of "recycled cotton") - 10 (plastic) + 15 (fair-trade)
    assert rule_scorer.score(product) == 70


def test_baseline_without_attributes():
    assert rule_scorer.score({}) == 50
    assert rule_scorer.score({"materials": None, "eco_tags": None, "packaging": None}) == 50


def test_list_fields_match_by_substring_case_insensitive():
    assert rule_scorer.score({"materials": ["Organic Cotton"]}) == 60
    assert rule_scorer.score({"materials": ["steel", "RECYCLED aluminium"]}) == 65
    assert rule_scorer.score({"eco_tags": ["Repairable design"]}) == 60


def test_descriptor_fields_match_by_equality():
    assert rule_scorer.score({"packaging": " Plastic "}) == 40
    assert rule_scorer.score({"packaging": "plastic-free"}) == 50
    assert rule_scorer.score({"shipping_type": "AIR"}) == 30
    assert rule_scorer.score({"shipping_type": "air freight"}) == 50


def test_keyword_counts_once_per_rule():
    assert rule_scorer.score({"materials": ["recycled cotton", "recycled polyester"]}) == 65


def test_clamped_once_at_the_end():
    best = {
        "materials": ["recycled organic cotton"],
        "eco_tags": ["repairable", "fair-trade"],
    }
    assert rule_scorer.score(best) == 100  # 50 + 15 + 10 + 10 + 15

    worst = {"packaging": "plastic", "shipping_type": "air"}
    assert rule_scorer.score(worst) == 20


def test_accepts_product_models():
    from conftest import make_product

    p = make_product("p1", materials=["organic linen"], eco_tags=["fair-trade"])
    assert rule_scorer.score(p) == 75


def test_deterministic():
    product = {"materials": ["recycled glass"], "shipping_type": "air", "eco_tags": ["repairable"]}
    assert rule_scorer.score(product) == rule_scorer.score(product)
    assert rule_scorer.breakdown(product) == rule_scorer.breakdown(product)


MATERIALS = [[], ["recycled"], ["organic"], ["recycled", "organic cotton"]]
PACKAGING = [None, "plastic", "paper"]
SHIPPING = [None, "air", "ground"]
TAGS = [[], ["repairable"], ["fair-trade"], ["repairable", "fair-trade"]]


@pytest.mark.parametrize("materials,packaging,shipping,tags", list(itertools.product(MATERIALS, PACKAGING, SHIPPING, TAGS)))
def test_score_and_breakdown_bounds(materials, packaging, shipping, tags):
    product = {"materials": materials, "packaging": packaging, "shipping_type": shipping, "eco_tags": tags}
    assert 0 <= rule_scorer.score(product) <= 100
    for value in rule_scorer.breakdown(product).model_dump().values():
        assert 0 <= value <= BREAKDOWN_MAX


def test_breakdown_components():
    b = rule_scorer.breakdown({
        "materials": ["recycled cotton"],
        "packaging": "plastic",
        "shipping_type": "air",
        "eco_tags": ["fair-trade", "repairable"],
    })
    assert b.materials == 25
    assert b.ethics == 25
    assert b.packaging == 0
    assert b.shipping == 0  # 10 - 20, clamped
    assert b.lifespan == 20


def test_breakdown_component_ceiling():
    b = rule_scorer.breakdown({"materials": ["recycled organic"]})
    assert b.materials == BREAKDOWN_MAX  # 10 + 15 + 10 = 35 -> 30
