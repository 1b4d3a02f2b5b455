# ecocart/scripts/seed.py
"""
Demo catalog loader:

    python -m ecocart.scripts.seed [--reset]

Every product goes through ProductService.create, so eco_score, breakdown and
AI label are computed the same way as for API writes. Existing product_ids are
skipped, which makes re-runs idempotent.
"""
import argparse
import asyncio
import logging
from typing import Any, Dict, List

from ecocart.core.config import get_settings
from ecocart.core.errors import ClassifierUnavailable, ConstraintViolation
from ecocart.core.logging import configure_logging
from ecocart.db import mongo
from ecocart.domain.repositories.cart_repo import CartRepo
from ecocart.domain.repositories.product_repo import ProductRepo
from ecocart.domain.services.product_svc import ProductService
from ecocart.ml.classifier import load_from_path

logger = logging.getLogger(__name__)

IMG = "https://images.unsplash.com/photo-{}?w=800&q=80"

SEED_PRODUCTS: List[Dict[str, Any]] = [
    # -------- mens-fashion --------
    {
        "product_id": "mf-organic-tee", "name": "Organic Cotton Men's T-Shirt", "brand": "EarthThreads",
        "category": "mens-fashion", "price": 1299, "description": "Soft and breathable organic cotton t-shirt.",
        "materials": ["organic cotton"], "packaging": "paper bag", "shipping_type": "ground",
        "eco_tags": ["organic", "ethical"], "image_url": IMG.format("1521572163474-6864f9cf17ab"),
    },
    {
        "product_id": "mf-graphic-tee", "name": "Polyester Men's Graphic Tee", "brand": "QuickFit",
        "category": "mens-fashion", "price": 1099, "description": "Trendy graphic tee made from polyester.",
        "materials": ["polyester"], "packaging": "plastic", "shipping_type": "air",
        "eco_tags": ["synthetic"], "image_url": IMG.format("1576566588028-4147f3842f27"),
    },
    {
        "product_id": "mf-recycled-jeans", "name": "Recycled Denim Jeans", "brand": "BlueCycle",
        "category": "mens-fashion", "price": 2399, "description": "Slim fit jeans made from recycled denim.",
        "materials": ["recycled cotton"], "packaging": "recyclable cardboard", "shipping_type": "ground",
        "eco_tags": ["recycled", "fair-trade"], "image_url": IMG.format("1542272604-787c3835535d"),
    },
    # -------- womens-fashion --------
    {
        "product_id": "wf-linen-dress", "name": "Organic Linen Dress", "brand": "PureWear",
        "category": "womens-fashion", "price": 3499, "description": "Elegant linen summer dress.",
        "materials": ["organic linen"], "packaging": "paper", "shipping_type": "ground",
        "eco_tags": ["natural", "fair-trade"], "image_url": IMG.format("1522335789203-aabd1fc54bc9"),
    },
    {
        "product_id": "wf-party-dress", "name": "Fast Fashion Party Dress", "brand": "ShineNow",
        "category": "womens-fashion", "price": 2999, "description": "Trendy sequin dress made with synthetic fibers.",
        "materials": ["polyester"], "packaging": "plastic", "shipping_type": "air",
        "eco_tags": ["synthetic"], "image_url": IMG.format("1595777457583-95e059d581b8"),
    },
    # -------- mobiles-computers --------
    {
        "product_id": "mc-eco-phone", "name": "Eco-Edition Smartphone", "brand": "GreenTech",
        "category": "mobiles-computers", "price": 16999,
        "description": "Energy-efficient phone with recycled aluminum body.",
        "materials": ["recycled aluminum"], "packaging": "minimal paper packaging", "shipping_type": "ground",
        "eco_tags": ["recycled", "repairable"], "image_url": IMG.format("1511707171634-5f897ff02aa9"),
    },
    {
        "product_id": "mc-budget-phone", "name": "Standard Budget Smartphone", "brand": "FastCell",
        "category": "mobiles-computers", "price": 14999, "description": "Affordable smartphone with plastic back.",
        "materials": ["plastic"], "packaging": "plastic", "shipping_type": "air",
        "eco_tags": ["plastic"], "image_url": IMG.format("1510557880182-3d4d3cba35a5"),
    },
    # -------- electronics --------
    {
        "product_id": "el-led-lamp", "name": "Repairable LED Desk Lamp", "brand": "GlowLite",
        "category": "electronics", "price": 1499, "description": "Low-power LED desk lamp with replaceable parts.",
        "materials": ["recycled aluminum"], "packaging": "cardboard", "shipping_type": "ground",
        "eco_tags": ["repairable"], "image_url": IMG.format("1507473885765-e6ed057f782c"),
    },
    {
        "product_id": "el-halogen-lamp", "name": "Halogen Desk Lamp", "brand": "GlowLite",
        "category": "electronics", "price": 1299, "description": "Standard halogen desk lamp.",
        "materials": ["metal", "plastic"], "packaging": "cardboard", "shipping_type": "ground",
        "eco_tags": [], "image_url": IMG.format("1507473885765-e6ed057f782c"),
    },
    # -------- home-living --------
    {
        "product_id": "hl-bamboo-brush", "name": "Bamboo Toothbrush", "brand": "EcoSmile",
        "category": "home-living", "price": 149, "description": "Biodegradable bamboo toothbrush.",
        "materials": ["bamboo"], "packaging": "recycled paper", "shipping_type": "ground",
        "eco_tags": ["biodegradable", "fair-trade"], "image_url": IMG.format("1607613009820-a29f7bb81c04"),
    },
    {
        "product_id": "hl-plastic-brush", "name": "Plastic Toothbrush", "brand": "SmileCo",
        "category": "home-living", "price": 129, "description": "Standard plastic toothbrush.",
        "materials": ["plastic"], "packaging": "plastic", "shipping_type": "ground",
        "eco_tags": ["plastic"], "image_url": IMG.format("1607613009820-a29f7bb81c04"),
    },
    # -------- personal-care --------
    {
        "product_id": "pc-refill-shampoo", "name": "Refillable Shampoo Bottle", "brand": "ZeroWaste Co",
        "category": "personal-care", "price": 499, "description": "Eco-friendly shampoo with refill pack.",
        "materials": ["recycled glass"], "packaging": "paper", "shipping_type": "ground",
        "eco_tags": ["refillable"], "image_url": IMG.format("1556228720-195a672e8a03"),
    },
    {
        "product_id": "pc-shampoo-sachet", "name": "Disposable Shampoo Sachets (10 pack)", "brand": "QuickCare",
        "category": "personal-care", "price": 450, "description": "Single-use shampoo sachets.",
        "materials": ["plastic"], "packaging": "plastic", "shipping_type": "ground",
        "eco_tags": ["single-use", "plastic"], "image_url": IMG.format("1535585209827-a15fcdbc4c2d"),
    },
    # -------- groceries --------
    {
        "product_id": "gr-brown-rice", "name": "Organic Brown Rice", "brand": "NatureGrain",
        "category": "groceries", "price": 199, "description": "Certified organic brown rice.",
        "materials": ["organic rice"], "packaging": "paper pouch", "shipping_type": "ground",
        "eco_tags": ["organic", "fair-trade"], "image_url": IMG.format("1586201375761-83865001e31c"),
    },
    {
        "product_id": "gr-white-rice", "name": "White Rice in Plastic Bag", "brand": "BulkGrain",
        "category": "groceries", "price": 179, "description": "Standard polished white rice in plastic packaging.",
        "materials": [], "packaging": "plastic", "shipping_type": "ground",
        "eco_tags": ["plastic"], "image_url": IMG.format("1516684732162-798a0062be99"),
    },
]


async def seed_catalog(svc: ProductService, products: List[Dict[str, Any]] = SEED_PRODUCTS) -> Dict[str, int]:
    created = skipped = 0
    for data in products:
        try:
            await svc.create(dict(data))
            created += 1
        except ConstraintViolation:
            skipped += 1
    logger.info("seed done created=%s skipped=%s", created, skipped)
    return {"created": created, "skipped": skipped}


async def _run(reset: bool) -> Dict[str, int]:
    settings = get_settings()
    if not settings.MONGO_URI:
        raise SystemExit("MONGO_URI is not set")

    try:
        classifier = load_from_path(settings.CLASSIFIER_MODEL_PATH)
    except ClassifierUnavailable as e:
        logger.warning("Seeding without classifier, AI labels default to medium: %s", e.detail)
        classifier = None

    await mongo.connect()
    try:
        db = mongo.get_db()
        repo = ProductRepo(db)
        await repo.ensure_indexes()
        await CartRepo(db).ensure_indexes()
        if reset:
            res = await repo.col.delete_many({"product_id": {"$in": [p["product_id"] for p in SEED_PRODUCTS]}})
            logger.info("seed reset deleted=%s", res.deleted_count)
        return await seed_catalog(ProductService(repo, classifier=classifier))
    finally:
        await mongo.disconnect()


def main(argv=None) -> Dict[str, int]:
    parser = argparse.ArgumentParser(description="Load the demo catalog into MongoDB.")
    parser.add_argument("--reset", action="store_true", help="Delete seed products before inserting")
    args = parser.parse_args(argv)
    configure_logging()
    return asyncio.run(_run(args.reset))


if __name__ == "__main__":
    main()
