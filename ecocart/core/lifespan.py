# ecocart/core/lifespan.py
from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI
from ecocart.core.config import get_settings
from ecocart.core.errors import ClassifierUnavailable
from ecocart.db import mongo, redis as r
from ecocart.domain.repositories.cart_repo import CartRepo
from ecocart.domain.repositories.product_repo import ProductRepo
from ecocart.ml.classifier import load_from_path

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()

    # --- Startup ---
    # Classifier: loaded once, shared read-only. Without it only classification
    # endpoints are refused (503); rule scoring and carts keep working.
    app.state.classifier = None
    try:
        app.state.classifier = load_from_path(settings.CLASSIFIER_MODEL_PATH)
        print("✅ Classifier loaded")
    except ClassifierUnavailable as e:
        logger.error("Classifier unavailable, classification endpoints disabled: %s", e.detail)

    # Mongo obligatoire (si URI configurée)
    if settings.MONGO_URI:
        try:
            await mongo.connect()
            print("✅ Mongo connected")
        except Exception as e:
            print(f"❌ Mongo connection failed: {e}")
            raise
        try:
            db = mongo.get_db()
            await ProductRepo(db).ensure_indexes()
            await CartRepo(db).ensure_indexes()
        except Exception as e:
            print(f"⚠️ Index creation failed (will retry next start): {e}")
    else:
        print("⚠️ No MONGO_URI provided, skipping Mongo connection")

    # Redis optionnel
    await r.connect()

    # Application runs
    yield

    # --- Shutdown ---
    try:
        await r.disconnect()
    except Exception as e:
        logger.warning("Redis disconnect failed: %s", e)

    try:
        if settings.MONGO_URI:
            await mongo.disconnect()
            print("🔌 Mongo disconnected")
    except Exception as e:
        logger.warning("Mongo disconnect failed: %s", e)
