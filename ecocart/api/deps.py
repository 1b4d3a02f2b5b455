# ecocart/api/deps.py
from typing import Optional
from fastapi import Depends, Header, HTTPException, Request
from ecocart.db.mongo import get_db
from ecocart.db.redis import get_redis
from ecocart.domain.repositories.cart_repo import CartRepo
from ecocart.domain.repositories.product_repo import ProductRepo
from ecocart.domain.services.cart_svc import CartService
from ecocart.domain.services.product_svc import ProductService
from ecocart.ml.classifier import ClassifierHandle

# Dependency for injecting the MongoDB database into endpoints/services
async def mongo_db(db = Depends(get_db)):
    return db

# Dependency for injecting the Redis client (or None) into endpoints/services
def redis_dep():
    return get_redis()

# Classifier handle loaded in the lifespan; None when the artifact failed to load
def classifier_dep(request: Request) -> Optional[ClassifierHandle]:
    return getattr(request.app.state, "classifier", None)

# Authentication is handled upstream; the gateway forwards the user id
def current_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return x_user_id

def product_repo_dep(db = Depends(mongo_db)) -> ProductRepo:
    return ProductRepo(db)

def cart_repo_dep(db = Depends(mongo_db)) -> CartRepo:
    return CartRepo(db)

def product_service(
    repo: ProductRepo = Depends(product_repo_dep),
    classifier: Optional[ClassifierHandle] = Depends(classifier_dep),
    redis = Depends(redis_dep),
) -> ProductService:
    return ProductService(repo, classifier=classifier, redis=redis)

def cart_service(
    carts: CartRepo = Depends(cart_repo_dep),
    products: ProductRepo = Depends(product_repo_dep),
    redis = Depends(redis_dep),
) -> CartService:
    return CartService(carts, products, redis=redis)
