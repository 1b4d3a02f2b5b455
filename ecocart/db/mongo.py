# ecocart/db/mongo.py
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from ecocart.core.config import get_settings
import certifi

_client: AsyncIOMotorClient | None = None
_db: AsyncIOMotorDatabase | None = None


def get_client() -> AsyncIOMotorClient:
    assert _client is not None, "Mongo client not initialized"
    return _client


def get_db() -> AsyncIOMotorDatabase:
    assert _db is not None, "Mongo DB not initialized"
    return _db


async def connect():
    """
    Create Motor client with explicit CA bundle for TLS (SRV) URIs.
    A failed startup ping does not crash the app: the client stays lazy
    and the first real query retries the connection.
    """
    global _client, _db
    settings = get_settings()

    def _new_client() -> AsyncIOMotorClient:
        tls_kwargs = {"tls": True, "tlsCAFile": certifi.where()} if settings.MONGO_URI.startswith("mongodb+srv") else {}
        return AsyncIOMotorClient(
            settings.MONGO_URI,
            uuidRepresentation="standard",
            serverSelectionTimeoutMS=6000,
            connectTimeoutMS=6000,
            **tls_kwargs,
        )

    try:
        _client = _new_client()
        _db = _client[settings.MONGO_DB]
        await _client.admin.command("ping")
        print("Mongo connected (ping ok)")
    except Exception as e:
        print(f"[WARN] Mongo ping at startup failed: {e}")
        try:
            # keep a lazy client; first real query will attempt to connect again
            _client = _new_client()
            _db = _client[settings.MONGO_DB]
            print("[WARN] Mongo will attempt lazy connection on first query")
        except Exception as e2:
            # as a last resort, keep None; routes that need DB will assert
            _client = None
            _db = None
            print(f"[ERROR] Mongo client init failed: {e2}")


async def disconnect():
    global _client, _db
    if _client:
        _client.close()
    _client = None
    _db = None
