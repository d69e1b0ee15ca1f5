import logging
import re
from datetime import datetime, timezone
from typing import Any

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ReturnDocument

from products_api.errors import ProductNotFoundError
from products_api.models.product import serialize_product
from products_api.services.pagination import DEFAULT_LIMIT, DEFAULT_PAGE

logger = logging.getLogger(__name__)

# Owned by the store, never taken from a client payload.
PROTECTED_FIELDS = ("_id", "id", "createdAt", "updatedAt")


def _now() -> datetime:
    # BSON dates carry milliseconds only.
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def _object_id(product_id: str) -> ObjectId:
    # A malformed id can never match a document, so it is reported as missing.
    if not ObjectId.is_valid(product_id):
        raise ProductNotFoundError()
    return ObjectId(product_id)


def _writable(payload: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in payload.items() if k not in PROTECTED_FIELDS}


class ProductStore:
    """Product persistence on top of a single MongoDB collection."""

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    async def list_products(
        self,
        category: str | None = None,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
    ) -> dict[str, Any]:
        query = {}
        if category:
            query["category"] = category

        skip = (page - 1) * limit
        total = await self.collection.count_documents(query)

        cursor = self.collection.find(query, sort=[("_id", 1)], skip=skip, limit=limit)
        products = []
        async for doc in cursor:
            products.append(serialize_product(doc))

        return {"total": total, "page": page, "products": products}

    async def search_by_name(self, name: str) -> list[dict[str, Any]]:
        query = {"name": {"$regex": re.escape(name), "$options": "i"}}
        cursor = self.collection.find(query, sort=[("_id", 1)])
        return [serialize_product(doc) async for doc in cursor]

    async def stats_by_category(self) -> list[dict[str, Any]]:
        pipeline = [
            {"$group": {"_id": "$category", "count": {"$sum": 1}}},
            {"$sort": {"_id": 1}},
        ]
        stats = []
        async for group in self.collection.aggregate(pipeline):
            stats.append({"category": group["_id"], "count": group["count"]})
        return stats

    async def get_by_id(self, product_id: str) -> dict[str, Any]:
        doc = await self.collection.find_one({"_id": _object_id(product_id)})
        if not doc:
            raise ProductNotFoundError()
        return serialize_product(doc)

    async def create(self, payload: dict[str, Any]) -> dict[str, Any]:
        now = _now()
        doc = _writable(payload)
        doc["_id"] = ObjectId()
        doc["createdAt"] = now
        doc["updatedAt"] = now

        await self.collection.insert_one(doc)
        logger.info("Created product %s", doc["_id"])
        return serialize_product(doc)

    async def update_by_id(self, product_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        fields = _writable(payload)
        fields["updatedAt"] = _now()

        doc = await self.collection.find_one_and_update(
            {"_id": _object_id(product_id)},
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            raise ProductNotFoundError()

        logger.info("Updated product %s", product_id)
        return serialize_product(doc)

    async def delete_by_id(self, product_id: str) -> dict[str, Any]:
        doc = await self.collection.find_one_and_delete({"_id": _object_id(product_id)})
        if not doc:
            raise ProductNotFoundError()

        logger.info("Deleted product %s", product_id)
        return serialize_product(doc)
