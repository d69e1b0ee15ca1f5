import sys
import os

# Add the project root to the Python path
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.append(ROOT)

from products_api.config import Settings
from products_api.database.mongo import connect, get_collection
from products_api.models.product import validate_product
from products_api.services.product_service import ProductStore

SAMPLE_PRODUCTS = [
    {"name": "Smartphone X", "description": "6.1 inch OLED phone", "price": 799.0, "category": "Electronics", "inStock": True},
    {"name": "Wireless Earbuds", "description": "Noise cancelling earbuds", "price": 129.99, "category": "Electronics", "inStock": True},
    {"name": "Desk Lamp", "description": "LED lamp with dimmer", "price": 34.5, "category": "Home", "inStock": False},
    {"name": "Coffee Grinder", "description": "Burr grinder, 15 settings", "price": 89, "category": "Kitchen", "inStock": True},
    {"name": "Chef Knife", "description": "8 inch stainless steel", "price": 59.95, "category": "Kitchen", "inStock": True},
]


async def seed_products():
    """
    Insert the sample products into the configured collection.
    """
    settings = Settings()
    client = connect(settings)
    store = ProductStore(get_collection(client, settings))

    print("▶ Seeding sample products...")
    created = 0
    try:
        for payload in SAMPLE_PRODUCTS:
            product = await store.create(validate_product(payload))
            print(f"  + {product['id']} {product['name']}")
            created += 1
    finally:
        client.close()

    print(f"✔ Seeded {created} products")
    return {"created": created}


if __name__ == "__main__":
    import asyncio
    asyncio.run(seed_products())
