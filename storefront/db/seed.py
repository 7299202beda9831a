from sqlalchemy.orm import Session

from storefront.models.address import Address
from storefront.repositories.address_repo import AddressRepository
from storefront.repositories.product_repo import ProductRepository

DEMO_BEARER_TOKEN = "demo-token"

DEMO_PRODUCTS = [
    {
        "product_id": "p-apple-sapling",
        "title": "Golden Delicious apple sapling on Malling rootstock",
        "price": 850000,
        "images": ["https://images.unsplash.com/photo-1560806887-1e4cd0b6cbd6?w=400"],
        "category_name": "Fruit saplings",
    },
    {
        "product_id": "p-npk-fertilizer",
        "title": "Organic NPK fertilizer for fruit trees",
        "price": 450000,
        "images": ["https://images.unsplash.com/photo-1416879595882-3373a0480b5b?w=400"],
        "category_name": "Fertilizer",
    },
    {
        "product_id": "p-drip-irrigation",
        "title": "Smart drip irrigation system",
        "price": 2500000,
        "images": ["https://images.unsplash.com/photo-1563514227147-6d2ff665a6a0?w=400"],
        "category_name": "Irrigation",
    },
    {
        "product_id": "p-tomato-seed",
        "title": "Greenhouse tomato seed",
        "price": 180000,
        "images": ["https://images.unsplash.com/photo-1592921870789-04563d55041c?w=400"],
        "category_name": "Seeds",
    },
    {
        "product_id": "p-organic-fertilizer",
        "title": "Organic fertilizer",
        "price": 250000,
        "images": [],
        "category_name": "Fertilizer",
    },
    {
        "product_id": "p-wheat-seed",
        "title": "Premium wheat seed",
        "price": 150000,
        "images": [],
        "category_name": None,
    },
]

DEMO_ADDRESSES = [
    {
        "title": "Home",
        "full_name": "Demo Customer",
        "street": "12 Orchard Lane",
        "city": "Karaj",
        "province": "Alborz",
        "postal_code": "3143614361",
        "phone": "09120000000",
        "is_default": True,
    },
    {
        "title": "Farm",
        "full_name": "Demo Customer",
        "street": "Road 4, Plot 17",
        "city": "Hashtgerd",
        "province": "Alborz",
        "postal_code": "3361913619",
        "phone": "09120000001",
        "is_default": False,
    },
]


def seed_demo_data(db: Session) -> int:
    """Load the demo catalogue and the demo user's addresses. Safe to run twice."""
    created = 0
    repo = ProductRepository(db)
    for entry in DEMO_PRODUCTS:
        repo.create_or_update(**entry)
        created += 1

    addresses = AddressRepository(db)
    if not db.query(Address).filter(Address.owner_token == DEMO_BEARER_TOKEN).first():
        for entry in DEMO_ADDRESSES:
            addresses.add(DEMO_BEARER_TOKEN, **entry)
            created += 1
    return created
