"""Static product list loaded into the catalogue by a bulk sync."""

SEED_PRODUCTS = [
    {
        "name": "Wireless Noise-Cancelling Headphones",
        "price": 199.99,
        "category": "Electronics",
        "description": "Over-ear headphones with 30 hours of battery life and active noise cancellation.",
        "image": "https://images.unsplash.com/photo-1505740420928-5e560c06d30e?w=600",
        "stock": 25,
        "rating": 4.6,
        "discount": 15,
        "featured": True,
    },
    {
        "name": "Smart Fitness Watch",
        "price": 149.5,
        "category": "Electronics",
        "description": "Heart-rate, sleep and step tracking with a week of battery life.",
        "image": "https://images.unsplash.com/photo-1523275335684-37898b6baf30?w=600",
        "stock": 40,
        "rating": 4.3,
        "discount": 0,
        "featured": True,
    },
    {
        "name": "Classic Denim Jacket",
        "price": 79.0,
        "category": "Clothing",
        "description": "Stonewashed denim jacket with a relaxed fit.",
        "image": "https://images.unsplash.com/photo-1551537482-f2075a1d41f2?w=600",
        "stock": 60,
        "rating": 4.4,
        "discount": 10,
        "featured": False,
    },
    {
        "name": "Organic Cotton T-Shirt",
        "price": 24.0,
        "category": "Clothing",
        "description": "Soft crew-neck tee made from certified organic cotton.",
        "image": "https://images.unsplash.com/photo-1521572163474-6864f9cf17ab?w=600",
        "stock": 150,
        "rating": 4.1,
        "discount": 0,
        "featured": False,
    },
    {
        "name": "Ceramic Plant Pot Set",
        "price": 34.99,
        "category": "Home & Garden",
        "description": "Three matte ceramic pots with drainage trays.",
        "image": "https://images.unsplash.com/photo-1485955900006-10f4d324d411?w=600",
        "stock": 35,
        "rating": 4.7,
        "discount": 20,
        "featured": True,
    },
    {
        "name": "Yoga Mat",
        "price": 45.0,
        "category": "Sports & Outdoors",
        "description": "Non-slip 6mm mat with a carrying strap.",
        "image": "https://images.unsplash.com/photo-1601925260368-ae2f83cf8b7f?w=600",
        "stock": 80,
        "rating": 4.5,
        "discount": 5,
        "featured": False,
    },
    {
        "name": "The Pragmatic Reader",
        "price": 18.5,
        "category": "Books",
        "description": "A paperback collection of essays on craft and curiosity.",
        "image": "https://images.unsplash.com/photo-1544947950-fa07a98d237f?w=600",
        "stock": 120,
        "rating": 4.8,
        "discount": 0,
        "featured": False,
    },
    {
        "name": "Car Phone Mount",
        "price": 19.99,
        "category": "Automotive",
        "description": "Magnetic dashboard mount that fits all phone sizes.",
        "image": "https://images.unsplash.com/photo-1549317661-bd32c8ce0db2?w=600",
        "stock": 90,
        "rating": 3.9,
        "discount": 0,
        "featured": False,
    },
    {
        "name": "Vitamin C Serum",
        "price": 29.0,
        "category": "Health & Beauty",
        "description": "Brightening facial serum with 15% vitamin C.",
        "image": "https://images.unsplash.com/photo-1556228720-195a672e8a03?w=600",
        "stock": 70,
        "rating": 4.2,
        "discount": 25,
        "featured": True,
    },
    {
        "name": "Wooden Building Blocks",
        "price": 39.0,
        "category": "Toys & Games",
        "description": "100 natural wood blocks in a storage box.",
        "image": "https://images.unsplash.com/photo-1566576912321-d58ddd7a6088?w=600",
        "stock": 30,
        "rating": 4.9,
        "discount": 0,
        "featured": False,
    },
    {
        "name": "Single-Origin Coffee Beans",
        "price": 16.0,
        "category": "Food & Beverages",
        "description": "Medium roast whole beans, 500g.",
        "image": "https://images.unsplash.com/photo-1559056199-641a0ac8b55e?w=600",
        "stock": 200,
        "rating": 4.6,
        "discount": 0,
        "featured": False,
    },
    {
        "name": "Sterling Silver Pendant",
        "price": 89.0,
        "category": "Jewelry",
        "description": "Minimal pendant on an 18 inch chain.",
        "image": "https://images.unsplash.com/photo-1522312346375-d1a52e2b99b3?w=600",
        "stock": 0,
        "rating": 4.4,
        "discount": 0,
        "featured": False,
        "is_active": False,
    },
]
