"""
Default Store Contents

Tables and menu written into a fresh document store at startup.
"""

from typing import Any

DEFAULT_TABLES = [
    {"id": i, "name": f"Table {i}", "status": "available"}
    for i in range(1, 9)
]

DEFAULT_FOOD_ITEMS = [
    {"id": 1, "name": "Espresso", "category": "Coffee", "price": 2.5,
     "description": "Single shot of house-roasted espresso"},
    {"id": 2, "name": "Cappuccino", "category": "Coffee", "price": 3.75,
     "description": "Espresso with steamed milk and foam"},
    {"id": 3, "name": "Caffè Latte", "category": "Coffee", "price": 4.0,
     "description": "Espresso with plenty of steamed milk"},
    {"id": 4, "name": "Flat White", "category": "Coffee", "price": 3.95,
     "description": "Double ristretto with velvety microfoam"},
    {"id": 5, "name": "English Breakfast Tea", "category": "Tea", "price": 2.95,
     "description": "Pot of black tea served with milk"},
    {"id": 6, "name": "Matcha Latte", "category": "Tea", "price": 4.5,
     "description": "Ceremonial grade matcha with oat milk"},
    {"id": 7, "name": "Butter Croissant", "category": "Pastry", "price": 3.25,
     "description": "Flaky all-butter croissant"},
    {"id": 8, "name": "Blueberry Muffin", "category": "Pastry", "price": 3.5,
     "description": "Baked fresh every morning"},
    {"id": 9, "name": "Avocado Toast", "category": "Breakfast", "price": 9.5,
     "description": "Sourdough, smashed avocado, chili flakes, poached egg"},
    {"id": 10, "name": "Eggs Benedict", "category": "Breakfast", "price": 11.95,
     "description": "English muffin, ham, poached eggs, hollandaise"},
    {"id": 11, "name": "Club Sandwich", "category": "Lunch", "price": 12.5,
     "description": "Chicken, bacon, lettuce, tomato, mayo, fries"},
    {"id": 12, "name": "Caesar Salad", "category": "Lunch", "price": 10.75,
     "description": "Romaine, parmesan, croutons, Caesar dressing"},
    {"id": 13, "name": "Cheesecake", "category": "Dessert", "price": 6.25,
     "description": "New York style with berry compote"},
    {"id": 14, "name": "Fresh Orange Juice", "category": "Drinks", "price": 4.25,
     "description": "Squeezed to order"},
]


def default_document() -> dict[str, list[dict[str, Any]]]:
    """A fresh store: default tables and menu, no orders or bills."""
    return {
        "tables": [dict(t) for t in DEFAULT_TABLES],
        "foodItems": [dict(f) for f in DEFAULT_FOOD_ITEMS],
        "orders": [],
        "bills": [],
    }
