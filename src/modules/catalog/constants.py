"""Catalog constants: product categories and the predefined product list."""

from django.db import models


class ProductCategory(models.TextChoices):
    FRUITS = "fruits", "Fruits"
    VEGETABLES = "vegetables", "Vegetables"
    MEAT = "meat", "Meat"
    DAIRY = "dairy", "Dairy"
    GRAINS = "grains", "Grains"
    SPICES = "spices", "Spices"


# (id, name, category, unit, base price, description)
INVENTORY_PRODUCTS: tuple[tuple[str, str, str, str, str, str], ...] = (
    ("f1", "Apple", ProductCategory.FRUITS, "kg", "120", "Fresh red apples"),
    ("f2", "Banana", ProductCategory.FRUITS, "dozen", "60", "Ripe yellow bananas"),
    ("f3", "Orange", ProductCategory.FRUITS, "kg", "100", "Juicy oranges"),
    ("f4", "Mango", ProductCategory.FRUITS, "kg", "200", "Sweet mangoes"),
    ("f5", "Grapes", ProductCategory.FRUITS, "kg", "180", "Fresh grapes"),
    ("f6", "Watermelon", ProductCategory.FRUITS, "piece", "150", "Sweet watermelon"),
    ("v1", "Tomato", ProductCategory.VEGETABLES, "kg", "40", "Fresh tomatoes"),
    ("v2", "Onion", ProductCategory.VEGETABLES, "kg", "35", "Red onions"),
    ("v3", "Potato", ProductCategory.VEGETABLES, "kg", "30", "Fresh potatoes"),
    ("v4", "Carrot", ProductCategory.VEGETABLES, "kg", "45", "Orange carrots"),
    ("v5", "Cabbage", ProductCategory.VEGETABLES, "piece", "25", "Fresh cabbage"),
    ("v6", "Cauliflower", ProductCategory.VEGETABLES, "piece", "35", "Fresh cauliflower"),
    ("v7", "Spinach", ProductCategory.VEGETABLES, "bunch", "20", "Fresh spinach"),
    ("v8", "Bell Pepper", ProductCategory.VEGETABLES, "kg", "80", "Colorful bell peppers"),
    ("m1", "Chicken Breast", ProductCategory.MEAT, "kg", "280", "Boneless chicken breast"),
    ("m2", "Chicken Whole", ProductCategory.MEAT, "kg", "220", "Whole chicken"),
    ("m3", "Mutton", ProductCategory.MEAT, "kg", "650", "Fresh mutton"),
    ("m4", "Fish", ProductCategory.MEAT, "kg", "350", "Fresh fish"),
    ("m5", "Eggs", ProductCategory.MEAT, "dozen", "90", "Fresh eggs"),
    ("d1", "Milk", ProductCategory.DAIRY, "liter", "60", "Fresh milk"),
    ("d2", "Butter", ProductCategory.DAIRY, "500g", "250", "Creamy butter"),
    ("d3", "Cheese", ProductCategory.DAIRY, "200g", "180", "Processed cheese"),
    ("d4", "Yogurt", ProductCategory.DAIRY, "500g", "70", "Fresh yogurt"),
    ("d5", "Cream", ProductCategory.DAIRY, "250ml", "120", "Fresh cream"),
    ("d6", "Paneer", ProductCategory.DAIRY, "200g", "150", "Fresh paneer"),
    ("g1", "Rice", ProductCategory.GRAINS, "kg", "80", "Basmati rice"),
    ("g2", "Wheat Flour", ProductCategory.GRAINS, "kg", "45", "Whole wheat flour"),
    ("g3", "Lentils", ProductCategory.GRAINS, "kg", "120", "Mixed lentils"),
    ("s1", "Turmeric", ProductCategory.SPICES, "100g", "35", "Turmeric powder"),
    ("s2", "Cumin", ProductCategory.SPICES, "100g", "45", "Cumin seeds"),
    ("s3", "Coriander", ProductCategory.SPICES, "100g", "30", "Coriander powder"),
    ("s4", "Garam Masala", ProductCategory.SPICES, "100g", "55", "Mixed spices"),
    ("s5", "Red Chili", ProductCategory.SPICES, "100g", "40", "Red chili powder"),
)
