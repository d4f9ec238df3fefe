"""Curated per-serving foods available without any I/O."""

from diet_tracker.domain.foods import FoodSource, NormalizedFood
from diet_tracker.domain.nutrition import NutrientValues


def _food(  # noqa: PLR0913
    slug: str,
    name: str,
    serving: str,
    calories: float,
    protein: float,
    carbs: float,
    fat: float,
    fiber: float | None = None,
    sugar: float | None = None,
) -> NormalizedFood:
    return NormalizedFood(
        id=f"local-{slug}",
        name=name,
        source=FoodSource.LOCAL,
        serving=serving,
        nutrients=NutrientValues(
            calories=calories,
            protein=protein,
            carbs=carbs,
            fat=fat,
            fiber=fiber,
            sugar=sugar,
        ),
    )


LOCAL_FOODS: tuple[NormalizedFood, ...] = (
    # Fruits
    _food("banana", "Banana", "1 medium (118g)", 105, 1.3, 27, 0.4, 3.1, 14.4),
    _food("apple", "Apple", "1 medium (182g)", 95, 0.5, 25, 0.3, 4.4, 19),
    _food("orange", "Orange", "1 medium (154g)", 62, 1.2, 15.4, 0.2, 3.1, 12.2),
    _food("grapes", "Grapes", "1 cup (151g)", 104, 1.1, 27.3, 0.2, 1.4, 23.4),
    _food("strawberries", "Strawberries", "1 cup (152g)", 49, 1, 11.7, 0.5, 3, 7.4),
    _food("mango", "Mango", "1 cup (165g)", 107, 0.8, 28, 0.4, 3, 24),
    _food("pineapple", "Pineapple", "1 cup (165g)", 82, 0.9, 22, 0.2, 2.3, 16),
    # Proteins
    _food("chicken-breast", "Chicken Breast", "100g", 165, 31, 0, 3.6),
    _food("salmon", "Salmon", "100g", 206, 22, 0, 12),
    _food("tuna", "Tuna", "100g", 144, 30, 0, 1),
    _food("eggs", "Eggs", "2 large eggs (100g)", 155, 13, 1.1, 11),
    _food("tofu", "Tofu", "100g", 76, 8, 1.9, 4.8),
    _food("lean-beef", "Lean Beef", "100g", 250, 26, 0, 15),
    _food("turkey", "Turkey Breast", "100g", 135, 30, 0, 1),
    # Grains and starches
    _food("brown-rice", "Brown Rice", "1 cup cooked (195g)", 216, 5, 45, 2, 3.5),
    _food("quinoa", "Quinoa", "1 cup cooked (185g)", 222, 8, 39, 3.6, 5.2),
    _food("oats", "Oats", "100g dry", 389, 16.9, 66.3, 6.9, 10.6),
    _food("sweet-potato", "Sweet Potato", "1 medium (128g)", 112, 2, 26, 0.1, 3.9),
    _food("pasta", "Whole Wheat Pasta", "1 cup cooked (140g)", 220, 8, 44, 1.1, 2.5),
    _food("bread", "Whole Grain Bread", "1 slice (28g)", 80, 4, 14, 1, 2),
    # Vegetables
    _food("spinach", "Spinach", "1 cup (30g)", 7, 0.9, 1.1, 0.1, 0.7),
    _food("broccoli", "Broccoli", "1 cup (91g)", 25, 3, 5, 0.3, 2.6),
    _food("carrots", "Carrots", "1 medium (61g)", 25, 0.5, 6, 0.1, 1.7),
    _food("tomato", "Tomato", "1 medium (123g)", 22, 1.1, 4.8, 0.2, 1.5),
    _food("cucumber", "Cucumber", "1/2 cup sliced (60g)", 8, 0.3, 1.9, 0.1, 0.3),
    _food("bell-pepper", "Bell Pepper", "1 medium (119g)", 20, 1, 5, 0.2, 2),
    # Fats and nuts
    _food("avocado", "Avocado", "1 medium (150g)", 234, 3, 12, 21, 10),
    _food("almonds", "Almonds", "1 oz (28g)", 164, 6, 6, 14, 3.5),
    _food("walnuts", "Walnuts", "1 oz (28g)", 185, 4.3, 3.9, 18.5, 1.9),
    _food("olive-oil", "Olive Oil", "1 tbsp (13.5g)", 119, 0, 0, 13.5),
    _food("peanut-butter", "Peanut Butter", "2 tbsp (32g)", 188, 8, 8, 16, 2),
    # Dairy
    _food("greek-yogurt", "Greek Yogurt", "1 cup (245g)", 100, 17, 6, 0),
    _food("milk", "Milk", "1 cup (244g)", 150, 8, 12, 8),
    _food("cheese", "Cheddar Cheese", "1 oz (28g)", 113, 7, 1, 9),
    _food("cottage-cheese", "Cottage Cheese", "1/2 cup (113g)", 98, 11, 9, 4),
    # Indian staples
    _food("dal", "Dal (Lentils)", "1 cup cooked (198g)", 116, 9, 20, 0.4, 8),
    _food("roti", "Roti", "1 medium (28g)", 71, 3, 15, 0.4, 2),
    _food("basmati-rice", "Basmati Rice", "1 cup cooked (163g)", 205, 4.3, 45, 0.4),
    _food("paneer", "Paneer", "100g", 321, 25, 3.6, 25),
)

# Shown when the search box is empty.
DEFAULT_FOOD_IDS: tuple[str, ...] = (
    "local-banana",
    "local-eggs",
    "local-chicken-breast",
    "local-oats",
    "local-greek-yogurt",
    "local-roti",
    "local-dal",
    "local-apple",
)

_BY_ID = {food.id: food for food in LOCAL_FOODS}


def get_local_food(food_id: str) -> NormalizedFood | None:
    """Return a curated food by id."""
    return _BY_ID.get(food_id)


def default_foods() -> list[NormalizedFood]:
    """Return the curated fallback list for an empty query."""
    return [_BY_ID[food_id] for food_id in DEFAULT_FOOD_IDS]
