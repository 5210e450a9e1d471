"""
RecipeBox Backend — Static Dish Catalogue
===========================================

Read-only showcase data served by GET /api/dishes. It is reference content
for the home page, not user data: it is never stored in the database and
the models are frozen, so nothing can mutate it at runtime.
"""

from recipebox.schemas.recipe import Dish, DishesResponse

SAMPLE_DISHES = DishesResponse(
    all_time_best=(
        Dish(title="Spaghetti Bolognese", time="45 mins", likes=300, image="/dish7.jpg"),
        Dish(title="Pizza Margherita", time="30 mins", likes=450, image="/dish8.jpg"),
        Dish(title="Butter Chicken", time="50 mins", likes=275, image="/dish9.jpg"),
        Dish(title="Chocolate Cake", time="1 hr", likes=320, image="/dish10.jpg"),
        Dish(title="Caesar Salad", time="15 mins", likes=180, image="/dish11.jpg"),
        Dish(title="Sushi Rolls", time="40 mins", likes=210, image="/dish12.jpg"),
    ),
    today_specials=(
        Dish(title="Fish Curry", time="40 mins", likes=130, image="/dish19.jpg"),
        Dish(title="Steak Fries", time="45 mins", likes=220, image="/dish20.jpg"),
        Dish(title="Quinoa Salad", time="20 mins", likes=95, image="/dish21.jpg"),
        Dish(title="Pancakes", time="25 mins", likes=310, image="/dish22.jpg"),
        Dish(title="Lamb Chops", time="50 mins", likes=160, image="/dish23.jpg"),
        Dish(title="Mango Sorbet", time="30 mins", likes=140, image="/dish24.jpg"),
    ),
)
