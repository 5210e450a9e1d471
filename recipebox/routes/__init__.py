"""
RecipeBox Backend — API Routes Package
=========================================

Route Inventory:
    - auth.py:     POST /login, POST /register
    - recipes.py:  GET /api/recipes/{id}, GET|POST /api/published,
                   PUT /api/published/{id}, GET /api/trending, GET /api/dishes
    - users.py:    PUT /api/users/{id}, GET|POST /api/saved/{userId}
    - health.py:   GET /, GET /health

Routes stay thin: parse the request, call a service, return its result.
Status codes for failures come from the exception handlers in main.py.
"""
