"""
RecipeBox Backend — Services Layer
=====================================

What:  Domain rules between the routes (HTTP) and the database (persistence).
How:   Services take an AsyncSession plus plain values or request schemas and
       return ORM rows or response schemas. Failures surface as RecipeBoxError
       subclasses, which main.py maps to HTTP responses.

Service Inventory:
    - security:        bcrypt hashing and verification (passlib)
    - UserService:     register, login, profile read and update
    - RecipeService:   publish, fetch, merge-update and owner listing
    - BookmarkService: saved-recipe listing and idempotent add
    - RankingService:  trending order by trend score, then likes
"""
