"""
ProjectHub Backend — API Routes Package
========================================

What:  HTTP route handlers that accept requests and return responses.
How:   One module per resource; handlers stay thin and delegate to services.

Route Inventory:
    - projects.py: /projects, /projects/{id}, comments, likes, bookmark
    - auth.py:     POST /auth/signup, POST /auth/login
    - users.py:    GET  /users/{username}, PUT /users/{username}
    - health.py:   GET  /health
"""
