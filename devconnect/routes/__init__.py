"""
DevConnect Backend — API Routes Package
=========================================

Route Inventory:
    - users.py:    POST /api/users                 (register)
    - auth.py:     GET/POST /api/auth              (current user / login)
    - profile.py:  /api/profile/...                (profiles, experience, education, GitHub)
    - posts.py:    /api/posts/...                  (posts, likes, comments)
    - health.py:   GET /health                     (service health check)

Design Principle:
    Routes are THIN: they handle HTTP concerns only and delegate to services.
"""
