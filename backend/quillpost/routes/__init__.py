# Routes package init
"""
Quillpost Backend — API Routes Package
=========================================

Route Inventory:
    - users.py:     POST /api/users                      (register user)
                    GET  /api/users/{userId}             (get user)
    - posts.py:     POST /api/posts                      (create post)
                    GET  /api/posts/{postId}             (get post)
    - comments.py:  POST /api/posts/{postId}/comments    (add comment)
                    GET  /api/posts/{postId}/comments    (list comments)
    - health.py:    GET  /health                         (service health check)

Routes are THIN: extract path/body, call a service, pick the status code.
Errors are raised, never returned; global handlers in main.py format them.
"""
