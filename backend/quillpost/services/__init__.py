# Services package init
"""
Quillpost Backend — Services Layer
=====================================

What:  Business logic between routes (HTTP) and storage (SQL).

Service Inventory:
    - UserService: register and fetch users
    - PostService: publish and fetch posts
    - CommentService: add and list comments under a post

Services are stateless; each call receives the request's database session.
"""
