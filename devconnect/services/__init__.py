"""
DevConnect Backend — Services Layer
=====================================

Service Inventory:
    - UserService:    registration, login, current user (built per app: needs settings)
    - ProfileService: profile upsert/lookup, account deletion, experience/education
    - PostService:    posts, likes, comments
    - GithubService:  latest repositories from the GitHub API (built per app)
"""
