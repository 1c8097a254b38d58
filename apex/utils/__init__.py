# apex/utils/__init__.py
