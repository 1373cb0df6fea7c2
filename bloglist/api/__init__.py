# bloglist/api/__init__.py
