# bloglist/core/__init__.py
