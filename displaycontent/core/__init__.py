# displaycontent/core/__init__.py
