# forms_sdk/__init__.py
