# storefront/api/__init__.py
