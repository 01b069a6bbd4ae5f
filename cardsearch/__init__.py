"""Credit card search: autocomplete, spelling suggestions and TF-IDF ranking"""

__version__ = "0.1.0"
