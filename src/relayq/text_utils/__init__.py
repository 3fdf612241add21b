from .casing import camel_to_snake

__all__ = ["camel_to_snake"]
