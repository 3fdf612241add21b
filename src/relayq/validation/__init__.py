from .validator import ValidationResult, Validator

__all__ = ["Validator", "ValidationResult"]
