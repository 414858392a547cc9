"""CI/CD workflow scaffolding."""

from .init import InitResult, to_init

__all__ = ["InitResult", "to_init"]
