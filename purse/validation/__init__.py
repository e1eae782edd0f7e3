"""Validation package."""

from purse.validation.validator import InputValidator

__all__ = ["InputValidator"]
