"""Illustration widgets."""

from .illustration_view import IllustrationView

__all__ = ['IllustrationView']
