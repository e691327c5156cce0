"""
Template engine module.
Implements $(name) placeholder discovery and substitution.
"""

from .substitution import PlaceholderSubstitutor, extract_placeholders, render_template

__all__ = ['PlaceholderSubstitutor', 'extract_placeholders', 'render_template']
