"""
Placeholder extraction and substitution.
Handles $(name) markers in opaque script text.
"""

import re
from typing import Dict, List, Mapping


class PlaceholderSubstitutor:
    """
    Discovers and substitutes $(name) placeholders in script templates.

    The script body is never parsed; a placeholder is any dollar sign,
    open parenthesis, run of non-')' characters and close parenthesis.
    There is no escape sequence, so every '$(' starts a marker. Markers
    without a binding are left in the output literally.
    """

    # Bit-exact marker syntax; group 1 is the placeholder name (may be empty)
    PLACEHOLDER_PATTERN = re.compile(r'\$\(([^)]*)\)')

    def extract(self, template: str) -> List[str]:
        """
        List unique placeholder names in order of first occurrence.

        Args:
            template: Script text containing $(name) markers

        Returns:
            Duplicate-free list of names, empty if there are no markers
        """
        names: List[str] = []
        seen = set()

        for match in self.PLACEHOLDER_PATTERN.finditer(template):
            name = match.group(1)
            if name not in seen:
                seen.add(name)
                names.append(name)

        return names

    def render(self, template: str, bindings: Mapping[str, str]) -> str:
        """
        Substitute bound placeholders in a template.

        Values are inserted verbatim, without shell or regex escaping.
        The template is scanned once, so marker-like text inside a bound
        value is not substituted again.

        Args:
            template: Script text containing $(name) markers
            bindings: Placeholder name to value mapping

        Returns:
            Rendered command string
        """
        if not bindings:
            return template

        def replace_placeholder(match):
            name = match.group(1)
            if name in bindings:
                return bindings[name]
            return match.group(0)

        return self.PLACEHOLDER_PATTERN.sub(replace_placeholder, template)

    def unbound(self, template: str, bindings: Mapping[str, str]) -> List[str]:
        """Names in the template that the bindings leave unresolved."""
        return [name for name in self.extract(template) if name not in bindings]

    def build_bindings(self, variables: List[Dict[str, str]]) -> Dict[str, str]:
        """
        Build a binding map from a list of {"name": ..., "value": ...} entries.

        Later entries win when a name repeats.

        Raises:
            ValueError: If an entry is not a name/value object of strings
        """
        bindings: Dict[str, str] = {}

        for index, entry in enumerate(variables):
            if not isinstance(entry, dict):
                raise ValueError(f"variables[{index}] must be an object with 'name' and 'value'")
            name = entry.get('name')
            value = entry.get('value', '')
            if not isinstance(name, str):
                raise ValueError(f"variables[{index}].name must be a string")
            if not isinstance(value, str):
                raise ValueError(f"variables[{index}].value must be a string")
            bindings[name] = value

        return bindings


_substitutor = PlaceholderSubstitutor()


def extract_placeholders(template: str) -> List[str]:
    """Return the ordered, duplicate-free placeholder names in a template."""
    return _substitutor.extract(template)


def render_template(template: str, bindings: Mapping[str, str]) -> str:
    """Render a template, leaving unbound placeholders untouched."""
    return _substitutor.render(template, bindings)
