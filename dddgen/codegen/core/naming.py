"""
Naming utilities for safe code generation.

Case conversions and naive English inflection used by the template
helpers and the format adapters. Every function here is pure.
"""

import re
from typing import Set, Dict, Optional
from enum import Enum


class NamingCase(Enum):
    """Different naming case styles."""
    SNAKE_CASE = "snake"      # user_name
    CAMEL_CASE = "camel"      # userName
    PASCAL_CASE = "pascal"    # UserName
    KEBAB_CASE = "kebab"      # user-name


_WORD_SPLIT = re.compile(r'[^A-Za-z0-9]+')


def _split_words(name: str) -> list:
    return [word for word in _WORD_SPLIT.split(name) if word]


def to_snake_case(name: str) -> str:
    """
    Convert to snake_case.

    Inserts an underscore before every interior uppercase letter, then
    lower-cases. The abbreviation "ID" maps to "id".
    """
    if not name:
        return name
    if name.lower() == "id":
        return "id"

    chars = []
    for index, char in enumerate(name):
        if index > 0 and char.isupper():
            chars.append('_')
        chars.append(char.lower())
    return ''.join(chars)


def to_kebab_case(name: str) -> str:
    """Convert to kebab-case (hyphen before every interior uppercase letter)."""
    if not name:
        return name

    chars = []
    for index, char in enumerate(name):
        if index > 0 and char.isupper():
            chars.append('-')
        chars.append(char.lower())
    return ''.join(chars)


def to_pascal_case(name: str) -> str:
    """
    Convert to PascalCase.

    Words are split on any non-alphanumeric character; each word gets an
    upper-case first letter and keeps the rest of its casing.
    """
    return ''.join(word[0].upper() + word[1:] for word in _split_words(name))


def to_camel_case(name: str) -> str:
    """Convert to camelCase."""
    if name.isupper():
        return name.lower()
    pascal = to_pascal_case(name)
    return pascal[:1].lower() + pascal[1:]


def segments_to_pascal(name: str, separator: str = '_') -> str:
    """
    Title-case each separator-delimited segment and concatenate.

    ``user_id`` -> ``UserId``; ``a_b_c_d`` -> ``ABCD``.
    """
    return ''.join(
        part[:1].upper() + part[1:].lower() for part in name.split(separator) if part
    )


def pluralize(word: str) -> str:
    """Naive English plural, lower-cased."""
    if not word:
        return word

    word = word.lower()
    if word.endswith('y'):
        return word[:-1] + 'ies'
    if word.endswith(('s', 'sh', 'ch')):
        return word + 'es'
    return word + 's'


def singularize(word: str) -> str:
    """Naive inverse of pluralize, lower-cased."""
    if not word:
        return word

    word = word.lower()
    if word.endswith('ies'):
        return word[:-3] + 'y'
    if word.endswith('es'):
        return word[:-2]
    if word.endswith('s') and len(word) > 1:
        return word[:-1]
    return word


_CONVERTERS = {
    NamingCase.SNAKE_CASE: to_snake_case,
    NamingCase.CAMEL_CASE: to_camel_case,
    NamingCase.PASCAL_CASE: to_pascal_case,
    NamingCase.KEBAB_CASE: to_kebab_case,
}


def convert_case(name: str, target_case: NamingCase) -> str:
    """Convert name to target case style."""
    return _CONVERTERS[target_case](name)


class NameSanitizer:
    """Handles identifier sanitization against reserved words."""

    def __init__(self, reserved_words: Set[str] = None, builtin_types: Set[str] = None):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Set of language reserved words
            builtin_types: Set of builtin type names that might conflict
        """
        self.reserved_words = reserved_words or set()
        self.builtin_types = builtin_types or set()
        self._name_cache: Dict[str, str] = {}

    def sanitize_name(self, name: str, target_case: NamingCase = NamingCase.CAMEL_CASE,
                      suffix_on_conflict: str = "_") -> str:
        """
        Sanitize a name for safe use as an identifier in the target language.

        Args:
            name: Original name to sanitize
            target_case: Desired case style
            suffix_on_conflict: Suffix to add for reserved-word conflicts

        Returns:
            Sanitized name safe for use
        """
        cache_key = f"{name}_{target_case.value}_{suffix_on_conflict}"
        if cache_key in self._name_cache:
            return self._name_cache[cache_key]

        converted = convert_case(self._clean_basic(name), target_case)
        if converted.lower() in self.reserved_words or converted.lower() in self.builtin_types:
            converted = f"{converted}{suffix_on_conflict}"

        self._name_cache[cache_key] = converted
        return converted

    def _clean_basic(self, name: str) -> str:
        """Basic name cleanup - remove invalid characters."""
        cleaned = re.sub(r'[^a-zA-Z0-9_-]', '_', name)
        cleaned = cleaned.strip('_-')

        # Ensure doesn't start with number
        if cleaned and cleaned[0].isdigit():
            cleaned = f"_{cleaned}"

        if not cleaned:
            cleaned = "field"

        return cleaned


def project_slug(title: Optional[str]) -> str:
    """Lower-case a document title and replace spaces/underscores with hyphens."""
    if not title:
        return ""
    return title.lower().replace(' ', '-').replace('_', '-')
