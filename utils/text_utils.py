"""
Text utilities for catalog identifiers and search.

Used for product codes, category slugs and catalog search matching.
"""

import re
import unicodedata
from typing import Optional


def normalize_search_text(text: Optional[str]) -> str:
    """
    Normalize text for case- and accent-insensitive search.

    - "Cire Protectrice" → "cire protectrice"
    - "Céramique" → "ceramique"
    - None → ""

    Args:
        text: Original text (may have accents, mixed case)

    Returns:
        Lowercase string with accent marks removed
    """
    if not text:
        return ""

    # NFD decomposition separates base chars from accents
    normalized = unicodedata.normalize('NFD', text.strip())

    # Remove accent marks (combining characters in Unicode category 'Mn')
    stripped = ''.join(
        c for c in normalized
        if unicodedata.category(c) != 'Mn'
    )

    return stripped.lower()


def generate_product_code(name: str) -> str:
    """
    Build a product code from a product name.

    Uppercases and turns whitespace runs into hyphens; other characters
    are kept as-is.

    - "Glass Cleaner" → "GLASS-CLEANER"
    - "Polishing & Sealing Foam Pad" → "POLISHING-&-SEALING-FOAM-PAD"
    """
    return re.sub(r'\s+', '-', name.strip().upper())


def generate_slug(name: str) -> str:
    """
    Build a URL slug from a category name.

    - "Foam Pads" → "foam-pads"
    - "Wax & Sealants" → "wax-sealants"

    Args:
        name: Category display name

    Returns:
        Lowercase slug of [a-z0-9-]
    """
    slug = name.lower()
    slug = re.sub(r'[^a-z0-9\s-]', '', slug)
    slug = re.sub(r'\s+', '-', slug)
    slug = re.sub(r'-+', '-', slug)
    return slug.strip('-')
