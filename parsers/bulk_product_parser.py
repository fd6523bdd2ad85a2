"""
Bulk product text parser.

Parses "Name<TAB>Price" lines pasted from a spreadsheet (or "Name  Price"
with a double space from plain text) into base products with size variants.

    Orange Foam Pad 6Inch (Heavy Cut)	89.00
    Glass Cleaner 500ml	39.90
    Glass Cleaner 1L	64.90

becomes two products: "Orange Foam Pad" [6Inch] and "Glass Cleaner" [500ml, 1L].

Malformed lines never raise. They are dropped from the products and
reported in BulkParseResult.skipped_lines.
"""

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional
import math
import re
import structlog

logger = structlog.get_logger(__name__)

# Constants
DEFAULT_SIZE = "Standard"
SKIP_MISSING_DELIMITER = "missing_delimiter"
SKIP_INVALID_PRICE = "invalid_price"

_UNIT = r"(?:ml|l|cm|mm|inch)"
_INCH_SIZE = r"(?P<size>\d+(?:\.\d+)?Inch)"
_QUALIFIER = r"\s*\([^)]*\)"

# Plain decimal only: no currency symbols, thousands separators or exponents
_PRICE_RE = re.compile(r"^\+?(?:\d+(?:\.\d*)?|\.\d+)$")
_WHITESPACE_RE = re.compile(r"\s+")
_NON_SKU_CHARS_RE = re.compile(r"[^A-Z0-9-]")


@dataclass
class ParsedEntry:
    """A line split into its full name and price."""
    full_name: str
    price: float


@dataclass
class SizeExtraction:
    """Base name and size token extracted from a full product name."""
    base_name: str
    size: str
    rule: str = "standard"


@dataclass
class ParsedLine:
    """One accepted input line, ready for aggregation."""
    line_number: int
    full_name: str
    base_name: str
    size: str
    price: float
    sku: str


@dataclass
class ParsedVariant:
    """One size/price/SKU combination of a base product."""
    size: str
    price: float
    sku: str


@dataclass
class ParsedProduct:
    """A base product with all variants found for it, in input order."""
    name: str
    variants: list[ParsedVariant] = field(default_factory=list)


@dataclass
class SkippedLine:
    """A line that was dropped during parsing (non-fatal)."""
    line_number: int
    line: str
    reason: str


@dataclass
class BulkParseResult:
    """Result of parsing pasted bulk product text."""
    products: list[ParsedProduct] = field(default_factory=list)
    skipped_lines: list[SkippedLine] = field(default_factory=list)
    line_count: int = 0

    @property
    def variant_count(self) -> int:
        """Total variants across all products."""
        return sum(len(p.variants) for p in self.products)

    @property
    def has_data(self) -> bool:
        """True if any product was parsed."""
        return len(self.products) > 0

    @property
    def summary(self) -> str:
        """One-line summary shown to the admin after parsing."""
        return (
            f"Found {len(self.products)} unique products with "
            f"{self.variant_count} total variants."
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for API response."""
        return {
            "products": [
                {
                    "name": p.name,
                    "variants": [
                        {"size": v.size, "price": v.price, "sku": v.sku}
                        for v in p.variants
                    ],
                }
                for p in self.products
            ],
            "skipped_lines": [
                {"line_number": s.line_number, "line": s.line, "reason": s.reason}
                for s in self.skipped_lines
            ],
            "line_count": self.line_count,
            "product_count": len(self.products),
            "variant_count": self.variant_count,
            "summary": self.summary,
        }


# ===================
# SIZE RULES
# ===================

@dataclass(frozen=True)
class SizeRule:
    """
    One size-extraction rule.

    The pattern must define a "size" group. The base name is, in order of
    preference: the fixed product family name, the pattern's "base" group,
    or the full name with the matched text cut out.
    """
    name: str
    pattern: re.Pattern
    family: Optional[str] = None

    def apply(self, full_name: str) -> Optional[SizeExtraction]:
        """Return the extraction if this rule matches, else None."""
        match = self.pattern.search(full_name)
        if match is None:
            return None

        if self.family is not None:
            base_name = self.family
        elif "base" in self.pattern.groupindex:
            base_name = match.group("base").strip()
        else:
            base_name = (full_name[:match.start()] + full_name[match.end():]).strip()

        return SizeExtraction(
            base_name=base_name,
            size=match.group("size"),
            rule=self.name,
        )


# Order matters: product families before the generic unit pattern, so that
# e.g. "Lambswool Pad Short 5Inch (Soft)" keeps "Short" in its base name.
SIZE_RULES: tuple[SizeRule, ...] = (
    SizeRule(
        name="foam_pad_inch",
        pattern=re.compile(rf"^(?P<base>.*Foam Pad)\s+{_INCH_SIZE}{_QUALIFIER}", re.IGNORECASE),
    ),
    SizeRule(
        name="lambswool_short_inch",
        pattern=re.compile(rf"^Lambswool Pad Short\s+{_INCH_SIZE}{_QUALIFIER}", re.IGNORECASE),
        family="Lambswool Pad Short",
    ),
    # Anchored: "Blue Lambswool Pad 150mm" is left to generic_unit
    SizeRule(
        name="lambswool_mm",
        pattern=re.compile(r"^Lambswool Pad\s+(?P<size>\d+mm)\b", re.IGNORECASE),
        family="Lambswool Pad",
    ),
    SizeRule(
        name="polishing_foam_pad_inch",
        pattern=re.compile(
            rf"^Polishing & Sealing Foam Pad\s+{_INCH_SIZE}{_QUALIFIER}", re.IGNORECASE
        ),
        family="Polishing & Sealing Foam Pad",
    ),
    SizeRule(
        name="generic_unit",
        pattern=re.compile(
            r"\s+(?P<size>"
            rf"\d+(?:\.\d+)?{_UNIT}\b"
            r"|\d+X\d+(?:X\d+)?(?:cm|mm)?"
            rf"|[\d.]+\s*{_UNIT}"
            r"|Short\s+\d+Inch\s*\([^)]+\)"
            r"|\d+Inch\s*\([^)]+\)"
            r"|[\d.]+gsm"
            r")",
            re.IGNORECASE,
        ),
    ),
    SizeRule(
        name="trailing_unit",
        pattern=re.compile(rf"\s+(?P<size>\d+(?:\.\d+)?{_UNIT})$", re.IGNORECASE),
    ),
)


# ===================
# PIPELINE STAGES
# ===================

def iter_lines(raw_text: str) -> Iterator[tuple[int, str]]:
    """Yield (line_number, trimmed_line) for every non-blank line, 1-based."""
    for line_number, line in enumerate(raw_text.split("\n"), start=1):
        trimmed = line.strip()
        if trimmed:
            yield line_number, trimmed


def tokenize_lines(raw_text: str) -> list[str]:
    """Split raw text into trimmed, non-empty lines in original order."""
    return [line for _, line in iter_lines(raw_text)]


def split_name_price_with_reason(line: str) -> tuple[Optional[ParsedEntry], Optional[str]]:
    """
    Split a line at its last tab, or failing that its last double space.

    Returns:
        (ParsedEntry, None) on success, (None, reason) if the line is rejected
    """
    split_index = line.rfind("\t")
    if split_index == -1:
        split_index = line.rfind("  ")
    if split_index == -1:
        return None, SKIP_MISSING_DELIMITER

    full_name = line[:split_index].strip()
    price_text = line[split_index + 1:].strip()

    if not _PRICE_RE.match(price_text):
        return None, SKIP_INVALID_PRICE

    price = float(price_text)
    # Very long digit strings overflow to inf
    if not math.isfinite(price):
        return None, SKIP_INVALID_PRICE

    return ParsedEntry(full_name=full_name, price=price), None


def split_name_price(line: str) -> Optional[ParsedEntry]:
    """Split a line into name and price; None if the line is rejected."""
    entry, _ = split_name_price_with_reason(line)
    return entry


def extract_size(full_name: str) -> SizeExtraction:
    """Apply SIZE_RULES in order; the first match wins, else "Standard"."""
    for rule in SIZE_RULES:
        extraction = rule.apply(full_name)
        if extraction is not None:
            return extraction
    return SizeExtraction(base_name=full_name, size=DEFAULT_SIZE)


def derive_sku(full_name: str) -> str:
    """
    Derive a SKU from the full (pre-split) product name.

    "Glass Cleaner 500ml" -> "GLASS-CLEANER-500ML"
    """
    sku = _WHITESPACE_RE.sub("-", full_name.upper())
    return _NON_SKU_CHARS_RE.sub("", sku)


def parse_line(line: str, line_number: int = 1) -> Optional[ParsedLine]:
    """Run one trimmed line through split, size extraction and SKU derivation."""
    entry = split_name_price(line)
    if entry is None:
        return None
    return _to_parsed_line(entry, line_number)


def _to_parsed_line(entry: ParsedEntry, line_number: int) -> ParsedLine:
    extraction = extract_size(entry.full_name)
    return ParsedLine(
        line_number=line_number,
        full_name=entry.full_name,
        base_name=extraction.base_name,
        size=extraction.size,
        price=entry.price,
        sku=derive_sku(entry.full_name),
    )


def aggregate_variants(rows: Iterable[ParsedLine]) -> list[ParsedProduct]:
    """
    Group parsed lines by base name, first-seen order.

    Repeated sizes are kept as separate variants.
    """
    products: dict[str, ParsedProduct] = {}
    for row in rows:
        product = products.get(row.base_name)
        if product is None:
            product = products[row.base_name] = ParsedProduct(name=row.base_name)
        product.variants.append(ParsedVariant(size=row.size, price=row.price, sku=row.sku))
    return list(products.values())


# ===================
# ENTRY POINTS
# ===================

def parse_bulk_product_text(raw_text: str) -> BulkParseResult:
    """
    Parse pasted bulk product text.

    Args:
        raw_text: One product per line, "Name<TAB>Price" or "Name  Price"

    Returns:
        BulkParseResult with grouped products and the lines that were skipped
    """
    result = BulkParseResult()
    rows: list[ParsedLine] = []

    for line_number, line in iter_lines(raw_text):
        result.line_count += 1

        entry, reason = split_name_price_with_reason(line)
        if entry is None:
            logger.debug("bulk_line_skipped", line_number=line_number, reason=reason)
            result.skipped_lines.append(SkippedLine(
                line_number=line_number,
                line=line,
                reason=reason,
            ))
            continue

        rows.append(_to_parsed_line(entry, line_number))

    result.products = aggregate_variants(rows)

    logger.info(
        "bulk_text_parsed",
        line_count=result.line_count,
        product_count=len(result.products),
        variant_count=result.variant_count,
        skipped_count=len(result.skipped_lines)
    )

    return result


def parse_product_data(raw_text: str) -> list[ParsedProduct]:
    """Parse pasted bulk product text into products with variants."""
    return parse_bulk_product_text(raw_text).products
