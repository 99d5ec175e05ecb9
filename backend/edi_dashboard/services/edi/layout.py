"""Column layout and product catalog for the vendor EDI export.

Both are immutable configuration objects handed to the parser, so a different
vendor format is a matter of passing a different layout/catalog.
"""

from collections.abc import Mapping
from dataclasses import dataclass, fields
from types import MappingProxyType


@dataclass(frozen=True)
class EdiColumnLayout:
    """Absolute (0-based) column indexes of the fields we extract.

    Columns are addressed by position, not by header text: the vendor's
    headers are Japanese labels that vary between tool versions.
    """

    order_number: int
    product_code: int
    product_name: int
    order_quantity: int
    delivery_date: int

    def __post_init__(self) -> None:
        for f in fields(self):
            if getattr(self, f.name) < 0:
                raise ValueError(f"Column index for {f.name} must be >= 0")

    @property
    def max_index(self) -> int:
        """Highest column index referenced by the layout."""
        return max(getattr(self, f.name) for f in fields(self))

    @property
    def required_columns(self) -> int:
        """Number of columns a row needs for every field to be addressable."""
        return self.max_index + 1


# 注文番号 / 品番 / 品名・規格 / 注文数量 / 納期 in the vendor's order export
DEFAULT_LAYOUT = EdiColumnLayout(
    order_number=5,
    product_code=8,
    product_name=9,
    order_quantity=13,
    delivery_date=15,
)


class ProductCatalog:
    """Read-only product code -> display name lookup."""

    def __init__(self, names: Mapping[str, str]):
        self._names = MappingProxyType(dict(names))

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, code: object) -> bool:
        return code in self._names

    @property
    def names(self) -> Mapping[str, str]:
        return self._names

    def display_name(self, code: str) -> str:
        """Name for a product code; unmapped codes pass through unchanged."""
        return self._names.get(code, code)


DEFAULT_PRODUCT_CATALOG = ProductCatalog(
    {
        "PP4166-4681P003": "4681P003",
        "PP4166-4681P004": "4681P004",
        "PP4166-4726P003": "4726P003",
        "PP4166-4726P004": "4726P004",
        "PP4166-4731P002": "4731P002",
        "PP4166-7106P003": "7106P003",
        "PP4166-7106P001": "7106P001",
    }
)
