from enum import Enum


class ProductSize(str, Enum):
    """
    Size options offered for every product.

    Per-product size availability is not modelled, so the catalogue
    attaches the full list to each product.
    """

    S = "S"
    M = "M"
    L = "L"
    XL = "XL"

    @classmethod
    def all_values(cls) -> list[str]:
        return [size.value for size in cls]


# Size label attached to favorites, which carry no size of their own
FAVORITE_SIZE_LABEL = "One Size"
