"""
Data models for the price recorder application.
"""

from decimal import Decimal
from enum import StrEnum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

PathStep = str | int


class Asset(StrEnum):
    """Assets the recorder tracks."""

    BTC = "BTC"
    ETH = "ETH"
    SP500 = "SP500"


class PriceSource(BaseModel):
    """One asset bound to its endpoint, extraction path and record file."""

    model_config = ConfigDict(frozen=True)

    asset: Annotated[Asset, Field(description="Asset code")]
    url: Annotated[str, Field(description="Endpoint returning the quote as JSON")]
    extraction_path: Annotated[
        tuple[PathStep, ...],
        Field(description="Keys and indexes leading to the price in the response"),
    ]
    file_name: Annotated[str, Field(description="Record file for this asset")]

    @property
    def rendered_path(self) -> str:
        """Extraction path in dotted form, e.g. ``chart.result[0].meta``."""
        return render_path(self.extraction_path)


def render_path(path: tuple[PathStep, ...]) -> str:
    rendered = ""
    for step in path:
        if isinstance(step, int):
            rendered += f"[{step}]"
        elif rendered:
            rendered += f".{step}"
        else:
            rendered = step
    return rendered


class FailureKind(StrEnum):
    """Classification of a failed fetch or persist."""

    NETWORK = "network"
    PARSE = "parse"
    PERSISTENCE = "persistence"


class Failure(BaseModel):
    """A classified failure carried by value."""

    model_config = ConfigDict(frozen=True)

    kind: FailureKind
    detail: str

    def __str__(self) -> str:
        return f"{self.kind.value} error: {self.detail}"


class PriceFetched(BaseModel):
    """A successfully extracted price."""

    model_config = ConfigDict(frozen=True)

    price: float


FetchOutcome = PriceFetched | Failure


class PriceRecord(BaseModel):
    """One observation as written to a record file."""

    model_config = ConfigDict(frozen=True)

    timestamp: Annotated[int, Field(ge=0, description="Unix time in seconds")]
    asset: Asset
    price: float

    def to_line(self) -> str:
        """Render the record as a CSV line, keeping the price's full precision."""
        return f"{self.timestamp},{self.asset.value},{format_price(self.price)}\n"


def format_price(price: float) -> str:
    """Shortest round-trip digits of a price, never in exponent notation."""
    return format(Decimal(repr(price)), "f")
