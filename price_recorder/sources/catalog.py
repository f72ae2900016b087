"""
The fixed catalog of price sources.
"""

from typing import Final

from ..shared.models import Asset, PriceSource

COINGECKO_SIMPLE_PRICE_URL: Final[str] = (
    "https://api.coingecko.com/api/v3/simple/price?ids={coin}&vs_currencies={fiat}"
)
YAHOO_CHART_URL: Final[str] = (
    "https://query2.finance.yahoo.com/v8/finance/chart/{symbol}"
)


def _coingecko_source(
    asset: Asset, coin: str, fiat: str, file_name: str
) -> PriceSource:
    return PriceSource(
        asset=asset,
        url=COINGECKO_SIMPLE_PRICE_URL.format(coin=coin, fiat=fiat),
        extraction_path=(coin, fiat),
        file_name=file_name,
    )


def _yahoo_chart_source(asset: Asset, symbol: str, file_name: str) -> PriceSource:
    return PriceSource(
        asset=asset,
        url=YAHOO_CHART_URL.format(symbol=symbol),
        extraction_path=("chart", "result", 0, "meta", "regularMarketPrice"),
        file_name=file_name,
    )


_SOURCES: Final[dict[Asset, PriceSource]] = {
    Asset.BTC: _coingecko_source(Asset.BTC, "bitcoin", "usd", "bitcoin_prices.csv"),
    Asset.ETH: _coingecko_source(Asset.ETH, "ethereum", "usd", "ethereum_prices.csv"),
    # ^GSPC, url-encoded
    Asset.SP500: _yahoo_chart_source(Asset.SP500, "%5EGSPC", "sp500_prices.csv"),
}


def source_for(asset: Asset) -> PriceSource:
    """Return the source bound to an asset."""
    return _SOURCES[asset]


def default_sources() -> list[PriceSource]:
    """All configured sources in polling order."""
    return [source_for(asset) for asset in (Asset.BTC, Asset.ETH, Asset.SP500)]
