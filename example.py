import asyncio
from decimal import Decimal

from fx_ledger import ResolverSettings, Row, StaticRateSource

rows = [
    Row.from_payload({"id": 1, "amount_local": 12.5, "cashflow_local": -12.5, "local_currency": "USD", "date": "2024-01-01"}),
    Row.from_payload({"id": 2, "amount_local": 3, "cashflow_local": 3, "local_currency": "USD", "date": "2024-01-01"}),
    Row.from_payload({"id": 3, "amount_local": 8, "local_currency": "USD", "fx_rates": {"USD-VND": 24650}}),
    Row.from_payload({"id": 4, "amount_local": 250000, "local_currency": "VND"}),
]

# Swap for ResolverSettings(api_base_url="http://localhost:8080").build_resolver()
# to talk to the ledger backend instead.
source = StaticRateSource({("USD", "VND"): Decimal("24980")}, delay=0.2)


async def main() -> None:
    with ResolverSettings().build_resolver(source, on_update=lambda key: print("re-render:", key)) as resolver:
        for result in resolver.resolve_many(rows, "VND"):
            print(result)  # rows 1 and 2 show the 24000 placeholder with is_loading=True

        await resolver.drain()

        for result in resolver.resolve_many(rows, "VND"):
            print(result)  # confirmed 24980 rate for rows 1 and 2
        print(resolver.stats())


asyncio.run(main())
