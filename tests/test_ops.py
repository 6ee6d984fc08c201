import asyncio
from dataclasses import dataclass, field

from kungfu import Error, Ok, Result

from storefront import ops as O
from storefront._errors import StorefrontError


@dataclass
class Shelf:
    prices: dict[str, int]
    stock: dict[str, int]
    calls: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class GetPrice(O.Returning[int, str]):
    sku: str


@dataclass(frozen=True, slots=True)
class GetStock(O.Returning[int, str]):
    sku: str


@dataclass(frozen=True, slots=True)
class Summary(O.Returning[str, str]):
    sku: str
    price: GetPrice
    stock: GetStock


@dataclass(frozen=True, slots=True)
class Unregistered(O.Returning[None, str]):
    pass


async def get_price(req: GetPrice, shelf: Shelf) -> Result[int, str]:
    shelf.calls.append("price:start")
    await asyncio.sleep(0.01)
    shelf.calls.append("price:end")
    price = shelf.prices.get(req.sku)
    return Ok(price) if price is not None else Error("no_price")


async def get_stock(req: GetStock, shelf: Shelf) -> Result[int, str]:
    shelf.calls.append("stock:start")
    await asyncio.sleep(0.01)
    shelf.calls.append("stock:end")
    return Ok(shelf.stock.get(req.sku, 0))


async def summary(req: Summary, price: GetPrice, stock: GetStock) -> Result[str, str]:
    match (await price, await stock):
        case (Ok(p), Ok(s)):
            return Ok(f"{req.sku}: {p} cents, {s} left")
        case (Error(e), _) | (_, Error(e)):
            return Error(e)


def _runner(shelf: Shelf) -> O.Runner:
    # dependent registered first; compile orders the build
    return (
        O.ops()
        .on(Summary, summary)
        .on(GetPrice, get_price)
        .on(GetStock, get_stock)
        .compile()
        .inject(Shelf, shelf)
    )


def _summary(sku: str) -> Summary:
    return Summary(sku, GetPrice(sku), GetStock(sku))


async def test_single_op() -> None:
    shelf = Shelf({"tee": 2500}, {})
    assert await _runner(shelf).run(GetPrice("tee")) == Ok(2500)


async def test_dependencies_resolved_concurrently() -> None:
    shelf = Shelf({"tee": 2500}, {"tee": 3})
    assert await _runner(shelf).run(_summary("tee")) == Ok("tee: 2500 cents, 3 left")
    # both dependencies started before either finished
    assert shelf.calls.index("stock:start") < shelf.calls.index("price:end")
    assert shelf.calls.index("price:start") < shelf.calls.index("stock:end")


async def test_dependency_error_reaches_handler() -> None:
    shelf = Shelf({}, {"tee": 3})
    assert await _runner(shelf).run(_summary("tee")) == Error("no_price")


async def test_runner_call_is_lazy() -> None:
    shelf = Shelf({"tee": 1}, {})
    pending = _runner(shelf)(GetPrice("tee"))
    assert shelf.calls == []
    assert await pending == Ok(1)


async def test_unregistered_op() -> None:
    result = await _runner(Shelf({}, {})).run(Unregistered())
    assert isinstance(result, Error)
    assert isinstance(result.error, StorefrontError)


def test_last_registration_wins() -> None:
    async def other_price(req: GetPrice, shelf: Shelf) -> Result[int, str]:
        return Ok(1)

    builder = O.ops().on(GetPrice, get_price).on(GetPrice, other_price)
    assert len(builder._items) == 1
    assert builder._items[0][1] is other_price
