"""Fixed-point price arithmetic on Q64.96 square-root prices.

Every function is stateless and operates on plain Python ints. Results are
bit-exact with the execution engine's own tick math: intermediate values
use the same shifts and the same rounding, and any value that would not fit
the engine's uint256 words raises ``MathOverflow`` instead of silently
growing.
"""

from __future__ import annotations

from ..errors import InvalidTick, MathOverflow

# Domain constants
MIN_TICK: int = -887272
MAX_TICK: int = 887272
MIN_SQRT_PRICE: int = 4295128739
MAX_SQRT_PRICE: int = 1461446703485210103287273052203988822378723970342

Q64: int = 1 << 64
Q96: int = 1 << 96
Q128: int = 1 << 128
Q192: int = 1 << 192

UINT128_MAX: int = (1 << 128) - 1
UINT160_MAX: int = (1 << 160) - 1
UINT256_MAX: int = (1 << 256) - 1

# 1 / sqrt(1.0001) ** (2 ** i) in Q128.128, for bits 1..19 of |tick|.
_TICK_BIT_RATIOS: tuple[tuple[int, int], ...] = (
    (0x2, 0xFFF97272373D413259A46990580E213A),
    (0x4, 0xFFF2E50F5F656932EF12357CF3C7FDCC),
    (0x8, 0xFFE5CACA7E10E4E61C3624EAA0941CD0),
    (0x10, 0xFFCB9843D60F6159C9DB58835C926644),
    (0x20, 0xFF973B41FA98C081472E6896DFB254C0),
    (0x40, 0xFF2EA16466C96A3843EC78B326B52861),
    (0x80, 0xFE5DEE046A99A2A811C461F1969C3053),
    (0x100, 0xFCBE86C7900A88AEDCFFC83B479AA3A4),
    (0x200, 0xF987A7253AC413176F2B074CF7815E54),
    (0x400, 0xF3392B0822B70005940C7A398E4B70F3),
    (0x800, 0xE7159475A2C29B7443B29C7FA6E889D9),
    (0x1000, 0xD097F3BDFD2022B8845AD8F792AA5825),
    (0x2000, 0xA9F746462D870FDF8A65DC1F90E061E5),
    (0x4000, 0x70D869A156D2A1B890BB3DF62BAF32F7),
    (0x8000, 0x31BE135F97D08FD981231505542FCFA6),
    (0x10000, 0x9AA508B5B7A84E1C677DE54F3E99BC9),
    (0x20000, 0x5D6AF8DEDB81196699C329225EE604),
    (0x40000, 0x2216E584F5FA1EA926041BEDFE98),
    (0x80000, 0x48A170391F7DC42444E8FA2),
)
_TICK_BIT0_RATIO: int = 0xFFFCB933BD6FAD37AA2D162D1A594001


def mul_div(a: int, b: int, denominator: int) -> int:
    """``floor(a * b / denominator)`` with a full-width intermediate product.

    The product may exceed 256 bits; only the quotient must fit.
    """
    if a < 0 or b < 0:
        raise MathOverflow("mul_div operands must be non-negative")
    if denominator <= 0:
        raise MathOverflow("mul_div denominator must be positive")
    result = (a * b) // denominator
    if result > UINT256_MAX:
        raise MathOverflow(f"mul_div result exceeds uint256: {a} * {b} / {denominator}")
    return result


def get_sqrt_price_at_tick(tick: int) -> int:
    """Q64.96 square-root price ``sqrt(1.0001 ** tick) * 2**96``, rounded up."""
    if not isinstance(tick, int) or isinstance(tick, bool):
        raise InvalidTick(f"tick must be an int: {tick!r}")
    abs_tick = tick if tick >= 0 else -tick
    if abs_tick > MAX_TICK:
        raise InvalidTick(f"tick out of range: {tick}")

    ratio = _TICK_BIT0_RATIO if abs_tick & 0x1 else Q128
    for bit, factor in _TICK_BIT_RATIOS:
        if abs_tick & bit:
            ratio = (ratio * factor) >> 128

    if tick > 0:
        ratio = UINT256_MAX // ratio

    # Q128.128 -> Q64.96, rounding up so the price never under-reports.
    sqrt_price = (ratio >> 32) + (0 if ratio % (1 << 32) == 0 else 1)
    if sqrt_price > UINT160_MAX:
        raise MathOverflow(f"sqrt price exceeds uint160 at tick {tick}")
    return sqrt_price


def quote_at_sqrt_price(
    sqrt_price_x96: int,
    base_amount: int,
    base_sorts_first: bool,
) -> int:
    """Amount of the quote asset equivalent to ``base_amount`` of the base asset.

    ``base_sorts_first`` is True when the base asset is ``currency0`` of the
    market, in which case the price ratio is multiplied in; otherwise it is
    divided out. When the squared price would not fit 256 bits the ratio is
    taken at Q128 instead of Q192.
    """
    if base_amount < 0:
        raise MathOverflow(f"base_amount must be non-negative: {base_amount}")
    if sqrt_price_x96 <= 0:
        raise MathOverflow("sqrt price must be positive")

    if sqrt_price_x96 <= UINT128_MAX:
        ratio_x192 = sqrt_price_x96 * sqrt_price_x96
        if base_sorts_first:
            return mul_div(ratio_x192, base_amount, Q192)
        return mul_div(Q192, base_amount, ratio_x192)

    ratio_x128 = mul_div(sqrt_price_x96, sqrt_price_x96, Q64)
    if base_sorts_first:
        return mul_div(ratio_x128, base_amount, Q128)
    return mul_div(Q128, base_amount, ratio_x128)


def quote_at_tick(tick: int, base_amount: int, base_sorts_first: bool) -> int:
    return quote_at_sqrt_price(get_sqrt_price_at_tick(tick), base_amount, base_sorts_first)
