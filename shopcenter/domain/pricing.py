# shopcenter/domain/pricing.py
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")

TAX_RATE = Decimal("0.08")
FREE_SHIPPING_THRESHOLD = Decimal("25.00")
SHIPPING_FEE = Decimal("9.99")


def to_money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def effective_price(product) -> Decimal:
    """Sale price supersedes the list price when set."""
    if product.sale_price is not None:
        return to_money(product.sale_price)
    return to_money(product.price)


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Decimal
    tax: Decimal
    shipping: Decimal
    total: Decimal


def compute_totals(
    subtotal,
    tax_rate: Decimal = TAX_RATE,
    free_shipping_threshold: Decimal = FREE_SHIPPING_THRESHOLD,
    shipping_fee: Decimal = SHIPPING_FEE,
) -> OrderTotals:
    subtotal = to_money(subtotal)
    shipping = Decimal("0.00") if subtotal > free_shipping_threshold else to_money(shipping_fee)
    tax = to_money(subtotal * Decimal(str(tax_rate)))

    return OrderTotals(
        subtotal=subtotal,
        tax=tax,
        shipping=shipping,
        total=subtotal + tax + shipping,
    )


@dataclass(frozen=True)
class PricingPolicy:
    tax_rate: Decimal = TAX_RATE
    free_shipping_threshold: Decimal = FREE_SHIPPING_THRESHOLD
    shipping_fee: Decimal = SHIPPING_FEE

    @classmethod
    def from_settings(cls, settings) -> "PricingPolicy":
        return cls(
            tax_rate=settings.tax_rate,
            free_shipping_threshold=settings.free_shipping_threshold,
            shipping_fee=settings.shipping_fee,
        )

    def totals(self, subtotal) -> OrderTotals:
        return compute_totals(
            subtotal,
            tax_rate=self.tax_rate,
            free_shipping_threshold=self.free_shipping_threshold,
            shipping_fee=self.shipping_fee,
        )
