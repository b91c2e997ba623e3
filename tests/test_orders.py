from decimal import Decimal

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from shopcenter.data.database import create_session_factory
from shopcenter.data.models import CartItemModel, OrderModel, OrderItemModel, ProductModel
from shopcenter.domain.errors import EmptyCartError, InsufficientStockError, InvalidStatusTransition, NotFoundError
from shopcenter.domain.filters import OrderFilter
from shopcenter.domain.schemas import Address, CheckoutIn
from shopcenter.services.cart_service import CartService
from shopcenter.services.order_service import OrderService
from tests.factories import make_order, make_product, make_user

ADDRESS = Address(
    first_name="Ada",
    last_name="Lovelace",
    address="1 Main St",
    city="Springfield",
    state="IL",
    zip_code="62701",
    country="US",
)


def checkout(**kwargs):
    return CheckoutIn(shipping_address=ADDRESS, payment_method="card", **kwargs)


def test_place_order_snapshots_prices_and_computes_totals(db):
    user = make_user(db)
    kettle = make_product(db, "Kettle", price="20.00", sale_price=Decimal("12.50"), stock=5)
    mug = make_product(db, "Mug", price="5.00", stock=5)
    CartService(db).add_to_cart(user.id, kettle.id, 2)
    CartService(db).add_to_cart(user.id, mug.id, 1)

    order = OrderService(db).place_order(user.id, checkout(notes="leave at door"))

    assert order["subtotal"] == Decimal("30.00")
    assert order["shipping"] == Decimal("0.00")
    assert order["tax"] == Decimal("2.40")
    assert order["total"] == Decimal("32.40")
    assert order["status"] == "pending"
    assert order["payment_status"] == "pending"
    assert order["order_number"].startswith("ORD-")
    assert order["billing_address"] == order["shipping_address"]
    assert order["notes"] == "leave at door"

    lines = {i["product"].name: i for i in order["items"]}
    assert lines["Kettle"]["price"] == Decimal("12.50")
    assert lines["Kettle"]["total"] == Decimal("25.00")
    assert lines["Mug"]["quantity"] == 1


def test_small_order_pays_shipping(db):
    user = make_user(db)
    product = make_product(db, price="10.00")
    CartService(db).add_to_cart(user.id, product.id, 1)

    order = OrderService(db).place_order(user.id, checkout())

    assert (order["subtotal"], order["shipping"], order["tax"], order["total"]) == (
        Decimal("10.00"),
        Decimal("9.99"),
        Decimal("0.80"),
        Decimal("20.79"),
    )


def test_place_order_clears_cart_and_decrements_stock(db):
    user = make_user(db)
    product = make_product(db, stock=3)
    CartService(db).add_to_cart(user.id, product.id, 2)

    OrderService(db).place_order(user.id, checkout())

    assert db.execute(select(CartItemModel)).scalars().all() == []
    db.expire_all()
    assert db.get(ProductModel, product.id).stock == 1


def test_snapshot_survives_later_price_change(db):
    user = make_user(db)
    product = make_product(db, price="8.00")
    CartService(db).add_to_cart(user.id, product.id, 1)
    order = OrderService(db).place_order(user.id, checkout())

    product.price = Decimal("99.00")
    db.commit()

    items = OrderService(db).get_order_items(order["id"])
    assert items[0]["price"] == Decimal("8.00")


def test_empty_cart_cannot_be_ordered(db):
    user = make_user(db)

    with pytest.raises(EmptyCartError):
        OrderService(db).place_order(user.id, checkout())


def test_insufficient_stock_leaves_everything_untouched(db):
    user = make_user(db)
    plenty = make_product(db, stock=10)
    scarce = make_product(db, stock=1)
    CartService(db).add_to_cart(user.id, plenty.id, 1)
    CartService(db).add_to_cart(user.id, scarce.id, 2)

    with pytest.raises(InsufficientStockError):
        OrderService(db).place_order(user.id, checkout())

    assert db.execute(select(OrderModel)).scalars().all() == []
    assert db.execute(select(OrderItemModel)).scalars().all() == []
    assert len(db.execute(select(CartItemModel)).scalars().all()) == 2


def test_list_orders_filters_and_counts(db):
    alice = make_user(db)
    bob = make_user(db)
    for _ in range(3):
        make_order(db, alice)
    make_order(db, alice, status="shipped")
    make_order(db, bob)

    svc = OrderService(db)
    page = svc.list_orders(OrderFilter(user_id=alice.id, limit=2))
    shipped = svc.list_orders(OrderFilter(status="shipped"))
    everything = svc.list_orders(OrderFilter())

    assert page["total"] == 4
    assert len(page["orders"]) == 2
    assert all(o.user_id == alice.id for o in page["orders"])
    assert shipped["total"] == 1
    assert everything["total"] == 5
    ids = [o.id for o in everything["orders"]]
    assert ids == sorted(ids, reverse=True)


def test_get_order_checks_owner(db):
    alice = make_user(db)
    bob = make_user(db)
    order = make_order(db, alice)
    svc = OrderService(db)

    assert svc.get_order(order.id, alice.id).id == order.id
    assert svc.get_order(order.id).id == order.id
    assert svc.get_order(999) is None
    with pytest.raises(PermissionError):
        svc.get_order(order.id, bob.id)


def test_get_order_by_number_and_user_orders(db):
    alice = make_user(db)
    first = make_order(db, alice)
    second = make_order(db, alice)
    svc = OrderService(db)

    assert svc.get_order_by_number(first.order_number).id == first.id
    assert svc.get_order_by_number("ORD-NOPE") is None
    assert [o.id for o in svc.get_user_orders(alice.id)] == [second.id, first.id]


def test_update_status_follows_lifecycle(db):
    user = make_user(db)
    order = make_order(db, user)
    svc = OrderService(db)

    svc.update_status(order.id, "processing")
    stamp = svc.get_order(order.id).updated_at
    svc.update_status(order.id, "processing")
    svc.update_status(order.id, "shipped")

    reread = svc.get_order(order.id)
    assert reread.status == "shipped"
    assert reread.updated_at >= stamp

    with pytest.raises(InvalidStatusTransition):
        svc.update_status(order.id, "pending")

    svc.update_status(order.id, "delivered")
    with pytest.raises(InvalidStatusTransition):
        svc.update_status(order.id, "cancelled")


def test_update_status_of_missing_order(db):
    with pytest.raises(NotFoundError):
        OrderService(db).update_status(404, "processing")


def test_update_payment_status(db):
    user = make_user(db)
    order = make_order(db, user)
    svc = OrderService(db)

    assert svc.update_payment_status(order.id, "paid").payment_status == "paid"
    with pytest.raises(ValueError):
        svc.update_payment_status(order.id, "maybe")


def manual_order(user, number="ORD-MANUAL-1"):
    return OrderModel(
        user_id=user.id,
        order_number=number,
        subtotal=Decimal("10.00"),
        tax=Decimal("0.80"),
        shipping=Decimal("9.99"),
        total=Decimal("20.79"),
    )


def test_create_order_writes_header_and_items_together(db):
    user = make_user(db)
    product = make_product(db)
    svc = OrderService(db)

    order = svc.create_order(
        manual_order(user),
        [OrderItemModel(product_id=product.id, quantity=1, price=Decimal("10.00"), total=Decimal("10.00"))],
    )

    detail = svc.get_order_detail(order.id)
    assert detail["status"] == "pending"
    assert len(detail["items"]) == 1
    assert detail["items"][0]["product"].id == product.id


def test_create_order_never_leaves_a_header_without_items(db):
    user = make_user(db)
    svc = OrderService(db)

    with pytest.raises(ValueError):
        svc.create_order(manual_order(user), [])
    with pytest.raises(IntegrityError):
        # quantity is NOT NULL, the item insert fails after the header flush
        svc.create_order(manual_order(user, "ORD-MANUAL-2"), [OrderItemModel(price=Decimal("1.00"), total=Decimal("1.00"))])

    assert db.execute(select(OrderModel)).scalars().all() == []


def test_concurrent_checkouts_cannot_oversell(file_engine, monkeypatch):
    factory = create_session_factory(file_engine)
    setup = factory()
    alice = make_user(setup)
    bob = make_user(setup)
    product = make_product(setup, stock=5)
    CartService(setup).add_to_cart(alice.id, product.id, 5)
    CartService(setup).add_to_cart(bob.id, product.id, 5)
    setup.close()

    alice_db, bob_db = factory(), factory()
    alice_svc = OrderService(alice_db)
    read_cart = alice_svc.cart.get_cart_items

    def bob_checks_out_after_read(user_id):
        rows = read_cart(user_id)
        OrderService(bob_db).place_order(bob.id, checkout())
        return rows

    monkeypatch.setattr(alice_svc.cart, "get_cart_items", bob_checks_out_after_read)

    with pytest.raises(InsufficientStockError):
        alice_svc.place_order(alice.id, checkout())

    check = factory()
    assert check.get(ProductModel, product.id).stock == 0
    assert [o.user_id for o in check.execute(select(OrderModel)).scalars()] == [bob.id]
    assert check.execute(select(func.sum(OrderItemModel.quantity))).scalar_one() == 5
    assert [c.quantity for c in check.execute(select(CartItemModel)).scalars()] == [5]
    for session in (alice_db, bob_db, check):
        session.close()


def test_concurrent_status_updates_respect_the_lifecycle(file_engine, monkeypatch):
    factory = create_session_factory(file_engine)
    setup = factory()
    order = make_order(setup, make_user(setup))
    setup.close()

    first_db, second_db = factory(), factory()
    first = OrderService(first_db)
    read_order = first.repo.get_order

    def delivered_after_read(order_id):
        found = read_order(order_id)
        OrderService(second_db).update_status(order_id, "delivered")
        return found

    monkeypatch.setattr(first.repo, "get_order", delivered_after_read)

    with pytest.raises(InvalidStatusTransition) as err:
        first.update_status(order.id, "cancelled")

    assert err.value.current == "delivered"
    check = factory()
    assert check.get(OrderModel, order.id).status == "delivered"
    for session in (first_db, second_db, check):
        session.close()


def test_status_update_rechecks_after_a_concurrent_move(file_engine, monkeypatch):
    factory = create_session_factory(file_engine)
    setup = factory()
    order = make_order(setup, make_user(setup))
    setup.close()

    first_db, second_db = factory(), factory()
    first = OrderService(first_db)
    read_order = first.repo.get_order

    def processing_after_read(order_id):
        found = read_order(order_id)
        OrderService(second_db).update_status(order_id, "processing")
        return found

    monkeypatch.setattr(first.repo, "get_order", processing_after_read)

    assert first.update_status(order.id, "shipped").status == "shipped"
    for session in (first_db, second_db):
        session.close()
