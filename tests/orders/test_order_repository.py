import pytest
from decimal import Decimal
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from ecommerce.orders.domain.exceptions import (
    OrderNotFoundException, OrderConstraintViolationException
)
from ecommerce.orders.domain.order_entity import Order, OrderItem
from ecommerce.orders.infrastructure.order_orm_model import OrderModel, OrderItemModel, OrderRead
from ecommerce.orders.infrastructure.order_sql_repository import OrderSQLRepository


async def _load_order_row(db_session, order_id: str) -> OrderModel:
    result = await db_session.execute(
        select(OrderModel)
        .where(OrderModel.id == order_id)
        .options(selectinload(OrderModel.items))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


@pytest.mark.asyncio
async def test_find_order(db_session, generate_order):
    """Une commande créée puis relue est structurellement égale à l'originale."""
    order = await generate_order("321")
    order_repository = OrderSQLRepository(db_session)
    await order_repository.create(order)

    result = await order_repository.find(order.id)

    assert result == order
    assert result.total() == Decimal("20")


@pytest.mark.asyncio
async def test_find_all_orders(db_session, generate_order):
    order_repository = OrderSQLRepository(db_session)
    order1 = await generate_order("1", "1", "1")
    order2 = await generate_order("2", "2", "2")

    # Ordre de création inversé: find_all ne doit pas en dépendre
    await order_repository.create(order2)
    await order_repository.create(order1)

    orders = await order_repository.find_all()

    assert len(orders) == 2
    assert order1 in orders
    assert order2 in orders


@pytest.mark.asyncio
async def test_find_all_is_stable(db_session, generate_order):
    order_repository = OrderSQLRepository(db_session)
    for i in ("a", "b", "c"):
        await order_repository.create(await generate_order(i, i, i))

    first = [o.id for o in await order_repository.find_all()]
    second = [o.id for o in await order_repository.find_all()]

    assert first == second
    assert sorted(first) == ["a", "b", "c"]


@pytest.mark.asyncio
async def test_find_all_empty(db_session):
    assert await OrderSQLRepository(db_session).find_all() == []


@pytest.mark.asyncio
async def test_create_order_persists_rows(db_session, generate_order):
    """La projection stockée contient le total dénormalisé et une ligne par article."""
    order = await generate_order()
    [order_item] = order.items
    order_repository = OrderSQLRepository(db_session)
    await order_repository.create(order)

    order_model = await _load_order_row(db_session, order.id)

    assert OrderRead.model_validate(order_model).model_dump() == {
        "id": "123",
        "customer_id": "123",
        "total": order.total(),
        "items": [
            {
                "id": order_item.id,
                "name": order_item.name,
                "price": order_item.price,
                "quantity": order_item.quantity,
                "order_id": "123",
                "product_id": "123",
            },
        ],
    }
    assert order.total() == 20


@pytest.mark.asyncio
async def test_update_order_with_new_item(db_session, generate_order, generate_item):
    order_repository = OrderSQLRepository(db_session)
    order = await generate_order("3", "1")
    await order_repository.create(order)

    new_item = await generate_item("2")
    order_changed = Order(id=order.id, customer_id=order.customer_id, items=[*order.items, new_item])
    await order_repository.update(order_changed)

    result = await order_repository.find(order_changed.id)

    assert result == order_changed
    assert len(result.items) == 2
    order_model = await _load_order_row(db_session, order.id)
    assert order_model.total == Decimal("40")


@pytest.mark.asyncio
async def test_update_order_removes_missing_items(db_session, generate_order, generate_item):
    """Les lignes absentes de la nouvelle liste sont supprimées de la table."""
    order_repository = OrderSQLRepository(db_session)
    order = await generate_order("4", "4", "4")
    await order_repository.create(order)
    [old_item] = order.items

    replacement = await generate_item("5")
    await order_repository.update(Order(id=order.id, customer_id=order.customer_id, items=[replacement]))

    result = await order_repository.find(order.id)
    assert result.items == [replacement]
    remaining = await db_session.execute(select(OrderItemModel.id).where(OrderItemModel.order_id == order.id))
    assert remaining.scalars().all() == [replacement.id]
    assert await db_session.get(OrderItemModel, old_item.id) is None


@pytest.mark.asyncio
async def test_update_order_rewrites_matching_items(db_session, generate_order):
    order_repository = OrderSQLRepository(db_session)
    order = await generate_order("6", "6", "6")
    await order_repository.create(order)
    [item] = order.items

    changed_item = OrderItem(
        id=item.id, name=item.name, price=item.price, product_id=item.product_id, quantity=5
    )
    await order_repository.update(Order(id=order.id, customer_id=order.customer_id, items=[changed_item]))

    result = await order_repository.find(order.id)
    assert result.items[0].quantity == 5
    assert result.total() == Decimal("50")


@pytest.mark.asyncio
async def test_find_missing_order_raises_not_found(db_session):
    with pytest.raises(OrderNotFoundException) as exc_info:
        await OrderSQLRepository(db_session).find("missing")
    assert exc_info.value.order_id == "missing"


@pytest.mark.asyncio
async def test_update_missing_order_raises_not_found(db_session, generate_item):
    item = await generate_item("7")
    order = Order(id="ghost", customer_id="nobody", items=[item])

    with pytest.raises(OrderNotFoundException):
        await OrderSQLRepository(db_session).update(order)


@pytest.mark.asyncio
async def test_create_order_for_unknown_customer_fails(db_session, generate_item):
    order_repository = OrderSQLRepository(db_session)
    item = await generate_item("8")
    order = Order(id="8", customer_id="unknown", items=[item])

    with pytest.raises(OrderConstraintViolationException):
        await order_repository.create(order)

    # Aucune écriture partielle
    with pytest.raises(OrderNotFoundException):
        await order_repository.find("8")
    remaining = await db_session.execute(select(OrderItemModel).where(OrderItemModel.order_id == "8"))
    assert remaining.scalars().all() == []


@pytest.mark.asyncio
async def test_create_order_for_unknown_product_fails(db_session, generate_order):
    order_repository = OrderSQLRepository(db_session)
    order = await generate_order("9", "9", "9")
    bad_item = OrderItem(id="bad-item", name="Ghost", price=1, product_id="no-such-product", quantity=1)
    order.add_item(bad_item)

    with pytest.raises(OrderConstraintViolationException):
        await order_repository.create(order)

    with pytest.raises(OrderNotFoundException):
        await order_repository.find("9")


@pytest.mark.asyncio
async def test_create_duplicate_order_fails(db_session, generate_order, generate_item):
    order_repository = OrderSQLRepository(db_session)
    order = await generate_order("10", "10", "10")
    await order_repository.create(order)

    other_item = await generate_item("11")
    duplicate = Order(id=order.id, customer_id=order.customer_id, items=[other_item])

    with pytest.raises(OrderConstraintViolationException):
        await order_repository.create(duplicate)

    assert await order_repository.find(order.id) == order


@pytest.mark.asyncio
async def test_update_with_unknown_product_rolls_back(db_session, generate_order):
    """Une MAJ qui échoue laisse la commande et ses lignes intactes."""
    order_repository = OrderSQLRepository(db_session)
    order = await generate_order("12", "12", "12")
    await order_repository.create(order)

    bad_item = OrderItem(id="bad-item", name="Ghost", price=1, product_id="no-such-product", quantity=1)
    order_changed = Order(id=order.id, customer_id=order.customer_id, items=[*order.items, bad_item])

    with pytest.raises(OrderConstraintViolationException):
        await order_repository.update(order_changed)

    assert await order_repository.find(order.id) == order
    assert await db_session.get(OrderItemModel, "bad-item") is None
    order_model = await _load_order_row(db_session, order.id)
    assert order_model.total == order.total()


@pytest.mark.asyncio
async def test_update_with_item_of_another_order_fails(db_session, generate_order):
    """Une ligne appartient à une seule commande: la reprendre ailleurs est refusé."""
    order_repository = OrderSQLRepository(db_session)
    order1 = await generate_order("13", "13", "13")
    order2 = await generate_order("14", "14", "14")
    await order_repository.create(order1)
    await order_repository.create(order2)

    [foreign_item] = order2.items
    order1_changed = Order(id=order1.id, customer_id=order1.customer_id, items=[*order1.items, foreign_item])

    with pytest.raises(OrderConstraintViolationException):
        await order_repository.update(order1_changed)

    assert await order_repository.find(order1.id) == order1
    assert await order_repository.find(order2.id) == order2
