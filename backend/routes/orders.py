# backend/routes/orders.py
from typing import List

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from database import get_db
from schemas.common import ApiResponse, ok
from schemas.order import OrderCreate, OrderOut, OrderUpdate
from services.order_service import OrderService
from utils.audit import client_ip, write_log
from utils.errors import parse_id
from utils.tokenJWT import SessionClaims, ensure_owner_or_admin, get_current_claims, role_required

router = APIRouter(prefix="/api/orders", tags=["Orders"])


def _order_to_out(order) -> dict:
    return OrderOut.model_validate(order).model_dump()


# Admins see every order, everybody else only their own
@router.get("", response_model=ApiResponse[List[OrderOut]])
def get_all_orders(
    db: Session = Depends(get_db),
    claims: SessionClaims = Depends(get_current_claims),
):
    owner = None if claims.is_admin else claims.sub
    orders = OrderService(db).list_orders(owner)
    return ok("Orders retrieved successfully", [_order_to_out(o) for o in orders])


@router.get("/{order_id}", response_model=ApiResponse[OrderOut])
def get_order_by_id(
    order_id: str,
    db: Session = Depends(get_db),
    claims: SessionClaims = Depends(get_current_claims),
):
    order = OrderService(db).get_order(order_id)
    ensure_owner_or_admin(claims, order.user_id)
    return ok("Order retrieved successfully", _order_to_out(order))


# Place an order; the user's cart is cleared on a best-effort basis afterwards
@router.post("", response_model=ApiResponse[OrderOut], status_code=status.HTTP_201_CREATED)
def create_order(
    payload: OrderCreate,
    request: Request,
    db: Session = Depends(get_db),
    claims: SessionClaims = Depends(get_current_claims),
):
    owner = parse_id(payload.user_id, "user")
    ensure_owner_or_admin(claims, owner)
    order, message = OrderService(db).place_order(
        str(owner),
        [item.model_dump() for item in payload.products],
        payload.total_price,
        payload.order_type,
    )
    out = _order_to_out(order)

    write_log(
        db,
        user_id=int(order.user_id),
        action="ORDER_CREATE",
        resource="orders",
        ip=client_ip(request),
        meta={"order_id": out["id"], "total_price": order.total_price, "order_type": order.order_type},
    )
    return ok(message, out)


@router.put("/{order_id}", response_model=ApiResponse[str])
def update_order(
    order_id: str,
    payload: OrderUpdate,
    request: Request,
    db: Session = Depends(get_db),
    claims: SessionClaims = Depends(role_required("admin")),
):
    OrderService(db).update_order(order_id, status=payload.status, order_type=payload.order_type)

    write_log(
        db,
        user_id=int(claims.sub),
        action="ORDER_UPDATE",
        resource="orders",
        ip=client_ip(request),
        meta={"order_id": order_id, **payload.model_dump(exclude_none=True)},
    )
    return ok("Order updated successfully", "Order updated")


@router.delete("/{order_id}", response_model=ApiResponse[str])
def delete_order(
    order_id: str,
    request: Request,
    db: Session = Depends(get_db),
    claims: SessionClaims = Depends(role_required("admin")),
):
    OrderService(db).delete_order(order_id)

    write_log(
        db,
        user_id=int(claims.sub),
        action="ORDER_DELETE",
        resource="orders",
        ip=client_ip(request),
        meta={"order_id": order_id},
    )
    return ok("Order deleted successfully", "Order deleted")
