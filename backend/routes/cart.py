# backend/routes/cart.py
from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from database import get_db
from schemas.cart import CartAddItem, CartUpdateItem, CartOut
from schemas.common import ApiResponse, ok
from services.cart_service import CartService
from utils.audit import client_ip, write_log
from utils.errors import parse_id
from utils.tokenJWT import SessionClaims, ensure_owner_or_admin, get_current_claims

router = APIRouter(prefix="/api/carts", tags=["Cart"])


# Carts are only visible to their owner and to admins
def _cart_owner(user_id: str, claims: SessionClaims) -> int:
    uid = parse_id(user_id, "user")
    ensure_owner_or_admin(claims, uid)
    return uid


def _out(cart) -> dict:
    return CartOut.model_validate(cart).model_dump()


@router.get("/{user_id}", response_model=ApiResponse[CartOut])
def get_cart(
    user_id: str,
    db: Session = Depends(get_db),
    claims: SessionClaims = Depends(get_current_claims),
):
    uid = _cart_owner(user_id, claims)
    cart = CartService(db).get_cart(uid)
    if cart.id is None:
        return ok("Cart is empty", _out(cart))
    return ok("Cart retrieved successfully", _out(cart))


@router.post("/{user_id}/items", response_model=ApiResponse[CartOut])
def add_item_to_cart(
    user_id: str,
    payload: CartAddItem,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    claims: SessionClaims = Depends(get_current_claims),
):
    uid = _cart_owner(user_id, claims)
    cart, created = CartService(db).add_item(uid, payload.product_id, payload.quantity)
    out = _out(cart)

    write_log(
        db,
        user_id=uid,
        action="CART_ADD",
        resource="cart",
        ip=client_ip(request),
        meta={"product_id": payload.product_id, "quantity": payload.quantity, "total": out["total_price"]},
    )
    if created:
        response.status_code = status.HTTP_201_CREATED
        return ok("Cart created and item added", out)
    return ok("Cart updated successfully", out)


@router.put("/{user_id}/items/{product_id}", response_model=ApiResponse[CartOut])
def update_cart_item(
    user_id: str,
    product_id: str,
    payload: CartUpdateItem,
    request: Request,
    db: Session = Depends(get_db),
    claims: SessionClaims = Depends(get_current_claims),
):
    uid = _cart_owner(user_id, claims)
    cart = CartService(db).update_item_quantity(uid, product_id, payload.quantity)
    out = _out(cart)

    write_log(
        db,
        user_id=uid,
        action="CART_UPDATE",
        resource="cart",
        ip=client_ip(request),
        meta={"product_id": product_id, "quantity": payload.quantity, "total": out["total_price"]},
    )
    return ok("Cart item updated", out)


@router.delete("/{user_id}/items/{product_id}", response_model=ApiResponse[CartOut])
def remove_cart_item(
    user_id: str,
    product_id: str,
    request: Request,
    db: Session = Depends(get_db),
    claims: SessionClaims = Depends(get_current_claims),
):
    uid = _cart_owner(user_id, claims)
    cart = CartService(db).remove_item(uid, product_id)
    out = _out(cart)

    write_log(
        db,
        user_id=uid,
        action="CART_REMOVE",
        resource="cart",
        ip=client_ip(request),
        meta={"product_id": product_id, "cart_items": len(out["items"]), "total": out["total_price"]},
    )
    return ok("Item removed from cart", out)


@router.delete("/{user_id}", response_model=ApiResponse[str])
def clear_cart(
    user_id: str,
    request: Request,
    db: Session = Depends(get_db),
    claims: SessionClaims = Depends(get_current_claims),
):
    uid = _cart_owner(user_id, claims)
    CartService(db).clear(uid)

    write_log(db, user_id=uid, action="CART_CLEAR", resource="cart", ip=client_ip(request))
    return ok("Cart cleared")
