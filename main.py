import os
import re
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
import structlog
from bson import ObjectId
from fastapi import APIRouter, Depends, FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pymongo import ASCENDING, DESCENDING, ReturnDocument

import media
from checkout import DELIVERY_DAYS, compute_totals, format_order_id
from database import create_document, next_sequence, require_db
from errors import (
    Conflict,
    InvalidIdentifier,
    NotFound,
    Unauthorized,
    UpstreamError,
    ValidationError,
    install_handlers,
)
from schemas import (
    ENQUIRY_STATUSES,
    ORDER_STATUSES,
    BoxCreateBody,
    BoxUpdateBody,
    CartItem,
    CartQuantityBody,
    CartRemoveBody,
    CheckoutBody,
    Enquiry,
    EnquiryStatusBody,
    NamkeenCreateBody,
    NamkeenUpdateBody,
    Order,
    OrderCancelBody,
    OrderItem,
    OrderUpdateBody,
    Placement,
    ProductCreateBody,
    ProductUpdateBody,
    Sawamani,
    as_utc,
)

logger = structlog.get_logger(__name__)

app = FastAPI(title="Mithai Storefront API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_handlers(app)

# ----------------------- Utils -----------------------
JWT_SECRET = os.getenv("JWT_SECRET", "devsecret")
JWT_ALGO = "HS256"
security = HTTPBearer(auto_error=False)

OBJECT_ID_RE = re.compile(r"^[0-9a-fA-F]{24}$")


def object_id(id_str: Optional[str], label: str = "item") -> ObjectId:
    if not id_str:
        raise InvalidIdentifier(f"Missing {label} ID")
    if not OBJECT_ID_RE.match(id_str):
        raise InvalidIdentifier(f"Invalid {label} ID")
    return ObjectId(id_str)


def serialize_doc(doc):
    if not doc:
        return doc
    doc = dict(doc)
    _id = doc.get("_id")
    if isinstance(_id, ObjectId):
        doc["id"] = str(_id)
        del doc["_id"]
    # convert datetimes
    for k, v in list(doc.items()):
        if isinstance(v, datetime):
            doc[k] = as_utc(v).isoformat()
    return doc


def mongo_date(value: datetime) -> datetime:
    # stored dates come back naive UTC
    return as_utc(value).replace(tzinfo=None)


def paginate(collection, filt: dict, page: int, limit: int, sort, total_key: str):
    skip = (page - 1) * limit
    docs = list(collection.find(filt).sort(sort).skip(skip).limit(limit))
    total = collection.count_documents(filt)
    total_pages = (total + limit - 1) // limit
    pagination = {
        "currentPage": page,
        "totalPages": total_pages,
        total_key: total,
        "hasNextPage": page < total_pages,
        "hasPrevPage": page > 1,
    }
    return [serialize_doc(d) for d in docs], pagination


def create_token(payload: dict) -> str:
    exp = datetime.now(timezone.utc) + timedelta(days=7)
    to_encode = {**payload, "exp": exp}
    return jwt.encode(to_encode, JWT_SECRET, algorithm=JWT_ALGO)


def decode_token(token: str) -> dict:
    try:
        return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGO])
    except jwt.ExpiredSignatureError:
        raise Unauthorized("Token expired")
    except jwt.InvalidTokenError:
        raise Unauthorized("Invalid token")


def get_current_user(credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)) -> Optional[dict]:
    """Resolve the caller from the bearer token; None when no token was sent."""
    if credentials is None:
        return None
    payload = decode_token(credentials.credentials)
    if not payload.get("id"):
        raise Unauthorized("Invalid token payload")
    return payload


def require_user(user: Optional[dict] = Depends(get_current_user)) -> dict:
    if user is None:
        raise Unauthorized()
    return user


# ----------------------- Health -----------------------
@app.get("/")
def root():
    return {"message": "Mithai Storefront API running"}


@app.get("/test")
def test_database():
    response = {
        "backend": "✅ Running",
        "database": "❌ Not Available",
        "database_url": "✅ Set" if os.getenv("DATABASE_URL") else "❌ Not Set",
        "database_name": "✅ Set" if os.getenv("DATABASE_NAME") else "❌ Not Set",
        "image_storage": "✅ Set" if (os.getenv("CLOUDINARY_URL") or os.getenv("CLOUDINARY_CLOUD_NAME")) else "❌ Not Set",
        "connection_status": "Not Connected",
        "collections": [],
    }
    try:
        database = require_db()
        response["database"] = "✅ Connected & Working"
        response["connection_status"] = "Connected"
        response["collections"] = database.list_collection_names()[:10]
    except UpstreamError:
        pass
    except Exception as e:
        response["database"] = f"❌ Error: {str(e)[:80]}"
    return response


# ----------------------- Catalog -----------------------
CATALOG_FOLDERS = {"product": "products", "box": "boxes", "namkeen": "namkeens"}


def find_catalog_item(kind: str, item_id: str):
    return require_db()[kind].find_one({"_id": object_id(item_id, kind)})


def catalog_router(kind: str, create_body, update_body) -> APIRouter:
    label = kind.capitalize()
    folder = CATALOG_FOLDERS[kind]
    router = APIRouter(prefix=f"/api/{kind}", tags=[kind])

    @router.get("")
    def list_items(type: Optional[Placement] = None):
        filt = {"type": type} if type else {}
        items = require_db()[kind].find(filt).sort("created_at", DESCENDING)
        return {"success": True, "data": [serialize_doc(i) for i in items]}

    @router.get("/{item_id}")
    def get_item(item_id: str):
        oid = object_id(item_id, kind)
        item = require_db()[kind].find_one({"_id": oid})
        if not item:
            raise NotFound(f"{label} not found")
        return {"success": True, "data": serialize_doc(item)}

    @router.post("", status_code=201)
    def create_item(body: create_body):
        data = body.model_dump(exclude={"imageBase64"})
        if media.is_data_uri(body.imageBase64):
            data["image"] = media.upload_image(body.imageBase64, folder)
        new_id = create_document(kind, data)
        item = require_db()[kind].find_one({"_id": ObjectId(new_id)})
        logger.info("catalog_item_created", kind=kind, id=new_id)
        return {"success": True, "message": f"{label} created", "data": serialize_doc(item)}

    @router.put("/{item_id}")
    def update_item(item_id: str, body: update_body):
        oid = object_id(item_id, kind)
        collection = require_db()[kind]
        # explicit nulls count as absent
        update = {k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None}
        image_base64 = update.pop("imageBase64", None)
        if not collection.find_one({"_id": oid}, {"_id": 1}):
            raise NotFound(f"{label} not found")
        if media.is_data_uri(image_base64):
            update["image"] = media.upload_image(image_base64, folder)
        update["updated_at"] = datetime.now(timezone.utc)
        item = collection.find_one_and_update(
            {"_id": oid}, {"$set": update}, return_document=ReturnDocument.AFTER
        )
        if not item:
            raise NotFound(f"{label} not found")
        return {"success": True, "message": f"{label} updated", "data": serialize_doc(item)}

    @router.delete("")
    def delete_item(id: Optional[str] = None):
        oid = object_id(id, kind)
        item = require_db()[kind].find_one_and_delete({"_id": oid})
        if not item:
            raise NotFound(f"{label} not found")
        media.release_image(item.get("image"), folder)
        logger.info("catalog_item_deleted", kind=kind, id=id)
        return {"success": True, "message": f"{label} deleted successfully"}

    return router


app.include_router(catalog_router("product", ProductCreateBody, ProductUpdateBody))
app.include_router(catalog_router("box", BoxCreateBody, BoxUpdateBody))
app.include_router(catalog_router("namkeen", NamkeenCreateBody, NamkeenUpdateBody))


# ----------------------- Cart -----------------------
def offered_tier(item: dict, selected: Optional[dict]) -> Optional[dict]:
    """The catalog's current tier with the selected quantity and unit, if still offered."""
    if not selected:
        return None
    for tier in item.get("pricing") or []:
        if tier["quantity"] == selected["quantity"] and tier["unit"] == selected["unit"]:
            return {"quantity": tier["quantity"], "unit": tier["unit"], "price": tier["price"]}
    return None


def line_match(kind: str, product_id: str, selected: Optional[dict] = None) -> dict:
    # tiers are told apart by quantity and unit, never by the price the client sent
    match = {"kind": kind, "productId": product_id}
    if selected:
        match["selectedPricing.quantity"] = selected["quantity"]
        match["selectedPricing.unit"] = selected["unit"]
    return match


def same_line(line: dict) -> dict:
    """Match the cart line for this product and tier, or its untiered line."""
    match = line_match(line.get("kind", "product"), line["productId"], line.get("selectedPricing"))
    if not line.get("selectedPricing"):
        match["selectedPricing"] = None
    return match


def resolve_cart_line(line: dict) -> Optional[dict]:
    kind = line.get("kind", "product")
    item = require_db()[kind].find_one({"_id": ObjectId(line["productId"])})
    if not item:
        return None
    selected = line.get("selectedPricing")
    pricing = item.get("pricing")
    if "price" in item:
        price = item["price"]
    elif selected:
        tier = offered_tier(item, selected)
        # a withdrawn tier has no price until the customer picks another
        selected = tier or {"quantity": selected["quantity"], "unit": selected["unit"], "price": None}
        price = selected["price"]
    else:
        price = pricing[0]["price"] if pricing else 0
    return {
        "product": {
            "id": str(item["_id"]),
            "kind": kind,
            "name": item.get("name"),
            "image": item.get("image", ""),
            "type": item.get("type", "none"),
            "price": price,
            "pricing": pricing,
        },
        "quantity": line["quantity"],
        "selectedPricing": selected,
    }


def touch_cart(carts, user_id: str, now: datetime) -> None:
    carts.update_one(
        {"userId": user_id},
        {"$setOnInsert": {"items": [], "created_at": now}, "$set": {"updated_at": now}},
        upsert=True,
    )


@app.get("/api/cart")
def get_cart(user=Depends(require_user)):
    cart = require_db()["cart"].find_one({"userId": user["id"]})
    if not cart:
        return {"success": True, "data": {"items": []}}
    # entries removed from the catalog since they were added are dropped
    items = [r for r in (resolve_cart_line(line) for line in cart.get("items", [])) if r]
    return {"success": True, "data": {"items": items}}


@app.post("/api/cart")
def add_to_cart(body: CartItem, user=Depends(require_user)):
    if not find_catalog_item(body.kind, body.productId):
        raise NotFound("Product not found")
    carts = require_db()["cart"]
    user_id = user["id"]
    line = body.model_dump()
    match = same_line(line)
    now = datetime.now(timezone.utc)
    merge = {"$inc": {"items.$.quantity": body.quantity}, "$set": {"updated_at": now}}

    merged = carts.update_one({"userId": user_id, "items": {"$elemMatch": match}}, merge)
    if not merged.matched_count:
        touch_cart(carts, user_id, now)
        pushed = carts.update_one(
            {"userId": user_id, "items": {"$not": {"$elemMatch": match}}},
            {"$push": {"items": line}, "$set": {"updated_at": now}},
        )
        if not pushed.matched_count:
            # the same line was appended in between
            carts.update_one({"userId": user_id, "items": {"$elemMatch": match}}, merge)
    return {"success": True, "message": "Item added to cart"}


@app.put("/api/cart")
def update_cart(body: CartQuantityBody, user=Depends(require_user)):
    object_id(body.productId, "product")
    carts = require_db()["cart"]
    user_id = user["id"]
    selected = body.selectedPricing.model_dump() if body.selectedPricing else None
    match = line_match(body.kind, body.productId, selected)
    now = datetime.now(timezone.utc)
    if body.quantity == 0:
        update = {"$pull": {"items": match}, "$set": {"updated_at": now}}
    else:
        update = {"$set": {"items.$.quantity": body.quantity, "updated_at": now}}
    result = carts.update_one({"userId": user_id, "items": {"$elemMatch": match}}, update)
    if not result.matched_count:
        if not carts.find_one({"userId": user_id}, {"_id": 1}):
            raise NotFound("Cart not found")
        raise NotFound("Item not found in cart")
    return {"success": True, "message": "Cart updated successfully"}


@app.delete("/api/cart")
def remove_from_cart(body: CartRemoveBody, user=Depends(require_user)):
    object_id(body.productId, "product")
    selected = body.selectedPricing.model_dump() if body.selectedPricing else None
    require_db()["cart"].update_one(
        {"userId": user["id"]},
        {
            "$pull": {"items": line_match(body.kind, body.productId, selected)},
            "$set": {"updated_at": datetime.now(timezone.utc)},
        },
    )
    return {"success": True, "message": "Item removed from cart"}


@app.post("/api/cart/clear")
@app.delete("/api/cart/clear")
def clear_cart(user=Depends(require_user)):
    now = datetime.now(timezone.utc)
    cart = require_db()["cart"].find_one_and_update(
        {"userId": user["id"]},
        {"$set": {"items": [], "updated_at": now}, "$setOnInsert": {"created_at": now}},
        upsert=True,
        return_document=ReturnDocument.AFTER,
    )
    logger.info("cart_cleared", user_id=user["id"])
    return {"success": True, "message": "Cart cleared successfully", "data": serialize_doc(cart)}


# ----------------------- Orders -----------------------
def current_pricing(kind: str, item: dict, selected: Optional[dict]) -> dict:
    """Price a cart line against the catalog as it is now."""
    if kind == "box":
        return {"quantity": 1, "unit": "piece", "price": item["price"]}
    if not selected:
        raise ValidationError(f"Selected pricing not found for product: {item['name']}")
    tier = offered_tier(item, selected)
    if tier is None:
        raise ValidationError(f"Pricing option no longer offered for product: {item['name']}")
    return tier


def release_ordered_lines(carts, user_id: str, lines: list, now: datetime) -> None:
    """Take the ordered quantities out of the cart.

    Lines added or topped up after the order was priced stay behind.
    """
    for line in lines:
        carts.update_one(
            {"userId": user_id, "items": {"$elemMatch": same_line(line)}},
            {"$inc": {"items.$.quantity": -line["quantity"]}},
        )
    carts.update_one(
        {"userId": user_id},
        {"$pull": {"items": {"quantity": {"$lte": 0}}}, "$set": {"updated_at": now}},
    )


def snapshot_line(line: dict) -> OrderItem:
    kind = line.get("kind", "product")
    item = require_db()[kind].find_one({"_id": ObjectId(line["productId"])})
    if not item:
        raise NotFound(f"Product not found for item {line['productId']}")
    pricing = current_pricing(kind, item, line.get("selectedPricing"))
    return OrderItem(
        kind=kind,
        productId=str(item["_id"]),
        productName=item["name"],
        productImage=item.get("image", ""),
        quantity=line["quantity"],
        selectedPricing=pricing,
        itemTotal=round(pricing["price"] * line["quantity"], 2),
    )


def order_stats(collection) -> dict:
    revenue = list(collection.aggregate([
        {"$match": {"orderStatus": {"$ne": "cancelled"}}},
        {"$group": {"_id": None, "total": {"$sum": "$totalAmount"}}},
    ]))
    return {
        "totalOrders": collection.count_documents({}),
        "confirmedOrders": collection.count_documents({"orderStatus": "confirmed"}),
        "deliveredOrders": collection.count_documents({"orderStatus": "delivered"}),
        "cancelledOrders": collection.count_documents({"orderStatus": "cancelled"}),
        "totalRevenue": revenue[0]["total"] if revenue else 0,
    }


@app.post("/api/orders", status_code=201)
def create_order(body: CheckoutBody, user=Depends(require_user)):
    database = require_db()
    user_id = user["id"]
    cart = database["cart"].find_one({"userId": user_id})
    if not cart or not cart.get("items"):
        raise ValidationError("Cart is empty")

    items = [snapshot_line(line) for line in cart["items"]]
    totals = compute_totals(i.itemTotal for i in items)
    now = datetime.now(timezone.utc)
    order = Order(
        orderId=format_order_id(now.year, next_sequence("order")),
        userId=user_id,
        userEmail=user.get("email"),
        items=items,
        shippingAddress=body.shippingAddress,
        paymentMethod=body.paymentMethod,
        notes=body.notes,
        estimatedDelivery=now + timedelta(days=DELIVERY_DAYS),
        **totals,
    )
    create_document("order", order)
    release_ordered_lines(database["cart"], user_id, cart["items"], now)
    logger.info("order_created", order_id=order.orderId, user_id=user_id, total=order.totalAmount)
    return {
        "success": True,
        "message": "Order placed successfully",
        "data": {
            "orderId": order.orderId,
            "totalAmount": order.totalAmount,
            "orderStatus": order.orderStatus,
            "estimatedDelivery": order.estimatedDelivery.isoformat(),
        },
    }


@app.get("/api/orders")
def list_orders(
    admin: bool = False,
    status: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    user=Depends(get_current_user),
):
    collection = require_db()["order"]
    filt = {}
    if not admin:
        if user is None:
            raise Unauthorized()
        filt["userId"] = user["id"]
    if status in ORDER_STATUSES:
        filt["orderStatus"] = status
    orders, pagination = paginate(collection, filt, page, limit, [("created_at", DESCENDING)], "totalOrders")
    response = {"success": True, "data": orders, "pagination": pagination}
    if admin:
        response["stats"] = order_stats(collection)
    return response


@app.put("/api/orders")
def update_order(body: OrderUpdateBody):
    update = {}
    now = datetime.now(timezone.utc)
    if body.orderStatus:
        update["orderStatus"] = body.orderStatus
        if body.orderStatus == "delivered":
            update["deliveredAt"] = now
        if body.orderStatus == "cancelled":
            update["cancelledAt"] = now
    if body.paymentStatus:
        update["paymentStatus"] = body.paymentStatus
    if body.adminNotes is not None:
        update["adminNotes"] = body.adminNotes
    if not update:
        raise ValidationError("No fields to update")
    update["updated_at"] = now
    order = require_db()["order"].find_one_and_update(
        {"orderId": body.orderId}, {"$set": update}, return_document=ReturnDocument.AFTER
    )
    if not order:
        raise NotFound("Order not found")
    return {"success": True, "message": "Order updated successfully", "data": serialize_doc(order)}


@app.delete("/api/orders")
def cancel_order(orderId: str, body: Optional[OrderCancelBody] = None, user=Depends(require_user)):
    collection = require_db()["order"]
    query = {"orderId": orderId, "userId": user["id"]}
    order = collection.find_one(query)
    if not order:
        raise NotFound("Order not found")
    if order["orderStatus"] == "delivered":
        raise Conflict("Cannot cancel a delivered order")
    if order["orderStatus"] == "cancelled":
        raise Conflict("Order is already cancelled")

    now = datetime.now(timezone.utc)
    reason = (body.cancellationReason if body else None) or "Cancelled by user"
    updated = collection.find_one_and_update(
        {**query, "orderStatus": "confirmed"},
        {"$set": {"orderStatus": "cancelled", "cancelledAt": now, "cancellationReason": reason, "updated_at": now}},
        return_document=ReturnDocument.AFTER,
    )
    if not updated:
        raise Conflict("Order status changed, please retry")
    logger.info("order_cancelled", order_id=orderId, user_id=user["id"])
    updated = serialize_doc(updated)
    return {
        "success": True,
        "message": "Order cancelled successfully",
        "data": {
            "orderId": updated["orderId"],
            "orderStatus": updated["orderStatus"],
            "cancelledAt": updated["cancelledAt"],
            "cancellationReason": updated["cancellationReason"],
        },
    }


# ----------------------- Enquiries -----------------------
ENQUIRY_SORT_FIELDS = {"createdAt": "created_at", "created_at": "created_at", "name": "name", "status": "status"}


def local_midnight(days_ago: int = 0) -> datetime:
    today = datetime.now().astimezone().replace(hour=0, minute=0, second=0, microsecond=0)
    return today - timedelta(days=days_ago)


@app.post("/api/enquiries", status_code=201)
def create_enquiry(body: Enquiry):
    new_id = create_document("enquiry", body)
    enquiry = require_db()["enquiry"].find_one({"_id": ObjectId(new_id)})
    logger.info("enquiry_received", id=new_id, email=body.email, product=body.product)
    return {
        "success": True,
        "message": "Enquiry submitted successfully! We will contact you within 24 hours.",
        "data": {"id": new_id, "submittedAt": as_utc(enquiry["created_at"]).isoformat()},
    }


@app.get("/api/enquiries")
def list_enquiries(
    status: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    sortBy: str = "createdAt",
    sortOrder: str = "desc",
):
    if sortBy not in ENQUIRY_SORT_FIELDS:
        raise ValidationError(f"Cannot sort by {sortBy}")
    filt = {"status": status} if status in ENQUIRY_STATUSES else {}
    direction = DESCENDING if sortOrder == "desc" else ASCENDING
    enquiries, pagination = paginate(
        require_db()["enquiry"], filt, page, limit, [(ENQUIRY_SORT_FIELDS[sortBy], direction)], "totalEnquiries"
    )
    return {
        "success": True,
        "data": enquiries,
        "pagination": pagination,
        "filters": {"status": filt.get("status", "all"), "sortBy": sortBy, "sortOrder": sortOrder},
    }


@app.get("/api/enquiries/stats")
def enquiry_stats():
    today = local_midnight()
    week_ago = local_midnight(days_ago=7)
    status_stats = {s: 0 for s in ENQUIRY_STATUSES}
    total = today_count = week_count = 0
    # single cursor so every figure comes from the same read
    for doc in require_db()["enquiry"].find({}, {"status": 1, "created_at": 1}):
        total += 1
        status = doc.get("status", "new")
        if status in status_stats:
            status_stats[status] += 1
        created = doc.get("created_at")
        if created is None:
            continue
        created = as_utc(created)
        if created >= today:
            today_count += 1
        if created >= week_ago:
            week_count += 1
    return {
        "success": True,
        "data": {"total": total, "statusStats": status_stats, "today": today_count, "thisWeek": week_count},
    }


@app.get("/api/enquiries/{enquiry_id}")
def get_enquiry(enquiry_id: str):
    oid = object_id(enquiry_id, "enquiry")
    enquiry = require_db()["enquiry"].find_one({"_id": oid})
    if not enquiry:
        raise NotFound("Enquiry not found")
    return {"success": True, "data": serialize_doc(enquiry)}


@app.put("/api/enquiries/{enquiry_id}")
def update_enquiry_status(enquiry_id: str, body: EnquiryStatusBody):
    oid = object_id(enquiry_id, "enquiry")
    # any status may follow any other
    enquiry = require_db()["enquiry"].find_one_and_update(
        {"_id": oid},
        {"$set": {"status": body.status, "updated_at": datetime.now(timezone.utc)}},
        return_document=ReturnDocument.AFTER,
    )
    if not enquiry:
        raise NotFound("Enquiry not found")
    return {"success": True, "message": "Enquiry status updated successfully", "data": serialize_doc(enquiry)}


# ----------------------- Sawamani (bulk orders) -----------------------
@app.get("/api/sawamani")
def list_sawamani(
    phoneNumber: Optional[str] = None,
    itemType: Optional[str] = None,
    startDate: Optional[datetime] = None,
    endDate: Optional[datetime] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
):
    filt = {}
    if phoneNumber:
        filt["phoneNumber"] = {"$regex": re.escape(phoneNumber), "$options": "i"}
    if itemType:
        filt["item.type"] = itemType
    if startDate or endDate:
        filt["date"] = {}
        if startDate:
            filt["date"]["$gte"] = mongo_date(startDate)
        if endDate:
            filt["date"]["$lte"] = mongo_date(endDate)
    orders, pagination = paginate(
        require_db()["sawamani"], filt, page, limit, [("created_at", DESCENDING)], "totalOrders"
    )
    return {"success": True, "data": orders, "pagination": pagination}


@app.post("/api/sawamani", status_code=201)
def create_sawamani(body: Sawamani):
    data = body.model_dump()
    data["date"] = mongo_date(body.date)
    new_id = create_document("sawamani", data)
    order = require_db()["sawamani"].find_one({"_id": ObjectId(new_id)})
    logger.info("sawamani_created", id=new_id, item_type=body.item.type, date=body.date.isoformat())
    return {"success": True, "message": "Order created successfully", "data": serialize_doc(order)}


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)
