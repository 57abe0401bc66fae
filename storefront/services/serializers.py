# storefront/services/serializers.py
#model -> dict shaped like the response schemas

from storefront.data.models.bundle import BundleModel
from storefront.data.models.order import OrderModel
from storefront.data.models.product import ProductModel
from storefront.data.models.user import UserModel
from storefront.domain.pricing import to_money


def serialize_order(order: OrderModel, include_customer: bool = False) -> dict:
    data = {
        "id": order.id,
        "order_number": order.order_number,
        "user_id": order.user_id,
        "subtotal": order.subtotal,
        "discount_applied": order.discount_applied,
        "total_amount": order.total_amount,
        "status": order.status,
        "payment_method": order.payment_method,
        "shipping_address": order.shipping_address,
        "created_at": order.created_at,
        "updated_at": order.updated_at,
        "items": [
            {
                "id": i.id,
                "product_id": i.product_id,
                "variant_id": i.variant_id,
                "quantity": i.quantity,
                "price_at_purchase": i.price_at_purchase,
                "product_name": i.product.name if i.product else None,
                "product_image": i.product.image_url if i.product else None,
            }
            for i in order.items
        ],
    }
    if include_customer and order.user is not None:
        data["customer_name"] = order.user.name
        data["customer_email"] = order.user.email
    return data


def serialize_product(product: ProductModel) -> dict:
    category = product.category
    brand = product.brand
    return {
        "id": product.id,
        "category_id": product.category_id,
        "category_name": category.name if category else None,
        "category_slug": category.slug if category else None,
        "brand_id": product.brand_id,
        "brand_name": brand.name if brand else None,
        "brand_slug": brand.slug if brand else None,
        "brand_logo": brand.logo_url if brand else None,
        "name": product.name,
        "slug": product.slug,
        "description": product.description,
        "short_description": product.short_description,
        "image_url": product.image_url,
        "original_price": product.original_price,
        "current_price": product.current_price,
        "stock_quantity": product.stock_quantity,
        "is_featured": product.is_featured,
        "is_new_arrival": product.is_new_arrival,
        "created_at": product.created_at,
        "variants": [
            {
                "id": v.id,
                "variant_name": v.variant_name,
                "variant_value": v.variant_value,
                "sku": v.sku,
                "price_modifier": v.price_modifier,
                "stock_quantity": v.stock_quantity,
            }
            for v in product.variants
        ],
    }


def serialize_user(user: UserModel, order_count: int = 0, total_spent=0) -> dict:
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "phone": user.phone,
        "address": user.address,
        "city": user.city,
        "postal_code": user.postal_code,
        "country": user.country,
        "role": user.role,
        "created_at": user.created_at,
        "order_count": order_count,
        "total_spent": to_money(total_spent),
    }


def serialize_bundle(bundle: BundleModel) -> dict:
    items = [
        {
            "id": i.id,
            "product_id": i.product_id,
            "quantity": i.quantity,
            "product_name": i.product.name,
            "product_image": i.product.image_url,
            "product_price": i.product.current_price,
        }
        for i in bundle.items
    ]
    return {
        "id": bundle.id,
        "name": bundle.name,
        "slug": bundle.slug,
        "description": bundle.description,
        "image_url": bundle.image_url,
        "bundle_price": bundle.bundle_price,
        "is_active": bundle.is_active,
        "created_at": bundle.created_at,
        "updated_at": bundle.updated_at,
        "items": items,
        "original_price": to_money(sum((i["product_price"] * i["quantity"] for i in items), 0)),
    }


def pagination(total: int, limit: int, offset: int, page_size: int) -> dict:
    return {
        "total": total,
        "limit": limit,
        "offset": offset,
        "has_more": offset + page_size < total,
    }
