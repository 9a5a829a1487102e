"""Product catalogue and stock engine.

Stock changes are applied with a single conditional ``UPDATE`` whose guard
(``quantity >= n`` for stock-out, ``quantity <= MAX - n`` for stock-in) is
evaluated by the database, so concurrent requests on the same product can
neither lose an update nor drive the quantity below zero.
"""
import logging

from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from apps.common.exceptions import DuplicateSku, InsufficientStock, ResourceNotFound
from apps.inventory.models import MAX_STOCK_QUANTITY, Product

logger = logging.getLogger(__name__)

CREATE_FIELDS = ("sku", "name", "description", "quantity", "min_stock", "price")
UPDATE_FIELDS = ("name", "description", "price", "min_stock")


def create_product(*, data) -> Product:
    sku = data["sku"]
    if Product.objects.filter(sku=sku).exists():
        logger.warning("Rejected product with duplicate SKU %s", sku)
        raise DuplicateSku(sku)

    try:
        with transaction.atomic():
            product = Product.objects.create(**{field: data.get(field) for field in CREATE_FIELDS})
    except IntegrityError as exc:
        # Lost the race against another insert of the same SKU.
        if Product.objects.filter(sku=sku).exists():
            logger.warning("Rejected product with duplicate SKU %s", sku)
            raise DuplicateSku(sku) from exc
        raise

    logger.info("Product %s created with SKU %s and quantity %s", product.id, product.sku, product.quantity)
    return product


def list_products():
    return Product.objects.order_by("-updated_at", "-id")


def get_product(product_id) -> Product:
    try:
        return Product.objects.get(pk=product_id)
    except Product.DoesNotExist:
        raise ResourceNotFound(f"Product with id {product_id} not found.")


def get_product_by_sku(sku) -> Product:
    try:
        return Product.objects.get(sku=sku)
    except Product.DoesNotExist:
        raise ResourceNotFound(f"Product with SKU '{sku}' not found.")


def update_product(product_id, *, data) -> Product:
    """Update the descriptive fields; quantity and SKU are never touched here."""
    with transaction.atomic():
        product = get_product(product_id)
        for field in UPDATE_FIELDS:
            setattr(product, field, data.get(field))
        product.save(update_fields=[*UPDATE_FIELDS, "updated_at"])
    logger.info("Product %s updated", product.id)
    return product


def delete_product(product_id):
    deleted, _ = Product.objects.filter(pk=product_id).delete()
    if not deleted:
        raise ResourceNotFound(f"Product with id {product_id} not found.")
    logger.info("Product %s deleted", product_id)


def _validate_stock_quantity(quantity):
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValidationError({"cantidad": "Quantity must be greater than 0."})
    if quantity > MAX_STOCK_QUANTITY:
        raise ValidationError({"cantidad": f"Quantity must be less than or equal to {MAX_STOCK_QUANTITY}."})


def stock_in(product_id, quantity) -> Product:
    _validate_stock_quantity(quantity)
    with transaction.atomic():
        updated = Product.objects.filter(pk=product_id, quantity__lte=MAX_STOCK_QUANTITY - quantity).update(
            quantity=F("quantity") + quantity,
            updated_at=timezone.now(),
        )
        product = get_product(product_id)
        if not updated:
            raise ValidationError(
                {
                    "cantidad": (
                        f"Stock cannot exceed {MAX_STOCK_QUANTITY}. "
                        f"Current stock: {product.quantity}, requested: {quantity}."
                    )
                }
            )
    logger.info("Stock in for product %s: +%s (now %s)", product.id, quantity, product.quantity)
    return product


def stock_out(product_id, quantity) -> Product:
    _validate_stock_quantity(quantity)
    with transaction.atomic():
        updated = Product.objects.filter(pk=product_id, quantity__gte=quantity).update(
            quantity=F("quantity") - quantity,
            updated_at=timezone.now(),
        )
        product = get_product(product_id)
        if not updated:
            logger.warning(
                "Insufficient stock for product %s: current %s, requested %s",
                product.id,
                product.quantity,
                quantity,
            )
            raise InsufficientStock(current=product.quantity, requested=quantity)
    logger.info("Stock out for product %s: -%s (now %s)", product.id, quantity, product.quantity)
    return product


def low_stock_products():
    return Product.objects.low_stock()


def search_products_by_name(query):
    return Product.objects.name_contains(query)


def products_in_price_range(min_price, max_price):
    return Product.objects.price_between(min_price, max_price)
