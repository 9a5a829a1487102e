import threading
import time
from decimal import Decimal
from io import StringIO
from unittest import mock

from django.core.management import call_command
from django.db import IntegrityError, connections
from django.test import TransactionTestCase
from rest_framework import status
from rest_framework.test import APITestCase

from apps.common.exceptions import DuplicateSku, InsufficientStock
from apps.inventory import services
from apps.inventory.models import MAX_STOCK_QUANTITY, Product


def make_product(sku, quantity=10, min_stock=0, name="Widget", price="9.99"):
    return Product.objects.create(sku=sku, name=name, quantity=quantity, min_stock=min_stock, price=Decimal(price))


class ProductApiTests(APITestCase):
    def payload(self, **overrides):
        data = {
            "sku": "PRD-0001",
            "name": "Wireless mouse",
            "description": "2.4 GHz",
            "quantity": 5,
            "minStock": 2,
            "price": 19.99,
        }
        data.update(overrides)
        return data

    def test_create_and_fetch_product(self):
        created = self.client.post("/api/products", self.payload(), format="json")
        self.assertEqual(created.status_code, status.HTTP_201_CREATED)
        self.assertEqual(created.data["sku"], "PRD-0001")
        self.assertEqual(created.data["price"], Decimal("19.99"))
        self.assertFalse(created.data["lowStock"])

        by_id = self.client.get(f"/api/products/{created.data['id']}")
        self.assertEqual(by_id.status_code, 200)
        self.assertEqual(by_id.data, created.data)

        by_sku = self.client.get("/api/products/sku/PRD-0001")
        self.assertEqual(by_sku.status_code, 200)
        self.assertEqual(by_sku.data["id"], created.data["id"])

        self.assertEqual(self.client.get("/api/products/sku/XYZ-9999").status_code, 404)

    def test_sku_format(self):
        accepted = self.client.post("/api/products", self.payload(sku="ABC-0001"), format="json")
        self.assertEqual(accepted.status_code, 201)

        for sku in ("AB-0001", "abcd-0001", "ABC-001", "ABC-00001", "abc-0001", "ABC0001"):
            response = self.client.post("/api/products", self.payload(sku=sku), format="json")
            self.assertEqual(response.status_code, 400, sku)
            self.assertIn("sku", response.data["errors"])

    def test_duplicate_sku_is_a_conflict(self):
        make_product("PRD-0001")
        response = self.client.post("/api/products", self.payload(), format="json")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["error"], "Conflict")
        self.assertIn("PRD-0001", response.data["message"])
        self.assertEqual(Product.objects.count(), 1)

    def test_product_may_start_below_minimum_stock(self):
        created = self.client.post("/api/products", self.payload(quantity=1, minStock=10), format="json")
        self.assertEqual(created.status_code, 201)
        self.assertTrue(created.data["lowStock"])

        alerts = self.client.get("/api/products/alertas")
        self.assertEqual([item["id"] for item in alerts.data], [created.data["id"]])

    def test_create_validation(self):
        response = self.client.post(
            "/api/products",
            {"sku": "PRD-0001", "name": "ab", "quantity": -1, "minStock": -2, "price": "0.00"},
            format="json",
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(set(response.data["errors"]), {"name", "quantity", "minStock", "price"})

        too_precise = self.client.post("/api/products", self.payload(price="1.001"), format="json")
        self.assertEqual(too_precise.status_code, 400)
        self.assertIn("price", too_precise.data["errors"])

    def test_update_changes_descriptive_fields_only(self):
        product = make_product("PRD-0001", quantity=7, min_stock=1)
        response = self.client.put(
            f"/api/products/{product.id}",
            {"name": "Renamed", "description": None, "price": "12.50", "minStock": 3, "quantity": 999, "sku": "NEW-0001"},
            format="json",
        )
        self.assertEqual(response.status_code, 200)
        product.refresh_from_db()
        self.assertEqual(product.name, "Renamed")
        self.assertIsNone(product.description)
        self.assertEqual(product.price, Decimal("12.50"))
        self.assertEqual(product.min_stock, 3)
        self.assertEqual(product.quantity, 7)
        self.assertEqual(product.sku, "PRD-0001")

    def test_blank_description_is_stored_as_null(self):
        response = self.client.post("/api/products", self.payload(description="   "), format="json")
        self.assertEqual(response.status_code, 201)
        self.assertIsNone(response.data["description"])
        self.assertIsNone(Product.objects.get(pk=response.data["id"]).description)

    def test_delete_product(self):
        product = make_product("PRD-0001")
        self.assertEqual(self.client.delete(f"/api/products/{product.id}").status_code, 204)
        self.assertEqual(self.client.delete(f"/api/products/{product.id}").status_code, 404)
        self.assertEqual(self.client.get(f"/api/products/{product.id}").status_code, 404)

    def test_stock_in_and_out(self):
        product = make_product("PRD-0001", quantity=3)

        stock_in = self.client.post(f"/api/products/{product.id}/stock/entrada?cantidad=4")
        self.assertEqual(stock_in.status_code, 200)
        self.assertEqual(stock_in.data["quantity"], 7)

        stock_out = self.client.post(f"/api/products/{product.id}/stock/salida?cantidad=4")
        self.assertEqual(stock_out.status_code, 200)
        self.assertEqual(stock_out.data["quantity"], 3)

    def test_stock_out_underflow_is_rejected_without_writing(self):
        product = make_product("PRD-0001", quantity=3)
        before = Product.objects.get(pk=product.pk).updated_at

        response = self.client.post(f"/api/products/{product.id}/stock/salida?cantidad=5")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertIn("Current stock: 3", response.data["message"])

        fetched = self.client.get(f"/api/products/{product.id}")
        self.assertEqual(fetched.data["quantity"], 3)
        self.assertEqual(Product.objects.get(pk=product.pk).updated_at, before)

    def test_stock_quantity_must_be_positive(self):
        product = make_product("PRD-0001", quantity=3)
        for url in (
            f"/api/products/{product.id}/stock/entrada?cantidad=0",
            f"/api/products/{product.id}/stock/salida?cantidad=0",
            f"/api/products/{product.id}/stock/salida?cantidad=-2",
            f"/api/products/{product.id}/stock/salida",
        ):
            response = self.client.post(url)
            self.assertEqual(response.status_code, 400, url)
            self.assertIn("cantidad", response.data["errors"])

    def test_stock_operations_on_missing_product(self):
        self.assertEqual(self.client.post("/api/products/999/stock/entrada?cantidad=1").status_code, 404)
        self.assertEqual(self.client.post("/api/products/999/stock/salida?cantidad=1").status_code, 404)

    def test_low_stock_ordering(self):
        a = make_product("AAA-0001", quantity=0, min_stock=10)
        c = make_product("CCC-0001", quantity=9, min_stock=10)
        b = make_product("BBB-0001", quantity=5, min_stock=10)
        make_product("OKK-0001", quantity=10, min_stock=10)

        response = self.client.get("/api/products/alertas")
        self.assertEqual(response.status_code, 200)
        self.assertEqual([item["id"] for item in response.data], [a.id, b.id, c.id])

    def test_low_stock_ties_are_ordered_by_id(self):
        first = make_product("AAA-0001", quantity=1, min_stock=3)
        second = make_product("AAA-0002", quantity=4, min_stock=6)

        response = self.client.get("/api/products/alertas")
        self.assertEqual([item["id"] for item in response.data], [first.id, second.id])

    def test_search_by_name_is_case_insensitive(self):
        mouse = make_product("PRD-0001", name="Wireless Mouse")
        make_product("PRD-0002", name="Keyboard")
        pad = make_product("PRD-0003", name="mouse pad")

        response = self.client.get("/api/products/search", {"nombre": "MOUSE"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual([item["id"] for item in response.data], [pad.id, mouse.id])

        self.assertEqual(self.client.get("/api/products/search").status_code, 400)

        everything = self.client.get("/api/products/search", {"nombre": ""})
        self.assertEqual(everything.status_code, 200)
        self.assertEqual(len(everything.data), 3)

    def test_filter_by_price_is_inclusive(self):
        cheap = make_product("PRD-0001", price="5.00")
        mid = make_product("PRD-0002", price="10.00")
        make_product("PRD-0003", price="10.01")

        response = self.client.get("/api/products/precio", {"min": "5.00", "max": "10.00"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual([item["id"] for item in response.data], [cheap.id, mid.id])

        inverted = self.client.get("/api/products/precio", {"min": "10.00", "max": "5.00"})
        self.assertEqual(inverted.data, [])

    def test_list_returns_recently_updated_first(self):
        first = make_product("PRD-0001")
        second = make_product("PRD-0002")
        services.stock_in(first.id, 1)

        response = self.client.get("/api/products")
        self.assertEqual([item["id"] for item in response.data], [first.id, second.id])


class StockEngineTests(APITestCase):
    def test_stock_in_then_out_is_identity(self):
        product = make_product("PRD-0001", quantity=12)
        services.stock_in(product.id, 5)
        services.stock_out(product.id, 5)
        product.refresh_from_db()
        self.assertEqual(product.quantity, 12)

    def test_stock_out_more_than_available_reports_current_and_requested(self):
        product = make_product("PRD-0001", quantity=4)
        with self.assertRaises(InsufficientStock) as ctx:
            services.stock_out(product.id, 4 + 3)
        self.assertEqual(ctx.exception.current, 4)
        self.assertEqual(ctx.exception.requested, 7)
        product.refresh_from_db()
        self.assertEqual(product.quantity, 4)

    def test_competing_stock_outs_never_go_negative(self):
        product = make_product("PRD-0001", quantity=3)
        stale_copy = Product.objects.get(pk=product.pk)

        services.stock_out(product.id, 3)
        with self.assertRaises(InsufficientStock):
            services.stock_out(stale_copy.id, 1)

        product.refresh_from_db()
        self.assertEqual(product.quantity, 0)

    def test_stock_in_rejects_overflow(self):
        product = make_product("PRD-0001", quantity=MAX_STOCK_QUANTITY - 1)
        services.stock_in(product.id, 1)
        with self.assertRaises(services.ValidationError):
            services.stock_in(product.id, 1)
        product.refresh_from_db()
        self.assertEqual(product.quantity, MAX_STOCK_QUANTITY)

    def test_stock_quantity_must_be_an_integer(self):
        product = make_product("PRD-0001", quantity=3)
        for bad in (0, -1, True, 1.5, "2"):
            with self.assertRaises(services.ValidationError):
                services.stock_out(product.id, bad)

    def test_lost_insert_race_maps_to_duplicate_sku(self):
        make_product("PRD-0001")
        data = {"sku": "PRD-0001", "name": "Racer", "quantity": 1, "min_stock": 0, "price": Decimal("1.00")}
        exists = mock.Mock(side_effect=[False, True])
        with mock.patch.object(Product.objects, "filter", return_value=mock.Mock(exists=exists)):
            with self.assertRaises(DuplicateSku):
                services.create_product(data=data)

    def test_other_integrity_errors_propagate(self):
        data = {"sku": "PRD-0001", "name": "Broken", "quantity": 1, "min_stock": 0, "price": Decimal("1.00")}
        with mock.patch.object(Product.objects, "create", side_effect=IntegrityError("check failed")):
            with self.assertRaises(IntegrityError):
                services.create_product(data=data)

    def test_seed_inventory_is_idempotent(self):
        call_command("seed_inventory", stdout=StringIO())
        count = Product.objects.count()
        call_command("seed_inventory", stdout=StringIO())
        self.assertEqual(Product.objects.count(), count)
        self.assertTrue(Product.objects.filter(sku="PRD-0003", quantity=0).exists())


class ConcurrentStockOutTests(TransactionTestCase):
    """Two stock-outs on one product, the second issued while the first holds its write."""

    def race(self, initial, first, second):
        product = make_product("PRD-0001", quantity=initial)
        first_applied = threading.Event()
        release_first = threading.Event()
        real_get_product = services.get_product
        outcomes = {}

        def get_product(product_id):
            # Runs inside stock_out's transaction, right after the guarded UPDATE.
            if threading.current_thread().name == "first":
                first_applied.set()
                release_first.wait(timeout=5)
            return real_get_product(product_id)

        def withdraw(label, quantity):
            try:
                services.stock_out(product.id, quantity)
                outcomes[label] = "ok"
            except InsufficientStock:
                outcomes[label] = "insufficient"
            finally:
                connections.close_all()

        with mock.patch.object(services, "get_product", side_effect=get_product):
            first_thread = threading.Thread(target=withdraw, args=("first", first), name="first")
            second_thread = threading.Thread(target=withdraw, args=("second", second), name="second")
            first_thread.start()
            self.assertTrue(first_applied.wait(timeout=5))
            second_thread.start()
            time.sleep(0.2)
            release_first.set()
            first_thread.join(timeout=10)
            second_thread.join(timeout=10)

        product.refresh_from_db()
        return outcomes, product.quantity

    def test_full_withdrawal_wins_over_single_unit(self):
        outcomes, quantity = self.race(initial=5, first=5, second=1)
        self.assertEqual(outcomes, {"first": "ok", "second": "insufficient"})
        self.assertEqual(quantity, 0)

    def test_single_unit_wins_over_full_withdrawal(self):
        outcomes, quantity = self.race(initial=5, first=1, second=5)
        self.assertEqual(outcomes, {"first": "ok", "second": "insufficient"})
        self.assertEqual(quantity, 4)
