import json

from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient, APISimpleTestCase

from apps.carts.codec import MAX_QUANTITY
from apps.carts.views import CartImportView
from apps.carts.container import build_cart_service


class CartApiTests(APISimpleTestCase):
    """Full request cycle through sessions held in the local-memory cache."""

    def add(self, name):
        return self.client.post(reverse("api-cart-items"), {"name": name}, format="json")

    def remove(self, name):
        return self.client.delete(reverse("api-cart-item-detail", kwargs={"name": name}))

    def cart(self):
        return self.client.get(reverse("api-cart"))

    def test_new_visitor_has_empty_cart(self):
        response = self.cart()
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["items"], [])
        self.assertEqual(response.data["totalPrice"], "0.00")
        self.assertEqual(response.data["totalDisplay"], "0.00 руб.")

    def test_order_flow(self):
        self.add("Багет")
        self.add("Багет")
        self.add("Круассан")
        response = self.remove("Багет")
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        summary = self.cart().data
        self.assertEqual(
            [(line["item"]["name"], line["quantity"]) for line in summary["items"]],
            [("Багет", 1), ("Круассан", 1)],
        )
        self.assertEqual(summary["totalPrice"], "90.00")
        self.assertEqual(summary["totalDisplay"], "90.00 руб.")
        self.assertEqual(summary["itemCount"], 2)

    def test_add_unknown_item_returns_404(self):
        response = self.add("Пицца")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["error"]["code"], "NOT_FOUND")
        self.assertEqual(self.cart().data["items"], [])

    def test_remove_item_not_in_cart_changes_nothing(self):
        self.add("Сырники")
        response = self.remove("Торт Наполеон")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["totalPrice"], "80.00")

    def test_reset_cart(self):
        self.add("Торт Наполеон")
        response = self.client.delete(reverse("api-cart"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["items"], [])
        self.assertEqual(self.cart().data["totalPrice"], "0.00")

    def test_carts_are_isolated_per_session(self):
        self.add("Багет")
        other = self.client_class()
        self.assertEqual(other.get(reverse("api-cart")).data["items"], [])

    def test_export_and_import_into_another_session(self):
        self.add("Пирог с вишней")
        self.add("Круассан")
        self.add("Круассан")
        exported = self.client.get(reverse("api-cart-export"))
        self.assertEqual(exported.status_code, status.HTTP_200_OK)
        text = exported.content.decode("utf-8")
        self.assertEqual(
            json.loads(text), {"items": {"Пирог с вишней": 1, "Круассан": 2}}
        )

        other = self.client_class()
        response = other.post(
            reverse("api-cart-import"), text, content_type="application/json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["totalPrice"], "250.00")
        self.assertEqual(other.get(reverse("api-cart")).data["itemCount"], 3)

    def test_import_with_unknown_name_adds_free_placeholder(self):
        response = self.client.post(
            reverse("api-cart-import"),
            '{"items": {"Багет": 1, "Эклер": 2}}',
            content_type="application/json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["totalPrice"], "40.00")
        placeholder = response.data["items"][1]
        self.assertEqual(placeholder["item"], {"name": "Эклер", "price": "0.00", "image": ""})

        response = self.remove("Эклер")
        self.assertEqual(response.data["items"][1]["quantity"], 1)

    def test_import_malformed_payload_returns_400_and_keeps_cart(self):
        self.add("Багет")
        response = self.client.post(
            reverse("api-cart-import"), '{"items": [1, 2]}', content_type="application/json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"]["code"], "VALIDATION_ERROR")
        self.assertEqual(self.cart().data["totalPrice"], "40.00")

    def test_import_under_fail_policy_returns_422(self):
        with override_settings(CART_UNRESOLVED_NAME_POLICY="fail"):
            strict = build_cart_service()
        original = CartImportView.service
        CartImportView.service = strict
        self.addCleanup(setattr, CartImportView, "service", original)

        response = self.client.post(
            reverse("api-cart-import"),
            '{"items": {"Эклер": 1}}',
            content_type="application/json",
        )
        self.assertEqual(response.status_code, status.HTTP_422_UNPROCESSABLE_ENTITY)
        self.assertEqual(response.data["error"]["details"], {"names": ["Эклер"]})

    def test_import_rejects_quantity_above_limit(self):
        self.add("Багет")
        for quantity in (MAX_QUANTITY + 1, 10**30):
            with self.subTest(quantity=quantity):
                response = self.client.post(
                    reverse("api-cart-import"),
                    '{"items": {"Багет": %d}}' % quantity,
                    content_type="application/json",
                )
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
                self.assertEqual(response.data["error"]["code"], "VALIDATION_ERROR")
        self.assertEqual(self.cart().data["totalPrice"], "40.00")

    def test_import_accepts_quantity_at_limit(self):
        response = self.client.post(
            reverse("api-cart-import"),
            '{"items": {"Торт Наполеон": %d}}' % MAX_QUANTITY,
            content_type="application/json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["totalPrice"], "349650.00")

        response = self.add("Торт Наполеон")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            response.data["error"]["details"],
            {"name": "Торт Наполеон", "limit": MAX_QUANTITY},
        )


class CartCsrfTests(APISimpleTestCase):
    def setUp(self):
        self.client = APIClient(enforce_csrf_checks=True)

    def test_cart_write_without_token_is_forbidden(self):
        response = self.client.post(reverse("api-cart-items"), {"name": "Багет"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["error"]["code"], "FORBIDDEN")

    def test_cart_write_with_token_from_cart_page(self):
        self.client.get(reverse("api-cart"))
        token = self.client.cookies["csrftoken"].value

        response = self.client.post(
            reverse("api-cart-items"),
            {"name": "Багет"},
            format="json",
            HTTP_X_CSRFTOKEN=token,
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["totalPrice"], "40.00")

    def test_import_with_token_reads_raw_body(self):
        self.client.get(reverse("api-storefront-start"))
        token = self.client.cookies["csrftoken"].value

        response = self.client.post(
            reverse("api-cart-import"),
            '{"items": {"Круассан": 2}}',
            content_type="application/json",
            HTTP_X_CSRFTOKEN=token,
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["totalPrice"], "100.00")

    def test_reads_need_no_token(self):
        response = self.client.get(reverse("api-cart-export"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
