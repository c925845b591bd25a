import unittest
from decimal import Decimal

from apps.catalog.domain import CatalogItem
from apps.carts.ledger import CartLedger
from apps.carts.mappers import CartLineMapper, CartMapper
from apps.carts.serializers import CartReadSerializer


class CartMapperTests(unittest.TestCase):
    def setUp(self):
        self.bread = CatalogItem("Bread", Decimal("40"), "bread")
        self.pie = CatalogItem("Pie", Decimal("150.5"), "pie")
        self.mapper = CartMapper(currency_label="EUR")

    def test_line_subtotal_uses_unit_price(self):
        line = CartLineMapper().to_dto(self.pie, 3)
        self.assertEqual(line.item.name, "Pie")
        self.assertEqual(line.item.price, "150.50")
        self.assertEqual(line.quantity, 3)
        self.assertEqual(line.subtotal, "451.50")

    def test_cart_dto_totals(self):
        ledger = CartLedger()
        ledger.add(self.bread)
        ledger.add(self.pie)
        ledger.add(self.bread)
        dto = self.mapper.to_dto(ledger)
        self.assertEqual([line.item.name for line in dto.items], ["Bread", "Pie"])
        self.assertEqual(dto.total_price, "230.50")
        self.assertEqual(dto.total_display, "230.50 EUR")
        self.assertEqual(dto.item_count, 3)

    def test_empty_ledger(self):
        dto = self.mapper.to_dto(CartLedger())
        self.assertEqual(dto.items, [])
        self.assertEqual(dto.total_price, "0.00")

    def test_currency_label_defaults_to_setting(self):
        self.assertEqual(CartMapper().currency_label, "руб.")

    def test_read_serializer_renders_camel_case(self):
        ledger = CartLedger()
        ledger.add(self.bread)
        data = CartReadSerializer(self.mapper.to_dto(ledger)).data
        self.assertEqual(data["totalPrice"], "40.00")
        self.assertEqual(data["totalDisplay"], "40.00 EUR")
        self.assertEqual(data["itemCount"], 1)
        self.assertEqual(
            data["items"][0],
            {
                "item": {"name": "Bread", "price": "40.00", "image": "bread"},
                "quantity": 1,
                "subtotal": "40.00",
            },
        )
