"""
CRUD service behaviour: patch semantics, cascades, exhibitions and pending
amount ordering.
"""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from sellersync.common.exceptions import NotFoundError, ValidationError
from sellersync.modules.exhibitions.models import ExhibitionStatus
from sellersync.modules.exhibitions.schemas import ExhibitionCreate, ExhibitionUpdate
from sellersync.modules.exhibitions.service import ExhibitionService
from sellersync.modules.payments.models import Payment, PendingAmount, PendingStatus
from sellersync.modules.payments.schemas import (
    PaymentUpdate, PendingAmountCreate, PendingAmountUpdate
)
from sellersync.modules.payments.service import PaymentService, PendingAmountService
from sellersync.modules.reports.services.balance import BalanceAggregator
from sellersync.modules.sales.models import Sale
from sellersync.modules.sales.schemas import SaleUpdate
from sellersync.modules.sales.service import SaleService
from sellersync.modules.sellers.schemas import SellerUpdate
from sellersync.modules.sellers.service import SellerService
from sellersync.modules.stock.models import StockItem
from sellersync.modules.stock.schemas import StockItemCreate, StockItemUpdate
from sellersync.modules.stock.service import StockService
from sellersync.modules.stock.state_machine import StockStatus


class TestSellerService:

    def test_patch_changes_only_supplied_fields(self, db, make_seller):
        seller = make_seller("Asha", initial_balance="500", location="Jaipur", phone="123")

        updated = SellerService(db).update_seller(seller.id, SellerUpdate(phone="999"))

        assert updated.phone == "999"
        assert updated.location == "Jaipur"
        assert updated.initial_balance == Decimal("500")

    def test_patch_can_clear_optional_field(self, db, make_seller):
        seller = make_seller("Asha", location="Jaipur")
        updated = SellerService(db).update_seller(seller.id, SellerUpdate(location=None))
        assert updated.location is None

    def test_delete_cascades_to_owned_records(self, db, make_seller, make_item, make_sale, make_payment):
        seller = make_seller(initial_balance="100")
        make_sale(make_item(seller))
        make_item(seller, "second")
        make_payment(seller, "10")
        PendingAmountService(db).create_pending(
            PendingAmountCreate(seller_id=seller.id, amount=Decimal("5"))
        )

        SellerService(db).delete_seller(seller.id)

        assert db.query(StockItem).count() == 0
        assert db.query(Sale).count() == 0
        assert db.query(Payment).count() == 0
        assert db.query(PendingAmount).count() == 0

    def test_unknown_seller(self, db):
        with pytest.raises(NotFoundError):
            SellerService(db).get_seller(uuid4())


class TestStockService:

    def test_create_requires_existing_seller(self, db):
        with pytest.raises(NotFoundError):
            StockService(db).create_stock_item(
                StockItemCreate(seller_id=uuid4(), item_name="Rug", cost_price=Decimal("10"))
            )

    def test_patch_leaves_status_alone(self, db, make_seller, make_item, make_sale):
        item = make_item(make_seller(), cost_price="100")
        make_sale(item)

        updated = StockService(db).update_stock_item(item.id, StockItemUpdate(cost_price=Decimal("80")))

        assert updated.cost_price == Decimal("80")
        assert updated.item_name == "Brass lamp"
        assert updated.status == StockStatus.SOLD

    def test_status_is_not_a_patchable_field(self):
        assert "status" not in StockItemUpdate.model_fields

    def test_list_filters_and_seller_name(self, db, make_seller, make_item, make_sale):
        first = make_seller("A")
        second = make_seller("B")
        make_item(first, "one")
        make_sale(make_item(first, "two"))
        make_item(second, "three")

        result = StockService(db).list_stock_items(seller_id=first.id, status=StockStatus.IN_STOCK)

        assert result["total"] == 1
        assert result["items"][0].item_name == "one"
        assert result["items"][0].seller_name == "A"


class TestSaleService:

    def test_list_joins_item_and_seller(self, db, make_seller, make_item, make_sale):
        seller = make_seller("A")
        make_sale(make_item(seller, "Vase", cost_price="30"), selling_price="45")

        rows = SaleService(db).list_sales()

        assert len(rows) == 1
        assert rows[0]["item_name"] == "Vase"
        assert rows[0]["cost_price"] == Decimal("30")
        assert rows[0]["seller_name"] == "A"

    def test_list_filters(self, db, make_seller, make_item, make_sale):
        first = make_seller("A")
        second = make_seller("B")
        make_sale(make_item(first, "a"), sale_date=date(2024, 1, 5), payment_method="cash")
        make_sale(make_item(first, "b"), sale_date=date(2024, 2, 5), payment_method="online")
        make_sale(make_item(second, "c"), sale_date=date(2024, 2, 6), payment_method="cash")

        service = SaleService(db)
        assert len(service.list_sales(seller_id=first.id)) == 2
        assert len(service.list_sales(from_date=date(2024, 2, 1))) == 2
        assert len(service.list_sales(to_date=date(2024, 1, 31))) == 1
        assert len(service.list_sales(payment_method="cash")) == 2
        assert [row["item_name"] for row in service.list_sales()] == ["c", "b", "a"]

    def test_patch_keeps_stock_item(self, db, make_seller, make_item, make_sale):
        item = make_item(make_seller())
        sale = make_sale(item, selling_price="150", notes="first")

        row = SaleService(db).update_sale(sale.id, SaleUpdate(selling_price=Decimal("160")))

        assert row["selling_price"] == Decimal("160")
        assert row["notes"] == "first"
        assert row["stock_item_id"] == item.id

    def test_patch_with_unknown_exhibition(self, db, make_seller, make_item, make_sale):
        sale = make_sale(make_item(make_seller()))
        with pytest.raises(NotFoundError):
            SaleService(db).update_sale(sale.id, SaleUpdate(exhibition_id=uuid4()))


class TestPaymentService:

    def test_create_requires_existing_seller(self, db, make_payment):
        class Ghost:
            id = uuid4()
        with pytest.raises(NotFoundError):
            make_payment(Ghost, "10")

    def test_list_order_and_filters(self, db, make_seller, make_payment):
        first = make_seller("A", initial_balance="1000")
        second = make_seller("B", initial_balance="1000")
        make_payment(first, "1", payment_date=date(2024, 1, 1))
        make_payment(first, "2", payment_date=date(2024, 3, 1), payment_type="upi")
        make_payment(second, "3", payment_date=date(2024, 2, 1))

        service = PaymentService(db)
        assert [p.amount for p in service.list_payments()] == [Decimal("2"), Decimal("3"), Decimal("1")]
        assert len(service.list_payments(seller_id=first.id)) == 2
        assert len(service.list_payments(payment_type="upi")) == 1
        assert len(service.list_payments(from_date=date(2024, 2, 1), to_date=date(2024, 2, 28))) == 1

    def test_clear_image(self, db, make_seller, make_payment):
        payment = make_payment(make_seller(), "10", image_path="receipts/abc.jpg")

        updated = PaymentService(db).update_payment(payment.id, PaymentUpdate(clear_image=True))

        assert updated.image_path is None
        assert updated.amount == Decimal("10")

    def test_patch_amount_only(self, db, make_seller, make_payment):
        payment = make_payment(make_seller(), "10", reference_number="R-1")

        updated = PaymentService(db).update_payment(payment.id, PaymentUpdate(amount=Decimal("12.50")))

        assert updated.amount == Decimal("12.50")
        assert updated.reference_number == "R-1"

    def test_deleted_payment_leaves_cash_in_hand(self, db, make_seller, make_payment):
        seller = make_seller(initial_balance="100")
        payment = make_payment(seller, "40")

        PaymentService(db).delete_payment(payment.id)

        assert BalanceAggregator(db).global_summary()["cash_in_hand"] == Decimal("100")


class TestPendingAmountService:

    def test_list_is_unpaid_by_due_date_with_undated_last(self, db, make_seller):
        seller = make_seller()
        service = PendingAmountService(db)
        for amount, due, status in (
            ("1", None, PendingStatus.PENDING),
            ("2", date(2024, 5, 1), PendingStatus.PENDING),
            ("3", date(2024, 4, 1), PendingStatus.PARTIAL),
            ("4", date(2024, 3, 1), PendingStatus.PAID),
        ):
            service.create_pending(PendingAmountCreate(
                seller_id=seller.id, amount=Decimal(amount), due_date=due, status=status
            ))

        assert [p.amount for p in service.list_pending()] == [Decimal("3"), Decimal("2"), Decimal("1")]

    def test_marking_paid_removes_from_totals(self, db, make_seller):
        seller = make_seller()
        service = PendingAmountService(db)
        pending = service.create_pending(PendingAmountCreate(seller_id=seller.id, amount=Decimal("200")))

        service.update_pending(pending.id, PendingAmountUpdate(status=PendingStatus.PAID))

        assert BalanceAggregator(db).seller_detail(seller.id)["pending_amount"] == Decimal("0")
        assert service.list_pending() == []


class TestExhibitionService:

    def test_delete_detaches_sales(self, db, make_seller, make_item, make_sale):
        service = ExhibitionService(db)
        exhibition = service.create_exhibition(ExhibitionCreate(name="Diwali Mela"))
        exhibition_id = exhibition.id
        seller = make_seller()
        make_sale(make_item(seller, cost_price="100"), selling_price="150", exhibition_id=exhibition_id)
        before = BalanceAggregator(db).sales_summary()

        service.delete_exhibition(exhibition_id)

        db.expire_all()
        sales = db.query(Sale).all()
        assert len(sales) == 1
        assert sales[0].exhibition_id is None
        assert BalanceAggregator(db).sales_summary() == before
        with pytest.raises(NotFoundError):
            service.get_exhibition(exhibition_id)

    def test_list_stats_and_summary(self, db, make_seller, make_item, make_sale):
        service = ExhibitionService(db)
        fair = service.create_exhibition(ExhibitionCreate(
            name="Fair", start_date=date(2024, 5, 1), status=ExhibitionStatus.ACTIVE
        ))
        service.create_exhibition(ExhibitionCreate(name="Expo", start_date=date(2024, 6, 1)))
        seller = make_seller()
        make_sale(make_item(seller, "a", cost_price="10"), selling_price="25", exhibition_id=fair.id)
        make_sale(make_item(seller, "b", cost_price="20"), selling_price="30", exhibition_id=fair.id)
        make_sale(make_item(seller, "c", cost_price="5"), selling_price="500")

        rows = service.list_exhibitions()
        assert [row["name"] for row in rows] == ["Expo", "Fair"]
        fair_row = rows[1]
        assert fair_row["sales_count"] == 2
        assert fair_row["total_sales"] == Decimal("55")
        assert fair_row["total_profit"] == Decimal("25")
        assert rows[0]["sales_count"] == 0

        assert [row["name"] for row in service.list_exhibitions(status=ExhibitionStatus.ACTIVE)] == ["Fair"]

        summary = BalanceAggregator(db).exhibition_summary()
        assert summary == {
            "total_exhibitions": 2,
            "active_exhibitions": 1,
            "upcoming_exhibitions": 1,
            "total_sales": Decimal("55"),
            "total_profit": Decimal("25"),
        }

    def test_detail_includes_sales(self, db, make_seller, make_item, make_sale):
        service = ExhibitionService(db)
        fair = service.create_exhibition(ExhibitionCreate(name="Fair"))
        make_sale(make_item(make_seller("A"), "Lamp"), exhibition_id=fair.id)

        detail = service.get_exhibition(fair.id)

        assert detail["sales_count"] == 1
        assert detail["sales"][0]["item_name"] == "Lamp"
        assert detail["sales"][0]["seller_name"] == "A"

    def test_patch_rejects_inverted_dates(self, db):
        service = ExhibitionService(db)
        fair = service.create_exhibition(ExhibitionCreate(name="Fair", start_date=date(2024, 5, 10)))

        with pytest.raises(ValidationError):
            service.update_exhibition(fair.id, ExhibitionUpdate(end_date=date(2024, 5, 1)))
