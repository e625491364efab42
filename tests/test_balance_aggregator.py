"""
Balance Aggregator figures: cash in hand, balances, profit, stock and the
financial report's date scoping.
"""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from sellersync.common.exceptions import NotFoundError
from sellersync.modules.payments.models import PaymentType, PendingStatus
from sellersync.modules.payments.schemas import PendingAmountCreate
from sellersync.modules.payments.service import PendingAmountService
from sellersync.modules.reports.services.balance import BalanceAggregator
from sellersync.modules.reports.services.base import months_before


@pytest.fixture
def aggregator(db):
    return BalanceAggregator(db)


@pytest.fixture
def add_pending(db):
    def _add(seller, amount, status=PendingStatus.PENDING, due_date=None):
        return PendingAmountService(db).create_pending(PendingAmountCreate(
            seller_id=seller.id,
            amount=Decimal(amount),
            status=status,
            due_date=due_date,
        ))
    return _add


class TestEmptyStore:

    def test_all_totals_are_zero(self, aggregator):
        summary = aggregator.global_summary()
        assert summary["total_payments"] == Decimal("0")
        assert summary["total_initial_balance"] == Decimal("0")
        assert summary["cash_in_hand"] == Decimal("0")
        assert summary["total_pending"] == Decimal("0")
        assert summary["by_seller"] == []
        assert summary["monthly_trend"] == []

        sales = aggregator.sales_summary()
        assert sales["total_sales"] == Decimal("0")
        assert sales["profit"] == Decimal("0")
        assert sales["sales_by_method"] == []

        assert aggregator.stock_summary()["total_stock_value"] == Decimal("0")


class TestSellerScenario:

    def test_initial_balance_payment_and_pending(self, aggregator, make_seller, make_payment, add_pending):
        seller = make_seller(initial_balance="1000")
        make_payment(seller, "400")
        add_pending(seller, "200")

        assert aggregator.global_summary()["cash_in_hand"] == Decimal("600")

        detail = aggregator.seller_detail(seller.id)
        assert detail["pending_amount"] == Decimal("200")
        assert detail["balance_remaining"] == Decimal("600")
        assert detail["total_payments"] == Decimal("400")
        assert len(detail["recent_payments"]) == 1
        assert len(detail["pending_details"]) == 1

    def test_paid_pending_amounts_are_excluded(self, aggregator, make_seller, add_pending):
        seller = make_seller()
        add_pending(seller, "200")
        add_pending(seller, "50", status=PendingStatus.PARTIAL)
        add_pending(seller, "75", status=PendingStatus.PAID)

        detail = aggregator.seller_detail(seller.id)
        assert detail["pending_amount"] == Decimal("250")
        assert len(detail["pending_details"]) == 2
        assert aggregator.global_summary()["total_pending"] == Decimal("250")

    def test_cash_in_hand_is_global(self, aggregator, make_seller, make_payment):
        first = make_seller("A", initial_balance="500")
        second = make_seller("B", initial_balance="300")
        make_payment(first, "100")
        make_payment(second, "350")

        summary = aggregator.global_summary()
        assert summary["cash_in_hand"] == Decimal("350")
        by_name = {row["name"]: row for row in summary["by_seller"]}
        assert by_name["A"]["balance_remaining"] == Decimal("400")
        assert by_name["B"]["balance_remaining"] == Decimal("-50")

    def test_by_seller_is_ordered_by_name(self, aggregator, make_seller):
        make_seller("Zeta")
        make_seller("Alpha")
        make_seller("Mira")
        names = [row["name"] for row in aggregator.seller_balances()]
        assert names == ["Alpha", "Mira", "Zeta"]

    def test_recent_payments_newest_first_and_limited(self, aggregator, make_seller, make_payment):
        seller = make_seller(initial_balance="10000")
        for day in range(1, 13):
            make_payment(seller, "10", payment_date=date(2024, 1, day))

        recent = aggregator.seller_detail(seller.id)["recent_payments"]
        assert len(recent) == 10
        assert recent[0].payment_date == date(2024, 1, 12)
        assert recent[-1].payment_date == date(2024, 1, 3)

    def test_unknown_seller_detail(self, aggregator):
        with pytest.raises(NotFoundError):
            aggregator.seller_detail(uuid4())


class TestSalesSummary:

    def test_profit_counts_only_sold_items(self, aggregator, make_seller, make_item, make_sale):
        seller = make_seller("A")
        sold = make_item(seller, "Vase", cost_price="100")
        make_item(seller, "Bowl", cost_price="50")
        make_sale(sold, selling_price="150")

        summary = aggregator.sales_summary()
        assert summary["total_sales"] == Decimal("150")
        assert summary["total_cost"] == Decimal("100")
        assert summary["profit"] == Decimal("50")

    def test_rolling_cash_subtracts_payments_from_sales(self, aggregator, make_seller, make_item,
                                                        make_sale, make_payment):
        seller = make_seller(initial_balance="1000")
        make_sale(make_item(seller), selling_price="300")
        make_payment(seller, "120")

        summary = aggregator.sales_summary()
        assert summary["rolling_cash"] == Decimal("180")
        # the two cash views are independent
        assert aggregator.global_summary()["cash_in_hand"] == Decimal("880")

    def test_sales_grouped_by_method(self, aggregator, make_seller, make_item, make_sale):
        seller = make_seller()
        make_sale(make_item(seller, "a"), selling_price="10", payment_method="cash")
        make_sale(make_item(seller, "b"), selling_price="20", payment_method="cash")
        make_sale(make_item(seller, "c"), selling_price="5", payment_method="online")

        by_method = {row["payment_method"]: row for row in aggregator.sales_summary()["sales_by_method"]}
        assert by_method["cash"]["total"] == Decimal("30")
        assert by_method["cash"]["count"] == 2
        assert by_method["online"]["count"] == 1


class TestStockSummary:

    def test_stock_value_counts_and_per_seller(self, aggregator, make_seller, make_item, make_sale):
        seller = make_seller("A")
        make_seller("B")
        make_item(seller, "x", cost_price="40")
        make_item(seller, "y", cost_price="60")
        make_sale(make_item(seller, "z", cost_price="25"))

        summary = aggregator.stock_summary()
        assert summary["total_stock_value"] == Decimal("100")

        counts = {row["status"]: row["count"] for row in summary["stock_count"]}
        assert counts == {"in_stock": 2, "sold": 1}

        rows = {row["name"]: row for row in summary["seller_summary"]}
        assert rows["A"]["items_in_stock"] == 2
        assert rows["A"]["items_sold"] == 1
        assert rows["A"]["stock_value"] == Decimal("100")
        assert rows["B"]["items_in_stock"] == 0
        assert rows["B"]["stock_value"] == Decimal("0")


class TestMonthlyTrend:

    def test_months_before_clamps_to_month_end(self):
        assert months_before(date(2024, 8, 31), 6) == date(2024, 2, 29)
        assert months_before(date(2024, 3, 15), 6) == date(2023, 9, 15)

    def test_trailing_window_is_chronological_and_sparse(self, aggregator, make_seller, make_payment):
        seller = make_seller(initial_balance="5000")
        make_payment(seller, "100", payment_date=date(2023, 12, 1))
        make_payment(seller, "200", payment_date=date(2024, 3, 5))
        make_payment(seller, "50", payment_date=date(2024, 3, 20))
        make_payment(seller, "75", payment_date=date(2024, 5, 1))

        trend = aggregator.monthly_trend(today=date(2024, 6, 15))

        assert trend == [
            {"month": "2024-03", "total": Decimal("250")},
            {"month": "2024-05", "total": Decimal("75")},
        ]


class TestFinancialReport:

    def test_date_range_restricts_payments_only(self, aggregator, make_seller, make_item, make_sale,
                                                make_payment, add_pending):
        seller = make_seller(initial_balance="1000")
        make_payment(seller, "100", payment_date=date(2024, 1, 10), payment_type=PaymentType.CASH)
        make_payment(seller, "200", payment_date=date(2024, 2, 10), payment_type=PaymentType.UPI)
        make_payment(seller, "300", payment_date=date(2024, 3, 10), payment_type=PaymentType.UPI)
        add_pending(seller, "80")
        make_sale(make_item(seller, cost_price="40"), selling_price="90", sale_date=date(2023, 6, 1))

        report = aggregator.financial_report(date(2024, 2, 1), date(2024, 2, 28))

        assert report["date_range"] == {"from": "2024-02-01", "to": "2024-02-28"}
        assert report["summary"]["total_payments"] == Decimal("200")
        assert report["summary"]["cash_in_hand"] == Decimal("800")
        # unfiltered figures
        assert report["summary"]["total_initial_balance"] == Decimal("1000")
        assert report["summary"]["total_pending"] == Decimal("80")
        assert report["sales"]["total_sales"] == Decimal("90")
        assert report["sales"]["profit"] == Decimal("50")
        assert report["sales"]["total_payments"] == Decimal("600")

        row = report["by_seller"][0]
        assert row["total_payments"] == Decimal("200")
        assert row["pending_amount"] == Decimal("80")

        assert report["by_payment_type"] == [
            {"payment_type": "upi", "count": 1, "total": Decimal("200")},
        ]

    def test_open_range_defaults(self, aggregator):
        report = aggregator.financial_report()
        assert report["date_range"] == {"from": "All time", "to": "Present"}

    def test_seller_filter_narrows_rows_not_totals(self, aggregator, make_seller, make_payment):
        first = make_seller("A", initial_balance="100")
        second = make_seller("B", initial_balance="200")
        make_payment(first, "10")
        make_payment(second, "20")

        report = aggregator.financial_report(seller_id=first.id)

        assert [row["name"] for row in report["by_seller"]] == ["A"]
        assert report["summary"]["total_payments"] == Decimal("30")
        assert report["summary"]["total_initial_balance"] == Decimal("300")
