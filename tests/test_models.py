from data.models import CumulativeStats, DailyRecord, ProductStat


class TestProductStat:

    def test_defaults_to_zero(self):
        assert ProductStat().to_dict() == {
            'total_for_day': 0,
            'delivered': 0,
            'confirmed': 0,
            'cancelled_company': 0,
            'no_answer': 0,
        }

    def test_from_dict_fills_missing_fields(self):
        stat = ProductStat.from_dict({'total_for_day': 7, 'delivered': 3})
        assert stat == ProductStat(total_for_day=7, delivered=3)

    def test_from_dict_ignores_unknown_fields(self):
        stat = ProductStat.from_dict({'confirmed': 2, 'comment': 'x'})
        assert stat == ProductStat(confirmed=2)

    def test_from_empty_payload(self):
        assert ProductStat.from_dict(None) == ProductStat()
        assert ProductStat.from_dict({}) == ProductStat()

    def test_fields_are_independent(self):
        # outcome counters may exceed the total; nothing rejects it
        stat = ProductStat(total_for_day=1, delivered=5, confirmed=5)
        assert stat.delivered > stat.total_for_day


class TestDailyRecord:

    def test_round_trip_payload(self):
        payload = {'products': {'A': {'total_for_day': 3, 'delivered': 1, 'confirmed': 2, 'cancelled_company': 0, 'no_answer': 1}}}
        record = DailyRecord.from_dict("2024-05-01", payload)

        assert record.date == "2024-05-01"
        assert record.products['A'].confirmed == 2
        assert record.to_dict() == payload

    def test_missing_products_is_empty(self):
        assert DailyRecord.from_dict("2024-05-01", {}).products == {}
        assert DailyRecord.from_dict("2024-05-01", {'products': None}).products == {}

    def test_null_product_entry_is_kept_as_none(self):
        record = DailyRecord.from_dict("2024-05-01", {'products': {'A': None}})
        assert record.products == {'A': None}


class TestCumulativeStats:

    def test_add(self):
        stats = CumulativeStats()
        stats.add(ProductStat(total_for_day=4, delivered=3, confirmed=3, cancelled_company=1, no_answer=0))
        stats.add(ProductStat(total_for_day=6, delivered=1, confirmed=2, cancelled_company=0, no_answer=4))

        assert stats == CumulativeStats(
            total_orders=10,
            total_delivered=4,
            total_confirmed=5,
            total_cancelled=1,
            total_no_answer=4,
        )
        assert stats.confirmation_rate == 0.5
        assert stats.delivery_after_confirmation_rate == 0.8
        assert stats.no_answer_rate == 0.4
        assert stats.cancellation_rate == 0.1
