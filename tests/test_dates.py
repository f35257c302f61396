import unittest
from datetime import date, datetime, timedelta, timezone

from fx_ledger.utils.dates import TODAY_BUCKET, bucket_date, parse_date, rate_bucket


class RateBucketTests(unittest.TestCase):
    def test_iso_strings_bucket_by_day(self) -> None:
        self.assertEqual(rate_bucket("2024-01-01"), "2024-01-01")
        self.assertEqual(rate_bucket("2024-01-01T15:42:00"), "2024-01-01")
        self.assertEqual(rate_bucket("2024-01-01T23:30:00Z"), "2024-01-01")
        self.assertEqual(rate_bucket("2024-01-01 09:15:00"), "2024-01-01")

    def test_aware_datetimes_are_normalised_to_utc(self) -> None:
        minus_five = timezone(timedelta(hours=-5))
        self.assertEqual(rate_bucket(datetime(2024, 1, 1, 23, 30, tzinfo=minus_five)), "2024-01-02")
        self.assertEqual(rate_bucket("2024-01-01T23:30:00-05:00"), "2024-01-02")

    def test_date_objects(self) -> None:
        self.assertEqual(rate_bucket(date(2023, 12, 31)), "2023-12-31")
        self.assertEqual(rate_bucket(datetime(2023, 12, 31, 8, 0)), "2023-12-31")

    def test_missing_or_invalid_dates_use_today_bucket(self) -> None:
        for value in (None, "", "   ", "not a date", "2024-13-45", "2024-01-01 garbage", 20240101):
            with self.subTest(value=value):
                self.assertEqual(rate_bucket(value), TODAY_BUCKET)
                self.assertIsNone(parse_date(value))

    def test_bucket_date_roundtrip(self) -> None:
        self.assertEqual(bucket_date("2024-01-01"), date(2024, 1, 1))
        self.assertIsNone(bucket_date(TODAY_BUCKET))


if __name__ == "__main__":
    unittest.main()
