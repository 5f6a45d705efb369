from __future__ import annotations

import unittest

from app.mappers.applicant_row_mapper import CURATED_FIELDS, UPSTREAM_FIELD_BY_OUTPUT, transform_row


def _record(**overrides):
    record = {
        "name": "Mehmet Kaya",
        "phone": "05551112233",
        "email": "mehmet@example.com",
        "city_name": "İzmir",
        "semt": "Bornova",
        "source_name": "Instagram",
        "phonestatuename": "Ulaşılamadı",
        "phone_date": "20240301",
        "facetofacestatuename": "Tamamlandı",
        "facetoface_date": "20240305",
        "documentstatuename": None,
        "document_date": None,
        "jobstatuename": "İşe Alındı",
        "job_statue_date": "20240320",
        "job_exit_date": None,
        "level_name": "Senior",
        "dealer_name": "Ege",
        "realdate": "2024-02-28 08:01:59",
        "totalview": 3,
        "actual_link": "https://forms.example.com/f/1",
    }
    record.update(overrides)
    return record


class TestApplicantRowMapper(unittest.TestCase):
    def test_output_keys_follow_curated_order(self) -> None:
        row = transform_row(_record())
        self.assertEqual(list(row.keys()), list(CURATED_FIELDS))

    def test_values_are_copied_and_dates_converted(self) -> None:
        row = transform_row(_record())
        self.assertEqual(row["Name"], "Mehmet Kaya")
        self.assertEqual(row["District"], "Bornova")
        self.assertEqual(row["Phone Date"], "2024-03-01")
        self.assertEqual(row["F2F Date"], "2024-03-05")
        self.assertEqual(row["Job Date"], "2024-03-20")
        self.assertEqual(row["Submitted At"], "2024-02-28 08:01")
        self.assertEqual(row["Views"], 3)
        self.assertIsNone(row["Docs Status"])

    def test_unknown_upstream_keys_are_dropped(self) -> None:
        row = transform_row(_record(internal_score=0.9, id=77))
        self.assertNotIn("internal_score", row)
        self.assertNotIn("id", row)
        self.assertEqual(len(row), len(CURATED_FIELDS))

    def test_missing_keys_become_none(self) -> None:
        row = transform_row({"name": "Only Name"})
        self.assertEqual(row["Name"], "Only Name")
        self.assertTrue(all(row[key] is None for key in CURATED_FIELDS if key != "Name"))

    def test_dashed_feed_date_is_not_a_display_date(self) -> None:
        row = transform_row(_record(phone_date="2024-03-01"))
        self.assertIsNone(row["Phone Date"])

    def test_non_scalar_values_degrade_to_none(self) -> None:
        row = transform_row(_record(city_name={"id": 6}, phone=["0555"]))
        self.assertIsNone(row["City"])
        self.assertIsNone(row["Phone"])

    def test_boolean_values_degrade_to_none(self) -> None:
        row = transform_row(_record(totalview=True, name=False))
        self.assertIsNone(row["Views"])
        self.assertIsNone(row["Name"])

    def test_non_mapping_record_yields_empty_row(self) -> None:
        for record in (None, "garbage", 12, ["name"]):
            row = transform_row(record)
            self.assertEqual(list(row.keys()), list(CURATED_FIELDS))
            self.assertTrue(all(value is None for value in row.values()))

    def test_upstream_lookup_covers_every_field(self) -> None:
        self.assertEqual(set(UPSTREAM_FIELD_BY_OUTPUT), set(CURATED_FIELDS))
        self.assertEqual(UPSTREAM_FIELD_BY_OUTPUT["Submitted At"], "realdate")


if __name__ == "__main__":
    unittest.main()
