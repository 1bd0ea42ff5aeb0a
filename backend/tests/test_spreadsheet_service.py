import io
import unittest

from openpyxl import Workbook, load_workbook

from backend.services.errors import InputError
from backend.services.spreadsheet_service import build_template, read_source_rows


def _xlsx(rows):
    wb = Workbook()
    ws = wb.active
    for row in rows:
        ws.append(row)
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


class TestSpreadsheetService(unittest.TestCase):
    def test_template_layout(self):
        wb = load_workbook(io.BytesIO(build_template()))
        ws = wb.active
        self.assertEqual(ws.title, "translations")
        self.assertEqual(
            [list(r) for r in ws.iter_rows(values_only=True)],
            [["key", "en"], ["app_title", "My Awesome App"], ["welcome_message", "Welcome!"]],
        )

    def test_first_row_is_data(self):
        rows = read_source_rows(_xlsx([["greeting", "Hello"], ["farewell", "Bye"]]))
        self.assertEqual(rows, [{"key": "greeting", "en": "Hello"}, {"key": "farewell", "en": "Bye"}])

    def test_cells_coerced_to_text_and_blank_rows_skipped(self):
        rows = read_source_rows(_xlsx([["count", 3], [None, None], ["empty", None], ["extra", "x", "ignored"]]))
        self.assertEqual(
            rows,
            [{"key": "count", "en": "3"}, {"key": "empty", "en": ""}, {"key": "extra", "en": "x"}],
        )

    def test_only_first_sheet_read(self):
        wb = Workbook()
        wb.active.append(["a", "first"])
        wb.create_sheet("second").append(["b", "second"])
        buf = io.BytesIO()
        wb.save(buf)
        self.assertEqual(read_source_rows(buf.getvalue()), [{"key": "a", "en": "first"}])

    def test_unparseable_file(self):
        with self.assertRaises(InputError):
            read_source_rows(b"definitely not a workbook")

    def test_empty_file(self):
        with self.assertRaises(InputError):
            read_source_rows(b"")


if __name__ == "__main__":
    unittest.main()
