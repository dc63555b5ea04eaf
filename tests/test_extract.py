import unittest

from qr_mapper.scanner.extract import extract_badge_code, is_ticket_url


class TestExtractBadgeCode(unittest.TestCase):
    def test_full_urls(self):
        cases = {
            "https://x/badge/B1": "B1",
            "https://events.example.com/badge/ABC123": "ABC123",
            "https://events.example.com/2025/conf/badge/a-b_c/extra": "a-b_c",
            "https://events.example.com/badge/XYZ?ref=print#top": "XYZ",
            "http://localhost:3000/badge/42/": "42",
        }
        for raw, expected in cases.items():
            with self.subTest(raw=raw):
                self.assertEqual(extract_badge_code(raw), expected)

    def test_plain_text_is_rejected(self):
        self.assertIsNone(extract_badge_code("not a url, no badge segment"))

    def test_path_fragment_fallback(self):
        self.assertEqual(extract_badge_code("/badge/ABC123?x=1"), "ABC123")
        self.assertEqual(extract_badge_code("scan me: /badge/Q9 please"), "Q9")

    def test_url_without_badge_id(self):
        self.assertIsNone(extract_badge_code("https://x/badge/"))
        self.assertIsNone(extract_badge_code("https://x/tickets/B1"))

    def test_surrounding_whitespace_is_dropped(self):
        self.assertEqual(extract_badge_code("https://x/badge/B1 "), "B1")
        self.assertEqual(extract_badge_code("  https://x/badge/B1\n"), "B1")
        self.assertEqual(extract_badge_code(" /badge/ABC123 "), "ABC123")

    def test_whitespace_inside_segment_falls_back_to_pattern(self):
        self.assertEqual(extract_badge_code("https://x/badge/B1 extra"), "B1")

    def test_empty(self):
        self.assertIsNone(extract_badge_code("   "))
        self.assertIsNone(extract_badge_code(""))
        self.assertIsNone(extract_badge_code(None))


class TestIsTicketUrl(unittest.TestCase):
    def test_marker_any_case(self):
        self.assertTrue(is_ticket_url("https://lu.ma/check-in/evt-1?pk=abc"))
        self.assertTrue(is_ticket_url("HTTPS://LU.MA/TICKET"))

    def test_other_payloads(self):
        self.assertFalse(is_ticket_url("https://x/badge/B1"))
        self.assertFalse(is_ticket_url(""))

    def test_custom_marker(self):
        self.assertTrue(is_ticket_url("https://tickets.example.org/t/1", "Tickets.Example.org"))
        self.assertFalse(is_ticket_url("https://lu.ma/t/1", "tickets.example.org"))


if __name__ == '__main__':
    unittest.main()
