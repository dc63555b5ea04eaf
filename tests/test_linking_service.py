import unittest

from qr_mapper.errors import ConfigurationError, StoreError
from qr_mapper.extensions import db
from qr_mapper.models import BadgeMapping
from qr_mapper.services import linking_service
from tests.helpers import create_test_app


class TestLinkingService(unittest.TestCase):
    def setUp(self):
        self.app = create_test_app()
        self.ctx = self.app.app_context()
        self.ctx.push()

    def tearDown(self):
        db.session.remove()
        self.ctx.pop()

    def test_link_is_idempotent(self):
        linking_service.link("B1", "U1")
        linking_service.link("B1", "U1")

        rows = BadgeMapping.query.all()
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0].badge_code, "B1")
        self.assertEqual(rows[0].luma_url, "U1")

    def test_relink_overwrites_same_row(self):
        linking_service.link("B1", "U1")
        original = BadgeMapping.query.filter_by(badge_code="B1").one()
        original_id = original.id

        linking_service.link("B1", "U2")
        db.session.expire_all()

        rows = BadgeMapping.query.all()
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0].luma_url, "U2")
        self.assertEqual(rows[0].id, original_id)

    def test_resolve(self):
        linking_service.link("B1", "https://lu.ma/t/1")
        self.assertEqual(linking_service.resolve("B1"), "https://lu.ma/t/1")
        self.assertIsNone(linking_service.resolve("UNKNOWN"))

    def test_resolve_is_exact_match(self):
        linking_service.link("abc", "https://lu.ma/t/1")
        self.assertIsNone(linking_service.resolve("ab"))
        self.assertIsNone(linking_service.resolve("abcd"))

    def test_to_dict(self):
        linking_service.link("B1", "U1")
        data = BadgeMapping.query.one().to_dict()
        self.assertEqual(data["badge_code"], "B1")
        self.assertEqual(data["luma_url"], "U1")
        self.assertIsNotNone(data["created_at"])

    def test_verify_password(self):
        linking_service.set_staff_password("letmein")
        self.assertTrue(linking_service.verify_password("letmein"))
        self.assertFalse(linking_service.verify_password("LETMEIN"))

        linking_service.set_staff_password("changed")
        self.assertTrue(linking_service.verify_password("changed"))

    def test_verify_password_without_row(self):
        with self.assertRaises(StoreError):
            linking_service.verify_password("anything")


class TestStoreFailures(unittest.TestCase):
    def test_missing_tables_raise_store_error(self):
        app = create_test_app(create_tables=False)
        with app.app_context():
            with self.assertRaises(StoreError):
                linking_service.link("B1", "U1")
            with self.assertRaises(StoreError):
                linking_service.resolve("B1")

    def test_unconfigured_store_raises_configuration_error(self):
        app = create_test_app(SQLALCHEMY_DATABASE_URI=None)
        with app.app_context():
            with self.assertRaises(ConfigurationError):
                linking_service.link("B1", "U1")
            with self.assertRaises(ConfigurationError):
                linking_service.resolve("B1")
            with self.assertRaises(ConfigurationError):
                linking_service.verify_password("x")


if __name__ == '__main__':
    unittest.main()
