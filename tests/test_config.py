import os
import unittest
from unittest.mock import patch

from craftycook.app import build_app
from craftycook.config import Settings, load_settings
from tests.fakes import FakeClock, ManualScheduler, fake_session


class TestConfig(unittest.TestCase):
    """Environment-driven settings and the composition root."""

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = load_settings()
        self.assertEqual(settings.api_base_url, "http://localhost:5001")
        self.assertIsNone(settings.token)
        self.assertEqual(settings.ai_timeout, 10.0)
        self.assertEqual(settings.ai_detail_timeout, 30.0)
        self.assertEqual(settings.loading_delay_ms, 150)
        self.assertEqual(settings.loading_min_visible_ms, 500)

    def test_environment_overrides(self):
        env = {
            "CRAFTYCOOK_API_URL": "https://craftycook.example/api/",
            "CRAFTYCOOK_TOKEN": "secret",
            "CRAFTYCOOK_AI_TIMEOUT": "12.5",
            "CRAFTYCOOK_LOADING_DELAY_MS": "not-a-number",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = load_settings()
        self.assertEqual(settings.api_base_url, "https://craftycook.example")
        self.assertEqual(settings.token, "secret")
        self.assertEqual(settings.ai_timeout, 12.5)
        self.assertEqual(settings.loading_delay_ms, 150)

    def test_build_app_shares_one_client(self):
        clock = FakeClock()
        app = build_app(
            Settings(api_base_url="http://api.test", token="t", loading_delay_ms=10, loading_min_visible_ms=20),
            scheduler=ManualScheduler(clock),
            session=fake_session(),
        )
        self.assertIs(app.interactions.api, app.api)
        self.assertIs(app.posts.notifier, app.notifier)
        self.assertIs(app.api.loading, app.loading)
        self.assertEqual(app.loading.delay_ms, 10)
        with app:
            self.assertTrue(app.auth.is_authenticated)
        app.api.session.close.assert_called_once()


if __name__ == "__main__":
    unittest.main()
