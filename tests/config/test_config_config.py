import asyncio
import os
import unittest
from unittest import mock

from mosaia.config import (
    DEFAULT_API_URL,
    DEFAULT_API_VERSION,
    ConfigurationManager,
    MosaiaConfig,
    SessionCredentials,
)
from mosaia.errors import InvalidArgumentError, InvalidStateError

PAST = "2000-01-01T00:00:00Z"
FUTURE = "2999-01-01T00:00:00Z"


def _expired_config() -> MosaiaConfig:
    return MosaiaConfig(
        api_key="old-token",
        session=SessionCredentials(access_token="old-token", refresh_token="r1", exp=PAST),
    )


class TestMosaiaConfig(unittest.TestCase):
    def test_defaults_and_base_url(self) -> None:
        config = MosaiaConfig(api_key="k")
        self.assertEqual(config.api_url, DEFAULT_API_URL)
        self.assertEqual(config.version, DEFAULT_API_VERSION)
        self.assertEqual(config.base_url, "https://api.mosaia.ai/v1")
        self.assertFalse(config.verbose)

    def test_base_url_strips_trailing_slash(self) -> None:
        config = MosaiaConfig(api_url="http://localhost:3000/", version="2")
        self.assertEqual(config.base_url, "http://localhost:3000/v2")

    def test_from_env_reads_variables(self) -> None:
        env = {
            "MOSAIA_API_KEY": "env-key",
            "MOSAIA_API_URL": "http://env.local",
            "MOSAIA_VERBOSE": "true",
        }
        with mock.patch.dict(os.environ, env, clear=False):
            config = MosaiaConfig.from_env(version="3")

        self.assertEqual(config.api_key, "env-key")
        self.assertEqual(config.api_url, "http://env.local")
        self.assertEqual(config.version, "3")
        self.assertTrue(config.verbose)

    def test_session_expiry(self) -> None:
        self.assertFalse(MosaiaConfig().is_session_expired())
        self.assertTrue(_expired_config().is_session_expired())

        fresh = MosaiaConfig(session=SessionCredentials(access_token="t", exp=FUTURE))
        self.assertFalse(fresh.is_session_expired())

        no_exp = MosaiaConfig(session=SessionCredentials(access_token="t"))
        self.assertFalse(no_exp.is_session_expired())

    def test_copy_does_not_mutate(self) -> None:
        config = MosaiaConfig(api_key="a")
        other = config.copy(api_key="b")
        self.assertEqual(config.api_key, "a")
        self.assertEqual(other.api_key, "b")


class TestConfigurationManager(unittest.TestCase):
    def test_get_config_before_initialize_raises(self) -> None:
        with self.assertRaises(InvalidStateError):
            ConfigurationManager().get_config()

    def test_initialize_from_dict_fills_defaults(self) -> None:
        manager = ConfigurationManager()
        manager.initialize({"api_key": "k", "api_url": "", "version": ""})

        self.assertTrue(manager.is_initialized())
        self.assertEqual(manager.get_api_url(), "https://api.mosaia.ai/v1")
        self.assertEqual(manager.get_api_key(), "k")

    def test_initialize_rejects_other_types(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            ConfigurationManager().initialize("nope")  # type: ignore[arg-type]

    def test_update_config_and_reset(self) -> None:
        manager = ConfigurationManager(MosaiaConfig(api_key="a"))
        manager.update_config(api_key="b", verbose=True)
        self.assertEqual(manager.get_api_key(), "b")
        self.assertTrue(manager.get_config().verbose)

        manager.reset()
        self.assertFalse(manager.is_initialized())


class TestConfigurationManagerRefresh(unittest.IsolatedAsyncioTestCase):
    async def test_concurrent_refreshes_call_refresher_once(self) -> None:
        manager = ConfigurationManager(_expired_config())
        calls = []

        async def refresher(config: MosaiaConfig) -> MosaiaConfig:
            calls.append(config.session.refresh_token)
            await asyncio.sleep(0.01)
            return config.copy(
                api_key="new-token",
                session=SessionCredentials(access_token="new-token", refresh_token="r2", exp=FUTURE),
            )

        results = await asyncio.gather(*(manager.refresh(refresher) for _ in range(5)))

        self.assertEqual(calls, ["r1"])
        self.assertEqual(manager.refresh_count, 1)
        self.assertEqual(manager.get_api_key(), "new-token")
        self.assertTrue(all(r.api_key == "new-token" for r in results))

    async def test_refresh_skipped_when_session_is_fresh(self) -> None:
        manager = ConfigurationManager(MosaiaConfig(api_key="k"))

        async def refresher(config: MosaiaConfig) -> MosaiaConfig:
            raise AssertionError("must not be called")

        config = await manager.refresh(refresher)
        self.assertEqual(config.api_key, "k")
        self.assertEqual(manager.refresh_count, 0)


if __name__ == "__main__":
    unittest.main()
