"""
Tests for the configuration schema.

Covers defaults, constraints, dotted lookup, masking, and the
environment-variable bindings declared on fields.
"""

import unittest

from pydantic import ValidationError

from motown.config.schema import ConfigSchema, env_bindings, sensitive_paths

MYSQL = {"user": "motown", "password": "secret"}


class TestSchemaDefaults(unittest.TestCase):
    def test_defaults(self):
        config = ConfigSchema(mysql=MYSQL)

        self.assertEqual(config.env, "production")
        self.assertEqual(config.irc.server, "irc.mozilla.org")
        self.assertEqual(config.irc.nick, "motown")
        self.assertEqual(config.irc.retry_delay, 2000)
        self.assertEqual(config.logger.level, "info")
        self.assertFalse(config.redis.ignore_vcap_service_creds)
        self.assertEqual(config.redis.host, "localhost")
        self.assertEqual(config.redis.port, 6379)
        self.assertIsNone(config.redis.password)
        self.assertEqual(config.mysql.database, "motown")
        self.assertEqual(config.bind_to.host, "127.0.0.1")
        self.assertIsNone(config.bind_to.port)
        self.assertEqual(config.public_url, "http://motown.mozillalabs.com")
        self.assertEqual(config.public_ws_url, "ws://motown.mozillalabs.com")
        self.assertEqual(config.social_provider.name_suffix, "")

    def test_config_is_frozen(self):
        config = ConfigSchema(mysql=MYSQL)
        with self.assertRaises(ValidationError):
            config.env = "test"
        with self.assertRaises(ValidationError):
            config.redis.port = 1


class TestSchemaConstraints(unittest.TestCase):
    def test_mysql_user_and_password_required(self):
        with self.assertRaises(ValidationError) as cm:
            ConfigSchema(mysql={})
        locations = {error["loc"] for error in cm.exception.errors()}
        self.assertIn(("mysql", "user"), locations)
        self.assertIn(("mysql", "password"), locations)

    def test_redis_port_range(self):
        for port in (0, 65536, -1):
            with self.subTest(port=port):
                with self.assertRaises(ValidationError):
                    ConfigSchema(mysql=MYSQL, redis={"port": port})
        for port in (1, 65535):
            with self.subTest(port=port):
                self.assertEqual(ConfigSchema(mysql=MYSQL, redis={"port": port}).redis.port, port)

    def test_retry_delay_range(self):
        with self.assertRaises(ValidationError):
            ConfigSchema(mysql=MYSQL, irc={"retry_delay": 99})
        with self.assertRaises(ValidationError):
            ConfigSchema(mysql=MYSQL, irc={"retry_delay": 10001})

    def test_retry_delay_accepts_camel_case_key(self):
        config = ConfigSchema(mysql=MYSQL, irc={"retryDelay": 500})
        self.assertEqual(config.irc.retry_delay, 500)

    def test_unknown_environment_rejected(self):
        with self.assertRaises(ValidationError):
            ConfigSchema(mysql=MYSQL, env="staging")

    def test_unknown_log_level_rejected(self):
        with self.assertRaises(ValidationError):
            ConfigSchema(mysql=MYSQL, logger={"level": "debug"})

    def test_unknown_keys_rejected(self):
        with self.assertRaises(ValidationError):
            ConfigSchema(mysql=MYSQL, redis={"hostname": "x"})

    def test_bind_port_nullable_but_ranged(self):
        self.assertIsNone(ConfigSchema(mysql=MYSQL, bind_to={"port": None}).bind_to.port)
        with self.assertRaises(ValidationError):
            ConfigSchema(mysql=MYSQL, bind_to={"port": 70000})

    def test_string_values_coerced(self):
        config = ConfigSchema(
            mysql=MYSQL,
            redis={"port": "6380", "ignore_vcap_service_creds": "yes"},
        )
        self.assertEqual(config.redis.port, 6380)
        self.assertTrue(config.redis.ignore_vcap_service_creds)

    def test_invalid_boolean_rejected(self):
        with self.assertRaises(ValidationError):
            ConfigSchema(mysql=MYSQL, redis={"ignore_vcap_service_creds": "maybe"})


class TestSchemaAccessors(unittest.TestCase):
    def setUp(self):
        self.config = ConfigSchema(
            mysql={"user": "motown", "password": "secret"},
            redis={"password": "redis-secret"},
        )

    def test_get_dotted_path(self):
        self.assertEqual(self.config.get("redis.port"), 6379)
        self.assertEqual(self.config.get("env"), "production")
        self.assertEqual(self.config.get("irc").nick, "motown")

    def test_get_unknown_path(self):
        with self.assertRaises(KeyError):
            self.config.get("redis.missing")
        with self.assertRaises(KeyError):
            self.config.get("redis.port.value")

    def test_mask(self):
        masked = self.config.mask()
        self.assertEqual(masked["mysql"]["password"], "***")
        self.assertEqual(masked["redis"]["password"], "***")
        self.assertEqual(masked["mysql"]["user"], "motown")

    def test_mask_leaves_unset_secrets(self):
        config = ConfigSchema(mysql=MYSQL)
        self.assertIsNone(config.mask()["redis"]["password"])

    def test_to_dict_round_trips(self):
        self.assertEqual(ConfigSchema.model_validate(self.config.to_dict()), self.config)


class TestSchemaMetadata(unittest.TestCase):
    def test_env_bindings(self):
        bindings = env_bindings()
        self.assertEqual(bindings["env"], "APP_ENV")
        self.assertEqual(bindings["redis.port"], "REDIS_PORT")
        self.assertEqual(bindings["redis.ignore_vcap_service_creds"], "REDIS_IGNORE_VCAP_SERVICES")
        self.assertEqual(bindings["mysql.user"], "MYSQL_USER")
        self.assertEqual(bindings["bind_to.port"], "PORT")
        self.assertEqual(bindings["public_ws_url"], "WS_URL")
        self.assertNotIn("irc.retry_delay", bindings)
        self.assertNotIn("social_provider.name_suffix", bindings)

    def test_sensitive_paths(self):
        self.assertEqual(sorted(sensitive_paths()), ["mysql.password", "redis.password"])


if __name__ == "__main__":
    unittest.main()
