"""Unit tests for client, deployment and logging configuration."""

import logging

import pytest
import structlog
from structlog.testing import capture_logs

from chaintx.amm.uniswap_v3 import UniswapV3Config
from chaintx.config import DEFAULT_TIMEOUT, ClientConfig
from chaintx.logging_config import configure_logging
from tests.helpers import DAI, ROUTER


class TestClientConfig:
    def test_defaults(self):
        config = ClientConfig(url="http://localhost:8545")
        assert config.timeout == DEFAULT_TIMEOUT
        assert config.headers == ()
        assert not config.check_sync

    def test_with_header_returns_new_config(self):
        config = ClientConfig(url="http://localhost:8545")

        updated = config.with_header("X-Api-Key", "k")

        assert updated.header_dict() == {"X-Api-Key": "k"}
        assert config.headers == ()

    def test_with_header_keeps_other_headers(self):
        config = ClientConfig(url="u").with_header("A", "1").with_header("B", "2")
        assert config.header_dict() == {"A": "1", "B": "2"}


class TestFromEnv:
    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("CHAINTX_RPC_URL", "http://node:8545")
        monkeypatch.setenv("CHAINTX_RPC_TIMEOUT", "2.5")
        monkeypatch.setenv("CHAINTX_CHECK_SYNC", "true")

        config = ClientConfig.from_env()

        assert config == ClientConfig(url="http://node:8545", timeout=2.5, check_sync=True)

    def test_defaults_from_environment(self, monkeypatch):
        monkeypatch.setenv("CHAINTX_RPC_URL", "http://node:8545")
        monkeypatch.delenv("CHAINTX_RPC_TIMEOUT", raising=False)
        monkeypatch.delenv("CHAINTX_CHECK_SYNC", raising=False)

        config = ClientConfig.from_env()

        assert config.timeout == DEFAULT_TIMEOUT
        assert not config.check_sync

    def test_url_required(self, monkeypatch):
        monkeypatch.delenv("CHAINTX_RPC_URL", raising=False)

        with pytest.raises(ValueError, match="CHAINTX_RPC_URL"):
            ClientConfig.from_env()


class TestUniswapV3Config:
    def test_mainnet_defaults(self, monkeypatch):
        for name in ("UNISWAP_V3_QUOTER", "UNISWAP_V3_ROUTER", "UNISWAP_V3_FACTORY"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.delenv("WETH_ADDRESS", raising=False)

        assert UniswapV3Config.from_env() == UniswapV3Config()

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("UNISWAP_V3_ROUTER", ROUTER)
        monkeypatch.setenv("WETH_ADDRESS", DAI)

        config = UniswapV3Config.from_env()

        assert config.router == ROUTER
        assert config.weth == DAI


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def reset_structlog(self):
        yield
        structlog.reset_defaults()

    def test_filters_below_level(self):
        configure_logging("WARNING")

        logger = structlog.get_logger()
        with capture_logs() as logs:
            logger.info("ignored")
            logger.warning("kept")

        assert [entry["event"] for entry in logs] == ["kept"]

    def test_json_renderer(self):
        configure_logging(logging.DEBUG, json=True)

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
