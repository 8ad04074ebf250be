"""Unit tests for the plugin descriptor and the analyzeBlock action."""

import pytest

from blockjuic3 import initialize_plugin
from blockjuic3.config import get_chain_configs, get_logging_config, get_price_oracle_config
from blockjuic3.models.runtime import Memory, Provider
from blockjuic3.plugin import PLUGIN_NAME, create_plugin
from blockjuic3.utils.errors import ConfigurationError
from tests.fixtures.common import BLOCK_NUMBER


@pytest.fixture
def plugin(mock_registry, mock_price_client):
    return create_plugin(registry=mock_registry, price_client=mock_price_client)


@pytest.fixture
def clean_config_cache():
    get_chain_configs.cache_clear()
    get_price_oracle_config.cache_clear()
    get_logging_config.cache_clear()
    yield
    get_chain_configs.cache_clear()
    get_price_oracle_config.cache_clear()
    get_logging_config.cache_clear()


class TestPlugin:
    """Test suite for create_plugin."""

    def test_plugin_descriptor(self, plugin):
        assert plugin.name == PLUGIN_NAME
        assert [p.name for p in plugin.providers] == ["erc20_transfers", "univ3_swaps"]
        assert all(isinstance(p, Provider) for p in plugin.providers)
        assert [a.name for a in plugin.actions] == ["analyzeBlock"]

    def test_providers_share_resolver(self, plugin):
        transfers, swaps = plugin.providers
        assert transfers.resolver is swaps.resolver

    @pytest.mark.asyncio
    async def test_analyze_block(self, plugin, runtime):
        """Test the action answers with both summaries."""
        # Setup
        action = plugin.actions[0]
        message = Memory(text="What happened in the latest block?")
        
        # Execute
        valid = await action.validate(runtime, message)
        result = await action.handler(runtime, message, None)
        
        # Verify
        assert valid is True
        transfers, swaps = result.split("\n")
        assert transfers.startswith(f"BlockJuic3 knows the following onchain transfers for block on base {BLOCK_NUMBER}")
        assert swaps == "No swaps found"

    @pytest.mark.asyncio
    async def test_close_releases_clients(self, plugin, mock_evm_client, mock_price_client):
        await plugin.close()
        
        mock_evm_client.close.assert_awaited_once()
        mock_price_client.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_initialize_plugin_from_env(self, monkeypatch, clean_config_cache):
        monkeypatch.setenv("BASE_RPC_URL", "https://base.example.com")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        
        plugin = initialize_plugin()
        
        assert plugin.registry.get(plugin.providers[0].chain).config.rpc_url == "https://base.example.com"
        await plugin.close()

    def test_initialize_plugin_rejects_bad_env(self, monkeypatch, clean_config_cache):
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        
        with pytest.raises(ConfigurationError):
            initialize_plugin()
