"""Test configuration for pytest.

This module imports fixtures that should be available to all tests.
"""

# Import fixtures
from tests.fixtures.common import (  # noqa
    chain_config,
    mock_evm_client,
    mock_registry,
    mock_price_client,
    resolver,
    weth_metadata,
    usdc_metadata,
    sample_transfer_log,
    sample_swap_log,
    runtime,
)
