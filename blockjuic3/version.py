"""Version information for the blockjuic3 plugin."""

__version__ = "0.1.0"
__author__ = "BlockJuic3 Contributors"
__email__ = "dev@blockjuic3.xyz"
