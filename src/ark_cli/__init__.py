"""ARK command line tooling."""

from ark_cli.marketplace import MarketplaceClient


__all__ = ["MarketplaceClient"]
