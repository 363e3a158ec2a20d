"""Version metadata for RentalMarketplace."""

__app_name__ = "RentalMarketplace"
__company__ = "Rental Marketplace"
__version__ = "1.0.0"
