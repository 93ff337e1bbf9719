"""Ward locator: resolve geotagged civic issue reports to administrative wards."""

__version__ = "0.1.0"
