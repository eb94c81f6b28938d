"""Catalog app configuration."""

from django.apps import AppConfig, apps


class CatalogConfig(AppConfig):
    """Builds the service catalog once when Django starts."""

    name = "apps.catalog"
    label = "catalog"
    verbose_name = "Service catalog"

    catalog = None

    def ready(self) -> None:
        from .registry import build_default_catalog

        self.catalog = build_default_catalog()


def get_catalog():
    """Return the catalog built at startup."""
    return apps.get_app_config("catalog").catalog
