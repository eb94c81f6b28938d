"""Pytest configuration for VolkovChain tests.

Django settings come from ``[tool.pytest.ini_options]`` in pyproject.toml.
"""

import copy
import json

import pytest
from django.test import Client
from django.urls import reverse

from apps.catalog.registry import ServiceCatalog, build_default_catalog

VALID_ORDER = {
    "selectedServices": [{"serviceId": "basic-consultation", "priority": "Medium"}],
    "projectDetails": {
        "title": "Token launch review",
        "description": "Review the architecture of our token launch.",
        "objectives": ["Validate design"],
        "constraints": [],
    },
    "contactInfo": {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@example.com",
        "timezone": "Europe/London",
        "company": "Analytical Engines",
        "communicationChannels": {"telegram": "@ada"},
    },
    "technicalInfo": {"hasExistingCode": False},
    "agreesToTerms": True,
    "marketingOptIn": False,
    "preferredCommunication": "email",
    "timeline": "standard",
}


@pytest.fixture
def catalog() -> ServiceCatalog:
    """A fresh catalog built from the bundled seed data."""
    return build_default_catalog()


@pytest.fixture
def order_payload():
    """Return a factory for valid order payloads; keyword args override top-level keys."""

    def make(**overrides) -> dict:
        payload = copy.deepcopy(VALID_ORDER)
        payload.update(overrides)
        return payload

    return make


@pytest.fixture
def submit_order(client: Client):
    """POST a payload (dict or raw string) to the submission endpoint."""

    def post(payload, **extra):
        body = payload if isinstance(payload, str | bytes) else json.dumps(payload)
        return client.post(
            reverse("orders:submit"),
            data=body,
            content_type="application/json",
            **extra,
        )

    return post
