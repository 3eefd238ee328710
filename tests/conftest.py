"""Shared fixtures for the rapport test suite."""

import pytest

from rapport.contexts.formatting.templates import Template


@pytest.fixture(autouse=True)
def isolated_templates():
    """Run every test with an empty template registry, restoring it afterwards."""
    saved = dict(Template._templates)
    Template.clear()
    yield
    Template.clear()
    Template._templates.update(saved)
