"""Shared pytest configuration for wren examples.

Provides the ``example_form`` fixture that loads a fresh module from the
``form.py`` file in the same directory as the test. Each call re-executes
form.py in an isolated module namespace, so every test starts with clean
state (e.g. the list of registered users is empty).
"""

import importlib.util
from pathlib import Path

import pytest


@pytest.fixture
def example_form(request: pytest.FixtureRequest):
    """Load a fresh module from the sibling form.py next to the test file."""
    form_path = Path(request.path).parent / "form.py"
    module_name = f"example_{form_path.parent.name}"
    spec = importlib.util.spec_from_file_location(module_name, form_path)
    assert spec is not None
    assert spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module
