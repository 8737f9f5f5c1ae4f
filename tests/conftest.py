import logging

import pytest

from badgescan.main import create_app

# Reduce debug-level logger noise during tests; keep INFO and above.
logging.getLogger().setLevel(logging.INFO)

DEMO_BADGE = (
    "John Doe\n"
    "Senior Software Engineer\n"
    "Tech Solutions Inc\n"
    "john.doe@techsolutions.com\n"
    "+1 (555) 123-4567"
)


@pytest.fixture
def demo_text():
    return DEMO_BADGE


@pytest.fixture
def app(tmp_path):
    return create_app(instance_path=str(tmp_path / "instance"))


@pytest.fixture
def client(app):
    return app.test_client()
