"""
Pytest configuration and fixtures for secretive tests.
"""

import json

import pytest
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from secretive.samples.generator import SampleGenerator


@pytest.fixture
def sample_json_document():
    """JSON-like configuration document with secrets at several depths."""
    return {
        'apiVersion': 'v1',
        'kind': 'Secret',
        'metadata': {
            'name': 'db-credentials',
            'labels': {'app': 'billing', 'tier': 'backend'},
            'annotations': {},
        },
        'spec': {
            'replicas': 3,
            'enabled': True,
            'ratio': 0.25,
            'containers': [
                {
                    'name': 'api',
                    'env': [
                        {'name': 'DB_USER', 'value': 'billing_svc'},
                        {'name': 'DB_PASSWORD', 'value': 's3cr3t!'},
                        {'name': 'DEBUG', 'value': ''},
                    ],
                    'ports': [8080, 8443],
                },
            ],
            'volumes': None,
        },
    }


@pytest.fixture
def sample_json_file(tmp_path, sample_json_document):
    """sample_json_document written to a temporary file."""
    path = tmp_path / 'document.json'
    path.write_text(json.dumps(sample_json_document), encoding='utf-8')
    return path


@pytest.fixture
def sample_customers():
    """Deterministic generated customer records."""
    return SampleGenerator(seed=7).generate(5)
