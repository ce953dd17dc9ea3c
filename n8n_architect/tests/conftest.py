"""Shared fixtures for n8n Architect tests."""

import json
from typing import Any, Dict

import pytest

from n8n_architect.models.connection import ConnectionConfig
from n8n_architect.models.workflow import WorkflowDocument


@pytest.fixture
def connection_config() -> ConnectionConfig:
    return ConnectionConfig(base_url="https://n8n.example.com/", api_key="n8n_api_secret_1234")


@pytest.fixture
def workflow_data() -> Dict[str, Any]:
    return {
        "nodes": [
            {
                "id": "1",
                "name": "Webhook",
                "type": "n8n-nodes-base.webhook",
                "typeVersion": 1,
                "position": [0, 0],
                "parameters": {"path": "incoming", "httpMethod": "POST"},
            },
            {
                "id": "2",
                "name": "Set Fields",
                "type": "n8n-nodes-base.set",
                "typeVersion": 3.4,
                "position": [250, 0],
                "parameters": {},
                "credentials": {"httpBasicAuth": {"id": "7", "name": "Basic"}},
            },
        ],
        "connections": {
            "Webhook": {"main": [[{"node": "Set Fields", "type": "main", "index": 0}]]},
        },
    }


@pytest.fixture
def workflow(workflow_data) -> WorkflowDocument:
    return WorkflowDocument.model_validate(workflow_data)


@pytest.fixture
def assistant_reply(workflow_data) -> str:
    return json.dumps(
        {
            "explanation": "This workflow receives a webhook and sets fields.",
            "workflowJson": json.dumps(workflow_data),
            "requiredCredentials": ["HTTP Basic Auth"],
            "tips": ["Activate the workflow to enable the production URL."],
        }
    )
