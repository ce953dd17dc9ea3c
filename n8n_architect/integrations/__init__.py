"""External service integrations for n8n Architect."""
