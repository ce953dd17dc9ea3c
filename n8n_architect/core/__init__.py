"""Core modules for n8n Architect.

Logging, error taxonomy, assistant contract and session orchestration.
"""
