"""n8n Architect - AI-assisted n8n workflow generation.

Chat with Gemini to generate n8n workflows, preview them, and push them to
your own n8n instance over its REST API.
"""

__version__ = "1.0.0"
