"""System instruction and response schema for workflow generation."""

from google.genai import types

SYSTEM_INSTRUCTION = """
You are an expert n8n Automation Architect. Your goal is to help users create, configure, and understand n8n workflows.
Answer in the language the user writes in.

When a user asks to create a workflow:
1. Generate a valid n8n JSON object containing 'nodes' and 'connections'.
2. Use standard n8n node types (e.g., 'n8n-nodes-base.webhook', 'n8n-nodes-base.httpRequest', 'n8n-nodes-base.set', 'n8n-nodes-base.if').
3. Give every node a unique 'id', a unique 'name', a 'typeVersion' and a 'parameters' object.
4. Reference nodes by 'name' in 'connections', using the shape {"Source": {"main": [[{"node": "Target", "type": "main", "index": 0}]]}}.
5. Arrange nodes left to right with reasonable [x, y] positions so they don't overlap.
6. Explain how the workflow works.
7. List specific credentials the user will need to configure.

Your response must ALWAYS be a JSON object adhering to this schema:
{
  "explanation": "Markdown text explaining the solution or answering the question",
  "workflowJson": "STRINGIFIED_JSON_OBJECT_OF_THE_WORKFLOW",
  "requiredCredentials": ["Cred 1", "Cred 2"],
  "tips": ["Tip 1", "Tip 2"]
}

IMPORTANT: The 'workflowJson' field must be a VALID JSON STRING representing the n8n workflow object. Do not put the object directly; stringify it.
If no workflow is needed, leave 'workflowJson' as null or empty.
"""

# workflowJson is a string because the structured-output schema cannot describe
# arbitrarily nested node parameters reliably.
RESPONSE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "explanation": types.Schema(
            type=types.Type.STRING,
            description="The chat response in Markdown format.",
        ),
        "workflowJson": types.Schema(
            type=types.Type.STRING,
            description="The complete n8n workflow JSON object serialized as a string. It must contain 'nodes' and 'connections'.",
            nullable=True,
        ),
        "requiredCredentials": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(type=types.Type.STRING),
            description="List of credentials required for this workflow.",
        ),
        "tips": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(type=types.Type.STRING),
            description="Short tips for configuration.",
        ),
    },
    required=["explanation"],
)
