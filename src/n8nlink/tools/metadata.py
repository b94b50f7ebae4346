"""Tag, credential, variable, audit and webhook tools."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import Field

from .registry import ToolArgs, ToolRegistry, to_json

if TYPE_CHECKING:
    from n8nlink.client import N8nClient


class CreateTagArgs(ToolArgs):
    name: str = Field(..., min_length=1, description="Name for the new tag")


class CredentialSchemaArgs(ToolArgs):
    credential_type: str = Field(
        ...,
        alias="credentialType",
        description="Credential type name, e.g. 'slackApi', 'githubApi', 'httpBasicAuth'",
    )


class RunAuditArgs(ToolArgs):
    categories: list[str] | None = Field(
        default=None, description="Audit categories to include (omit for all)"
    )


class ExecuteWebhookArgs(ToolArgs):
    webhook_path: str = Field(
        ...,
        alias="webhookPath",
        description="Webhook path, e.g. 'my-webhook' triggers /webhook/my-webhook",
    )
    data: dict[str, Any] = Field(default_factory=dict, description="JSON body to POST")
    username: str | None = Field(default=None, description="Basic auth username")
    password: str | None = Field(default=None, description="Basic auth password")


@ToolRegistry.register("list_tags", "List all tags available for organizing workflows.")
async def list_tags(client: N8nClient, args: ToolArgs) -> str:
    result = await client.list_tags()
    return to_json(result.get("data", []))


@ToolRegistry.register(
    "create_tag",
    "Create a new tag for organizing workflows.",
    CreateTagArgs,
)
async def create_tag(client: N8nClient, args: CreateTagArgs) -> str:
    tag = await client.create_tag(args.name)
    return f"Tag created!\n\nID: {tag.get('id')}\nName: {tag.get('name')}"


@ToolRegistry.register(
    "list_credentials",
    "List configured credentials. Returns names and types only, never secrets.",
)
async def list_credentials(client: N8nClient, args: ToolArgs) -> str:
    result = await client.list_credentials()
    return to_json(result.get("data", []))


@ToolRegistry.register(
    "get_credential_schema",
    "Get the parameter schema for a credential type.",
    CredentialSchemaArgs,
)
async def get_credential_schema(client: N8nClient, args: CredentialSchemaArgs) -> str:
    return to_json(await client.get_credential_schema(args.credential_type))


@ToolRegistry.register(
    "list_variables",
    "List environment variables configured in n8n (requires a Pro/Enterprise license).",
)
async def list_variables(client: N8nClient, args: ToolArgs) -> str:
    result = await client.list_variables()
    return to_json(result.get("data", []))


@ToolRegistry.register(
    "run_audit",
    "Run a security audit on the n8n instance. Returns findings and recommendations.",
    RunAuditArgs,
)
async def run_audit(client: N8nClient, args: RunAuditArgs) -> str:
    return to_json(await client.run_audit(args.categories))


@ToolRegistry.register(
    "execute_webhook",
    "Trigger a workflow via its webhook endpoint. The workflow must be active and "
    "start with a Webhook trigger node.",
    ExecuteWebhookArgs,
    error_prefix="Error executing webhook",
)
async def execute_webhook(client: N8nClient, args: ExecuteWebhookArgs) -> str:
    auth = (args.username, args.password) if args.username and args.password else None
    result = await client.execute_webhook(args.webhook_path, args.data, auth)
    return f"Webhook executed successfully!\n\nResponse:\n{to_json(result)}"
