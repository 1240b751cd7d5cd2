"""grantflow -- an OAuth2 client protocol engine.

Given a description of an authorization server (a *provider*), grantflow
builds RFC-compliant requests for each OAuth2 grant, parses the answers
into typed success and error bodies, and drives the device grant's
polling loop.  It never opens sockets itself: every flow is handed an
HTTP client (see :class:`grantflow.client.HttpxClient`).

Typical usage::

    async with HttpxClient() as client:
        token = await ClientCredentialsFlow(client).execute(provider)

Modules:
    provider: Provider base class and the string-scope wrapper.
    endpoint: Endpoint / RetryableEndpoint contract and token response parsing.
    grants: Per-grant provider extensions, endpoints and flows.
    extensions: User-info builder.
    client: HTTP client capability and endpoint runners.
    config: Declaring providers as data, credential resolution.
    registry: Name-keyed provider map.
    models: Pydantic wire models.
    scope: Scope vocabulary and the ``scope`` parameter.
    utils: state, nonce and PKCE generation.
    exceptions: Exception hierarchy.
"""

__version__ = "0.1.0"
