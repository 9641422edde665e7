"""HTTP API: inbound webhook, template sends, session inspection, health.

Run with:
    uvicorn relay.api.app:create_app --factory
"""
