"""
Access-right feature module.

Per-group, per-module, per-action permission flags seeded from a default
policy, plus the permission check used by the web client.
"""
